import io

from lc3vm.console import Console


def make_console(data=b""):
    output = io.StringIO()
    return Console(io.BytesIO(data), output), output


def test_getchar_reads_bytes_in_order():
    console, _ = make_console(b"ab")
    assert [console.getchar(), console.getchar()] == ["a", "b"]


def test_getchar_returns_none_at_end():
    console, _ = make_console(b"")
    assert console.getchar() is None


def test_key_available_does_not_consume():
    console, _ = make_console(b"z")
    assert console.key_available() is True
    assert console.key_available() is True
    assert console.getchar() == "z"
    assert console.key_available() is False


def test_key_available_false_on_empty_input():
    console, _ = make_console(b"")
    assert console.key_available() is False


def test_text_input_stream_is_accepted():
    console = Console(io.StringIO("q"), io.StringIO())
    assert console.getchar() == "q"


def test_high_byte_maps_to_single_character():
    console, _ = make_console(bytes([0xE9]))
    char = console.getchar()
    assert len(char) == 1
    assert ord(char) == 0xE9


def test_putchar_and_write_reach_output():
    console, output = make_console()
    console.putchar("H")
    console.write("ALT")
    assert output.getvalue() == "HALT"


def test_raw_mode_on_plain_stream_leaves_io_working():
    console, output = make_console(b"x")
    with console.raw_mode() as active:
        active.putchar(active.getchar())
    assert output.getvalue() == "x"