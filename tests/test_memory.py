import io
import struct

import pytest

from lc3vm.memory import KBDR, KBSR, MEMORY_SIZE, ImageError, Memory


class FakeConsole:
    def __init__(self, keys=""):
        self.keys = list(keys)

    def key_available(self):
        return bool(self.keys)

    def getchar(self):
        return self.keys.pop(0) if self.keys else None


def image(origin, *words):
    return io.BytesIO(struct.pack(f">H{len(words)}H", origin, *words))


def test_write_then_read_round_trip():
    mem = Memory(FakeConsole())
    mem.write(0x3000, 0xABCD)
    assert mem.read(0x3000) == 0xABCD


def test_write_truncates_to_word():
    mem = Memory(FakeConsole())
    mem.write(0x4000, 0x1_2345)
    assert mem.read(0x4000) == 0x2345


def test_keyboard_status_reports_pressed_key():
    mem = Memory(FakeConsole("k"))
    assert mem.read(KBSR) == 1 << 15
    assert mem.read(KBDR) == ord("k")


def test_keyboard_status_without_key_keeps_value():
    mem = Memory(FakeConsole())
    mem.write(KBSR, 1 << 15)
    assert mem.read(KBSR) == 1 << 15


def test_reading_elsewhere_clears_keyboard_status():
    mem = Memory(FakeConsole())
    mem.write(KBSR, 1 << 15)
    mem.read(0x3000)
    assert mem.read(KBSR) == 0


def test_out_of_range_address_is_rejected():
    mem = Memory(FakeConsole())
    with pytest.raises(IndexError):
        mem.read(MEMORY_SIZE)
    with pytest.raises(IndexError):
        mem.write(-1, 0)


def test_load_image_places_words_at_origin():
    words = [0x1234, 0xABCD, 0xF025]
    mem = Memory(FakeConsole())
    mem.load_image(image(0x3000, *words))
    assert [mem.read(0x3000 + i) for i in range(len(words))] == words
    assert mem.read(0x3000 + len(words)) == 0


def test_load_image_pads_odd_length():
    mem = Memory(FakeConsole())
    mem.load_image(io.BytesIO(b"\x30\x00\x12"))
    assert mem.read(0x3000) == 0x1200


def test_load_image_stops_at_end_of_memory():
    mem = Memory(FakeConsole())
    mem.load_image(image(0xFFFF, 0x1111, 0x2222))
    assert mem.read(0xFFFF) == 0x1111
    assert mem.read(0) == 0


def test_load_image_with_only_origin_changes_nothing():
    mem = Memory(FakeConsole())
    mem.load_image(image(0x3000))
    assert mem.read(0x3000) == 0


@pytest.mark.parametrize("data", [b"", b"\x30"])
def test_short_image_is_rejected(data):
    mem = Memory(FakeConsole())
    with pytest.raises(ImageError):
        mem.load_image(io.BytesIO(data))