import io
import sys
from pathlib import Path

import pytest

# Ensure the project root is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import diysav


class SaveImage:
    """In-memory WarioWare DIY save image that grows as fields are written."""

    def __init__(self, magic=diysav.SAVE_MAGIC):
        self.data = bytearray(0x100)
        self.poke(0, magic)

    def poke(self, offset, data):
        end = offset + len(data)
        if len(self.data) < end:
            self.data.extend(bytes(end - len(self.data)))
        self.data[offset:end] = data

    def stamp(self, region, values):
        self.poke(region + diysav.VERSION_OFFSET, bytes(values))

    def shelf(self, medium, slots, region=diysav.REGION_PRIMARY):
        window = bytearray(diysav.SHELF_SIZE)
        window[0::2] = bytes(slots).ljust(diysav.SHELF_SIZE // 2, b"\0")
        self.poke(region + medium.data_index, window)

    def item(self, medium, slot, name=b"", brand=b"", author=b"", code=b"", number=0, revision=0):
        base = diysav.item_offset(slot, medium)
        self.poke(base + 0xD, bytes([revision]))
        self.poke(base + 0x1C, name)
        self.poke(base + 0x35, brand)
        self.poke(base + 0x48, author)
        self.poke(base + 0xCF, code)
        self.poke(base + 0xD4, bytes([number]))
        return base

    def open(self):
        return io.BytesIO(bytes(self.data))

    def write(self, path):
        path.write_bytes(bytes(self.data))
        return path


@pytest.fixture
def image():
    return SaveImage()


@pytest.fixture
def small_medium():
    return diysav.Medium("test", 0x4000, 0x100, 0x200)
