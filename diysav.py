from construct import *
import typing

CODING = "latin-1"

SAVE_MAGIC = b"\x0e\x00\x00\x00\x00\x00\x00\x00DSMIO_S"

# redundant save copies
REGION_PRIMARY = 0x0
REGION_SECONDARY = 0x3000

VERSION_OFFSET = 0x14
SHELF_SIZE = 0xB4
ITEM_HEADER_SIZE = 0xD5

BUILTIN = "builtin"

class Medium(typing.NamedTuple):
    name: str
    data_start: int
    data_index: int
    data_size: int

MICROGAME = Medium("microgame", 0x120000, 0x6E0, 0x10000)
RECORD = Medium("record", 0x920000, 0x796, 0x2000)
COMIC = Medium("comic", 0xA20000, 0x84C, 0x3800)

MEDIA = (MICROGAME, RECORD, COMIC)

class ItemString(Adapter):
    """Fixed width text, cut at the first NUL.

    An empty field (first byte NUL) is content shipped with the game and
    decodes as "builtin".
    """

    def __init__(self, length: int, upper: bool=False):
        super().__init__(Bytes(length))
        self.upper = upper

    def _decode(self, obj, context, path):
        text = obj.split(b"\0", 1)[0].decode(CODING)
        if len(text) <= 0:
            text = BUILTIN

        return text.upper() if self.upper else text

    def _encode(self, obj, context, path):
        return obj.encode(CODING).ljust(self.subcon.length, b"\0")

save_header = Struct(
    "magic" / Const(SAVE_MAGIC),
)

# not a real version field, the newest copy just tends to score higher
version_data = Struct(
    "stamp" / Array(4, Hex(Byte)),
    "score" / Computed(lambda this: sum(this.stamp)),
)

shelf_data = Array(SHELF_SIZE // 2, Struct(
    "slot" / Byte,
    Padding(1),
))

item_data = Struct(
    "revision" / Pointer(0xD, Byte),
    "name" / Pointer(0x1C, ItemString(0x18)),
    "brand" / Pointer(0x35, ItemString(9)),
    "author" / Pointer(0x48, ItemString(0x18)),
    "code" / Pointer(0xCF, ItemString(4, upper=True)),
    "number" / Pointer(0xD4, Byte),
    "full_code" / Computed(lambda this: f"G-{this.code}-{this.number + 1:04d}-{this.revision:03d}"),
)

class NotDiySaveError(ValueError):
    pass

def item_offset(slot: int, medium: Medium):
    return medium.data_start + (slot - 1) * medium.data_size

class DiySave():
    """Read only view over a WarioWare DIY save file.

    Reads past the end of the file come back zero filled instead of
    failing, so a truncated save gives empty shelves and "builtin" fields
    rather than an error.
    """

    def __init__(self, file):
        self.file = file

        try:
            save_header.parse(self.read_at(0, len(SAVE_MAGIC)))
        except ConstError:
            raise NotDiySaveError("file does not appear to be a WarioWare DIY SAV!")

        self.versions = (self.version(REGION_PRIMARY), self.version(REGION_SECONDARY))
        self.base_offset = REGION_SECONDARY if self.versions[1] > self.versions[0] else REGION_PRIMARY

    def read_at(self, offset: int, size: int):
        self.file.seek(offset)
        return self.file.read(size).ljust(size, b"\0")

    def version(self, region: int):
        return version_data.parse(self.read_at(region + VERSION_OFFSET, 4)).score

    def shelf_window(self, medium: Medium):
        return self.read_at(self.base_offset + medium.data_index, SHELF_SIZE)

    def shelf(self, medium: Medium):
        return [e.slot for e in shelf_data.parse(self.shelf_window(medium)) if e.slot != 0]

    def item(self, slot: int, medium: Medium):
        offset = item_offset(slot, medium)

        item = item_data.parse(self.read_at(offset, ITEM_HEADER_SIZE))
        item.slot = slot
        item.payload_offset = offset
        return item

    def payload(self, item, medium: Medium):
        return self.read_at(item.payload_offset, medium.data_size)
