import argparse
import os
import sys
import typing
import hexdump
import diysav

class Config(typing.NamedTuple):
    overwrite: bool = True
    outdir: str = "out"
    debug: bool = False
    format: str = "{code} - {name}"

def format_name(fmt: str, item):
    name = fmt
    name = name.replace("{code}", item.full_code, 1)
    name = name.replace("{brand}", item.brand, 1)
    name = name.replace("{name}", item.name, 1)
    name = name.replace("{author}", item.author, 1)
    return name

def read_shelf(save: diysav.DiySave, medium: diysav.Medium, config: Config):
    if config.debug:
        print(f"checking {medium.name}s...")
        hexdump.hexdump(save.shelf_window(medium))

    shelf = save.shelf(medium)
    print(f"Found {len(shelf)} {medium.name}s")
    return shelf

def dump_item(save: diysav.DiySave, slot: int, medium: diysav.Medium, config: Config):
    item = save.item(slot, medium)
    name = format_name(config.format, item)

    if config.debug:
        print(name)

    dir_path = os.path.join(config.outdir, medium.name)
    file_name = os.path.join(dir_path, f"{name}.mio")

    if os.path.exists(file_name) and not config.overwrite:
        if config.debug:
            print(f"File {file_name} already exists; skipping")
        return None

    try:
        os.makedirs(dir_path, exist_ok=True)
        with open(file_name, "wb") as out:
            out.write(save.payload(item, medium))

    except OSError as e:
        print(f"error creating file: {e}")
        return None

    return file_name

def dump(save: diysav.DiySave, config: Config, media=diysav.MEDIA):
    if config.debug:
        print(f"ver1: {save.versions[0]}\nver2: {save.versions[1]}")

    found = {}
    for medium in media:
        shelf = read_shelf(save, medium, config)
        for slot in shelf:
            dump_item(save, slot, medium, config)

        found[medium.name] = len(shelf)

    return found

def main(argv=None):
    parser = argparse.ArgumentParser(description="Dump microgames, records and comics from a WarioWare DIY save file")
    parser.add_argument("savefile", nargs="?")
    parser.add_argument("--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--overwrite", action=argparse.BooleanOptionalAction, default=True, help="Overwrite existing files")
    parser.add_argument("--outdir", default="out", help="Output directory")
    parser.add_argument("--format", default="{code} - {name}", help="Filename format; available variables are {name}, {brand}, {author}, {code}")
    args = parser.parse_args(argv)

    if args.savefile is None:
        parser.print_help()
        return

    config = Config(overwrite=args.overwrite, outdir=args.outdir, debug=args.debug, format=args.format)

    try:
        f = open(args.savefile, "rb")
    except OSError:
        print(f"error opening file {args.savefile}")
        sys.exit(1)

    with f:
        try:
            save = diysav.DiySave(f)
        except diysav.NotDiySaveError as e:
            print(f"Error: {e}")
            sys.exit(1)

        dump(save, config)

if __name__ == "__main__":
    main()
