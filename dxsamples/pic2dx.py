"""Convert a Bio-Rad PIC image file into a Data Explorer native file header."""

from __future__ import annotations

import argparse
import sys
from typing import BinaryIO, TextIO

from .picfile import (
    AXT_A,
    AXT_RGB,
    HEADER_LEN,
    NOTE_TYPE_FILE1,
    NOTE_TYPE_FILE2,
    NOTE_TYPE_LIVE,
    NOTE_TYPE_VARIABLE,
    PicFormatError,
    PicHeader,
    PicInfo,
    is_scalar_variable,
    iter_notes,
    parse_variable_note,
    read_axis_info,
    read_header,
)

USAGE = "Usage: pic2dx -i inputfile -o outputfile -series"
MAX_CAPTION_ENTRIES = 30

_POSITIONS_OBJECT = 1
_CONNECTIONS_OBJECT = 2


def _sample_type(header: PicHeader) -> str:
    return "unsigned char" if header.byte_format else "unsigned 2-byte integer"


def _bytes_per_sample(header: PicHeader) -> int:
    return 1 if header.byte_format else 2


def _scan(text: str, kinds: str) -> list:
    """Parse leading whitespace-separated numbers, stopping at the first failure."""
    values: list = []
    for token, kind in zip(text.split(), kinds):
        try:
            values.append(int(token) if kind == "d" else float(token))
        except ValueError:
            break
    return values


def write_volume(out: TextIO, header: PicHeader, info: PicInfo, filename: str) -> None:
    """Write the objects describing the whole file as one 3-D field."""
    origin, delta = info.origin, info.delta
    counts = f"{header.npic} {header.ny} {header.nx}"
    out.write(
        f"object {_POSITIONS_OBJECT} class gridpositions counts {counts}\n"
        f"  origin  {origin[2]:g}   {origin[1]:g}   {origin[0]:g}\n"
        f"  delta   0   0   {delta[2]:g}\n"
        f"  delta   0   {delta[1]:g}   0\n"
        f"  delta   {delta[0]:g}   0   0\n"
        'attribute "dep" string "positions"\n'
        "#\n"
    )
    out.write(
        f"object {_CONNECTIONS_OBJECT} class gridconnections counts {counts}\n"
        'attribute "element type" string "cubes"\n'
        'attribute "dep" string "connections"\n'
        'attribute "ref" string "positions"\n'
        "#\n"
    )
    data_object = _CONNECTIONS_OBJECT + 1
    items = header.npic * header.nx * header.ny
    out.write(
        f"object {data_object} class array type {_sample_type(header)} "
        f"rank 0 items {items} lsb ieee\n"
        f"data file {filename},{HEADER_LEN}\n"
        'attribute "dep" string "positions"\n'
        "#\n"
    )
    out.write(
        'object "PIC" class field\n'
        f'  component "positions" value {_POSITIONS_OBJECT}\n'
        f'  component "connections" value {_CONNECTIONS_OBJECT}\n'
        f'  component "data" value {data_object}\n'
    )


def write_series(
    out: TextIO, stream: BinaryIO, header: PicHeader, info: PicInfo, filename: str
) -> None:
    """Write the objects describing the file as a series of 2-D images."""
    origin, delta = info.origin, info.delta
    counts = f"{header.ny} {header.nx}"
    out.write(
        f"object {_POSITIONS_OBJECT} class gridpositions counts {counts}\n"
        f"  origin {origin[1]:g} {origin[0]:g}\n"
        f"  delta {delta[1]:g} 0\n"
        f"  delta 0 {delta[0]:g}\n"
        'attribute "dep" string "positions"\n'
        "\n#\n"
    )
    out.write(
        f"object {_CONNECTIONS_OBJECT} class gridconnections counts {counts}\n"
        'attribute "element type" string "quads"\n'
        'attribute "dep" string "connections"\n'
        'attribute "ref" string "positions"\n'
        "\n#\n"
    )

    image_items = header.nx * header.ny
    image_bytes = image_items * _bytes_per_sample(header)
    first_array = _CONNECTIONS_OBJECT + 1
    first_field = first_array + header.npic

    for i in range(header.npic):
        out.write(
            f"object {first_array + i} class array type {_sample_type(header)} "
            f"rank 0 items {image_items} lsb ieee \n"
            f"data file {filename},{HEADER_LEN + i * image_bytes}\n"
            'attribute "dep" string "positions"\n'
        )
        write_image_notes(out, stream, info, i + 1)
        out.write("\n#\n")

    for i in range(header.npic):
        out.write(
            f"object {first_field + i} class field\n"
            f'  component "positions" value {_POSITIONS_OBJECT}\n'
            f'  component "connections" value {_CONNECTIONS_OBJECT}\n'
            f'  component "data" value {first_array + i}\n'
            "#\n"
        )

    out.write('object "default" class series\n')
    for i in range(header.npic):
        out.write(f"  member {i} position {i * delta[2]:g} value {first_field + i}\n")
    out.write("#\n\nend\n")


def write_image_notes(out: TextIO, stream: BinaryIO, info: PicInfo, pic_num: int) -> None:
    """Attach the live-collection notes that belong to image ``pic_num``."""
    live = 0
    for note in iter_notes(stream, info):
        if note.type == NOTE_TYPE_LIVE and note.status == pic_num:
            out.write(f'attribute "note_live_{live}" string "{note.text}"\n')
            live += 1


def _write_angle_pair(out: TextIO, text: str, first: str, second: str) -> None:
    values = _scan(text, "dff")
    if len(values) == 3 and values[0] == AXT_A:
        out.write(f'attribute "{first}" value {values[1]:g}\n')
        out.write(f'attribute "{second}" value {values[2]:g}\n')


def write_notes_as_attributes(out: TextIO, stream: BinaryIO, info: PicInfo) -> None:
    """Turn the file's notes into field attributes, ending with a caption."""
    live = 0
    caption: list[str] = []
    remaining = MAX_CAPTION_ENTRIES

    def add_caption(name: str, value: str) -> None:
        nonlocal remaining
        if remaining > 0:
            caption.append(f"{name:<20}: {value}\\n")
        remaining -= 1

    for note in iter_notes(stream, info):
        text = note.text
        if note.type == NOTE_TYPE_LIVE and note.status == 1:
            out.write(f'attribute "NOTE_LIVE_{live}" string "{text}"\n')
            live += 1

        if note.type in (NOTE_TYPE_FILE1, NOTE_TYPE_FILE2):
            print(
                f'NOTE_TYPE_FILE1: attribute "note_file" string "{text}"',
                file=sys.stderr,
            )

        if note.type == NOTE_TYPE_VARIABLE:
            if text.startswith("AXIS_4"):
                _write_angle_pair(out, text[8:], "AXIS_ANGLE1", "AXIS_ANGLE2")
            if text.startswith("AXIS_5"):
                _write_angle_pair(out, text[8:], "AXIS_ANGLE3", "AXIS_ANGLE4")
            if text.startswith("AXIS_9"):
                values = _scan(text[8:], "dff")
                if len(values) == 3 and values[0] == AXT_RGB:
                    out.write(f'attribute "CHANNEL" value {values[1]:g}\n')
                    out.write(f'attribute "TOTAL_CHANNELS" value {values[2]:g}\n')

            name, value = parse_variable_note(note)
            if is_scalar_variable(name):
                out.write(f'attribute "{name}" number {value}\n')
                add_caption(name, value)
            else:
                out.write(f'attribute "{name}" string "{value}"\n')
            add_caption(name, value)

        if note.next == 0:
            break

    d = info.delta
    caption.append(f"{'X,Y,Z spacing':<20}: {d[0]:.3f},{d[1]:.3f},{d[2]:.3f}")
    out.write(f'attribute "Caption" string "{"".join(caption)}"\n')


def convert(stream: BinaryIO, out: TextIO, filename: str, series: bool) -> None:
    """Read a PIC file from ``stream`` and write its Data Explorer description."""
    header = read_header(stream)
    info = read_axis_info(stream, header)

    if series:
        write_series(out, stream, header, info, filename)
    else:
        write_volume(out, header, info, filename)

    basename = filename.rsplit("/", 1)[-1]
    out.write(f'attribute "filename" string "{basename}"\n')
    out.write(f'attribute "original_name" string "{header.name}"\n')
    out.write(f'attribute "lens_magnification" value {header.lens}\n')
    if header.mag_factor > 0:
        out.write(f'attribute "mag_factor" value {header.mag_factor:f}\n')
    if header.edited == 1:
        out.write('attribute "edited" value 1\n')

    write_notes_as_attributes(out, stream, info)

    if info.mixer_num >= 0:
        out.write(f'attribute "Mixer" string "{chr(info.mixer_num + ord("A"))}"\n')

    out.write("\n#\nend\n")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    args = argparse.Namespace(input=None, output=None, series=False)
    pos = 0
    while pos < len(argv):
        option = argv[pos]
        has_value = pos < len(argv) - 1
        if option == "-i" and has_value:
            args.input = argv[pos + 1]
            pos += 2
        elif option == "-o" and has_value:
            args.output = argv[pos + 1]
            pos += 2
        elif option == "-series":
            args.series = True
            pos += 1
        else:
            break
    if pos < len(argv) - 1:
        raise ValueError(f"Unknown option: {argv[pos]}")
    return args


def main(argv: list[str] | None = None) -> int:
    """Command-line entry point; returns the process exit status."""
    if argv is None:
        argv = sys.argv[1:]
    try:
        args = _parse_args(list(argv))
    except ValueError as exc:
        print(exc, file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    if not args.input:
        print("No input filename was specified", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        return 1

    try:
        stream = open(args.input, "rb")
    except OSError:
        print("Couldn't open input file, check filename and permissions.", file=sys.stderr)
        return 1

    with stream:
        if args.output:
            try:
                out = open(args.output, "w", encoding="latin-1", newline="\n")
            except OSError:
                print(
                    "Couldn't open output file, check filename and permissions.",
                    file=sys.stderr,
                )
                return 1
        else:
            out = sys.stdout
        try:
            convert(stream, out, args.input, args.series)
        except (PicFormatError, ValueError) as exc:
            print(exc, file=sys.stderr)
            return 1
        finally:
            if out is not sys.stdout:
                out.close()
    return 0


if __name__ == "__main__":
    sys.exit(main())