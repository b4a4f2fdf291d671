"""Reading Bio-Rad PIC image files: header, notes and axis calibration."""

from __future__ import annotations

import os
import re
import struct
from dataclasses import dataclass, field
from typing import BinaryIO, Iterator

HEADER_LEN = 76
NOTE_LEN = 96
NOTE_TEXT_LEN = 80
PIC_FILE_ID = 12345

# Axis types found in AXIS_n variable notes.
AXT_D = 1  # distance in microns
AXT_T = 2  # time in seconds
AXT_A = 3  # angle in degrees
AXT_I = 4  # intensity in grey levels
AXT_RGB = 11  # RGB channel axis

# Note types.
NOTE_TYPE_LIVE = 1
NOTE_TYPE_FILE1 = 2
NOTE_TYPE_NUMBER = 3
NOTE_TYPE_USER = 4
NOTE_TYPE_LINE = 5
NOTE_TYPE_COLLECT = 6
NOTE_TYPE_FILE2 = 7
NOTE_TYPE_SCALEBAR = 8
NOTE_TYPE_MERGE = 9
NOTE_TYPE_THRUVIEW = 10
NOTE_TYPE_ARROW = 11
NOTE_TYPE_VARIABLE = 20
NOTE_TYPE_STRUCTURE = 21

_HEADER_STRUCT = struct.Struct("<5HI2H32s8Hf3H")
_NOTE_STRUCT = struct.Struct("<HI5H80s")

_SCALAR_VARIABLES = frozenset(
    {"SCALE_FACTOR", "LENS_MAGNIFICATION", "PIXEL_BIT_DEPTH", "Z_CORRECT_FACTOR"}
)

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class PicFormatError(ValueError):
    """The data is not a readable PIC file."""


class UnsupportedPicError(PicFormatError):
    """The PIC file is valid but uses a layout that is not supported."""


@dataclass
class PicHeader:
    """The fixed 76-byte header at the start of a PIC file."""

    nx: int
    ny: int
    npic: int
    ramp1_min: int
    ramp1_max: int
    notes: int
    byte_format: int
    n: int
    name: str
    merged: int
    color1: int
    file_id: int
    ramp2_min: int
    ramp2_max: int
    color2: int
    edited: int
    lens: int
    mag_factor: float
    dummy: tuple[int, int, int]


@dataclass
class PicNote:
    """One 96-byte note record from the notes section."""

    level: int
    next: int
    num: int
    status: int
    type: int
    x: int
    y: int
    text: str


@dataclass
class PicInfo:
    """Layout and calibration derived from the header and the notes."""

    image_size_in_bytes: int = 0
    notes_offset: int = HEADER_LEN
    file_size: int = 0
    origin: list[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    delta: list[float] = field(default_factory=lambda: [1.0, 1.0, 1.0])
    mixer_num: int = -1
    num_channel_files: int = 1


def _c_string(raw: bytes) -> str:
    return raw.split(b"\0", 1)[0].decode("latin-1")


def _scan(text: str, kinds: str) -> list:
    """Parse leading numbers the way scanf does, stopping at the first failure."""
    values: list = []
    pos = 0
    for kind in kinds:
        pattern = _INT_RE if kind == "d" else _FLOAT_RE
        match = pattern.match(text, pos)
        if match is None:
            break
        token = match.group(1)
        values.append(int(token) if kind == "d" else float(token))
        pos = match.end()
    return values


def read_header(stream: BinaryIO) -> PicHeader:
    """Read and validate the header of a PIC file."""
    stream.seek(0, os.SEEK_SET)
    raw = stream.read(HEADER_LEN)
    if len(raw) < HEADER_LEN:
        raise PicFormatError("File is too short to hold a Bio-Rad(TM) .PIC header.")
    (
        nx, ny, npic, ramp1_min, ramp1_max, notes, byte_format, n, name,
        merged, color1, file_id, ramp2_min, ramp2_max, color2, edited, lens,
        mag_factor, d0, d1, d2,
    ) = _HEADER_STRUCT.unpack(raw)
    if merged != 0:
        raise UnsupportedPicError("Merged Bio-Rad(TM) files currently not supported.")
    if file_id != PIC_FILE_ID:
        raise PicFormatError("This does not seem to be a Bio-Rad(TM) .PIC Image File.")
    return PicHeader(
        nx=nx, ny=ny, npic=npic, ramp1_min=ramp1_min, ramp1_max=ramp1_max,
        notes=notes, byte_format=byte_format, n=n, name=_c_string(name),
        merged=merged, color1=color1, file_id=file_id, ramp2_min=ramp2_min,
        ramp2_max=ramp2_max, color2=color2, edited=edited, lens=lens,
        mag_factor=mag_factor, dummy=(d0, d1, d2),
    )


def read_note(stream: BinaryIO, info: PicInfo, index: int) -> PicNote | None:
    """Read the note at ``index``, or return None if it lies past the end of file."""
    offset = info.notes_offset + index * NOTE_LEN
    if offset + NOTE_LEN > info.file_size:
        return None
    stream.seek(offset, os.SEEK_SET)
    raw = stream.read(NOTE_LEN)
    if len(raw) < NOTE_LEN:
        return None
    level, nxt, num, status, note_type, x, y, text = _NOTE_STRUCT.unpack(raw)
    return PicNote(
        level=level, next=nxt, num=num, status=status, type=note_type,
        x=x, y=y, text=_c_string(text),
    )


def iter_notes(stream: BinaryIO, info: PicInfo) -> Iterator[PicNote]:
    """Yield every note record that fits in the file, in order.

    The ``next`` field is not consulted; callers that honour the end-of-chain
    marker stop after a note whose ``next`` is zero.
    """
    index = 0
    while (note := read_note(stream, info, index)) is not None:
        yield note
        index += 1


def read_axis_info(stream: BinaryIO, header: PicHeader) -> PicInfo:
    """Work out the file layout and read axis calibration from the notes."""
    info = PicInfo()
    info.image_size_in_bytes = header.nx * header.ny * (1 if header.byte_format else 2)
    info.notes_offset = HEADER_LEN + header.npic * info.image_size_in_bytes
    stream.seek(0, os.SEEK_END)
    info.file_size = stream.tell()

    if not header.notes:
        return info

    if info.file_size < info.notes_offset + NOTE_LEN:
        raise PicFormatError("File seems to be too small, check for corruption.")

    for note in iter_notes(stream, info):
        if note.type == NOTE_TYPE_VARIABLE:
            _apply_axis_note(note.text, info)
        if note.next == 0:
            break
    return info


def _apply_axis_note(text: str, info: PicInfo) -> None:
    for axis, prefix in ((0, "AXIS_2"), (1, "AXIS_3")):
        if text.startswith(prefix):
            values = _scan(text[7:], "dff")
            if not values or values[0] != AXT_D:
                raise UnsupportedPicError(
                    f"Unsupported file.  Axis {axis} ({prefix}) is not a "
                    "distance in microns."
                )
            if len(values) > 1:
                info.origin[axis] = values[1]
            if len(values) > 2:
                info.delta[axis] = values[2]
    if text.startswith("AXIS_4"):
        values = _scan(text[7:], "dff")
        if values and values[0] == AXT_D:
            if len(values) > 1:
                info.origin[2] = values[1]
            if len(values) > 2:
                info.delta[2] = values[2]
    if text.startswith("AXIS_9"):
        values = _scan(text[6:], "dff")
        if not values or values[0] != AXT_RGB:
            raise UnsupportedPicError("Unsupported file.  AXIS_9 type is not RGB.")
        if len(values) > 1:
            info.mixer_num = int(values[1])
        if len(values) > 2:
            info.num_channel_files = int(values[2])


def parse_variable_note(note: PicNote) -> tuple[str, str]:
    """Split a variable note into its name and value text."""
    if note.type != NOTE_TYPE_VARIABLE:
        raise ValueError("note is not a variable note")
    text = note.text[:NOTE_TEXT_LEN]
    p = text.find("=")
    if p < 0:
        p = text.find(" ")
    if p <= 0:
        raise ValueError(f"variable note has no name/value separator: {text!r}")
    if text[p] == "=":
        name_end = p - 2 if text[p - 1] == " " else p - 1
        p += 1
        if p < len(text) and text[p] == " ":
            p += 1
    else:
        name_end = p - 1
        p += 1
    name = text[: max(0, min(NOTE_TEXT_LEN, name_end + 1))]
    value = text[p : p + NOTE_TEXT_LEN]
    return name, value


def is_scalar_variable(name: str) -> bool:
    """Whether a variable note of this name carries a plain number."""
    return name in _SCALAR_VARIABLES