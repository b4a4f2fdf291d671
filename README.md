# dxsamples

Three small, independent pieces for volumetric microscopy data and
interactive camera control:

- **Bio-Rad PIC conversion** (`dxsamples.picfile`, `dxsamples.pic2dx`) —
  read a `.pic` confocal image file (header and notes) and write a
  field-file description that points back at the raw image data, either as
  one 3-D volume or as a series of 2-D slices.
- **Camera interactors** (`dxsamples.events`, `dxsamples.navigation`,
  `dxsamples.simplezoom`) — rotate, pan and zoom modes that turn mouse
  strokes into camera changes, and a simple horizontal/vertical zoom.
- **Data modules** (`dxsamples.modules`) — add a constant to scalar data,
  replace each position with a small "X" of lines, and build a greeting.

The package has no dependencies beyond the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Converting a PIC file

```
pic2dx -i cells01.pic
pic2dx -i cells01.pic -o cells01.dx
pic2dx -i cells01.pic -o cells01.dx -series
```

Without `-o` the description goes to standard output. With `-series` each
image becomes its own field, gathered in a series and positioned along Z by
the file's Z spacing; otherwise one cube-connected volume is written. The
data itself is not copied: each data array refers to the input file by name
and byte offset.

Origins and spacings come from the `AXIS_2`, `AXIS_3` and `AXIS_4` variable
notes (in microns, defaulting to origin 0 and spacing 1). Every variable note
also becomes an attribute — a number for `SCALE_FACTOR`,
`LENS_MAGNIFICATION`, `PIXEL_BIT_DEPTH` and `Z_CORRECT_FACTOR`, a string
otherwise — and a `Caption` attribute sums them up together with the X,Y,Z
spacing. Live-collection notes, angle axes (`AXIS_4`/`AXIS_5`), the RGB
channel axis (`AXIS_9`, also giving a `Mixer` attribute) and the file name,
original name, lens magnification, magnification factor and edited flag are
written as attributes too.

The command prints a message and exits with status 1 when options are wrong,
no input is given, a file cannot be opened, or the file is rejected. Files
are rejected (`PicFormatError`, or its subclass `UnsupportedPicError`) when
they are too short, use a merged format, lack the PIC file id, are too small
for their notes, have X or Y axes that are not distances in microns, or have
an `AXIS_9` note that is not an RGB axis.

From Python:

```python
import sys

from dxsamples.picfile import read_header, read_axis_info, iter_notes
from dxsamples.pic2dx import convert, main

with open("cells01.pic", "rb") as stream:
    header = read_header(stream)
    info = read_axis_info(stream, header)
    print(header.nx, header.ny, header.npic, info.delta)
    for note in iter_notes(stream, info):
        print(note.type, note.text)

with open("cells01.pic", "rb") as stream:
    convert(stream, sys.stdout, "cells01.pic", series=False)

status = main(["-i", "cells01.pic", "-o", "cells01.dx"])
```

`picfile` also offers `read_note`, `parse_variable_note` (splits a variable
note into name and value) and `is_scalar_variable`; `pic2dx` offers the
pieces `write_volume`, `write_series`, `write_image_notes` and
`write_notes_as_attributes`.

## Interactors

`dxsamples.events` defines the inputs: `Camera` (`to`, `eye`, `up`,
`perspective`, `fov`, `width`, and `copy()`), `MouseEvent(kind, x, y,
state)` with `EventKind.LEFT`/`MIDDLE`/`RIGHT` and `ButtonState.DOWN`/`UP`/
`MOTION`, and `KeyPressEvent(x, y, key)`.

```python
from dxsamples.events import ButtonState, Camera, EventKind, MouseEvent
from dxsamples.navigation import RotateInteractor, default_interactors

rotate = RotateInteractor(640, 480)
rotate.set_camera(Camera(to=(0, 0, 0), eye=(0, 0, 10), up=(0, 1, 0)))
rotate.handle_event(MouseEvent(EventKind.LEFT, 100, 100, ButtonState.DOWN))
rotate.handle_event(MouseEvent(EventKind.LEFT, 140, 100, ButtonState.UP))
camera = rotate.get_camera()

modes = default_interactors()   # (RotateInteractor, PanInteractor, ZoomInteractor)
```

Each interactor is built from the window width and height, takes a camera
through `set_camera`, is fed events through `handle_event` (other events are
ignored) and reports the changed camera through `get_camera`.
`RotateInteractor` orbits the eye about the look-at point, `PanInteractor`
moves eye and look-at point together, and `ZoomInteractor` grows the field of
view (perspective) or width (orthographic). They also hold an arbitrary
viewed object through `set_renderable`/`get_renderable`, without changing it.

`dxsamples.simplezoom.SimpleZoomInteractor` listens to the left button only:
a mostly horizontal drag zooms in, a mostly vertical one zooms out, by
changing the camera width. It is meant for orthographic views.

## Data modules

```python
from dxsamples.modules import Field, Group, add, hello, make_x

hello()          # "hello world"
hello("there")   # "hello there"

f = Field(components={"data": [1.0, 2.0]})
add(f, 3).components["data"]        # [4.0, 5.0]

points = Field(components={"positions": [(0, 0, 0)]})
make_x(points, 0.5).components["connections"]   # [(0, 1), (2, 3)]
```

`add(obj, addend)` returns a copy of a `Field` or `Group` with the addend
(default 0) added to every data value. `make_x(obj, size)` returns a copy in
which each 3-D position becomes four points, offset by `size` (default 1)
along x and y, joined by two line connections; components that depend on
the old positions or connections are dropped. Both walk groups recursively
and raise `ModuleError` on a missing object, a non-scalar addend or size, or
missing or badly typed data or positions; `make_x` also rejects anything
that is not a field or group.

## What this package does not do

It renders nothing and opens no windows: the interactors only compute camera
changes from the events they are given. There are no caption, picking or
glyph interactors, and the data modules work on the package's own simple
`Field` and `Group` types rather than on any external data model. The PIC
converter writes a description of the data, not the data itself, and merged
PIC files are not supported.