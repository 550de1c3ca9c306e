# inkframe

Drawing, refresh control and button event decoding for e-ink displays driven
through a Linux framebuffer with the MXC EPDC update interface. Pixels are
stored as little-endian RGB565.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Colours and rectangles

`inkframe.common` holds `Color` and `MxcfbRect`.

`Color` is a frozen value. It can be one of the named colours (`Color.BLACK`,
`Color.RED`, `Color.GREEN`, `Color.BLUE`, `Color.WHITE`), two raw RGB565
bytes (`Color.from_native((lo, hi))`), an RGB triple (`Color.rgb(r, g, b)`)
or a gray level (`Color.gray(level)`, where 0 is white and 255 is black).
`as_native()` and `to_rgb565()` give the two bytes written to the
framebuffer; `to_rgb8()` gives back an `(r, g, b)` tuple. Components outside
0..255 raise `ValueError`.

```python
from inkframe.common import Color, MxcfbRect

Color.rgb(255, 127, 0).to_rgb8()   # (255, 125, 0)
Color.gray(255).to_rgb565()        # (0, 0)

rect = MxcfbRect(top=10, left=20, width=30, height=40)
MxcfbRect.invalid().merge_rect(rect) == rect   # True
rect.expand(5)                     # MxcfbRect(top=5, left=15, width=40, height=50)
```

`MxcfbRect` also offers `top_left()`, `size()`, `from_point(pos, size)`,
`contains_point`, `contains_rect` and `merge_pixel`. Points and sizes are
`(x, y)` tuples.

The enums `WaveformMode`, `DisplayTemp`, `DitherMode`, `UpdateMode`,
`UpdateScheme`, `AutoUpdateMode` and `MxcfbIoctl` carry the values the display
controller expects, alongside the `EPDC_FLAG_*`, `DRAWING_QUANT_BIT*` and
`FBIO*` constants.

## Kernel structures

`inkframe.screeninfo` defines `VarScreeninfo`, `FixScreeninfo` and `Bitfield`,
laid out like the kernel's `fb_var_screeninfo` and `fb_fix_screeninfo`, with
`pack()` and `unpack(data)` to and from bytes.

`inkframe.mxcfb` defines the update structures `UpdateData`,
`UpdateMarkerData` and `AltBufferData`, the helpers `io`, `iow` and `iowr`
that build ioctl request numbers, and the `MXCFB_*` request constants.

## Framebuffers

`inkframe.core.Framebuffer` combines pixel access (`inkframe.fbio.FramebufferIO`),
drawing (`inkframe.draw.FramebufferDraw`) and refresh
(`inkframe.refresh.FramebufferRefresh`).

- `Framebuffer.device(path)` opens a framebuffer device node, sets the panel
  geometry and timings (see `configure_var_screeninfo`), maps the frame memory
  and sends updates through ioctl calls (`IoctlBackend`).
- `Framebuffer.in_memory()` gives a framebuffer held in a `bytearray` whose
  refreshes are kept by a `RecordingBackend` instead of reaching a display.
  Both screen info structures may be passed in; by default it is a
  1404 x 1872 RGB565 screen.

A `Framebuffer` is a context manager; `close()` unmaps the memory and closes
the device.

```python
from inkframe.core import Framebuffer
from inkframe.common import Color, WaveformMode, DisplayTemp, DitherMode
from inkframe.refresh import PartialRefreshMode

with Framebuffer.device("/dev/fb0") as fb:
    rect = fb.draw_line((10, 10), (300, 200), 3, Color.BLACK)
    fb.partial_refresh(
        rect,
        PartialRefreshMode.ASYNC,
        WaveformMode.WAVEFORM_MODE_DU,
        DisplayTemp.TEMP_USE_REMARKABLE_DRAW,
        DitherMode.EPDC_FLAG_USE_DITHERING_PASSTHROUGH,
        0,
        False,
    )
```

### Pixel access

`write_pixel` ignores positions off the screen; `read_pixel` returns
`Color.WHITE` for them. `write_frame` copies raw bytes to the start of the
buffer, `read_offset` reads one byte. `dump_region(rect)` copies a region out
as RGB565 bytes and `restore_region(rect, data)` writes it back, returning the
number of bytes written; both raise `RegionError` for empty or out-of-bounds
regions, and restoring data of the wrong size raises it too.

### Drawing

`draw_line`, `draw_rect`, `fill_rect`, `draw_circle`, `fill_circle`,
`draw_polygon` (outline or filled, non-zero winding), `draw_bezier` and
`draw_dynamic_bezier` (a quadratic stroke whose width varies along its
length), `draw_image` (a Pillow image drawn 1:1) and `draw_text`. Most return
the `MxcfbRect` they touched, ready to be refreshed. `clear()` fills the
screen with white without refreshing.

`draw_text` renders with Pillow's default font unless the class attribute
`font_path` names a TrueType file; with `dryrun=True` it only measures.

The rasterisers behind these live in `inkframe.graphics`
(`stamp_along_line`, `fill_polygon`, `sample_bezier`, `draw_dynamic_bezier`,
`bresenham_circle`) and take any callable that writes one `(x, y)` pixel.

### Refresh

`full_refresh` refreshes the whole screen. `partial_refresh` clips the region
to the screen (a region starting off the screen returns 0 and sends nothing)
and, by `PartialRefreshMode`, returns the update marker at once (`ASYNC`),
waits and returns the collision test result (`WAIT`), or sends a collision
test only and returns its result (`DRY_RUN`). Each update gets a fresh marker
counting up from 1. A custom `UpdateBackend` can be passed to `Framebuffer`
to deliver updates elsewhere.

`Framebuffer.set_epdc_access`, `set_autoupdate_mode`, `set_update_scheme` and
`update_var_screeninfo` act on a device opened with `Framebuffer.device`, and
do nothing for other backends.

## Storage

`inkframe.storage.CompressedCanvasState(img, height, width)` keeps a dumped
region zstd-compressed; `decompress()` returns the original bytes for
`restore_region`. `rgbimage_from_bytes(w, h, buff)` turns RGB565 bytes into a
Pillow RGB image, raising `ValueError` if the length does not match.

## Input

`inkframe.input.events` holds the evdev event codes and the decoded event
types: `EvEvent` (a raw event), `InputDevice`, `InputEvent`, `WacomPen`,
`WacomEvent`, `WacomEventType`, `Finger`, `MultitouchEvent`, `PhysicalButton`
and `GPIOEvent`.

`inkframe.input.gpio.decode(ev, state)` turns a raw key event from the button
device into a press or release `InputEvent`, keeping which buttons are held
in a `GPIOState` (`state.is_pressed(button)`). Sync events and unknown keys
give `None`.

## What it does not do

- It does not find, open or read input devices; raw events must be fed to
  `decode` as `EvEvent` values by the caller.
- It decodes button events only. Pen digitizer and touchscreen events have
  types in `inkframe.input.events`, but no decoder.
- Refreshes reach a display only through the framebuffer device's ioctl
  interface; there is no shared-memory or message-queue update client.
- It provides no application framework, UI elements, scripting or commands.