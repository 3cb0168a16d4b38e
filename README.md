# minirt

A compact ray tracer. It reads a scene description in the `.rt` text format,
traces rays against spheres, infinite planes and finite capped cylinders,
shades them with point lights (Lambert diffuse plus Phong highlights),
ambient light and recursive reflection, and writes the result as a plain-text
PPM (P3) image.

It has no dependencies outside the standard library.

## Installing

```
pip install .
```

Install with the `test` extra to run the test suite:

```
pip install ".[test]"
pytest
```

## Running

```
minirt scene.rt
```

The command loads the scene, gives every object its standard material,
prints a report of every object and its material, renders the scene and
writes it to `image.ppm`. It then prints the camera target and field of
view, for example `Cam: X0.00 Y0.00 Z-1.00, FOV90.00`, and exits with
status 0.

Options:

| Option           | Default     | Meaning                          |
|------------------|-------------|----------------------------------|
| `-o`, `--output` | `image.ppm` | PPM file to write                |
| `--width`        | `120`       | image width in pixels (positive) |
| `--height`       | `80`        | image height in pixels (positive)|

If the command line cannot be understood (for example, no scene file), it
prints `The program usage: minirt [scene file]` to standard error and exits
with status 1. If the scene cannot be read, it prints the reason and
`Invalid file content!` to standard error and exits with status 1; the same
status is returned when the output file cannot be written.

## Scene files

Each non-empty line describes one element. Fields are separated by single
spaces (repeated spaces are allowed); vectors and colours are comma
separated. A line is recognised by its first character (`A`, `C`, `L`) or
its first two characters (`sp`, `pl`, `cy`), and its first field must then be
exactly that identifier.

| Identifier | Fields                                             |
|------------|----------------------------------------------------|
| `A`        | ambient ratio, colour                              |
| `C`        | position, look-at point, field of view             |
| `L`        | position, brightness, colour                       |
| `sp`       | centre, diameter, colour                           |
| `pl`       | point, normal, colour                              |
| `cy`       | base centre, axis, diameter, height, colour        |

- Numbers are plain decimals such as `-50`, `0.2` or `12.75`; exponents,
  a leading `+` or a bare `.5` are rejected. The cylinder diameter and
  height are read more leniently: their leading number is used, and text
  without one counts as 0.
- Positions take the first three comma separated values.
- The camera's second field and plane and cylinder normals must have every
  component between -1 and 1.
- Colours are exactly three integers of one to three digits, each at most
  255; they are stored scaled to the range 0–1.
- The field of view is at most three digits.
- Sphere and cylinder diameters and cylinder heights must not be negative.
- A scene must contain at least a camera line or an ambient line.

```
A 0.2 255,255,255
C -50.0,0,20 0,0,1 70
L -40.0,50.0,0.0 0.6 10,0,255
sp 0.0,0.0,20.6 12.6 10,0,255
pl 0.0,0.0,-10.0 0.0,1.0,0.0 0,0,225
cy 50.0,0.0,20.6 0.0,0.0,1.0 14.2 21.42 10,0,255
```

A malformed line, an unknown element or an unreadable file raises
`minirt.parser.SceneError` (a `ValueError`).

## Library use

```python
from minirt.cli import assign_default_materials
from minirt.image import Image
from minirt.parser import load_scene
from minirt.rng import FastRandom

scene = load_scene("scene.rt")
assign_default_materials(scene.objects)

camera = scene.camera
camera.resize(320, 200)
image = Image(320, 200)
camera.render(scene.objects, image, FastRandom())
image.save_ppm("out.ppm")
```

Rendering is deterministic: `FastRandom` starts from a fixed seed unless
another is given.

The building blocks live in their own modules:

- `minirt.vec3` — the immutable `Vec3` type with `+`, `-`, `*` and `/`
  (component-wise, numbers are broadcast, division by zero gives 0), `dot`,
  `cross`, `length`, `normalize`, `unit`, `reflect`, `near_zero`, `gamma` and
  `to_color` (packs into a 32-bit `0xRRGGBBAA` integer), plus `splat`,
  `clamp`, `linear_to_gamma`, `degrees_to_rad` and `rad_to_deg`.
- `minirt.rng` — `FastRandom`, a small linear congruential generator with
  `next_u32`, `random`, `vector`, `clamped_vector`, `unit_vector` and
  `on_hemisphere`.
- `minirt.ray` — `Ray` (origin, direction and the ambient light returned on
  a miss) and `Ray.at`.
- `minirt.objects` — `ObjectType`, `Props`, `Material`, `SceneObject`,
  `HitRecord` and the intersection functions `hit_sphere`, `hit_plane`,
  `hit_cylinder` and `world_hit`; each returns a `HitRecord` or `None`.
- `minirt.camera` — `Camera` (with `recalculate`, `move`, `zoom`, `resize`
  and `render`), `ray_color` and `distance_attenuation`.
- `minirt.image` — `Image`, an RGBA pixel buffer with `put_pixel`,
  `blend_pixel`, `pixel`, `to_ppm` and `save_ppm`.
- `minirt.parser` — `Scene`, `SceneError`, `parse_float`, `parse_location`,
  `parse_normal`, `parse_color`, `parse_fov`, `parse_line`, `parse_lines`
  and `load_scene`.
- `minirt.cli` — `main`, `assign_default_materials`, `describe_object` and
  `describe_scene`.

## What it does not do

The renderer draws into an in-memory image and writes a PPM file; it opens
no window and takes no keyboard input. The `Camera.move`, `Camera.zoom` and
`Camera.resize` methods are there for programs that want to re-render a
scene from a changed view, but the `minirt` command renders a single frame
and exits. It reads and writes no other image formats.