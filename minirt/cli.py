"""Command line entry point: load a scene, report it and render it to a PPM file."""

from __future__ import annotations

import argparse
import sys
from typing import Iterable, Sequence

from minirt.image import Image
from minirt.objects import Material, ObjectType, SceneObject
from minirt.parser import SceneError, load_scene
from minirt.rng import FastRandom
from minirt.vec3 import Vec3

USAGE = "The program usage: minirt [scene file]"
DEFAULT_WIDTH = 120
DEFAULT_HEIGHT = 80
DEFAULT_OUTPUT = "image.ppm"
SEPARATOR = "=========="


class _UsageError(Exception):
    """Raised when the command line cannot be understood."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise _UsageError(message)


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {text!r}")
    return value


def _build_parser() -> _ArgumentParser:
    parser = _ArgumentParser(prog="minirt", description="Render a scene file to a PPM image.")
    parser.add_argument("scene", help="path of the scene description")
    parser.add_argument("-o", "--output", default=DEFAULT_OUTPUT, help="PPM file to write")
    parser.add_argument("--width", type=_positive_int, default=DEFAULT_WIDTH)
    parser.add_argument("--height", type=_positive_int, default=DEFAULT_HEIGHT)
    return parser


def assign_default_materials(objects: Iterable[SceneObject]) -> None:
    """Give every object the standard material derived from its colour."""
    for obj in objects:
        if obj.type == ObjectType.POINT_LIGHT:
            obj.material = Material(
                color=obj.props.color, reflectivity=0.0, is_emitting=True, scatter=0.5
            )
        else:
            obj.material = Material(
                color=obj.props.color, reflectivity=0.1, is_emitting=False, scatter=0.5
            )


def _vec(vec: Vec3) -> str:
    return f"{vec.x:f},{vec.y:f},{vec.z:f}"


def _properties(obj: SceneObject) -> str:
    p = obj.props
    if obj.type == ObjectType.SPHERE:
        fields = [_vec(p.position), f"{p.radius:f}", _vec(p.color)]
    elif obj.type == ObjectType.CYLINDER:
        fields = [
            _vec(p.position),
            _vec(p.rotation),
            f"{p.radius:f}",
            f"{p.height:f}",
            _vec(p.color),
        ]
    elif obj.type == ObjectType.PLANE:
        fields = [_vec(p.position), _vec(p.rotation), _vec(p.color)]
    else:
        fields = [_vec(p.position), f"{p.brightness:f}", _vec(p.color)]
    return "\t".join(fields)


def describe_object(obj: SceneObject) -> str:
    """Return a human readable report of one object and its material."""
    if obj.type == ObjectType.ERROR:
        return "There is an error type in the objects!!"
    mat = obj.material
    return "\n".join(
        [
            SEPARATOR,
            f"The type: {obj.type.name}",
            _properties(obj),
            "The materials:",
            f" color: {mat.color.x:f}, {mat.color.y:f}, {mat.color.z:f}; "
            f"reflectivity: {mat.reflectivity:f}; is_emitting: {int(mat.is_emitting)}; "
            f"scatter: {mat.scatter:f}",
            SEPARATOR,
        ]
    )


def describe_scene(objects: Iterable[SceneObject]) -> str:
    """Return the reports of all objects, one after another."""
    return "\n".join(describe_object(obj) for obj in objects)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the renderer; returns the process exit status."""
    args_list = list(sys.argv[1:] if argv is None else argv)
    try:
        args = _build_parser().parse_args(args_list)
    except _UsageError:
        print(USAGE, file=sys.stderr)
        return 1

    try:
        scene = load_scene(args.scene)
    except SceneError as exc:
        print(exc, file=sys.stderr)
        print("Invalid file content!", file=sys.stderr)
        return 1

    assign_default_materials(scene.objects)
    report = describe_scene(scene.objects)
    if report:
        print(report)

    camera = scene.camera
    camera.resize(args.width, args.height)
    image = Image(args.width, args.height)
    camera.render(scene.objects, image, FastRandom())
    try:
        image.save_ppm(args.output)
    except OSError as exc:
        print(f"Could not write {args.output}: {exc}", file=sys.stderr)
        return 1
    look = camera.look_at
    print(f"Cam: X{look.x:.2f} Y{look.y:.2f} Z{look.z:.2f}, FOV{camera.fov:.2f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())