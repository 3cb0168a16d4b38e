"""Reading scene descriptions: ambient light, camera, lights and shapes."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from os import PathLike
from typing import Iterable

from minirt.camera import Camera
from minirt.objects import ObjectType, Props, SceneObject
from minirt.vec3 import Vec3

_DECIMAL = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")
_C_FLOAT_PREFIX = re.compile(
    r"\s*[+-]?(?:[0-9]+\.?[0-9]*(?:[eE][+-]?[0-9]+)?|\.[0-9]+(?:[eE][+-]?[0-9]+)?"
    r"|inf(?:inity)?|nan)",
    re.IGNORECASE,
)


class SceneError(ValueError):
    """Raised when a scene description cannot be read."""


@dataclass
class Scene:
    """The camera (with its ambient light) and every object of a scene."""

    camera: Camera = field(default_factory=Camera)
    objects: list[SceneObject] = field(default_factory=list)


def _split(text: str, separator: str) -> list[str]:
    """Split on ``separator``, dropping empty pieces."""
    return [piece for piece in text.split(separator) if piece]


def parse_float(text: str) -> float:
    """Parse a plain decimal such as ``-12`` or ``0.25``; nothing else is accepted."""
    if not _DECIMAL.fullmatch(text):
        raise SceneError(f"invalid number: {text!r}")
    sign = -1.0 if text.startswith("-") else 1.0
    whole, _, fraction = text.lstrip("-").partition(".")
    result = 0.0
    for digit in whole:
        result = result * 10 + (ord(digit) - ord("0"))
    place = 10.0
    for digit in fraction:
        result += (ord(digit) - ord("0")) / place
        place *= 10
    return sign * result


def _lenient_float(text: str) -> float:
    """Read the leading number of ``text``, or 0.0 when there is none."""
    match = _C_FLOAT_PREFIX.match(text)
    if match is None:
        return 0.0
    return float(match.group(0).strip())


def _three_floats(text: str) -> list[float]:
    pieces = _split(text, ",")
    if len(pieces) < 3:
        raise SceneError(f"expected three comma separated values: {text!r}")
    return [parse_float(piece) for piece in pieces[:3]]


def parse_location(text: str) -> Vec3:
    """Parse ``x,y,z`` coordinates."""
    return Vec3(*_three_floats(text))


def parse_normal(text: str) -> Vec3:
    """Parse ``x,y,z`` with every component in [-1, 1]."""
    values = _three_floats(text)
    for value in values:
        if value > 1 or value < -1:
            raise SceneError(f"normal component out of range: {text!r}")
    return Vec3(*values)


def parse_color(text: str) -> Vec3:
    """Parse ``r,g,b`` in 0..255 into a colour scaled to [0, 1]."""
    pieces = _split(text, ",")
    if len(pieces) != 3:
        raise SceneError(f"expected three colour channels: {text!r}")
    for piece in pieces:
        if not 0 < len(piece) <= 3 or not all("0" <= ch <= "9" for ch in piece):
            raise SceneError(f"invalid colour channel: {piece!r}")
    channels = [int(piece) for piece in pieces]
    if any(channel > 255 for channel in channels):
        raise SceneError(f"colour channel above 255: {text!r}")
    return Vec3(*(channel / 255 for channel in channels))


def parse_fov(text: str) -> int:
    """Parse a field of view of at most three digits."""
    if len(text) > 3 or not all("0" <= ch <= "9" for ch in text):
        raise SceneError(f"invalid field of view: {text!r}")
    return int(text) if text else 0


def _tokens(line: str, identifier: str, count: int) -> list[str]:
    tokens = _split(line, " ")
    if len(tokens) != count:
        raise SceneError(f"expected {count} fields for {identifier!r}, got {len(tokens)}")
    if tokens[0] != identifier:
        raise SceneError(f"unknown identifier {tokens[0]!r}")
    return tokens


def _ambient(line: str, scene: Scene) -> None:
    _, ratio, color = _tokens(line, "A", 3)
    intensity = parse_float(ratio)
    scene.camera.ambient = parse_color(color)
    scene.camera.ambient_intensity = intensity


def _camera(line: str, scene: Scene) -> None:
    _, location, normal, fov = _tokens(line, "C", 4)
    center = parse_location(location)
    look_at = parse_normal(normal)
    angle = parse_fov(fov)
    camera = scene.camera
    camera.center = center
    camera.look_at = look_at
    camera.fov = float(angle)
    camera.vec_up = Vec3(0.0, 1.0, 0.0)
    camera.recalculate()


def _light(line: str, scene: Scene) -> None:
    _, location, brightness, color = _tokens(line, "L", 4)
    props = Props(position=parse_location(location), brightness=parse_float(brightness))
    props.color = parse_color(color)
    scene.objects.append(SceneObject(ObjectType.POINT_LIGHT, props))


def _sphere(line: str, scene: Scene) -> None:
    _, location, diameter_text, color = _tokens(line, "sp", 4)
    position = parse_location(location)
    diameter = parse_float(diameter_text)
    if diameter < 0:
        raise SceneError(f"negative sphere diameter: {diameter_text!r}")
    props = Props(position=position, color=parse_color(color), radius=diameter / 2.0,
                  diameter=diameter)
    scene.objects.append(SceneObject(ObjectType.SPHERE, props))


def _plane(line: str, scene: Scene) -> None:
    _, location, normal, color = _tokens(line, "pl", 4)
    props = Props(position=parse_location(location), rotation=parse_normal(normal))
    props.color = parse_color(color)
    scene.objects.append(SceneObject(ObjectType.PLANE, props))


def _cylinder(line: str, scene: Scene) -> None:
    _, location, normal, diameter_text, height_text, color = _tokens(line, "cy", 6)
    position = parse_location(location)
    rotation = parse_normal(normal)
    diameter = _lenient_float(diameter_text)
    if diameter < 0:
        raise SceneError(f"negative cylinder diameter: {diameter_text!r}")
    height = _lenient_float(height_text)
    if height < 0:
        raise SceneError(f"negative cylinder height: {height_text!r}")
    props = Props(position=position, rotation=rotation, color=parse_color(color),
                  radius=diameter / 2.0, diameter=diameter, height=height)
    scene.objects.append(SceneObject(ObjectType.CYLINDER, props))


_BY_FIRST_CHAR = {"A": _ambient, "C": _camera, "L": _light}
_BY_PREFIX = {"sp": _sphere, "pl": _plane, "cy": _cylinder}


def parse_line(line: str, scene: Scene) -> str | None:
    """Apply one scene line to ``scene``.

    Returns the identifier handled (``"A"``, ``"C"``, ``"L"``, ``"sp"``,
    ``"pl"`` or ``"cy"``), or ``None`` for a blank line.
    """
    line = line.rstrip("\n")
    if not line:
        return None
    handler = _BY_FIRST_CHAR.get(line[0])
    if handler is not None:
        handler(line, scene)
        return line[0]
    prefix = line[:2]
    handler = _BY_PREFIX.get(prefix)
    if handler is None:
        raise SceneError(f"unknown element: {line!r}")
    handler(line, scene)
    return prefix


def parse_lines(lines: Iterable[str], scene: Scene | None = None) -> Scene:
    """Read every line into ``scene`` (a new one if omitted) and return it."""
    if scene is None:
        scene = Scene()
    has_camera = has_ambient = False
    for line in lines:
        try:
            identifier = parse_line(line, scene)
        except SceneError as exc:
            raise SceneError(f"Invalid line: {line.rstrip(chr(10))}: {exc}") from exc
        has_camera = has_camera or identifier == "C"
        has_ambient = has_ambient or identifier == "A"
    if not has_camera and not has_ambient:
        raise SceneError("Camera and/or ambient light missing!")
    return scene


def load_scene(path: str | PathLike[str], scene: Scene | None = None) -> Scene:
    """Read the scene file at ``path``."""
    try:
        with open(path, encoding="utf-8") as handle:
            return parse_lines(handle, scene)
    except OSError as exc:
        raise SceneError(f"Could not open the file: {path}") from exc