"""A small ray tracer that renders .rt scenes of spheres, planes and cylinders to PPM images."""

__version__ = "0.1.0"

__all__ = ["camera", "cli", "image", "objects", "parser", "ray", "rng", "vec3"]