"""An in-memory RGBA pixel buffer with PPM export."""

from __future__ import annotations

from os import PathLike


class Image:
    """A ``width`` x ``height`` image holding 4 bytes (R, G, B, A) per pixel."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = bytearray(width * height * 4)

    def _offset(self, x: int, y: int) -> int:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return (y * self.width + x) * 4

    def put_pixel(self, x: int, y: int, color: int) -> None:
        """Store a packed 0xRRGGBBAA colour."""
        offset = self._offset(x, y)
        self.pixels[offset : offset + 4] = (color & 0xFFFFFFFF).to_bytes(4, "big")

    def blend_pixel(self, x: int, y: int, color: int) -> None:
        """Average a packed colour channel-wise with the stored pixel."""
        offset = self._offset(x, y)
        incoming = (color & 0xFFFFFFFF).to_bytes(4, "big")
        current = self.pixels[offset : offset + 4]
        self.pixels[offset : offset + 4] = bytes((a + b) // 2 for a, b in zip(incoming, current))

    def pixel(self, x: int, y: int) -> int:
        """Return the packed 0xRRGGBBAA colour at ``(x, y)``."""
        offset = self._offset(x, y)
        return int.from_bytes(self.pixels[offset : offset + 4], "big")

    def to_ppm(self) -> str:
        """Render the image as plain-text PPM (P3), alpha dropped."""
        lines = ["P3", f"{self.width} {self.height}", "255"]
        row_bytes = self.width * 4
        for y in range(self.height):
            row = self.pixels[y * row_bytes : (y + 1) * row_bytes]
            lines.append(
                "".join(f"{row[i]} {row[i + 1]} {row[i + 2]} " for i in range(0, row_bytes, 4))
            )
        return "\n".join(lines) + "\n"

    def save_ppm(self, path: str | PathLike[str]) -> None:
        with open(path, "w", encoding="ascii") as handle:
            handle.write(self.to_ppm())