"""Minimal 24-bit uncompressed BMP image writer."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from pathlib import Path

_HEADER = struct.Struct("<HIHHIIiiHHIIiiII")
HEADER_SIZE = _HEADER.size
_SIGNATURE = 0x4D42
_INFO_SIZE = 40


def to_uint8(x: float) -> int:
    """Map a channel value in [0, 1] to a byte, rounding and saturating."""
    if x <= 0.0:
        return 0
    if x >= 1.0:
        return 255
    return int(x * 255.0 + 0.5)


@dataclass(frozen=True)
class RGB:
    """A colour with channels in [0, 1]."""

    r: float = 0.0
    g: float = 0.0
    b: float = 0.0

    @classmethod
    def gray(cls, value: float) -> RGB:
        return cls(value, value, value)


class Image:
    """A width by height grid of colours, stored row by row from the top."""

    def __init__(self, width: int, height: int) -> None:
        if width < 0 or height < 0:
            raise ValueError(f"image size must not be negative, got {width}x{height}")
        self.width = width
        self.height = height
        self.data = [RGB()] * (width * height)

    def _in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set(self, x: int, y: int, color: RGB) -> None:
        """Set one pixel; coordinates outside the image are ignored."""
        if self._in_bounds(x, y):
            self.data[y * self.width + x] = color

    def to_bytes(self) -> bytes:
        """Encode the image as a bottom-up 24-bit BMP file."""
        padding = self.width % 4
        row_size = self.width * 3 + padding
        image_size = row_size * self.height
        header = _HEADER.pack(
            _SIGNATURE, image_size + HEADER_SIZE, 0, 0, HEADER_SIZE, _INFO_SIZE,
            self.width, self.height, 1, 24, 0, image_size, 0, 0, 0, 0,
        )
        rows = []
        for y in reversed(range(self.height)):
            row = self.data[y * self.width : (y + 1) * self.width]
            pixels = bytes(
                channel
                for colour in row
                for channel in (to_uint8(colour.b), to_uint8(colour.g), to_uint8(colour.r))
            )
            rows.append(pixels + bytes(padding))
        return header + b"".join(rows)

    def save_bmp(self, path: str | Path) -> None:
        """Write the image to ``path``; raises OSError when the file cannot be written."""
        Path(path).write_bytes(self.to_bytes())