"""Toroidal SmoothLife grid with a separate rate buffer and Euler integration."""

from __future__ import annotations

import math
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from .perlin import PerlinNoise
from .rules import Rules

SCREEN_WIDTH = 800
SCREEN_HEIGHT = 800
ROWS = 200
COLS = 200

QUARTERS = 4
NOISE_SCALE = 0.01
NOISE_OCTAVES = 8


def loop_mod(dividend: int, divisor: int) -> int:
    """Modulo whose result takes the sign of the divisor, for wrapping indices."""
    return dividend % divisor


def clamp(x: float, high: float, low: float) -> float:
    """Limit ``x`` to the range from ``low`` to ``high``."""
    if x > high:
        x = high
    if x < low:
        x = low
    return x


def _channel(value: float) -> int:
    return int(min(max(value, 0.0), 255.0))


def cell_colour(intensity: float) -> tuple[int, int, int]:
    """RGB colour of a cell: red follows the intensity, green its sine."""
    return (_channel(255 * intensity), _channel(255 * math.sin(intensity)), 0)


def quarter_bounds(quarter: int, rows: int, cols: int) -> tuple[range, range]:
    """Row and column ranges of one quarter of the grid.

    Quarters run clockwise from the top left: 0 top-left, 1 top-right,
    2 bottom-right, 3 bottom-left.
    """
    if quarter not in range(QUARTERS):
        raise ValueError(f"quarter must be 0 to {QUARTERS - 1}, got {quarter}")
    if quarter in (0, 3):
        cols_range = range(0, int(cols / 2 - 1) + 1)
    else:
        cols_range = range(int(cols / 2), cols)
    if quarter in (0, 1):
        rows_range = range(0, int(rows / 2 - 1) + 1)
    else:
        rows_range = range(int(rows / 2), rows)
    return rows_range, cols_range


def _neighbourhood(rules: Rules) -> tuple[int, list[tuple[int, int]], list[tuple[int, int]]]:
    span = int(rules.radius_outer - 1)
    inner_sq = rules.radius_inner * rules.radius_inner
    outer_sq = rules.radius_outer * rules.radius_outer
    inner: list[tuple[int, int]] = []
    outer: list[tuple[int, int]] = []
    for dr in range(-span, span + 1):
        for dc in range(-span, span + 1):
            distance = dr * dr + dc * dc
            if distance <= inner_sq:
                inner.append((dr, dc))
            elif distance <= outer_sq:
                outer.append((dr, dc))
    return span, inner, outer


class Simulation:
    """A wrapping grid of cell states in [0, 1] plus a buffer of rates of change."""

    def __init__(
        self,
        rows: int = ROWS,
        cols: int = COLS,
        rules: Rules | None = None,
        workers: int = 1,
    ) -> None:
        if rows < 1 or cols < 1:
            raise ValueError(f"grid must have at least one cell, got {rows}x{cols}")
        if workers < 1:
            raise ValueError(f"workers must be at least 1, got {workers}")
        self.rows = rows
        self.cols = cols
        self.rules = rules if rules is not None else Rules()
        self.workers = workers
        self.grid = np.zeros((rows, cols), dtype=np.float64)
        self.buffer = np.zeros((rows, cols), dtype=np.float64)
        self._span, self._inner, self._outer = _neighbourhood(self.rules)
        if not self._inner or not self._outer:
            raise ValueError("both the inner disc and the outer ring must hold cells")
        self._inner_arr = np.array(self._inner)
        self._outer_arr = np.array(self._outer)

    def seed_from_noise(self, noise: PerlinNoise) -> None:
        """Fill the grid with octave Perlin noise and clear the buffer."""
        xs = (np.arange(self.cols, dtype=np.float32) * np.float32(NOISE_SCALE)).tolist()
        ys = (np.arange(self.rows, dtype=np.float32) * np.float32(NOISE_SCALE)).tolist()
        self.grid[:] = [[noise.octave2d_01(x, y, NOISE_OCTAVES) for x in xs] for y in ys]
        self.clear_buffer()

    def _target(self, buffer: bool) -> np.ndarray:
        return self.buffer if buffer else self.grid

    def value_at(self, row: int, column: int, buffer: bool = False) -> float:
        """Value of a cell, with row and column wrapping around the edges."""
        target = self._target(buffer)
        return float(target[loop_mod(row, self.rows), loop_mod(column, self.cols)])

    def set_cell(self, row: int, column: int, value: float, buffer: bool = False) -> None:
        if not (0 <= row < self.rows and 0 <= column < self.cols):
            raise IndexError(f"cell ({row}, {column}) lies outside {self.rows}x{self.cols}")
        self._target(buffer)[row, column] = value

    def clear_buffer(self) -> None:
        self.buffer.fill(0.0)

    def cell_check(self, row: int, column: int) -> float:
        """Transition value for one cell from its inner and outer filling."""
        inner_rows = (row + self._inner_arr[:, 0]) % self.rows
        inner_cols = (column + self._inner_arr[:, 1]) % self.cols
        outer_rows = (row + self._outer_arr[:, 0]) % self.rows
        outer_cols = (column + self._outer_arr[:, 1]) % self.cols
        m = float(self.grid[inner_rows, inner_cols].mean())
        n = float(self.grid[outer_rows, outer_cols].mean())
        return float(self.rules.transition(n, m))

    def _ring_mean(
        self, window: np.ndarray, offsets: list[tuple[int, int]], height: int, width: int
    ) -> np.ndarray:
        span = self._span
        total = np.zeros((height, width))
        for dr, dc in offsets:
            total += window[span + dr : span + dr + height, span + dc : span + dc + width]
        return total / len(offsets)

    def _step_region(self, rows: range, cols: range) -> None:
        height, width = len(rows), len(cols)
        if height == 0 or width == 0:
            return
        span = self._span
        row_index = np.arange(rows.start - span, rows.stop + span) % self.rows
        col_index = np.arange(cols.start - span, cols.stop + span) % self.cols
        window = self.grid[np.ix_(row_index, col_index)]
        m = self._ring_mean(window, self._inner, height, width)
        n = self._ring_mean(window, self._outer, height, width)
        rates = 2.0 * self.rules.transition(n, m) - 1.0
        self.buffer[rows.start : rows.stop, cols.start : cols.stop] = rates

    def step(self) -> None:
        """Compute the rate of change of every cell into the buffer."""
        self.clear_buffer()
        if self.workers == 1:
            self._step_region(range(self.rows), range(self.cols))
            return
        regions = [quarter_bounds(q, self.rows, self.cols) for q in range(QUARTERS)]
        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            for future in [pool.submit(self._step_region, *region) for region in regions]:
                future.result()

    def update(self, fps: float) -> None:
        """Advance the grid by one frame of length ``1 / fps`` using the buffered rates."""
        dt = 1.0 / fps
        np.clip(self.grid + dt * self.buffer, 0.0, 1.0, out=self.grid)

    def format_grid(self, buffer: bool = False) -> str:
        """Text dump of the grid, one line per row, wrapping one extra row and column."""
        lines = [
            "".join(f"{self.value_at(r, c, buffer):g} " for c in range(self.cols + 1))
            for r in range(self.rows + 1)
        ]
        return "\n".join(lines) + "\n"

    def colours(self) -> np.ndarray:
        """RGB image of the grid as a ``(rows, cols, 3)`` array of bytes."""
        values = np.nan_to_num(self.grid)
        red = np.clip(255.0 * values, 0.0, 255.0).astype(np.uint8)
        green = np.clip(255.0 * np.sin(values), 0.0, 255.0).astype(np.uint8)
        blue = np.zeros_like(red)
        return np.stack([red, green, blue], axis=-1)