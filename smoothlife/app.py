"""Interactive window that runs a SmoothLife simulation and records every frame."""

from __future__ import annotations

import argparse
import time
from pathlib import Path

import numpy as np
import pygame

from .perlin import PerlinNoise
from .simulation import COLS, ROWS, SCREEN_HEIGHT, SCREEN_WIDTH, Simulation

WINDOW_TITLE = "Tester"
TITLE_PREFIX = "Smooth Life | FPS: "
DEFAULT_OUTPUT_DIR = "output_frames"
FPS_REPORT_INTERVAL = 1.0


def _time_seed() -> int:
    return int(time.time()) & 0xFFFFFFFF


class App:
    """Couples a simulation with keyboard and mouse controls, frame capture and FPS tracking."""

    def __init__(
        self,
        simulation: Simulation,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
        output_dir: str | Path = DEFAULT_OUTPUT_DIR,
    ) -> None:
        self.simulation = simulation
        self.width = width
        self.height = height
        self.output_dir = Path(output_dir)
        self.square_size = width / simulation.cols
        self.paused = True
        self.running = True
        self.time_frame_step = 60.0
        self.update_interval = 1.0 / self.time_frame_step
        self.fps = 0.0
        self.frame_count = 0
        self.frame_time = 0.0
        self.image_count = 0

    def _update(self) -> None:
        # Before the first FPS measurement there is no frame time yet; use the target rate.
        fps = self.fps if self.fps > 0 else self.time_frame_step
        self.simulation.update(fps)

    def _refresh(self) -> None:
        self.simulation.seed_from_noise(PerlinNoise(_time_seed()))

    def handle_key(self, key: int) -> bool:
        """React to a pressed key; return whether the key has a binding."""
        if key == pygame.K_SPACE:
            self.simulation.step()
        elif key == pygame.K_RETURN:
            self._update()
        elif key == pygame.K_p:
            self.paused = not self.paused
        elif key == pygame.K_UP:
            if self.time_frame_step != 1:
                self.time_frame_step += 10
            else:
                self.time_frame_step = 10
            self.update_interval = 1.0 / self.time_frame_step
        elif key == pygame.K_DOWN:
            if self.time_frame_step > 10:
                self.time_frame_step -= 10
            else:
                self.time_frame_step = 1
            self.update_interval = 1.0 / self.time_frame_step
        elif key == pygame.K_BACKSPACE:
            self._refresh()
        elif key == pygame.K_q:
            print(self.simulation.format_grid(False), end="")
        else:
            return False
        return True

    def handle_click(self, x: int, y: int) -> bool:
        """Bring the cell under a left click fully alive; return whether a cell was hit."""
        column = int(x / self.square_size)
        row = int(y / self.square_size)
        if not (0 <= row < self.simulation.rows and 0 <= column < self.simulation.cols):
            return False
        self.simulation.set_cell(row, column, 1.0, False)
        return True

    def render(self) -> pygame.Surface:
        """Draw the grid as a surface of the window's size; rows run along the x axis."""
        colours = np.ascontiguousarray(self.simulation.colours())
        surface = pygame.surfarray.make_surface(colours)
        return pygame.transform.scale(surface, (self.width, self.height))

    def save_frame(self, surface: pygame.Surface) -> Path:
        """Write the surface as the next numbered PNG and return its path."""
        self.output_dir.mkdir(parents=True, exist_ok=True)
        path = self.output_dir / f"{self.image_count}.png"
        pygame.image.save(surface, str(path))
        self.image_count += 1
        return path

    def tick_fps(self, elapsed: float) -> str | None:
        """Count one frame; once a second has passed, return the new window title."""
        self.frame_count += 1
        self.frame_time += elapsed
        if self.frame_time < FPS_REPORT_INTERVAL:
            return None
        self.fps = self.frame_count / self.frame_time
        self.frame_count = 0
        self.frame_time = 0.0
        return f"{TITLE_PREFIX}{self.fps:f}"

    def _advance_frame(self) -> pygame.Surface:
        if not self.paused:
            self.simulation.step()
            self._update()
            surface = self.render()
            self.save_frame(surface)
            return surface
        return self.render()

    def _poll_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1 and pygame.key.get_focused():
                    self.handle_click(*event.pos)
            elif event.type == pygame.KEYDOWN:
                self.handle_key(event.key)

    def run(self) -> None:
        """Open the window and run until it is closed."""
        pygame.init()
        try:
            window = pygame.display.set_mode((self.width, self.height))
            pygame.display.set_caption(WINDOW_TITLE)
            last = time.perf_counter()
            while self.running:
                self._poll_events()
                if not self.running:
                    break
                surface = self._advance_frame()
                window.fill((0, 0, 0))
                window.blit(surface, (0, 0))
                pygame.display.flip()
                now = time.perf_counter()
                title = self.tick_fps(now - last)
                last = now
                if title is not None:
                    pygame.display.set_caption(title)
        finally:
            pygame.quit()


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Run an interactive SmoothLife simulation.")
    parser.add_argument("--rows", type=int, default=ROWS)
    parser.add_argument("--cols", type=int, default=COLS)
    parser.add_argument("--width", type=int, default=SCREEN_WIDTH)
    parser.add_argument("--height", type=int, default=SCREEN_HEIGHT)
    parser.add_argument("--workers", type=int, default=1, help="use 4 to split work into quarters")
    parser.add_argument("--output-dir", default=DEFAULT_OUTPUT_DIR)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    simulation = Simulation(args.rows, args.cols, workers=args.workers)
    seed = args.seed if args.seed is not None else _time_seed()
    simulation.seed_from_noise(PerlinNoise(seed))
    App(simulation, args.width, args.height, args.output_dir).run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())