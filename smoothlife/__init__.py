"""SmoothLife cellular automaton with Perlin-noise seeding, a pygame viewer and a BMP noise demo."""

__version__ = "0.1.0"
__all__ = ["app", "bmp", "noise_demo", "perlin", "rules", "simulation"]