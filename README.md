# smoothlife

SmoothLife is a continuous form of Conway's Game of Life. Each cell holds a
value between 0 and 1. The next state of a cell depends on the mean value of a
small disc around it and the mean value of the ring around that disc. This
package runs the automaton on a grid whose edges wrap around and shows it in a
pygame window. The grid starts from Perlin noise.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running the viewer

```
smoothlife
```

The window opens paused. By default it shows a 200 × 200 grid in an
800 × 800 window.

Options:

| Option           | Meaning                                                        |
|------------------|----------------------------------------------------------------|
| `--rows N`       | grid rows (default 200)                                        |
| `--cols N`       | grid columns (default 200)                                     |
| `--width N`      | window width in pixels (default 800)                           |
| `--height N`     | window height in pixels (default 800)                          |
| `--workers N`    | worker threads; above 1 the step is split into four quarters   |
| `--output-dir D` | directory for saved frames (default `output_frames`)           |
| `--seed N`       | Perlin noise seed for the starting grid (default: current time)|

Controls:

| Input            | Action                                                  |
|------------------|---------------------------------------------------------|
| `P`              | pause or resume the simulation                          |
| `Space`          | compute one step of rates into the buffer               |
| `Enter`          | apply the buffer to the grid                            |
| `Up` / `Down`    | raise or lower the target step rate                     |
| `Backspace`      | reseed the grid from fresh Perlin noise                 |
| `Q`              | print the grid values to standard output                |
| left mouse click | set the clicked cell to 1                               |

While the simulation runs, each frame is saved as a numbered PNG
(`0.png`, `1.png`, …) in the output directory. The window title shows the
measured frame rate once a second. Each update advances the grid by
`1 / fps` times the buffered rates. Until the first frame rate has been
measured, the target step rate stands in for it.

## Perlin noise demo

```
smoothlife-noise
```

Options: `--output-dir D` (default: the current directory) and `--size N`
(image side in pixels, default 512).

The demo first prints a 20 × 20 text preview of random noise. It then reads
three values from standard input:

- a frequency, clamped to 0.1 – 64
- a number of octaves, clamped to 1 – 16
- a seed, taken modulo 2³²

For each set of answers it writes a greyscale BMP named
`f<frequency>o<octaves>_<seed>.bmp`. It then asks whether to continue; any
answer other than `y` ends the demo. Input that is not a number ends the demo
with exit status 1.

## Library use

```python
from smoothlife.perlin import PerlinNoise
from smoothlife.rules import Rules
from smoothlife.simulation import Simulation

noise = PerlinNoise(12345)
sim = Simulation(rows=64, cols=64, rules=Rules(), workers=4)
sim.seed_from_noise(noise)

sim.step()          # fill sim.buffer with rates in [-1, 1]
sim.update(fps=30)  # grid += buffer / fps, clamped to [0, 1]
print(sim.format_grid(buffer=False))
```

- `smoothlife.rules.Rules` is a dataclass that holds the outer radius (21 by
  default), the inner radius (a third of the outer radius by default), the
  sigmoid steepness `alpha` and the birth and death intervals. Its
  `transition(n, m)` accepts floats or numpy arrays.
- `Simulation.value_at` wraps coordinates around the grid. `set_cell` raises
  `IndexError` for cells outside the grid. `colours()` returns the grid as a
  `(rows, cols, 3)` RGB byte array.
- `PerlinNoise` gives the same values for the same seed. It uses its own
  `MT19937` generator and shuffle, so results are the same on every platform.
  `reseed` also accepts any callable that returns random integers.
  `serialize()` returns the 256-byte permutation table and `deserialize()`
  loads one back. `deserialize()` raises `ValueError` if the length is wrong.
- `smoothlife.bmp.Image` is a small RGB image. `to_bytes()` encodes it as a
  24-bit BMP and `save_bmp(path)` writes that BMP to a file. Pixels set
  outside the image are ignored.

## Limitations

- The viewer saves frames as separate PNG files only. It does not assemble
  them into a video.
- The simulation state cannot be saved or loaded. Apart from the Perlin seed,
  every run starts from scratch.