import numpy as np
import pytest

from smoothlife.perlin import PerlinNoise
from smoothlife.rules import Rules
from smoothlife.simulation import (
    Simulation,
    cell_colour,
    clamp,
    loop_mod,
    quarter_bounds,
)


def _small_sim(rows=8, cols=9, workers=1):
    sim = Simulation(rows, cols, Rules(radius_outer=4.0), workers)
    rng = np.random.default_rng(0)
    sim.grid[:] = rng.random((rows, cols))
    return sim


@pytest.mark.parametrize("dividend", [-401, -200, -1, 0, 5, 199, 200, 437])
def test_loop_mod_wraps_into_range(dividend):
    result = loop_mod(dividend, 200)
    assert 0 <= result < 200
    assert (result - dividend) % 200 == 0


def test_loop_mod_negative_one():
    assert loop_mod(-1, 200) == 199


def test_clamp_limits():
    assert clamp(2.0, 1, 0) == 1
    assert clamp(-1.0, 1, 0) == 0
    assert clamp(0.5, 1, 0) == 0.5


def test_cell_colour_endpoints():
    assert cell_colour(0.0) == (0, 0, 0)
    assert cell_colour(1.0) == (255, 214, 0)


def test_quarter_bounds_even_grid():
    assert quarter_bounds(0, 200, 200) == (range(0, 100), range(0, 100))
    assert quarter_bounds(2, 200, 200) == (range(100, 200), range(100, 200))


@pytest.mark.parametrize("shape", [(200, 200), (8, 9), (7, 5)])
def test_quarters_cover_every_cell_once(shape):
    rows, cols = shape
    counts = np.zeros(shape, dtype=int)
    total = 0
    for quarter in range(4):
        row_range, col_range = quarter_bounds(quarter, rows, cols)
        total += len(row_range) * len(col_range)
        counts[row_range.start : row_range.stop, col_range.start : col_range.stop] += 1
    assert total == rows * cols
    assert counts.tolist() == [[1] * cols for _ in range(rows)]


def test_quarter_bounds_rejects_unknown_quarter():
    with pytest.raises(ValueError):
        quarter_bounds(4, 10, 10)


def test_invalid_construction():
    with pytest.raises(ValueError):
        Simulation(10, 10, workers=0)
    with pytest.raises(ValueError):
        Simulation(0, 10)


def test_value_at_wraps_around():
    sim = _small_sim()
    sim.set_cell(0, 0, 0.7)
    assert sim.value_at(sim.rows, sim.cols) == pytest.approx(0.7)
    assert sim.value_at(-sim.rows, -sim.cols) == pytest.approx(0.7)


def test_set_cell_buffer_and_bounds():
    sim = _small_sim()
    sim.set_cell(1, 2, 0.25, buffer=True)
    assert sim.value_at(1, 2, buffer=True) == 0.25
    with pytest.raises(IndexError):
        sim.set_cell(sim.rows, 0, 1.0)
    with pytest.raises(IndexError):
        sim.set_cell(0, -1, 1.0)


def test_clear_buffer_zeroes():
    sim = _small_sim()
    sim.buffer[:] = 0.5
    sim.clear_buffer()
    assert sim.buffer.tolist() == [[0.0] * sim.cols for _ in range(sim.rows)]
    assert sim.value_at(3, 4, buffer=True) == 0.0


def test_step_matches_cell_check_and_keeps_grid():
    sim = _small_sim()
    before = sim.grid.copy()
    sim.step()
    assert np.array_equal(sim.grid, before)
    for row in range(sim.rows):
        for col in range(sim.cols):
            expected = 2.0 * sim.cell_check(row, col) - 1.0
            assert sim.value_at(row, col, buffer=True) == pytest.approx(expected, abs=1e-9)


def test_threaded_step_matches_single():
    single = _small_sim()
    threaded = _small_sim(workers=4)
    single.step()
    threaded.step()
    assert np.allclose(single.buffer, threaded.buffer)


def test_uniform_grid_gives_uniform_rates():
    sim = Simulation(6, 6, Rules(radius_outer=4.0))
    sim.grid[:] = 0.3
    assert sim.cell_check(2, 3) == pytest.approx(sim.rules.transition(0.3, 0.3))
    sim.step()
    assert np.allclose(sim.buffer, sim.buffer[0, 0])


def test_update_integrates_and_clamps():
    sim = _small_sim()
    sim.grid[:] = 0.5
    sim.set_cell(0, 0, 1.0, buffer=True)
    sim.set_cell(0, 1, -1.0, buffer=True)
    sim.update(2.0)
    assert sim.value_at(0, 0) == 1.0
    assert sim.value_at(0, 1) == 0.0
    assert sim.value_at(1, 1) == 0.5
    assert np.all((sim.grid >= 0.0) & (sim.grid <= 1.0))


def test_update_with_zero_fps_raises():
    sim = _small_sim()
    with pytest.raises(ZeroDivisionError):
        sim.update(0)


def test_format_grid_wraps_extra_row_and_column():
    sim = _small_sim(rows=3, cols=4)
    text = sim.format_grid()
    lines = text.splitlines()
    assert len(lines) == sim.rows + 1
    assert lines[0] == lines[-1]
    for line in lines:
        tokens = line.split()
        assert len(tokens) == sim.cols + 1
        assert tokens[0] == tokens[-1]
        assert line.endswith(" ")


def test_seed_from_noise_is_deterministic_and_in_range():
    first = Simulation(5, 6, Rules(radius_outer=4.0))
    second = Simulation(5, 6, Rules(radius_outer=4.0))
    first.buffer[:] = 1.0
    first.seed_from_noise(PerlinNoise(12345))
    second.seed_from_noise(PerlinNoise(12345))
    assert np.array_equal(first.grid, second.grid)
    assert np.all((first.grid >= 0.0) & (first.grid <= 1.0))
    assert np.all(first.buffer == 0.0)
    noise = PerlinNoise(12345)
    assert first.value_at(3, 4) == pytest.approx(noise.octave2d_01(4 * 0.01, 3 * 0.01, 8), abs=1e-5)


def test_colours_match_cell_colour():
    sim = _small_sim(rows=3, cols=4)
    image = sim.colours()
    assert image.shape == (3, 4, 3)
    assert image.dtype == np.uint8
    for row in range(3):
        for col in range(4):
            assert tuple(int(v) for v in image[row, col]) == cell_colour(sim.value_at(row, col))