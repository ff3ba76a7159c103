import io

from smoothlife.bmp import RGB, Image
from smoothlife.noise_demo import main, output_name, preview, render
from smoothlife.perlin import PerlinNoise


def test_output_name_format():
    assert output_name(8.0, 8, 0) == "f8o8_0.bmp"
    assert output_name(0.1, 1, 42) == "f0.1o1_42.bmp"


def test_render_fills_gray_pixels_in_range():
    perlin = PerlinNoise(12345)
    image = Image(5, 4)
    render(perlin, image, 8.0, 4)
    assert image.data[0] == RGB.gray(perlin.octave2d_01(0.0, 0.0, 4))
    for colour in image.data:
        assert colour.r == colour.g == colour.b
        assert 0.0 <= colour.r <= 1.0


def test_render_is_deterministic_per_seed():
    first, second = Image(4, 4), Image(4, 4)
    render(PerlinNoise(67890), first, 8.0, 3)
    render(PerlinNoise(67890), second, 8.0, 3)
    assert first.to_bytes() == second.to_bytes()


def test_preview_shape_and_digits():
    text = preview(PerlinNoise(1))
    lines = text.splitlines()
    assert len(lines) == 20
    for line in lines:
        assert len(line) == 20
        assert all(ch in "0123456789" for ch in line)


def test_preview_depends_only_on_permutation():
    a = PerlinNoise(99)
    b = PerlinNoise()
    b.deserialize(a.serialize())
    assert preview(a) == preview(b)


def test_main_writes_image_and_stops(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("8 4 12345\nn\n"))
    code = main(["--output-dir", str(tmp_path), "--size", "4"])
    out = capsys.readouterr().out
    path = tmp_path / output_name(8.0, 4, 12345)
    assert code == 0
    assert path.exists()
    assert f'...saved "{path.name}"' in out


def test_main_clamps_parameters(tmp_path, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("100 40 7 n\n"))
    assert main(["--output-dir", str(tmp_path), "--size", "2"]) == 0
    assert (tmp_path / output_name(64.0, 16, 7)).exists()


def test_main_reports_failed_save(tmp_path, monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("1 1 1 n\n"))
    main(["--output-dir", str(tmp_path / "missing"), "--size", "2"])
    assert "...failed" in capsys.readouterr().out


def test_main_rejects_bad_number(tmp_path, monkeypatch):
    monkeypatch.setattr("sys.stdin", io.StringIO("abc\n"))
    assert main(["--output-dir", str(tmp_path), "--size", "2"]) == 1