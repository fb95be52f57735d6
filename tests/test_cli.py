"""
Tests for the shrink_notes command-line wrapper.
"""
import numpy as np
from PIL import Image

import shrink_notes
from noteshrink.image_io import load_image_rgb, save_image_rgb
from noteshrink.options import ShrinkOptions


def _colours(img):
    return {tuple(int(c) for c in row) for row in img.reshape(-1, 3)}


class TestArgs:
    def test_defaults_match_options(self):
        args = shrink_notes.parse_cli_args(["page.png"])
        assert shrink_notes.options_from_args(args) == ShrinkOptions()
        assert args.seed is None and not args.debug

    def test_switches(self):
        args = shrink_notes.parse_cli_args(
            ["page.png", "--no-saturate", "--no-white-background", "--num-colors", "5"]
        )
        opts = shrink_notes.options_from_args(args)
        assert not opts.saturate and not opts.white_background
        assert opts.num_colors == 5


class TestMain:
    def test_single_file(self, tmp_path, colour_page, capsys):
        src = save_image_rgb(tmp_path / "page.png", colour_page)
        code = shrink_notes.main([str(src), "--seed", "1", "--num-colors", "4", "--no-saturate"])
        assert code == 0
        out_path = tmp_path / "shrinked_page.png"
        assert out_path.exists()
        out = load_image_rgb(out_path)
        assert _colours(out) == {
            (255, 255, 255),
            (20, 20, 20),
            (200, 30, 30),
            (30, 60, 200),
        }
        stdout = capsys.readouterr().out
        assert "Wrote shrinked_page.png" in stdout
        assert "Palette:" in stdout
        assert "K-means iters:" in stdout
        assert "Colours used:" in stdout
        assert "  #ffffff: 2,560" in stdout

    def test_jpeg_input_written_as_png(self, tmp_path, colour_page):
        Image.fromarray(colour_page).save(tmp_path / "page.jpg", quality=85)
        code = shrink_notes.main([str(tmp_path / "page.jpg"), "--seed", "1", "--num-colors", "4"])
        assert code == 0
        assert not (tmp_path / "shrinked_page.jpg").exists()
        out_path = tmp_path / "shrinked_page.png"
        with Image.open(out_path) as im:
            assert im.format == "PNG"
        assert len(_colours(load_image_rgb(out_path))) <= 4

    def test_folder_with_outdir(self, tmp_path, tiny_page):
        src_dir = tmp_path / "scans"
        src_dir.mkdir()
        save_image_rgb(src_dir / "a.png", tiny_page)
        save_image_rgb(src_dir / "shrinked_old.png", tiny_page)
        (src_dir / "readme.txt").write_text("not an image")
        out_dir = tmp_path / "out"

        assert shrink_notes.main([str(src_dir), "--outdir", str(out_dir), "--seed", "3"]) == 0
        assert sorted(p.name for p in out_dir.iterdir()) == ["shrinked_a.png"]

    def test_folder_skips_unreadable(self, tmp_path, tiny_page, capsys):
        save_image_rgb(tmp_path / "a.png", tiny_page)
        (tmp_path / "broken.png").write_bytes(b"garbage")
        assert shrink_notes.main([str(tmp_path)]) == 0
        assert "skipped unreadable image: broken.png" in capsys.readouterr().out
        assert (tmp_path / "shrinked_a.png").exists()

    def test_missing_input(self, tmp_path, capsys):
        assert shrink_notes.main([str(tmp_path / "nope.png")]) == 2
        assert "not found" in capsys.readouterr().err

    def test_bad_config(self, tmp_path, tiny_page, capsys):
        src = save_image_rgb(tmp_path / "page.png", tiny_page)
        assert shrink_notes.main([str(src), "--num-colors", "1"]) == 1
        assert "num_colors" in capsys.readouterr().err

    def test_undecodable_single_file(self, tmp_path, capsys):
        bad = tmp_path / "bad.png"
        bad.write_bytes(b"garbage")
        assert shrink_notes.main([str(bad)]) == 1
        assert "[error]" in capsys.readouterr().err

    def test_rgba_source(self, tmp_path, tiny_page):
        rgba = np.dstack([tiny_page, np.full((4, 4), 255, np.uint8)])
        Image.fromarray(rgba).save(tmp_path / "rgba.png")
        assert shrink_notes.main([str(tmp_path / "rgba.png"), "--seed", "0"]) == 0
        assert load_image_rgb(tmp_path / "shrinked_rgba.png").shape == (4, 4, 3)
