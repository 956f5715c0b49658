# tests/test_legend.py
from PIL import Image
import numpy as np
from pal import legend


def test_create_palette_image_returns_image(tmp_path):
    palette = [
        (255, 0, 0),
        (0, 255, 0),
        (0, 0, 255),
    ]

    image = legend.create_palette_image(palette, font_size=12, swatch_size=40, padding=5)

    assert isinstance(image, Image.Image)
    num_colors = len(palette)
    expected_width = (40 * num_colors) + (5 * (num_colors + 1))
    expected_height = 40 + (2 * 5)
    assert image.size == (expected_width, expected_height)

    # swatch corner keeps the palette color
    assert image.getpixel((5 + 2, 5 + 2)) == (255, 0, 0)

    outpath = tmp_path / "swatches.png"
    image.save(outpath)
    assert outpath.exists()


def test_create_palette_image_with_empty_palette():
    assert legend.create_palette_image([]) is None


def test_create_palette_image_handles_numpy_palette():
    palette = np.array([
        [255, 255, 0],
        [0, 255, 255],
    ], dtype=np.uint8)

    img = legend.create_palette_image(palette, font_size=10, swatch_size=30, padding=2)
    assert isinstance(img, Image.Image)
    assert img.size[1] == 30 + (2 * 2)


def test_label_ink_contrasts_with_swatch():
    assert legend.ink_for((250, 250, 250)) == legend.DARK_INK
    assert legend.ink_for((10, 10, 80)) == legend.LIGHT_INK


def test_swatch_label():
    assert legend.swatch_label((1, 22, 255)) == "RGB\n(1,22,255)"
