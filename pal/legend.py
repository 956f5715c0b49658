import os

from PIL import Image, ImageDraw, ImageFont

from pal.color import luminance

BACKGROUND = (255, 255, 255)
DARK_INK = (0, 0, 0)
LIGHT_INK = (255, 255, 255)


def _load_font(font_path=None, font_size=12):
    try:
        if font_path and os.path.isfile(font_path):
            return ImageFont.truetype(font_path, font_size)
    except IOError:
        pass  # fall through to the default font
    try:
        return ImageFont.load_default(size=font_size)
    except TypeError:  # Pillow < 10.1 has no size argument
        return ImageFont.load_default()


def swatch_label(color) -> str:
    r, g, b = [int(c) for c in color]
    return f"RGB\n({r},{g},{b})"


def ink_for(color):
    """Black text on light swatches, white text on dark ones."""
    return DARK_INK if luminance(color) > 0.5 else LIGHT_INK


def create_palette_image(palette, font_path=None, font_size=12, swatch_size=80, padding=10):
    """
    Renders a palette as a row of labelled color swatches.

    Args:
        palette (list or np.ndarray): Colors, each an RGB tuple/list/Color or ndarray row.
        font_path (str, optional): Path to a TTF font file.
        font_size (int): Font size for the swatch labels.
        swatch_size (int): Width/height of each color swatch.
        padding (int): Space around elements and between swatches.

    Returns:
        PIL.Image.Image: The swatch image, or None for an empty palette.
    """
    num_colors = len(palette)
    if num_colors == 0:
        return None

    width = (swatch_size * num_colors) + (padding * (num_colors + 1))
    height = swatch_size + (2 * padding)

    image = Image.new("RGB", (width, height), color=BACKGROUND)
    draw = ImageDraw.Draw(image)
    font = _load_font(font_path, font_size)

    for idx, color_data in enumerate(palette):
        if hasattr(color_data, "tolist"):
            color_data = color_data.tolist()
        fill_color = tuple(int(c) for c in color_data)

        x0 = padding + idx * (swatch_size + padding)
        y0 = padding
        draw.rectangle([x0, y0, x0 + swatch_size, y0 + swatch_size], fill=fill_color, outline=DARK_INK)

        text = swatch_label(fill_color)
        left, top, right, bottom = draw.multiline_textbbox((0, 0), text, font=font, align="center")
        text_x = x0 + (swatch_size - (right - left)) / 2.0 - left
        text_y = y0 + (swatch_size - (bottom - top)) / 2.0 - top
        draw.multiline_text((text_x, text_y), text, fill=ink_for(fill_color), font=font, align="center")

    return image
