from pathlib import Path
from typing import NamedTuple, Union

from PIL import Image


class PixelBuffer(NamedTuple):
    data: bytes
    width: int
    height: int


def image_to_rgba_buffer(image: Image.Image) -> PixelBuffer:
    rgba = image.convert("RGBA")
    return PixelBuffer(rgba.tobytes(), rgba.width, rgba.height)


def load_rgba_buffer(path: Union[str, Path]) -> PixelBuffer:
    """
    Decode an image file into a flat RGBA byte buffer (r, g, b, a per pixel, row-major).

    Raises:
        FileNotFoundError: If the file does not exist.
        PIL.UnidentifiedImageError: If Pillow cannot decode the file.
    """
    with Image.open(path) as image:
        return image_to_rgba_buffer(image)
