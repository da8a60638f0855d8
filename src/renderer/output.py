# renderer/output.py
import os
from typing import TextIO, Union

import numpy as np
from PIL import Image


def write_ppm(target: Union[str, os.PathLike, TextIO], image: np.ndarray) -> None:
    """
    Writes an 8-bit (height, width, 3) image as plain-text PPM (P3):
    three space-separated integers per pixel, rows top to bottom.
    """
    if isinstance(target, (str, os.PathLike)):
        with open(target, "w") as f:
            write_ppm(f, image)
        return

    height, width = image.shape[:2]
    target.write(f"P3\n{width} {height}\n255\n")
    for row in image:
        for r, g, b in row:
            target.write(f"{int(r)} {int(g)} {int(b)}\n")


def save_png(path: Union[str, os.PathLike], image: np.ndarray) -> None:
    """Saves an 8-bit (height, width, 3) image with Pillow; format follows the extension."""
    Image.fromarray(np.asarray(image, dtype=np.uint8)).save(path)


def save_image(path: Union[str, os.PathLike], image: np.ndarray) -> None:
    """Writes .ppm files as P3 text and everything else through Pillow."""
    if os.fspath(path).lower().endswith(".ppm"):
        write_ppm(path, image)
    else:
        save_png(path, image)
