# renderer/raytracer.py
import logging
import math
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, Iterator, List, Optional, Tuple

import numpy as np

from camera.camera import Camera
from core.ray import Ray
from core.rng import task_rng
from core.vector import Color
from geometry.hittable import Hittable

logger = logging.getLogger(__name__)

# Minimum hit distance, keeps scattered rays from re-hitting their own surface
T_MIN = 0.001
MAX_BOUNCES = 50

BLACK = Color(0.0, 0.0, 0.0)
SKY_WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)

PixelResult = Tuple[int, Color]


class RenderError(RuntimeError):
    """A render could not produce exactly one color for every pixel."""


def ray_color(ray: Ray, world: Hittable, depth: int, rng) -> Color:
    """
    Returns the color seen along the ray. If the ray hits an object, the material
    scatter is computed recursively up to 'depth' bounces.
    """
    if depth <= 0:
        return BLACK  # Exceeded recursion depth

    rec = world.hit(ray, T_MIN, math.inf)
    if rec is not None:
        scatter_result = rec.material.scatter(ray, rec, rng)
        if scatter_result is not None:
            scattered, attenuation = scatter_result
            return attenuation * ray_color(scattered, world, depth - 1, rng)
        return BLACK

    # Background gradient
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return (1.0 - t) * SKY_WHITE + t * SKY_BLUE


def sample_pixel(camera: Camera, world: Hittable, i: int, j: int,
                 width: int, height: int, samples: int, max_depth: int,
                 rng) -> Color:
    """
    Averages `samples` jittered radiance estimates for pixel column i and
    row j, where j counts from the bottom of the image. The result is linear.
    """
    u_scale = max(width - 1, 1)
    v_scale = max(height - 1, 1)
    pixel_color = Color(0.0, 0.0, 0.0)
    for _ in range(samples):
        u = (i + rng.random()) / u_scale
        v = (j + rng.random()) / v_scale
        ray = camera.get_ray(u, v, rng)
        pixel_color = pixel_color + ray_color(ray, world, max_depth, rng)
    return pixel_color / samples


def render_chunk(camera: Camera, world: Hittable, start: int, stop: int,
                 width: int, height: int, samples: int, max_depth: int,
                 seed: Optional[int]) -> List[PixelResult]:
    """
    Worker task: accumulates the raster-order pixels [start, stop).

    Each result carries its pixel index so the caller can place it no matter
    when the task finishes.
    """
    rng = task_rng(seed, start)
    results = []
    for index in range(start, stop):
        row, i = divmod(index, width)
        j = height - 1 - row
        results.append((index, sample_pixel(camera, world, i, j, width, height,
                                            samples, max_depth, rng)))
    return results


class Renderer:
    """
    Parallel CPU renderer.

    Pixels are split into tasks of `chunk_size` consecutive raster indices
    (one scanline by default) and executed on a fixed pool of `workers`
    threads. The camera and world are only read during a render.
    """
    def __init__(self, width: int, height: int, N: int = 16,
                 max_depth: int = MAX_BOUNCES, workers: Optional[int] = None,
                 seed: Optional[int] = None, chunk_size: Optional[int] = None):
        self.width = width
        self.height = height
        self.N = N
        self.max_depth = max_depth
        self.workers = workers if workers is not None else (os.cpu_count() or 1)
        self.seed = seed
        self.chunk_size = chunk_size if chunk_size is not None else width

        for name in ("width", "height", "N", "max_depth", "workers", "chunk_size"):
            if getattr(self, name) < 1:
                raise RenderError(f"{name} must be at least 1, got {getattr(self, name)}")

    @property
    def pixel_count(self) -> int:
        return self.width * self.height

    def _chunks(self) -> Iterator[Tuple[int, int]]:
        for start in range(0, self.pixel_count, self.chunk_size):
            yield start, min(start + self.chunk_size, self.pixel_count)

    def iter_chunks(self, camera: Camera, world: Hittable) -> Iterator[List[PixelResult]]:
        """
        Yields each finished task's [(pixel_index, color), ...] in completion order.
        """
        logger.debug("Dispatching %d-pixel tasks to %d workers",
                     self.chunk_size, self.workers)
        with ThreadPoolExecutor(max_workers=self.workers,
                                thread_name_prefix="render") as executor:
            futures = {}
            try:
                for start, stop in self._chunks():
                    future = executor.submit(render_chunk, camera, world, start, stop,
                                             self.width, self.height, self.N,
                                             self.max_depth, self.seed)
                    futures[future] = start
            except RuntimeError as exc:
                raise RenderError(f"could not submit render task: {exc}") from exc

            try:
                for future in as_completed(futures):
                    try:
                        chunk = future.result()
                    except Exception as exc:
                        raise RenderError(
                            f"render task starting at pixel {futures[future]} failed: {exc}"
                        ) from exc
                    yield chunk
            finally:
                # Drop queued work when the consumer stops early or a task failed
                for future in futures:
                    future.cancel()

    def iter_pixels(self, camera: Camera, world: Hittable) -> Iterator[PixelResult]:
        """
        Yields (pixel_index, linear_color) pairs in completion order. Every
        pixel index in [0, width*height) appears exactly once.
        """
        for chunk in self.iter_chunks(camera, world):
            yield from chunk

    def render(self, camera: Camera, world: Hittable,
               callback: Optional[Callable[[int, int], None]] = None) -> np.ndarray:
        """
        Renders the whole image and returns linear colors as a
        (height, width, 3) float array in raster order, top row first.
        """
        logger.info("Rendering %dx%d, %d samples/pixel, depth %d, %d workers",
                    self.width, self.height, self.N, self.max_depth, self.workers)
        image = np.zeros((self.height, self.width, 3), dtype=np.float64)
        seen = np.zeros(self.pixel_count, dtype=bool)
        completed = 0
        for chunk in self.iter_chunks(camera, world):
            for index, color in chunk:
                if seen[index]:
                    raise RenderError(f"pixel {index} was delivered twice")
                seen[index] = True
                row, col = divmod(index, self.width)
                image[row, col] = (color.x, color.y, color.z)
            completed += len(chunk)
            if callback is not None:
                callback(completed, self.pixel_count)

        if not seen.all():
            missing = int(np.count_nonzero(~seen))
            raise RenderError(f"{missing} pixels were never rendered")
        logger.info("Render finished: %d pixels", completed)
        return image
