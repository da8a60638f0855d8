"""Tests for the parallel renderer.

Tests cover:
- Golden 2x2 image with the midpoint generator stub
- Every pixel delivered exactly once, tagged with its index
- Reproducibility across worker counts for a fixed seed
- Failure paths raising RenderError
"""

import numpy as np
import pytest

from conftest import MidpointRandom
from core.rng import task_rng
from geometry.world import HittableList
from renderer import raytracer
from renderer.raytracer import Renderer, RenderError
from renderer.tone_mapping import to_rgb8, tone_map_image
from scenes import single_sphere_scene, three_spheres_scene
import main

GOLDEN_2X2 = np.array([
    [[185, 216, 255], [195, 221, 255]],
    [[0, 0, 0], [221, 236, 255]],
], dtype=np.uint8)


@pytest.fixture
def midpoint_tasks(monkeypatch):
    """Replace every per-task generator with the midpoint stub."""
    monkeypatch.setattr(raytracer, "task_rng", lambda seed, index: MidpointRandom())


class TestGoldenImage:
    """Deterministic regression image of the single-sphere scene."""

    @pytest.mark.parametrize("workers,chunk_size", [(1, None), (4, 1), (2, 3)])
    def test_single_sphere_golden(self, midpoint_tasks, workers, chunk_size):
        world, camera = single_sphere_scene(aspect_ratio=1.0)
        renderer = Renderer(2, 2, N=1, max_depth=1, workers=workers, chunk_size=chunk_size)
        image = tone_map_image(renderer.render(camera, world))
        np.testing.assert_array_equal(image, GOLDEN_2X2)

    def test_stream_matches_golden(self, midpoint_tasks):
        world, camera = single_sphere_scene(aspect_ratio=1.0)
        renderer = Renderer(2, 2, N=1, max_depth=1, workers=2, chunk_size=1)
        pixels = dict(renderer.iter_pixels(camera, world))
        for index, color in pixels.items():
            row, col = divmod(index, 2)
            assert to_rgb8(color) == tuple(GOLDEN_2X2[row, col])


class TestPixelStream:
    """Tests for iter_pixels and render bookkeeping."""

    def test_each_pixel_exactly_once(self):
        world, camera = single_sphere_scene(aspect_ratio=5 / 3)
        renderer = Renderer(5, 3, N=1, max_depth=2, workers=3, seed=0, chunk_size=2)
        indices = [index for index, _ in renderer.iter_pixels(camera, world)]
        assert sorted(indices) == list(range(15))

    def test_render_shape_and_range(self):
        world, camera = single_sphere_scene(aspect_ratio=2.0)
        image = Renderer(6, 3, N=2, max_depth=3, workers=2, seed=1).render(camera, world)
        assert image.shape == (3, 6, 3)
        assert image.dtype == np.float64
        assert np.all(image >= 0.0)
        assert np.all(image <= 1.0)

    def test_progress_callback(self):
        world, camera = single_sphere_scene(aspect_ratio=2.0)
        calls = []
        Renderer(4, 2, N=1, max_depth=1, workers=2, seed=1).render(
            camera, world, callback=lambda done, total: calls.append((done, total)))
        assert len(calls) == 2  # one per scanline task
        assert calls[-1] == (8, 8)
        assert all(total == 8 for _, total in calls)

    def test_early_stop_drains_cleanly(self):
        world, camera = single_sphere_scene(aspect_ratio=1.0)
        renderer = Renderer(8, 8, N=1, max_depth=1, workers=2, seed=1, chunk_size=1)
        chunks = renderer.iter_chunks(camera, world)
        first = next(chunks)
        chunks.close()
        assert len(first) == 1


class TestReproducibility:
    """Fixed seeds give identical images regardless of scheduling."""

    def test_same_seed_same_image_any_worker_count(self):
        world, camera = three_spheres_scene(aspect_ratio=2.0)
        a = Renderer(8, 4, N=2, max_depth=4, workers=1, seed=42).render(camera, world)
        b = Renderer(8, 4, N=2, max_depth=4, workers=4, seed=42).render(camera, world)
        np.testing.assert_array_equal(a, b)

    def test_different_seeds_differ(self):
        world, camera = three_spheres_scene(aspect_ratio=2.0)
        a = Renderer(8, 4, N=2, max_depth=4, workers=2, seed=1).render(camera, world)
        b = Renderer(8, 4, N=2, max_depth=4, workers=2, seed=2).render(camera, world)
        assert not np.array_equal(a, b)

    def test_task_rng_depends_on_seed_and_index(self):
        assert task_rng(5, 0).random() == task_rng(5, 0).random()
        assert task_rng(5, 0).random() != task_rng(5, 1).random()
        assert task_rng(5, 0).random() != task_rng(6, 0).random()

    def test_negative_seed_is_accepted(self):
        assert task_rng(-1, 0).random() == task_rng(-1, 0).random()
        assert task_rng(-1, 0).random() != task_rng(-2, 0).random()

    def test_negative_seed_renders_from_command_line(self, tmp_path):
        outputs = []
        for name in ("a.ppm", "b.ppm"):
            out = tmp_path / name
            code = main.main([str(out), "--scene", "single", "--width", "4", "--aspect-ratio", "2",
                              "--samples", "1", "--max-depth", "2", "--seed", "-1", "--quiet"])
            assert code == 0
            outputs.append(out.read_text())
        assert outputs[0] == outputs[1]


class BrokenWorld(HittableList):
    def hit(self, ray, t_min, t_max):
        raise ValueError("corrupt scene")


class TestRenderErrors:
    """Failures that would drop pixels are fatal."""

    def test_worker_exception_is_fatal(self):
        _, camera = single_sphere_scene(aspect_ratio=1.0)
        renderer = Renderer(2, 2, N=1, max_depth=1, workers=2, seed=0)
        with pytest.raises(RenderError) as excinfo:
            renderer.render(camera, BrokenWorld())
        assert isinstance(excinfo.value.__cause__, ValueError)

    def test_duplicate_pixel_is_fatal(self, monkeypatch):
        world, camera = single_sphere_scene(aspect_ratio=1.0)
        renderer = Renderer(2, 2, N=1, max_depth=1, workers=1, seed=0)
        real_chunk = raytracer.render_chunk

        def duplicating_chunk(*args):
            results = real_chunk(*args)
            return results + results[:1]

        monkeypatch.setattr(raytracer, "render_chunk", duplicating_chunk)
        with pytest.raises(RenderError, match="delivered twice"):
            renderer.render(camera, world)

    def test_missing_pixel_is_fatal(self, monkeypatch):
        world, camera = single_sphere_scene(aspect_ratio=1.0)
        renderer = Renderer(2, 2, N=1, max_depth=1, workers=1, seed=0)
        real_chunk = raytracer.render_chunk
        monkeypatch.setattr(raytracer, "render_chunk", lambda *args: real_chunk(*args)[1:])
        with pytest.raises(RenderError, match="never rendered"):
            renderer.render(camera, world)

    @pytest.mark.parametrize("kwargs", [
        dict(width=0, height=2),
        dict(width=2, height=2, N=0),
        dict(width=2, height=2, max_depth=0),
        dict(width=2, height=2, workers=0),
        dict(width=2, height=2, chunk_size=0),
    ])
    def test_invalid_configuration(self, kwargs):
        with pytest.raises(RenderError):
            Renderer(**kwargs)
