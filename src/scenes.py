# scenes.py
import logging
from typing import Callable, Dict, Tuple

from camera.camera import Camera
from core.utils import random_vector
from core.vector import Color, Point3, Vector3
from geometry.sphere import Sphere
from geometry.world import HittableList
from materials.lambertian import Lambertian
from materials.metal import Metal
from materials.presets import ColorPresets, DielectricPresets, MetalPresets

logger = logging.getLogger(__name__)

Scene = Tuple[HittableList, Camera]


def random_scene(rng, aspect_ratio: float = 3.0 / 2.0) -> Scene:
    """
    Large ground sphere covered with a grid of small random spheres and
    three big feature spheres (glass, matte, metal).
    """
    world = HittableList()
    world.add(Sphere(Point3(0, -1000, 0), 1000, Lambertian(ColorPresets.GRAY)))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = rng.random()
            center = Point3(a + 0.9 * rng.random(), 0.2, b + 0.9 * rng.random())

            if (center - Point3(4, 0.2, 0)).length() <= 0.9:
                continue
            if choose_mat < 0.8:
                # diffuse
                albedo = random_vector(rng) * random_vector(rng)
                material = Lambertian(albedo)
            elif choose_mat < 0.95:
                # metal
                albedo = random_vector(rng, 0.5, 1)
                material = Metal(albedo, rng.uniform(0, 0.5))
            else:
                material = DielectricPresets.glass()
            world.add(Sphere(center, 0.2, material))

    world.add(Sphere(Point3(0, 1, 0), 1.0, DielectricPresets.glass()))
    world.add(Sphere(Point3(-4, 1, 0), 1.0, Lambertian(ColorPresets.BROWN)))
    world.add(Sphere(Point3(4, 1, 0), 1.0, MetalPresets.bronze()))
    logger.debug("Random scene has %d spheres", len(world))

    camera = Camera(
        look_from=Point3(13, 2, 3),
        look_at=Point3(0, 0, 0),
        view_up=Vector3(0, 1, 0),
        vfov=20.0,
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_dist=10.0
    )
    return world, camera


def three_spheres_scene(rng=None, aspect_ratio: float = 16.0 / 9.0) -> Scene:
    """
    Matte sphere between a hollow glass sphere and a metal one.
    """
    ground = Lambertian(ColorPresets.GROUND)
    glass = DielectricPresets.glass()

    world = HittableList()
    world.add(Sphere(Point3(0, -100.5, -1), 100, ground))
    world.add(Sphere(Point3(0, 0, -1), 0.5, Lambertian(ColorPresets.BLUE)))
    # The negative inner radius flips its normals and hollows out the glass
    world.add(Sphere(Point3(-1, 0, -1), 0.5, glass))
    world.add(Sphere(Point3(-1, 0, -1), -0.4, glass))
    world.add(Sphere(Point3(1, 0, -1), 0.5, MetalPresets.gold()))

    look_from = Point3(-2, 2, 1)
    look_at = Point3(0, 0, -1)
    camera = Camera(
        look_from=look_from,
        look_at=look_at,
        view_up=Vector3(0, 1, 0),
        vfov=20.0,
        aspect_ratio=aspect_ratio,
        aperture=0.5,
        focus_dist=(look_from - look_at).length()
    )
    return world, camera


def single_sphere_scene(rng=None, aspect_ratio: float = 16.0 / 9.0) -> Scene:
    """
    One grey diffuse sphere in front of a pinhole camera looking down -z.
    """
    world = HittableList()
    world.add(Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(0.5, 0.5, 0.5))))
    camera = Camera(
        look_from=Point3(0, 0, 0),
        look_at=Point3(0, 0, -1),
        view_up=Vector3(0, 1, 0),
        vfov=90.0,
        aspect_ratio=aspect_ratio
    )
    return world, camera


SCENES: Dict[str, Callable[..., Scene]] = {
    "random": random_scene,
    "three-spheres": three_spheres_scene,
    "single": single_sphere_scene,
}
