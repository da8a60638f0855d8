# camera/camera.py
import math
from core.vector import Vector3, Point3
from core.ray import Ray

class Camera:
    """
    Thin-lens camera built once from look-from/look-at parameters.

    vfov is the vertical field of view in degrees. The camera is not
    changed after construction, so worker threads can share one instance.
    """
    def __init__(self, look_from: Point3, look_at: Point3, view_up: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: float = 1.0):
        self.look_from = look_from
        self.look_at = look_at
        self.view_up = view_up
        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture  # Lens aperture for depth of field
        self.focus_dist = focus_dist  # Distance to focus plane
        self.lens_radius = aperture / 2.0

        # Orthonormal basis: w points backwards, away from the target
        self.w = (look_from - look_at).normalize()
        self.u = view_up.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        # Compute viewport dimensions based on fov
        h = math.tan(math.radians(vfov) / 2)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        # Scale by focus distance
        self.origin = look_from
        self.horizontal = self.u * viewport_width * focus_dist
        self.vertical = self.v * viewport_height * focus_dist
        self.lower_left_corner = (self.origin -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * focus_dist)

    def get_ray(self, s: float, t: float, rng) -> Ray:
        """Generates a ray through viewport coordinates (s, t), origin bottom-left."""
        rd = random_in_unit_disk(rng) * self.lens_radius
        offset = self.u * rd.x + self.v * rd.y

        ray_origin = self.origin + offset
        ray_direction = (self.lower_left_corner +
                         self.horizontal * s +
                         self.vertical * t -
                         ray_origin)
        return Ray(ray_origin, ray_direction)

    def __repr__(self) -> str:
        return (f"Camera(look_from={self.look_from!r}, look_at={self.look_at!r}, "
                f"vfov={self.vfov}, aspect_ratio={self.aspect_ratio}, "
                f"aperture={self.aperture}, focus_dist={self.focus_dist})")

def random_in_unit_disk(rng) -> Vector3:
    """Generate random point in unit disk for DOF."""
    while True:
        p = Vector3(
            rng.uniform(-1, 1),
            rng.uniform(-1, 1),
            0
        )
        if p.dot(p) < 1:
            return p
