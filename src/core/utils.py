# core/utils.py
import math
from core.vector import Vector3

# Every sampling helper takes an explicit generator `rng` exposing
# random() -> [0, 1) and uniform(a, b), e.g. a random.Random instance.

def random_vector(rng, minimum: float = 0.0, maximum: float = 1.0) -> Vector3:
    """
    Returns a vector with each component drawn uniformly from [minimum, maximum].
    """
    return Vector3(rng.uniform(minimum, maximum),
                   rng.uniform(minimum, maximum),
                   rng.uniform(minimum, maximum))

def random_in_unit_sphere(rng) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = random_vector(rng, -1, 1)
        if p.length_squared() < 1.0:
            return p

def random_unit_vector(rng) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    return random_in_unit_sphere(rng).normalize()

def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)

def refract(uv: Vector3, n: Vector3, etai_over_etat: float) -> Vector3:
    """
    Refracts the unit vector uv through a surface with unit normal n.
    The caller decides beforehand whether refraction is possible.
    """
    cos_theta = min(-uv.dot(n), 1.0)
    r_out_perp = (uv + n * cos_theta) * etai_over_etat
    r_out_parallel = n * (-math.sqrt(abs(1.0 - r_out_perp.length_squared())))
    return r_out_perp + r_out_parallel

def schlick(cosine: float, ref_idx: float) -> float:
    """
    Schlick's polynomial approximation of Fresnel reflectance.
    """
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * math.pow((1.0 - cosine), 5)
