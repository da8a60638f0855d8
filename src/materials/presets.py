# materials/presets.py
from core.vector import Color
from materials.metal import Metal
from materials.dielectric import Dielectric

class MetalPresets:
    """Predefined metal materials."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Color(0.8, 0.6, 0.2), fuzz=0.0)

    @staticmethod
    def bronze() -> Metal:
        return Metal(Color(0.7, 0.6, 0.5), fuzz=0.0)

class DielectricPresets:
    """Predefined dielectric materials."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

class ColorPresets:
    """Common albedo colors."""

    GROUND = Color(0.8, 0.8, 0.0)
    GRAY = Color(0.5, 0.5, 0.5)
    BLUE = Color(0.1, 0.2, 0.5)
    BROWN = Color(0.4, 0.2, 0.1)
