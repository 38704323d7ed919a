"""
materials.py - Surface appearance

A material is a base color plus two switches that decide which
secondary rays the tracer spawns at a hit. The switches are meant to be
flipped between renders; geometry never changes after construction.
"""

from .color import Color


class Material:
    """
    Appearance shared by every face of a primitive.

    Attributes
    ----------
    color : Color
        Base (diffuse) color on the 0-255 scale
    reflective : bool
        Spawn a mirror-reflected ray at hits
    transparent : bool
        Spawn a refracted ray at hits
    """

    def __init__(
        self,
        color: Color,
        reflective: bool = False,
        transparent: bool = False
    ):
        self.color = color
        self.reflective = reflective
        self.transparent = transparent

    def __repr__(self) -> str:
        flags = [name for name, on in
                 (("reflective", self.reflective), ("transparent", self.transparent)) if on]
        return f"Material({self.color!r}{', ' if flags else ''}{', '.join(flags)})"


# =============================================================================
# Factory Functions
# =============================================================================

def create_matte(color: Color) -> Material:
    """Plain diffuse surface."""
    return Material(color)


def create_mirror(color: Color) -> Material:
    """Diffuse color blended with a mirror reflection."""
    return Material(color, reflective=True)


def create_glass(color: Color, reflective: bool = False) -> Material:
    """
    Transparent surface, optionally with a reflective coat.

    Parameters
    ----------
    color : Color
        Tint mixed with the transmitted light
    reflective : bool, optional
        Also spawn a reflected ray (default: False)

    Returns
    -------
    Material
        Transparent material
    """
    return Material(color, reflective=reflective, transparent=True)
