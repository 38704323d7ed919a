"""
color.py - RGB color accumulator

Colors carry real-valued channels on the 0-255 scale. Shading adds and
scales them freely, so a channel may leave [0, 255] while light is being
accumulated; clamping happens once, when the color is turned into an
8-bit pixel.
"""

import numpy as np
from typing import Tuple


class Color:
    """
    RGB color with unclamped float channels.

    Attributes
    ----------
    rgb : np.ndarray
        Channels [r, g, b] as float64

    Examples
    --------
    >>> grey = Color(100, 100, 100)
    >>> (grey * 3.0).to_rgb8()
    (255, 255, 255)
    """

    __slots__ = ("rgb",)

    def __init__(self, r: float, g: float, b: float):
        self.rgb = np.array([r, g, b], dtype=np.float64)

    @classmethod
    def from_array(cls, values) -> 'Color':
        """
        Create a color from an array-like of three channels.

        Parameters
        ----------
        values : array-like
            Channels [r, g, b], not clamped

        Returns
        -------
        Color
            New color
        """
        r, g, b = np.asarray(values, dtype=np.float64)
        return cls(r, g, b)

    @property
    def r(self) -> float:
        """Red channel."""
        return float(self.rgb[0])

    @property
    def g(self) -> float:
        """Green channel."""
        return float(self.rgb[1])

    @property
    def b(self) -> float:
        """Blue channel."""
        return float(self.rgb[2])

    def scale(self, factor: float) -> 'Color':
        """Return a new color with every channel multiplied by factor."""
        return Color.from_array(self.rgb * factor)

    def add(self, other: 'Color') -> 'Color':
        """Return the channel-wise sum of two colors."""
        return Color.from_array(self.rgb + other.rgb)

    def blend(self, other: 'Color', weight: float) -> 'Color':
        """
        Mix another color into this one.

        Parameters
        ----------
        other : Color
            Color to mix in
        weight : float
            Share of `other` in the result; this color keeps 1 - weight

        Returns
        -------
        Color
            self * (1 - weight) + other * weight
        """
        return Color.from_array(self.rgb * (1.0 - weight) + other.rgb * weight)

    def to_rgb8(self) -> Tuple[int, int, int]:
        """Clamp to [0, 255] and truncate to integer channels."""
        r, g, b = np.floor(np.clip(self.rgb, 0.0, 255.0)).astype(int)
        return int(r), int(g), int(b)

    def __add__(self, other: 'Color') -> 'Color':
        return self.add(other)

    def __mul__(self, factor: float) -> 'Color':
        return self.scale(factor)

    __rmul__ = __mul__

    def __eq__(self, other) -> bool:
        if not isinstance(other, Color):
            return NotImplemented
        return bool(np.array_equal(self.rgb, other.rgb))

    __hash__ = None

    def __repr__(self) -> str:
        return f"Color({self.r:.2f}, {self.g:.2f}, {self.b:.2f})"


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
