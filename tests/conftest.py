"""Pytest configuration and shared fixtures."""

import pytest

from scenetracer import Color, Rectangle, create_matte


@pytest.fixture
def grey():
    return create_matte(Color(100, 100, 100))


@pytest.fixture
def floor(grey):
    """20x20 rectangle in the y=0 plane facing +y."""
    return Rectangle(
        [(-10, 0, -10), (-10, 0, 10), (10, 0, 10), (10, 0, -10)], grey, name="floor"
    )


@pytest.fixture
def background():
    return Color(10, 20, 30)
