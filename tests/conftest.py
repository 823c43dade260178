"""Shared fixtures for the path tracer tests."""

import pytest
from PIL import Image

from core.utils import seed


@pytest.fixture(autouse=True)
def seeded_generator():
    """Seed the calling thread's generator so every test is repeatable."""
    seed(20240607)
    yield


@pytest.fixture
def texture_dir(tmp_path, monkeypatch):
    """A directory on the texture search path holding a small earthmap.jpg."""
    image = Image.new("RGB", (8, 4), (30, 90, 200))
    image.save(tmp_path / "earthmap.jpg")
    monkeypatch.setenv("RAYTRACER_TEXTURE_PATH", str(tmp_path))
    return tmp_path
