"""Shared fixtures for the path tracer tests."""

import random

import pytest

from core.vector import Vector3
from materials.lambertian import Lambertian


@pytest.fixture
def rng():
    """A seeded random stream so sampled tests are repeatable."""
    return random.Random(42)


@pytest.fixture
def gray():
    return Lambertian(Vector3(0.5, 0.5, 0.5))
