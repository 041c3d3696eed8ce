import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("MPLBACKEND", "Agg")

import pytest

from boidflock.core.agents.boid import Boid
from boidflock.core.config import FlockConfig
from boidflock.core.vector import Vector2


@pytest.fixture
def make_boid():
    """Factory for boids with an explicit position, velocity and config overrides."""
    def _make(x, y, vx, vy, **overrides):
        overrides.setdefault("agentSize", 5.0)
        config = FlockConfig(**overrides)
        return Boid(x, y, config, velocity=Vector2(vx, vy))
    return _make
