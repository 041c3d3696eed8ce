"""
boidflock: emergent flocking of autonomous agents in a bounded 2D plane.
"""

from .core import (
    AgentSnapshot, Bounds, ConfigurationError, Flock, FlockConfig,
    RuleImpulses, Vector2, can_see,
)

__version__ = "0.1.0"

__all__ = [
    'AgentSnapshot', 'Bounds', 'ConfigurationError', 'Flock', 'FlockConfig',
    'RuleImpulses', 'Vector2', 'can_see',
]
