"""
Core module containing configuration, geometry, steering rules and the flock.
"""

from .config import FlockConfig, DEFAULT_CONFIG, BENCHMARK_CONFIG
from .errors import ConfigurationError
from .flock import AgentSnapshot, Bounds, Flock
from .rules import RuleImpulses
from .vector import Vector2
from .vision import can_see

__all__ = [
    'FlockConfig', 'DEFAULT_CONFIG', 'BENCHMARK_CONFIG',
    'ConfigurationError',
    'AgentSnapshot', 'Bounds', 'Flock',
    'RuleImpulses',
    'Vector2',
    'can_see',
]
