"""
Agent classes for the flocking simulation.
"""

from .base import Agent
from .boid import Boid, Decision, RuleWeights

__all__ = ['Agent', 'Boid', 'Decision', 'RuleWeights']
