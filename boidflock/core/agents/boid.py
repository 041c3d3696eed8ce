"""
Boid agent class implementing the flocking decision.
"""

import math
import random
from typing import NamedTuple, Optional, Sequence, Tuple

from .base import Agent
from .. import rules
from ..config import FlockConfig
from ..rules import RuleImpulses
from ..vector import Vector2
from ..vision import can_see


class RuleWeights(NamedTuple):
    """Per-rule weights, in composition order."""
    separation: float
    alignment: float
    cohesion: float
    avoidance: float


class Decision(NamedTuple):
    """Velocity a boid chose for the next move and the impulses behind it."""
    velocity: Vector2
    impulses: RuleImpulses


class Boid(Agent):
    """
    A boid that steers by local perception only.

    Implements Reynolds' rules plus edge and obstacle avoidance:
    - Separation: Avoid crowding neighbors
    - Alignment: Steer toward average heading of neighbors
    - Cohesion: Steer toward average position of neighbors
    - Avoidance: Steer clear of visible world edges and obstacles
    """

    def __init__(self, x: float, y: float, config: FlockConfig,
                 velocity: Optional[Vector2] = None,
                 rng: Optional[random.Random] = None,
                 size: Optional[float] = None):
        """
        Initialize a boid.

        Args:
            x: Initial x position
            y: Initial y position
            config: Flock configuration providing the agent constants
            velocity: Initial velocity (random if None)
            rng: Random source for the initial velocity
            size: Body size override (config.agentSize if None)
        """
        if velocity is None:
            rng = rng or random.Random()
            speed = rng.uniform(config.minInitialSpeed, config.maxInitialSpeed)
            velocity = Vector2.from_angle(rng.uniform(-math.pi, math.pi), speed)
        super().__init__(x, y, velocity, size if size is not None else config.agentSize,
                         config.maxImpulse)
        self.vision_radius = config.visionRadius
        self.vision_angle = config.visionAngle
        self.separation_coefficient = config.separationCoefficient
        self.danger_coefficient = config.dangerCoefficient
        self.near_field_coefficient = config.nearFieldCoefficient
        self.weights = RuleWeights(
            config.separationWeight,
            config.alignmentWeight,
            config.cohesionWeight,
            config.avoidanceWeight,
        )
        self.last_impulses: Optional[RuleImpulses] = None

    def can_see(self, target: Vector2) -> bool:
        return can_see(self.position, self.heading, self.vision_radius, self.vision_angle, target)

    def apply_rules(self, boids: Sequence["Boid"], bounds: Tuple[float, float],
                    obstacles: Sequence[Vector2] = ()) -> Decision:
        """
        Decide the next velocity from the current flock snapshot.

        All four impulses are computed from the same state before any of them
        is applied. They are then added to the velocity one at a time, scaled
        by their weight, and the running velocity is clamped to max_impulse
        after every step. Nothing is mutated; commit with apply_decision().

        Args:
            boids: Flock snapshot as of the start of the tick
            bounds: World (width, height)
            obstacles: Obstacle points

        Returns:
            The decision for this tick
        """
        impulses = RuleImpulses(
            rules.separation(self, boids),
            rules.alignment(self, boids),
            rules.cohesion(self, boids),
            rules.avoidance(self, bounds, obstacles),
        )

        velocity = self.velocity
        for impulse, weight in zip(impulses, self.weights):
            velocity = (velocity + impulse.scale(weight)).limit(self.max_impulse)
        return Decision(velocity, impulses)

    def apply_decision(self, decision: Decision) -> None:
        """Adopt a velocity chosen by apply_rules()."""
        self.velocity = decision.velocity.limit(self.max_impulse)
        self.last_impulses = decision.impulses
