"""
Flock: the population of boids and the per-tick update loop.
"""

import dataclasses
import logging
import math
import random
from typing import List, NamedTuple, Optional, Tuple

from .agents.boid import Boid
from .config import FlockConfig
from .errors import ConfigurationError
from .rules import RuleImpulses
from .vector import Vector2

logger = logging.getLogger(__name__)


class Bounds(NamedTuple):
    width: float
    height: float


class AgentSnapshot(NamedTuple):
    """Read-only view of one agent for renderers."""
    position: Tuple[float, float]
    heading: float
    size: float


class Flock:
    """
    A fixed-size population of boids moving inside fixed bounds.

    Each tick runs three phases in strict order:
    1. Decide: every boid chooses a velocity from the flock as it stood at
       the start of the tick. No boid changes during this phase.
    2. Act: every boid adopts its velocity and moves one step.
    3. Cull/replace: boids that left the bounds are swapped for fresh ones.
    """

    def __init__(self, config: Optional[FlockConfig] = None,
                 rng: Optional[random.Random] = None,
                 boids: Optional[List[Boid]] = None):
        """
        Initialize the flock.

        Args:
            config: Flock configuration (uses defaults if None)
            rng: Random source for spawning (seeded from config.seed if None)
            boids: Explicit starting population; spawned at random if None

        Raises:
            ConfigurationError: If the configuration or population is invalid
        """
        self.config = dataclasses.replace(config, obstacles=list(config.obstacles)) if config else FlockConfig()
        self.config.validate()
        if boids is not None:
            self._check_boids(boids)

        self.rng = rng if rng else random.Random(self.config.seed)
        self.bounds = Bounds(self.config.worldWidth, self.config.worldHeight)
        self.obstacles = tuple(Vector2(float(x), float(y)) for x, y in self.config.obstacles)

        if boids is None:
            self.boids = [self._spawn_boid() for _ in range(self.config.populationSize)]
        else:
            self.boids = list(boids)

        self.tick_count = 0
        self.replaced_count = 0
        logger.debug("Created flock of %d boids in %.0fx%.0f bounds with %d obstacles",
                     len(self.boids), self.bounds.width, self.bounds.height, len(self.obstacles))

    @staticmethod
    def _check_boids(boids: List[Boid]) -> None:
        """Reject an explicit population the tick loop could not run."""
        if not boids:
            raise ConfigurationError("Invalid flock configuration: explicit boid list is empty")
        for index, boid in enumerate(boids):
            if not math.isfinite(boid.size) or boid.size <= 0:
                raise ConfigurationError(
                    f"Invalid flock configuration: boid {index} has size {boid.size!r}, must be positive"
                )
            if not all(map(math.isfinite, boid.position.to_tuple() + boid.velocity.to_tuple())):
                raise ConfigurationError(
                    f"Invalid flock configuration: boid {index} has a non-finite position or velocity"
                )

    @classmethod
    def new(cls, width: float, height: float, population_size: int = 5,
            **overrides) -> "Flock":
        """
        Build a flock from bounds and population size.

        Args:
            width: World width
            height: World height
            population_size: Number of boids to keep alive
            **overrides: Any other FlockConfig field

        Returns:
            A new flock
        """
        config = FlockConfig(worldWidth=width, worldHeight=height,
                             populationSize=population_size, **overrides)
        return cls(config)

    def _spawn_boid(self) -> Boid:
        """Create a boid at a uniformly random position inside the bounds."""
        x = self.rng.uniform(0, self.bounds.width)
        y = self.rng.uniform(0, self.bounds.height)
        return Boid(x, y, self.config, rng=self.rng)

    def size(self) -> int:
        return len(self.boids)

    def __len__(self) -> int:
        return len(self.boids)

    def tick(self) -> None:
        """Advance the simulation by one unit of time."""
        snapshot = tuple(self.boids)

        # Decide
        decisions = [boid.apply_rules(snapshot, self.bounds, self.obstacles) for boid in snapshot]

        # Act
        for boid, decision in zip(snapshot, decisions):
            boid.apply_decision(decision)
            boid.move()

        # Cull/replace
        width, height = self.bounds
        survivors = [boid for boid in self.boids if boid.is_inside(width, height)]
        lost = len(self.boids) - len(survivors)
        if lost:
            survivors.extend(self._spawn_boid() for _ in range(lost))
            self.replaced_count += lost
            logger.debug("Tick %d: replaced %d boids that left the bounds", self.tick_count, lost)
        self.boids = survivors

        self.tick_count += 1

    def agents(self) -> List[AgentSnapshot]:
        """Snapshot of every agent's position, heading and size."""
        return [
            AgentSnapshot(boid.position.to_tuple(), boid.heading, boid.size)
            for boid in self.boids
        ]

    def diagnostics(self) -> List[Optional[RuleImpulses]]:
        """
        Raw rule impulses from each agent's last decision.

        Entries follow the order of agents(); a boid that has not decided yet
        (freshly spawned) reports None. For debug overlays only.
        """
        return [boid.last_impulses for boid in self.boids]

    def centroid(self) -> Vector2:
        total = Vector2()
        for boid in self.boids:
            total = total + boid.position
        return total.scale(1 / len(self.boids))

    def cohesion(self) -> float:
        """Mean distance of the boids to their centroid."""
        center = self.centroid()
        return sum(boid.position.distance_to(center) for boid in self.boids) / len(self.boids)

    def polarization(self) -> float:
        """Length of the mean unit heading: 1 when all boids fly in parallel."""
        total = Vector2()
        for boid in self.boids:
            total = total + boid.velocity.normalize()
        return total.scale(1 / len(self.boids)).length()

    def average_speed(self) -> float:
        return sum(boid.speed for boid in self.boids) / len(self.boids)
