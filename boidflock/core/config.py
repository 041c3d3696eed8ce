"""
Configuration classes and defaults for the flocking simulation.
"""

import math
import numbers
from dataclasses import dataclass, field, fields
from typing import List, Optional, Tuple

from .errors import ConfigurationError


# Rule weights (used across modules)
SEPARATION_WEIGHT = 1.0
ALIGNMENT_WEIGHT = 1.4
COHESION_WEIGHT = 1.0
AVOIDANCE_WEIGHT = 1.7

# Agent size as a fraction of the world height
AGENT_SIZE_FACTOR = 0.03

# Vision radius as a multiple of agent size
VISION_RADIUS_FACTOR = 4.0

# Settings that must be finite real numbers
NUMERIC_FIELDS = (
    "worldWidth", "worldHeight", "agentSize", "maxImpulse", "visionAngle", "visionRadius",
    "separationWeight", "alignmentWeight", "cohesionWeight", "avoidanceWeight",
    "separationCoefficient", "dangerCoefficient", "nearFieldCoefficient",
    "minInitialSpeed", "maxInitialSpeed",
)


@dataclass
class FlockConfig:
    """Configuration for the flock and the tools that drive it."""

    # World bounds
    worldWidth: float = 1200
    worldHeight: float = 650

    # Population
    populationSize: int = 5

    # Agent constants (None means derived from other settings)
    agentSize: Optional[float] = None
    maxImpulse: float = 5.0
    visionAngle: float = math.pi / 4  # Half-angle of the rear blind cone
    visionRadius: Optional[float] = None

    # Rule weights
    separationWeight: float = SEPARATION_WEIGHT
    alignmentWeight: float = ALIGNMENT_WEIGHT
    cohesionWeight: float = COHESION_WEIGHT
    avoidanceWeight: float = AVOIDANCE_WEIGHT

    # Rule tuning
    separationCoefficient: Optional[float] = None
    dangerCoefficient: float = 1.5
    nearFieldCoefficient: float = 0.75

    # Spawning
    minInitialSpeed: float = 0.5
    maxInitialSpeed: float = 1.5
    seed: Optional[int] = None

    # Obstacle points as (x, y)
    obstacles: List[Tuple[float, float]] = field(default_factory=list)

    # Visualization
    fpsTarget: int = 60
    visualizationMode: int = 0  # 0=normal, 1=vision, 2=impulses
    backgroundColor: List[int] = field(default_factory=lambda: [245, 245, 245])
    boidColor: List[int] = field(default_factory=lambda: [102, 153, 255])
    visionColor: List[int] = field(default_factory=lambda: [200, 200, 200])
    obstacleColor: List[int] = field(default_factory=lambda: [90, 90, 90])

    # Output
    snapshotOutputFile: str = "flock_snapshot.json"

    def __post_init__(self):
        if self.agentSize is None:
            self.agentSize = self.worldHeight * AGENT_SIZE_FACTOR
        if self.visionRadius is None:
            self.visionRadius = self.agentSize * VISION_RADIUS_FACTOR
        if self.separationCoefficient is None:
            self.separationCoefficient = self.agentSize

    def validate(self) -> None:
        """
        Check every constraint the core relies on.

        Raises:
            ConfigurationError: Listing every invalid setting found
        """
        problems = []

        for name in NUMERIC_FIELDS:
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real) or not math.isfinite(value):
                problems.append(f"{name} must be a finite number, got {value!r}")
        if problems:
            raise ConfigurationError("Invalid flock configuration: " + "; ".join(problems))

        if isinstance(self.populationSize, bool) or not isinstance(self.populationSize, numbers.Integral):
            problems.append(f"populationSize must be an integer, got {self.populationSize!r}")
        elif self.populationSize < 1:
            problems.append(f"populationSize must be at least 1, got {self.populationSize}")

        if self.worldWidth <= 0 or self.worldHeight <= 0:
            problems.append(f"world size must be positive, got {self.worldWidth}x{self.worldHeight}")
        if self.agentSize <= 0:
            problems.append(f"agentSize must be positive, got {self.agentSize}")
        if self.visionRadius <= 0:
            problems.append(f"visionRadius must be positive, got {self.visionRadius}")
        if not 0 < self.visionAngle < math.pi:
            problems.append(f"visionAngle must lie in (0, pi), got {self.visionAngle}")
        if self.maxImpulse <= 0:
            problems.append(f"maxImpulse must be positive, got {self.maxImpulse}")

        for name in ("separationWeight", "alignmentWeight", "cohesionWeight", "avoidanceWeight"):
            if getattr(self, name) < 0:
                problems.append(f"{name} must be non-negative, got {getattr(self, name)}")

        if self.separationCoefficient < 0:
            problems.append(f"separationCoefficient must be non-negative, got {self.separationCoefficient}")
        if self.dangerCoefficient < 1:
            problems.append(f"dangerCoefficient must be at least 1, got {self.dangerCoefficient}")
        if self.nearFieldCoefficient < 0.5:
            problems.append(f"nearFieldCoefficient must be at least 0.5, got {self.nearFieldCoefficient}")
        if not 0 < self.minInitialSpeed <= self.maxInitialSpeed:
            problems.append(
                f"initial speed range must satisfy 0 < min <= max, "
                f"got [{self.minInitialSpeed}, {self.maxInitialSpeed}]"
            )

        if problems:
            raise ConfigurationError("Invalid flock configuration: " + "; ".join(problems))

    def to_dict(self) -> dict:
        """Convert config to dictionary."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, list):
                value = [list(v) if isinstance(v, tuple) else v for v in value]
            data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "FlockConfig":
        """Create config from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


# Default configuration for interactive simulation
DEFAULT_CONFIG = FlockConfig()

# Configuration used for benchmarking (larger flock, fixed seed)
BENCHMARK_CONFIG = FlockConfig(populationSize=60, seed=42)
