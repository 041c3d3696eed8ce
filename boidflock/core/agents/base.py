"""
Base Agent class for all simulation entities.
"""

from ..vector import Vector2


class Agent:
    """
    Base class for all agents in the simulation.

    Holds position, velocity and the physical constants shared by every
    agent. Position changes only through move().
    """

    def __init__(self, x: float, y: float, velocity: Vector2, size: float, max_impulse: float):
        """
        Initialize an agent.

        Args:
            x: Initial x position
            y: Initial y position
            velocity: Initial velocity (clamped to max_impulse)
            size: Body size of the agent
            max_impulse: Maximum speed the agent may reach
        """
        self.position = Vector2(x, y)
        self.velocity = velocity.limit(max_impulse)
        self.size = size
        self.max_impulse = max_impulse

    @property
    def speed(self) -> float:
        return self.velocity.length()

    @property
    def heading(self) -> float:
        """Direction of travel in radians, derived from the velocity."""
        return self.velocity.heading()

    def move(self) -> None:
        """Advance one unit timestep along the current velocity."""
        self.position = self.position + self.velocity

    def is_inside(self, width: float, height: float) -> bool:
        return 0 <= self.position.x <= width and 0 <= self.position.y <= height

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(position=({self.position.x:.2f}, {self.position.y:.2f}), "
                f"velocity=({self.velocity.x:.2f}, {self.velocity.y:.2f}))")
