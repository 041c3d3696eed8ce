"""
Pygame drawing helpers for flock snapshots and debug overlays.
"""

import math
from typing import Optional, Sequence

import pygame

from ..core.flock import AgentSnapshot, Flock
from ..core.rules import RuleImpulses
from ..core.vector import Vector2
from ..core.vision import can_see


# Debug arrow colors per rule
IMPULSE_COLORS = {
    "separation": (255, 165, 0),
    "alignment": (0, 170, 0),
    "cohesion": (230, 200, 0),
    "avoidance": (220, 40, 40),
}
HEADING_COLOR = (40, 60, 220)


def agent_outline(agent: AgentSnapshot) -> list:
    """
    Corner points of the notched triangle used to draw an agent.

    Args:
        agent: Agent snapshot

    Returns:
        List of (x, y) points in world coordinates
    """
    size = agent.size
    local = [
        (size / 2, 0),
        (-size / 3, -size / 3),
        (-size / 8, 0),
        (-size / 3, size / 3),
    ]
    cos_h = math.cos(agent.heading)
    sin_h = math.sin(agent.heading)
    x, y = agent.position
    return [(x + px * cos_h - py * sin_h, y + px * sin_h + py * cos_h) for px, py in local]


def draw_agent(surface, agent: AgentSnapshot, color) -> None:
    points = agent_outline(agent)
    pygame.draw.polygon(surface, color, points)
    pygame.draw.polygon(surface, (0, 0, 0), points, 1)


def draw_vision(surface, agents: Sequence[AgentSnapshot], index: int,
                vision_radius: float, vision_angle: float, color) -> None:
    """
    Draw the field of view of one agent and lines to the neighbors it sees.

    Args:
        surface: Pygame surface to draw on
        agents: Agent snapshots from Flock.agents()
        index: Index of the agent to inspect
        vision_radius: Perception distance
        vision_angle: Half-angle of the rear blind cone
        color: Fill color of the vision area
    """
    agent = agents[index]
    cx, cy = agent.position
    fov = math.pi - vision_angle

    steps = 24
    points = [(cx, cy)]
    for i in range(steps + 1):
        angle = agent.heading - fov + (2 * fov) * i / steps
        points.append((cx + vision_radius * math.cos(angle),
                       cy + vision_radius * math.sin(angle)))
    pygame.draw.polygon(surface, color, points)

    origin = Vector2(cx, cy)
    for other_index, other in enumerate(agents):
        if other_index != index and can_see(origin, agent.heading, vision_radius,
                                            vision_angle, Vector2(*other.position)):
            pygame.draw.line(surface, HEADING_COLOR, (cx, cy), other.position, 1)


def draw_impulses(surface, agent: AgentSnapshot, impulses: Optional[RuleImpulses],
                  scale: float = 1.0) -> None:
    """
    Draw one arrow per rule impulse and one for the final heading.

    Args:
        surface: Pygame surface to draw on
        agent: Agent snapshot
        impulses: Impulses from the agent's last decision (skipped if None)
        scale: Arrow length per unit of impulse, in agent sizes
    """
    x, y = agent.position
    length = agent.size * scale
    if impulses is not None:
        for name, impulse in impulses._asdict().items():
            if impulse.length() == 0:
                continue
            end = (x + impulse.x * length, y + impulse.y * length)
            pygame.draw.line(surface, IMPULSE_COLORS[name], (x, y), end, 2)

    end = (x + math.cos(agent.heading) * agent.size, y + math.sin(agent.heading) * agent.size)
    pygame.draw.line(surface, HEADING_COLOR, (x, y), end, 2)


def draw_obstacles(surface, obstacles: Sequence, color, radius: int = 6) -> None:
    for obstacle in obstacles:
        x, y = obstacle
        pygame.draw.circle(surface, color, (int(x), int(y)), radius)


def draw_flock(surface, flock: Flock, config, mode: int = 0) -> None:
    """
    Render the whole flock.

    Args:
        surface: Pygame surface to draw on
        flock: The flock being shown
        config: FlockConfig or config dictionary with colors, vision and obstacles
        mode: 0=agents only, 1=vision of the first boid, 2=rule impulses
    """
    get = config.get if isinstance(config, dict) else lambda key: getattr(config, key)
    surface.fill(get("backgroundColor"))

    agents = flock.agents()
    if mode == 1 and agents:
        draw_vision(surface, agents, 0, get("visionRadius"), get("visionAngle"), get("visionColor"))

    draw_obstacles(surface, get("obstacles"), get("obstacleColor"))

    for agent in agents:
        draw_agent(surface, agent, get("boidColor"))

    if mode >= 2:
        for agent, impulses in zip(agents, flock.diagnostics()):
            draw_impulses(surface, agent, impulses)
