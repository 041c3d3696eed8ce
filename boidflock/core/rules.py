"""
Steering rules that turn a boid's local perception into impulses.

Every rule reads the boid and the full flock snapshot, filters what the boid
can see, and returns an impulse (a desired velocity change) capped at the
boid's max_impulse. Rules never mutate their inputs, so all four can be
evaluated against the same state and combined afterwards.
"""

from typing import Iterable, List, NamedTuple, Sequence, Tuple

from .vector import Vector2, ZERO


class RuleImpulses(NamedTuple):
    """Raw impulses of the four rules, in composition order."""
    separation: Vector2
    alignment: Vector2
    cohesion: Vector2
    avoidance: Vector2


NO_IMPULSES = RuleImpulses(ZERO, ZERO, ZERO, ZERO)


def visible_neighbors(boid, boids: Iterable) -> List:
    """
    Get every other boid that this boid can currently see.

    Args:
        boid: The observing boid
        boids: Full flock snapshot (may include the observer)

    Returns:
        List of visible neighbors
    """
    return [other for other in boids if other is not boid and boid.can_see(other.position)]


def steer_towards(boid, direction: Vector2) -> Vector2:
    """
    Velocity change that turns the boid onto direction at its current speed.

    A zero direction carries no preference and gives no impulse.
    """
    if direction.length() == 0:
        return ZERO
    desired = direction.normalize().scale(boid.speed)
    return (desired - boid.velocity).limit(boid.max_impulse)


def point_impulse(boid, target: Vector2) -> Vector2:
    """
    Impulse that draws the boid smoothly towards a single target point.

    Inside half the vision radius the boid is considered close enough. Within
    the near field the pull falls off with distance so the boid approaches
    without overshooting; beyond it the pull is a full-speed unit step.

    Args:
        boid: The steering boid
        target: Point to approach

    Returns:
        Impulse capped at max_impulse
    """
    offset = target - boid.position
    distance = offset.length()
    comfort = boid.vision_radius / 2
    if distance <= comfort:
        return ZERO

    direction = offset.normalize()
    if distance < boid.near_field_coefficient * boid.vision_radius:
        impulse = direction.scale(boid.speed * comfort / distance)
    else:
        impulse = direction.scale(boid.speed)
    return impulse.limit(boid.max_impulse)


def separation(boid, boids: Iterable) -> Vector2:
    """
    Calculate separation steering to avoid crowding neighbors.

    Args:
        boid: The steering boid
        boids: Full flock snapshot

    Returns:
        Separation impulse
    """
    push = ZERO
    total = 0

    for other in visible_neighbors(boid, boids):
        desired_gap = boid.size + other.size + boid.separation_coefficient
        away = boid.position - other.position
        if away.length() < desired_gap:
            push = push + away.normalize().scale(desired_gap)
            total += 1

    if total == 0:
        return ZERO
    return steer_towards(boid, push.scale(1 / total))


def alignment(boid, boids: Iterable) -> Vector2:
    """
    Calculate alignment steering toward the average visible heading.

    Args:
        boid: The steering boid
        boids: Full flock snapshot

    Returns:
        Alignment impulse
    """
    neighbors = visible_neighbors(boid, boids)
    if not neighbors:
        return ZERO

    heading_sum = ZERO
    for other in neighbors:
        heading_sum = heading_sum + other.velocity
    return steer_towards(boid, heading_sum.scale(1 / len(neighbors)))


def cohesion(boid, boids: Iterable) -> Vector2:
    """
    Calculate cohesion steering toward the visible center of mass.

    Args:
        boid: The steering boid
        boids: Full flock snapshot

    Returns:
        Cohesion impulse
    """
    neighbors = visible_neighbors(boid, boids)
    if not neighbors:
        return ZERO

    center = ZERO
    for other in neighbors:
        center = center + other.position
    return point_impulse(boid, center.scale(1 / len(neighbors)))


def boundary_hazards(position: Vector2, width: float, height: float) -> List[Tuple[Vector2, Vector2]]:
    """
    Closest point on each edge of the world, paired with the inward normal.

    Args:
        position: Position of the observing boid
        width: World width
        height: World height

    Returns:
        List of (hazard point, unit normal pointing into the world)
    """
    return [
        (Vector2(0.0, position.y), Vector2(1.0, 0.0)),
        (Vector2(width, position.y), Vector2(-1.0, 0.0)),
        (Vector2(position.x, 0.0), Vector2(0.0, 1.0)),
        (Vector2(position.x, height), Vector2(0.0, -1.0)),
    ]


def avoidance(boid, bounds: Tuple[float, float], obstacles: Sequence[Vector2] = ()) -> Vector2:
    """
    Calculate steering away from visible world edges and obstacle points.

    Each visible hazard proposes a safety point beyond the boid's reach on
    the far side from the hazard; the boid steers toward the average of those
    points.

    Args:
        boid: The steering boid
        bounds: World (width, height)
        obstacles: Obstacle points to keep clear of

    Returns:
        Avoidance impulse, zero when no hazard is visible
    """
    width, height = bounds
    hazards = boundary_hazards(boid.position, width, height)
    hazards.extend((obstacle, (boid.position - obstacle).normalize()) for obstacle in obstacles)

    reach = boid.vision_radius * boid.danger_coefficient
    safety_sum = ZERO
    total = 0
    for point, normal in hazards:
        if boid.can_see(point):
            safety_sum = safety_sum + point + normal.scale(reach)
            total += 1

    if total == 0:
        return ZERO
    return point_impulse(boid, safety_sum.scale(1 / total))
