"""
Field-of-view model shared by neighbor detection and obstacle avoidance.
"""

import math

from .vector import Vector2


def angular_difference(bearing: float, heading: float) -> float:
    """
    Signed minimal difference between two angles, in [-pi, pi].

    Uses atan2 of the sine and cosine instead of plain subtraction so that
    angles on either side of the +/-pi seam compare correctly.
    """
    delta = bearing - heading
    return math.atan2(math.sin(delta), math.cos(delta))


def can_see(position: Vector2, heading: float, vision_radius: float,
            vision_angle: float, target: Vector2) -> bool:
    """
    Decide whether target is perceivable from position.

    A point is visible when it lies within vision_radius and outside the rear
    blind cone, whose half-angle is vision_angle.

    Args:
        position: Observer position
        heading: Observer heading in radians
        vision_radius: Maximum perception distance
        vision_angle: Half-angle of the blind cone behind the observer
        target: Point to test

    Returns:
        True if the target can be seen
    """
    offset = target - position
    distance = offset.length()
    if distance == 0:
        return True
    if distance > vision_radius:
        return False

    bearing = math.atan2(offset.y, offset.x)
    return abs(angular_difference(bearing, heading)) <= math.pi - vision_angle
