import math

import pytest

from boidflock.core import rules
from boidflock.core.vector import Vector2, ZERO


BOUNDS = (1000, 1000)


def approx_vec(v, x, y):
    return v.x == pytest.approx(x, abs=1e-9) and v.y == pytest.approx(y, abs=1e-9)


def test_visible_neighbors_excludes_self_and_hidden(make_boid):
    boid = make_boid(500, 500, 1, 0)
    ahead = make_boid(510, 500, 1, 0)
    behind = make_boid(490, 500, 1, 0)
    far = make_boid(600, 500, 1, 0)
    assert rules.visible_neighbors(boid, [boid, ahead, behind, far]) == [ahead]


def test_separation_pushes_away_from_close_neighbor(make_boid):
    boid = make_boid(500, 500, 1, 0)
    other = make_boid(505, 500, -1, 0)
    # Desired velocity is straight back at the current speed of 1.
    assert approx_vec(rules.separation(boid, [boid, other]), -2, 0)


def test_separation_ignores_neighbors_beyond_gap(make_boid):
    boid = make_boid(500, 500, 1, 0)
    other = make_boid(516, 500, 1, 0)  # gap is 5 + 5 + 5 = 15
    assert rules.separation(boid, [boid, other]) == ZERO


def test_separation_ignores_neighbor_in_blind_cone(make_boid):
    boid = make_boid(500, 500, 1, 0)
    other = make_boid(495, 500, 1, 0)
    assert rules.separation(boid, [boid, other]) == ZERO


def test_separation_symmetric_crowd_gives_no_impulse(make_boid):
    boid = make_boid(500, 500, 0, 1)
    left = make_boid(494, 500, 0, 1)
    right = make_boid(506, 500, 0, 1)
    assert rules.separation(boid, [boid, left, right]) == ZERO


def test_separation_is_capped(make_boid):
    boid = make_boid(500, 500, 5, 0, maxImpulse=5.0)
    other = make_boid(505, 500, -5, 0, maxImpulse=5.0)
    impulse = rules.separation(boid, [boid, other])
    assert impulse.length() == pytest.approx(5.0)
    assert impulse.x < 0


def test_alignment_turns_toward_average_heading(make_boid):
    boid = make_boid(500, 500, 1, 0)
    other = make_boid(510, 500, 0, 2)
    # Desired is (0, 1): neighbor's direction at this boid's own speed.
    assert approx_vec(rules.alignment(boid, [boid, other]), -1, 1)


def test_alignment_without_neighbors_is_zero(make_boid):
    boid = make_boid(500, 500, 1, 0)
    assert rules.alignment(boid, [boid]) == ZERO


def test_alignment_with_cancelling_headings_is_zero(make_boid):
    boid = make_boid(500, 500, 1, 0)
    up = make_boid(510, 495, 0, 1)
    down = make_boid(510, 505, 0, -1)
    assert rules.alignment(boid, [boid, up, down]) == ZERO


def test_cohesion_inside_comfort_zone_is_zero(make_boid):
    boid = make_boid(500, 500, 1, 0)
    other = make_boid(509, 500, 1, 0)  # half the vision radius is 10
    assert rules.cohesion(boid, [boid, other]) == ZERO


def test_cohesion_far_field_is_full_speed_step(make_boid):
    boid = make_boid(500, 500, 2, 0)
    other = make_boid(518, 500, 2, 0)  # beyond near field of 15
    assert approx_vec(rules.cohesion(boid, [boid, other]), 2, 0)


def test_point_impulse_near_field_falls_off_with_distance(make_boid):
    boid = make_boid(500, 500, 2, 0)
    close = rules.point_impulse(boid, Vector2(512, 500))
    farther = rules.point_impulse(boid, Vector2(514, 500))
    assert close.x == pytest.approx(2 * 10 / 12)
    assert farther.x == pytest.approx(2 * 10 / 14)
    assert close.length() <= boid.speed


def test_point_impulse_respects_max_impulse(make_boid):
    boid = make_boid(500, 500, 3, 0, maxImpulse=3.0)
    assert rules.point_impulse(boid, Vector2(0, 0)).length() <= 3.0 + 1e-9


def test_boundary_hazards_have_inward_normals():
    hazards = rules.boundary_hazards(Vector2(30, 40), 400, 300)
    points = [p.to_tuple() for p, _ in hazards]
    normals = [n.to_tuple() for _, n in hazards]
    assert points == [(0.0, 40), (400, 40), (30, 0.0), (30, 300)]
    assert normals == [(1.0, 0.0), (-1.0, 0.0), (0.0, 1.0), (0.0, -1.0)]


def test_avoidance_turns_back_from_visible_wall(make_boid):
    boid = make_boid(10, 150, -2, 0)
    # Safety point is (0 + 20 * 1.5, 150): 20 away, beyond the near field.
    assert approx_vec(rules.avoidance(boid, (400, 300)), 2, 0)


def test_avoidance_ignores_wall_behind(make_boid):
    boid = make_boid(10, 150, 2, 0)
    assert rules.avoidance(boid, (400, 300)) == ZERO


def test_avoidance_in_open_space_is_zero(make_boid):
    boid = make_boid(200, 150, 2, 0)
    assert rules.avoidance(boid, (400, 300)) == ZERO


def test_avoidance_steers_away_from_obstacle(make_boid):
    boid = make_boid(200, 150, 2, 0)
    impulse = rules.avoidance(boid, (400, 300), [Vector2(210, 150)])
    assert approx_vec(impulse, -2, 0)


def test_avoidance_in_corner_points_inward(make_boid):
    boid = make_boid(8, 8, -1, -1)
    impulse = rules.avoidance(boid, (400, 300))
    assert impulse.x > 0 and impulse.y > 0
    assert math.atan2(impulse.y, impulse.x) == pytest.approx(math.pi / 4)


def test_rules_do_not_mutate_boids(make_boid):
    boid = make_boid(500, 500, 1, 0)
    other = make_boid(505, 500, -1, 0)
    before = [(b.position, b.velocity) for b in (boid, other)]
    for rule in (rules.separation, rules.alignment, rules.cohesion):
        rule(boid, [boid, other])
    rules.avoidance(boid, BOUNDS, [Vector2(505, 505)])
    assert [(b.position, b.velocity) for b in (boid, other)] == before
