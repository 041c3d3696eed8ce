import math
import random

import numpy as np
import pytest

from boidflock.core.agents.boid import Boid
from boidflock.core.config import FlockConfig
from boidflock.core.errors import ConfigurationError
from boidflock.core.flock import AgentSnapshot, Bounds, Flock
from boidflock.core.rules import RuleImpulses
from boidflock.core.vector import Vector2


def staged_flock(placements, **overrides):
    """Flock with boids at explicit (x, y, vx, vy) placements."""
    overrides.setdefault("worldWidth", 1000)
    overrides.setdefault("worldHeight", 1000)
    overrides.setdefault("agentSize", 5.0)
    config = FlockConfig(**overrides)
    boids = [Boid(x, y, config, velocity=Vector2(vx, vy)) for x, y, vx, vy in placements]
    return Flock(config, boids=boids)


def pairwise_distances(flock):
    positions = np.array([agent.position for agent in flock.agents()])
    diffs = positions[:, None, :] - positions[None, :, :]
    distances = np.linalg.norm(diffs, axis=2)
    return distances[np.triu_indices(len(positions), k=1)]


def test_new_spawns_population_inside_bounds():
    flock = Flock.new(400, 300, 7, seed=1)
    assert len(flock) == flock.size() == 7
    assert flock.bounds == Bounds(400, 300)
    for boid in flock.boids:
        assert 0 <= boid.position.x <= 400
        assert 0 <= boid.position.y <= 300
        assert 0.5 <= boid.speed <= 1.5


def test_default_population_is_five():
    assert len(Flock()) == 5


def test_same_seed_gives_same_flock():
    a = Flock(FlockConfig(populationSize=10, seed=123))
    b = Flock(FlockConfig(populationSize=10, seed=123))
    for _ in range(20):
        a.tick()
        b.tick()
    assert a.agents() == b.agents()


@pytest.mark.parametrize("overrides", [
    {"populationSize": 0},
    {"agentSize": -1.0},
    {"visionRadius": 0.0},
    {"visionAngle": math.pi},
    {"maxImpulse": 0.0},
    {"cohesionWeight": -0.5},
    {"worldWidth": 0},
    {"maxImpulse": math.nan},
    {"agentSize": math.nan},
    {"visionRadius": math.inf},
    {"alignmentWeight": math.nan},
    {"worldHeight": math.inf},
    {"populationSize": 2.5},
    {"populationSize": True},
])
def test_invalid_configuration_is_rejected(overrides):
    with pytest.raises(ConfigurationError):
        Flock(FlockConfig(**overrides))


def test_empty_explicit_population_is_rejected():
    with pytest.raises(ConfigurationError):
        Flock(FlockConfig(), boids=[])


@pytest.mark.parametrize("size", [-1.0, -0.5, math.nan])
def test_explicit_boid_with_bad_size_is_rejected(size):
    config = FlockConfig(agentSize=5.0)
    boids = [Boid(10, 10, config, velocity=Vector2(1, 0)),
             Boid(20, 20, config, velocity=Vector2(1, 0), size=size)]
    with pytest.raises(ConfigurationError):
        Flock(config, boids=boids)


def test_explicit_boid_with_nan_position_is_rejected():
    config = FlockConfig(agentSize=5.0)
    with pytest.raises(ConfigurationError):
        Flock(config, boids=[Boid(math.nan, 10, config, velocity=Vector2(1, 0))])


def test_later_config_changes_do_not_reach_flock():
    config = FlockConfig(populationSize=3, worldWidth=650, worldHeight=650, seed=3,
                         obstacles=[(100, 100)])
    flock = Flock(config)
    config.agentSize = 100.0
    config.maxImpulse = 50.0
    config.obstacles.append((200, 200))

    flock.boids[0].position = Vector2(-50.0, -50.0)
    flock.tick()

    assert flock.replaced_count >= 1
    assert [agent.size for agent in flock.agents()] == pytest.approx([19.5, 19.5, 19.5])
    assert all(boid.max_impulse == 5.0 for boid in flock.boids)
    assert flock.config.agentSize == pytest.approx(19.5)
    assert flock.config.obstacles == [(100, 100)]
    assert flock.obstacles == (Vector2(100.0, 100.0),)


def test_agents_snapshot_reports_position_heading_size():
    flock = staged_flock([(100, 200, 0, 2)])
    (agent,) = flock.agents()
    assert isinstance(agent, AgentSnapshot)
    assert agent.position == (100, 200)
    assert agent.heading == pytest.approx(math.pi / 2)
    assert agent.size == 5.0


def test_speed_bound_and_population_conserved_every_tick():
    flock = Flock(FlockConfig(populationSize=40, worldWidth=300, worldHeight=200, seed=7))
    for _ in range(300):
        flock.tick()
        assert len(flock.agents()) == 40
        for boid in flock.boids:
            assert boid.speed <= flock.config.maxImpulse + 1e-9
    assert flock.tick_count == 300


def test_leaving_agent_is_replaced_inside_bounds():
    flock = staged_flock([(998, 500, 5, 0), (500, 500, 0, 1)], avoidanceWeight=0.0)
    flock.tick()
    assert len(flock) == 2
    assert flock.replaced_count >= 1
    for boid in flock.boids:
        assert boid.is_inside(1000, 1000)


def test_diagnostics_follow_agents():
    flock = staged_flock([(998, 500, 5, 0), (500, 500, 0, 1)], avoidanceWeight=0.0)
    flock.tick()
    diagnostics = flock.diagnostics()
    assert len(diagnostics) == len(flock.agents())
    # The survivor decided this tick, the replacement has not decided yet.
    assert isinstance(diagnostics[0], RuleImpulses)
    assert diagnostics[1] is None


def test_decisions_use_start_of_tick_state():
    placements = [(500, 500, 1, 0), (505, 500, -1, 0), (503, 508, 0, -1)]
    forward = staged_flock(placements)
    backward = staged_flock(list(reversed(placements)))
    forward.tick()
    backward.tick()
    assert forward.agents() == list(reversed(backward.agents()))


def test_lone_agent_keeps_direction():
    flock = staged_flock([(500, 500, 1.0, 0.5)])
    flock.tick()
    (boid,) = flock.boids
    assert boid.velocity == Vector2(1.0, 0.5)
    assert boid.position == Vector2(501.0, 500.5)


def test_separation_moves_close_agents_apart():
    flock = staged_flock([(500, 500, 1, 0), (505, 500, -1, 0)])
    before = pairwise_distances(flock)[0]
    flock.tick()
    assert pairwise_distances(flock)[0] > before


@pytest.mark.parametrize("velocities", [
    [(0.5, 0.0), (0.5, 0.0), (0.5, 0.0)],
    [(0.3, 0.1), (0.4, -0.1), (0.5, 0.2)],
])
def test_cohesion_tightens_small_triangle(velocities):
    points = [(500, 500), (514, 503), (506, 540)]
    flock = staged_flock(
        [(x, y, vx, vy) for (x, y), (vx, vy) in zip(points, velocities)],
        agentSize=4.0, visionRadius=60.0, visionAngle=0.1,
    )
    for boid in flock.boids:
        assert len([o for o in flock.boids if o is not boid and boid.can_see(o.position)]) == 2

    spread_before = np.std(pairwise_distances(flock))
    for _ in range(50):
        flock.tick()
    assert np.std(pairwise_distances(flock)) < spread_before


@pytest.mark.parametrize("x, y, vx, vy, size", [
    (30, 150, -3, 0, 5),
    (370, 150, 5, 0, 10),
    (200, 10, 0, -4, 19.5),
    (20, 20, -2, -2, 10),
    (15, 100, -1, -0.3, 5),
])
def test_agent_heading_into_edge_stays_inside(x, y, vx, vy, size):
    flock = staged_flock([(x, y, vx, vy)], worldWidth=400, worldHeight=300, agentSize=size)
    boid = flock.boids[0]
    for _ in range(1000):
        flock.tick()
        assert flock.boids[0] is boid
        assert boid.is_inside(400, 300)
    assert flock.replaced_count == 0


def test_random_lone_agents_never_cross_edges():
    rng = random.Random(11)
    for _ in range(50):
        size = rng.uniform(5, 20)
        heading = rng.uniform(-math.pi, math.pi)
        speed = rng.uniform(0.5, 5)
        flock = staged_flock(
            [(rng.uniform(0, 400), rng.uniform(0, 300),
              speed * math.cos(heading), speed * math.sin(heading))],
            worldWidth=400, worldHeight=300, agentSize=size,
        )
        for _ in range(300):
            flock.tick()
        assert flock.replaced_count == 0


def test_obstacles_are_read_from_config():
    flock = Flock(FlockConfig(obstacles=[(10, 20), [30.5, 40]], seed=0))
    assert flock.obstacles == (Vector2(10.0, 20.0), Vector2(30.5, 40.0))


def test_flock_metrics():
    flock = staged_flock([(0, 0, 1, 0), (10, 0, 1, 0)])
    assert flock.centroid() == Vector2(5, 0)
    assert flock.cohesion() == pytest.approx(5.0)
    assert flock.polarization() == pytest.approx(1.0)
    assert flock.average_speed() == pytest.approx(1.0)
