import dataclasses
import random

import pytest

from flopping_bird.config import GameConfig, Variant
from flopping_bird.data_models import EffectKind, HazardKind, PowerUpKind, RunStatus
from flopping_bird.obstacles import gap_bounds, make_pair
from flopping_bird.physics_engine import GameEngine
from flopping_bird.pickups import make_collectible, make_hazard
from flopping_bird.score_store import BestScoreStore


def make_engine(variant=Variant.MINIMAL, seed=1, store=None, **overrides):
    config = GameConfig.for_variant(variant).with_overrides(**overrides)
    return GameEngine(config, seed=seed, store=store)


def start(engine):
    engine.run.status = RunStatus.ACTIVE
    return engine


@pytest.fixture
def floating():
    """An active minimal engine whose avatar hovers at mid-screen."""
    return start(make_engine(gravity=0.0))


@pytest.fixture
def store():
    store = BestScoreStore(":memory:")
    yield store
    store.close()


# ---------- Run state transitions ----------

def test_idle_until_first_impulse():
    engine = make_engine()
    for _ in range(10):
        snap = engine.tick()
    assert snap.status == "not_started"
    assert engine.avatar.y == engine.config.height / 2
    assert engine.avatar.velocity == 0.0


def test_first_impulse_starts_run_and_flaps():
    engine = make_engine()
    engine.trigger_impulse()
    snap = engine.tick()
    assert snap.status == "active"
    assert engine.avatar.velocity == pytest.approx(engine.config.flap_strength + engine.config.gravity)


def test_impulses_between_ticks_collapse_into_one():
    engine = make_engine()
    engine.trigger_impulse()
    engine.trigger_impulse()
    engine.tick()
    assert engine.pending_impulse is False
    v = engine.avatar.velocity
    engine.tick()
    assert engine.avatar.velocity == pytest.approx(v + engine.config.gravity)


def test_ended_run_waits_for_impulse_then_resets():
    engine = start(make_engine())
    engine.avatar.y = engine.config.floor_y - engine.avatar.radius - 1
    engine.avatar.velocity = 5.0
    assert engine.tick().status == "ended"
    assert engine.run.end_cause == "floor"

    for _ in range(5):
        assert engine.tick().status == "ended"

    engine.trigger_impulse()
    snap = engine.tick()
    assert snap.status == "not_started"
    assert snap.score == 0
    assert snap.frame == 0


def test_reset_is_idempotent_regardless_of_history():
    fresh = make_engine(Variant.ADVANCED, seed=1)
    played = make_engine(Variant.ADVANCED, seed=2)
    start(played)
    played.run.score = 17
    played.run.base_speed = 9.0
    played.avatar.effects.activate(EffectKind.TINY, 50)
    for _ in range(300):
        played.tick()
    played.reset()

    for engine in (fresh, played):
        run, avatar, cfg = engine.run, engine.avatar, engine.config
        assert run.status is RunStatus.NOT_STARTED
        assert run.score == 0
        assert run.speed == run.base_speed == cfg.base_speed
        assert run.frame == 0
        assert run.pairs == run.collectibles == run.hazards == run.particles == run.texts == []
        assert (avatar.y, avatar.velocity, avatar.rotation) == (cfg.height / 2, 0.0, 0.0)
        assert avatar.radius == cfg.avatar_radius
        assert all(left == 0 for left in avatar.effects.timers.values())


# ---------- Physics and spawning ----------

def test_free_fall_matches_kinematic_sum():
    engine = start(make_engine(height=100_000))
    y0, g, n = engine.avatar.y, engine.config.gravity, 60
    for _ in range(n):
        engine.tick()
    assert engine.avatar.velocity == pytest.approx(n * g)
    assert engine.avatar.y == pytest.approx(y0 + g * n * (n + 1) / 2)


def test_pairs_spawn_on_cadence(floating):
    for _ in range(119):
        floating.tick()
    assert floating.run.pairs == []
    floating.tick()
    assert len(floating.run.pairs) == 1
    assert floating.run.pairs[0].x == pytest.approx(floating.config.width - floating.config.base_speed)


def test_pairs_scroll_and_despawn(floating):
    pair = make_pair(floating.config, x=-58.0, top_height=250)
    pair.passed = True
    floating.run.pairs.append(pair)
    floating.tick()
    assert floating.run.pairs == []


# ---------- Collisions ----------

def test_avatar_in_gap_survives(floating):
    floating.run.pairs.append(make_pair(floating.config, x=30, top_height=250))
    floating.tick()
    assert floating.run.status is RunStatus.ACTIVE


def test_gap_edges_touching_avatar_survive(floating):
    floating.avatar.y = 50 + floating.avatar.radius
    floating.run.pairs.append(make_pair(floating.config, x=30, top_height=50))
    floating.tick()
    assert floating.run.status is RunStatus.ACTIVE


def test_pipe_hit_ends_run_and_records_best(store):
    store.save(2)
    engine = start(make_engine(gravity=0.0, store=store))
    assert engine.best_score == 2
    engine.run.score = 3
    engine.run.pairs.append(make_pair(engine.config, x=30, top_height=400))
    snap = engine.tick()
    assert snap.status == "ended"
    assert engine.run.end_cause == "pipe"
    assert snap.best_score == 3
    assert store.load() == 3


def test_lower_score_keeps_previous_best(store):
    store.save(10)
    engine = start(make_engine(gravity=0.0, store=store))
    engine.run.score = 3
    engine.run.pairs.append(make_pair(engine.config, x=30, top_height=400))
    engine.tick()
    assert engine.run.status is RunStatus.ENDED
    assert engine.best_score == 10
    assert store.load() == 10


def test_only_first_terminal_event_counts(floating):
    cfg = floating.config
    floating.run.pairs.append(make_pair(cfg, x=30, top_height=400))
    rocket = make_hazard(HazardKind.ROCKET, floating.avatar.x + 2, floating.avatar.y, 2.0, cfg)
    floating.run.hazards.append(rocket)
    floating.tick()
    assert floating.run.end_cause == "pipe"
    assert floating.run.hazards == [rocket]


def test_hazard_hit_ends_run(floating):
    cfg = floating.config
    floating.run.hazards.append(
        make_hazard(HazardKind.ROCKET, floating.avatar.x + 2, floating.avatar.y, 2.0, cfg))
    floating.tick()
    assert floating.run.status is RunStatus.ENDED
    assert floating.run.end_cause == "rocket"


# ---------- Power-ups ----------

def put_power_up(engine, kind):
    pair = make_pair(engine.config, x=0, top_height=250)
    item = make_collectible(pair, kind, engine.config)
    item.x = engine.avatar.x + engine.run.speed
    item.y = item.base_y = engine.avatar.y
    item.pair = None
    engine.run.collectibles.append(item)


def test_shield_turns_hits_into_bounces(floating):
    cfg = floating.config
    put_power_up(floating, PowerUpKind.SHIELD)
    floating.tick()
    assert floating.run.collectibles == []
    assert floating.avatar.effects.remaining(EffectKind.INVINCIBLE) == cfg.shield_duration

    pair = make_pair(cfg, x=30, top_height=400)
    floating.run.pairs.append(pair)
    floating.tick()
    assert floating.run.status is RunStatus.ACTIVE
    assert pair.neutralized

    floating.avatar.y = cfg.floor_y - floating.avatar.radius - 1
    floating.avatar.velocity = 5.0
    floating.tick()
    assert floating.run.status is RunStatus.ACTIVE
    assert floating.avatar.velocity == cfg.floor_bounce_velocity


def test_shielded_avatar_destroys_hazards_for_bonus(floating):
    cfg = floating.config
    floating.avatar.effects.activate(EffectKind.INVINCIBLE, 100)
    floating.run.hazards.append(
        make_hazard(HazardKind.GHOST, floating.avatar.x + 2, floating.avatar.y, 2.0, cfg))
    floating.tick()
    assert floating.run.status is RunStatus.ACTIVE
    assert floating.run.hazards == []
    assert floating.run.score == cfg.hazard_bonus


def test_shield_wears_off(floating):
    floating.avatar.effects.activate(EffectKind.INVINCIBLE, 3)
    for _ in range(3):
        floating.tick()
    assert not floating.avatar.invincible
    floating.run.pairs.append(make_pair(floating.config, x=30, top_height=400))
    floating.tick()
    assert floating.run.status is RunStatus.ENDED


def test_slow_time_overrides_speed_then_resumes(floating):
    cfg = floating.config
    put_power_up(floating, PowerUpKind.SLOW_TIME)
    floating.tick()
    assert floating.run.speed == cfg.slow_speed

    # Milestones reached while slowed still count once the effect ends
    floating.run.score = cfg.speed_ramp_every
    floating.tick()
    assert floating.run.speed == cfg.slow_speed
    assert floating.run.base_speed == pytest.approx(cfg.base_speed + cfg.speed_increment)

    for _ in range(cfg.slow_duration):
        floating.tick()
    assert floating.run.speed == pytest.approx(cfg.base_speed + cfg.speed_increment)


def test_shrink_halves_radius(floating):
    put_power_up(floating, PowerUpKind.SHRINK)
    floating.tick()
    assert floating.avatar.radius == floating.avatar.base_radius / 2
    assert floating.snapshot().avatar["effects"] == ["tiny"]


# ---------- Scoring ----------

def test_passing_a_pair_scores_once(floating):
    pair = make_pair(floating.config, x=-15, top_height=250)
    floating.run.pairs.append(pair)
    floating.tick()
    assert floating.run.score == 1
    assert pair.passed
    floating.tick()
    assert floating.run.score == 1


def test_speed_ramps_once_per_milestone(floating):
    cfg = floating.config
    floating.run.score = 4
    floating.run.pairs.append(make_pair(cfg, x=-15, top_height=250))
    floating.tick()
    assert floating.run.score == 5
    assert floating.run.speed == pytest.approx(cfg.base_speed + cfg.speed_increment)
    for _ in range(10):
        floating.tick()
    assert floating.run.speed == pytest.approx(cfg.base_speed + cfg.speed_increment)


def test_bonus_jumping_over_milestone_ramps_once(floating):
    cfg = floating.config
    floating.run.score = 4
    floating.avatar.effects.activate(EffectKind.INVINCIBLE, 100)
    floating.run.hazards.append(
        make_hazard(HazardKind.ROCKET, floating.avatar.x + 2, floating.avatar.y, 2.0, cfg))
    floating.tick()
    assert floating.run.score == 4 + cfg.hazard_bonus
    assert floating.run.base_speed == pytest.approx(cfg.base_speed + cfg.speed_increment)
    assert floating.run.next_ramp_score == 2 * cfg.speed_ramp_every


# ---------- Snapshot ----------

def test_snapshot_is_detached_from_engine(floating):
    floating.run.pairs.append(make_pair(floating.config, x=200, top_height=250))
    snap = floating.tick()
    snap.pipes[0]["x"] = -999
    snap.avatar["y"] = -999
    assert floating.run.pairs[0].x != -999
    assert floating.avatar.y != -999
    with pytest.raises(dataclasses.FrozenInstanceError):
        snap.score = 100


def test_advanced_snapshot_exposes_terrain():
    snap = make_engine(Variant.ADVANCED).snapshot()
    assert snap.terrain
    assert snap.status == "not_started"


# ---------- Long seeded runs ----------

@pytest.mark.parametrize("variant", list(Variant))
def test_invariants_hold_over_many_runs(variant):
    engine = make_engine(variant, seed=42)
    cfg = engine.config
    low, high = gap_bounds(cfg)
    pilot = random.Random(9)
    last_score = 0
    runs = 0

    for _ in range(6000):
        a = engine.avatar
        if engine.run.status is not RunStatus.ACTIVE or (a.y > cfg.height / 2 and pilot.random() < 0.3):
            engine.trigger_impulse()
        was_active = engine.run.status is RunStatus.ACTIVE
        snap = engine.tick()

        if was_active and snap.status != "not_started":
            assert snap.score >= last_score
        if snap.status == "ended" and was_active:
            runs += 1
        last_score = snap.score

        assert snap.avatar["radius"] > 0
        for pipe in snap.pipes:
            assert low - 1e-6 <= pipe["top_height"] <= high + 1e-6
            assert pipe["gap"] == cfg.pipe_gap
        for point in snap.terrain:
            assert cfg.terrain_min_height <= point["height"] <= cfg.terrain_max_height

    assert runs > 0


# ---------- Random rolls ----------

def test_spawned_pair_carries_power_up():
    engine = start(make_engine(gravity=0.0, powerups_enabled=True, powerup_chance=1.0))
    for _ in range(120):
        engine.tick()
    pair, = engine.run.pairs
    item, = engine.run.collectibles
    assert item.kind in PowerUpKind
    assert item.pair is pair
    assert item.x == pytest.approx(pair.x + pair.width / 2)


def test_power_up_follows_moving_gap():
    engine = start(make_engine(gravity=0.0, powerups_enabled=True, powerup_chance=1.0,
                               moving_pipe_chance=1.0))
    for _ in range(120):
        engine.tick()
    pair, = engine.run.pairs
    item, = engine.run.collectibles
    assert pair.moving
    for _ in range(100):
        engine.tick()
        assert pair.top_height + item.radius <= item.y <= pair.gap_bottom - item.radius
    assert engine.run.status is RunStatus.ACTIVE


def test_passing_a_pair_can_release_a_hazard():
    engine = start(make_engine(gravity=0.0, hazards_enabled=True, hazard_chance=1.0))
    cfg = engine.config
    engine.run.pairs.append(make_pair(cfg, x=-15, top_height=250))
    engine.tick()
    hazard, = engine.run.hazards
    assert hazard.kind in HazardKind
    assert hazard.x == cfg.width + cfg.hazard_size
    assert cfg.hazard_margin <= hazard.base_y <= cfg.height - cfg.ground_allowance - cfg.hazard_margin
    assert cfg.base_speed <= hazard.speed <= cfg.base_speed + cfg.hazard_extra_speed


def test_glitch_flap_launches_harder():
    engine = make_engine(Variant.CHAOS, glitch_chance=1.0)
    cfg = engine.config
    engine.trigger_impulse()
    snap = engine.tick()
    assert engine.avatar.velocity == pytest.approx(cfg.flap_strength * cfg.glitch_multiplier + cfg.gravity)
    assert "ZOOM!" in [t["text"] for t in snap.texts]


def test_area_clear_pickup_neutralizes_visible_pairs(floating):
    cfg = floating.config
    near = make_pair(cfg, x=150, top_height=250)
    mid = make_pair(cfg, x=250, top_height=250)
    ahead = make_pair(cfg, x=400, top_height=250)
    floating.run.pairs.extend([near, mid, ahead])
    put_power_up(floating, PowerUpKind.AREA_CLEAR)
    floating.tick()
    assert floating.run.collectibles == []
    assert near.neutralized and mid.neutralized
    assert not ahead.neutralized
    assert (near.top_height, mid.top_height) == (250, 250)
