import pytest

from flappy_kiro.levels import (
    LevelManager, level_for_score, level_parameters, weapon_power, weapon_tier
)
from flappy_kiro.particles import ParticleSystem


@pytest.mark.parametrize("score,level", [
    (0, 1), (9, 1), (10, 2), (19, 2), (20, 3), (105, 11), (999, 100),
])
def test_level_for_score(score, level):
    assert level_for_score(score) == level


def test_level_is_non_decreasing_in_score():
    levels = [level_for_score(s) for s in range(0, 1000)]
    assert levels == sorted(levels)
    assert all(level == s // 10 + 1 for s, level in enumerate(levels))


def test_level_one_parameters():
    params = level_parameters(1)
    assert params.hostile_speed_multiplier == 1.0
    assert params.spawn_interval_multiplier == 1.0
    assert params.weapon_power.damage == 10
    assert params.weapon_power.speed == 8
    assert params.weapon_power.size == 1.0
    assert params.weapon_power.cooldown == 500


def test_parameters_scale_and_cap():
    params = level_parameters(3)
    assert params.hostile_speed_multiplier == pytest.approx(1.3)
    assert params.spawn_interval_multiplier == pytest.approx(0.84)

    high = level_parameters(30)
    assert high.spawn_interval_multiplier == 0.3
    assert high.weapon_power.damage == 68
    assert high.weapon_power.speed == 13
    assert high.weapon_power.size == pytest.approx(1.75)
    assert high.weapon_power.cooldown == 200


def test_weapon_power_has_no_level_cap_on_damage():
    assert weapon_power(1000).damage == 10 + 999 * 2


@pytest.mark.parametrize("level,tier", [
    (1, "basic"), (10, "basic"), (11, "spread"), (20, "spread"), (21, "homing"), (99, "homing"),
])
def test_weapon_tier(level, tier):
    assert weapon_tier(level) == tier


def test_recompute_levels_up_with_confetti(rng, clock):
    particles = ParticleSystem(rng=rng)
    levels = LevelManager(particles=particles, clock=clock)

    assert levels.recompute(10) is True
    assert levels.current_level == 2
    assert sum(1 for p in particles if p.kind == "confetti") == 40

    assert levels.recompute(15) is False
    assert levels.current_level == 2
    assert len(particles) == 40


def test_recompute_jumps_multiple_levels(clock):
    levels = LevelManager(clock=clock)
    assert levels.recompute(47) is True
    assert levels.current_level == 5


def test_transition_window_expires(clock):
    levels = LevelManager(clock=clock)
    assert levels.is_transition_active() is False

    levels.recompute(10)
    assert levels.is_transition_active() is True
    clock.advance(1000)
    assert levels.transition_progress() == pytest.approx(0.5)
    clock.advance(999)
    assert levels.is_transition_active() is True
    clock.advance(1)
    assert levels.is_transition_active() is False
    assert levels.transition_shown is False


def test_level_info_theme(clock):
    levels = LevelManager(clock=clock)
    levels.recompute(50)
    info = levels.level_info()
    assert info["number"] == 6
    assert info["score_threshold"] == 50
    assert info["theme"]["hue"] == 0


def test_reset(clock):
    levels = LevelManager(clock=clock)
    levels.recompute(200)
    levels.reset()
    assert levels.current_level == 1
    assert levels.is_transition_active() is False
    assert levels.tier() == "basic"
