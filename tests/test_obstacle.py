"""Obstacle variant selection, geometry and cycle handling."""

import random

import pytest

from dinorun.core.events import EventBus, EventType
from dinorun.game.obstacle import (
    VARIANTS,
    ObstacleManager,
    ObstacleVariant,
    aerial_probability,
)

from conftest import FixedRandom


class TestAerialProbability:
    def test_bounds_and_ramp(self):
        values = [aerial_probability(s) for s in range(0, 1001, 5)]
        assert all(0.0 <= p <= 0.7 for p in values)
        assert all(a <= b for a, b in zip(values, values[1:]))

    def test_endpoints(self):
        assert aerial_probability(0) == pytest.approx(0.2)
        assert aerial_probability(250) == pytest.approx(0.45)
        assert aerial_probability(500) == pytest.approx(0.7)
        assert aerial_probability(10_000) == pytest.approx(0.7)

    def test_uses_floored_score(self):
        assert aerial_probability(499.9) == aerial_probability(499)


class TestVariantSelection:
    def test_draw_below_chance_is_aerial(self):
        manager = ObstacleManager(rng=FixedRandom(0.19))
        assert manager.choose_variant(0) is ObstacleVariant.AERIAL

    def test_draw_at_chance_is_ground(self):
        manager = ObstacleManager(rng=FixedRandom(0.2))
        assert manager.choose_variant(0) is ObstacleVariant.GROUND

    def test_high_score_favours_aerial(self):
        manager = ObstacleManager(rng=FixedRandom(0.69))
        assert manager.choose_variant(0) is ObstacleVariant.GROUND
        assert manager.choose_variant(600) is ObstacleVariant.AERIAL

    def test_seeded_distribution(self):
        manager = ObstacleManager(rng=random.Random(1234))
        picks = [manager.choose_variant(1000) for _ in range(2000)]
        share = picks.count(ObstacleVariant.AERIAL) / len(picks)
        assert 0.64 < share < 0.76


class TestGeometry:
    def test_initial_obstacle_is_ground(self):
        manager = ObstacleManager(rng=FixedRandom(0.0))
        assert manager.variant is ObstacleVariant.GROUND
        assert manager.x == manager.stage_width

    def test_ground_geometry(self, ground_rng):
        obstacle = ObstacleManager(rng=ground_rng).randomize(0)
        assert (obstacle.width, obstacle.height, obstacle.ground_offset) == (32, 50, 40)
        assert obstacle.label == "Cactus"

    def test_aerial_offsets_within_range(self):
        manager = ObstacleManager(rng=random.Random(7), aerial_base_chance=1.0, aerial_max_chance=1.0)
        offsets = set()
        for _ in range(300):
            obstacle = manager.randomize(0)
            assert obstacle.variant is ObstacleVariant.AERIAL
            assert (obstacle.width, obstacle.height) == (48, 32)
            assert 110 <= obstacle.ground_offset <= 150
            offsets.add(obstacle.ground_offset)
        assert len(offsets) > 10

    def test_randomize_replaces_obstacle(self, aerial_rng):
        manager = ObstacleManager(rng=aerial_rng)
        before = manager.obstacle
        after = manager.randomize(0)
        assert after is manager.obstacle
        assert after is not before
        assert before.variant is ObstacleVariant.GROUND

    def test_bounding_box_from_offset(self, ground_rng):
        manager = ObstacleManager(stage_width=800, stage_height=240, rng=ground_rng)
        box = manager.bounding_box()
        assert box.bottom == 200
        assert box.top == 150
        assert box.left == 800
        assert box.width == 32

    def test_randomize_emits_change(self, aerial_rng):
        bus = EventBus()
        manager = ObstacleManager(rng=aerial_rng, event_bus=bus)
        manager.randomize(0)
        event = bus.get_history(EventType.OBSTACLE_CHANGED)[-1]
        assert event.data["variant"] == "bird"
        assert event.data["ground_offset"] == VARIANTS[ObstacleVariant.AERIAL].offset_range[0]


class TestTrack:
    def test_advance_moves_left(self, ground_rng):
        manager = ObstacleManager(rng=ground_rng)
        assert manager.advance(1000, 4000) is False
        assert manager.x == pytest.approx(800 - 0.25 * 832)

    def test_cycle_completes_off_stage(self, ground_rng):
        manager = ObstacleManager(rng=ground_rng)
        assert manager.advance(4100, 4000) is True
        assert manager.progress == 1.0
        assert manager.bounding_box().right == pytest.approx(0)

        manager.begin_cycle()
        assert manager.progress == pytest.approx(0.025)

    def test_reset_animation_returns_to_start_edge(self, ground_rng):
        manager = ObstacleManager(rng=ground_rng)
        manager.advance(2000, 4000)
        manager.reset_animation(0)
        assert manager.progress == 0
        assert manager.x == manager.stage_width


class TestCycleSignal:
    def test_completed_cycle_regenerates(self):
        calls = []

        def score():
            calls.append(1)
            return 321.0

        manager = ObstacleManager(rng=FixedRandom(0.99), score_source=score)
        manager.advance(5000, 4000)

        assert manager.handle_animation_iteration("move-obstacle") is True
        assert calls == [1]

    def test_nested_animation_ignored(self, aerial_rng):
        manager = ObstacleManager(rng=aerial_rng)
        manager.advance(5000, 4000)
        before = manager.obstacle

        assert manager.handle_animation_iteration("flap") is False
        assert manager.obstacle is before

    def test_premature_signal_ignored(self, aerial_rng):
        manager = ObstacleManager(rng=aerial_rng)
        manager.advance(3900, 4000)
        before = manager.obstacle

        assert manager.handle_animation_iteration("move-obstacle") is False
        assert manager.obstacle is before

    def test_score_feeds_selection(self):
        manager = ObstacleManager(rng=FixedRandom(0.5), score_source=lambda: 500.0)
        manager.advance(4000, 4000)
        manager.handle_animation_iteration("move-obstacle")
        assert manager.variant is ObstacleVariant.AERIAL
