"""Stage buffer rendering."""

import numpy as np
import pytest

from dinorun.game.scoreboard import MemoryStore
from dinorun.game.session import GameSession
from dinorun.graphics.primitives import create_buffer, draw_rect, draw_sprite, tint
from dinorun.graphics.stage import INK, SKY, StageRenderer

from conftest import FixedRandom


@pytest.fixture
def session(settings):
    return GameSession(settings=settings, store=MemoryStore(), rng=FixedRandom(0.99))


class TestPrimitives:
    def test_rect_is_clipped(self):
        buffer = create_buffer(10, 10)
        draw_rect(buffer, 8, 8, 5, 5, (255, 0, 0))
        assert (buffer[8:, 8:] == (255, 0, 0)).all()
        assert (buffer[:8, :] == 0).all()

    def test_rect_outline(self):
        buffer = create_buffer(10, 10)
        draw_rect(buffer, 2, 2, 5, 5, (9, 9, 9), filled=False)
        assert tuple(buffer[2, 4]) == (9, 9, 9)
        assert tuple(buffer[4, 4]) == (0, 0, 0)

    def test_sprite_scaling(self):
        buffer = create_buffer(8, 8)
        draw_sprite(buffer, ["#.", ".#"], 0, 0, (1, 2, 3), scale=2)
        assert (buffer[0:2, 0:2] == (1, 2, 3)).all()
        assert (buffer[0:2, 2:4] == 0).all()
        assert (buffer[2:4, 2:4] == (1, 2, 3)).all()

    def test_tint(self):
        buffer = create_buffer(2, 2, (100, 100, 100))
        tint(buffer, (200, 0, 0), 0.5)
        assert tuple(buffer[0, 0]) == (150, 50, 50)


class TestStageRenderer:
    def test_idle_stage(self, session):
        renderer = StageRenderer(session.layout)
        buffer = renderer.render(session.view())

        assert buffer.shape == (240, 800, 3)
        assert tuple(buffer[0, 0]) == SKY
        assert tuple(buffer[200, 400]) == INK

    def test_runner_drawn_in_its_box(self, session):
        renderer = StageRenderer(session.layout)
        view = session.view()
        buffer = renderer.render(view)
        box = view.runner_box

        region = buffer[int(box.top):int(box.bottom), int(box.left):int(box.right)]
        assert (region == INK).all(axis=2).any()

    def test_hit_tints_stage(self, session):
        renderer = StageRenderer(session.layout)
        session.controller.start()
        session.controller.end()
        buffer = renderer.render(session.view())
        assert tuple(buffer[0, 0]) != SKY
        assert buffer[0, 0, 0] > buffer[0, 0, 2]

    def test_crouch_frame(self, session):
        renderer = StageRenderer(session.layout)
        session.controller.start()
        session.controller.start_crouch()
        view = session.view()
        buffer = renderer.render(view)

        standing_top = int(session.layout.runner_box().top)
        above_crouch = buffer[standing_top:int(view.runner_box.top), 48:108]
        assert not (above_crouch == INK).all(axis=2).any()
        assert isinstance(buffer, np.ndarray)
