"""Tests for jump physics and character variants."""

import pytest

from retro_runner.game import physics
from retro_runner.game.characters import CHARACTERS, create_character, get_character


@pytest.fixture
def kangaroo():
    return create_character("kangaroo", 100, 320)


class TestCharacters:
    def test_kangaroo_parameters(self):
        config = get_character("kangaroo")
        assert (config.width, config.height) == (40, 50)
        assert config.gravity == 0.6
        assert config.jump_impulse == -12.0
        assert config.animation_rate == 0.15

    def test_koala_parameters(self):
        config = get_character("koala")
        assert (config.width, config.height) == (40, 45)
        assert config.jump_impulse == -11.5
        assert config.animation_rate == 0.12

    def test_unknown_character_raises(self):
        with pytest.raises(ValueError):
            get_character("wombat")

    @pytest.mark.parametrize("name", sorted(CHARACTERS))
    def test_created_player_stands_on_ground(self, name):
        player = create_character(name, 100, 320)
        assert player.kind == name
        assert player.ground_y == 320 - CHARACTERS[name].ground_offset
        assert player.y == player.ground_y
        assert player.y + player.height == 320
        assert not player.airborne


class TestPhysics:
    def test_grounded_player_stays_put(self, kangaroo):
        for _ in range(30):
            assert physics.apply_physics(kangaroo) is False
        assert kangaroo.y == kangaroo.ground_y
        assert kangaroo.velocity_y == 0.0
        assert not kangaroo.airborne

    def test_jump_sets_impulse(self, kangaroo):
        assert physics.jump(kangaroo) is True
        assert kangaroo.velocity_y == -12.0
        assert kangaroo.airborne

    def test_gravity_then_position(self, kangaroo):
        physics.jump(kangaroo)
        physics.apply_physics(kangaroo)
        assert kangaroo.velocity_y == pytest.approx(-11.4)
        assert kangaroo.y == pytest.approx(270 - 11.4)

    def test_no_double_jump(self, kangaroo):
        physics.jump(kangaroo)
        physics.apply_physics(kangaroo)
        velocity = kangaroo.velocity_y

        assert physics.jump(kangaroo) is False
        assert kangaroo.velocity_y == velocity

    def test_never_below_ground(self, kangaroo):
        for frame in range(300):
            if frame % 50 == 0:
                physics.jump(kangaroo)
            physics.apply_physics(kangaroo)
            assert kangaroo.y <= kangaroo.ground_y

    def test_lands_exactly_once_per_jump(self, kangaroo):
        physics.jump(kangaroo)
        landings = [physics.apply_physics(kangaroo) for _ in range(100)]

        assert landings.count(True) == 1
        assert kangaroo.y == kangaroo.ground_y
        assert not kangaroo.airborne

    def test_was_airborne_tracks_previous_frame(self, kangaroo):
        physics.jump(kangaroo)
        assert not kangaroo.was_airborne

        physics.apply_physics(kangaroo)
        assert kangaroo.was_airborne

        kangaroo.y = kangaroo.ground_y - 0.1
        kangaroo.velocity_y = 5.0
        assert physics.apply_physics(kangaroo) is True
        assert not kangaroo.was_airborne
        assert physics.apply_physics(kangaroo) is False

    def test_koala_jump_is_lower(self):
        peaks = {}
        for name in ("kangaroo", "koala"):
            player = create_character(name, 100, 320)
            physics.jump(player)
            top = player.y
            for _ in range(60):
                physics.apply_physics(player)
                top = min(top, player.y)
            peaks[name] = player.ground_y - top
        assert peaks["kangaroo"] > peaks["koala"]


class TestAnimation:
    def test_phase_advances_on_ground(self, kangaroo):
        physics.apply_physics(kangaroo)
        assert kangaroo.animation_phase == pytest.approx(0.15)

    def test_phase_wraps_below_cycle_length(self, kangaroo):
        for _ in range(100):
            physics.apply_physics(kangaroo)
            assert 0 <= kangaroo.animation_phase < physics.RUN_CYCLE_LENGTH
            assert physics.pose(kangaroo) in (0, 1)

    def test_phase_frozen_in_air(self, kangaroo):
        physics.apply_physics(kangaroo)
        phase = kangaroo.animation_phase

        physics.jump(kangaroo)
        for _ in range(5):
            physics.apply_physics(kangaroo)
        assert kangaroo.airborne
        assert kangaroo.animation_phase == phase

    def test_reset(self, kangaroo):
        physics.jump(kangaroo)
        for _ in range(5):
            physics.apply_physics(kangaroo)

        physics.reset(kangaroo)
        assert kangaroo.y == kangaroo.ground_y
        assert kangaroo.velocity_y == 0.0
        assert not kangaroo.airborne
        assert kangaroo.animation_phase == 0.0
