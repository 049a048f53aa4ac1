"""Tests for the game session: screen flow, scoring and high scores."""

import pytest

from retro_runner.core.events import Event, EventBus, EventType, jump_event, pointer_event
from retro_runner.core.state import GameState
from retro_runner.game.obstacles import ObstacleType, spawn_obstacle
from retro_runner.storage.store import (
    HIGH_SCORE_KEY,
    SELECTED_CHARACTER_KEY,
    JsonFileStore,
    MemoryStore,
)


def place_tree(session):
    """Put a tree where the jumping player will hit it on the next frame."""
    session.obstacles.append(spawn_obstacle(ObstacleType.TREE, 90, session.ground_line, 6.0))


def types_of(events):
    return [e.type for e in events]


def crash(session, delta_ms):
    """Start a run (if needed) and collide after ``delta_ms``."""
    if session.state == GameState.READY:
        session.jump()
    place_tree(session)
    return session.update(delta_ms)


class TestScreenFlow:
    def test_starts_in_selection(self, session):
        assert session.state == GameState.SELECTING
        assert session.player is None

    def test_single_character_skips_selection(self, make_session):
        session = make_session(characters=["koala"])
        assert session.state == GameState.READY
        assert session.player.kind == "koala"
        assert session.change_character() is False

    def test_unknown_character_in_settings(self, make_session):
        with pytest.raises(ValueError):
            make_session(characters=["kangaroo", "dingo"])

    def test_select_character(self, session, store):
        assert session.select_character("koala") is True
        assert session.state == GameState.READY
        assert session.player.kind == "koala"
        assert store.data[SELECTED_CHARACTER_KEY] == "koala"

        events = session.update(16)
        assert types_of(events) == [EventType.CHARACTER_SELECTED, EventType.STATE_CHANGED]
        assert events[1].data == {"from": "SELECTING", "to": "READY"}

    def test_select_unknown_is_ignored(self, session):
        assert session.select_character("dingo") is False
        assert session.state == GameState.SELECTING

    def test_click_selects_card(self, session):
        assert session.pointer_clicked(260, 200) is True
        assert session.selected_character == "kangaroo"

    def test_click_outside_cards_is_ignored(self, session):
        assert session.pointer_clicked(50, 50) is False
        assert session.state == GameState.SELECTING

    def test_click_starts_run(self, make_session):
        session = make_session(characters=["kangaroo"])
        assert session.pointer_clicked(400, 200) is True
        assert session.state == GameState.RUNNING
        assert session.player.airborne

    def test_click_jumps_while_running(self, running_session):
        assert running_session.pointer_clicked(10, 10) is False  # Already airborne
        for _ in range(60):
            running_session.update(16)
        assert not running_session.player.airborne

        assert running_session.pointer_clicked(10, 10) is True
        assert running_session.player.velocity_y == -12.0

    def test_click_on_game_over_background_is_ignored(self, running_session):
        crash(running_session, 1200)
        assert running_session.pointer_clicked(400, 100) is False
        assert running_session.state == GameState.ENDED

    def test_jump_starts_run(self, session):
        session.select_character("kangaroo")
        assert session.jump() is True
        assert session.state == GameState.RUNNING
        assert session.player.airborne

    def test_time_frozen_before_run(self, session):
        session.select_character("kangaroo")
        for _ in range(10):
            session.update(100)
        assert session.elapsed_ms == 0
        assert session.score == 0
        assert session.obstacles == []

    @pytest.mark.parametrize("command", ["jump", "restart", "change_character"])
    def test_commands_ignored_while_selecting(self, session, command):
        assert getattr(session, command)() is False
        assert session.state == GameState.SELECTING

    def test_restart_ignored_while_running(self, running_session):
        assert running_session.restart() is False
        assert running_session.change_character() is False
        assert running_session.state == GameState.RUNNING

    def test_handle_input_routes_events(self, session):
        assert session.handle_input(Event(EventType.CHARACTER_CHOSEN, {"character": "koala"}))
        assert session.handle_input(jump_event())
        assert session.state == GameState.RUNNING
        assert session.handle_input(Event(EventType.COLLISION)) is False


class TestScoring:
    def test_score_floors_elapsed_time(self, running_session):
        running_session.update(4999)
        assert running_session.score == 49
        running_session.update(1)
        assert running_session.score == 50

    def test_bad_deltas_count_as_zero(self, running_session):
        running_session.update(250)
        for delta in (-100, float("nan"), float("inf")):
            running_session.update(delta)
        assert running_session.elapsed_ms == 250

    def test_speed_follows_score(self, running_session):
        running_session.update(50000)
        assert running_session.score == 500
        assert running_session.speed == 6.5
        assert running_session.min_spawn_interval == 1800

    def test_obstacle_keeps_spawn_speed(self, running_session):
        events = running_session.update(2000)
        assert EventType.OBSTACLE_SPAWNED in types_of(events)
        first = running_session.obstacles[0]
        assert first.x == 800
        assert first.speed == 6.0

        running_session.update(48000)
        assert first.speed == 6.0
        assert first.x == 794
        assert running_session.obstacles[-1].speed == 6.5

    def test_landing_signalled_once(self, running_session):
        landed = []
        for _ in range(120):
            events = running_session.update(16)
            landed += [e for e in events if e.type == EventType.LANDED]
        assert len(landed) == 1
        assert landed[0].data["y"] == running_session.ground_line


class TestGameOver:
    def test_collision_ends_run(self, running_session):
        events = crash(running_session, 1200)

        assert running_session.state == GameState.ENDED
        assert running_session.score == 12
        assert running_session.collision_flash_ms == 500
        collision = [e for e in events if e.type == EventType.COLLISION][0]
        assert collision.data["obstacle"] == "TREE"
        assert collision.data["score"] == 12

    def test_ended_waits_for_command(self, running_session):
        crash(running_session, 1200)
        for _ in range(100):
            running_session.update(16)
        assert running_session.state == GameState.ENDED
        assert running_session.score == 12
        assert running_session.collision_flash_ms == 0
        assert running_session.jump() is False

    def test_new_high_score(self, running_session, store):
        events = crash(running_session, 1200)

        assert running_session.high_score == 12
        assert running_session.is_new_high_score
        assert running_session.high_score_pulse_ms == 3000
        assert store.data[HIGH_SCORE_KEY] == 12
        assert types_of(events).index(EventType.NEW_HIGH_SCORE) < types_of(events).index(
            EventType.COLLISION
        )

    def test_lower_score_keeps_record(self, running_session, store):
        crash(running_session, 1200)
        writes = store.writes

        running_session.restart()
        events = crash(running_session, 1000)

        assert running_session.score == 10
        assert running_session.high_score == 12
        assert not running_session.is_new_high_score
        assert EventType.NEW_HIGH_SCORE not in types_of(events)
        assert store.data[HIGH_SCORE_KEY] == 12
        assert store.writes == writes

    def test_restart_resets_run(self, running_session, store):
        crash(running_session, 1200)
        assert running_session.restart() is True

        assert running_session.state == GameState.READY
        assert running_session.obstacles == []
        assert running_session.elapsed_ms == 0
        assert running_session.score == 0
        assert running_session.speed == 6.0
        assert running_session.spawner.timer.threshold == 2000
        assert running_session.player.y == running_session.player.ground_y
        assert not running_session.player.airborne
        assert running_session.high_score == 12
        assert store.data[HIGH_SCORE_KEY] == 12

    def test_restart_click(self, running_session):
        crash(running_session, 1200)
        assert running_session.pointer_clicked(400, 340) is True
        assert running_session.state == GameState.READY

    def test_change_character_click(self, running_session):
        crash(running_session, 1200)
        assert running_session.pointer_clicked(400, 300) is True
        assert running_session.state == GameState.SELECTING
        assert running_session.player is None
        assert running_session.preselected == "kangaroo"

        assert running_session.select_character("koala")
        assert running_session.player.kind == "koala"


class TestPersistence:
    def test_loads_saved_values(self, make_session):
        store = MemoryStore({HIGH_SCORE_KEY: 340, SELECTED_CHARACTER_KEY: "koala"})
        session = make_session(store_override=store)
        assert session.high_score == 340
        assert session.preselected == "koala"
        assert session.state == GameState.SELECTING

    @pytest.mark.parametrize("value", ["garbage", None, [1, 2], float("inf"), float("nan")])
    def test_unreadable_high_score(self, make_session, value):
        session = make_session(store_override=MemoryStore({HIGH_SCORE_KEY: value}))
        assert session.high_score == 0

    def test_infinite_high_score_in_file(self, make_session, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text('{"highScore": Infinity}', encoding="utf-8")

        session = make_session(store_override=JsonFileStore(path))
        assert session.high_score == 0

    def test_unknown_saved_character_ignored(self, make_session):
        session = make_session(store_override=MemoryStore({SELECTED_CHARACTER_KEY: "dingo"}))
        assert session.preselected is None

    def test_failed_writes_do_not_break_play(self, make_session):
        store = MemoryStore(fail_writes=True)
        session = make_session(store_override=store)
        session.select_character("kangaroo")
        session.jump()
        crash(session, 1200)

        assert session.state == GameState.ENDED
        assert session.high_score == 12
        assert store.data == {}


class TestEventBus:
    def test_signals_reach_bus(self, make_session):
        bus = EventBus()
        collisions = []
        states = []
        bus.subscribe(EventType.COLLISION, collisions.append)
        bus.subscribe(EventType.STATE_CHANGED, states.append)

        session = make_session(event_bus=bus)
        session.select_character("kangaroo")
        session.jump()
        crash(session, 1200)

        assert len(collisions) == 1
        assert [e.data["to"] for e in states] == ["READY", "RUNNING", "ENDED"]

    def test_pointer_event_through_bus(self, make_session):
        bus = EventBus()
        session = make_session(event_bus=bus)
        bus.subscribe(EventType.POINTER_CLICKED, session.handle_input)

        bus.emit(pointer_event(500, 200))
        assert session.selected_character == "koala"
