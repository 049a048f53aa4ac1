"""Tests for the frame driver."""

from retro_runner.core.events import EventType
from retro_runner.game.frame import FrameDriver


def test_first_frame_has_zero_delta(running_session):
    FrameDriver(running_session).on_frame(123456.0)
    assert running_session.elapsed_ms == 0


def test_deltas_from_timestamps(running_session):
    driver = FrameDriver(running_session)
    driver.on_frame(1000)
    driver.on_frame(1016)
    driver.on_frame(1050)
    assert running_session.elapsed_ms == 50


def test_backwards_timestamp_is_zero_delta(running_session):
    driver = FrameDriver(running_session)
    driver.on_frame(1000)
    driver.on_frame(1100)
    driver.on_frame(900)
    assert running_session.elapsed_ms == 100


def test_events_forwarded(session):
    batches = []
    driver = FrameDriver(session, on_events=batches.append)
    session.select_character("kangaroo")

    driver.on_frame(0)
    driver.on_frame(16)

    assert len(batches) == 1
    assert EventType.CHARACTER_SELECTED in [e.type for e in batches[0]]


def test_stop_freezes_session(running_session):
    driver = FrameDriver(running_session)
    driver.on_frame(0)
    driver.on_frame(100)
    driver.stop()

    frame = running_session.frame
    assert driver.on_frame(200) == []
    assert not driver.running
    assert running_session.frame == frame
    assert running_session.elapsed_ms == 100
