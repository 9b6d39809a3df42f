import pytest
from sensing.gesture_classifier import Gesture
from interaction.dispatcher import IntentDispatcher
from interaction.hsm import InteractionMode
from interaction.session import ExplorerSession


@pytest.fixture
def calls():
    return []


@pytest.fixture
def session(config, calls):
    dispatcher = IntentDispatcher(
        on_explode=lambda: calls.append("explode"),
        on_implode=lambda: calls.append("implode"),
        on_raycast=lambda x, y: calls.append(("raycast", round(x, 3), round(y, 3))),
    )
    return ExplorerSession(config, dispatcher)


def play(session, frames, start=0.0, dt=1 / 30):
    last = None
    for i, frame in enumerate(frames):
        last = session.tick(frame, start + i * dt)
    return last


def test_explore_cycle(session, calls, hand):
    play(session, [hand(Gesture.OPEN)] * 10)
    assert session.hsm.mode == InteractionMode.SCATTERED
    assert calls == ["explode"]

    # Lost hand publishes NONE on the very next tick
    frame = session.tick(None, 1.0)
    assert frame.hand.gesture == Gesture.NONE
    assert frame.hand.tracked is False

    play(session, [hand(Gesture.PINCH, (0.5, 0.5))] * 5)
    assert calls == ["explode", ("raycast", 0.0, 0.0)]

    session.tick(None, 2.0)
    play(session, [hand(Gesture.FIST)] * 10)
    assert session.hsm.mode == InteractionMode.WHOLE
    assert calls[-1] == "implode"


def test_fist_drag_spins_model(session, hand):
    play(session, [hand(Gesture.FIST, (0.5, 0.5))] * 3)
    assert session.hsm.is_dragging

    # Tracker x decreases, the mirrored cursor moves right
    frames = [hand(Gesture.FIST, (0.5 - 0.005 * i, 0.5)) for i in range(1, 8)]
    play(session, frames)
    assert session.hsm.global_motion.yaw > 0.0

    # Coast after the hand leaves the frame
    play(session, [None] * 40)
    assert not session.hsm.is_dragging
    assert session.hsm.global_motion.orientation[2] != 0.0


def test_reset_returns_to_whole(session, hand):
    play(session, [hand(Gesture.OPEN)] * 5)
    session.reset()

    assert session.hsm.mode == InteractionMode.WHOLE
    assert session.pipeline.published == Gesture.NONE


def test_tick_without_dispatcher(config, hand):
    session = ExplorerSession(config)
    frame = session.tick(hand(Gesture.OPEN), 0.0)
    assert frame.output.intents
