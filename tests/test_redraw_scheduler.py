"""
Tests for RedrawScheduler frame coalescing.
"""

import pytest

from canvas_viewport.services.redraw_scheduler import RedrawScheduler
from conftest import ManualFrames


@pytest.fixture
def scheduler(frames):
    return RedrawScheduler(frame_requester=frames)


def test_repeated_requests_coalesce_into_one_paint(scheduler, frames):
    calls = []
    scheduler.register_painter('top', lambda: calls.append('top'))

    for _ in range(5):
        scheduler.request_redraw('top')

    assert frames.requests == 1
    assert scheduler.is_pending('top')
    frames.tick()
    assert calls == ['top']
    assert not scheduler.has_pending()


def test_main_implies_internal(scheduler, frames):
    calls = []
    scheduler.register_painter('main', lambda: calls.append('main'))
    scheduler.register_painter('internal', lambda: calls.append('internal'))
    scheduler.register_painter('top', lambda: calls.append('top'))

    scheduler.request_redraw('main')
    assert scheduler.is_pending('internal')
    assert not scheduler.is_pending('top')

    frames.tick()
    assert calls == ['main', 'internal']


def test_guard_clears_only_when_frame_fires(scheduler, frames):
    calls = []
    scheduler.register_painter('main', lambda: calls.append(1))

    scheduler.request_redraw()
    frames.tick()
    scheduler.request_redraw()
    scheduler.request_redraw()
    frames.tick()

    assert calls == [1, 1]
    assert frames.requests == 2


def test_request_from_painter_lands_in_next_frame(scheduler, frames):
    calls = []

    def painter():
        calls.append('paint')
        if len(calls) == 1:
            scheduler.request_redraw('top')

    scheduler.register_painter('top', painter)
    scheduler.request_redraw('top')
    frames.tick()
    assert calls == ['paint']
    assert scheduler.is_pending('top')
    frames.tick()
    assert calls == ['paint', 'paint']


def test_unregister_is_idempotent(scheduler, frames):
    calls = []
    unregister = scheduler.register_painter('main', lambda: calls.append(1))
    unregister()
    unregister()
    scheduler.request_redraw()
    frames.tick()
    assert calls == []


def test_flush_paints_without_waiting(scheduler, frames):
    calls = []
    scheduler.register_painter('internal', lambda: calls.append(1))
    scheduler.request_redraw('internal')
    scheduler.flush()
    assert calls == [1]
    # The stale frame callback must not paint again
    frames.tick()
    assert calls == [1]


def test_clear_drops_pending_frame(scheduler, frames):
    calls = []
    scheduler.register_painter('main', lambda: calls.append(1))
    scheduler.request_redraw()
    scheduler.clear()
    frames.tick()
    assert calls == []
    assert not scheduler.has_pending()


def test_unknown_layer_rejected(scheduler):
    with pytest.raises(ValueError):
        scheduler.request_redraw('background')


def test_painter_fault_propagates(frames):
    scheduler = RedrawScheduler(frame_requester=frames)

    def broken():
        raise RuntimeError("paint failed")

    scheduler.register_painter('main', broken)
    scheduler.request_redraw()
    with pytest.raises(RuntimeError, match="paint failed"):
        frames.tick()


def test_painter_fault_does_not_drop_other_layers(frames):
    scheduler = RedrawScheduler(frame_requester=frames)
    painted = []

    def broken():
        raise RuntimeError("main failed")

    scheduler.register_painter('main', broken)
    scheduler.register_painter('main', lambda: painted.append('main'))
    scheduler.register_painter('internal', lambda: painted.append('internal'))
    scheduler.register_painter('top', lambda: painted.append('top'))
    scheduler.request_redraw('main')
    scheduler.request_redraw('top')

    with pytest.raises(RuntimeError, match="main failed"):
        frames.tick()

    assert painted == ['main', 'internal', 'top']
    assert not scheduler.has_pending()

    scheduler.request_redraw('internal')
    frames.tick()
    assert painted[-1] == 'internal'


def test_first_painter_fault_is_raised(frames):
    scheduler = RedrawScheduler(frame_requester=frames)

    def fail_main():
        raise RuntimeError("first")

    def fail_internal():
        raise ValueError("second")

    scheduler.register_painter('main', fail_main)
    scheduler.register_painter('internal', fail_internal)
    scheduler.request_redraw('main')
    with pytest.raises(RuntimeError, match="first"):
        frames.tick()


def test_independent_schedulers_do_not_share_guards():
    frames_a, frames_b = ManualFrames(), ManualFrames()
    a = RedrawScheduler(frame_requester=frames_a)
    b = RedrawScheduler(frame_requester=frames_b)
    a.request_redraw()
    assert a.is_pending('main')
    assert not b.is_pending('main')
