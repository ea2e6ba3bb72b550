from pinball_race.utils.timing import FrameScheduler


def test_clock_advances_monotonically():
    scheduler = FrameScheduler()
    assert scheduler.now() == 0
    scheduler.advance(16)
    scheduler.advance(17)
    assert scheduler.now() == 33


def test_timer_fires_once_when_due():
    scheduler = FrameScheduler()
    fired = []
    handle = scheduler.call_later(1300, lambda: fired.append(scheduler.now()))

    scheduler.advance(1299)
    assert fired == []
    assert handle.pending

    scheduler.advance(1)
    assert fired == [1300]
    assert not handle.pending

    scheduler.advance(5000)
    assert fired == [1300]


def test_cancelled_timer_never_fires():
    scheduler = FrameScheduler()
    fired = []
    handle = scheduler.call_later(100, lambda: fired.append(True))
    handle.cancel()
    scheduler.advance(1000)
    assert fired == []
    assert scheduler.pending_timers == 0


def test_timers_fire_in_due_order():
    scheduler = FrameScheduler()
    order = []
    scheduler.call_later(50, lambda: order.append("b"))
    scheduler.call_later(10, lambda: order.append("a"))
    scheduler.call_later(50, lambda: order.append("c"))
    scheduler.advance(100)
    assert order == ["a", "b", "c"]


def test_frame_callbacks_requested_during_a_frame_wait_for_the_next():
    scheduler = FrameScheduler()
    calls = []

    def again():
        calls.append(len(calls))
        if len(calls) < 3:
            scheduler.request_frame(again)

    scheduler.request_frame(again)
    assert scheduler.run_frame() == 1
    assert calls == [0]
    scheduler.run_frame()
    scheduler.run_frame()
    assert calls == [0, 1, 2]
    assert scheduler.run_frame() == 0
