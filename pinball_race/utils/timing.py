import heapq
import itertools


class TimerHandle:
    def __init__(self, due_ms, callback):
        self.due_ms = due_ms
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self):
        self.cancelled = True

    @property
    def pending(self):
        return not self.cancelled and not self.fired


class FrameScheduler:
    """Single-threaded scheduler driven by the main loop.

    The main loop calls advance() with the elapsed milliseconds and then
    run_frame() once per display refresh. Timers fire from advance(), frame
    callbacks from run_frame(). A callback requested while a frame is being
    run goes to the next frame.
    """

    def __init__(self, start_ms=0.0):
        self._now = float(start_ms)
        self._frame_callbacks = []
        self._timers = []
        self._counter = itertools.count()

    def now(self):
        return self._now

    def request_frame(self, callback):
        self._frame_callbacks.append(callback)

    def call_later(self, delay_ms, callback):
        handle = TimerHandle(self._now + delay_ms, callback)
        heapq.heappush(self._timers, (handle.due_ms, next(self._counter), handle))
        return handle

    def advance(self, elapsed_ms):
        self._now += elapsed_ms
        while self._timers and self._timers[0][0] <= self._now:
            _, _, handle = heapq.heappop(self._timers)
            if handle.cancelled:
                continue
            handle.fired = True
            handle.callback()

    def run_frame(self):
        callbacks = self._frame_callbacks
        self._frame_callbacks = []
        for callback in callbacks:
            callback()
        return len(callbacks)

    @property
    def pending_frames(self):
        return len(self._frame_callbacks)

    @property
    def pending_timers(self):
        return sum(1 for _, _, handle in self._timers if handle.pending)
