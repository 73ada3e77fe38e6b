from tracker.constants import ANIMATION_INTERVAL_MS, ANIMATION_STEPS


def counter_frames(start, target, steps=ANIMATION_STEPS):
    """Evenly spaced values from ``start`` to ``target``; the last is exactly ``target``."""
    if steps < 1:
        return [target]
    increment = (target - start) / steps
    frames = [start + increment * i for i in range(1, steps)]
    frames.append(target)
    return frames


def format_counter(value, percent=False):
    if value is None:
        return "N/A"
    if percent:
        return f"{value:.1f}%"
    return str(int(round(value)))


class CounterAnimator:
    """Animates one displayed number towards a new value.

    ``schedule(ms, callback)`` and ``cancel(handle)`` match tkinter's
    ``after``/``after_cancel``. Starting a new animation cancels the one in
    flight and continues from the value currently shown.
    """

    def __init__(self, schedule, cancel, render, percent=False,
                 steps=ANIMATION_STEPS, interval=ANIMATION_INTERVAL_MS):
        self.schedule = schedule
        self.cancel = cancel
        self.render = render
        self.percent = percent
        self.steps = steps
        self.interval = interval
        self.current = None
        self._pending = None

    def animate_to(self, target):
        self.stop()
        if target is None:
            self.current = None
            self.render(format_counter(None))
            return

        start = self.current if self.current is not None else 0
        self._run(counter_frames(start, target, self.steps))

    def stop(self):
        if self._pending is not None:
            self.cancel(self._pending)
            self._pending = None

    def _run(self, frames):
        if not frames:
            self._pending = None
            return

        def step():
            self.current = frames[0]
            self.render(format_counter(self.current, self.percent))
            self._run(frames[1:])

        self._pending = self.schedule(self.interval, step)
