"""Shared test helpers for the Pomodoro timer."""

from pomodoro.timer.engine import TimerEngine

T0 = 1_700_000_000_000  # an arbitrary epoch-ms starting instant


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Controllable epoch-millisecond clock."""

    def __init__(self, now_ms: int = T0):
        self.now_ms = now_ms

    def __call__(self) -> int:
        return self.now_ms

    def advance(self, seconds: float) -> None:
        self.now_ms += int(seconds * 1000)


class RecordingChannel:
    """Stand-in for the tray's showMessage; records (title, body)."""

    def __init__(self):
        self.messages: list[tuple[str, str]] = []

    def __call__(self, title: str, body: str) -> None:
        self.messages.append((title, body))


def run_until_done(engine: TimerEngine, clock: FakeClock, step: int = 1, limit: int = 10_000) -> int:
    """Tick every *step* seconds until the run stops; return ticks taken."""
    ticks = 0
    while engine.is_running and ticks < limit:
        clock.advance(step)
        engine._on_tick()
        ticks += 1
    return ticks
