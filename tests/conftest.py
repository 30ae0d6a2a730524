import pytest

from morse_race.line_reader import LineReader
from morse_race.race import RaceCoordinator


class FakeClock:
    def __init__(self, start=1000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def reader():
    return LineReader()


@pytest.fixture()
def make_race(clock):
    def factory(target="SOS", **callbacks):
        return RaceCoordinator(target, clock=clock, **callbacks)
    return factory


@pytest.fixture()
def key():
    """Send a dot/dash string for one player, one update line per symbol."""
    def send(coordinator, slot, code):
        for sym in code:
            coordinator.on_line(f"U{slot}:{'S' if sym == '.' else 'L'}".encode("ascii"))
    return send


@pytest.fixture()
def feed_text():
    """Push raw text through a reader into a coordinator the way pump() does."""
    def feed(reader, coordinator, text):
        for byte in text.encode("ascii"):
            length = reader.feed(byte)
            if length:
                coordinator.on_line(reader.line())
    return feed
