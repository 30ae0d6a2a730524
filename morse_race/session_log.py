"""Per-day text log of race events (mistakes, finishes)."""

import os
from datetime import datetime, timezone

PLACE_NAMES = {1: "1st", 2: "2nd", 3: "3rd", 4: "4th"}


def _utcnow():
    return datetime.now(timezone.utc)


class SessionLog:
    def __init__(self, f):
        self._file = f

    @staticmethod
    def path_for(log_dir, when):
        return os.path.join(log_dir, when.strftime("morse_race_%Y%m%d.log"))

    @classmethod
    def open(cls, log_dir="."):
        """Append to today's log in log_dir. None (and a message) if it can't be opened."""
        started = _utcnow()
        try:
            f = open(cls.path_for(log_dir, started), "a", buffering=1)
        except OSError as e:
            print(f"Could not open log file: {e}")
            return None
        log = cls(f)
        log._file.write(f"\n--- Session started {started:%Y-%m-%d %H:%M:%Sz} ---\n")
        return log

    def write(self, text):
        if self._file:
            try:
                self._file.write(f"{_utcnow().strftime('%H:%M:%S')} {text}\n")
            except (OSError, ValueError):
                pass

    def close(self):
        if self._file:
            self._file.close()
            self._file = None

    # coordinator callbacks
    def target(self, word):
        self.write(f"Target: {word}")

    def race_started(self, coordinator):
        self.write("Race started")

    def mistake(self, slot, player):
        self.write(f"P{slot + 1} mistake #{player.mistakes}")

    def finished(self, slot, player):
        place = PLACE_NAMES.get(player.rank, f"#{player.rank}")
        self.write(f"P{slot + 1} finished {place} in {player.seconds:.2f}s")
