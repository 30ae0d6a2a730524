"""
RaceCoordinator: owns one game session.

Protocol lines from the device look like "U<slot>:<sym>":
    slot  '0'..'3'
    sym   'S' (dot) or 'L' (dash)

Anything else is ignored without touching player state.

Callbacks:
    on_update(coordinator)      after every line handed to on_line()
    on_start(coordinator)       race clock started (first valid line)
    on_mistake(slot, player)    a player's buffer filled without a letter
    on_finish(slot, player)     a player completed the word, rank assigned
"""

from __future__ import annotations

import time
from typing import Optional, Tuple

from .morse import DASH, DOT, Outcome, PlayerState, add_symbol

NUM_PLAYERS = 4
UPDATE_MARKER = "U"
SEPARATOR = ":"
SYMBOLS = {"S": DOT, "L": DASH}


def parse_update_line(line: bytes) -> Optional[Tuple[int, str]]:
    """Returns (slot, symbol) for a well-formed update line, else None."""
    text = line.decode("ascii", errors="replace")
    if len(text) != 4:
        return None
    marker, slot, sep, sym = text
    if marker != UPDATE_MARKER or sep != SEPARATOR:
        return None
    if not ("0" <= slot <= "9") or int(slot) >= NUM_PLAYERS:
        return None
    if sym not in SYMBOLS:
        return None
    return int(slot), SYMBOLS[sym]


class RaceCoordinator:
    def __init__(self, target, clock=time.monotonic,
                 on_update=None, on_start=None, on_mistake=None, on_finish=None):
        if not target:
            raise ValueError("target word must not be empty")
        self.target     = target
        self.clock      = clock
        self.on_update  = on_update
        self.on_start   = on_start
        self.on_mistake = on_mistake
        self.on_finish  = on_finish

        self.players    = tuple(PlayerState() for _ in range(NUM_PLAYERS))
        self.start_time = None
        self.next_rank  = 1

    @property
    def started(self):
        return self.start_time is not None

    @property
    def finished_count(self):
        return self.next_rank - 1

    def on_line(self, line: bytes):
        parsed = parse_update_line(line)
        if parsed is not None:
            self._apply(*parsed)
        if self.on_update:
            self.on_update(self)

    def _apply(self, slot, symbol):
        if self.start_time is None:
            self.start_time = self.clock()
            if self.on_start:
                self.on_start(self)

        player = self.players[slot]
        outcome = add_symbol(player, symbol, self.target)

        if outcome == Outcome.MISTAKE:
            if self.on_mistake:
                self.on_mistake(slot, player)
        elif outcome == Outcome.LETTER_CONFIRMED and player.is_finished(self.target):
            player.finish(self.clock() - self.start_time, self.next_rank)
            self.next_rank += 1
            if self.on_finish:
                self.on_finish(slot, player)
        return outcome
