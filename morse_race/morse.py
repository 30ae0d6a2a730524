"""
Per-player Morse symbol decoder.

Each player keys dots and dashes one at a time. Symbols collect in a small
pending buffer (at most MAX_SYMBOLS) and after every symbol the buffer is
looked up as a whole: exact length, exact content. There is no prefix
lookahead, so "..." confirms S immediately even if the player meant H.

Outcome per symbol:
    NOOP              symbol buffered (or player already finished)
    LETTER_CONFIRMED  buffer matched the next expected letter, buffer cleared
    MISTAKE           buffer filled up without a confirmation, buffer cleared
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Dict, List, Optional, Tuple

DOT  = "."
DASH = "-"

MAX_SYMBOLS = 4

# ---------------------------------------------------------------------------
# Morse tables
# ---------------------------------------------------------------------------

MORSE_MAP: Dict[str, str] = {
    "A": ".-", "B": "-...", "C": "-.-.", "D": "-..", "E": ".", "F": "..-.",
    "G": "--.", "H": "....", "I": "..", "J": ".---", "K": "-.-", "L": ".-..",
    "M": "--", "N": "-.", "O": "---", "P": ".--.", "Q": "--.-", "R": ".-.",
    "S": "...", "T": "-", "U": "..-", "V": "...-", "W": ".--", "X": "-..-",
    "Y": "-.--", "Z": "--..",
    # not used by the game, a 5-symbol code never fits the pending buffer
    "0": "-----", "1": ".----", "2": "..---", "3": "...--", "4": "....-",
    "5": ".....", "6": "-....", "7": "--...", "8": "---..", "9": "----.",
}


def code_key(code: str) -> Tuple[int, int]:
    """(length, bits) key for a dot/dash string; dash = 1, first symbol is the MSB."""
    bits = 0
    for sym in code:
        if sym not in (DOT, DASH):
            raise ValueError(f"not a Morse symbol: {sym!r}")
        bits = (bits << 1) | (sym == DASH)
    return len(code), bits


DECODE_TABLE: Dict[Tuple[int, int], str] = {
    code_key(code): letter for letter, code in MORSE_MAP.items()
}


def decode(code: str) -> Optional[str]:
    """Exact-match lookup. Returns the letter or None."""
    return DECODE_TABLE.get(code_key(code))


# ---------------------------------------------------------------------------
# Player state
# ---------------------------------------------------------------------------

class Outcome(Enum):
    NOOP             = auto()
    LETTER_CONFIRMED = auto()
    MISTAKE          = auto()


@dataclass
class PlayerState:
    symbols:    List[str] = field(default_factory=list)
    ok_letters: int = 0
    mistakes:   int = 0
    seconds:    Optional[float] = None   # set once, at finish
    rank:       Optional[int] = None     # set once, at finish

    @property
    def pending(self) -> str:
        return "".join(self.symbols)

    def is_finished(self, target: str) -> bool:
        return self.ok_letters == len(target)

    def finish(self, seconds: float, rank: int):
        if self.rank is not None:
            raise RuntimeError(f"player already finished with rank {self.rank}")
        self.seconds = seconds
        self.rank = rank


def add_symbol(player: PlayerState, symbol: str, target: str) -> Outcome:
    if player.is_finished(target):
        return Outcome.NOOP
    if symbol not in (DOT, DASH):
        raise ValueError(f"not a Morse symbol: {symbol!r}")

    player.symbols.append(symbol)

    letter = decode(player.pending)
    if letter is not None and letter == target[player.ok_letters]:
        player.symbols.clear()
        player.ok_letters += 1
        return Outcome.LETTER_CONFIRMED

    if len(player.symbols) == MAX_SYMBOLS:
        player.symbols.clear()
        player.mistakes += 1
        return Outcome.MISTAKE

    return Outcome.NOOP
