#!/usr/bin/env python3
"""
Generate simulated race capture files.

A capture file is the raw byte stream a keyer box would send: one
"U<slot>:<sym>" line per symbol, CRLF terminated. Players' symbols are
interleaved in a random (seeded) order so several players race at once.

Optional impairments:
    mistake_rate   chance, per letter, that a player first keys a wrong
                   4-symbol burst (exactly one mistake, then the right code)
    noise_rate     chance, per line, of an extra junk line the game must
                   ignore (bad slot, bad marker, over-long line, ...)

Usage:
    python -m morse_race.generator SOS race.cap
    python -m morse_race.generator "HELLO" race.cap --players 3 --mistake-rate 0.2 --seed 7

Requirements: pip install numpy
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np

from .config import normalize_target
from .morse import DASH, DOT, MAX_SYMBOLS, MORSE_MAP
from .race import NUM_PLAYERS

DEFAULT_TARGET = "SOS"

NOISE_LINES = [
    "U4:S",        # slot out of range
    "U9:L",
    "X0:S",        # wrong marker
    "U0-S",        # wrong separator
    "U1:X",        # unknown symbol
    "U2:SL",       # too long
    "U" * 40,      # overflows the line buffer
]


def symbol_line(slot: int, symbol: str) -> str:
    return f"U{slot}:{'S' if symbol == DOT else 'L'}"


def wrong_burst(letter: str, rng: np.random.Generator) -> str:
    """
    MAX_SYMBOLS random symbols that never pass through the code for letter,
    so keying them from an empty buffer ends in exactly one mistake.
    """
    code = MORSE_MAP[letter]
    while True:
        burst = "".join(DASH if b else DOT for b in rng.integers(0, 2, MAX_SYMBOLS))
        if not burst.startswith(code):
            return burst


def player_symbols(target: str, mistake_rate: float, rng: np.random.Generator) -> List[str]:
    out: List[str] = []
    for letter in target:
        if mistake_rate > 0.0 and rng.random() < mistake_rate:
            out.extend(wrong_burst(letter, rng))
        out.extend(MORSE_MAP[letter])
    return out


def generate_race(
    target:       str,
    players:      int = NUM_PLAYERS,
    mistake_rate: float = 0.0,
    noise_rate:   float = 0.0,
    seed:         Optional[int] = None,
) -> List[str]:
    """
    Protocol lines (without terminators) for one simulated race. target is
    normalised the same way as on the command line ("sos!" keys SOS).
    """
    target = normalize_target(target)
    if not 1 <= players <= NUM_PLAYERS:
        raise ValueError(f"players must be 1..{NUM_PLAYERS}, got {players}")
    rng = np.random.default_rng(seed)

    queues = [player_symbols(target, mistake_rate, rng) for _ in range(players)]
    pos = [0] * players
    lines: List[str] = []

    while True:
        live = [s for s in range(players) if pos[s] < len(queues[s])]
        if not live:
            break
        if noise_rate > 0.0 and rng.random() < noise_rate:
            lines.append(NOISE_LINES[int(rng.integers(len(NOISE_LINES)))])
        slot = int(rng.choice(live))
        lines.append(symbol_line(slot, queues[slot][pos[slot]]))
        pos[slot] += 1

    return lines


def write_capture(path: str, lines: List[str]) -> None:
    with open(path, "wb") as f:
        f.write("".join(line + "\r\n" for line in lines).encode("ascii"))


def main(argv=None) -> None:
    import argparse

    parser = argparse.ArgumentParser(
        description="Generate a simulated Morse race capture file",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("target", nargs="?", default=DEFAULT_TARGET, help="Target word")
    parser.add_argument("out", help="Output capture file")
    parser.add_argument("--players", type=int, default=NUM_PLAYERS)
    parser.add_argument("--mistake-rate", type=float, default=0.0,
                        help="Chance per letter of a wrong 4-symbol burst")
    parser.add_argument("--noise-rate", type=float, default=0.0,
                        help="Chance per line of an extra junk line")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)

    target = normalize_target(args.target)
    lines = generate_race(target, args.players, args.mistake_rate, args.noise_rate, args.seed)
    write_capture(args.out, lines)
    print(f"Wrote {len(lines)} lines for '{target}' ({args.players} players) to {args.out}")


if __name__ == "__main__":
    main()
