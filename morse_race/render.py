"""
Standings view for a terminal.

render_standings() is a pure function of the players and the target word.
The returned string starts with clear-screen + home so a sink can write it
as-is; plain=True drops every escape sequence.
"""

from typing import Sequence

from .morse import PlayerState

CLEAR_HOME = "\x1b[2J\x1b[H"
GREEN      = "\x1b[32m"
DEFAULT_FG = "\x1b[39m"
RED_BG     = "\x1b[41m"
DEFAULT_BG = "\x1b[49m"

PLACE_LABELS = ["1st place", "2nd place", "3rd place", "4th place"]
PLACE_COLOURS = [11, 350, 208, 124]   # 256-colour palette


def _place(rank, plain):
    label = PLACE_LABELS[rank - 1]
    if plain:
        return label
    return f"\x1b[38;5;{PLACE_COLOURS[rank - 1]}m{label}{DEFAULT_FG}"


def _banner(target, width):
    inner = max(width - 2, len(target))
    left = (inner + len(target)) // 2
    border = "+" + "-" * inner + "+"
    blank = "|" + " " * inner + "|"
    title = "|" + target.rjust(left) + " " * (inner - left) + "|"
    return [border, blank, title, blank, blank, border]


def render_player(index: int, player: PlayerState, target: str, plain=False) -> str:
    name = f"Player {index + 1}:"
    if player.is_finished(target):
        word = target if plain else f"{GREEN}{target}{DEFAULT_FG}"
        return f"{name} {word}\t{_place(player.rank, plain)} ({player.seconds:.2f}s)"

    done = target[:player.ok_letters]
    nxt = target[player.ok_letters]
    mark = f"[{nxt}]" if plain else f"{RED_BG}{nxt}{DEFAULT_BG}"
    text = f"{name} {done}{mark}\t{player.pending}"
    if player.mistakes:
        text += f"  [mistakes: {player.mistakes}]"
    return text


def render_standings(players: Sequence[PlayerState], target: str,
                     width: int = 80, plain: bool = False) -> str:
    lines = _banner(target, width)
    lines += [render_player(i, p, target, plain) for i, p in enumerate(players)]
    text = "\n".join(lines) + "\n"
    return text if plain else CLEAR_HOME + text
