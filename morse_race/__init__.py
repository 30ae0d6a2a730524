"""Morse code typing race for up to four players on a serial keyer box."""

__version__ = "1.0.0"

from .line_reader import LineReader
from .morse import Outcome, PlayerState, add_symbol
from .race import RaceCoordinator, parse_update_line
from .render import render_standings
