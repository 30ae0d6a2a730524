"""
morse-race command line entry point.

Usage:
    morse-race TEXT [SERIAL_PORT] [BAUDRATE]
    morse-race TEXT --replay race.cap
"""

import argparse
import shutil
import sys

from .config import CONFIG_FILE, load_config, normalize_target, save_config
from .line_reader import LineReader
from .race import RaceCoordinator
from .render import render_standings
from .session_log import SessionLog
from .transport import ReplayTransport, SerialTransport, TransportError, pump


def build_parser():
    parser = argparse.ArgumentParser(
        prog="morse-race",
        description="Four-player Morse code typing race over a serial keyer box",
    )
    parser.add_argument("text", help="Target word (letters only, max 31)")
    parser.add_argument("port", nargs="?", default=None, help="Serial port")
    parser.add_argument("baudrate", nargs="?", default=None, help="Baud rate")
    parser.add_argument("--replay", metavar="FILE", default=None,
                        help="Read bytes from a capture file instead of the serial port")
    parser.add_argument("--width", type=int, default=None,
                        help="Display width (default: terminal width)")
    parser.add_argument("--config", default=CONFIG_FILE, help="Config file")
    parser.add_argument("--no-log", action="store_true", help="Do not write a session log")
    return parser


def display_width(override, configured):
    if override:
        return override
    if configured:
        return configured
    return shutil.get_terminal_size((80, 24)).columns


def terminal_sink(stream, width):
    """on_update callback that redraws the standings on stream."""
    def redraw(coordinator):
        stream.write(render_standings(coordinator.players, coordinator.target, width))
        stream.flush()
    return redraw


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    config = load_config(args.config)

    try:
        target = normalize_target(args.text)
    except ValueError as e:
        parser.print_usage()
        print(f"Error: {e}")
        return 1

    port = args.port or config["port"]
    baudrate = config["baudrate"]
    if args.baudrate is not None:
        try:
            baudrate = int(args.baudrate)
        except ValueError:
            print(f"Error parsing baud rate '{args.baudrate}'")

    width = display_width(args.width, config.get("width"))
    log = None
    if config.get("log") and not args.no_log:
        log = SessionLog.open(config.get("log_dir", "."))

    try:
        if args.replay:
            transport = ReplayTransport(args.replay)
        else:
            print(f"Using serial file '{port}'")
            print(f"Using baud rate {baudrate}")
            transport = SerialTransport(port, baudrate)
    except TransportError as e:
        print(f"Error opening {args.replay or port}: {e}")
        if log:
            log.close()
        return 1

    if not args.replay:
        config["port"] = port
        config["baudrate"] = baudrate
        save_config(config, args.config)

    sink = None if args.replay else terminal_sink(sys.stdout, width)

    coordinator = RaceCoordinator(
        target,
        on_update=sink,
        on_start=log.race_started if log else None,
        on_mistake=log.mistake if log else None,
        on_finish=log.finished if log else None,
    )
    if log:
        log.target(target)
    if sink:
        sink(coordinator)

    try:
        pump(transport, LineReader(), coordinator)
    except TransportError as e:
        print(f"\nError reading {args.replay or port}: {e}")
        return 1
    finally:
        if log:
            log.close()

    if args.replay:
        print(render_standings(coordinator.players, target, width, plain=True), end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
