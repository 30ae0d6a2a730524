"""
Config persistence and target word normalisation.

Settings live in a small JSON file next to where the game is started.
Missing or ill-typed values fall back to DEFAULT_CONFIG; a broken or missing file
just means defaults.
"""

import json
import string

CONFIG_FILE = "morse_race_config.json"
DEFAULT_CONFIG = {
    "port": "/dev/ttyUSB0",
    "baudrate": 9600,
    "width": 0,          # 0 = ask the terminal
    "log": True,
    "log_dir": ".",
}

MAX_TARGET_LEN = 31


def _valid(key, value):
    if key == "baudrate":
        return type(value) is int and value > 0
    if key == "width":
        return type(value) is int and value >= 0
    if key == "log":
        return isinstance(value, bool)
    return isinstance(value, str) and value != ""


def load_config(path=CONFIG_FILE):
    """
    Settings from path over DEFAULT_CONFIG. Missing or ill-typed values are
    replaced by their default and the file is rewritten; unknown keys are kept.
    """
    try:
        with open(path) as f:
            stored = json.load(f)
    except (OSError, ValueError):
        return dict(DEFAULT_CONFIG)
    if not isinstance(stored, dict):
        return dict(DEFAULT_CONFIG)

    cfg = dict(stored)
    for key, default in DEFAULT_CONFIG.items():
        if not _valid(key, cfg.get(key)):
            cfg[key] = default
    if cfg != stored:
        save_config(cfg, path)
    return cfg


def save_config(cfg, path=CONFIG_FILE):
    try:
        with open(path, "w") as f:
            json.dump(cfg, f, indent=2)
    except OSError as e:
        print(f"[WARN] Could not save config: {e}")


def normalize_target(text, max_len=MAX_TARGET_LEN):
    """Uppercase the ASCII letters of text, drop everything else, cap the length."""
    word = "".join(c.upper() for c in text if c in string.ascii_letters)[:max_len]
    if not word:
        raise ValueError(f"no letters in target text {text!r}")
    return word
