import pytest

from morse_race.morse import (
    DECODE_TABLE, MORSE_MAP, Outcome, PlayerState, add_symbol, code_key, decode,
)


def send(player, code, target):
    return [add_symbol(player, sym, target) for sym in code]


def test_table_keys_are_unique():
    assert len(DECODE_TABLE) == len(MORSE_MAP)


def test_code_key_distinguishes_length():
    # "." and ".." have the same bits but differ in length
    assert code_key(".") != code_key("..")
    assert code_key("-.") == (2, 0b10)


def test_decode_is_exact_match():
    assert decode("...") == "S"
    assert decode("....") == "H"
    assert decode("..--") is None
    assert decode("-----") == "0"


def test_code_key_rejects_other_symbols():
    with pytest.raises(ValueError):
        code_key(".x")


def test_scenario_sos_finishes():
    p = PlayerState()
    assert send(p, "...", "SOS")[-1] == Outcome.LETTER_CONFIRMED
    assert send(p, "---", "SOS")[-1] == Outcome.LETTER_CONFIRMED
    assert send(p, "...", "SOS") == [Outcome.NOOP, Outcome.NOOP, Outcome.LETTER_CONFIRMED]
    assert p.ok_letters == 3
    assert p.is_finished("SOS")
    assert p.mistakes == 0


def test_four_dots_is_a_mistake_for_o():
    # "...." passes through S at length 3 but O is expected
    p = PlayerState(ok_letters=1)
    outcomes = send(p, "....", "SOS")
    assert outcomes == [Outcome.NOOP] * 3 + [Outcome.MISTAKE]
    assert p.mistakes == 1
    assert p.pending == ""
    assert p.ok_letters == 1


def test_four_dots_confirm_s_at_third_dot():
    # exact-length match, no lookahead: the third dot already confirms S
    p = PlayerState()
    outcomes = send(p, "....", "SOS")
    assert outcomes[2] == Outcome.LETTER_CONFIRMED
    assert outcomes[3] == Outcome.NOOP
    assert p.pending == "."
    assert p.ok_letters == 1


def test_wrong_letter_keeps_buffering():
    # "." is E, not the expected T, so the buffer keeps going
    p = PlayerState()
    assert add_symbol(p, ".", "TEST") == Outcome.NOOP
    assert p.pending == "."
    assert p.mistakes == 0


def test_short_codes_never_confirm_longer_letter():
    p = PlayerState()
    # B is "-..."; none of the shorter prefixes may confirm
    assert send(p, "-..", "B") == [Outcome.NOOP] * 3
    assert add_symbol(p, ".", "B") == Outcome.LETTER_CONFIRMED


def test_finished_player_is_noop():
    p = PlayerState(ok_letters=3, mistakes=2, seconds=4.5, rank=1)
    before = (list(p.symbols), p.ok_letters, p.mistakes, p.seconds, p.rank)
    for sym in "..--..--":
        assert add_symbol(p, sym, "SOS") == Outcome.NOOP
    assert (list(p.symbols), p.ok_letters, p.mistakes, p.seconds, p.rank) == before


def test_finish_is_write_once():
    p = PlayerState(ok_letters=3)
    p.finish(1.0, 2)
    with pytest.raises(RuntimeError):
        p.finish(2.0, 3)
    assert p.rank == 2


def test_mistake_then_recover():
    p = PlayerState()
    assert send(p, "-.-.", "E")[-1] == Outcome.MISTAKE
    assert add_symbol(p, ".", "E") == Outcome.LETTER_CONFIRMED
    assert p.mistakes == 1
