from __future__ import annotations

import pytest

from choicecheck.keys import MAX_KEY_OPTIONS, symbol_for_key, symbols_from_keys


@pytest.mark.parametrize(("key", "expected"), [("1", 0), ("2", 1), ("4", 3)])
def test_option_keys_map_to_symbols(key: str, expected: int) -> None:
    assert symbol_for_key(key) == expected


@pytest.mark.parametrize("key", ["0", "5", "a", " ", "", "12"])
def test_other_keys_are_ignored(key: str) -> None:
    assert symbol_for_key(key) is None


def test_symbols_from_keys_respects_option_count() -> None:
    assert list(symbols_from_keys("1x23 4")) == [0, 1, 2, 3]
    assert list(symbols_from_keys("1234", num_options=2)) == [0, 1]


def test_every_option_reachable_up_to_key_limit() -> None:
    keys = "".join(str(digit) for digit in range(1, MAX_KEY_OPTIONS + 1))

    assert list(symbols_from_keys(keys, num_options=MAX_KEY_OPTIONS)) == list(range(MAX_KEY_OPTIONS))
