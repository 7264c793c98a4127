"""Tests for test selection."""

import pytest

from case_runner.selection import SelectorError, select_tests

NAMES = ["test_a", "test_b", "test_c", "test_d", "test_e"]


def test_selects_all_without_selectors() -> None:
    """Every test runs when nothing is selected."""
    assert select_tests(5, [], NAMES) == [1, 2, 3, 4, 5]


@pytest.mark.parametrize(
    ("selectors", "expected"),
    [
        (["3"], [3]),
        (["2:4"], [2, 3, 4]),
        (["test_e", "1"], [1, 5]),
        (["4", "2:4", "test_b"], [2, 3, 4]),
        (["5:5"], [5]),
    ],
)
def test_selectors(selectors: list[str], expected: list[int]) -> None:
    """Numbers, ranges and names combine into sorted unique numbers."""
    assert select_tests(5, selectors, NAMES) == expected


@pytest.mark.parametrize(
    ("selector", "message"),
    [
        ("0", "out of range"),
        ("6", "out of range"),
        ("4:2", "Invalid test range"),
        ("1:9", "out of range"),
        ("test_z", "No test named"),
    ],
)
def test_invalid_selectors(selector: str, message: str) -> None:
    """Selectors outside the suite raise SelectorError."""
    with pytest.raises(SelectorError, match=message):
        select_tests(5, [selector], NAMES)
