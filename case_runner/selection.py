"""Selection of the tests to run from command-line selectors."""

import re
from collections.abc import Sequence

_RANGE = re.compile(r"^(\d+):(\d+)$")


class SelectorError(Exception):
    """Raised when a test selector does not match the suite."""


def select_tests(
    count: int, selectors: Sequence[str], names: Sequence[str]
) -> Sequence[int]:
    """Resolve selectors into 1-based test numbers.

    Args:
        count: Number of tests in the suite
        selectors: Test numbers (e.g. "3"), inclusive ranges (e.g. "2:5")
            or test function names
        names: Test function names, in suite order

    Returns:
        Sorted, de-duplicated test numbers; every test when no selector is given

    """
    if not selectors:
        return list(range(1, count + 1))

    selected: set[int] = set()
    for selector in selectors:
        selected.update(_resolve_selector(selector.strip(), count, names))
    return sorted(selected)


def _resolve_selector(selector: str, count: int, names: Sequence[str]) -> range:
    if selector.isdigit():
        number = int(selector)
        _check_number(number, count)
        return range(number, number + 1)

    if match := _RANGE.match(selector):
        first, last = int(match.group(1)), int(match.group(2))
        _check_number(first, count)
        _check_number(last, count)
        if first > last:
            raise SelectorError(f"Invalid test range '{selector}'")
        return range(first, last + 1)

    if selector in names:
        number = names.index(selector) + 1
        return range(number, number + 1)

    raise SelectorError(f"No test named '{selector}'")


def _check_number(number: int, count: int) -> None:
    if not 1 <= number <= count:
        raise SelectorError(f"Test number {number} is out of range 1-{count}")
