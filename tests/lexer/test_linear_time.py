"""Tokenizing time grows linearly with message length.

Unmatched openers are the worst case: every "[" or "*" looks for a closing
delimiter. Each search must reuse earlier answers instead of rescanning the
rest of the message.
"""

import time

import pytest

from chatmark import tokenize
from chatmark.lexer import Lexer


class _CountingSource(str):
    """Message text that records how many characters find() reads."""

    scanned = 0

    def find(self, sub: str, start: int = 0, end: int | None = None) -> int:  # type: ignore[override]
        stop = len(self) if end is None else min(end, len(self))
        found = super().find(sub, start, stop)
        self.scanned += (stop if found == -1 else found + len(sub)) - start
        return found


def _scanned(text: str) -> int:
    source = _CountingSource(text)
    source.scanned = 0
    list(Lexer(source).tokenize())
    return source.scanned


PATHOLOGICAL = {
    "open_brackets": lambda n: "[" * n,
    "brackets_then_text": lambda n: "[" * n + "x" * n,
    "shared_close": lambda n: "[" * n + "](" + "x" * n,
    "open_backticks": lambda n: "`\n" * n,
    "fence_openers": lambda n: "```\n" * n,
    "emphasis_across_lines": lambda n: "*a\n_b\n~~c\n" * n,
    "quotes": lambda n: "> [x\n" * n,
}


class TestSearchBudget:
    @pytest.mark.parametrize("name", sorted(PATHOLOGICAL))
    def test_delimiter_searches_are_linear(self, name: str) -> None:
        text = PATHOLOGICAL[name](2000)
        assert _scanned(text) <= 16 * len(text)

    @pytest.mark.parametrize("name", sorted(PATHOLOGICAL))
    def test_budget_does_not_depend_on_size(self, name: str) -> None:
        small = PATHOLOGICAL[name](500)
        large = PATHOLOGICAL[name](4000)
        per_char_small = _scanned(small) / len(small)
        per_char_large = _scanned(large) / len(large)
        assert per_char_large <= per_char_small * 1.5 + 1

    def test_memoized_results_stay_correct(self) -> None:
        """Reused searches still find the right closer for each opener."""
        source = "[[a](https://x.com) **b** [c](https://y.com) `d` **e"
        assert tokenize(_CountingSource(source)) == tokenize(source)


def _best_time(text: str, repeat: int = 3) -> float:
    best = float("inf")
    for _ in range(repeat):
        start = time.perf_counter()
        tokenize(text)
        best = min(best, time.perf_counter() - start)
    return best


class TestScaling:
    @pytest.mark.parametrize("name", ["open_brackets", "shared_close"])
    def test_four_times_the_input_is_not_sixteen_times_slower(self, name: str) -> None:
        small = _best_time(PATHOLOGICAL[name](10_000))
        large = _best_time(PATHOLOGICAL[name](40_000))
        assert large < small * 8
