"""Tests for the auto-rewrite reducer."""

from typing import Callable, List, Optional

import pytest

from puzzle_facts import TextFitResult, auto_rewrite, first_success, fit_text
from puzzle_facts.rewrite import clauses, sentences, without_stopwords


def length_fit(limit: int, calls: Optional[List[str]] = None) -> Callable[[str], TextFitResult]:
    """Fit function that accepts texts up to ``limit`` characters."""

    def fit(text: str) -> TextFitResult:
        if calls is not None:
            calls.append(text)
        truncated = len(text) > limit
        return TextFitResult(
            lines=(text,),
            font_size=12,
            line_height=14.4,
            truncated=truncated,
            reason="too_many_lines" if truncated else None,
        )

    return fit


class TestStrategies:
    """Tests for the individual candidate generators."""

    def test_sentences(self) -> None:
        """Sentences split on terminal punctuation."""
        assert list(sentences("One. Two!! Three? ", 0.6)) == ["One", "Two", "Three"]

    def test_clauses(self) -> None:
        """Clauses split on commas, colons and semicolons."""
        assert list(clauses("a, b: c; d", 0.6)) == ["a", "b", "c", "d"]

    def test_without_stopwords(self) -> None:
        """Stopwords and tokens of two characters or fewer are dropped."""
        text = "The quick brown fox jumps over the lazy dog in the park"
        assert list(without_stopwords(text, 0.6)) == ["quick brown fox jumps lazy dog park"]

    def test_without_stopwords_russian(self) -> None:
        """Russian stopwords are recognised."""
        assert list(without_stopwords("и это большой дом", 0.0)) == ["большой дом"]

    def test_without_stopwords_retention(self) -> None:
        """Nothing is offered when too little text would remain."""
        text = "The quick brown fox jumps over the lazy dog in the park"
        assert list(without_stopwords(text, 0.9)) == []


class TestFirstSuccess:
    """Tests for the candidate combinator."""

    def test_returns_first_fit(self) -> None:
        """Later candidates are not evaluated once one fits."""
        calls: List[str] = []
        winner, result, last = first_success(["too long text", "short", "tiny"], length_fit(6, calls))
        assert winner == "short"
        assert result is last
        assert calls == ["too long text", "short"]

    def test_duplicates_evaluated_once(self) -> None:
        """A candidate repeated by several strategies is only laid out once."""
        calls: List[str] = []
        first_success(["aaaaaaa", "", "aaaaaaa", "bbbbbbb"], length_fit(3, calls))
        assert calls == ["aaaaaaa", "bbbbbbb"]

    def test_nothing_fits(self) -> None:
        """No winner yields the last evaluated fit."""
        winner, result, last = first_success(["long one", "long two"], length_fit(3))
        assert winner is None
        assert result is None
        assert last is not None
        assert last.lines == ("long two",)

    def test_no_candidates(self) -> None:
        """An empty candidate list yields nothing."""
        assert first_success([], length_fit(3)) == (None, None, None)


class TestAutoRewrite:
    """Tests for the strategy chain."""

    def test_original_wins_when_it_fits(self) -> None:
        """Fitting text is returned unchanged."""
        result = auto_rewrite("Fits fine", length_fit(20))
        assert result.text == "Fits fine"
        assert not result.changed
        assert not result.failed

    def test_first_sentence(self) -> None:
        """The first sentence that fits the real layout wins."""
        text = "Short sentence one. The second sentence goes on and on about many things that do not fit at all."
        fit = lambda candidate: fit_text(candidate, 120, 40, 4)  # noqa: E731
        assert fit(text).truncated

        result = auto_rewrite(text, fit)
        assert result.text == "Short sentence one"
        assert result.changed
        assert not result.fit.truncated

    def test_clause_fallback(self) -> None:
        """Clauses are tried when no sentence fits."""
        text = "Tiny, and then an extremely long clause continues far beyond what fits"
        result = auto_rewrite(text, length_fit(10))
        assert result.text == "Tiny"
        assert result.changed

    def test_stopword_fallback(self) -> None:
        """Stopword removal is the last resort."""
        calls: List[str] = []
        text = "The quick brown fox jumps over the lazy dog in the park"
        result = auto_rewrite(text, length_fit(40, calls))
        assert result.text == "quick brown fox jumps lazy dog park"
        assert result.changed
        # Sentence and clause splits repeat the original and are skipped
        assert calls == [text, "quick brown fox jumps lazy dog park"]

    def test_failure_keeps_original(self) -> None:
        """When nothing fits the original text is kept and flagged."""
        text = "The quick brown fox jumps over the lazy dog in the park"
        result = auto_rewrite(text, length_fit(40), min_retention=0.9)
        assert result.failed
        assert not result.changed
        assert result.text == text
        assert result.fit.truncated

    def test_custom_strategies(self) -> None:
        """New strategies plug into the chain."""

        def first_word(text: str, min_retention: float):
            yield text.split()[0]

        result = auto_rewrite("Supercalifragilistic expialidocious", length_fit(25), strategies=[first_word])
        assert result.text == "Supercalifragilistic"

    @pytest.mark.parametrize("text", ["Snails can sleep for three years", "A day on Venus is longer than its year"])
    def test_changed_iff_text_differs(self, text: str) -> None:
        """The changed flag reports whether the text was shortened."""
        result = auto_rewrite(text, length_fit(100))
        assert result.changed == (result.text != text)
