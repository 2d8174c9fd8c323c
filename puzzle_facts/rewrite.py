"""Shorten text that does not fit its cell.

Strategies are tried from least to most lossy; each one yields candidate texts
and the first candidate that fits wins. Adding a strategy means adding a
function to :data:`DEFAULT_STRATEGIES`.
"""

import logging
import re
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from .models import RewriteResult, TextFitResult

logger = logging.getLogger(__name__)

FitFunction = Callable[[str], TextFitResult]
Strategy = Callable[[str, float], Iterable[str]]

DEFAULT_MIN_RETENTION = 0.6

_SENTENCE_SPLIT = re.compile(r"[.!?]+")
_CLAUSE_SPLIT = re.compile(r"[,:;]+")
_TOKEN_EDGE = re.compile(r"^[^\w]+|[^\w]+$", re.UNICODE)

STOPWORDS = frozenset(
    """
    a an the and or but if then than that this these those there their they them
    is are was were be been being am do does did have has had having
    of to in on at by for with from into onto over under about after before
    as so such very too also just only not no nor
    it its he she we you i me my our your his her him us
    which who whom whose what when where why how
    will would can could should shall may might must
    и в во не что он на я с со как а то все она так его но да ты к у же вы за
    бы по только ее мне было вот от меня еще нет о из ему теперь когда даже ну
    ли если уже или ни быть был него до вас нибудь опять уж вам ведь там потом
    себя ничего ей может они тут где есть надо ней для мы тебя их чем была сам
    чтоб без будто чего раз тоже себе под будет ж тогда кто этот того потому
    этого какой совсем ним здесь этом один почти мой тем чтобы нее были куда
    зачем всех никогда можно при наконец два об другой хоть после над больше
    тот через эти нас про всего них какая много разве три эту моя впрочем
    хорошо свою этой перед иногда лучше чуть том нельзя такой им более всегда
    конечно всю между это
    """.split()
)


def _split_pieces(text: str, pattern: "re.Pattern[str]") -> List[str]:
    return [piece.strip() for piece in pattern.split(text) if piece.strip()]


def original_text(text: str, min_retention: float) -> Iterable[str]:
    """The text as given."""
    yield text


def sentences(text: str, min_retention: float) -> Iterable[str]:
    """Each sentence on its own, in order."""
    return _split_pieces(text, _SENTENCE_SPLIT)


def clauses(text: str, min_retention: float) -> Iterable[str]:
    """Each clause on its own, in order."""
    return _split_pieces(text, _CLAUSE_SPLIT)


def _is_filler(token: str) -> bool:
    core = _TOKEN_EDGE.sub("", token)
    return len(core) <= 2 or core.lower() in STOPWORDS


def without_stopwords(text: str, min_retention: float) -> Iterable[str]:
    """The text without stopwords and very short tokens.

    Only offered when the result keeps at least ``min_retention`` of the
    original length.
    """
    kept = " ".join(token for token in text.split() if not _is_filler(token))
    if kept and len(kept) >= min_retention * len(text):
        yield kept


DEFAULT_STRATEGIES: Tuple[Strategy, ...] = (original_text, sentences, clauses, without_stopwords)


def first_success(
    candidates: Iterable[str], fit: FitFunction
) -> Tuple[Optional[str], Optional[TextFitResult], Optional[TextFitResult]]:
    """Evaluate candidates in order until one fits.

    Args:
        candidates: Candidate texts; duplicates are evaluated once.
        fit: Layout function for the target cell.

    Returns:
        Tuple of (winning text, its fit, last evaluated fit). The first two are
        None when nothing fits.
    """
    seen = set()
    last: Optional[TextFitResult] = None
    for candidate in candidates:
        if not candidate or candidate in seen:
            continue
        seen.add(candidate)
        result = fit(candidate)
        last = result
        if not result.truncated:
            return candidate, result, last
    return None, None, last


def auto_rewrite(
    text: str,
    fit: FitFunction,
    strategies: Sequence[Strategy] = DEFAULT_STRATEGIES,
    min_retention: float = DEFAULT_MIN_RETENTION,
) -> RewriteResult:
    """Find a shorter version of ``text`` that fits.

    Args:
        text: Sanitized text that was reported as truncated.
        fit: Layout function for the target cell.
        strategies: Candidate generators, least lossy first.
        min_retention: Length share the stopword-trimmed text must keep.

    Returns:
        The first fitting candidate, or ``failed=True`` with the original text
        and the last fit attempt.
    """

    def _candidates() -> Iterable[str]:
        for strategy in strategies:
            yield from strategy(text, min_retention)

    winner, winner_fit, last = first_success(_candidates(), fit)
    if winner is not None and winner_fit is not None:
        changed = winner != text
        if changed:
            logger.info("Shortened text from %d to %d chars", len(text), len(winner))
        return RewriteResult(text=winner, changed=changed, fit=winner_fit)

    logger.info("No shorter version of a %d char text fits", len(text))
    return RewriteResult(text=text, changed=False, fit=last if last is not None else fit(text), failed=True)
