"""Tiered match scoring for the window filter.

Scores a typed query against a window using an ordered cascade of match
strategies. Strategies are evaluated in priority order and the first one
that matches decides the tier (short-circuit evaluation), so a higher tier
never falls through to a lower one.

Tiers:
    1. Word boundary  2000  query starts at a word of the title
    2. Initials       1900  query spells the first letters of words
    3. Subsequence    1500  query characters appear in order in the title
                      1400  ... or in the class / instance
    4. Fuzzy          1000+ scored subsequence ignoring query whitespace

Windows on the user's current workspace get a flat +500.

Examples:
    >>> window = WindowDescriptor(id=1, title="Visual Studio Code", desktop=0)
    >>> score("vsc", window, current_desktop=1)
    Score(value=1900, tier=<MatchTier.INITIALS: 'initials'>)
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from ..constants import (
    SCORE_CLASS_INSTANCE_MATCH,
    SCORE_CURRENT_WORKSPACE_BONUS,
    SCORE_FUZZY_BASE,
    SCORE_FUZZY_CASE_BONUS,
    SCORE_FUZZY_CONSECUTIVE_BONUS,
    SCORE_FUZZY_POSITION_PENALTY,
    SCORE_INITIALS_EXTRA_WORD_BONUS,
    SCORE_INITIALS_MATCH,
    SCORE_SUBSEQUENCE_MATCH,
    SCORE_TITLE_START_BONUS,
    SCORE_UNFILTERED,
    SCORE_WORD_BOUNDARY,
    SCORE_WORD_CHAIN_BONUS,
    WORD_BOUNDARY_CHARS,
)
from ..models.filter_state import MatchTier, Score
from ..models.window import WindowDescriptor

# Fuzzy detail never lifts a fuzzy match into the class/instance tier
FUZZY_DETAIL_CAP = SCORE_CLASS_INSTANCE_MATCH - SCORE_FUZZY_BASE - 1


@dataclass(frozen=True)
class MatchContext:
    """Inputs shared by every strategy for one (query, window) pair."""
    needle: str        # lower-cased query
    title: str         # workspace-aware scoring title
    class_name: str
    instance: str


MatchStrategy = Callable[[MatchContext], Optional[Score]]


# Text helpers

def is_word_start(text: str, index: int) -> bool:
    """Check if index starts a word (start of string or after a boundary char)."""
    return index == 0 or text[index - 1] in WORD_BOUNDARY_CHARS


def word_start_indices(text: str) -> List[int]:
    """Indices of word starts, skipping boundary characters themselves."""
    return [
        i for i, ch in enumerate(text)
        if ch not in WORD_BOUNDARY_CHARS and is_word_start(text, i)
    ]


def split_words(text: str) -> List[str]:
    """Split text into non-empty words on boundary characters."""
    words = []
    current = []
    for ch in text:
        if ch in WORD_BOUNDARY_CHARS:
            if current:
                words.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        words.append("".join(current))
    return words


def is_subsequence(needle: str, haystack: str) -> bool:
    """Case-insensitive in-order (not necessarily contiguous) containment."""
    it = iter(haystack.lower())
    return all(ch in it for ch in needle.lower())


def _common_prefix_length(a: str, b: str) -> int:
    length = 0
    for x, y in zip(a, b):
        if x != y:
            break
        length += 1
    return length


def word_chain_length(needle: str, title: str) -> int:
    """Longest run of extra consecutive words continuing the needle.

    Starting from each word of the title, the needle is consumed by the
    leading characters of that word and the words after it (boundary
    characters in the needle are skipped between words). Returns the
    number of words consumed after the first one, maximised over all
    starting words.

    Examples:
        >>> word_chain_length("visual stu", "visual studio code")
        1
        >>> word_chain_length("code", "code review tool")
        0
    """
    words = split_words(title.lower())
    needle = needle.lower()
    best = 0

    for start in range(len(words)):
        pos = 0
        chained = 0
        for offset, word in enumerate(words[start:]):
            while pos < len(needle) and needle[pos] in WORD_BOUNDARY_CHARS:
                pos += 1
            if pos >= len(needle):
                break
            common = _common_prefix_length(needle[pos:], word)
            if common == 0:
                break
            if offset > 0:
                chained += 1
            pos += common
        best = max(best, chained)

    return best


# Strategies, in priority order

def match_word_boundary(ctx: MatchContext) -> Optional[Score]:
    """Needle appears contiguously starting at a word boundary of the title."""
    title_lower = ctx.title.lower()
    match_pos = None
    for i in range(len(title_lower)):
        if is_word_start(title_lower, i) and title_lower.startswith(ctx.needle, i):
            match_pos = i
            break

    if match_pos is None:
        return None

    value = SCORE_WORD_BOUNDARY
    value += SCORE_WORD_CHAIN_BONUS * word_chain_length(ctx.needle, title_lower)
    if match_pos == 0:
        value += SCORE_TITLE_START_BONUS

    return Score(value, MatchTier.WORD_BOUNDARY)


def match_initials(ctx: MatchContext) -> Optional[Score]:
    """Needle spells, in order, the first letters of words in the title."""
    initials = [ctx.title[i].lower() for i in word_start_indices(ctx.title)]
    needle_idx = 0
    words_consumed = 0

    for word_idx, initial in enumerate(initials):
        if initial == ctx.needle[needle_idx]:
            needle_idx += 1
            if needle_idx == len(ctx.needle):
                words_consumed = word_idx + 1
                break

    if needle_idx < len(ctx.needle):
        return None

    extra_words = words_consumed - len(ctx.needle)
    return Score(
        SCORE_INITIALS_MATCH + SCORE_INITIALS_EXTRA_WORD_BONUS * extra_words,
        MatchTier.INITIALS,
    )


def match_title_subsequence(ctx: MatchContext) -> Optional[Score]:
    if is_subsequence(ctx.needle, ctx.title):
        return Score(SCORE_SUBSEQUENCE_MATCH, MatchTier.SUBSEQUENCE)
    return None


def match_class_instance_subsequence(ctx: MatchContext) -> Optional[Score]:
    if is_subsequence(ctx.needle, ctx.class_name) or is_subsequence(ctx.needle, ctx.instance):
        return Score(SCORE_CLASS_INSTANCE_MATCH, MatchTier.SUBSEQUENCE)
    return None


def _position_bonus(text: str, pos: int) -> int:
    camel_hump = pos > 0 and text[pos].isupper() and text[pos - 1].islower()
    if is_word_start(text, pos) or camel_hump:
        return SCORE_FUZZY_CASE_BONUS
    return 0


def fuzzy_detail_score(needle: str, text: str) -> Optional[int]:
    """Scored subsequence match, ignoring whitespace in the needle.

    Each matched character earns 1, plus a bonus when it directly follows
    the previous match and a bonus when it starts a word or a camelCase
    hump. The distance of the first match from the start is a penalty.
    Of all in-order alignments of the needle, the best-scoring one counts.

    Examples:
        >>> fuzzy_detail_score("vsc", "VisualStudioCode")
        33

    Returns:
        Detail score clamped to [0, FUZZY_DETAIL_CAP], or None if the
        needle characters do not all appear in order
    """
    chars = [ch for ch in needle.lower() if not ch.isspace()]
    if not chars or not text:
        return None

    text_lower = text.lower()
    bonuses = [_position_bonus(text, pos) for pos in range(len(text))]

    # best[pos]: best score with the current needle char matched at pos
    best: List[Optional[int]] = [
        1 + bonuses[pos] - SCORE_FUZZY_POSITION_PENALTY * pos if c == chars[0] else None
        for pos, c in enumerate(text_lower)
    ]

    for ch in chars[1:]:
        previous = best
        best = [None] * len(text)
        # Best of previous[0 .. pos-2], i.e. matches not adjacent to pos
        gapped: Optional[int] = None
        for pos, c in enumerate(text_lower):
            if pos >= 2 and previous[pos - 2] is not None:
                if gapped is None or previous[pos - 2] > gapped:
                    gapped = previous[pos - 2]
            if c != ch:
                continue
            options = []
            if gapped is not None:
                options.append(gapped)
            if pos >= 1 and previous[pos - 1] is not None:
                options.append(previous[pos - 1] + SCORE_FUZZY_CONSECUTIVE_BONUS)
            if options:
                best[pos] = 1 + bonuses[pos] + max(options)

    matched = [s for s in best if s is not None]
    if not matched:
        return None
    return max(0, min(max(matched), FUZZY_DETAIL_CAP))


def match_fuzzy(ctx: MatchContext) -> Optional[Score]:
    """Fuzzy fallback: title first, then class and instance."""
    detail = fuzzy_detail_score(ctx.needle, ctx.title)
    if detail is None:
        candidates = [
            d for d in (
                fuzzy_detail_score(ctx.needle, ctx.class_name),
                fuzzy_detail_score(ctx.needle, ctx.instance),
            )
            if d is not None
        ]
        if not candidates:
            return None
        detail = max(candidates)

    return Score(SCORE_FUZZY_BASE + detail, MatchTier.FUZZY)


DEFAULT_STRATEGIES: Sequence[MatchStrategy] = (
    match_word_boundary,
    match_initials,
    match_title_subsequence,
    match_class_instance_subsequence,
    match_fuzzy,
)


class MatchScorer:
    """Ordered cascade of match strategies.

    Attributes:
        strategies: Strategies in priority order; the first match wins
    """

    def __init__(self, strategies: Sequence[MatchStrategy] = DEFAULT_STRATEGIES):
        self.strategies = tuple(strategies)

    def score(
        self,
        needle: str,
        window: WindowDescriptor,
        current_desktop: int,
        title: Optional[str] = None,
    ) -> Optional[Score]:
        """Score a window against a query.

        Args:
            needle: Query text as typed
            window: Window to score
            current_desktop: User's current workspace index
            title: Title to score instead of window.title (custom names)

        Returns:
            Score with its tier, or None if the window does not match
        """
        if not needle:
            return Score(SCORE_UNFILTERED, MatchTier.UNFILTERED)

        ctx = MatchContext(
            needle=needle.lower(),
            title=window.workspace_title(title),
            class_name=window.class_name,
            instance=window.instance,
        )

        result = None
        for strategy in self.strategies:
            result = strategy(ctx)
            if result is not None:
                break

        if result is None:
            return None

        if window.desktop == current_desktop and not window.is_sticky:
            result = result.with_bonus(SCORE_CURRENT_WORKSPACE_BONUS)

        return result


_default_scorer = MatchScorer()


def score(
    needle: str,
    window: WindowDescriptor,
    current_desktop: int,
    title: Optional[str] = None,
) -> Optional[Score]:
    """Score a window with the default strategy cascade."""
    return _default_scorer.score(needle, window, current_desktop, title=title)
