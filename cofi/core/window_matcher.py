"""Window identity predicates.

Pure functions used by the identity registries to decide whether a live
window is the "same" window as a stored entry whose id has gone stale.
Independent of the match scorer.

Key Functions:
- exact_match(): class, instance, type and title all equal
- fuzzy_title_match(): same class/instance/type, titles loosely equal
- wildcard_match(): glob-style title pattern ('*' any run, '.' one char)
"""

from typing import Protocol

from ..models.window import WindowType

TITLE_SEPARATOR = " - "


class WindowIdentity(Protocol):
    """Anything carrying the identity fields of a window."""
    title: str
    class_name: str
    instance: str
    type: WindowType


def same_application(a: WindowIdentity, b: WindowIdentity) -> bool:
    """Check class, instance and type equality."""
    return (
        a.class_name == b.class_name
        and a.instance == b.instance
        and a.type == b.type
    )


def exact_match(a: WindowIdentity, b: WindowIdentity) -> bool:
    """Check that two windows share class, instance, type and title.

    Examples:
        >>> exact_match(slot.as_descriptor(), live_window)
        True
    """
    return same_application(a, b) and a.title == b.title


def title_base_length(title: str) -> int:
    """Length of the part of a title before the first " - ".

    Returns:
        0 if the title has no separator (or it starts the title)

    Examples:
        >>> title_base_length("App - Doc1")
        3
        >>> title_base_length("App")
        0
    """
    pos = title.find(TITLE_SEPARATOR)
    return pos if pos > 0 else 0


def titles_match_fuzzy(title1: str, title2: str) -> bool:
    """Loose title equality.

    Titles match if any of:
    - they are identical
    - both have a " - " separator and the parts before it are equal
      ("App - Doc1" vs "App - Doc2")
    - one title contains the other
    """
    if title1 == title2:
        return True

    base1 = title_base_length(title1)
    base2 = title_base_length(title2)
    if base1 > 0 and base1 == base2 and title1[:base1] == title2[:base2]:
        return True

    return title2 in title1 or title1 in title2


def fuzzy_title_match(a: WindowIdentity, b: WindowIdentity) -> bool:
    """Same application and loosely equal titles."""
    return same_application(a, b) and titles_match_fuzzy(a.title, b.title)


def wildcard_match(pattern: str, text: str) -> bool:
    """Glob-style match of a whole string.

    '*' matches any run of characters (including none), '.' matches
    exactly one character, everything else matches literally. Both the
    pattern and the text must be fully consumed.

    Examples:
        >>> wildcard_match("Foo*", "Foo Bar Baz")
        True
        >>> wildcard_match("F.o", "Foo")
        True
        >>> wildcard_match("F.o", "Fo")
        False
    """
    p = t = 0
    star = -1
    star_text = 0

    while t < len(text):
        if p < len(pattern) and pattern[p] == "*":
            # Remember the star, try matching it against nothing first
            star = p
            star_text = t
            p += 1
        elif p < len(pattern) and (pattern[p] == "." or pattern[p] == text[t]):
            p += 1
            t += 1
        elif star != -1:
            # Backtrack: let the last star swallow one more character
            p = star + 1
            star_text += 1
            t = star_text
        else:
            return False

    # Trailing stars match the empty remainder
    while p < len(pattern) and pattern[p] == "*":
        p += 1

    return p == len(pattern)
