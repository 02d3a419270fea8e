"""Independent similarity scorers on already-normalized bank names.

Every scorer returns a value in ``[0, 100]``. Inputs are expected to be the
output of :func:`bank_name_dedupe.steps.normalize.normalize_name`; only
:func:`soundex` strips non-letters on its own.
"""

from __future__ import annotations

_SOUNDEX_CODES = {
    **dict.fromkeys("AEIOUYHW", "0"),
    **dict.fromkeys("BFPV", "1"),
    **dict.fromkeys("CGJKQSXZ", "2"),
    **dict.fromkeys("DT", "3"),
    "L": "4",
    **dict.fromkeys("MN", "5"),
    "R": "6",
}

_WINKLER_PREFIX_CAP = 4
_WINKLER_SCALE = 0.1


def levenshtein_distance(left: str, right: str) -> int:
    if left == right:
        return 0
    if not left:
        return len(right)
    if not right:
        return len(left)

    prev = list(range(len(right) + 1))
    for i, c1 in enumerate(left, start=1):
        curr = [i]
        for j, c2 in enumerate(right, start=1):
            cost = 0 if c1 == c2 else 1
            curr.append(min(curr[j - 1] + 1, prev[j] + 1, prev[j - 1] + cost))
        prev = curr
    return prev[-1]


def edit_ratio(left: str, right: str) -> float:
    """``(1 - distance / max_len) * 100``; two empty strings are identical."""
    max_len = max(len(left), len(right))
    if max_len == 0:
        return 100.0
    return (1.0 - levenshtein_distance(left, right) / max_len) * 100


def jaro_similarity(left: str, right: str) -> float:
    if left == right:
        return 1.0

    window = max(len(left), len(right)) // 2 - 1
    left_flags = [False] * len(left)
    right_flags = [False] * len(right)

    matches = 0
    for i, char in enumerate(left):
        start = max(0, i - window)
        end = min(i + window + 1, len(right))
        for j in range(start, end):
            if right_flags[j] or right[j] != char:
                continue
            left_flags[i] = True
            right_flags[j] = True
            matches += 1
            break

    if matches == 0:
        return 0.0

    left_matched = [char for char, hit in zip(left, left_flags) if hit]
    right_matched = [char for char, hit in zip(right, right_flags) if hit]
    transpositions = sum(1 for a, b in zip(left_matched, right_matched) if a != b) / 2

    return (matches / len(left) + matches / len(right) + (matches - transpositions) / matches) / 3


def jaro_winkler(left: str, right: str) -> float:
    jaro = jaro_similarity(left, right)

    prefix = 0
    for a, b in zip(left[:_WINKLER_PREFIX_CAP], right[:_WINKLER_PREFIX_CAP]):
        if a != b:
            break
        prefix += 1

    return (jaro + prefix * _WINKLER_SCALE * (1 - jaro)) * 100


def token_sort_ratio(left: str, right: str) -> float:
    """Edit ratio after sorting the space-separated tokens of both names."""
    return edit_ratio(_sorted_tokens(left), _sorted_tokens(right))


def token_set_ratio(left: str, right: str) -> float:
    """Edit ratio of ``shared + only_left`` against ``shared + only_right``.

    Tokens are de-duplicated and every segment keeps the first-occurrence
    order of its source name, so both comparison strings list the shared
    tokens identically.
    """
    left_tokens = list(dict.fromkeys(left.split(" ")))
    right_tokens = list(dict.fromkeys(right.split(" ")))
    right_set = set(right_tokens)
    left_set = set(left_tokens)

    shared = [token for token in left_tokens if token in right_set]
    only_left = [token for token in left_tokens if token not in right_set]
    only_right = [token for token in right_tokens if token not in left_set]

    return edit_ratio(" ".join(shared + only_left), " ".join(shared + only_right))


def soundex(value: str) -> str:
    """Four-character phonetic code; empty when ``value`` has no letters.

    The first letter is kept verbatim. The remaining letters are coded,
    adjacent equal digits collapsed, zeros dropped, and the result padded
    with zeros to four characters.
    """
    letters = "".join(char for char in value.upper() if "A" <= char <= "Z")
    if not letters:
        return ""

    digits = [_SOUNDEX_CODES[char] for char in letters[1:]]
    collapsed: list[str] = []
    for digit in digits:
        if not collapsed or collapsed[-1] != digit:
            collapsed.append(digit)
    coded = "".join(digit for digit in collapsed if digit != "0")

    return (letters[0] + coded + "000")[:4]


def phonetic_score(left: str, right: str) -> float:
    # Two names without letters share the empty code and count as equal.
    return 100.0 if soundex(left) == soundex(right) else 0.0


def _sorted_tokens(value: str) -> str:
    return " ".join(sorted(value.split(" ")))
