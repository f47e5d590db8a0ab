"""
Label normalization helpers shared by the source extractors.

TLD labels are kept in Unicode form everywhere in the pipeline; they are only
encoded back to their ASCII (punycode) form for URLs.
"""

from typing import Hashable, Iterable, TypeVar

import idna

ACE_PREFIX = "xn--"

T = TypeVar("T", bound=Hashable)


def unique_in_order(sequence: Iterable[T]) -> list[T]:
    """Return the items of sequence without repeats, keeping first-seen order."""
    return list(dict.fromkeys(sequence))


def duplicates(sequence: Iterable[T]) -> list[T]:
    """Return the items that occur more than once, in first-repeat order."""
    seen: set = set()
    repeated: list[T] = []
    for item in sequence:
        if item in seen and item not in repeated:
            repeated.append(item)
        seen.add(item)
    return repeated


def decode_label(label: str) -> str:
    """
    Decode an ``xn--`` label to Unicode; other labels are returned unchanged.

    Labels rejected by IDNA 2008 validation are decoded as raw punycode.
    """
    if not label.lower().startswith(ACE_PREFIX):
        return label
    try:
        return idna.decode(label)
    except idna.IDNAError:
        return label[len(ACE_PREFIX):].encode("ascii").decode("punycode")


def encode_label(label: str) -> str:
    """Encode a Unicode label to its ASCII form for use in URLs."""
    if label.isascii():
        return label
    return idna.encode(label, uts46=True).decode("ascii")


def diff_unordered(actual: Iterable[str], expected: Iterable[str]) -> tuple[list[str], list[str]]:
    """
    Compare two label collections ignoring order.

    Returns:
        Tuple of (in actual but not expected, in expected but not actual)
    """
    actual_list = list(actual)
    expected_list = list(expected)
    expected_set = set(expected_list)
    actual_set = set(actual_list)
    added = [item for item in actual_list if item not in expected_set]
    missing = [item for item in expected_list if item not in actual_set]
    return added, missing
