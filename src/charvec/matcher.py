"""Exact pattern search over arrays of scalar values

Every function here works on plain uint32 arrays. CharVec and CharView
convert their arguments and hand over their buffers.
"""

from __future__ import annotations
from typing import Optional

import numpy as np

from .errors import InvalidRangeError, OutOfRangeError


def find(
    subject: np.ndarray,
    pattern: np.ndarray,
    start_pos: int = 0,
    end_pos: Optional[int] = None,
) -> Optional[int]:
    """Find the first index where pattern occurs in subject

    Candidate start indices are scanned left to right over
    [start_pos, end_pos], so `end_pos` bounds where a match may begin,
    not where it ends.

    Args:
        subject: The array to search
        pattern: The array to look for. An empty pattern never matches
        start_pos: The first candidate index
        end_pos: The last candidate index. Defaults to the last index of subject

    Returns:
        Optional[int]: The earliest matching index, or None

    Raises:
        OutOfRangeError: start_pos or end_pos lies outside a non-empty subject
        InvalidRangeError: end_pos is lower than start_pos
    """
    size = len(subject)
    if size == 0:
        return None

    if start_pos < 0 or start_pos >= size:
        raise OutOfRangeError(
            f"start_pos {start_pos} must be lower than the length {size}"
        )
    if end_pos is None:
        end_pos = size - 1
    else:
        if end_pos >= size:
            raise OutOfRangeError(
                f"end_pos {end_pos} must be lower than the length {size}"
            )
        if end_pos < start_pos:
            raise InvalidRangeError(
                f"end_pos {end_pos} cannot be lower than start_pos {start_pos}"
            )

    plen = len(pattern)
    if plen == 0:
        return None
    if plen + start_pos > size:
        return None

    # A match starting past here would run off the end
    last = min(end_pos, size - plen)

    # Only positions holding the first pattern value can start a match
    candidates = np.flatnonzero(subject[start_pos : last + 1] == pattern[0])
    for offset in candidates:
        idx = start_pos + int(offset)
        if np.array_equal(subject[idx : idx + plen], pattern):
            return idx
    return None


def find_all(subject: np.ndarray, pattern: np.ndarray) -> list[int]:
    """Get the start index of every non-overlapping occurrence of pattern

    Each search restarts right after the end of the previous match
    """
    matches: list[int] = []
    plen = len(pattern)
    next_start = 0
    while next_start < len(subject):
        idx = find(subject, pattern, next_start)
        if idx is None:
            break
        matches.append(idx)
        next_start = idx + plen
    return matches


def contains(subject: np.ndarray, pattern: np.ndarray) -> bool:
    return find(subject, pattern, 0) is not None


def starts_with(subject: np.ndarray, pattern: np.ndarray) -> bool:
    plen = len(pattern)
    if plen > len(subject):
        return False
    return bool(np.array_equal(subject[:plen], pattern))


def ends_with(subject: np.ndarray, pattern: np.ndarray) -> bool:
    plen = len(pattern)
    if plen > len(subject):
        return False
    return bool(np.array_equal(subject[len(subject) - plen :], pattern))
