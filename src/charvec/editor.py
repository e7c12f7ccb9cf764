"""Buffer rebuilding for the mutating CharVec operations

Each function takes the current buffer and returns the buffer that should
replace it. Nothing here modifies its input, so a failure part way through
leaves the caller's sequence untouched.
"""

from __future__ import annotations
import logging
from typing import Optional

import numpy as np

from . import matcher
from .errors import OutOfRangeError
from .normalizer import CHAR_DTYPE, is_whitespace

logger = logging.getLogger(__name__)


def splice(
    data: np.ndarray, at_pos: int, remove: int, content: np.ndarray
) -> np.ndarray:
    """Replace `remove` values starting at at_pos with content"""
    return np.concatenate((data[:at_pos], content, data[at_pos + remove :])).astype(
        CHAR_DTYPE, copy=False
    )


def push_back(data: np.ndarray, content: np.ndarray) -> np.ndarray:
    return splice(data, len(data), 0, content)


def push_front(data: np.ndarray, content: np.ndarray) -> np.ndarray:
    return splice(data, 0, 0, content)


def insert(data: np.ndarray, content: np.ndarray, at_pos: int) -> np.ndarray:
    """Insert content before the value at at_pos

    Inserting at the very end is rejected, use push_back for that

    Raises:
        OutOfRangeError: at_pos is not an index of data
    """
    if at_pos < 0 or at_pos >= len(data):
        logger.debug("Rejected insert at %d into %d values", at_pos, len(data))
        raise OutOfRangeError(
            f"at_pos {at_pos} must be lower than the length {len(data)}"
        )
    return splice(data, at_pos, 0, content)


def leading_whitespace(data: np.ndarray) -> int:
    """Count the whitespace values at the start of the array"""
    keep = ~is_whitespace(data)
    if not keep.any():
        return len(data)
    return int(np.argmax(keep))


def trailing_whitespace(data: np.ndarray) -> int:
    """Count the whitespace values at the end of the array"""
    keep = ~is_whitespace(data)
    if not keep.any():
        return len(data)
    return int(np.argmax(keep[::-1]))


def trim_start(data: np.ndarray) -> np.ndarray:
    return data[leading_whitespace(data) :].copy()


def trim_end(data: np.ndarray) -> np.ndarray:
    return data[: len(data) - trailing_whitespace(data)].copy()


def trim(data: np.ndarray) -> np.ndarray:
    keep = np.flatnonzero(~is_whitespace(data))
    if not len(keep):
        return data[:0].copy()
    return data[keep[0] : keep[-1] + 1].copy()


def replace_first(
    data: np.ndarray,
    pattern: np.ndarray,
    replacement: np.ndarray,
    start_pos: int = 0,
    end_pos: Optional[int] = None,
) -> tuple[np.ndarray, Optional[int]]:
    """Replace the first match of pattern found in [start_pos, end_pos]

    Returns:
        np.ndarray: The new buffer, or data itself when nothing matched
        Optional[int]: The index of the replacement, or None
    """
    idx = matcher.find(data, pattern, start_pos, end_pos)
    if idx is None:
        return data, None
    return splice(data, idx, len(pattern), replacement), idx


def replace_all(
    data: np.ndarray, pattern: np.ndarray, replacement: np.ndarray
) -> Optional[tuple[np.ndarray, int]]:
    """Replace every non-overlapping match of pattern in one rebuild

    Returns:
        Optional[tuple[np.ndarray, int]]: The new buffer and the number of
            replacements, or None when the pattern does not occur
    """
    matches = matcher.find_all(data, pattern)
    if not matches:
        return None

    plen = len(pattern)
    pieces: list[np.ndarray] = []
    last = 0
    for idx in matches:
        pieces.append(data[last:idx])
        pieces.append(replacement)
        last = idx + plen
    pieces.append(data[last:])

    logger.debug("Replaced %d matches of a %d value pattern", len(matches), plen)
    return np.concatenate(pieces).astype(CHAR_DTYPE, copy=False), len(matches)


def split_spans(data: np.ndarray, delimiter: np.ndarray) -> list[tuple[int, int]]:
    """Get the [start, end) spans between non-overlapping delimiters

    Empty spans are left out, and a delimiter that never occurs gives
    no spans at all
    """
    matches = matcher.find_all(data, delimiter)
    if not matches:
        return []

    dlen = len(delimiter)
    spans: list[tuple[int, int]] = []
    last = 0
    for idx in matches:
        if idx > last:
            spans.append((last, idx))
        last = idx + dlen
    if last < len(data):
        spans.append((last, len(data)))
    return spans


def reverse(data: np.ndarray) -> np.ndarray:
    return data[::-1].copy()
