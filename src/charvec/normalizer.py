from __future__ import annotations
import logging
import unicodedata
from typing import TYPE_CHECKING, Any

import numpy as np

from .options import OPTIONS

if TYPE_CHECKING:
    from .charvec import CharVec

logger = logging.getLogger(__name__)

# One element per unicode scalar value. Little endian so the raw buffer
# round-trips through the utf-32-le codec
CHAR_DTYPE = np.dtype("<u4")
ENC = "utf-32-le"
MAX_CODEPOINT = 0x10FFFF

# Stands in for "use the normal_form option", since None means no normalization
_OPTION = object()

# The unicode White_Space property
WHITESPACE: np.ndarray = np.array(
    [0x09, 0x0A, 0x0B, 0x0C, 0x0D, 0x20, 0x85, 0xA0, 0x1680]
    + list(range(0x2000, 0x200B))
    + [0x2028, 0x2029, 0x202F, 0x205F, 0x3000],
    dtype=CHAR_DTYPE,
)


def empty() -> np.ndarray:
    return np.empty(0, dtype=CHAR_DTYPE)


def from_codepoints(values) -> np.ndarray:
    """Convert integer code points into a new uint32 array

    Raises:
        TypeError: The values are not integers
        ValueError: A value is negative or above U+10FFFF
    """
    arr = np.asarray(values)
    if not arr.size:
        return empty()
    if arr.dtype.kind not in "iu":
        raise TypeError(f"Code points must be integers, got {arr.dtype}")
    low, high = int(arr.min()), int(arr.max())
    if low < 0 or high > MAX_CODEPOINT:
        bad = low if low < 0 else high
        raise ValueError(f"{bad:#x} is not a unicode code point")
    return arr.astype(CHAR_DTYPE).ravel()


def to_codepoints(text: str, form: Any = _OPTION) -> np.ndarray:
    """Normalize the text and split it into an array of scalar values

    Args:
        text: The text to convert
        form: The unicode normal form to apply, or None to use the text as
            given. Defaults to the `normal_form` option

    Returns:
        np.ndarray: A new, writeable uint32 array with one code point per element
    """
    if form is _OPTION:
        form = OPTIONS["normal_form"]
    if not text:
        return empty()

    normed = text if form is None else unicodedata.normalize(form, text)
    if len(normed) != len(text):
        logger.debug(
            "%s changed the scalar count from %d to %d", form, len(text), len(normed)
        )
    raw = normed.encode(ENC, "surrogatepass")
    return np.frombuffer(raw, dtype=CHAR_DTYPE).copy()


def to_text(data: np.ndarray) -> str:
    """Join an array of scalar values back into a str"""
    if not len(data):
        return ""
    return data.astype(CHAR_DTYPE, copy=False).tobytes().decode(ENC, "surrogatepass")


def normalize(text: str, form: Any = _OPTION) -> CharVec:
    """Build a CharVec from text, composing it first

    An explicit form of None builds the CharVec from the text as given
    """
    from .charvec import CharVec  # local import to avoid cycle

    return CharVec.from_text(text, form=form)


def is_whitespace(data: np.ndarray) -> np.ndarray:
    """Get a boolean mask of the whitespace values in the array"""
    return np.isin(data, WHITESPACE)
