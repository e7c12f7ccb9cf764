from __future__ import annotations
import builtins
from collections.abc import Iterable, Iterator
from typing import IO, Any, Optional, Union, overload

import numpy as np

from . import editor, matcher
from .batch import Pairs, SubstitutionReport, apply_map
from .errors import OutOfRangeError, StaleViewError
from .normalizer import _OPTION, CHAR_DTYPE, from_codepoints, to_codepoints, to_text
from .options import OPTIONS

CharLike = Union[str, "CharVec", "CharView"]


def _as_array(value: CharLike) -> np.ndarray:
    """Get the scalar values of text, a CharVec or a CharView"""
    if isinstance(value, str):
        return to_codepoints(value)
    if isinstance(value, _CharSeq):
        return value.data
    if isinstance(value, np.ndarray):
        return from_codepoints(value)
    raise TypeError(
        f"Expected str, CharVec or CharView, got {type(value).__name__}"
    )


def _clamp(start: int, length: int, size: int) -> tuple[int, int]:
    """Get the [start, end) bounds of a substring, clamped to size"""
    if start < 0 or length < 0:
        raise ValueError("start and length must not be negative")
    start = min(start, size)
    return start, min(start + length, size)


def _range_to_substring(
    start: Optional[int], stop: Optional[int], inclusive: bool, size: int
) -> tuple[int, int]:
    """Translate a range into (start, length)"""
    first = 0 if start is None else start
    if stop is None:
        end = size
    else:
        end = stop + 1 if inclusive else stop
    if first < 0 or end < 0:
        raise ValueError("Range bounds must not be negative")
    return first, max(end - first, 0)


class _CharSeq:
    """The read only operations shared by CharVec and CharView

    Subclasses provide `data`, the uint32 array of scalar values
    """

    __slots__: tuple[str, ...] = ()

    @property
    def data(self) -> np.ndarray:
        raise NotImplementedError

    # --- Sequence protocol ---
    def __len__(self) -> int:
        return len(self.data)

    @overload
    def __getitem__(self, key: int) -> str: ...

    @overload
    def __getitem__(self, key: builtins.slice) -> CharView: ...

    def __getitem__(self, key: Union[int, builtins.slice]) -> Union[str, CharView]:
        if isinstance(key, builtins.slice):
            start, stop, step = key.indices(len(self))
            if step != 1:
                raise ValueError("Slice step must be 1")
            return self.substring(start, max(stop - start, 0))

        data = self.data
        if key < 0:
            key += len(data)
        if key < 0 or key >= len(data):
            raise IndexError(f"{type(self).__name__} index out of range")
        return chr(int(data[key]))

    def __iter__(self) -> Iterator[str]:
        return (chr(c) for c in self.data.tolist())

    def __reversed__(self) -> Iterator[str]:
        return (chr(c) for c in reversed(self.data.tolist()))

    def __contains__(self, pattern: CharLike) -> bool:
        return self.contains(pattern)

    def __eq__(self, other) -> bool:
        if not isinstance(other, (str, _CharSeq)):
            return NotImplemented
        return self.equals(other)

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.to_text()

    # --- Addressing ---
    def substring(self, start: int, length: int) -> CharView:
        """Get a view of `length` values starting at `start`

        Runs past the end are clamped silently: a start beyond the end
        gives an empty view, and a length reaching past the end is cut short
        """
        first, end = _clamp(start, length, len(self))
        return CharView(self, first, end)

    def slice(
        self,
        start: Union[int, builtins.slice, None] = None,
        stop: Optional[int] = None,
        inclusive: bool = False,
    ) -> CharView:
        """Get a view of a range of values

        Args:
            start: The first index, None for the beginning. A builtin
                slice object may be passed here instead of start and stop
            stop: The end index, None for the end
            inclusive: Whether the value at `stop` is part of the range

        Returns:
            CharView: The clamped view, the same as `substring` would give
        """
        if isinstance(start, builtins.slice):
            if start.step not in (None, 1):
                raise ValueError("Slice step must be 1")
            start, stop = start.start, start.stop
        first, length = _range_to_substring(start, stop, inclusive, len(self))
        return self.substring(first, length)

    # --- Conversion ---
    def to_text(self) -> str:
        return to_text(self.data)

    def to_text_into(self, buffer: IO[str]) -> IO[str]:
        """Clear the text buffer, then write this text into it"""
        buffer.seek(0)
        buffer.truncate(0)
        buffer.write(self.to_text())
        return buffer

    def to_list(self) -> list[int]:
        """Get all of the code points as a flat list"""
        return self.data.tolist()

    def equals(self, other: CharLike) -> bool:
        """Check for the same scalar values. Text is normalized first"""
        return bool(np.array_equal(self.data, _as_array(other)))

    # --- Search ---
    def find(
        self, pattern: CharLike, start_pos: int = 0, end_pos: Optional[int] = None
    ) -> Optional[int]:
        """Get the index of the first match of pattern, or None

        Raises:
            OutOfRangeError: start_pos or end_pos is not an index of this sequence
            InvalidRangeError: end_pos is lower than start_pos
        """
        return matcher.find(self.data, _as_array(pattern), start_pos, end_pos)

    def find_all(self, pattern: CharLike) -> list[int]:
        """Get the start of every non-overlapping match of pattern"""
        return matcher.find_all(self.data, _as_array(pattern))

    def count(self, pattern: CharLike) -> int:
        return len(self.find_all(pattern))

    def contains(self, pattern: CharLike) -> bool:
        return matcher.contains(self.data, _as_array(pattern))

    def starts_with(self, pattern: CharLike) -> bool:
        return matcher.starts_with(self.data, _as_array(pattern))

    def ends_with(self, pattern: CharLike) -> bool:
        return matcher.ends_with(self.data, _as_array(pattern))

    def split(self, delimiter: CharLike) -> list[CharView]:
        """Get views of the non-empty spans between delimiters

        Returns an empty list when the delimiter does not occur at all
        """
        spans = editor.split_spans(self.data, _as_array(delimiter))
        return [CharView(self, start, end) for start, end in spans]


class CharVec(_CharSeq):
    """An owned, growable sequence of unicode scalar values

    Indexing, lengths and every search result count scalar values. Text
    passed in is normalized with the `normal_form` option (NFC by default)
    """

    __slots__: tuple[str, ...] = ("_data", "_version")

    def __init__(self, source: Union[CharLike, Iterable[Union[int, str]]] = ""):
        self._data: np.ndarray
        self._version: int = 0
        if isinstance(source, (str, _CharSeq, np.ndarray)):
            self._data = np.array(_as_array(source), dtype=CHAR_DTYPE)
        else:
            self._data = from_codepoints(
                [ord(c) if isinstance(c, str) else c for c in source]
            )

    @classmethod
    def from_text(cls, text: str, form: Any = _OPTION) -> CharVec:
        ret = cls()
        ret._data = to_codepoints(text, form=form)
        return ret

    @classmethod
    def join(cls, parts: Iterable[CharLike]) -> CharVec:
        """Concatenate text, CharVecs and CharViews into a new CharVec"""
        arrays = [_as_array(part) for part in parts]
        ret = cls()
        if arrays:
            ret._data = np.concatenate(arrays).astype(CHAR_DTYPE, copy=False)
        return ret

    @property
    def data(self) -> np.ndarray:
        return self._data

    @property
    def version(self) -> int:
        """The number of mutations made so far"""
        return self._version

    def _set(self, data: np.ndarray):
        self._data = data
        self._version += 1

    def copy(self) -> CharVec:
        return CharVec(self)

    def __repr__(self):
        return f"<CharVec {self.to_text()!r}>"

    # --- Mutation ---
    def push_back(self, content: CharLike):
        self._set(editor.push_back(self._data, _as_array(content)))

    def push_front(self, content: CharLike):
        self._set(editor.push_front(self._data, _as_array(content)))

    def insert(self, content: CharLike, at_pos: int):
        """Insert content before the value at at_pos

        Raises:
            OutOfRangeError: at_pos is not an index of this sequence. This
                includes at_pos == len(self)
        """
        self._set(editor.insert(self._data, _as_array(content), at_pos))

    def _set_trimmed(self, data: np.ndarray):
        # Trims only ever shorten, so an equal length means nothing was removed
        if len(data) != len(self._data):
            self._set(data)

    def trim_start(self):
        self._set_trimmed(editor.trim_start(self._data))

    def trim_end(self):
        self._set_trimmed(editor.trim_end(self._data))

    def trim(self):
        self._set_trimmed(editor.trim(self._data))

    def replace_first(
        self,
        pattern: CharLike,
        replacement: CharLike,
        start_pos: int = 0,
        end_pos: Optional[int] = None,
    ) -> Optional[int]:
        """Replace the first match of pattern found in [start_pos, end_pos]

        Returns:
            Optional[int]: The index of the replaced match, or None when
                nothing matched and the sequence is unchanged
        """
        data, idx = editor.replace_first(
            self._data, _as_array(pattern), _as_array(replacement), start_pos, end_pos
        )
        if idx is not None:
            self._set(data)
        return idx

    def replace_all(self, pattern: CharLike, replacement: CharLike) -> Optional[int]:
        """Replace every non-overlapping match of pattern

        Returns:
            Optional[int]: The number of replacements, or None when the
                pattern does not occur and the sequence is unchanged
        """
        res = editor.replace_all(
            self._data, _as_array(pattern), _as_array(replacement)
        )
        if res is None:
            return None
        data, count = res
        self._set(data)
        return count

    def apply_map(self, mapping: Pairs) -> SubstitutionReport:
        return apply_map(self, mapping)

    def reverse(self):
        """Reverse the scalar values in place"""
        self._set(editor.reverse(self._data))


class CharView(_CharSeq):
    """A read only window [start, end) onto a CharVec

    A view borrows its owner's buffer. The owner must not be mutated while
    the view is in use; with the `check_views` option on, using the view
    afterwards raises StaleViewError
    """

    __slots__: tuple[str, ...] = ("_owner", "_start", "_end", "_version")

    def __init__(
        self,
        owner: Union[CharVec, CharView],
        start: int = 0,
        end: Optional[int] = None,
    ):
        if end is None:
            end = len(owner)
        if start < 0 or end < start or end > len(owner):
            raise OutOfRangeError(
                f"View bounds [{start}, {end}) do not fit in {len(owner)} values"
            )

        # Views of views point straight at the CharVec
        if isinstance(owner, CharView):
            start += owner._start
            end += owner._start
            owner = owner._owner

        self._owner: CharVec = owner
        self._start: int = start
        self._end: int = end
        self._version: int = owner.version

    @property
    def owner(self) -> CharVec:
        return self._owner

    @property
    def start(self) -> int:
        return self._start

    @property
    def end(self) -> int:
        return self._end

    @property
    def stale(self) -> bool:
        return self._version != self._owner.version

    @property
    def data(self) -> np.ndarray:
        if OPTIONS["check_views"] and self.stale:
            raise StaleViewError("The CharVec behind this view was modified")
        return self._owner.data[self._start : self._end]

    def to_charvec(self) -> CharVec:
        """Copy the viewed values into a new CharVec"""
        return CharVec(self)

    def __repr__(self):
        if self.stale:
            return f"<CharView [{self._start}:{self._end}] stale>"
        return f"<CharView [{self._start}:{self._end}] {self.to_text()!r}>"


def join(parts: Iterable[CharLike]) -> CharVec:
    return CharVec.join(parts)


def substring(value: CharLike, start: int, length: int) -> str:
    """Get `length` characters of the text starting at `start`, clamped"""
    if isinstance(value, str):
        value = CharVec.from_text(value)
    return value.substring(start, length).to_text()


def slice_text(
    value: CharLike,
    start: Union[int, builtins.slice, None] = None,
    stop: Optional[int] = None,
    inclusive: bool = False,
) -> str:
    """Get a range of characters of the text, clamped"""
    if isinstance(value, str):
        value = CharVec.from_text(value)
    return value.slice(start, stop, inclusive=inclusive).to_text()
