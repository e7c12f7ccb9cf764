from __future__ import annotations
from contextlib import contextmanager
from typing import Any, Iterator, Optional

NORMAL_FORMS: tuple[str, ...] = ("NFC", "NFD", "NFKC", "NFKD")

DEFAULTS: dict[str, Any] = {
    # Normal form applied to every text input. None keeps text as given
    "normal_form": "NFC",
    # Raise StaleViewError when a view outlives a mutation of its owner
    "check_views": True,
}


def _validate(key: str, value: Any):
    if key not in DEFAULTS:
        raise KeyError(f"Unknown charvec option: {key!r}")
    if key == "normal_form" and value is not None and value not in NORMAL_FORMS:
        raise ValueError(f"normal_form must be one of {NORMAL_FORMS} or None")
    if key == "check_views" and not isinstance(value, bool):
        raise ValueError("check_views must be a bool")


class Options:
    """Process wide settings shared by every CharVec"""

    def __init__(self, opts: Optional[dict[str, Any]] = None):
        self._options: dict[str, Any] = dict(DEFAULTS)
        if opts is not None:
            self.update(opts)

    def __getitem__(self, key: str):
        return self._options[key]

    def __setitem__(self, key: str, value):
        _validate(key, value)
        self._options[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._options

    def update(self, opts: dict[str, Any]):
        for key, value in opts.items():
            _validate(key, value)
        self._options.update(opts)

    def get(self, key, default=None) -> Any:
        return self._options.get(key, default)

    def keys(self):
        return self._options.keys()

    def reset(self):
        """Go back to the default settings"""
        self._options = dict(DEFAULTS)

    @contextmanager
    def override(self, **opts) -> Iterator[Options]:
        """Temporarily change some options, restoring them on exit"""
        previous = {key: self._options[key] for key in opts if key in self._options}
        self.update(opts)
        try:
            yield self
        finally:
            self._options.update(previous)


OPTIONS = Options()
