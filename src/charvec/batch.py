from __future__ import annotations
import logging
from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from .charvec import CharVec

logger = logging.getLogger(__name__)

Pairs = Union[Mapping[Any, Any], Iterable[tuple[Any, Any]]]


class SubstitutionReport(dict):
    """The number of replacements made for each pattern, keyed by pattern text

    Patterns that were never part of the substitution report 0
    """

    def __missing__(self, key):
        return 0

    @property
    def total(self) -> int:
        return sum(self.values())

    def __repr__(self):
        return f"<SubstitutionReport {dict.__repr__(self)}>"


def _key(pattern) -> str:
    if isinstance(pattern, str):
        return pattern
    return pattern.to_text()


def apply_map(seq: CharVec, mapping: Pairs) -> SubstitutionReport:
    """Run replace_all for each pattern/replacement pair, in order

    Each pair works on the text left behind by the pairs before it, so a
    later pattern can match what an earlier replacement put in.

    Args:
        seq: The CharVec to modify in place
        mapping: A mapping, or an iterable of (pattern, replacement) pairs

    Returns:
        SubstitutionReport: The replacement count for every pattern
    """
    pairs = mapping.items() if isinstance(mapping, Mapping) else mapping
    report = SubstitutionReport()
    for pattern, replacement in pairs:
        key = _key(pattern)
        count = seq.replace_all(pattern, replacement)
        report[key] = report.get(key, 0) + (count or 0)

    logger.debug(
        "Substituted %d patterns, %d replacements", len(report), report.total
    )
    return report
