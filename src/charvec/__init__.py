from .batch import SubstitutionReport, apply_map
from .charvec import CharVec, CharView, join, slice_text, substring
from .errors import CharVecError, InvalidRangeError, OutOfRangeError, StaleViewError
from .normalizer import WHITESPACE, normalize, to_codepoints
from .options import OPTIONS, Options

__all__ = [
    "CharVec",
    "CharVecError",
    "CharView",
    "InvalidRangeError",
    "OPTIONS",
    "Options",
    "OutOfRangeError",
    "StaleViewError",
    "SubstitutionReport",
    "WHITESPACE",
    "apply_map",
    "join",
    "normalize",
    "slice_text",
    "substring",
    "to_codepoints",
]
