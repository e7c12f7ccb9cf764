class CharVecError(Exception):
    """Base class for every error raised by charvec"""


class OutOfRangeError(CharVecError, IndexError):
    """A position lies outside of the sequence it addresses"""


class InvalidRangeError(CharVecError, ValueError):
    """A range whose end comes before its start"""


class StaleViewError(CharVecError, RuntimeError):
    """A view was used after the CharVec it borrows from was mutated"""
