"""
exception types raised by seqy.

every error derives from SequenceError and from the builtin it specializes,
so callers catching ValueError, TypeError or IndexError keep working.
"""
from __future__ import annotations
import typing
from typing import Tuple

if typing.TYPE_CHECKING:
    from .sequence import Sequence


class SequenceError(Exception):
    """base class for all seqy errors."""
    pass


class ConstructionError(SequenceError, ValueError):
    """a stage was configured with invalid parameters. raised before any iteration."""

    def __init__(self, message: str, parameters: Tuple[str, ...] = ()):
        super().__init__(message)
        self.parameters = parameters


class AlreadyIteratedError(SequenceError, RuntimeError):
    """a once-only sequence was asked for a second cursor."""

    def __init__(self, sequence: 'Sequence'):
        super().__init__("cannot iterate over constrained sequence multiple times")
        self.sequence = sequence


class IterationFailedError(SequenceError, RuntimeError):
    """the cursor's advancement step raised earlier. the cursor stays dead."""
    pass


class OutOfBoundsError(SequenceError, IndexError):
    """no element is available at the requested position."""
    pass


class TypeMismatchError(SequenceError, TypeError):
    """an element did not have the type the operation requires."""
    pass


class NoSuchElementError(SequenceError, LookupError):
    """no element (or more than one) matched where exactly one was expected."""
    pass
