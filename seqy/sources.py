"""
root stages. a source is selected once, by the factory that builds the sequence,
and tells through `restartable` whether it can hand out more than one cursor.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar
from .types import *
from .errors import TypeMismatchError
from .iteration import Iteration, CursorIteration, build, iteration_of
from .stages.base import Stage


@dataclass(frozen=True, eq=False)
class Source(Stage):
    restartable: ClassVar[bool] = True


@dataclass(frozen=True, eq=False)
class PreMaterializedList(Source):
    """elements already held in memory. any number of cursors."""
    elements: Tuple[Any, ...]

    def produce_cursor(self) -> Iteration:
        elements = self.elements

        def step(builder) -> None:
            if builder.index < len(elements):
                builder.set_next(elements[builder.index])
            else:
                builder.close()

        return build(step)


@dataclass(frozen=True, eq=False)
class RestartableSource(Source):
    """a factory called once per cursor, each call returning a fresh iterable."""
    factory: Callable[[], Iterable[Any]]

    def produce_cursor(self) -> Iteration:
        produced = self.factory()
        if not isinstance(produced, Iterable):
            raise TypeMismatchError(
                f"expected the factory to return an iterable but got {type(produced).__name__}")
        return iteration_of(produced)


@dataclass(frozen=True, eq=False)
class SinglePassSource(Source):
    """an external cursor that can only be walked once."""
    restartable: ClassVar[bool] = False
    cursor: ExternalCursor[Any]

    def produce_cursor(self) -> Iteration:
        return CursorIteration(self.cursor)
