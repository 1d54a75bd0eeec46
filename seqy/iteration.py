"""
the pull cursor engine.

an Iteration is a single-pass cursor driven by an explicit state machine:

    NOT_READY --has_next()--> READY --pluck_next()--> NOT_READY
        |
        +--> CLOSED   (no more elements, never computes again)
        +--> FAILED   (the step raised, or left no decision; permanent)

subclasses only implement _compute_next(), which must call set_next() or
close() exactly once per invocation. skipping() lets a step account for
upstream elements it consumed without producing them, so that `index`
always tracks the upstream position.
"""
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from enum import Enum
from .types import *
from .errors import IterationFailedError, OutOfBoundsError

logger = logging.getLogger(__name__)


class IterationState(Enum):
    NOT_READY = 0
    READY = 1
    CLOSED = 2
    FAILED = 3


class Iteration(ABC, Generic[T]):
    """base pull cursor. also a python iterator and a context manager."""

    def __init__(self):
        self._state = IterationState.NOT_READY
        self._next_value: Option[T] = Nothing()
        self._index = -1
        self._failure: Optional[Exception] = None

    @abstractmethod
    def _compute_next(self) -> None:
        """advance by the minimal amount and either set_next() or close()"""
        pass

    def _release(self) -> None:
        """drop references to anything this cursor owns"""
        pass

    # --- consumer side ---

    @property
    def state(self) -> IterationState:
        return self._state

    @property
    def index(self) -> int:
        """position of the last produced-or-skipped element, -1 before the first"""
        return self._index

    def has_next(self) -> bool:
        if self._state is IterationState.FAILED:
            raise IterationFailedError("iteration failed!") from self._failure
        if self._state is IterationState.CLOSED:
            return False
        if self._state is IterationState.READY:
            return True
        return self._try_compute_next()

    def pluck_next(self) -> T:
        if not self.has_next():
            raise OutOfBoundsError("no more elements available!")
        self._state = IterationState.NOT_READY
        value = self._next_value.unwrap()
        self._next_value = Nothing()
        return value

    def close(self) -> None:
        # a failure is permanent, closing only releases what we hold
        if self._state is not IterationState.FAILED:
            self._state = IterationState.CLOSED
        self._next_value = Nothing()
        self._release()

    def _try_compute_next(self) -> bool:
        # stays FAILED unless the step decides
        self._state = IterationState.FAILED
        self._index += 1
        try:
            self._compute_next()
        except Exception as e:
            self._state = IterationState.FAILED
            self._failure = e
            self._next_value = Nothing()
            logger.debug(f"{type(self).__name__} failed at index {self._index}: {e!r}")
            self._release()
            raise
        if self._state is IterationState.FAILED:
            logger.debug(f"{type(self).__name__} step made no decision at index {self._index}")
            self._release()
        return self._state is IterationState.READY

    # --- builder side ---

    def set_next(self, element: T) -> None:
        self._next_value = Some(element)
        self._state = IterationState.READY

    def skipping(self) -> None:
        self._index += 1

    # --- python protocols ---

    def __iter__(self) -> 'Iteration[T]':
        return self

    def __next__(self) -> T:
        if not self.has_next():
            raise StopIteration
        return self.pluck_next()

    def __enter__(self) -> 'Iteration[T]':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(state={self._state.name}, index={self._index})"


RootStep = Callable[['ComputingIteration'], None]
LinkedStep = Callable[[Iteration, 'ComputingIteration'], None]


class ComputingIteration(Iteration[T]):
    """
    a cursor whose elements come from an advancement step.
    linked cursors hand the step their upstream cursor as the first argument.
    """

    def __init__(self, step: Union[RootStep, LinkedStep], previous: Optional[Iteration] = None,
                 owned: Iterable[Iteration] = ()):
        super().__init__()
        self._step = step
        self._linked = previous is not None
        self._previous = previous
        self._owned: List[Iteration] = list(owned)

    def _compute_next(self) -> None:
        if self._linked:
            self._step(self._previous, self)
        else:
            self._step(self)

    def adopt(self, cursor: Iteration[U]) -> Iteration[U]:
        """take ownership of a cursor opened while stepping, so close() releases it too"""
        self._owned.append(cursor)
        return cursor

    def _release(self) -> None:
        upstream = ([self._previous] if self._previous is not None else []) + self._owned
        self._previous = None
        self._owned = []
        self._step = None
        for cursor in upstream:
            cursor.close()


class IteratorCursor(Generic[T]):
    """adapts a plain python iterator to the rewind/valid/current/next protocol"""

    def __init__(self, iterator: Iterator[T]):
        self._iterator = iterator
        self._current: Option[T] = Nothing()
        self._started = False

    def rewind(self) -> None:
        # python iterators cannot go back; rewinding only positions on the first element
        if not self._started:
            self._started = True
            self._advance()

    def next(self) -> None:
        self._advance()

    def valid(self) -> bool:
        return self._current.is_some

    def current(self) -> T:
        return self._current.unwrap()

    def _advance(self) -> None:
        try:
            self._current = Some(next(self._iterator))
        except StopIteration:
            self._current = Nothing()


class CursorIteration(Iteration[T]):
    """wraps a single-pass external cursor. the first step rewinds, later steps move next."""

    def __init__(self, source: ExternalCursor[T]):
        super().__init__()
        self._source: Optional[ExternalCursor[T]] = source
        self._started = False

    def _compute_next(self) -> None:
        if self._started:
            self._source.next()
        else:
            self._started = True
            self._source.rewind()
        if self._source.valid():
            self.set_next(self._source.current())
            return
        self.close()

    def _release(self) -> None:
        self._source = None


# --- builders ---

def build(step: RootStep) -> Iteration:
    """a root cursor driven by step(builder)"""
    return ComputingIteration(step)


def build_linked(previous: Iteration, step: LinkedStep, owned: Iterable[Iteration] = ()) -> Iteration:
    """a cursor driven by step(previous, builder), owning previous and any extra cursors"""
    return ComputingIteration(step, previous, owned)


def iteration_of(iterable: Iterable[T]) -> Iteration[T]:
    """a single-pass cursor over any python iterable"""
    return CursorIteration(IteratorCursor(iter(iterable)))
