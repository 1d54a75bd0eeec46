from __future__ import annotations

import logging
from dataclasses import replace
from functools import cmp_to_key
from .types import *
from .errors import AlreadyIteratedError, ConstructionError
from .iteration import Iteration
from .options import NO_PARTIAL_WINDOWS, INCLUDE_PARTIAL_WINDOWS, SEND_WHEN_FALSE, SortDirection
from .stages.base import Stage
from .stages.stateless import (
    FilterStage, MapStage, SliceStage, TakeWhileStage, DropWhileStage, FlattenStage,
    ZipStage, ZipWithNextStage, PlusStage, IfEmptyStage
)
from .stages.stateful import DistinctStage, SortStage, WindowedStage, MinusStage

# --- accessors ---
from .extensions.terminal import TerminalAccessor
from .extensions.stats import StatsAccessor

logger = logging.getLogger(__name__)


def _require_count(count: int) -> None:
    if count < 0:
        raise ConstructionError(f"count must be non-negative, but was {count}", ('count',))


def _identity(element):
    return element


# --- main sequence class ---

class Sequence(Generic[T]):
    """
    a lazily evaluated, composable sequence.

    composing never pulls anything: every operation returns a new sequence that
    remembers its upstream and configuration. elements are only computed when a
    cursor is requested and advanced, one pull at a time.
    """

    def __init__(self, stage: Optional[Stage]):
        self._stage = stage
        # --- initialize accessors ---
        self.to = TerminalAccessor(self)
        self.stats = StatsAccessor(self)

    def cursor(self) -> Iteration[T]:
        """a fresh pull cursor over the elements"""
        return self._stage.produce_cursor()

    def __iter__(self) -> Iterator[T]:
        return self.cursor()

    @property
    def is_constrained(self) -> bool:
        """
        true when this sequence (or anything upstream) can be iterated only once.
        sequences supplied lazily while iterating (the if_empty fallback) are not seen.
        """
        return any(upstream.is_constrained for upstream in self._stage.upstreams)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({type(self._stage).__name__})"

    # --- filtering ---

    def filter(self, predicate: Predicate[T]) -> 'Sequence[T]':
        """elements matching the predicate"""
        return Sequence(FilterStage(self, lambda element, _: predicate(element)))

    def filter_not(self, predicate: Predicate[T]) -> 'Sequence[T]':
        """elements not matching the predicate"""
        return Sequence(FilterStage(self, lambda element, _: predicate(element), SEND_WHEN_FALSE))

    def filter_indexed(self, predicate: IndexedPredicate[T]) -> 'Sequence[T]':
        """elements matching predicate(element, index), index being the upstream position"""
        return Sequence(FilterStage(self, predicate))

    def filter_is_instance(self, type_filter: Type[U]) -> 'Sequence[U]':
        return self.filter(lambda element: isinstance(element, type_filter))

    # --- transforming ---

    def map(self, transform: Selector[T, U]) -> 'Sequence[U]':
        return Sequence(MapStage(self, lambda element, _: transform(element)))

    def map_indexed(self, transform: IndexedSelector[T, U]) -> 'Sequence[U]':
        """project each element with transform(element, index)"""
        return Sequence(MapStage(self, transform))

    def with_index(self) -> 'Sequence[IndexedValue]':
        """pair each element with its position"""
        return Sequence(MapStage(self, lambda element, index: IndexedValue(index, element)))

    def on_each(self, action: Callable[[T], Any]) -> 'Sequence[T]':
        """
        calls action for each element as it passes through, without changing it.
        lazy: nothing happens until the sequence is consumed.
        """
        def perform(element):
            action(element)
            return element
        return self.map(perform)

    def flatten(self) -> 'Sequence[Any]':
        """yields the items of each iterable element in turn"""
        return Sequence(FlattenStage(self))

    def flat_map(self, transform: Selector[T, Iterable[U]]) -> 'Sequence[U]':
        return Sequence(FlattenStage(self, lambda element, _: transform(element)))

    def flat_map_indexed(self, transform: IndexedSelector[T, Iterable[U]]) -> 'Sequence[U]':
        return Sequence(FlattenStage(self, transform))

    # --- slicing ---

    def take(self, count: int) -> 'Sequence[T]':
        """the first `count` elements. never pulls the element after the last one taken"""
        _require_count(count)
        return SubSequence(SliceStage(self, 0, count))

    def drop(self, count: int) -> 'Sequence[T]':
        """everything after the first `count` elements"""
        _require_count(count)
        if count == 0:
            return self
        return SubSequence(SliceStage(self, count, None))

    def slice(self, start: int, stop: Optional[int] = None) -> 'Sequence[T]':
        """elements at positions [start, stop)"""
        return SubSequence(SliceStage(self, start, stop))

    def take_while(self, predicate: Predicate[T]) -> 'Sequence[T]':
        return Sequence(TakeWhileStage(self, predicate))

    def drop_while(self, predicate: Predicate[T]) -> 'Sequence[T]':
        return Sequence(DropWhileStage(self, predicate))

    # --- combining ---

    def zip(self, other: 'Sequence[U]', transform: Optional[Callable[[T, U], V]] = None) -> 'Sequence[V]':
        """pairs elements of both sequences in lockstep, stopping at the shorter one"""
        if transform is None:
            return Sequence(ZipStage(self, other))
        return Sequence(ZipStage(self, other, transform))

    def zip_with_next(self, transform: Optional[Callable[[T, T], V]] = None) -> 'Sequence[V]':
        """pairs each element with the one after it"""
        if transform is None:
            return Sequence(ZipWithNextStage(self))
        return Sequence(ZipWithNextStage(self, transform))

    def plus(self, other: 'Sequence[T]') -> 'Sequence[T]':
        """this sequence followed by other"""
        return Sequence(PlusStage(self, other))

    def minus(self, other: 'Sequence[T]') -> 'Sequence[T]':
        """elements not equal to any element of other"""
        return Sequence(MinusStage(self, other))

    def if_empty(self, supplier: Callable[[], 'Sequence[T]']) -> 'Sequence[T]':
        """
        this sequence, or the one returned by supplier() if this one has no elements.
        supplier() is only called while iterating, so a once-only fallback does not
        show up in is_constrained; it still refuses a second cursor when reached again.
        """
        return Sequence(IfEmptyStage(self, supplier))

    # --- stateful ---

    def distinct(self) -> 'Sequence[T]':
        return self.distinct_by(_identity)

    def distinct_by(self, selector: KeySelector[T, K]) -> 'Sequence[T]':
        """first element for each distinct key, in order of appearance"""
        return Sequence(DistinctStage(self, selector))

    def sorted(self) -> 'Sequence[T]':
        return Sequence(SortStage(self))

    def sorted_descending(self) -> 'Sequence[T]':
        return Sequence(SortStage(self, None, SortDirection.DESCENDING))

    def sorted_by(self, selector: KeySelector[T, K]) -> 'Sequence[T]':
        return Sequence(SortStage(self, selector))

    def sorted_by_descending(self, selector: KeySelector[T, K]) -> 'Sequence[T]':
        return Sequence(SortStage(self, selector, SortDirection.DESCENDING))

    def sorted_with(self, comparator: Comparator[T]) -> 'Sequence[T]':
        """sort with a three-way comparator returning negative, zero or positive"""
        return Sequence(SortStage(self, cmp_to_key(comparator)))

    def sorted_with_descending(self, comparator: Comparator[T]) -> 'Sequence[T]':
        return Sequence(SortStage(self, cmp_to_key(comparator), SortDirection.DESCENDING))

    def windowed(self, size: int, step: int = 1, partial_windows: bool = NO_PARTIAL_WINDOWS,
                 transform: Optional[Selector[List[T], U]] = None) -> 'Sequence[Any]':
        """
        sliding windows of `size` elements, each starting `step` elements after the previous one.
        with partial_windows, the shorter windows left at the end are yielded too.
        """
        sequence = Sequence(WindowedStage(self, size, step, partial_windows))
        return sequence.map(transform) if transform is not None else sequence

    def chunked(self, size: int, transform: Optional[Selector[List[T], U]] = None) -> 'Sequence[Any]':
        """consecutive lists of `size` elements; the last one may be shorter"""
        return self.windowed(size, size, INCLUDE_PARTIAL_WINDOWS, transform)

    # --- once-only ---

    def constrain_once(self) -> 'Sequence[T]':
        """a view of this sequence that can be iterated only once"""
        return ConstrainedOnceSequence(self)


# --- slices fold further take/drop calls into themselves ---

class SubSequence(Sequence[T]):
    """a slice of its upstream. take/drop return a new, narrower slice instead of stacking stages."""

    def take(self, count: int) -> 'Sequence[T]':
        _require_count(count)
        stage = self._stage
        stop = stage.start + count
        if stage.stop is not None:
            stop = min(stop, stage.stop)
        return SubSequence(replace(stage, stop=stop))

    def drop(self, count: int) -> 'Sequence[T]':
        _require_count(count)
        stage = self._stage
        start = stage.start + count
        if stage.stop is not None:
            start = min(start, stage.stop)
        return SubSequence(replace(stage, start=start))


# --- once-only wrapper ---

class ConstrainedOnceSequence(Sequence[T]):
    """hands out exactly one cursor, then forgets its upstream."""

    def __init__(self, previous: Sequence[T]):
        super().__init__(None)
        self._previous: Optional[Sequence[T]] = previous

    def cursor(self) -> Iteration[T]:
        if self._previous is None:
            logger.debug(f"refusing a second cursor for {self!r}")
            raise AlreadyIteratedError(self)
        cursor = self._previous.cursor()
        self._previous = None
        return cursor

    @property
    def is_constrained(self) -> bool:
        return True

    def constrain_once(self) -> 'Sequence[T]':
        return self

    def __repr__(self) -> str:
        state = 'consumed' if self._previous is None else 'fresh'
        return f"ConstrainedOnceSequence({state})"
