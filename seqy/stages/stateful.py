"""
stages that buffer upstream elements: distinct, sorting, windowing and minus.
"""
from __future__ import annotations
import logging
import typing
from dataclasses import dataclass
from ..types import *
from ..errors import ConstructionError
from ..iteration import Iteration, LinkedStep
from ..options import SortDirection
from .base import LinkedStage, drain, filtering

if typing.TYPE_CHECKING:
    from ..sequence import Sequence

logger = logging.getLogger(__name__)


class _SeenKeys:
    """
    keys observed so far, compared by value equality.
    hashable keys go into a set; unhashable ones (lists, dicts...) fall back to a linear scan.
    """

    def __init__(self):
        self._hashed: Set[Any] = set()
        self._unhashable: List[Any] = []

    def add(self, key: Any) -> bool:
        """remember key. returns false if an equal key was already seen."""
        try:
            if key in self._hashed:
                return False
            self._hashed.add(key)
            return True
        except TypeError:
            if key in self._unhashable:
                return False
            self._unhashable.append(key)
            return True

    def __len__(self) -> int:
        return len(self._hashed) + len(self._unhashable)


@dataclass(frozen=True, eq=False)
class DistinctStage(LinkedStage):
    """
    first element for each selector key, in upstream order.
    memory grows with the number of distinct keys seen by a cursor.
    """
    selector: KeySelector

    def new_step(self) -> LinkedStep:
        selector = self.selector
        seen = _SeenKeys()
        return filtering(lambda element, _: seen.add(selector(element)), True)


@dataclass(frozen=True, eq=False)
class SortStage(LinkedStage):
    """
    drains the whole upstream on the first pull, then yields in order.
    an unbounded upstream never finishes draining.
    """
    key: Optional[KeySelector] = None
    direction: SortDirection = SortDirection.ASCENDING

    def new_step(self) -> LinkedStep:
        key = self.key
        descending = self.direction is SortDirection.DESCENDING
        ordered: Option[Iterator] = Nothing()

        def step(previous: Iteration, builder) -> None:
            nonlocal ordered
            if ordered.is_nothing:
                elements = drain(previous)
                logger.debug(f"sorting {len(elements)} elements {self.direction.value}")
                if descending:
                    # reversed comparisons over the reversed input: exact mirror of the ascending order
                    elements = sorted(reversed(elements), key=key, reverse=True)
                else:
                    elements = sorted(elements, key=key)
                ordered = Some(iter(elements))
            try:
                element = next(ordered.unwrap())
            except StopIteration:
                builder.close()
            else:
                builder.set_next(element)

        return step


@dataclass(frozen=True, eq=False)
class WindowedStage(LinkedStage):
    """
    lists of `size` consecutive elements, each starting `step` elements after the previous.
    step >= size gives isolated windows, step < size overlapping ones.
    """
    size: int
    step: int = 1
    partial_windows: bool = False

    def __post_init__(self):
        invalid = tuple(name for name, value in (('size', self.size), ('step', self.step)) if value <= 0)
        if invalid:
            raise ConstructionError(f"{' and '.join(invalid)} must be greater than zero!", invalid)

    def new_step(self) -> LinkedStep:
        gap = self.step - self.size
        if gap >= 0:
            return self._isolated_windows(gap)
        return self._overlapping_windows()

    def _isolated_windows(self, gap: int) -> LinkedStep:
        size, partial_windows = self.size, self.partial_windows
        buffer: List[Any] = []
        skip = 0

        def step(previous: Iteration, builder) -> None:
            nonlocal buffer, skip
            while previous.has_next():
                element = previous.pluck_next()
                if skip > 0:
                    skip -= 1
                    continue
                buffer.append(element)
                if len(buffer) == size:
                    window, buffer = buffer, []
                    skip = gap
                    builder.set_next(window)
                    return
            if buffer and partial_windows:
                logger.debug(f"flushing partial window of {len(buffer)}")
                window, buffer = buffer, []
                builder.set_next(window)
                return
            builder.close()

        return step

    def _overlapping_windows(self) -> LinkedStep:
        size, stride, partial_windows = self.size, self.step, self.partial_windows
        buffer: List[Any] = []
        exhausted = False

        def step(previous: Iteration, builder) -> None:
            nonlocal exhausted
            if not exhausted:
                while previous.has_next():
                    buffer.append(previous.pluck_next())
                    if len(buffer) == size:
                        window = list(buffer)
                        del buffer[:stride]
                        builder.set_next(window)
                        return
                exhausted = True
            if partial_windows and buffer:
                window = list(buffer)
                # shrink by stride while longer than it, then hand out the remainder once
                if len(buffer) > stride:
                    del buffer[:stride]
                else:
                    buffer.clear()
                builder.set_next(window)
                return
            builder.close()

        return step


@dataclass(frozen=True, eq=False)
class MinusStage(LinkedStage):
    """upstream elements not equal to any element of another sequence, drained on the first pull."""
    other: 'Sequence'

    @property
    def companions(self) -> Tuple['Sequence', ...]:
        return (self.other,)

    def new_step(self, other: Iteration) -> LinkedStep:
        excluded: Option[List[Any]] = Nothing()

        def is_excluded(element, _) -> bool:
            nonlocal excluded
            if excluded.is_nothing:
                excluded = Some(drain(other))
            return element in excluded.unwrap()

        return filtering(is_excluded, False)
