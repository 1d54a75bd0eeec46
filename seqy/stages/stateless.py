"""
one-element-at-a-time stages. none of them remembers anything across elements
beyond a position or a look-ahead value.
"""
from __future__ import annotations
import typing
from dataclasses import dataclass
from ..types import *
from ..errors import ConstructionError, TypeMismatchError
from ..iteration import Iteration, LinkedStep
from .base import LinkedStage, filtering

if typing.TYPE_CHECKING:
    from ..sequence import Sequence


def _pair(first, second) -> Tuple[Any, Any]:
    return first, second


@dataclass(frozen=True, eq=False)
class FilterStage(LinkedStage):
    predicate: IndexedPredicate
    send_when: bool = True

    def new_step(self) -> LinkedStep:
        return filtering(self.predicate, self.send_when)


@dataclass(frozen=True, eq=False)
class MapStage(LinkedStage):
    transform: IndexedSelector

    def new_step(self) -> LinkedStep:
        transform = self.transform

        def step(previous: Iteration, builder) -> None:
            if previous.has_next():
                builder.set_next(transform(previous.pluck_next(), builder.index))
                return
            builder.close()

        return step


@dataclass(frozen=True, eq=False)
class SliceStage(LinkedStage):
    """
    elements at upstream positions [start, stop). take and drop are slices.
    counts come straight from the cursor index, so nothing past stop is pulled.
    """
    start: int = 0
    stop: Optional[int] = None

    def __post_init__(self):
        if self.start < 0:
            raise ConstructionError(f"start must be non-negative, but was {self.start}", ('start',))
        if self.stop is not None and self.stop < self.start:
            raise ConstructionError(
                f"stop ({self.stop}) must not come before start ({self.start})", ('stop',))

    def new_step(self) -> LinkedStep:
        start, stop = self.start, self.stop

        def step(previous: Iteration, builder) -> None:
            while builder.index < start:
                if not previous.has_next():
                    builder.close()
                    return
                previous.pluck_next()
                builder.skipping()
            if (stop is None or builder.index < stop) and previous.has_next():
                builder.set_next(previous.pluck_next())
                return
            builder.close()

        return step


@dataclass(frozen=True, eq=False)
class TakeWhileStage(LinkedStage):
    predicate: Predicate

    def new_step(self) -> LinkedStep:
        predicate = self.predicate

        def step(previous: Iteration, builder) -> None:
            if previous.has_next():
                element = previous.pluck_next()
                if predicate(element):
                    builder.set_next(element)
                    return
            builder.close()

        return step


@dataclass(frozen=True, eq=False)
class DropWhileStage(LinkedStage):
    predicate: Predicate

    def new_step(self) -> LinkedStep:
        predicate = self.predicate
        dropping = True

        def step(previous: Iteration, builder) -> None:
            nonlocal dropping
            while previous.has_next():
                element = previous.pluck_next()
                if dropping and predicate(element):
                    builder.skipping()
                    continue
                dropping = False
                builder.set_next(element)
                return
            builder.close()

        return step


@dataclass(frozen=True, eq=False)
class FlattenStage(LinkedStage):
    """yields the elements of each (optionally transformed) upstream iterable in turn."""
    transform: Optional[IndexedSelector] = None

    def new_step(self) -> LinkedStep:
        transform = self.transform
        inner: Option[Iterator] = Nothing()
        outer_index = -1

        def step(previous: Iteration, builder) -> None:
            nonlocal inner, outer_index
            while True:
                if inner.is_some:
                    try:
                        element = next(inner.unwrap())
                    except StopIteration:
                        inner = Nothing()
                    else:
                        builder.set_next(element)
                        return
                if not previous.has_next():
                    builder.close()
                    return
                value = previous.pluck_next()
                outer_index += 1
                if transform is not None:
                    value = transform(value, outer_index)
                if not isinstance(value, Iterable):
                    raise TypeMismatchError(f"expected an iterable but got {type(value).__name__}")
                inner = Some(iter(value))

        return step


@dataclass(frozen=True, eq=False)
class ZipStage(LinkedStage):
    other: 'Sequence'
    transform: Callable[[Any, Any], Any] = _pair

    @property
    def companions(self) -> Tuple['Sequence', ...]:
        return (self.other,)

    def new_step(self, other: Iteration) -> LinkedStep:
        transform = self.transform

        def step(previous: Iteration, builder) -> None:
            if previous.has_next() and other.has_next():
                builder.set_next(transform(previous.pluck_next(), other.pluck_next()))
                return
            builder.close()

        return step


@dataclass(frozen=True, eq=False)
class ZipWithNextStage(LinkedStage):
    transform: Callable[[Any, Any], Any] = _pair

    def new_step(self) -> LinkedStep:
        transform = self.transform
        lookahead: Option = Nothing()

        def step(previous: Iteration, builder) -> None:
            nonlocal lookahead
            if lookahead.is_nothing:
                if not previous.has_next():
                    builder.close()
                    return
                lookahead = Some(previous.pluck_next())
            if previous.has_next():
                following = previous.pluck_next()
                builder.set_next(transform(lookahead.unwrap(), following))
                lookahead = Some(following)
                return
            builder.close()

        return step


@dataclass(frozen=True, eq=False)
class PlusStage(LinkedStage):
    """the upstream elements followed by the elements of another sequence."""
    other: 'Sequence'

    @property
    def companions(self) -> Tuple['Sequence', ...]:
        return (self.other,)

    def new_step(self, other: Iteration) -> LinkedStep:
        def step(previous: Iteration, builder) -> None:
            if previous.has_next():
                builder.set_next(previous.pluck_next())
            elif other.has_next():
                builder.set_next(other.pluck_next())
            else:
                builder.close()

        return step


@dataclass(frozen=True, eq=False)
class IfEmptyStage(LinkedStage):
    """the upstream elements, or those of supplier() when the upstream has none."""
    supplier: Callable[[], 'Sequence']

    def new_step(self) -> LinkedStep:
        supplier = self.supplier
        fallback: Option[Iteration] = Nothing()

        def step(previous: Iteration, builder) -> None:
            nonlocal fallback
            if builder.index == 0 and not previous.has_next():
                fallback = Some(builder.adopt(supplier().cursor()))
            source = fallback.unwrap_or(previous)
            if source.has_next():
                builder.set_next(source.pluck_next())
                return
            builder.close()

        return step
