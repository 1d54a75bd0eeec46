import itertools
from .types import *
from .errors import ConstructionError
from .iteration import IteratorCursor
from .sources import Source, PreMaterializedList, RestartableSource, SinglePassSource
from .sequence import Sequence


def from_source(source: Source) -> Sequence:
    """wrap a source, constraining it to one pass when it cannot restart"""
    sequence = Sequence(source)
    return sequence if source.restartable else sequence.constrain_once()


def empty() -> Sequence[Any]:
    """create empty sequence"""
    return from_source(PreMaterializedList(()))


def sequence_of(*elements: T) -> Sequence[T]:
    """create sequence from the given elements"""
    return from_source(PreMaterializedList(elements))


def from_list(data: Iterable[T]) -> Sequence[T]:
    """create sequence from a snapshot of an in-memory collection"""
    return from_source(PreMaterializedList(tuple(data)))


def generate(factory: Callable[[], Iterable[T]]) -> Sequence[T]:
    """
    create a restartable sequence. factory is called for every cursor and must
    return a fresh iterable (a generator function is the usual choice).
    """
    return from_source(RestartableSource(factory))


def from_range(start: int, count: int) -> Sequence[int]:
    """create sequence from range"""
    if count < 0:
        raise ConstructionError(f"count must be non-negative, but was {count}", ('count',))
    return generate(lambda: range(start, start + count))


def repeat(item: T, count: Optional[int] = None) -> Sequence[T]:
    """item repeated count times, or forever when count is None"""
    if count is None:
        return generate(lambda: itertools.repeat(item))
    if count < 0:
        raise ConstructionError(f"count must be non-negative, but was {count}", ('count',))
    return generate(lambda: itertools.repeat(item, count))


def iterate(seed: T, next_function: Callable[[T], T]) -> Sequence[T]:
    """unbounded sequence seed, next_function(seed), next_function(next_function(seed)), ..."""
    def iterating():
        current = seed
        while True:
            yield current
            current = next_function(current)
    return generate(iterating)


def from_iterator(iterator: Iterable[T]) -> Sequence[T]:
    """create a once-only sequence walking a python iterator"""
    return from_source(SinglePassSource(IteratorCursor(iter(iterator))))


def from_cursor(cursor: ExternalCursor[T]) -> Sequence[T]:
    """create a once-only sequence over an external rewind/valid/current/next cursor"""
    return from_source(SinglePassSource(cursor))


# --- aliases ---
S = from_list
seq = from_list
