from typing import (
    TypeVar, Generic, Callable, Iterator, Iterable, Any, Optional, Union,
    Dict, List, Tuple, Set, Type, NamedTuple, Protocol
)

T = TypeVar('T')
U = TypeVar('U')
K = TypeVar('K')
V = TypeVar('V')

Predicate = Callable[[T], bool]
IndexedPredicate = Callable[[T, int], bool]
Selector = Callable[[T], U]
IndexedSelector = Callable[[T, int], U]
KeySelector = Callable[[T], K]
Comparator = Callable[[T, T], int]
Accumulator = Callable[[U, T], U]


class Option(Generic[T]):
    """
    an explicit maybe-value. use Some(value) or Nothing(), and ask with is_some
    instead of comparing against a marker object, so None stays a legal value.
    """
    __slots__ = ()

    @property
    def is_some(self) -> bool:
        raise NotImplementedError

    @property
    def is_nothing(self) -> bool:
        return not self.is_some

    def unwrap(self) -> T:
        raise NotImplementedError

    def unwrap_or(self, default: T) -> T:
        return self.unwrap() if self.is_some else default

    def unwrap_or_else(self, supplier: Callable[[], T]) -> T:
        return self.unwrap() if self.is_some else supplier()

    def map(self, selector: Selector[T, U]) -> 'Option[U]':
        return Some(selector(self.unwrap())) if self.is_some else self


class Some(Option[T]):
    __slots__ = ('value',)

    def __init__(self, value: T):
        self.value = value

    @property
    def is_some(self) -> bool: return True

    def unwrap(self) -> T:
        return self.value

    def __eq__(self, other) -> bool:
        return isinstance(other, Some) and self.value == other.value

    def __hash__(self) -> int:
        return hash(('Some', self.value))

    def __repr__(self) -> str:
        return f"Some({self.value!r})"


class Nothing(Option[Any]):
    __slots__ = ()

    @property
    def is_some(self) -> bool: return False

    def unwrap(self):
        raise ValueError("called unwrap() on Nothing")

    def __eq__(self, other) -> bool:
        return isinstance(other, Nothing)

    def __hash__(self) -> int:
        return hash('Nothing')

    def __repr__(self) -> str:
        return "Nothing()"


class IndexedValue(NamedTuple):
    """an element paired with its position in the sequence"""
    index: int
    value: Any


class ExternalCursor(Protocol[T]):
    """
    a single-pass cursor owned by someone else: rewind() positions it on the
    first element, next() moves forward, valid() tells whether current() is usable.
    """

    def rewind(self) -> None: ...

    def valid(self) -> bool: ...

    def current(self) -> T: ...

    def next(self) -> None: ...
