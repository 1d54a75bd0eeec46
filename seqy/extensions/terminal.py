from __future__ import annotations
import typing
import numpy as np
import pandas as pd
from ..types import *
from ..errors import NoSuchElementError, OutOfBoundsError

if typing.TYPE_CHECKING:
    from ..sequence import Sequence


class TerminalAccessor(Generic[T]):
    """
    operations that consume a sequence and return a plain value.
    each call requests one cursor and closes it as soon as the answer is known,
    so `first` or `any` on an unbounded sequence return.
    """

    def __init__(self, sequence_instance: 'Sequence[T]'):
        self._sequence = sequence_instance

    # --- collecting ---

    def list(self) -> List[T]:
        """convert to list"""
        with self._sequence.cursor() as cursor:
            return [element for element in cursor]

    def tuple(self) -> Tuple[T, ...]:
        return tuple(self.list())

    def set(self) -> Set[T]:
        """convert to set"""
        return set(self.list())

    def dict(self, key_selector: KeySelector[T, K],
             value_selector: Optional[Selector[T, V]] = None) -> Dict[K, V]:
        """convert to dictionary. later keys overwrite earlier ones"""
        val_sel = value_selector if value_selector else lambda item: item
        with self._sequence.cursor() as cursor:
            return {key_selector(item): val_sel(item) for item in cursor}

    def associate(self, transform: Callable[[T], Tuple[K, V]]) -> Dict[K, V]:
        """build a dictionary from the (key, value) pairs returned by transform"""
        with self._sequence.cursor() as cursor:
            return dict(transform(item) for item in cursor)

    def associate_with(self, value_selector: Selector[T, V]) -> Dict[T, V]:
        """dictionary keyed by the elements themselves"""
        return self.dict(lambda item: item, value_selector)

    def group_by(self, key_selector: KeySelector[T, K],
                 value_transform: Optional[Selector[T, V]] = None) -> Dict[K, List[V]]:
        """group elements by key, preserving order inside each group"""
        groups: Dict[K, List[V]] = {}
        with self._sequence.cursor() as cursor:
            for item in cursor:
                value = value_transform(item) if value_transform else item
                groups.setdefault(key_selector(item), []).append(value)
        return groups

    def array(self) -> np.ndarray:
        """convert to numpy array"""
        return np.array(self.list())

    def series(self) -> pd.Series:
        """convert to pandas series"""
        return pd.Series(self.list())

    def df(self) -> pd.DataFrame:
        """convert to pandas dataframe"""
        return pd.DataFrame(self.list())

    def for_each(self, action: Callable[[T], Any]) -> None:
        """eagerly performs action on every element"""
        with self._sequence.cursor() as cursor:
            for item in cursor:
                action(item)

    # --- predicate matching ---

    def count(self, predicate: Optional[Predicate[T]] = None) -> int:
        """count elements"""
        with self._sequence.cursor() as cursor:
            return sum(1 for x in cursor if predicate is None or predicate(x))

    def any(self, predicate: Optional[Predicate[T]] = None) -> bool:
        """check if any element satisfies condition"""
        return self.find_first(predicate).is_some

    def all(self, predicate: Predicate[T]) -> bool:
        """check if all elements satisfy condition"""
        with self._sequence.cursor() as cursor:
            return all(predicate(x) for x in cursor)

    def none(self, predicate: Optional[Predicate[T]] = None) -> bool:
        return not self.any(predicate)

    def contains(self, element: T) -> bool:
        return self.any(lambda item: item == element)

    # --- searching ---

    def find_first(self, predicate: Optional[Predicate[T]] = None) -> Option[T]:
        """the first matching element as Some, or Nothing"""
        with self._sequence.cursor() as cursor:
            for item in cursor:
                if predicate is None or predicate(item):
                    return Some(item)
        return Nothing()

    def first(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get first element"""
        found = self.find_first(predicate)
        if found.is_nothing:
            raise NoSuchElementError("no element matched the given predicate")
        return found.unwrap()

    def first_or_default(self, predicate: Optional[Predicate[T]] = None,
                         default: Optional[T] = None) -> Optional[T]:
        """get first element or default"""
        return self.find_first(predicate).unwrap_or(default)

    def find_last(self, predicate: Optional[Predicate[T]] = None) -> Option[T]:
        found: Option[T] = Nothing()
        with self._sequence.cursor() as cursor:
            for item in cursor:
                if predicate is None or predicate(item):
                    found = Some(item)
        return found

    def last(self, predicate: Optional[Predicate[T]] = None) -> T:
        found = self.find_last(predicate)
        if found.is_nothing:
            raise NoSuchElementError("no element matched the given predicate")
        return found.unwrap()

    def last_or_default(self, predicate: Optional[Predicate[T]] = None,
                        default: Optional[T] = None) -> Optional[T]:
        return self.find_last(predicate).unwrap_or(default)

    def single(self, predicate: Optional[Predicate[T]] = None) -> T:
        """get single element, erroring if not exactly one"""
        found: Option[T] = Nothing()
        with self._sequence.cursor() as cursor:
            for item in cursor:
                if predicate is None or predicate(item):
                    if found.is_some:
                        raise NoSuchElementError("sequence contains more than one matching element")
                    found = Some(item)
        if found.is_nothing:
            raise NoSuchElementError("sequence contains no matching elements")
        return found.unwrap()

    def single_or_default(self, predicate: Optional[Predicate[T]] = None,
                          default: Optional[T] = None) -> Optional[T]:
        """the single matching element, or default when there are none or several"""
        try:
            return self.single(predicate)
        except NoSuchElementError:
            return default

    # --- searching by index ---

    def element_at(self, index: int) -> T:
        if index < 0:
            raise OutOfBoundsError(f"index must be non-negative, but was {index}")
        with self._sequence.with_index().cursor() as cursor:
            for position, item in cursor:
                if position == index:
                    return item
        raise OutOfBoundsError(f"provided index is not contained in this sequence: {index}")

    def element_at_or_default(self, index: int, default: Optional[T] = None) -> Optional[T]:
        try:
            return self.element_at(index)
        except OutOfBoundsError:
            return default

    def element_at_or_else(self, index: int, default_value: Callable[[int], T]) -> T:
        try:
            return self.element_at(index)
        except OutOfBoundsError:
            return default_value(index)

    def index_of_first(self, predicate: Predicate[T]) -> int:
        """position of the first matching element, -1 if none"""
        with self._sequence.with_index().cursor() as cursor:
            for position, item in cursor:
                if predicate(item):
                    return position
        return -1

    def index_of_last(self, predicate: Predicate[T]) -> int:
        """position of the last matching element, -1 if none"""
        last_index = -1
        with self._sequence.with_index().cursor() as cursor:
            for position, item in cursor:
                if predicate(item):
                    last_index = position
        return last_index

    def index_of(self, element: T) -> int:
        return self.index_of_first(lambda item: item == element)

    def last_index_of(self, element: T) -> int:
        return self.index_of_last(lambda item: item == element)

    # --- folding ---

    def fold(self, initial: U, operation: Accumulator[U, T]) -> U:
        """applies operation(accumulated, element) from left to right, starting at initial"""
        accumulated = initial
        with self._sequence.cursor() as cursor:
            for item in cursor:
                accumulated = operation(accumulated, item)
        return accumulated

    def reduce(self, operation: Accumulator[T, T]) -> T:
        """like fold, seeded with the first element"""
        with self._sequence.cursor() as cursor:
            if not cursor.has_next():
                raise NoSuchElementError("cannot reduce an empty sequence")
            accumulated = cursor.pluck_next()
            for item in cursor:
                accumulated = operation(accumulated, item)
        return accumulated
