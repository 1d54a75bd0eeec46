from __future__ import annotations
import typing
import numpy as np
from functools import cmp_to_key
from ..types import *
from ..errors import NoSuchElementError, TypeMismatchError

if typing.TYPE_CHECKING:
    from ..sequence import Sequence

Number = Union[int, float]


def _is_number(value: Any) -> bool:
    # bools are ints to python, but not numbers to us
    return isinstance(value, (int, float, np.integer, np.floating)) and not isinstance(value, (bool, np.bool_))


class StatsAccessor(Generic[T]):
    def __init__(self, sequence_instance: 'Sequence[T]'):
        self._sequence = sequence_instance

    def _get_values(self, selector: Optional[Selector[T, Number]] = None) -> List[Number]:
        """helper to extract numeric values for numeric reductions."""
        values = []
        with self._sequence.cursor() as cursor:
            for item in cursor:
                value = selector(item) if selector else item
                if not _is_number(value):
                    message = "selector must return an integer or float" if selector \
                        else "element must be an integer or float"
                    raise TypeMismatchError(f"{message}, got {type(value).__name__}")
                values.append(value)
        return values

    def sum(self) -> Number:
        """calc sum"""
        return self._sum(self._get_values())

    def sum_by(self, selector: Selector[T, Number]) -> Number:
        return self._sum(self._get_values(selector))

    def average(self) -> float:
        """arithmetic mean. 0.0 for an empty sequence"""
        return self._average(self._get_values())

    def average_by(self, selector: Selector[T, Number]) -> float:
        return self._average(self._get_values(selector))

    @staticmethod
    def _sum(values: List[Number]) -> Number:
        if not values:
            return 0
        # python ints are unbounded, an int64 array would wrap silently
        if all(isinstance(value, int) for value in values):
            return sum(values)
        try:
            result = np.sum(values)
            return result.item() if hasattr(result, 'item') else result
        except (TypeError, ValueError, OverflowError):
            return sum(values)

    @staticmethod
    def _average(values: List[Number]) -> float:
        if not values:
            return 0.0
        return float(np.mean(values))

    # --- comparisons ---

    def _pick(self, chooser: Callable[..., T], key: Optional[KeySelector[T, Any]]) -> T:
        data = self._sequence.to.list()
        if not data:
            raise NoSuchElementError("sequence contains no elements")
        # builtin min/max keep the first of several equal extremes
        return chooser(data, key=key)

    def min(self) -> T:
        """find minimum"""
        return self._pick(min, None)

    def max(self) -> T:
        """find maximum"""
        return self._pick(max, None)

    def min_by(self, selector: KeySelector[T, K]) -> T:
        return self._pick(min, selector)

    def max_by(self, selector: KeySelector[T, K]) -> T:
        return self._pick(max, selector)

    def min_with(self, comparator: Comparator[T]) -> T:
        return self._pick(min, cmp_to_key(comparator))

    def max_with(self, comparator: Comparator[T]) -> T:
        return self._pick(max, cmp_to_key(comparator))
