from __future__ import annotations
import typing
from abc import ABC, abstractmethod
from dataclasses import dataclass
from ..types import *
from ..iteration import Iteration, LinkedStep, build_linked

if typing.TYPE_CHECKING:
    from ..sequence import Sequence


@dataclass(frozen=True, eq=False)
class Stage(ABC):
    """
    immutable configuration of one link in a sequence chain.
    a stage knows how to produce a fresh cursor; per-cursor state never lives here.
    """

    @abstractmethod
    def produce_cursor(self) -> Iteration:
        pass

    @property
    def upstreams(self) -> Tuple['Sequence', ...]:
        return ()


@dataclass(frozen=True, eq=False)
class LinkedStage(Stage):
    """a stage that pulls from an upstream sequence (and optionally from companions)."""
    upstream: 'Sequence'

    @property
    def companions(self) -> Tuple['Sequence', ...]:
        """further sequences pulled alongside the upstream, e.g. the right side of a zip"""
        return ()

    @property
    def upstreams(self) -> Tuple['Sequence', ...]:
        return (self.upstream,) + self.companions

    @abstractmethod
    def new_step(self, *companions: Iteration) -> LinkedStep:
        """build the advancement step for one cursor, with its own fresh state"""
        pass

    def produce_cursor(self) -> Iteration:
        previous = self.upstream.cursor()
        opened: List[Iteration] = []
        try:
            for sequence in self.companions:
                opened.append(sequence.cursor())
        except Exception:
            # a companion refused (e.g. already iterated), give back what we opened
            for cursor in [previous, *opened]:
                cursor.close()
            raise
        return build_linked(previous, self.new_step(*opened), owned=opened)


def drain(cursor: Iteration[T]) -> List[T]:
    """pull every remaining element of a cursor into a list"""
    elements = []
    while cursor.has_next():
        elements.append(cursor.pluck_next())
    return elements


def filtering(predicate: IndexedPredicate, send_when: bool) -> LinkedStep:
    """
    a step publishing the first upstream element whose predicate(element, index)
    equals send_when, skipping the rest.
    """
    def step(previous: Iteration, builder) -> None:
        while previous.has_next():
            element = previous.pluck_next()
            if bool(predicate(element, builder.index)) == send_when:
                builder.set_next(element)
                return
            builder.skipping()
        builder.close()
    return step
