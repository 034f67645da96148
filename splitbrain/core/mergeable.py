"""
Merge contracts for replicated values.

A merge combines two instances of a type into one.  Consider strings and
sets: concatenation looks like a natural merge for strings, but
``"hello" + "world" != "world" + "hello"``, so it is not commutative.
Set union is commutative and associative, and also idempotent
(``a | a == a``).

Types with merges like set union are interesting for distributed systems
because replicas converge, even under concurrent updates, temporary
network failures, and duplicated message delivery.  In the literature
these are called CRDTs or join semi-lattices.

Not every useful merge is idempotent.  Merges used for causality
tracking treat the merge itself as an event in time, and so advance the
merged value even when both inputs are identical.  :class:`Mergeable`
captures that weaker contract; :class:`IdempotentMergeable` refines it.
A merge that must strictly exceed both inputs also cannot be fully
associative (each nesting level is one more event), so such types
satisfy associativity for their ordering key, not their event count.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TypeVar


class Mergeable(ABC):
    """
    Values with an associative and commutative merge.

    For all ``a``, ``b``, ``c`` of the same type::

        a.merge(b) == b.merge(a)
        a.merge(b).merge(c) == a.merge(b.merge(c))

    Implementations may return *self* with mutated contents or a new
    instance; the contract constrains only the result.
    """

    __slots__ = ()

    @abstractmethod
    def merge(self, other: Mergeable) -> Mergeable:
        """Return the result of merging *other* into *self*."""


class IdempotentMergeable(Mergeable):
    """
    Values whose merge is also idempotent: ``a.merge(a) == a``.
    """

    __slots__ = ()


M = TypeVar("M", bound=Mergeable)


def merge_all(first: M, *others: M) -> M:
    """
    Fold *others* into *first* from left to right.

    For idempotent merges the order of *others* does not affect the
    result.  Causal merges count each step, so only their ordering
    component is order-independent.
    """
    result = first
    for other in others:
        result = result.merge(other)
    return result
