"""
Structured before/after diffs with apply and revert.

A Diff is an ordered, immutable sequence of fragments. Anything that knows how
to apply and revert a single fragment (a Patchable) can replay a whole Diff
forward, or unwind it back to the state it was observed from.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, FrozenSet, Generic, Iterable, Iterator, List, Optional, Tuple, TypeVar

F = TypeVar("F")
T = TypeVar("T")


@dataclass(frozen=True)
class Diff(Generic[F]):
    """An ordered, immutable sequence of fragments."""

    fragments: Tuple[F, ...] = ()

    @staticmethod
    def builder() -> DiffBuilder:
        return DiffBuilder()

    def __iter__(self) -> Iterator[F]:
        return iter(self.fragments)

    def __len__(self) -> int:
        return len(self.fragments)

    def __bool__(self) -> bool:
        return bool(self.fragments)


class DiffBuilder(Generic[F]):
    """Accumulates fragments in order, then freezes them into a Diff."""

    def __init__(self):
        self._fragments: List[F] = []

    def add_fragment(self, callback: Callable[[], F]) -> DiffBuilder[F]:
        """Append the fragment produced by ``callback``. Returns self for chaining."""
        self._fragments.append(callback())
        return self

    def finalize(self) -> Diff[F]:
        """Freeze the accumulated fragments. The builder is left empty."""
        fragments, self._fragments = self._fragments, []
        return Diff(tuple(fragments))


class Patchable(ABC, Generic[F]):
    """
    Something that can apply and revert fragments of type ``F``.

    Subclasses implement the two single-fragment methods; whole diffs are
    replayed in order on apply and in reverse order on revert.
    """

    @abstractmethod
    def apply_fragment(self, fragment: F) -> None:
        pass

    @abstractmethod
    def revert_fragment(self, fragment: F) -> None:
        pass

    def apply_diff(self, diff: Diff[F]) -> None:
        for fragment in diff.fragments:
            self.apply_fragment(fragment)

    def revert_diff(self, diff: Diff[F]) -> None:
        for fragment in reversed(diff.fragments):
            self.revert_fragment(fragment)


# Scalars

@dataclass(frozen=True)
class ScalarDiffFragment(Generic[T]):
    """A (before, after) pair for a plain value."""

    value: Tuple[T, T]

    @classmethod
    def of(cls, before: T, after: T) -> ScalarDiffFragment[T]:
        return cls((before, after))

    @property
    def before(self) -> T:
        return self.value[0]

    @property
    def after(self) -> T:
        return self.value[1]


class Scalar(Patchable[ScalarDiffFragment[T]]):
    """Mutable holder for a single value that records its changes as diffs."""

    def __init__(self, value: T):
        self.value = value

    def apply_fragment(self, fragment: ScalarDiffFragment[T]) -> None:
        self.value = fragment.after

    def revert_fragment(self, fragment: ScalarDiffFragment[T]) -> None:
        self.value = fragment.before

    def mut_and_diff(self, value: T) -> Diff[ScalarDiffFragment[T]]:
        """Set a new value and return the diff that describes the change."""
        diff = Diff((ScalarDiffFragment.of(self.value, value),))
        self.apply_diff(diff)
        return diff

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Scalar):
            return self.value == other.value
        return self.value == other

    def __repr__(self) -> str:
        return f"Scalar({self.value!r})"


# Cells

@dataclass(frozen=True)
class CellDiffFragment:
    """
    One atomic change to a cell.

    ``value`` is an optional (before, after) pair. ``removed`` and ``added``
    describe the change to the candidate set.
    """

    value: Optional[Tuple[Optional[int], Optional[int]]] = None
    removed: FrozenSet[int] = frozenset()
    added: FrozenSet[int] = frozenset()

    @staticmethod
    def builder() -> FragmentBuilder:
        return FragmentBuilder()

    @property
    def is_empty(self) -> bool:
        return self.value is None and not self.removed and not self.added


class FragmentBuilder:
    """Collects at most one value change and one options change for a cell."""

    def __init__(self):
        self._value: Optional[Tuple[Optional[int], Optional[int]]] = None
        self._options: Optional[Tuple[FrozenSet[int], FrozenSet[int]]] = None

    def value(self, before: Optional[int], after: Optional[int]) -> FragmentBuilder:
        if self._value is not None:
            raise ValueError("Fragment already has a value transition")
        self._value = (before, after)
        return self

    def options(self, removed: Iterable[int] = (), added: Iterable[int] = ()) -> FragmentBuilder:
        if self._options is not None:
            raise ValueError("Fragment already has an options transition")
        removed, added = frozenset(removed), frozenset(added)
        if removed & added:
            raise ValueError(f"Options both removed and added: {sorted(removed & added)}")
        self._options = (removed, added)
        return self

    def finalize(self) -> CellDiffFragment:
        removed, added = self._options or (frozenset(), frozenset())
        fragment = CellDiffFragment(value=self._value, removed=removed, added=added)
        self._value = None
        self._options = None
        return fragment
