from __future__ import annotations

from typing import Generic, Iterable, Iterator, Mapping, TypeVar

T = TypeVar("T")


class Env(Generic[T]):
    """A persistent mapping from variable names to values (or types).

    Every update returns a new environment and leaves the original
    untouched, so a frame can be threaded through a computation without
    anybody else observing the changes."""

    def __init__(self, bindings: Mapping[str, T] = ()):
        self._bindings: dict[str, T] = dict(bindings)

    def lookup(self, var: str) -> T:
        try:
            return self._bindings[var]
        except KeyError:
            raise LookupError(var) from None

    def extend(self, var: str, val: T) -> Env[T]:
        bindings = dict(self._bindings)
        bindings[var] = val
        return Env(bindings)

    def extend_many(self, items: Iterable[tuple[str, T]]) -> Env[T]:
        bindings = dict(self._bindings)
        bindings.update(items)
        return Env(bindings)

    def remove(self, var: str) -> Env[T]:
        bindings = dict(self._bindings)
        bindings.pop(var, None)
        return Env(bindings)

    def retain(self, names: Iterable[str]) -> Env[T]:
        """Drop every binding whose name is not in `names`."""
        keep = set(names)
        return Env({k: v for k, v in self._bindings.items() if k in keep})

    def items(self) -> Iterator[tuple[str, T]]:
        yield from self._bindings.items()

    def names(self) -> set[str]:
        return set(self._bindings)

    def to_dict(self) -> dict[str, T]:
        return dict(self._bindings)

    def __contains__(self, var: str) -> bool:
        return var in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __eq__(self, other):
        if not isinstance(other, Env):
            return NotImplemented
        return self._bindings == other._bindings

    def __repr__(self):
        inner = ", ".join(f"{k}: {v}" for k, v in self._bindings.items())
        return f"({inner})"


def empty_env() -> Env:
    return Env()
