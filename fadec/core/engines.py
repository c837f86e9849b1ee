"""Two-engine data container.

The CJ4 always has exactly two engines.  ``EngineData`` holds one value
per engine in named slots and offers pairwise combinators instead of
behaving like a general collection.

    engines = EngineData.new(5.0)
    engines[EngineNumber.ENGINE1] += 2.0
    tee = engines.map(lambda _, t: t * 0.4)
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Generic, Iterator, TypeVar

T = TypeVar("T")
U = TypeVar("U")


class EngineNumber(str, Enum):
    ENGINE1 = "engine1"
    ENGINE2 = "engine2"

    @property
    def index(self) -> int:
        """One-based engine index used by the host simulator."""
        return 1 if self is EngineNumber.ENGINE1 else 2


@dataclass
class EngineData(Generic[T]):
    engine1: T
    engine2: T

    @classmethod
    def new(cls, value: T) -> "EngineData[T]":
        """Same value for both engines (immutable values are shared)."""
        return cls(value, value)

    @classmethod
    def new_from(cls, factory: Callable[[EngineNumber], T]) -> "EngineData[T]":
        """Build each slot from a generator, e.g. a fresh controller per engine."""
        return cls(factory(EngineNumber.ENGINE1), factory(EngineNumber.ENGINE2))

    @classmethod
    def new_distinct(cls, e1: T, e2: T) -> "EngineData[T]":
        return cls(e1, e2)

    def __getitem__(self, engine: EngineNumber) -> T:
        return getattr(self, engine.value)

    def __setitem__(self, engine: EngineNumber, value: T):
        setattr(self, engine.value, value)

    def __iter__(self) -> Iterator[T]:
        yield self.engine1
        yield self.engine2

    def items(self) -> Iterator[tuple[EngineNumber, T]]:
        yield EngineNumber.ENGINE1, self.engine1
        yield EngineNumber.ENGINE2, self.engine2

    def map(self, f: Callable[[EngineNumber, T], U]) -> "EngineData[U]":
        return EngineData(
            f(EngineNumber.ENGINE1, self.engine1),
            f(EngineNumber.ENGINE2, self.engine2),
        )

    def update(self, f: Callable[[EngineNumber, T], T]):
        """Replace each slot in place with ``f(engine, value)``."""
        self.engine1 = f(EngineNumber.ENGINE1, self.engine1)
        self.engine2 = f(EngineNumber.ENGINE2, self.engine2)

    def zip(self, other: "EngineData[U]", f: Callable[[EngineNumber, T, U], T]):
        """Update each slot in place from the matching slot of ``other``."""
        self.engine1 = f(EngineNumber.ENGINE1, self.engine1, other.engine1)
        self.engine2 = f(EngineNumber.ENGINE2, self.engine2, other.engine2)

    def for_each(self, f: Callable[[EngineNumber, T], None]):
        f(EngineNumber.ENGINE1, self.engine1)
        f(EngineNumber.ENGINE2, self.engine2)

    def replace(self, engine: EngineNumber, value: T) -> "EngineData[T]":
        """Copy with a single slot changed."""
        return replace(self, **{engine.value: value})
