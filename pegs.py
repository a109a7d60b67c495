"""
Peg and ring containers for the Tower of Hanoi.

Rings are numbered by size from 0 (smallest) to N-1 (largest). Each peg is a
LIFO stack; the last element of its list is the top ring.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple


DEFAULT_PEG_NAMES = ("A", "B", "C")


class EmptyPegError(RuntimeError):
    """Raised when a ring is popped from a peg that holds none."""

    def __init__(self, peg_name: str, message: Optional[str] = None):
        self.peg_name = peg_name
        super().__init__(message or f"Peg {peg_name} is empty")


@dataclass(frozen=True)
class Ring:
    size: int


class Peg:
    """A named stack of rings."""

    def __init__(self, name: str, rings: Optional[Iterable[Ring]] = None):
        self.name = name
        self._rings: List[Ring] = list(rings) if rings is not None else []

    def push(self, ring: Ring) -> None:
        self._rings.append(ring)

    def pop(self) -> Ring:
        if not self._rings:
            raise EmptyPegError(self.name)
        return self._rings.pop()

    def peek(self) -> Optional[Ring]:
        return self._rings[-1] if self._rings else None

    def size(self) -> int:
        return len(self._rings)

    def __len__(self):
        return len(self._rings)

    def rings_top_to_bottom(self) -> List[int]:
        return [ring.size for ring in reversed(self._rings)]

    def is_descending(self) -> bool:
        """True if every ring sits on a strictly larger one."""
        return all(
            self._rings[i].size > self._rings[i + 1].size
            for i in range(len(self._rings) - 1)
        )

    def __str__(self):
        return f"{self.name}:{[ring.size for ring in self._rings]}"


class Platform:
    """
    The three pegs of one puzzle session.

    Pegs are addressed by index (0 = start, 1 = middle, 2 = end) so that a
    role assignment is just a permutation of indices.
    """

    START, MIDDLE, END = 0, 1, 2

    def __init__(self, names: Tuple[str, str, str] = DEFAULT_PEG_NAMES):
        if len(names) != 3:
            raise ValueError(f"Platform needs exactly 3 peg names, got {list(names)}")
        if len(set(names)) != 3:
            raise ValueError(f"Peg names must be distinct, got {list(names)}")
        self.pegs: Tuple[Peg, Peg, Peg] = tuple(Peg(name) for name in names)

    @classmethod
    def with_tower(cls, num_rings: int, names: Tuple[str, str, str] = DEFAULT_PEG_NAMES) -> "Platform":
        """Fresh platform with rings N-1 .. 0 stacked on the start peg."""
        platform = cls(names)
        for size in range(num_rings - 1, -1, -1):
            platform.start.push(Ring(size))
        return platform

    @property
    def start(self) -> Peg:
        return self.pegs[self.START]

    @property
    def middle(self) -> Peg:
        return self.pegs[self.MIDDLE]

    @property
    def end(self) -> Peg:
        return self.pegs[self.END]

    def __getitem__(self, index: int) -> Peg:
        return self.pegs[index]

    def __iter__(self):
        return iter(self.pegs)

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        """Bottom-to-top ring sizes per peg, as hashable tuples."""
        return tuple(tuple(reversed(peg.rings_top_to_bottom())) for peg in self.pegs)

    def total_rings(self) -> int:
        return sum(len(peg) for peg in self.pegs)

    def __str__(self):
        return " ".join(str(peg) for peg in self.pegs)
