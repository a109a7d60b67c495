"""
Iterative Tower of Hanoi traversal.

The classical recursive solution

    hanoi(k, src, dst, aux):
        hanoi(k - 1, src, aux, dst)
        move ring k from src to dst
        hanoi(k - 1, aux, dst, src)

is unrolled onto an explicit work stack. Each stack entry is a MoveTask that
remembers which half of the recursion it is in:

- EXPAND:  the left subtree (k - 1 rings to the spare peg) has not been
           pushed yet.
- EXECUTE: the left subtree is done; move ring k, then replace this task
           with the right subtree (k - 1 rings from the spare peg).

This is an in-order walk of the binary recursion tree, so the emitted moves
match the recursive algorithm exactly while the stack never holds more than
N tasks.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterator, List, NamedTuple, Optional, Tuple

from config import MAX_RINGS
from pegs import DEFAULT_PEG_NAMES, EmptyPegError, Platform


# ============================================================================
# Errors
# ============================================================================


class InputError(ValueError):
    """Ring count is not a usable puzzle size."""


class TraversalError(RuntimeError):
    """The peg store no longer matches what the traversal expects."""

    def __init__(self, message: str, expected_size: int, actual_size: Optional[int],
                 source: str, destination: str):
        super().__init__(message)
        self.expected_size = expected_size
        self.actual_size = actual_size
        self.source = source
        self.destination = destination


class EmptySourceError(TraversalError):
    """A task tried to move a ring off an empty peg."""


class RingSizeMismatchError(TraversalError):
    """The top ring of the source peg is not the ring the task expects."""


# ============================================================================
# Work items and events
# ============================================================================


class Phase(Enum):
    EXPAND = "expand"
    EXECUTE = "execute"


@dataclass
class MoveTask:
    """Move rings 0..ring from source to destination using spare."""

    source: int
    spare: int
    destination: int
    ring: int
    phase: Phase = Phase.EXPAND

    def left_child(self) -> "MoveTask":
        # rings 0..ring-1 go to the spare peg first
        return MoveTask(self.source, self.destination, self.spare, self.ring - 1)

    def right_child(self) -> "MoveTask":
        # then come back from the spare peg onto the moved ring
        return MoveTask(self.spare, self.source, self.destination, self.ring - 1)


class MoveEvent(NamedTuple):
    ring_size: int
    source: str
    destination: str

    def __str__(self):
        return f"Moving ring {self.ring_size} from {self.source} to {self.destination}."


@dataclass
class TraversalResult:
    num_rings: int
    move_count: int = 0
    moves: List[MoveEvent] = field(default_factory=list)
    final_pegs: List[Tuple[str, List[int]]] = field(default_factory=list)

    @property
    def nothing_to_solve(self) -> bool:
        return self.num_rings == 0


# ============================================================================
# Engine
# ============================================================================


def expected_move_count(num_rings: int) -> int:
    return (1 << num_rings) - 1 if num_rings > 0 else 0


def _execute(task: MoveTask, platform: Platform) -> MoveEvent:
    source = platform[task.source]
    destination = platform[task.destination]

    try:
        ring = source.pop()
    except EmptyPegError as e:
        raise EmptySourceError(
            f"Error while getting the ring to move! (Expecting movement of ring "
            f"{task.ring} from {source.name} to {destination.name})",
            expected_size=task.ring,
            actual_size=None,
            source=source.name,
            destination=destination.name,
        ) from e

    if ring.size != task.ring:
        source.push(ring)
        raise RingSizeMismatchError(
            f"Size mismatch for current state! (Expecting: {task.ring}, Actual: {ring.size}, "
            f"moving from {source.name} to {destination.name})",
            expected_size=task.ring,
            actual_size=ring.size,
            source=source.name,
            destination=destination.name,
        )

    destination.push(ring)
    return MoveEvent(ring.size, source.name, destination.name)


def iter_moves(platform: Platform, num_rings: int) -> Iterator[MoveEvent]:
    """
    Solve the puzzle in place, yielding one MoveEvent per ring moved.

    The top num_rings rings of platform.start are moved to platform.end. Each
    event is yielded after the ring has landed, so the caller sees a
    consistent platform. A TraversalError ends the walk; nothing is yielded
    after it.
    """
    if num_rings <= 0:
        return

    work_stack = [MoveTask(Platform.START, Platform.MIDDLE, Platform.END, num_rings - 1)]

    while work_stack:
        task = work_stack[-1]

        if task.phase is Phase.EXPAND:
            if task.ring > 0:
                work_stack.append(task.left_child())
            task.phase = Phase.EXECUTE
            continue

        event = _execute(task, platform)
        work_stack.pop()
        if task.ring > 0:
            work_stack.append(task.right_child())
        yield event


def solve(
    num_rings: int,
    peg_names: Tuple[str, str, str] = DEFAULT_PEG_NAMES,
    on_move: Optional[Callable[[MoveEvent], None]] = None,
    collect: bool = True,
) -> TraversalResult:
    """
    Run a full traversal on a fresh platform.

    Args:
        num_rings: puzzle size, 0..MAX_RINGS
        peg_names: names of the start, middle and end pegs
        on_move: called with every MoveEvent as it happens
        collect: keep the events in result.moves; turn off for large puzzles

    Returns:
        TraversalResult with the move count and the final pegs, top to bottom
    """
    if isinstance(num_rings, bool) or not isinstance(num_rings, int):
        raise InputError(f"Ring count must be an integer, got {num_rings!r}")
    if num_rings < 0 or num_rings > MAX_RINGS:
        raise InputError(f"Ring count must be between 0 and {MAX_RINGS}, got {num_rings}")

    result = TraversalResult(num_rings=num_rings)
    if result.nothing_to_solve:
        return result

    platform = Platform.with_tower(num_rings, peg_names)
    for event in iter_moves(platform, num_rings):
        result.move_count += 1
        if collect:
            result.moves.append(event)
        if on_move is not None:
            on_move(event)

    result.final_pegs = [(peg.name, peg.rings_top_to_bottom()) for peg in platform]
    return result


def recursive_moves(num_rings: int, peg_names: Tuple[str, str, str] = DEFAULT_PEG_NAMES) -> List[MoveEvent]:
    """Textbook recursive solution, kept as the reference ordering."""
    moves = []
    source, spare, destination = peg_names

    def _hanoi(ring, src, dst, aux):
        if ring < 0:
            return
        _hanoi(ring - 1, src, aux, dst)
        moves.append(MoveEvent(ring, src, dst))
        _hanoi(ring - 1, aux, dst, src)

    _hanoi(num_rings - 1, source, destination, spare)
    return moves
