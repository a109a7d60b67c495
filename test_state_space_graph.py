"""
Tests for the state-space graph: legality replay, optimality check and the
Sierpinski plot.
"""

import os
import tempfile

import networkx as nx

from state_space_graph import (
    all_states,
    build_state_graph,
    draw_solution,
    format_state,
    get_neighbors,
    moves_to_states,
    sierpinski_layout,
    tower_state,
    verify_optimal,
)
from traversal import MoveEvent, solve


def test_state_graph():
    print("=" * 60)
    print("Testing State Graph")
    print("=" * 60)

    for n in [1, 2, 3, 4]:
        G = build_state_graph(n)
        # Sierpinski graph S(n, 3): 3^n nodes, 3(3^n - 1)/2 edges
        print(f"{n} rings: {G.number_of_nodes()} states, {G.number_of_edges()} edges")
        assert G.number_of_nodes() == 3**n
        assert G.number_of_edges() == 3 * (3**n - 1) // 2
        assert nx.is_connected(G)

    assert len(set(all_states(3))) == 27
    print()


def test_neighbors_respect_rules():
    # ring 0 on A, ring 1 on B: ring 0 can go anywhere, ring 1 only to C
    state = ((0,), (1,), ())
    neighbors = set(get_neighbors(state))
    assert neighbors == {
        ((), (1, 0), ()),
        ((), (1,), (0,)),
        ((0,), (), (1,)),
    }


def test_solution_is_optimal():
    print("=" * 60)
    print("Testing Optimality Of The Iterative Solution")
    print("=" * 60)

    for n in range(1, 7):
        summary = verify_optimal(solve(n).moves, n)
        print(f"{n} rings: {summary}")
        assert summary["solved"]
        assert summary["is_optimal"]
        assert summary["optimal_length"] == 2**n - 1
    print()


def test_custom_peg_names():
    names = ("L", "M", "R")
    result = solve(3, peg_names=names)
    assert verify_optimal(result.moves, 3, peg_names=names)["is_optimal"]


def test_suboptimal_and_illegal_sequences():
    # legal but takes the long way round
    detour = [
        MoveEvent(0, "A", "B"),
        MoveEvent(0, "B", "C"),
    ]
    summary = verify_optimal(detour, 1)
    assert summary["solved"]
    assert not summary["is_optimal"]

    unfinished = [MoveEvent(0, "A", "B")]
    summary = verify_optimal(unfinished, 1)
    assert not summary["solved"]
    assert not summary["is_optimal"]

    illegal_sequences = [
        [MoveEvent(1, "A", "C")],                          # ring 1 is not on top
        [MoveEvent(0, "A", "C"), MoveEvent(1, "A", "C")],  # larger on smaller
        [MoveEvent(0, "B", "C")],                          # empty source
        [MoveEvent(0, "A", "Z")],                          # unknown peg
    ]
    for moves in illegal_sequences:
        try:
            moves_to_states(moves, 2)
        except ValueError:
            pass
        else:
            raise AssertionError(f"{moves} should be rejected")


def test_labels_and_layout():
    assert format_state(tower_state(3, 0)) == "111"
    assert format_state(tower_state(3, 2)) == "333"
    assert format_state(((2, 1), (0,), ())) == "112"

    G = build_state_graph(3)
    pos = sierpinski_layout(G, 3)
    assert len(pos) == 27
    top = pos[tower_state(3, 0)]
    left = pos[tower_state(3, 1)]
    right = pos[tower_state(3, 2)]
    assert top[1] > left[1] and top[1] > right[1], "Start tower should be the top corner"
    assert left[0] < right[0]


def test_draw_solution():
    with tempfile.TemporaryDirectory() as tmp:
        out_path = os.path.join(tmp, "hanoi_3.png")
        saved = draw_solution(solve(3).moves, 3, out_path)
        assert saved == out_path
        assert os.path.getsize(out_path) > 0


def main():
    """Run all tests."""
    print("\n" + "=" * 60)
    print("RUNNING STATE SPACE TESTS")
    print("=" * 60 + "\n")

    test_state_graph()
    test_neighbors_respect_rules()
    test_solution_is_optimal()
    test_custom_peg_names()
    test_suboptimal_and_illegal_sequences()
    test_labels_and_layout()
    test_draw_solution()

    print("=" * 60)
    print("ALL TESTS PASSED! ✓")
    print("=" * 60)


if __name__ == "__main__":
    main()
