"""
State space of the N-ring Tower of Hanoi as a graph.

Every legal configuration is a node (3**N of them) and every single-ring
move is an edge. The graph forms a Sierpinski triangle, and the optimal
solution is the straight path down one side of it from the all-on-start
corner to the all-on-end corner.

Used to:
- check that a move sequence is legal and as short as possible
- draw the solution path on the Sierpinski layout
"""

import itertools
import os
from typing import Dict, List, Sequence, Tuple

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.patches as mpatches
import networkx as nx
import numpy as np

from pegs import DEFAULT_PEG_NAMES
from traversal import MoveEvent

# pegs bottom-to-top, e.g. ((2, 1, 0), (), ()) for 3 rings on the start peg
State = Tuple[Tuple[int, ...], Tuple[int, ...], Tuple[int, ...]]


def tower_state(num_rings: int, peg: int = 0) -> State:
    pegs = [(), (), ()]
    pegs[peg] = tuple(range(num_rings - 1, -1, -1))
    return tuple(pegs)


def all_states(num_rings: int) -> List[State]:
    """Generate all valid states for num_rings rings on 3 pegs."""
    states = []
    for assignment in itertools.product(range(3), repeat=num_rings):
        # assignment[size] = peg holding that ring
        pegs = [[], [], []]
        for size in range(num_rings - 1, -1, -1):
            pegs[assignment[size]].append(size)
        states.append(tuple(tuple(p) for p in pegs))
    return states


def get_neighbors(state: State) -> List[State]:
    """All states one legal move away."""
    neighbors = []
    for from_peg in range(3):
        if not state[from_peg]:
            continue
        ring = state[from_peg][-1]
        for to_peg in range(3):
            if from_peg == to_peg:
                continue
            if state[to_peg] and state[to_peg][-1] < ring:
                continue
            new_pegs = [list(p) for p in state]
            new_pegs[from_peg].pop()
            new_pegs[to_peg].append(ring)
            neighbors.append(tuple(tuple(p) for p in new_pegs))
    return neighbors


def build_state_graph(num_rings: int) -> nx.Graph:
    states = all_states(num_rings)
    G = nx.Graph()
    G.add_nodes_from(states)

    for s in states:
        for neighbor in get_neighbors(s):
            if not G.has_edge(s, neighbor):
                G.add_edge(s, neighbor)

    return G


def moves_to_states(
    moves: Sequence[MoveEvent],
    num_rings: int,
    peg_names: Tuple[str, str, str] = DEFAULT_PEG_NAMES,
) -> List[State]:
    """Replay moves from the start tower, returning every visited state."""
    peg_index = {name: idx for idx, name in enumerate(peg_names)}
    pegs = [list(p) for p in tower_state(num_rings)]
    states = [tuple(tuple(p) for p in pegs)]

    for step, move in enumerate(moves, start=1):
        ring, from_name, to_name = move
        if from_name not in peg_index or to_name not in peg_index:
            raise ValueError(f"Step {step}: unknown peg in move {tuple(move)}")
        from_peg = peg_index[from_name]
        to_peg = peg_index[to_name]

        if not pegs[from_peg] or pegs[from_peg][-1] != ring:
            raise ValueError(
                f"Step {step}: ring {ring} is not on top of peg {from_name}. "
                f"Current pegs={pegs}"
            )
        if pegs[to_peg] and pegs[to_peg][-1] < ring:
            raise ValueError(
                f"Step {step}: cannot place ring {ring} on smaller ring {pegs[to_peg][-1]}"
            )

        pegs[to_peg].append(pegs[from_peg].pop())
        states.append(tuple(tuple(p) for p in pegs))

    return states


def verify_optimal(
    moves: Sequence[MoveEvent],
    num_rings: int,
    peg_names: Tuple[str, str, str] = DEFAULT_PEG_NAMES,
    graph: nx.Graph = None,
) -> Dict:
    """
    Check a move sequence against the shortest path in the state graph.

    Returns a dict with solved, is_optimal, num_moves and optimal_length.
    Raises ValueError if a move is illegal.
    """
    G = graph if graph is not None else build_state_graph(num_rings)
    states = moves_to_states(moves, num_rings, peg_names)

    for a, b in zip(states, states[1:]):
        if not G.has_edge(a, b):
            raise ValueError(f"Non-adjacent states in move sequence: {a} -> {b}")

    start = tower_state(num_rings, 0)
    goal = tower_state(num_rings, 2)
    optimal_length = nx.shortest_path_length(G, start, goal)
    solved = states[-1] == goal

    return {
        "solved": solved,
        "is_optimal": solved and len(moves) == optimal_length,
        "num_moves": len(moves),
        "optimal_length": optimal_length,
    }


def format_state(state: State) -> str:
    """Compact label, largest ring first: '111' is the start tower, '333' the goal."""
    assignment = {}
    for peg_idx, peg in enumerate(state):
        for ring in peg:
            assignment[ring] = peg_idx
    return "".join(str(assignment[size] + 1) for size in range(len(assignment) - 1, -1, -1))


def sierpinski_layout(G: nx.Graph, num_rings: int) -> Dict[State, np.ndarray]:
    """
    Sierpinski-triangle positions for every state.

    All on peg 0 at the top, peg 1 bottom-left, peg 2 bottom-right. Zooming
    into a corner swaps the pegs anchoring the other two corners, which keeps
    adjacent sub-triangles touching at the right vertices.
    """
    top = np.array([0.5, np.sqrt(3) / 2])
    bl = np.array([0.0, 0.0])
    br = np.array([1.0, 0.0])

    def compute_pos(state):
        assignment = {}
        for peg_idx, peg in enumerate(state):
            for ring in peg:
                assignment[ring] = peg_idx

        cT, cBL, cBR = top.copy(), bl.copy(), br.copy()
        peg_at_T, peg_at_BL, peg_at_BR = 0, 1, 2

        for size in range(num_rings - 1, -1, -1):
            peg = assignment[size]
            if peg == peg_at_T:
                cBL = (cT + cBL) / 2
                cBR = (cT + cBR) / 2
                peg_at_BL, peg_at_BR = peg_at_BR, peg_at_BL
            elif peg == peg_at_BL:
                cT = (cBL + cT) / 2
                cBR = (cBL + cBR) / 2
                peg_at_T, peg_at_BR = peg_at_BR, peg_at_T
            else:
                cT = (cBR + cT) / 2
                cBL = (cBR + cBL) / 2
                peg_at_T, peg_at_BL = peg_at_BL, peg_at_T

        return (cT + cBL + cBR) / 3

    return {node: compute_pos(node) for node in G.nodes()}


def draw_solution(
    moves: Sequence[MoveEvent],
    num_rings: int,
    out_path: str,
    peg_names: Tuple[str, str, str] = DEFAULT_PEG_NAMES,
    path_color: str = "#00aa00",
    fig_size=(12, 10),
) -> str:
    """Save the state space with the solution path highlighted. Returns out_path."""
    G = build_state_graph(num_rings)
    states = moves_to_states(moves, num_rings, peg_names)
    path_edges = list(zip(states, states[1:]))
    path_edge_set = set(frozenset(e) for e in path_edges)
    background_edges = [e for e in G.edges() if frozenset(e) not in path_edge_set]

    pos = sierpinski_layout(G, num_rings)

    fig, ax = plt.subplots(1, 1, figsize=fig_size)
    nx.draw_networkx_edges(G, pos, edgelist=background_edges, edge_color="#d8d8d8",
                           width=0.6, alpha=0.5, ax=ax)
    nx.draw_networkx_edges(G, pos, edgelist=path_edges, edge_color=path_color, width=3.0, ax=ax)
    nx.draw_networkx_nodes(G, pos, node_size=120, node_color="skyblue", alpha=0.7, ax=ax)
    nx.draw_networkx_nodes(G, pos, nodelist=[states[0]], node_size=260, node_color="gold", ax=ax)
    nx.draw_networkx_nodes(G, pos, nodelist=[states[-1]], node_size=260, node_color="red", ax=ax)
    if num_rings <= 4:
        labels = {node: format_state(node) for node in G.nodes()}
        nx.draw_networkx_labels(G, pos, labels=labels, font_size=7, ax=ax)

    handles = [mpatches.Patch(color=path_color, label=f"Solution ({len(moves)} moves)")]
    ax.legend(handles=handles, loc="upper right")
    ax.set_title(f"{num_rings}-ring Tower of Hanoi state space ({G.number_of_nodes()} states)")
    ax.axis("off")

    out_dir = os.path.dirname(out_path)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)
    fig.savefig(out_path, dpi=150, bbox_inches="tight", facecolor="white")
    plt.close(fig)
    return out_path
