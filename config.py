"""
Configuration for the iterative Tower of Hanoi solver.

This module contains:
- MAX_RINGS: hard upper bound on the puzzle size
- HanoiConfig: runtime settings for the command line tool
"""

import os
from dataclasses import dataclass, fields
from typing import Tuple

from dotenv import find_dotenv, load_dotenv


# 2**64 - 1 moves is the largest count an unsigned 64-bit counter holds.
MAX_RINGS = 64
MOVE_COUNTER_BITS = 64

if (1 << MAX_RINGS) - 1 >= (1 << MOVE_COUNTER_BITS):
    raise RuntimeError(f"MAX_RINGS={MAX_RINGS} overflows a {MOVE_COUNTER_BITS}-bit move counter")


@dataclass
class HanoiConfig:
    """Runtime settings."""
    # Largest accepted ring count (never above MAX_RINGS)
    max_rings: int = MAX_RINGS

    # Start, middle and end peg names
    peg_names: Tuple[str, str, str] = ("A", "B", "C")

    # The state-space graph has 3**N nodes, so verification and plotting
    # are only offered for small puzzles
    verify_max_rings: int = 8
    plot_max_rings: int = 5

    # Default directory for plots
    output_dir: str = "graphs"

    def __post_init__(self):
        self.max_rings = min(int(self.max_rings), MAX_RINGS)
        if self.max_rings < 0:
            raise ValueError(f"max_rings must be non-negative, got {self.max_rings}")

        self.peg_names = tuple(self.peg_names)
        if len(self.peg_names) != 3 or len(set(self.peg_names)) != 3:
            raise ValueError(f"peg_names must be 3 distinct names, got {list(self.peg_names)}")
        if any(not name for name in self.peg_names):
            raise ValueError("peg_names must not be empty")

    @classmethod
    def from_env(cls, dotenv_path=None) -> "HanoiConfig":
        """Build a config from HANOI_* environment variables (and .env)."""
        # search from the working directory, not from where this module is installed
        load_dotenv(dotenv_path or find_dotenv(usecwd=True))

        env_keys = {
            "max_rings": "HANOI_MAX_RINGS",
            "peg_names": "HANOI_PEG_NAMES",
            "verify_max_rings": "HANOI_VERIFY_MAX_RINGS",
            "plot_max_rings": "HANOI_PLOT_MAX_RINGS",
            "output_dir": "HANOI_OUTPUT_DIR",
        }

        overrides = {}
        for f in fields(cls):
            raw = os.getenv(env_keys[f.name])
            if raw is None or raw.strip() == "":
                continue
            raw = raw.strip()
            if f.name == "peg_names":
                overrides[f.name] = tuple(name.strip() for name in raw.split(","))
            elif f.name == "output_dir":
                overrides[f.name] = raw
            else:
                try:
                    overrides[f.name] = int(raw)
                except ValueError:
                    raise ValueError(f"{env_keys[f.name]} must be an integer, got '{raw}'")

        return cls(**overrides)
