# dagprop/config.py
"""
Engine configuration.

Tuning knobs for the reverse driver and the convenience gradient helpers.
"""

from dataclasses import dataclass


@dataclass
class EngineConfig:
    """Configuration for `reverse` and the `seeds` helpers."""

    # Always run the explicit-stack traversal
    iterative: bool = False

    # Graphs deeper than this (in edges) switch to the explicit-stack traversal.
    # The recursive protocol uses about two Python frames per level.
    max_recursive_depth: int = 200

    # Default for symbolic_grads
    simplify: bool = True

    def validate(self) -> "EngineConfig":
        if self.max_recursive_depth < 0:
            raise ValueError(
                f"max_recursive_depth must be non-negative, got {self.max_recursive_depth}"
            )
        return self
