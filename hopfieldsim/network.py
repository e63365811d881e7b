"""Hopfield network of binary (0/1) neurons with biased-pattern learning."""

from __future__ import annotations

from itertools import islice
from typing import Iterable, Optional

import numpy as np

from hopfieldsim.pattern import Pattern, PathType


def _format(value: float) -> str:
    return f"{value:g}"


class HopfieldNetwork:
    """Weights and firing thresholds learned from a set of stored patterns."""

    def __init__(self, size: int):
        if size <= 0:
            raise ValueError("network size must be positive")
        self.size = size
        self.weights = np.zeros((size, size), dtype=float)
        self.means: Optional[np.ndarray] = None
        self.thresholds: Optional[np.ndarray] = None
        self.training_path: Optional[str] = None

    @property
    def pattern_count(self) -> int:
        """Number of patterns the network was trained with."""
        return 0 if self.means is None else len(self.means)

    def _state(self, state) -> np.ndarray:
        values = state.values if isinstance(state, Pattern) else np.asarray(state, dtype=float)
        if values.shape != (self.size,):
            raise ValueError(
                f"state has shape {values.shape}, expected ({self.size},)"
            )
        return values

    def _require_trained(self) -> None:
        if self.thresholds is None or self.means is None:
            raise RuntimeError("the network has not been trained")

    def train(self, patterns: Iterable) -> None:
        """Learn weights and thresholds from the given patterns."""
        rows = [self._state(pattern) for pattern in patterns]
        data = np.array(rows, dtype=float).reshape(len(rows), self.size)
        means = data.mean(axis=1)
        if np.any((means == 0) | (means == 1)):
            raise ValueError("a pattern with every neuron equal cannot be stored")

        centered = data - means[:, None]
        scaled = centered / (means * (1 - means))[:, None]
        weights = centered.T @ scaled / self.size
        np.fill_diagonal(weights, 0.0)

        self.weights = weights
        self.means = means
        self.thresholds = weights.sum(axis=1) / 2.0

    def train_from_file(self, path: PathType, count: int) -> None:
        """Train on the first ``count`` patterns stored in a text file."""
        needed = count * self.size
        with open(path, encoding="utf-8") as handle:
            tokens = (token for line in handle for token in line.split())
            numbers = [int(token) for token in islice(tokens, needed)]
        if len(numbers) < needed:
            raise ValueError(f"{path} holds {len(numbers)} numbers, {needed} are needed")
        data = np.array(numbers, dtype=float).reshape(count, self.size)
        self.train(data)
        self.training_path = str(path)

    def energy(self, state) -> float:
        """Return the energy of a state in this network."""
        self._require_trained()
        values = self._state(state)
        return float(-0.5 * (values @ self.weights @ values) + self.thresholds @ values)

    def evaluate(self, state) -> Pattern:
        """Apply the weights to a state and threshold the result at 0.5."""
        values = self._state(state)
        field = -(self.weights @ values) / 2.0
        result = Pattern(self.size)
        result.values[:] = np.where(field < 0.5, 0.0, np.where(field > 0.5, 1.0, field))
        return result

    def energy_delta(self, new, old, k: int) -> float:
        """Energy change when neuron ``k`` alone goes from ``old`` to ``new``."""
        self._require_trained()
        after = self._state(new)
        before = self._state(old)
        field = float(self.weights[k] @ before)
        return field * (before[k] - after[k]) + float(self.thresholds[k]) * (after[k] - before[k])

    def overlap(self, state, pattern, k: int) -> float:
        """Overlap of a state with stored pattern ``k``: 1 when equal, -1 when opposite."""
        self._require_trained()
        values = self._state(state)
        stored = self._state(pattern)
        mean = float(self.means[k])
        total = float((stored - mean) @ (values - 0.5))
        return total / (mean * (1 - mean) * self.size)

    def render(self) -> str:
        """Return the weight matrix and the thresholds as text."""
        self._require_trained()
        lines = ["".join(f"{_format(w)} " for w in row) + "\n" for row in self.weights]
        thresholds = "".join(f"{_format(t)}  " for t in self.thresholds)
        return "".join(lines) + "\n\n" + thresholds + "\n\n"