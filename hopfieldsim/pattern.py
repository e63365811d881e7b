"""Binary patterns laid out on a grid of rows and columns."""

from __future__ import annotations

from itertools import islice
from os import PathLike
from typing import Iterator, List, Union

import numpy as np

PathType = Union[str, "PathLike[str]"]


def _format(value: float) -> str:
    return f"{value:g}"


def _tokens(path: PathType) -> Iterator[str]:
    with open(path, encoding="utf-8") as handle:
        for line in handle:
            yield from line.split()


def _read_numbers(path: PathType, count: int) -> List[float]:
    numbers = [float(token) for token in islice(_tokens(path), count)]
    if len(numbers) < count:
        raise ValueError(
            f"{path} holds {len(numbers)} numbers, {count} are needed"
        )
    return numbers


class Pattern:
    """A vector of neuron states with the grid shape used to store it."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, size: int, rows: int = 0, cols: int = 0):
        if size < 0:
            raise ValueError("pattern size must not be negative")
        self.size = size
        self.rows = rows
        self.cols = cols
        self.values = np.zeros(size, dtype=float)

    @classmethod
    def read(cls, path: PathType, size: int, rows: int = 0, cols: int = 0) -> "Pattern":
        """Read the first ``size`` numbers of a text file into a new pattern."""
        pattern = cls(size, rows, cols)
        pattern.values[:] = _read_numbers(path, size)
        return pattern

    def save(self, path: PathType) -> None:
        """Append the grid coordinates of every active neuron to a file."""
        row = col = 0
        with open(path, "a", encoding="utf-8") as handle:
            for value in self.values:
                if value == 1:
                    handle.write(f"{row}  {col}  {_format(value)}\n")
                col += 1
                if col == self.cols:
                    col = 0
                    row += 1
            handle.write("\n\n")

    def render(self) -> str:
        """Return the pattern as text, one grid row per line."""
        lines = []
        for row in range(self.rows):
            chunk = self.values[row * self.cols:(row + 1) * self.cols]
            lines.append("".join(f"{_format(value)} " for value in chunk) + "\n")
        return "".join(lines) + "\n"

    def copy_from(self, other: "Pattern") -> None:
        """Copy the grid shape and as many values as both patterns hold."""
        self.rows = other.rows
        self.cols = other.cols
        shared = min(self.size, other.size)
        self.values[:shared] = other.values[:shared]

    def copy(self) -> "Pattern":
        """Return an independent copy of this pattern."""
        duplicate = Pattern(self.size, self.rows, self.cols)
        duplicate.values[:] = self.values
        return duplicate

    def flip(self, index: int) -> None:
        """Switch the neuron at ``index`` between 0 and 1."""
        self.values[index] = 1 - self.values[index]

    def __len__(self) -> int:
        return self.size

    def __getitem__(self, index):
        return self.values[index]

    def __setitem__(self, index, value) -> None:
        self.values[index] = value

    def __iter__(self):
        return iter(self.values.tolist())

    def __eq__(self, other) -> bool:
        if not isinstance(other, Pattern):
            return NotImplemented
        return (
            self.size == other.size
            and self.rows == other.rows
            and self.cols == other.cols
            and bool(np.array_equal(self.values, other.values))
        )

    def __repr__(self) -> str:
        return f"Pattern(size={self.size}, rows={self.rows}, cols={self.cols})"


def read_patterns(
    path: PathType, count: int, size: int, rows: int = 0, cols: int = 0
) -> List[Pattern]:
    """Read ``count`` consecutive patterns of ``size`` numbers from a file."""
    numbers = _read_numbers(path, count * size)
    patterns = []
    for start in range(0, count * size, size):
        pattern = Pattern(size, rows, cols)
        pattern.values[:] = numbers[start:start + size]
        patterns.append(pattern)
    return patterns