"""Mean and spread of one column of a whitespace-separated data file."""

from __future__ import annotations

import math
from itertools import islice
from typing import Iterable, Iterator, List, Sequence, Tuple

from hopfieldsim.pattern import PathType


def _tokens(path: PathType, skip: int) -> Iterator[str]:
    with open(path, encoding="utf-8") as handle:
        for line in islice(handle, skip, None):
            yield from line.split()


def _records(tokens: Iterable[str], total_columns: int) -> Iterator[List[str]]:
    record: List[str] = []
    for token in tokens:
        record.append(token)
        if len(record) == total_columns:
            yield record
            record = []
    if record:
        raise ValueError(
            f"incomplete record: {len(record)} of {total_columns} columns"
        )


def _check_columns(column: int, total_columns: int) -> None:
    if total_columns < 1:
        raise ValueError("a record needs at least one column")
    if not 1 <= column <= total_columns:
        raise ValueError(f"column {column} is outside 1..{total_columns}")


def _mean_and_deviation(values: Sequence[float]) -> Tuple[float, float]:
    if not values:
        raise ValueError("no data to summarise")
    mean = math.fsum(values) / len(values)
    if len(values) == 1:
        return mean, math.nan
    spread = math.fsum((value - mean) ** 2 for value in values)
    return mean, math.sqrt(spread / abs(len(values) - 1))


def column_statistics(
    path: PathType, column: int, total_columns: int, skip: int = 0
) -> Tuple[float, float]:
    """Return the mean and sample standard deviation of a column.

    The first ``skip`` lines are ignored; the rest of the file is read as
    records of ``total_columns`` numbers. ``column`` counts from 1.
    """
    _check_columns(column, total_columns)
    if skip < 0:
        raise ValueError("the number of skipped lines must not be negative")
    values = [
        float(record[column - 1])
        for record in _records(_tokens(path, skip), total_columns)
    ]
    return _mean_and_deviation(values)


def fixed_deviation(path: PathType, column: int, total_columns: int, count: int) -> float:
    """Return the sample standard deviation of a column over the first ``count`` records."""
    _check_columns(column, total_columns)
    if count < 1:
        raise ValueError("at least one record is needed")
    records = list(islice(_records(_tokens(path, 0), total_columns), count))
    if len(records) < count:
        raise ValueError(f"{path} holds {len(records)} records, {count} are needed")
    values = [float(record[column - 1]) for record in records]
    return _mean_and_deviation(values)[1]