"""Storage capacity: how many random patterns a network still recalls."""

from __future__ import annotations

import argparse
import math
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence

from hopfieldsim.metropolis import Sampler
from hopfieldsim.network import HopfieldNetwork
from hopfieldsim.pattern import Pattern, PathType, read_patterns
from hopfieldsim.rng import RandomSource
from hopfieldsim.stats import column_statistics

MODEL_FILE = Path("inicio") / "modelo.dat"
PARTS_DIR = Path("resultados_por_partes")
TRACE_FILE = Path("solapamiento.dat")
RESULTS_FILE = Path("resultados.dat")
FLIP_PROBABILITY = 0.01
RECALL_THRESHOLD = 0.75


class Measurement(NamedTuple):
    """Result of one repetition for one number of stored patterns."""

    overlap: float
    deviation: float
    recalled: float
    load: float


class SummaryRow(NamedTuple):
    """Averages over all repetitions for one number of stored patterns."""

    patterns: int
    overlap: float
    spread: float
    recalled: float
    load: float


@dataclass
class StorageConfig:
    """Parameters of the storage experiment."""

    size: int = 100
    sweeps: float = 10
    temperature: float = 1e-5
    record_every: int = 100
    settle: float = 3.2e4
    max_patterns: int = 60
    min_patterns: int = 1
    repetitions: int = 50
    rows: int = 20
    cols: int = 20
    seed: Optional[int] = None

    @property
    def steps(self) -> float:
        """Number of Metropolis steps run for each number of stored patterns."""
        return self.sweeps * self.size * self.size


def prompt_storage_config(read: Optional[Callable[[str], str]] = None) -> StorageConfig:
    """Ask for the experiment parameters one by one."""
    read = read or input
    size = int(read("System size: "))
    sweeps = float(read("Number of sweeps to evolve: "))
    temperature = float(read("Temperature of the system: "))
    record_every = int(read("Steps between recorded samples: "))
    settle = float(read("Steps discarded before averaging: "))
    max_patterns = int(read("Maximum number of stored patterns: "))
    min_patterns = int(read("Minimum number of stored patterns: "))
    repetitions = int(read("Number of repetitions of the experiment: "))
    if size <= 0:
        raise ValueError("the system size must be positive")
    if temperature <= 0:
        raise ValueError("the temperature must be positive")
    if record_every <= 0:
        raise ValueError("the recording interval must be positive")
    if min_patterns < 1:
        raise ValueError("at least one pattern must be stored")
    if max_patterns < min_patterns:
        raise ValueError("the maximum number of patterns is below the minimum")
    if repetitions < 1:
        raise ValueError("at least one repetition is needed")
    return StorageConfig(
        size=size,
        sweeps=sweeps,
        temperature=temperature,
        record_every=record_every,
        settle=settle,
        max_patterns=max_patterns,
        min_patterns=min_patterns,
        repetitions=repetitions,
    )


def _output(workdir: Path, relative: Path) -> Path:
    path = workdir / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def generate_patterns(path: PathType, count: int, size: int, rng: RandomSource) -> List[Pattern]:
    """Write ``count`` random patterns of ``size`` neurons to ``path``, one per line.

    Each neuron is 1 when a first uniform draw is below a second one.
    The generated patterns are returned.
    """
    if count < 0:
        raise ValueError("the number of patterns must not be negative")
    if size <= 0:
        raise ValueError("the pattern size must be positive")
    patterns = []
    with open(path, "w", encoding="utf-8") as handle:
        for _ in range(count):
            pattern = Pattern(size)
            for index in range(size):
                first = rng.uniform()
                second = rng.uniform()
                pattern[index] = 1 if first < second else 0
            handle.write("".join(f"{int(value)} " for value in pattern) + "\n")
            patterns.append(pattern)
    return patterns


def summarise(table: Mapping[int, Sequence[Sequence[float]]], size: int) -> List[SummaryRow]:
    """Average the measurements of every repetition for each number of patterns.

    ``table`` maps a number of stored patterns to one (overlap, deviation,
    recalled, load) record per repetition. The spread of the overlap is
    scaled by the network size less one.
    """
    if size < 2:
        raise ValueError("the network size must be at least 2")
    rows = []
    for count in sorted(table):
        measurements = list(table[count])
        if not measurements:
            raise ValueError(f"no repetitions recorded for {count} patterns")
        repetitions = len(measurements)
        overlaps = [float(record[0]) for record in measurements]
        overlap = math.fsum(abs(value) for value in overlaps) / repetitions
        squares = math.fsum((overlap - value) ** 2 for value in overlaps)
        spread = math.sqrt(abs(squares / (size - 1)))
        recalled = math.fsum(abs(float(record[2])) for record in measurements) / repetitions
        load = math.fsum(abs(float(record[3])) for record in measurements) / repetitions
        rows.append(SummaryRow(count, overlap, spread, recalled, load))
    return rows


def _trace_statistics(path: Path):
    try:
        return column_statistics(path, 1, 1, 0)
    except ValueError:
        return math.nan, math.nan


def _measure(
    config: StorageConfig,
    workdir: Path,
    model: Path,
    stored: List[Pattern],
    start: Pattern,
    count: int,
    rng: RandomSource,
) -> Optional[Measurement]:
    network = HopfieldNetwork(config.size)
    try:
        network.train_from_file(model, count)
    except ValueError as exc:
        print(f"could not train the network with {count} patterns: {exc}", file=sys.stderr)
        return None

    state = start.copy()
    sampler = Sampler(network, state, rng)
    sums = [0.0] * count
    trace = _output(workdir, TRACE_FILE)
    with open(trace, "w", encoding="utf-8") as handle:
        for step in sampler.run(config.temperature, config.steps):
            if config.settle < step:
                overlaps = [
                    network.overlap(state, pattern, k)
                    for k, pattern in enumerate(stored[:count])
                ]
                sums = [total + value for total, value in zip(sums, overlaps)]
                if step % config.record_every == 0:
                    handle.write(f"{overlaps[0]:g}\n")

    denominator = config.steps - config.settle - 1.0
    averages = [total / denominator for total in sums] if denominator > 0 else [math.nan] * count
    recalled = sum(1 for average in averages if abs(average) >= RECALL_THRESHOLD)
    mean, deviation = _trace_statistics(trace)
    return Measurement(mean, deviation, recalled, count / config.size)


def run_storage(config: StorageConfig, workdir: PathType = ".") -> List[SummaryRow]:
    """Run the experiment in ``workdir`` and return the averaged results.

    For every repetition new random patterns are generated; the first one,
    slightly deformed, is the starting state of networks storing from
    ``min_patterns`` to ``max_patterns`` patterns. The summary covers the
    numbers of patterns above ``min_patterns``.
    """
    workdir = Path(workdir)
    model = _output(workdir, MODEL_FILE)
    seeds = RandomSource(config.seed)
    counts = range(config.min_patterns, config.max_patterns + 1)
    table: Dict[int, List[Measurement]] = {count: [] for count in counts}

    for repetition in range(config.repetitions):
        rng = RandomSource(int(1000000.0 * seeds.uniform()))
        generate_patterns(model, config.max_patterns, config.size, rng)
        stored = read_patterns(model, config.max_patterns, config.size, config.rows, config.cols)

        start = stored[0].copy()
        for index in range(start.size):
            if rng.uniform() < FLIP_PROBABILITY:
                start.flip(index)

        part = _output(workdir, PARTS_DIR / f"resultados_{repetition}.dat")
        with open(part, "w", encoding="utf-8") as handle:
            for count in counts:
                measurement = _measure(config, workdir, model, stored, start, count, rng)
                if measurement is None:
                    table[count].append(
                        Measurement(math.nan, math.nan, math.nan, count / config.size)
                    )
                    continue
                handle.write(
                    f"{count} {measurement.overlap:g} {measurement.deviation:g} "
                    f"{int(measurement.recalled)} {measurement.load:g}\n"
                )
                handle.flush()
                table[count].append(measurement)

    summary = summarise(
        {count: rows for count, rows in table.items() if count > config.min_patterns},
        config.size,
    )
    with open(_output(workdir, RESULTS_FILE), "w", encoding="utf-8") as handle:
        for row in summary:
            handle.write(
                f"{row.patterns}\t{row.overlap:g}\t{row.spread:g}\t"
                f"{row.recalled:g}\t{row.load:g}\n"
            )
    return summary


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point for the storage experiment."""
    parser = argparse.ArgumentParser(
        prog="hopfieldsim-storage",
        description="Count how many random patterns a network recalls as more are stored.",
    )
    parser.add_argument("--workdir", default=".", help="directory where the results are written")
    parser.add_argument(
        "--prompt", action="store_true", help="ask for the parameters on standard input"
    )
    parser.add_argument("--seed", type=int, default=None, help="seed of the random numbers")
    args = parser.parse_args(argv)
    try:
        config = prompt_storage_config() if args.prompt else StorageConfig()
        config.seed = args.seed
        run_storage(config, args.workdir)
    except (OSError, ValueError) as exc:
        print(f"the storage experiment failed: {exc}", file=sys.stderr)
        return 1
    return 0