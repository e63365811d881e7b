"""Overlaps and energy of a network storing several patterns, at several temperatures."""

from __future__ import annotations

import argparse
import math
import sys
from contextlib import ExitStack
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from hopfieldsim.metropolis import Sampler, temperature_label, temperature_schedule
from hopfieldsim.network import HopfieldNetwork
from hopfieldsim.pattern import Pattern, PathType, read_patterns
from hopfieldsim.rng import RandomSource
from hopfieldsim.stats import column_statistics

MODEL_FILE = Path("inicio") / "modelo.dat"
FEATURES_DIR = Path("caracteristicas")
SYSTEM_DIR = Path("sistema")
INITIAL_FILE = SYSTEM_DIR / "condicion_incial.dat"
MIN_PATTERNS = 2

Statistics = Tuple[float, float]
TemperatureResult = Tuple[float, Statistics, List[Statistics], Pattern]


@dataclass
class SeveralConfig:
    """Parameters of the several-pattern experiment."""

    size: int = 100
    sweeps: float = 30
    t_max: float = 1.1
    t_start: float = 1e-7
    t_threshold: float = 1e-2
    t_step: float = 0.01
    record_every: int = 100
    skip: int = 1000
    max_patterns: int = 7
    rows: int = 10
    cols: int = 10
    seed: int = 123123

    @property
    def steps(self) -> float:
        """Number of Metropolis steps run at each temperature."""
        return self.sweeps * self.size * self.size


def prompt_several_config(read: Optional[Callable[[str], str]] = None) -> SeveralConfig:
    """Ask for the experiment parameters one by one."""
    read = read or input
    size = int(read("System size: "))
    sweeps = float(read("Number of sweeps to evolve: "))
    t_max = float(read("Maximum temperature: "))
    t_start = float(read("Starting temperature: "))
    t_threshold = float(read("Temperature from which the increment becomes additive: "))
    t_step = float(read("Temperature increment: "))
    record_every = int(read("Steps between recorded samples: "))
    skip = int(float(read("Recorded samples discarded before averaging: ")))
    max_patterns = int(read("Maximum number of stored patterns: "))
    if size <= 0:
        raise ValueError("the system size must be positive")
    if record_every <= 0:
        raise ValueError("the recording interval must be positive")
    if skip < 0:
        raise ValueError("the number of discarded samples must not be negative")
    if max_patterns <= 0:
        raise ValueError("the number of patterns must be positive")
    return SeveralConfig(
        size=size,
        sweeps=sweeps,
        t_max=t_max,
        t_start=t_start,
        t_threshold=t_threshold,
        t_step=t_step,
        record_every=record_every,
        skip=skip,
        max_patterns=max_patterns,
    )


def _output(workdir: Path, relative: Path) -> Path:
    path = workdir / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _statistics(path: Path, column: int, total_columns: int, skip: int) -> Statistics:
    try:
        return column_statistics(path, column, total_columns, skip)
    except ValueError:
        return math.nan, math.nan


def _random_state(config: SeveralConfig, rng: RandomSource) -> Pattern:
    state = Pattern(config.size, config.rows, config.cols)
    for index in range(state.size):
        state[index] = 1 if rng.uniform() < 0.5 else 0
    return state


def _sweep(
    config: SeveralConfig,
    workdir: Path,
    network: HopfieldNetwork,
    stored: List[Pattern],
    initial: Pattern,
    rng: RandomSource,
) -> List[TemperatureResult]:
    count = len(stored)
    base = FEATURES_DIR / f"{count}_patron"
    columns = count + 2

    with open(_output(workdir, base / "energia.dat"), "w", encoding="utf-8") as handle:
        for index, pattern in enumerate(stored):
            handle.write(f"{index}  {network.energy(pattern):g}\n")

    results: List[TemperatureResult] = []
    with ExitStack() as stack:
        energy_out = stack.enter_context(
            open(_output(workdir, base / "T_Energia.dat"), "w", encoding="utf-8")
        )
        overlap_out = stack.enter_context(
            open(_output(workdir, base / "T_solapamiento.dat"), "w", encoding="utf-8")
        )
        schedule = temperature_schedule(
            config.t_start, config.t_max, config.t_threshold, config.t_step
        )
        for temperature in schedule:
            label = temperature_label(temperature)
            state = initial.copy()
            sampler = Sampler(network, state, rng)
            evolution = _output(workdir, base / "evolucion" / f"{label}.dat")
            with open(evolution, "w", encoding="utf-8") as handle:
                for step in sampler.run(temperature, config.steps):
                    if step % config.record_every == 0:
                        overlaps = "".join(
                            f"{network.overlap(state, pattern, k):g} "
                            for k, pattern in enumerate(stored)
                        )
                        handle.write(f"{step} {overlaps}{network.energy(state):g}\n")

            energy = _statistics(evolution, columns, columns, config.skip)
            energy_out.write(f"{temperature:g} {energy[0]:g} {energy[1]:g}\n")

            overlaps_stats = [
                _statistics(evolution, column, columns, config.skip)
                for column in range(2, count + 2)
            ]
            overlap_out.write(
                f"{temperature:g}"
                + "".join(f" {mean:g} {spread:g} " for mean, spread in overlaps_stats)
                + "\n"
            )
            energy_out.flush()
            overlap_out.flush()

            state.save(_output(workdir, SYSTEM_DIR / f"{count}_patron" / f"{label}.dat"))
            results.append((temperature, energy, overlaps_stats, state))
    return results


def run_several(
    config: SeveralConfig, workdir: PathType = "."
) -> Dict[int, List[TemperatureResult]]:
    """Run the experiment in ``workdir`` for 2 up to ``max_patterns`` stored patterns.

    Returns, for every number of stored patterns, a list holding for each
    temperature the energy statistics, the overlap statistics with every
    stored pattern, and the final state.
    """
    workdir = Path(workdir)
    rng = RandomSource(config.seed)
    model = workdir / MODEL_FILE

    initial = _random_state(config, rng)
    initial.save(_output(workdir, INITIAL_FILE))

    patterns = read_patterns(model, config.max_patterns, config.size, config.rows, config.cols)

    results: Dict[int, List[TemperatureResult]] = {}
    for count in range(MIN_PATTERNS, config.max_patterns + 1):
        network = HopfieldNetwork(config.size)
        network.train_from_file(model, count)
        results[count] = _sweep(config, workdir, network, patterns[:count], initial, rng)
    return results


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point for the several-pattern experiment."""
    parser = argparse.ArgumentParser(
        prog="hopfieldsim-several",
        description=(
            "Measure overlaps and energy of networks storing a growing number "
            "of patterns at several temperatures."
        ),
    )
    parser.add_argument("--workdir", default=".", help="directory holding inicio/modelo.dat")
    parser.add_argument(
        "--prompt", action="store_true", help="ask for the parameters on standard input"
    )
    args = parser.parse_args(argv)
    try:
        config = prompt_several_config() if args.prompt else SeveralConfig()
        run_several(config, args.workdir)
    except (OSError, ValueError) as exc:
        print(f"could not train the network or read the patterns: {exc}", file=sys.stderr)
        return 1
    return 0