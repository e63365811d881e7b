"""Convergence of a one-pattern network from a random state at several temperatures."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from hopfieldsim.metropolis import Sampler, temperature_label, temperature_schedule
from hopfieldsim.network import HopfieldNetwork
from hopfieldsim.pattern import Pattern, PathType
from hopfieldsim.rng import RandomSource

MODEL_FILE = Path("inicio") / "modelo.dat"
ENERGY_FILE = Path("inicio") / "energia.dat"
FEATURES_DIR = Path("caracteristicas")
EVOLUTION_DIR = FEATURES_DIR / "evolucion"
SYSTEM_DIR = Path("sistema")


@dataclass
class StabilityConfig:
    """Parameters of the stability experiment."""

    size: int = 900
    sweeps: float = 50
    t_max: float = 1.0
    t_start: float = 1e-4
    t_threshold: float = 1e-2
    t_step: float = 0.1
    record_every: int = 500
    rows: int = 30
    cols: int = 30
    seed: int = 4313212

    @property
    def steps(self) -> float:
        """Number of Metropolis steps run at each temperature."""
        return self.sweeps * self.size * self.size


def prompt_stability_config(read: Callable[[str], str] = input) -> StabilityConfig:
    """Ask for the experiment parameters one by one."""
    size = int(read("System size: "))
    sweeps = float(read("Number of sweeps to evolve: "))
    t_max = float(read("Maximum temperature: "))
    t_start = float(read("Starting temperature: "))
    t_threshold = float(read("Temperature from which the increment becomes additive: "))
    t_step = float(read("Temperature increment: "))
    record_every = int(read("Steps between recorded samples: "))
    if size <= 0:
        raise ValueError("the system size must be positive")
    if record_every <= 0:
        raise ValueError("the recording interval must be positive")
    return StabilityConfig(
        size=size,
        sweeps=sweeps,
        t_max=t_max,
        t_start=t_start,
        t_threshold=t_threshold,
        t_step=t_step,
        record_every=record_every,
    )


def _output(workdir: Path, relative: Path) -> Path:
    path = workdir / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def run_stability(config: StabilityConfig, workdir: PathType = ".") -> List[Tuple[float, Pattern]]:
    """Run the experiment in ``workdir``; return each temperature with its final state."""
    workdir = Path(workdir)
    rng = RandomSource(config.seed)
    model = workdir / MODEL_FILE

    network = HopfieldNetwork(config.size)
    network.train_from_file(model, 1)
    stored = Pattern.read(model, config.size, config.rows, config.cols)

    with open(_output(workdir, ENERGY_FILE), "w", encoding="utf-8") as handle:
        handle.write(f"0  {network.energy(stored):g}\n")

    initial = stored.copy()
    for index in range(initial.size):
        initial[index] = 0 if rng.uniform() < 0.5 else 1

    _output(workdir, FEATURES_DIR / "T_Energia.dat").write_text("", encoding="utf-8")
    _output(workdir, FEATURES_DIR / "T_solapamiento.dat").write_text("", encoding="utf-8")

    results = []
    schedule = temperature_schedule(
        config.t_start, config.t_max, config.t_threshold, config.t_step
    )
    for temperature in schedule:
        label = temperature_label(temperature)
        state = initial.copy()
        sampler = Sampler(network, state, rng)
        evolution = _output(workdir, EVOLUTION_DIR / f"{label}.dat")
        with open(evolution, "w", encoding="utf-8") as handle:
            for step in sampler.run(temperature, config.steps):
                if step % config.record_every == 0:
                    handle.write(
                        f"{step} {network.overlap(state, stored, 0):g} "
                        f"{network.energy(state):g}\n"
                    )
        state.save(_output(workdir, SYSTEM_DIR / f"final_T_{label}.dat"))
        results.append((temperature, state))
    return results


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry point for the stability experiment."""
    parser = argparse.ArgumentParser(
        prog="hopfieldsim-stability",
        description="Evolve a one-pattern network from a random state at several temperatures.",
    )
    parser.add_argument("--workdir", default=".", help="directory holding inicio/modelo.dat")
    parser.add_argument(
        "--prompt", action="store_true", help="ask for the parameters on standard input"
    )
    args = parser.parse_args(argv)
    try:
        config = prompt_stability_config() if args.prompt else StabilityConfig()
        run_stability(config, args.workdir)
    except (OSError, ValueError) as exc:
        print(f"could not train the network or read the pattern: {exc}", file=sys.stderr)
        return 1
    return 0