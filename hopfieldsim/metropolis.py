"""Metropolis sampling of network states and the temperature sweep."""

from __future__ import annotations

import math
from typing import Iterator

from hopfieldsim.network import HopfieldNetwork
from hopfieldsim.pattern import Pattern
from hopfieldsim.rng import RandomSource


class Sampler:
    """Single-spin-flip Metropolis dynamics on a network state.

    The state pattern is updated in place.
    """

    def __init__(self, network: HopfieldNetwork, state: Pattern, rng: RandomSource):
        if state.size != network.size:
            raise ValueError(
                f"state has {state.size} neurons, the network has {network.size}"
            )
        self.network = network
        self.state = state
        self.rng = rng
        self._trial = state.copy()
        self._last = 0

    def step(self, temperature: float) -> bool:
        """Propose flipping one random neuron; return whether the flip was accepted."""
        if temperature <= 0:
            raise ValueError("temperature must be positive")
        self._trial[self._last] = self.state[self._last]

        draw = self.rng.uniform()
        while draw >= 1.0:
            draw = self.rng.uniform()
        position = int(self.state.size * draw)
        self._trial.flip(position)

        delta = self.network.energy_delta(self._trial, self.state, position)
        exponent = -delta / temperature
        probability = 1.0 if exponent >= 0 else math.exp(exponent)

        accepted = self.rng.uniform() < probability
        if accepted:
            self.state[position] = self._trial[position]
        self._last = position
        return accepted

    def run(self, temperature: float, steps: float) -> Iterator[int]:
        """Perform ``steps`` Metropolis steps, yielding each step's index after it."""
        for index in range(math.ceil(steps)):
            self.step(temperature)
            yield index


def temperature_schedule(
    start: float, stop: float, threshold: float, step: float
) -> Iterator[float]:
    """Yield temperatures from ``start`` until ``stop`` is reached.

    Below ``threshold`` each temperature is ten times the previous one;
    from there on it grows by ``step``. The first temperature is always
    yielded.
    """
    if start <= 0:
        raise ValueError("the starting temperature must be positive")
    if step <= 0:
        raise ValueError("the temperature increment must be positive")
    temperature = start
    while True:
        yield temperature
        if temperature < threshold:
            temperature *= 10.0
        else:
            temperature += step
        if not temperature < stop:
            return


def temperature_label(temperature: float) -> str:
    """Return a temperature written with six decimals and '_' for the point."""
    return f"{temperature:f}".replace(".", "_")