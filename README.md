# hopfieldsim

Monte Carlo experiments on binary (0/1) Hopfield networks. A network is trained
on one or more stored patterns. It is then started from a random or a slightly
deformed state and evolved with single-spin Metropolis updates. The experiments
record how the overlap with the stored patterns and the energy of the state
develop with temperature. They also record how many patterns the network can
still recall as more are stored.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Building blocks

- `hopfieldsim.rng.RandomSource(seed)` is a seeded uniform random source.
  `uniform()` draws from [0, 1) and `between(low, high)` draws from [low, high).
- `hopfieldsim.pattern.Pattern(size, rows, cols)` is a state of `size` neurons
  that is laid out as a grid of `rows` × `cols` for output.
  - `Pattern.read(path, size, rows, cols)` loads the first `size` numbers of a
    whitespace-separated file.
  - `save(path)` appends the row and column of every neuron equal to 1 to a
    file, followed by two blank lines.
  - `render()` returns the grid as text.
  - `copy()` returns an independent duplicate.
  - `copy_from(other)` copies the grid shape and as many values as both
    patterns hold.
  - `flip(index)` switches one neuron between 0 and 1.
  - `read_patterns(path, count, size, rows, cols)` loads `count` consecutive
    patterns.
- `hopfieldsim.network.HopfieldNetwork(size)` holds the weights and the firing
  thresholds.
  - Train it with `train(patterns)` or with `train_from_file(path, count)`,
    which uses the first `count` patterns of a file. A pattern whose neurons
    are all equal raises `ValueError`.
  - `energy` gives the energy of a state.
  - `evaluate` applies the weights to a state and thresholds the result.
  - `energy_delta(new, old, k)` gives the change in energy when only neuron
    `k` flips.
  - `overlap(state, pattern, k)` gives the overlap with stored pattern `k`.
  - `render()` shows the weights and the thresholds.
- `hopfieldsim.metropolis.Sampler(network, state, rng)` runs Metropolis updates
  on `state` in place.
  - `step(temperature)` proposes one flip and returns whether it was accepted.
  - `run(temperature, steps)` is a generator that performs the steps and yields
    each step's index.
  - `temperature_schedule(start, stop, threshold, step)` yields the
    temperatures the experiments visit. Below `threshold` each temperature is
    ten times the previous one; from `threshold` on it grows by `step` until it
    reaches `stop`.
  - `temperature_label` turns a temperature into the text used in file names,
    for example `0_000100`.
- `hopfieldsim.stats` summarises data files.
  - `column_statistics(path, column, total_columns, skip)` returns the mean and
    the sample standard deviation of one column, after skipping the first
    `skip` lines.
  - `fixed_deviation(path, column, total_columns, count)` returns the sample
    standard deviation of a column over the first `count` records.

```python
from hopfieldsim.metropolis import Sampler
from hopfieldsim.network import HopfieldNetwork
from hopfieldsim.pattern import Pattern
from hopfieldsim.rng import RandomSource

stored = Pattern.read("inicio/modelo.dat", 900, 30, 30)
network = HopfieldNetwork(900)
network.train([stored])

sampler = Sampler(network, stored.copy(), RandomSource(4313212))
for _ in sampler.run(1e-4, 10_000):
    pass
print(network.overlap(sampler.state, stored, 0), network.energy(sampler.state))
```

## Experiments

Each command takes `--workdir` (default: the current directory) and `--prompt`.
Without `--prompt` the command uses its built-in parameters; with it, the
command asks for each parameter on standard input. A command prints an error
and exits with status 1 when a file cannot be read or written, or when a
parameter is invalid.

| Command              | What it does                                                                 |
|----------------------|------------------------------------------------------------------------------|
| `hopfield-stability` | Evolves a network storing one pattern from a random start at each temperature. |
| `hopfield-several`   | Does the same for networks storing 2 up to the maximum number of patterns.   |
| `hopfield-storage`   | Counts how many random patterns are recalled as more are stored.             |

### hopfield-stability

Reads the stored pattern from `inicio/modelo.dat`, with values 0 or 1 separated
by spaces. It writes the following files:

- `inicio/energia.dat`: the energy of the stored pattern.
- `caracteristicas/evolucion/<temperature>.dat`: one line per recorded step,
  holding the step, the overlap and the energy.
- `sistema/final_T_<temperature>.dat`: the final state at each temperature.

### hopfield-several

Reads the patterns from `inicio/modelo.dat`, one pattern per line. For each
number of stored patterns `k` it writes these files below
`caracteristicas/<k>_patron/`:

- `energia.dat`: the energy of each stored pattern.
- `evolucion/<temperature>.dat`: the overlap with every stored pattern and the
  energy.
- `T_Energia.dat`: the mean and standard deviation of the energy at each
  temperature.
- `T_solapamiento.dat`: the mean and standard deviation of each overlap at each
  temperature.

It also writes the initial state to `sistema/condicion_incial.dat` and the
final states to `sistema/<k>_patron/`.

### hopfield-storage

Takes `--seed` in addition to the shared options. For every repetition it
generates new random patterns in `inicio/modelo.dat` and writes the per-run
results to `resultados_por_partes/resultados_<n>.dat`. It writes the averages
over all repetitions to `resultados.dat`.

### From Python

The same runs are available through these functions, each taking a
configuration object and the working directory:

| Function        | Configuration     |
|-----------------|-------------------|
| `run_stability` | `StabilityConfig` |
| `run_several`   | `SeveralConfig`   |
| `run_storage`   | `StorageConfig`   |

The functions `prompt_stability_config`, `prompt_several_config` and
`prompt_storage_config` build a configuration by asking for each value.

The storage module also provides two helpers:

- `generate_patterns` writes random patterns to a file.
- `summarise` averages the per-repetition measurements.

The simulations are long with the default sizes: every temperature runs many
Monte Carlo steps per spin over networks of up to 900 neurons.

## What is not included

- There is no ready-made experiment for a network storing a single pattern that
  tabulates the mean overlap and energy, with their spreads, against
  temperature.
- `hopfield-stability` creates `caracteristicas/T_Energia.dat` and
  `caracteristicas/T_solapamiento.dat` but leaves them empty. To obtain those
  tables, apply `hopfieldsim.stats.column_statistics` to the evolution files
  it writes.