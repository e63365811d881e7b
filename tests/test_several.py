import math

import pytest

from hopfieldsim.metropolis import temperature_label, temperature_schedule
from hopfieldsim.network import HopfieldNetwork
from hopfieldsim.pattern import read_patterns
from hopfieldsim.several import SeveralConfig, main, prompt_several_config, run_several

MODEL = (
    "1 0 1 0 1 0 1 0 1\n"
    "1 1 0 0 1 1 0 0 1\n"
    "0 1 1 1 0 0 1 0 0\n"
)


def _config(**changes):
    values = dict(
        size=9,
        sweeps=1,
        t_max=0.3,
        t_start=0.1,
        t_threshold=0.01,
        t_step=0.1,
        record_every=10,
        skip=0,
        max_patterns=3,
        rows=3,
        cols=3,
        seed=5,
    )
    values.update(changes)
    return SeveralConfig(**values)


@pytest.fixture
def workdir(tmp_path):
    (tmp_path / "inicio").mkdir()
    (tmp_path / "inicio" / "modelo.dat").write_text(MODEL, encoding="utf-8")
    return tmp_path


def _answers(values):
    items = iter(values)
    return lambda prompt: next(items)


def test_prompt_reads_values_in_order():
    config = prompt_several_config(
        _answers(["50", "10", "1.1", "1e-7", "0.01", "0.01", "100", "1000", "5"])
    )
    assert config.size == 50
    assert config.sweeps == 10
    assert config.t_max == 1.1
    assert config.t_start == 1e-7
    assert config.record_every == 100
    assert config.skip == 1000
    assert config.max_patterns == 5
    assert config.steps == 10 * 50 * 50


@pytest.mark.parametrize(
    "answers",
    [
        ["0", "10", "1.1", "1e-7", "0.01", "0.01", "100", "1000", "5"],
        ["50", "10", "1.1", "1e-7", "0.01", "0.01", "0", "1000", "5"],
        ["50", "10", "1.1", "1e-7", "0.01", "0.01", "100", "-1", "5"],
        ["50", "10", "1.1", "1e-7", "0.01", "0.01", "100", "1000", "0"],
    ],
)
def test_prompt_rejects_invalid_values(answers):
    with pytest.raises(ValueError):
        prompt_several_config(_answers(answers))


def test_runs_for_every_pattern_count(workdir):
    config = _config()
    results = run_several(config, workdir)
    temperatures = list(temperature_schedule(0.1, 0.3, 0.01, 0.1))
    assert sorted(results) == [2, 3]
    for count, rows in results.items():
        assert [row[0] for row in rows] == temperatures
        for _, energy, overlaps, state in rows:
            assert len(overlaps) == count
            assert set(state) <= {0.0, 1.0}
            assert all(abs(mean) <= 1.0 + 1e-9 for mean, _ in overlaps)


def test_energy_file_lists_stored_patterns(workdir):
    run_several(_config(), workdir)
    patterns = read_patterns(workdir / "inicio" / "modelo.dat", 3, 9)
    for count in (2, 3):
        network = HopfieldNetwork(9)
        network.train_from_file(workdir / "inicio" / "modelo.dat", count)
        lines = (
            workdir / "caracteristicas" / f"{count}_patron" / "energia.dat"
        ).read_text(encoding="utf-8").splitlines()
        assert len(lines) == count
        for index, line in enumerate(lines):
            position, energy = line.split()
            assert int(position) == index
            assert float(energy) == pytest.approx(network.energy(patterns[index]), rel=1e-5)


def test_evolution_and_summary_files_have_expected_columns(workdir):
    config = _config()
    results = run_several(config, workdir)
    for count, rows in results.items():
        base = workdir / "caracteristicas" / f"{count}_patron"
        for temperature, energy, overlaps, state in rows:
            label = temperature_label(temperature)
            records = (base / "evolucion" / f"{label}.dat").read_text(encoding="utf-8").splitlines()
            steps = [int(record.split()[0]) for record in records]
            assert steps == list(range(0, math.ceil(config.steps), config.record_every))
            assert all(len(record.split()) == count + 2 for record in records)
            assert (workdir / "sistema" / f"{count}_patron" / f"{label}.dat").exists()
        summary = (base / "T_solapamiento.dat").read_text(encoding="utf-8").splitlines()
        assert len(summary) == len(rows)
        assert all(len(line.split()) == 1 + 2 * count for line in summary)
        energies = (base / "T_Energia.dat").read_text(encoding="utf-8").splitlines()
        assert all(len(line.split()) == 3 for line in energies)


def test_initial_state_is_saved_once(workdir):
    run_several(_config(), workdir)
    text = (workdir / "sistema" / "condicion_incial.dat").read_text(encoding="utf-8")
    assert text.endswith("\n\n")
    for line in text.split("\n"):
        if line:
            row, col, value = line.split()
            assert 0 <= int(row) < 3 and 0 <= int(col) < 3
            assert value == "1"


def test_same_seed_gives_same_results(tmp_path, workdir):
    first = run_several(_config(), workdir)
    other = tmp_path / "other"
    (other / "inicio").mkdir(parents=True)
    (other / "inicio" / "modelo.dat").write_text(MODEL, encoding="utf-8")
    second = run_several(_config(), other)
    for count in first:
        assert [row[3] for row in first[count]] == [row[3] for row in second[count]]


def test_missing_model_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        run_several(_config(), tmp_path)


def test_too_few_patterns_in_model_raises(workdir):
    with pytest.raises(ValueError):
        run_several(_config(max_patterns=5), workdir)


def test_main_reports_failure(tmp_path):
    assert main(["--workdir", str(tmp_path)]) == 1