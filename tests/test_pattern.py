import numpy as np
import pytest

from hopfieldsim.pattern import Pattern, read_patterns


def test_new_pattern_is_zero():
    pattern = Pattern(9, 3, 3)
    assert len(pattern) == 9
    assert list(pattern) == [0.0] * 9
    assert (pattern.rows, pattern.cols) == (3, 3)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        Pattern(-1)


def test_read_takes_first_numbers(tmp_path):
    path = tmp_path / "model.dat"
    path.write_text("1 0 1\n1 0 0 1\n")
    pattern = Pattern.read(path, 5, 1, 5)
    assert list(pattern) == [1.0, 0.0, 1.0, 1.0, 0.0]


def test_read_too_short_raises(tmp_path):
    path = tmp_path / "model.dat"
    path.write_text("1 0\n")
    with pytest.raises(ValueError):
        Pattern.read(path, 4)


def test_read_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        Pattern.read(tmp_path / "absent.dat", 4)


def test_save_writes_active_coordinates(tmp_path):
    pattern = Pattern(4, 2, 2)
    pattern.values[:] = [1, 0, 0, 1]
    path = tmp_path / "state.dat"
    pattern.save(path)
    assert path.read_text() == "0  0  1\n1  1  1\n\n\n"


def test_save_appends(tmp_path):
    pattern = Pattern(4, 2, 2)
    pattern[1] = 1
    path = tmp_path / "state.dat"
    pattern.save(path)
    pattern.save(path)
    text = path.read_text()
    assert text.count("0  1  1\n") == 2


def test_render_grid():
    pattern = Pattern(4, 2, 2)
    pattern.values[:] = [1, 0, 0, 1]
    assert pattern.render() == "1 0 \n0 1 \n\n"


def test_render_stops_at_size():
    pattern = Pattern(3, 2, 2)
    lines = pattern.render().split("\n")
    assert lines[0].split() == ["0", "0"]
    assert lines[1].split() == ["0"]


def test_copy_from_larger_and_smaller():
    big = Pattern(5, 1, 5)
    big.values[:] = [1, 1, 0, 1, 1]
    small = Pattern(3)
    small.copy_from(big)
    assert list(small) == [1.0, 1.0, 0.0]
    assert (small.rows, small.cols) == (1, 5)

    target = Pattern(5)
    source = Pattern(2)
    source.values[:] = [1, 1]
    target.copy_from(source)
    assert list(target) == [1.0, 1.0, 0.0, 0.0, 0.0]


def test_copy_is_independent():
    original = Pattern(4, 2, 2)
    original[0] = 1
    duplicate = original.copy()
    assert duplicate == original
    duplicate.flip(0)
    assert original[0] == 1
    assert duplicate[0] == 0


def test_flip_twice_restores():
    pattern = Pattern(3)
    pattern.flip(2)
    assert pattern[2] == 1
    pattern.flip(2)
    assert pattern[2] == 0


def test_read_patterns_round_trip(tmp_path):
    rows = [[1, 0, 1, 0], [0, 0, 1, 1], [1, 1, 1, 0]]
    path = tmp_path / "model.dat"
    path.write_text("".join(" ".join(map(str, row)) + " \n" for row in rows))
    patterns = read_patterns(path, 2, 4, 2, 2)
    assert len(patterns) == 2
    assert [list(p) for p in patterns] == [[float(x) for x in row] for row in rows[:2]]
    assert all((p.rows, p.cols) == (2, 2) for p in patterns)


def test_read_patterns_too_few(tmp_path):
    path = tmp_path / "model.dat"
    path.write_text("1 0 1 0\n")
    with pytest.raises(ValueError):
        read_patterns(path, 2, 4)


def test_values_are_numpy():
    pattern = Pattern(3)
    pattern[0] = 1
    assert np.array_equal(pattern.values, np.array([1.0, 0.0, 0.0]))