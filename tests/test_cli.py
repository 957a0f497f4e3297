"""
Tests for the dataset loader and the command line driver
"""

import io

import numpy as np
import pytest

from nn_feature_select import DatasetError, SearchStrategy, load_instances
from nn_feature_select import search as search_module
from nn_feature_select.cli import format_features, main, prompt_strategy


CLEAN = """\
  1.0000000e+00  0.0000000e+00  5.0000000e-01
  1.0000000e+00  1.0000000e-01  1.0000000e-01
  1.0000000e+00  2.0000000e-01  9.0000000e-01
  2.0000000e+00  8.0000000e-01  2.0000000e-01
  2.0000000e+00  9.0000000e-01  8.0000000e-01
  2.0000000e+00  1.0000000e+00  4.0000000e-01
"""


@pytest.fixture
def clean_file(tmp_path):
    path = tmp_path / "clean.txt"
    path.write_text(CLEAN)
    return path


# ---------------------------------------------------------------------------
# Tests: load_instances
# ---------------------------------------------------------------------------

class TestLoadInstances:
    def test_shape_and_values(self, clean_file):
        data = load_instances(clean_file)
        assert data.shape == (6, 3)
        np.testing.assert_allclose(data[:, 0], [1, 1, 1, 2, 2, 2])
        assert data[2, 2] == pytest.approx(0.9)

    def test_single_row_is_2d(self, tmp_path):
        path = tmp_path / "one.txt"
        path.write_text("1 0.5 0.25\n")
        assert load_instances(path).shape == (1, 3)

    def test_ragged_rows_raise(self, tmp_path):
        path = tmp_path / "ragged.txt"
        path.write_text("1 0.5 0.25\n2 0.1\n")
        with pytest.raises(DatasetError):
            load_instances(path)

    def test_non_numeric_raises(self, tmp_path):
        path = tmp_path / "text.txt"
        path.write_text("1 0.5\n2 abc\n")
        with pytest.raises(DatasetError):
            load_instances(path)

    def test_empty_file_raises(self, tmp_path):
        path = tmp_path / "empty.txt"
        path.write_text("")
        with pytest.raises(DatasetError, match="no instances"):
            load_instances(path)

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_instances(tmp_path / "missing.txt")


# ---------------------------------------------------------------------------
# Tests: prompt_strategy / format_features
# ---------------------------------------------------------------------------

class TestPrompt:
    def test_reprompts_until_valid(self):
        answers = iter(["7", "x", "2"])
        lines = []
        strategy = prompt_strategy(read=lambda _: next(answers), write=lines.append)
        assert strategy is SearchStrategy.BACKWARD
        assert lines.count("Please enter a valid selection.") == 2

    def test_menu_lists_strategies(self):
        lines = []
        prompt_strategy(read=lambda _: "3", write=lines.append)
        assert any("Forward Selection" in line for line in lines)
        assert any("Variance" in line for line in lines)

    def test_format_features(self):
        assert format_features({3, 1, 2}) == "{1, 2, 3}"
        assert format_features(set()) == "{}"


# ---------------------------------------------------------------------------
# Tests: main
# ---------------------------------------------------------------------------

class TestMain:
    def test_forward(self, clean_file, capsys):
        assert main([str(clean_file), "--strategy", "forward"]) == 0
        out = capsys.readouterr().out
        assert "Normalizing data (done)" in out
        assert "Accuracy with features {1} is: 1.000" in out
        assert "milliseconds" in out
        assert ("Feature list {1} is the best feature subset, "
                "with an accuracy of 1.000") in out

    def test_quiet(self, clean_file, capsys):
        assert main([str(clean_file), "--strategy", "variance", "--quiet"]) == 0
        out = capsys.readouterr().out
        assert "Accuracy with features" not in out
        assert "Feature list {1}" in out

    def test_interactive_choice(self, clean_file, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("9\n1\n"))
        assert main([str(clean_file), "--quiet"]) == 0
        out = capsys.readouterr().out
        assert "Please enter a valid selection." in out
        assert "Feature list {1}" in out

    def test_closed_stdin(self, clean_file, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO(""))
        assert main([str(clean_file)]) == 2
        assert "No search strategy" in capsys.readouterr().err

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "missing.txt"), "--strategy", "forward"]) == 1
        assert "Failed to read" in capsys.readouterr().err

    def test_constant_column(self, tmp_path, capsys):
        path = tmp_path / "constant.txt"
        path.write_text("1 0.0 3.0\n2 1.0 3.0\n")
        assert main([str(path), "--strategy", "forward"]) == 1
        assert "Cannot normalize" in capsys.readouterr().err

    def test_search_error(self, tmp_path, capsys):
        path = tmp_path / "three.txt"
        path.write_text("1 0.0\n2 1.0\n3 0.5\n1 0.2\n2 0.9\n")
        assert main([str(path), "--strategy", "variance"]) == 1
        assert "Search failed" in capsys.readouterr().err

    def test_unknown_strategy_is_usage_error(self, clean_file):
        with pytest.raises(SystemExit) as exc:
            main([str(clean_file), "--strategy", "exhaustive"])
        assert exc.value.code == 2

    def test_forward_prints_round_choices(self, clean_file, capsys):
        assert main([str(clean_file), "--strategy", "forward"]) == 0
        out = capsys.readouterr().out
        first = out.index("Best choice is to add feature: 1")
        assert out.index("Accuracy with features {2} is") < first
        assert first < out.index("Accuracy with features {1, 2} is")
        assert "Best choice is to add feature: 2" in out

    def test_backward_prints_removed_feature(self, clean_file, capsys):
        assert main([str(clean_file), "--strategy", "backward"]) == 0
        out = capsys.readouterr().out
        assert "Best choice is to remove feature: 2" in out
        assert "Best choice is to add" not in out

    def test_quiet_hides_round_choices(self, clean_file, capsys):
        assert main([str(clean_file), "--strategy", "forward", "--quiet"]) == 0
        assert "Best choice" not in capsys.readouterr().out

    def test_timing_excludes_final_scoring(self, clean_file, capsys, monkeypatch):
        class FakeClock:
            now = 0.0

            def perf_counter(self):
                return self.now

        clock = FakeClock()
        real_accuracy = search_module.accuracy

        def slow_accuracy(features, instances):
            clock.now += 5.0
            return real_accuracy(features, instances)

        monkeypatch.setattr(search_module, "time", clock)
        monkeypatch.setattr(search_module, "accuracy", slow_accuracy)
        assert main([str(clean_file), "--strategy", "forward", "--quiet"]) == 0
        assert "The search took 0 milliseconds." in capsys.readouterr().out
