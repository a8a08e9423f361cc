"""
Tests for the command-line front end.
"""

import io

import pytest

from stackcalc import ENV_VAR_CONFIG, ENV_VAR_LOG_LEVEL
from stackcalc.__main__ import main


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    monkeypatch.delenv(ENV_VAR_CONFIG, raising=False)
    monkeypatch.delenv(ENV_VAR_LOG_LEVEL, raising=False)


def run_main(argv, stdin_text=""):
    """Runs main() and returns (exit code, stdout, stderr)."""
    stdout = io.StringIO()
    stderr = io.StringIO()
    code = main(argv, stdin=io.StringIO(stdin_text), stdout=stdout, stderr=stderr)
    return code, stdout.getvalue(), stderr.getvalue()


class TestMain:
    """Tests for main()."""

    def test_evaluates_arguments(self):
        code, out, err = run_main(["2+3*2+5", "10/4", "sqrt(-4)"])
        assert code == 0
        assert out == "13\n5/2\n0+2i\n"
        assert err == ""

    def test_reads_stdin_lines(self):
        code, out, _ = run_main([], "2+sqr(5)-sqr(4;2)\n\n5+2**2**3+1\n")
        assert code == 0
        assert out == "11\n262\n"

    def test_failure_sets_exit_code(self):
        code, out, err = run_main(["1/0", "1+1"])
        assert code == 1
        assert out == "2\n"
        assert "division by zero" in err

    def test_each_expression_reports_independently(self):
        code, out, err = run_main(["sqr(5", "1 << 10**20", "7"])
        assert code == 1
        assert out == "25\n7\n"
        assert err.count("error:") == 1

    def test_config_from_environment(self, monkeypatch, tmp_path):
        path = tmp_path / "stackcalc.yaml"
        path.write_text("maxFibArgument: 5\n")
        monkeypatch.setenv(ENV_VAR_CONFIG, str(path))
        code, _, err = run_main(["fib(6)"])
        assert code == 1
        assert "out of range" in err

    def test_invalid_config(self, monkeypatch, tmp_path):
        path = tmp_path / "stackcalc.yaml"
        path.write_text("bogus: 1\n")
        monkeypatch.setenv(ENV_VAR_CONFIG, str(path))
        code, _, err = run_main(["1"])
        assert code == 2
        assert "invalid configuration" in err
