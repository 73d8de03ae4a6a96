"""Tests for the command-line driver."""

import json

import pytest

from stonks.cli import build_parser, main, run
from stonks.storage import DEFAULT_FILENAME


def _prices(path):
    return [record['price'] for record in json.loads(path.read_text())]


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.path == '.'
        assert args.steps == 1
        assert args.seed is None
        assert not args.quiet

    def test_quiet_and_verbose_exclusive(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(['-q', '-v'])


class TestRun:
    def test_advances_and_saves(self, tmp_path):
        stocks = run(tmp_path, steps=3, seed=1)
        assert len(stocks) == 3
        assert _prices(tmp_path / DEFAULT_FILENAME) == [s.get_price() for s in stocks]

    def test_seed_reproducible(self, tmp_path):
        a, b = tmp_path / 'a', tmp_path / 'b'
        a.mkdir()
        b.mkdir()
        run(a, steps=10, seed=123)
        run(b, steps=10, seed=123)
        assert _prices(a / DEFAULT_FILENAME) == _prices(b / DEFAULT_FILENAME)

    def test_state_carries_over_between_runs(self, tmp_path):
        run(tmp_path, steps=5, seed=7)
        run(tmp_path, steps=5, seed=8)
        chained = _prices(tmp_path / DEFAULT_FILENAME)

        other = tmp_path / 'other'
        other.mkdir()
        run(other, steps=5, seed=7)
        assert _prices(other / DEFAULT_FILENAME) != chained


class TestMain:
    def test_success_output(self, tmp_path, capsys):
        assert main([str(tmp_path)]) == 0
        out = capsys.readouterr().out
        assert "Successfully advanced all stocks by 1 iteration." in out
        assert "BabyStock" in out and "MemeStock" in out

    def test_quiet(self, tmp_path, capsys):
        assert main([str(tmp_path), '-q', '--steps', '4']) == 0
        assert capsys.readouterr().out == ""

    def test_steps_must_be_positive(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main([str(tmp_path), '--steps', '0'])
        assert exc.value.code == 2

    def test_corrupted_file_exit_code(self, tmp_path, caplog):
        path = tmp_path / 'broken.json'
        path.write_text("[{]")
        assert main([str(path), '-q']) == 1
        assert "corrupted" in caplog.text
