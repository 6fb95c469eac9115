"""Tests for the command-line entry point."""

import argparse
import subprocess
import sys

import pytest

from conftest import UNIVERSE_100_SEED_0
from random_permutation.cli import main, parse_size
from random_permutation.errors import PermutationCollisionError
from random_permutation.permutation import RandomPermutation


def _lines(out: str) -> list[int]:
    return [int(line) for line in out.split()]


def test_prints_first_numbers(capsys):
    assert main(["-u", "100", "-s", "0"]) == 0
    assert _lines(capsys.readouterr().out) == UNIVERSE_100_SEED_0[:10]


def test_prints_whole_universe(capsys):
    assert main(["--universe", "100", "--num", "100", "--seed", "0"]) == 0
    assert _lines(capsys.readouterr().out) == UNIVERSE_100_SEED_0


def test_default_universe(capsys):
    assert main(["-s", "42", "-n", "3"]) == 0
    assert _lines(capsys.readouterr().out) == [2418540303, 824720305, 338227614]


def test_hex_seed(capsys):
    assert main(["-u", "100", "-s", "0x0"]) == 0
    assert _lines(capsys.readouterr().out) == UNIVERSE_100_SEED_0[:10]


def test_universe_smaller_than_num(capsys):
    assert main(["-u", "5", "-n", "10"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "at least as large" in captured.err


def test_zero_universe(capsys):
    assert main(["-u", "0", "-n", "0"]) == 1
    assert "universe must be" in capsys.readouterr().err


def test_check(capsys):
    assert main(["-u", "10007", "-n", "2", "-s", "0", "--check"]) == 0
    assert _lines(capsys.readouterr().out) == [1820, 7847]


def test_sample_check(capsys):
    assert main(["-n", "1", "--sample", "1000"]) == 0
    assert len(_lines(capsys.readouterr().out)) == 1


def test_check_collision_is_fatal(monkeypatch, capsys):
    def broken_verify(self):
        raise PermutationCollisionError(3, 7)

    monkeypatch.setattr(RandomPermutation, "verify", broken_verify)
    assert main(["-u", "100", "--check"]) == 2
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "not a permutation" in captured.err


def test_prove(capsys):
    assert main(["-u", "100", "-s", "0", "-n", "1", "--prove"]) == 0
    assert _lines(capsys.readouterr().out) == [37]


def test_prove_rejects_large_prime(capsys):
    assert main(["--prove"]) == 1
    assert "too large" in capsys.readouterr().err


def test_prove_collision_is_fatal(monkeypatch, capsys):
    monkeypatch.setattr("random_permutation.cli.find_residue_collision", lambda p: (1, 4))
    assert main(["-u", "100", "--prove"]) == 2
    assert "collision" in capsys.readouterr().err


@pytest.mark.parametrize("text,expected", [
    ("4096", 4096),
    ("0xFFFFFFFF", 2**32 - 1),
    ("10k", 10_000),
    ("2M", 2_000_000),
    ("4Ki", 4096),
    ("1Gi", 2**30),
    ("3GiB", 3 * 2**30),
    ("1Ei", 2**60),
])
def test_parse_size(text, expected):
    assert parse_size(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "-5", "1.5k", "10Q"])
def test_parse_size_rejects(text):
    with pytest.raises(argparse.ArgumentTypeError):
        parse_size(text)


def test_invalid_arguments_exit():
    with pytest.raises(SystemExit):
        main(["-u", "lots"])


def test_module_entry_point():
    result = subprocess.run(
        [sys.executable, "-m", "random_permutation", "-u", "100", "-s", "0", "-n", "4"],
        capture_output=True, text=True, check=True,
    )
    assert _lines(result.stdout) == UNIVERSE_100_SEED_0[:4]


def test_check_out_of_memory(monkeypatch, capsys):
    def huge_verify(self):
        raise MemoryError

    monkeypatch.setattr(RandomPermutation, "verify", huge_verify)
    assert main(["-u", "100", "--check"]) == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "--sample" in captured.err
