import io

import pytest

from parsim.seqalign import Alignment, get_minimum_penalty, main, min3


def _column_cost(alignment: Alignment, pxy: int, pgap: int) -> int:
    cost = 0
    for a, b in zip(alignment.x, alignment.y):
        if a == "_" or b == "_":
            cost += pgap
        elif a != b:
            cost += pxy
    return cost


def test_min3_picks_smallest():
    assert min3(3, 1, 2) == 1
    assert min3(1, 2, 3) == 1
    assert min3(4, 4, 2) == 2
    assert min3(7, 7, 7) == 7


def test_worked_example():
    result = get_minimum_penalty("AGGGCT", "AGGCA", 3, 2)
    assert result.penalty == 5
    assert result.x == "AGGGCT"
    assert result.y == "A_GGCA"


def test_identical_strings_cost_nothing():
    result = get_minimum_penalty("ACGTACGT", "ACGTACGT", 3, 2)
    assert result == Alignment(0, "ACGTACGT", "ACGTACGT")


def test_empty_strings():
    assert get_minimum_penalty("", "", 3, 2) == Alignment(0, "", "")


def test_against_empty_sequence_is_all_gaps():
    result = get_minimum_penalty("ACG", "", 3, 2)
    assert result.penalty == 3 * 2
    assert result.x == "ACG"
    assert result.y == "___"


@pytest.mark.parametrize(
    "x, y, pxy, pgap",
    [
        ("AGGGCT", "AGGCA", 3, 2),
        ("CG", "CA", 3, 2),
        ("ACACACTA", "AGCACACA", 2, 3),
        ("GATTACA", "GCATGCU", 1, 1),
        ("AAAA", "T", 5, 1),
    ],
)
def test_alignment_invariants(x, y, pxy, pgap):
    result = get_minimum_penalty(x, y, pxy, pgap)
    assert len(result.x) == len(result.y)
    assert result.x.replace("_", "") == x
    assert result.y.replace("_", "") == y
    assert not any(a == "_" and b == "_" for a, b in zip(result.x, result.y))
    assert _column_cost(result, pxy, pgap) == result.penalty


@pytest.mark.parametrize(
    "x, y", [("AGGGCT", "AGGCA"), ("GATTACA", "GCATGCU"), ("ACG", "TTTT")]
)
def test_penalty_is_symmetric(x, y):
    assert get_minimum_penalty(x, y, 3, 2).penalty == get_minimum_penalty(
        y, x, 3, 2
    ).penalty


def test_penalty_never_exceeds_all_gaps():
    x, y = "ACGTTGCA", "TGCAACGT"
    result = get_minimum_penalty(x, y, 3, 2)
    assert result.penalty <= (len(x) + len(y)) * 2


def test_main_prints_alignment(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("3\n2\nAGGGCT\nAGGCA\n"))
    assert main([]) == 0
    lines = capsys.readouterr().out.splitlines()
    expected = get_minimum_penalty("AGGGCT", "AGGCA", 3, 2)
    assert lines[0] == "misMatchPenalty=3"
    assert lines[1] == "gapPenalty=2"
    assert lines[2].startswith("Time: ")
    assert lines[3] == f"Minimum Penalty in aligning the genes = {expected.penalty}"
    assert lines[4] == "The aligned genes are :"
    assert lines[5] == expected.x
    assert lines[6] == expected.y


def test_main_rejects_short_input(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("3 2 ACG"))
    assert main([]) == 1
    assert "two genes" in capsys.readouterr().err


def test_main_rejects_bad_penalty(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO("x 2 ACG TTT"))
    assert main([]) == 1
    assert "malformed penalty" in capsys.readouterr().err