"""Global alignment of two sequences with mismatch and gap penalties."""

from __future__ import annotations

import argparse
import sys
import time
from dataclasses import dataclass

GAP = "_"


@dataclass(frozen=True)
class Alignment:
    """The minimum penalty and the two aligned sequences."""

    penalty: int
    x: str
    y: str


def min3(a: int, b: int, c: int) -> int:
    """Smallest of three values, preferring the earliest on ties."""
    if a <= b and a <= c:
        return a
    if b <= a and b <= c:
        return b
    return c


def _penalty_table(x: str, y: str, pxy: int, pgap: int) -> list[list[int]]:
    rows, cols = len(x) + 1, len(y) + 1
    dp = [[0] * cols for _ in range(rows)]
    for i in range(rows):
        dp[i][0] = i * pgap
    for j in range(cols):
        dp[0][j] = j * pgap

    for i in range(1, rows):
        prev, cur = dp[i - 1], dp[i]
        xi = x[i - 1]
        for j, yj in enumerate(y, start=1):
            if xi == yj:
                cur[j] = prev[j - 1]
            else:
                cur[j] = min3(prev[j - 1] + pxy, prev[j] + pgap, cur[j - 1] + pgap)
    return dp


def get_minimum_penalty(x: str, y: str, pxy: int, pgap: int) -> Alignment:
    """Align ``x`` and ``y`` at minimum cost.

    A mismatched pair costs ``pxy`` and a gap costs ``pgap``.  Gaps in the
    result are written as underscores.
    """
    dp = _penalty_table(x, y, pxy, pgap)
    length = len(x) + len(y)

    # Columns are collected from the end of the alignment backwards.
    xs: list[str] = []
    ys: list[str] = []
    i, j = len(x), len(y)
    while i and j:
        if x[i - 1] == y[j - 1] or dp[i - 1][j - 1] + pxy == dp[i][j]:
            xs.append(x[i - 1])
            ys.append(y[j - 1])
            i -= 1
            j -= 1
        elif dp[i - 1][j] + pgap == dp[i][j]:
            xs.append(x[i - 1])
            ys.append(GAP)
            i -= 1
        else:
            xs.append(GAP)
            ys.append(y[j - 1])
            j -= 1

    xs.extend(reversed(x[:i]))
    ys.extend(reversed(y[:j]))
    xs.extend(GAP * (length - len(xs)))
    ys.extend(GAP * (length - len(ys)))
    full_x = xs[::-1]
    full_y = ys[::-1]

    start = 0
    for k in range(length - 1, -1, -1):
        if full_x[k] == GAP and full_y[k] == GAP:
            start = k + 1
            break

    return Alignment(dp[-1][-1], "".join(full_x[start:]), "".join(full_y[start:]))


def main(argv: list[str] | None = None) -> int:
    """Read penalties and two genes from standard input and align them."""
    parser = argparse.ArgumentParser(
        prog="parsim-seqalign",
        description=(
            "Align two genes read from stdin as: mismatch penalty, "
            "gap penalty, gene one, gene two."
        ),
    )
    parser.parse_args(argv)

    tokens = sys.stdin.read().split()
    if len(tokens) < 4:
        print("expected a mismatch penalty, a gap penalty and two genes", file=sys.stderr)
        return 1
    try:
        mismatch = int(tokens[0])
        gap = int(tokens[1])
    except ValueError as error:
        print(f"malformed penalty: {error}", file=sys.stderr)
        return 1
    gene1, gene2 = tokens[2], tokens[3]

    print(f"misMatchPenalty={mismatch}")
    print(f"gapPenalty={gap}")

    start = time.perf_counter()
    result = get_minimum_penalty(gene1, gene2, mismatch, gap)
    print(f"Time: {int((time.perf_counter() - start) * 1e6)} us")

    print(f"Minimum Penalty in aligning the genes = {result.penalty}")
    print("The aligned genes are :")
    print(result.x)
    print(result.y)
    return 0