"""Reading n-body data files."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable

from parsim.particle import Particle, init_particle

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_FIELDS = 7


class DataFileError(ValueError):
    """The data file does not describe the number of bodies it announces."""


def _leading_int(line: str) -> int:
    match = _LEADING_INT.match(line)
    return int(match.group(1)) if match else 0


def _parse_body(line: str) -> list[float] | None:
    tokens = line.split()
    if len(tokens) < _FIELDS:
        return None
    try:
        return [float(token) for token in tokens[:_FIELDS]]
    except ValueError:
        return None


def parse_data(lines: Iterable[str]) -> tuple[list[Particle], int]:
    """Parse a body count, an iteration count and one body per line.

    Reading stops at the first line that does not hold seven numbers.
    Returns the particles and the number of iterations.
    """
    rows = iter(lines)
    count = _leading_int(next(rows, ""))
    iterations = _leading_int(next(rows, ""))

    particles = []
    for line in rows:
        values = _parse_body(line)
        if values is None:
            break
        particles.append(init_particle(*values))

    if len(particles) != count:
        raise DataFileError(
            f"bodies number unmatched get {len(particles)}, need {count}"
        )
    return particles, iterations


def load_data(path: str | os.PathLike[str]) -> tuple[list[Particle], int]:
    """Read a data file; see :func:`parse_data`."""
    with open(path, encoding="utf-8") as handle:
        return parse_data(handle)