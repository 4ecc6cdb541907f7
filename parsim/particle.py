"""Particles, forces and random data sets for the n-body simulations."""

from __future__ import annotations

import argparse
import math
import random
import sys
from dataclasses import dataclass

EPSILON = 0.000001
X_BOUND = 1.0e6  # width of space
Y_BOUND = 1.0e6  # height of space
Z_BOUND = 1.0e6  # depth of space

G = 6.67e-11
DT = 0.001
MASS_BOUND = 1.0e24

DEFAULT_ITERATIONS = 1000


@dataclass
class Particle:
    """A body with a mass, a position and a velocity."""

    mass: float = 0.0
    px: float = 0.0
    py: float = 0.0
    pz: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    vz: float = 0.0

    def place_at(
        self,
        other: Particle,
        x_offset: float = 0.0,
        y_offset: float = 0.0,
        z_offset: float = 0.0,
    ) -> None:
        """Move this particle to the position of ``other`` shifted by the offsets."""
        self.px = other.px + x_offset
        self.py = other.py + y_offset
        self.pz = other.pz + z_offset


@dataclass
class Force:
    """A force vector acting on a particle."""

    fx: float = 0.0
    fy: float = 0.0
    fz: float = 0.0

    def __add__(self, other: Force) -> Force:
        if not isinstance(other, Force):
            return NotImplemented
        return Force(self.fx + other.fx, self.fy + other.fy, self.fz + other.fz)


def init_particle(
    mass: float, px: float, py: float, pz: float, vx: float, vy: float, vz: float
) -> Particle:
    """Build a particle from unit-scaled mass and position values."""
    return Particle(
        mass * MASS_BOUND, px * X_BOUND, py * Y_BOUND, pz * Z_BOUND, vx, vy, vz
    )


def compute_distance(a: Particle, b: Particle) -> float:
    """Euclidean distance between the positions of two particles."""
    dx = a.px - b.px
    dy = a.py - b.py
    dz = a.pz - b.pz
    return math.sqrt(dx * dx + dy * dy + dz * dz)


def format_particle(particle: Particle) -> str:
    """Render a particle as one output line, newline included."""
    p = particle
    return (
        f"mass: {p.mass:g} px: {p.px:g} py: {p.py:g} pz: {p.pz:g}"
        f" vx: {p.vx:g} vy: {p.vy:g} vz: {p.vz:g}\n"
    )


def rand_double(low: float, high: float, rng: random.Random) -> float:
    """A uniformly drawn value between ``low`` and ``high``."""
    return rng.random() * (high - low) + low


def generate_dataset(n: int, rng: random.Random) -> str:
    """Text of a data file holding ``n`` random bodies."""
    if n <= 0:
        raise ValueError("N must be a positive integer")
    lines = [str(n), str(DEFAULT_ITERATIONS)]
    for _ in range(n):
        values = (rand_double(0.0, 1.0, rng) for _ in range(7))
        lines.append(" ".join(f"{value:.6f}" for value in values))
    return "\n".join(lines) + "\n"


def _leading_int(text: str) -> int:
    digits = ""
    for position, char in enumerate(text.strip()):
        if char.isdigit() or (position == 0 and char in "+-"):
            digits += char
        else:
            break
    try:
        return int(digits)
    except ValueError:
        return 0


def main(argv: list[str] | None = None) -> int:
    """Print a random data file for the simulations."""
    parser = argparse.ArgumentParser(
        prog="parsim-random-body", description="Generate random n-body input."
    )
    parser.add_argument("n", nargs="?", help="number of bodies to generate")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    args = parser.parse_args(argv)

    if args.n is None:
        print("must give a positive integer N", file=sys.stderr)
        return 1
    n = _leading_int(args.n)
    if n <= 0:
        print("N must be a positive integer!", file=sys.stderr)
        return 1

    sys.stdout.write(generate_dataset(n, random.Random(args.seed)))
    return 0