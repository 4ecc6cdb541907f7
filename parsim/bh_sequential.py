"""Single-process Barnes-Hut simulation driven by a plain numeric input stream."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence
from dataclasses import replace

from parsim.octree import Cell, create_tree, octree_force
from parsim.particle import X_BOUND, Y_BOUND, Z_BOUND, Force, Particle

# An opening angle of zero never approximates, so every force is exact.
THETA = 0.0

_FIELDS = 7


def parse_input(text: str) -> tuple[list[Particle], int, float, float]:
    """Parse whitespace-separated input.

    The input holds the body count, the iteration count, the gravity
    constant, the time step and then seven numbers per body: mass,
    position and velocity, taken as they are.  Returns the particles,
    the number of iterations, the gravity constant and the time step.
    """
    tokens = text.split()
    if len(tokens) < 4:
        raise ValueError("input must start with N, T, G and the time step")
    try:
        count = int(tokens[0])
        iterations = int(tokens[1])
        g = float(tokens[2])
        dt = float(tokens[3])
    except ValueError as error:
        raise ValueError(f"malformed header: {error}") from None
    if count < 0:
        raise ValueError("the number of bodies cannot be negative")

    body_tokens = tokens[4:]
    if len(body_tokens) < count * _FIELDS:
        raise ValueError(
            f"expected {count * _FIELDS} body values, got {len(body_tokens)}"
        )
    try:
        values = [float(token) for token in body_tokens[: count * _FIELDS]]
    except ValueError as error:
        raise ValueError(f"malformed body value: {error}") from None

    particles = [
        Particle(*values[start : start + _FIELDS])
        for start in range(0, len(values), _FIELDS)
    ]
    return particles, iterations, g, dt


def compute_force(
    index: int, particles: Sequence[Particle], tree: Cell, g: float
) -> Force:
    """Force on particle ``index`` gathered from a prepared octree."""
    return octree_force(tree, index, particles, theta=THETA, g=g)


def _bounce(position: float, bound: float, velocity: float, low_sign: float) -> float:
    if position >= bound:
        return -abs(velocity)
    if position <= 0:
        return low_sign * abs(velocity)
    return velocity


def update_body(current: Particle, force: Force, dt: float) -> Particle:
    """Advance a body by ``dt`` under ``force``, turning it back at the walls.

    At the lower z wall the velocity is made negative, as at the upper one.
    """
    factor = dt / current.mass
    moved = replace(
        current,
        px=current.px + dt * current.vx,
        py=current.py + dt * current.vy,
        pz=current.pz + dt * current.vz,
        vx=current.vx + factor * force.fx,
        vy=current.vy + factor * force.fy,
        vz=current.vz + factor * force.fz,
    )
    moved.vx = _bounce(moved.px, X_BOUND, moved.vx, 1.0)
    moved.vy = _bounce(moved.py, Y_BOUND, moved.vy, 1.0)
    moved.vz = _bounce(moved.pz, Z_BOUND, moved.vz, -1.0)
    return moved


def calculate(
    particles: Sequence[Particle], iterations: int, g: float, dt: float
) -> list[Particle]:
    """Run ``iterations`` steps and return the final bodies; input is untouched."""
    current = [replace(p) for p in particles]
    if not current:
        return current
    for _ in range(iterations):
        tree = create_tree(current)
        tree.generate_center(current)
        forces = [compute_force(i, current, tree, g) for i in range(len(current))]
        current = [update_body(p, f, dt) for p, f in zip(current, forces)]
    return current


def format_body(index: int, body: Particle) -> str:
    """One output line describing body ``index``."""
    return (
        f"{index}: body[{body.px:g}][{body.py:g}][{body.pz:g}]"
        f" velocity: ({body.vx:g}, {body.vy:g}, {body.vz:g}) mass: {body.mass:g}"
    )


def main(argv: list[str] | None = None) -> int:
    """Read a system from standard input, simulate it and print the result."""
    parser = argparse.ArgumentParser(
        prog="parsim-bh",
        description="Barnes-Hut simulation reading N, T, G, dt and bodies from stdin.",
    )
    parser.parse_args(argv)

    try:
        particles, iterations, g, dt = parse_input(sys.stdin.read())
        start = time.perf_counter()
        final = calculate(particles, iterations, g, dt)
    except ValueError as error:
        print(error, file=sys.stderr)
        return 1

    print(f"time = {int((time.perf_counter() - start) * 1e6)}")
    print(len(final))
    for index, body in enumerate(final):
        print(format_body(index, body))
    return 0