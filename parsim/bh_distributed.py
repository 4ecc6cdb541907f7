"""Barnes-Hut simulation with the bodies shared out among several workers.

Each iteration the tree is sized from the largest coordinates of the
bodies.  The bodies are split into equal contiguous blocks, one per
worker.  Every worker computes the forces on its own block against the
shared tree, and the blocks are gathered back into one system before the
next step.
"""

from __future__ import annotations

import argparse
import math
import sys
import time
from collections.abc import Sequence
from dataclasses import replace

from parsim.bh_sequential import format_body, parse_input
from parsim.octree import THETA, create_tree, octree_force
from parsim.particle import Force, Particle


def partition(n: int, workers: int) -> list[range]:
    """Index blocks of ``n`` bodies for each of ``workers`` workers.

    Every block except the last non-empty one holds ``ceil(n / workers)``
    bodies.  Workers left over after the bodies run out get empty blocks.
    """
    if workers < 1:
        raise ValueError("at least one worker is needed")
    if n < 0:
        raise ValueError("the number of bodies cannot be negative")
    per_worker = math.ceil(n / workers)
    blocks = []
    for rank in range(workers):
        start = min(n, rank * per_worker)
        end = min(n, (rank + 1) * per_worker)
        blocks.append(range(start, end))
    return blocks


def bounds(particles: Sequence[Particle]) -> tuple[float, float, float]:
    """Largest x, y and z coordinates of the bodies, never below zero."""
    x_bound = y_bound = z_bound = 0.0
    for particle in particles:
        x_bound = max(x_bound, particle.px)
        y_bound = max(y_bound, particle.py)
        z_bound = max(z_bound, particle.pz)
    return x_bound, y_bound, z_bound


def update_body(current: Particle, force: Force, dt: float) -> Particle:
    """Advance a body by ``dt`` under ``force``; there are no walls."""
    factor = dt / current.mass
    return replace(
        current,
        px=current.px + dt * current.vx,
        py=current.py + dt * current.vy,
        pz=current.pz + dt * current.vz,
        vx=current.vx + factor * force.fx,
        vy=current.vy + factor * force.fy,
        vz=current.vz + factor * force.fz,
    )


def calculate(
    particles: Sequence[Particle],
    iterations: int,
    g: float,
    dt: float,
    workers: int = 1,
) -> list[Particle]:
    """Run ``iterations`` steps with the work split among ``workers``.

    Returns the final bodies; the input is left untouched.
    """
    current = [replace(p) for p in particles]
    blocks = partition(len(current), workers)
    if not current:
        return current

    for _ in range(iterations):
        tree = create_tree(current, *bounds(current))
        tree.generate_center(current)

        forces: list[Force] = []
        for block in blocks:
            forces.extend(
                octree_force(tree, i, current, theta=THETA, g=g) for i in block
            )

        updated: list[Particle] = []
        for block in blocks:
            updated.extend(update_body(current[i], forces[i], dt) for i in block)
        current = updated
    return current


def main(argv: list[str] | None = None) -> int:
    """Read a system from standard input, simulate it and print the result."""
    parser = argparse.ArgumentParser(
        prog="parsim-bh-distributed",
        description=(
            "Barnes-Hut simulation split among workers, reading N, T, G, dt "
            "and bodies from stdin."
        ),
    )
    parser.add_argument(
        "--workers", type=int, default=1, help="number of workers sharing the bodies"
    )
    args = parser.parse_args(argv)

    try:
        particles, iterations, g, dt = parse_input(sys.stdin.read())
        start = time.perf_counter()
        final = calculate(particles, iterations, g, dt, args.workers)
    except ValueError as error:
        print(error, file=sys.stderr)
        return 1

    print(f"time = {int((time.perf_counter() - start) * 1e6)}")
    print(len(final))
    for index, body in enumerate(final):
        print(format_body(index, body))
    return 0