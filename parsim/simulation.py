"""Direct and Barnes-Hut n-body simulation over fixed time steps."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence
from dataclasses import replace
from enum import Enum

from parsim.loader import DataFileError, load_data
from parsim.octree import Cell, create_tree, octree_force
from parsim.particle import (
    DT,
    EPSILON,
    G,
    X_BOUND,
    Y_BOUND,
    Z_BOUND,
    Force,
    Particle,
    compute_distance,
    format_particle,
)


class Method(str, Enum):
    """How the force on each particle is computed."""

    DIRECT = "direct"
    TREE = "tree"


def direct_force(index: int, particles: Sequence[Particle]) -> Force:
    """Exact gravitational force on particle ``index`` from every other one."""
    target = particles[index]
    fx = fy = fz = 0.0
    for position, other in enumerate(particles):
        if position == index:
            continue
        d = compute_distance(target, other)
        factor = G * other.mass * target.mass / (d**3 + EPSILON)
        fx += (other.px - target.px) * factor
        fy += (other.py - target.py) * factor
        fz += (other.pz - target.pz) * factor
    return Force(fx, fy, fz)


def tree_force(index: int, particles: Sequence[Particle], tree: Cell) -> Force:
    """Force on particle ``index`` approximated through a prepared octree."""
    return octree_force(tree, index, particles)


def _bounce(position: float, bound: float, velocity: float, low_sign: float) -> float:
    if position >= bound:
        return -abs(velocity)
    if position <= 0:
        return low_sign * abs(velocity)
    return velocity


def update_particle(particle: Particle, force: Force) -> Particle:
    """Advance one particle by a time step under ``force``.

    Velocities are turned back at the walls of the space.  At the lower
    z wall the velocity is made negative, as at the upper one.
    """
    factor = DT / particle.mass
    moved = replace(
        particle,
        px=particle.px + DT * particle.vx,
        py=particle.py + DT * particle.vy,
        pz=particle.pz + DT * particle.vz,
        vx=particle.vx + factor * force.fx,
        vy=particle.vy + factor * force.fy,
        vz=particle.vz + factor * force.fz,
    )
    moved.vx = _bounce(moved.px, X_BOUND, moved.vx, 1.0)
    moved.vy = _bounce(moved.py, Y_BOUND, moved.vy, 1.0)
    moved.vz = _bounce(moved.pz, Z_BOUND, moved.vz, -1.0)
    return moved


def step(
    particles: Sequence[Particle], method: Method | str = Method.DIRECT
) -> list[Particle]:
    """One time step for the whole system; the input is left untouched."""
    method = Method(method)
    current = list(particles)
    if not current:
        return []
    if method is Method.TREE:
        tree = create_tree(current)
        tree.generate_center(current)
        forces = [tree_force(i, current, tree) for i in range(len(current))]
    else:
        forces = [direct_force(i, current) for i in range(len(current))]
    return [update_particle(p, f) for p, f in zip(current, forces)]


def simulate(
    particles: Sequence[Particle],
    iterations: int,
    method: Method | str = Method.DIRECT,
) -> list[Particle]:
    """Run ``iterations`` time steps and return the final particles."""
    current = [replace(p) for p in particles]
    for _ in range(iterations):
        current = step(current, method)
    return current


def main(argv: list[str] | None = None) -> int:
    """Simulate the bodies of a data file and print their final state."""
    parser = argparse.ArgumentParser(
        prog="parsim-nbody", description="Run an n-body simulation."
    )
    parser.add_argument("file", nargs="?", help="data file to read")
    parser.add_argument(
        "--method",
        choices=[m.value for m in Method],
        default=Method.DIRECT.value,
        help="force computation",
    )
    args = parser.parse_args(argv)

    if args.file is None:
        print("unspecified file name", file=sys.stderr)
        return 1
    try:
        particles, iterations = load_data(args.file)
    except (OSError, DataFileError) as error:
        print(error, file=sys.stderr)
        return 1

    print(f"get {len(particles)} particles")
    print(f"run {iterations} iterations")
    start = time.perf_counter()
    final = simulate(particles, iterations, args.method)
    for particle in final:
        sys.stdout.write(format_particle(particle))
    print(f"time = {time.perf_counter() - start:g} s")
    return 0