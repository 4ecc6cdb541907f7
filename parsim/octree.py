"""Barnes-Hut octree used to approximate long-range forces."""

from __future__ import annotations

import math
from collections.abc import Iterator, Sequence
from dataclasses import replace

from parsim.particle import (
    EPSILON,
    G,
    X_BOUND,
    Y_BOUND,
    Z_BOUND,
    Force,
    Particle,
    compute_distance,
)

THETA = 1.0  # opening angle of the approximation

# Offsets of each child's corner, in units of the child's size.
_CHILD_OFFSETS = (
    (0, 0, 0),
    (1, 0, 0),
    (1, 0, 1),
    (0, 0, 1),
    (0, 1, 0),
    (1, 1, 0),
    (1, 1, 1),
    (0, 1, 1),
)

# Child chosen for a particle, keyed by whether it lies above the midpoint
# along x, y and z.
_OCTANTS = {
    (True, True, True): 6,
    (True, True, False): 5,
    (True, False, True): 2,
    (True, False, False): 1,
    (False, True, True): 7,
    (False, True, False): 4,
    (False, False, True): 3,
    (False, False, False): 0,
}

_MIDPOINT_CHILD = 6


def _ratio(total: float, mass: float) -> float:
    if mass:
        return total / mass
    if total == 0:
        return math.nan
    return math.copysign(math.inf, total)


class Cell:
    """A cube of space: a leaf holding at most one particle, or eight children."""

    def __init__(self, width: float, height: float, depth: float) -> None:
        self.width = width
        self.height = height
        self.depth = depth
        self.index = -1
        self.children: list[Cell] = []
        self.center = Particle()

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def generate_children(self) -> None:
        """Split this cell into eight half-sized children."""
        w = self.width / 2.0
        h = self.height / 2.0
        d = self.depth / 2.0
        if w == 0.0 and h == 0.0 and d == 0.0:
            raise ValueError("cell cannot be divided any further")
        self.children = [Cell(w, h, d) for _ in _CHILD_OFFSETS]
        for child, (ox, oy, oz) in zip(self.children, _CHILD_OFFSETS):
            child.center.place_at(self.center, ox * w, oy * h, oz * d)

    def locate_child(self, particle: Particle) -> int:
        """Index of the child whose region holds ``particle``."""
        if self.is_leaf:
            raise ValueError("a leaf cell has no children")
        pivot = self.children[_MIDPOINT_CHILD].center
        key = (particle.px > pivot.px, particle.py > pivot.py, particle.pz > pivot.pz)
        return _OCTANTS[key]

    def add_to_cell(self, particles: Sequence[Particle], i: int) -> None:
        """Put particle ``i`` in this cell, subdividing while it is shared."""
        cell = self
        while cell.index != -1:
            cell.generate_children()
            resident = cell.locate_child(particles[cell.index])
            cell.children[resident].index = cell.index
            incoming = cell.locate_child(particles[i])
            if incoming != resident:
                cell.children[incoming].index = i
                return
            cell = cell.children[resident]
        cell.index = i

    def generate_center(self, particles: Sequence[Particle]) -> Cell | None:
        """Fill in total mass and centre of mass; None for an empty leaf."""
        if self.is_leaf:
            if self.index == -1:
                return None
            self.center = replace(particles[self.index])
            return self

        tx = ty = tz = 0.0
        for child in self.children:
            filled = child.generate_center(particles)
            if filled is None:
                continue
            mass = filled.center.mass
            anchor = particles[filled.index]
            self.center.mass += mass
            tx += anchor.px * mass
            ty += anchor.py * mass
            tz += anchor.pz * mass

        self.center.px = _ratio(tx, self.center.mass)
        self.center.py = _ratio(ty, self.center.mass)
        self.center.pz = _ratio(tz, self.center.mass)
        return self

    def cell_force(self, particle: Particle, g: float = G) -> Force:
        """Force exerted on ``particle`` by the mass gathered in this cell."""
        dx = self.center.px - particle.px
        dy = self.center.py - particle.py
        dz = self.center.pz - particle.pz
        d = compute_distance(particle, self.center)
        factor = g * self.center.mass * particle.mass / (d**3 + EPSILON)
        return Force(dx * factor, dy * factor, dz * factor)


def create_tree(
    particles: Sequence[Particle],
    width: float = X_BOUND,
    height: float = Y_BOUND,
    depth: float = Z_BOUND,
) -> Cell:
    """Build the octree holding every particle."""
    if not particles:
        raise ValueError("cannot build a tree without particles")
    root = Cell(width, height, depth)
    root.index = 0
    for i, particle in enumerate(particles[1:], start=1):
        cell = root
        while not cell.is_leaf:
            cell = cell.children[cell.locate_child(particle)]
        cell.add_to_cell(particles, i)
    return root


def _interacting(
    cell: Cell, index: int, target: Particle, theta: float
) -> Iterator[Cell]:
    if cell.is_leaf:
        if cell.index not in (-1, index):
            yield cell
        return
    d = compute_distance(target, cell.center)
    ratio = cell.width / d if d else math.inf
    if theta > ratio:
        yield cell
    else:
        for child in cell.children:
            yield from _interacting(child, index, target, theta)


def octree_force(
    cell: Cell,
    index: int,
    particles: Sequence[Particle],
    theta: float = THETA,
    g: float = G,
) -> Force:
    """Total force on particle ``index``, approximating distant cells."""
    target = particles[index]
    total = Force()
    for source in _interacting(cell, index, target, theta):
        total += source.cell_force(target, g)
    return total