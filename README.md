# parsim

Classic compute workloads written in pure Python:

- **N-body gravity simulation** in three dimensions, both by direct
  all-pairs summation and by the Barnes–Hut octree approximation.
- **Global sequence alignment** with mismatch and gap penalties.

No third-party libraries are needed at run time.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## N-body simulation

### Generating input

`parsim-random-bodies N` writes a data file for `N` random bodies to
standard output: the body count, the iteration count (1000), then one line
per body holding mass, position (x, y, z) and velocity (x, y, z), each
drawn from `[0, 1)` and written with six decimals. `--seed` fixes the
random seed.

```
parsim-random-bodies 10 > body_10.data
parsim-random-bodies 10 --seed 42 > body_10.data
```

When the file is loaded, masses are scaled by `1e24` and positions by the
`1e6` size of the simulation box. A file whose body count does not match
the number of body lines is rejected with `parsim.loader.DataFileError`.

### Running a simulation

```
parsim-nbody body_10.data
parsim-nbody body_10.data --method tree
```

reads the data file, runs the stated number of iterations and prints every
particle's final mass, position and velocity, followed by the elapsed time.
`--method direct` (the default) sums the force from every other particle;
`--method tree` uses a Barnes–Hut octree with an opening angle of 1.
Velocities are turned back at the walls of the box.

`parsim-nbody-3d body_10.data` runs a simpler all-pairs stepper over the
same file format.

### Barnes–Hut from standard input

These programs read a whitespace-separated stream: body count, iteration
count, gravitational constant, time step, then seven numbers per body
(mass, px, py, pz, vx, vy, vz), taken as they are without scaling.

```
parsim-bh-sequential < bodies.txt
parsim-bh-distributed --workers 4 < bodies.txt
```

Both print the elapsed time in microseconds, the body count and one line
per body.

`parsim-bh-sequential` uses an opening angle of 0, so every force is
exact, and turns velocities back at the walls of the `1e6` box.

`parsim-bh-distributed` sizes the octree each step from the largest
coordinates in use, splits the bodies into equal contiguous blocks, one per
worker, and gathers the blocks back after every step. It has no walls.

### From Python

```python
from parsim.loader import load_data
from parsim.simulation import Method, simulate

particles, iterations = load_data("body_10.data")
final = simulate(particles, iterations, Method.TREE)
```

Building blocks:

- `parsim.particle` — `Particle`, `Force`, `init_particle`,
  `compute_distance`, `format_particle`, `generate_dataset`.
- `parsim.loader` — `parse_data`, `load_data`, `DataFileError`.
- `parsim.octree` — `Cell`, `create_tree`, `octree_force`.
- `parsim.simulation` — `Method`, `direct_force`, `tree_force`,
  `update_particle`, `step`, `simulate`.
- `parsim.direct3d` — `update_coordinate`, `step`, `read_data`.
- `parsim.bh_sequential` — `parse_input`, `compute_force`, `update_body`,
  `calculate`, `format_body`.
- `parsim.bh_distributed` — `partition`, `bounds`, `update_body`,
  `calculate`.

## Sequence alignment

`parsim-seqalign` reads the mismatch penalty, the gap penalty and the two
gene strings from standard input and prints the minimum penalty and the
aligned genes, with `_` marking gaps.

```
printf '3 2\nAGGGCT\nAGGCA\n' | parsim-seqalign
```

From Python:

```python
from parsim.seqalign import get_minimum_penalty

alignment = get_minimum_penalty("AGGGCT", "AGGCA", 3, 2)
print(alignment.penalty, alignment.x, alignment.y)
```

The result is an `Alignment` holding the penalty and both aligned strings.

## What it does not do

Everything runs in a single process on a single thread. The worker count of
`parsim-bh-distributed` only decides how the bodies are split into blocks;
the blocks are computed one after another, not in parallel. The package
has no N-Queens solver.