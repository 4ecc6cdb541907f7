[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "parsim"
version = "0.1.0"
description = "N-body gravity simulation and sequence alignment workloads in plain Python"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "n-body",
    "barnes-hut",
    "octree",
    "gravity",
    "sequence-alignment",
    "simulation",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Bio-Informatics",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
parsim-random-bodies = "parsim.particle:main"
parsim-nbody = "parsim.simulation:main"
parsim-nbody-3d = "parsim.direct3d:main"
parsim-bh-sequential = "parsim.bh_sequential:main"
parsim-bh-distributed = "parsim.bh_distributed:main"
parsim-seqalign = "parsim.seqalign:main"

[tool.hatch.build.targets.wheel]
packages = ["parsim"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
