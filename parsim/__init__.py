"""N-body gravity simulation and sequence alignment workloads."""

__version__ = "0.1.0"