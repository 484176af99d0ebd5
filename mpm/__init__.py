"""
MPM Scheduler
=============

Critical path analysis of task networks with the Metra Potential Method.

Available modules:
- domain.network: the TaskNetwork model, its builder and cached results
- domain.errors: construction and computation errors
- services.propagation: forward and backward propagation sweeps
- services.report: plain text schedule report
- utils.csv_import: task data import from CSV files
"""

from mpm.domain.errors import (
    MPMError,
    ConstructionError,
    LengthMismatchError,
    DuplicateDurationError,
    DuplicatePredecessorSetError,
    UnknownPredecessorError,
    ReservedTaskNameError,
    InvalidDurationError,
    InvalidPredecessorListError,
    CyclicDependencyError,
    ComputationError,
    NoPredecessorError,
    NoSuccessorError,
    StalledSweepError,
    TaskImportError,
)
from mpm.domain.network import TaskNetwork, START_TASK, END_TASK, END_DURATION

__all__ = [
    "TaskNetwork",
    "START_TASK",
    "END_TASK",
    "END_DURATION",
    "MPMError",
    "ConstructionError",
    "LengthMismatchError",
    "DuplicateDurationError",
    "DuplicatePredecessorSetError",
    "UnknownPredecessorError",
    "ReservedTaskNameError",
    "InvalidDurationError",
    "InvalidPredecessorListError",
    "CyclicDependencyError",
    "ComputationError",
    "NoPredecessorError",
    "NoSuccessorError",
    "StalledSweepError",
    "TaskImportError",
]
