"""
Core workflow.

Contains the transaction runner and its state model.
"""

from tokensmith.core.runner import RunnerStateError, RunState, TransactionRunner

__all__ = [
    "TransactionRunner",
    "RunState",
    "RunnerStateError",
]
