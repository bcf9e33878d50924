"""Utility modules: checkpoints, logging and progress reporting."""

from apocalypse_search.utils.checkpoint import (
    Checkpoint,
    CheckpointStore,
    PeriodicCheckpointer,
    save_checkpoint,
    load_checkpoint,
)

__all__ = [
    "Checkpoint",
    "CheckpointStore",
    "PeriodicCheckpointer",
    "save_checkpoint",
    "load_checkpoint",
]
