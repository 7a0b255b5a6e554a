from dataclasses import dataclass, field
from typing import Optional

import numpy as np


@dataclass(frozen=True, eq=False)
class SimplexStep:
    tableau: np.ndarray
    description: str
    kind: str
    pivot: Optional[tuple] = None
    iteration: int = 0
    info: dict = field(default_factory=dict)
    basis: Optional[tuple] = None


class StepHistory:
    """Append-only log of tableau snapshots with a replay cursor.

    The solve loop records into it and closes it; viewers only move the
    cursor. Recording into a closed history is an error.
    """

    def __init__(self):
        self._steps = []
        self._index = 0
        self._closed = False

    def record(self, T, description, kind, pivot=None, iteration=0, info=None, basis=None):
        if self._closed:
            raise RuntimeError("Step history is closed; solve again to get a new one.")
        snap = np.array(T, dtype=float, copy=True)
        snap.setflags(write=False)
        step = SimplexStep(
            tableau=snap,
            description=description,
            kind=kind,
            pivot=tuple(pivot) if pivot is not None else None,
            iteration=iteration,
            info=dict(info) if info else {},
            basis=tuple(int(b) for b in basis) if basis is not None else None,
        )
        self._steps.append(step)
        return step

    def close(self):
        self._closed = True
        return self

    @property
    def closed(self):
        return self._closed

    def __len__(self):
        return len(self._steps)

    def __getitem__(self, idx):
        return self._steps[idx]

    def __iter__(self):
        return iter(self._steps)

    @property
    def index(self):
        return self._index

    @property
    def current(self):
        if not self._steps:
            return None
        return self._steps[self._index]

    def advance(self):
        if self._index < len(self._steps) - 1:
            self._index += 1
        return self.current

    def retreat(self):
        if self._index > 0:
            self._index -= 1
        return self.current

    def jump_to_first(self):
        self._index = 0
        return self.current

    def jump_to_last(self):
        self._index = max(0, len(self._steps) - 1)
        return self.current

    def jump_to(self, idx):
        self._index = min(max(0, int(idx)), max(0, len(self._steps) - 1))
        return self.current
