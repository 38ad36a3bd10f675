# cg4d/errors.py
from __future__ import annotations
from typing import Optional


class TopologyError(ValueError):
    """Некоректний комбінаторний опис (довжини масивів, індекси, координати)."""


class HRepresentationError(ValueError):
    """
    Таблиця гіперплощин не узгоджується з гранями політопа.
    `report` — діагностика з `validate_cells`.
    """
    def __init__(self, message: str, report: Optional[dict] = None):
        super().__init__(message)
        self.report = report or {}


class SliceCountError(RuntimeError):
    """Перетин тетраедра з гіперплощиною дав не 0, 3 чи 4 точки."""
    def __init__(self, count: int, index: Optional[int] = None):
        where = f" (tetrahedron {index})" if index is not None else ""
        super().__init__(f"unexpected slice intersection count {count}{where}")
        self.count = count
        self.index = index
