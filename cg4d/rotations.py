# cg4d/rotations.py
from __future__ import annotations
from enum import Enum
from functools import reduce
from math import cos, sin
from typing import Tuple

import numpy as np


class Plane(Enum):
    """Координатні площини обертання у 4D (осі x=0, y=1, z=2, w=3)."""
    XY = (0, 1)
    YZ = (1, 2)
    ZX = (2, 0)
    XW = (0, 3)
    YW = (1, 3)
    ZW = (2, 3)

    @property
    def axes(self) -> Tuple[int, int]:
        return self.value

    @property
    def complement(self) -> "Plane":
        """Ортогональна площина: XY <-> ZW, YZ <-> XW, ZX <-> YW."""
        return _COMPLEMENT[self]


_COMPLEMENT = {
    Plane.XY: Plane.ZW, Plane.ZW: Plane.XY,
    Plane.YZ: Plane.XW, Plane.XW: Plane.YZ,
    Plane.ZX: Plane.YW, Plane.YW: Plane.ZX,
}


def simple_rotation(plane: Plane, angle: float) -> np.ndarray:
    """
    Просте обертання на кут `angle` у площині (i, j): площина-доповнення
    лишається нерухомою. Стовпчикова конвенція, p' = R p.
    """
    i, j = plane.axes
    c, s = cos(angle), sin(angle)
    r = np.eye(4)
    r[i, i] = c
    r[j, j] = c
    r[i, j] = -s
    r[j, i] = s
    return r


def double_rotation(plane: Plane, alpha: float, beta: float) -> np.ndarray:
    """Подвійне обертання: alpha у площині `plane`, beta у її доповненні."""
    return simple_rotation(plane, alpha) @ simple_rotation(plane.complement, beta)


def isoclinic_rotation(plane: Plane, angle: float) -> np.ndarray:
    """Ізоклінне обертання: однаковий кут в обох ортогональних площинах."""
    return double_rotation(plane, angle, angle)


def compose(*matrices: np.ndarray) -> np.ndarray:
    """Добуток матриць зліва направо: compose(A, B) застосовує спершу B, потім A."""
    if not matrices:
        return np.eye(4)
    return reduce(np.matmul, (np.asarray(m, dtype=float) for m in matrices))
