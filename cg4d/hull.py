# cg4d/hull.py
from __future__ import annotations
from typing import List

import numpy as np
from scipy.spatial import ConvexHull, QhullError

from .geom import as_points
from .hyperplane import Hyperplane
from .logging import logger


def hull_hyperplanes(vertices, decimals: int = 8) -> List[Hyperplane]:
    """
    Гіперплощини фасет 4D опуклої оболонки (Qhull через scipy).

    Qhull тріангулює фасети, тож одна 3-комірка дає кілька однакових рівнянь:
    рядки, що відрізняються не більше ніж на 10**-decimals, зливаються.
    Нормалі зовнішні й одиничні (normal·x + d <= 0 всередині). Порядок
    детермінований: лексикографічно за (nx, ny, nz, nw, d).
    """
    pts = as_points(vertices)
    if len(pts) < 5:
        raise ValueError("Need at least 5 points for a 4D hull")
    try:
        hull = ConvexHull(pts)
    except QhullError as e:
        raise ValueError(f"degenerate point set, no 4D hull: {e}") from e

    tol = 10.0 ** (-decimals)
    kept = np.zeros((0, 5))
    for row in hull.equations:
        if len(kept) == 0 or np.min(np.max(np.abs(kept - row), axis=1)) > tol:
            kept = np.vstack([kept, row])
    # округлення лише для ключа сортування, рівняння лишаються точними
    order = np.lexsort((np.round(kept, decimals) + 0.0).T[::-1])
    logger.debug("Hull: {} simplicial facets -> {} hyperplanes", len(hull.equations), len(kept))
    return [Hyperplane(row[:4], row[4]) for row in kept[order] + 0.0]
