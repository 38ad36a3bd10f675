# cg4d/ordering.py
from __future__ import annotations
from math import acos
from typing import List, Optional, Tuple, Union

import numpy as np

from .geom import EPS, as_point, as_points, drop_axis, index_of_largest
from .hyperplane import Hyperplane
from .logging import logger

PlaneLike = Union[Hyperplane, np.ndarray, Tuple[float, float, float, float]]


def _plane_normal(plane: PlaneLike) -> np.ndarray:
    if isinstance(plane, Hyperplane):
        return plane.normal
    return as_point(plane)


def _unit(v: np.ndarray) -> np.ndarray:
    n = float(np.sqrt(np.dot(v, v)))
    return v / n if n > 0.0 else v


def _polygon_normal(projected: np.ndarray) -> Optional[np.ndarray]:
    """
    Нормаль многокутника у 3D-проєкції: bc × ab для першої неколінеарної
    трійки (a = точка 0). None, якщо всі точки на одній прямій.
    """
    a = projected[0]
    scale = max(1.0, float(np.max(np.abs(projected - a))))
    n = len(projected)
    for j in range(1, n - 1):
        ab = projected[j] - a
        for k in range(j + 1, n):
            bc = projected[k] - projected[j]
            normal = np.cross(bc, ab)
            length = float(np.sqrt(np.dot(normal, normal)))
            if length > EPS * scale * scale:
                return normal / length
    return None


def planar_order(points, plane: PlaneLike) -> List[int]:
    """
    Перестановка індексів, що обходить копланарні 4D-точки по колу (віялом
    з першої точки виходять трикутники, що не перекриваються). Напрям обходу
    (за чи проти годинникової) не гарантується.

    `plane` — гіперплощина (або її нормаль), в якій лежать точки. Точки
    проєктуються в 3D відкиданням координати з найбільшою за модулем
    компонентою нормалі: така проєкція не вироджує многокутник.
    """
    pts = as_points(points)
    n = len(pts)
    if n < 3:
        raise ValueError("Need at least 3 points to order a polygon")

    projected = drop_axis(pts, index_of_largest(_plane_normal(plane)))
    center = projected.mean(axis=0)
    normal = _polygon_normal(projected)

    if normal is None:
        # усі точки на прямій: порядок уздовж неї
        logger.debug("planar_order: {} collinear points, ordering along the line", n)
        offsets = projected - projected[0]
        direction = offsets[int(np.argmax(np.einsum("ij,ij->i", offsets, offsets)))]
        keys = offsets @ direction
        return sorted(range(n), key=lambda i: keys[i])

    first = _unit(projected[0] - center)
    angles = [0.0]
    for i in range(1, n):
        edge = _unit(projected[i] - center)
        # clamp: похибка float може дати |cos| > 1
        cos_a = min(max(float(np.dot(first, edge)), -1.0), 1.0)
        angle = acos(cos_a)
        if float(np.dot(normal, np.cross(first, edge))) < 0.0:
            angle = -angle
        angles.append(angle)

    return sorted(range(n), key=lambda i: angles[i])


def sort_points_on_plane(points, plane: PlaneLike) -> np.ndarray:
    """Ті самі 4D-точки (k, 4) у порядку `planar_order`."""
    pts = as_points(points)
    return pts[planar_order(pts, plane)]


def fan_triangles(n: int) -> List[Tuple[int, int, int]]:
    """Віяло з вершини 0 для n-кутника: (0, i, i+1)."""
    return [(0, i, i + 1) for i in range(1, n - 1)]
