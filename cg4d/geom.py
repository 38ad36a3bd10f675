from __future__ import annotations
from typing import Iterable, Tuple

import numpy as np

EPS = 1e-10  # обережний епс для перевірок

Point4 = np.ndarray  # float64, форма (4,)


def as_point(p) -> Point4:
    a = np.asarray(p, dtype=float)
    if a.shape != (4,):
        raise ValueError(f"expected a 4-vector, got shape {a.shape}")
    return a


def as_points(points) -> np.ndarray:
    """Масив (n, 4) з будь-якої послідовності 4-векторів."""
    if isinstance(points, np.ndarray):
        arr = points.astype(float, copy=False)
    else:
        arr = np.asarray(list(points), dtype=float)
    if arr.size == 0:
        return arr.reshape(0, 4)
    if arr.ndim != 2 or arr.shape[1] != 4:
        raise ValueError(f"expected an (n, 4) array, got shape {arr.shape}")
    return arr


def norm(a) -> float:
    return float(np.sqrt(np.dot(a, a)))


def normalize(a) -> np.ndarray:
    a = np.asarray(a, dtype=float)
    n = norm(a)
    if n <= EPS:
        raise ValueError("cannot normalize a zero vector")
    return a / n


def centroid(points: Iterable) -> Point4:
    arr = as_points(points)
    if len(arr) == 0:
        raise ValueError("empty set")
    return arr.mean(axis=0)


def index_of_largest(v) -> int:
    """Індекс компоненти з найбільшим модулем (перша з рівних)."""
    return int(np.argmax(np.abs(np.asarray(v, dtype=float))))


def drop_axis(points: np.ndarray, axis: int) -> np.ndarray:
    """Проєкція 4D -> 3D відкиданням координати `axis`."""
    return np.delete(np.asarray(points, dtype=float), axis, axis=-1)


def cross4(u, v, w) -> Point4:
    """
    Узагальнений векторний добуток у 4D: вектор, ортогональний до u, v і w
    одночасно (розклад детермінанта 4x4 за першим рядком базисних векторів).
    """
    a = v[0] * w[1] - v[1] * w[0]
    b = v[0] * w[2] - v[2] * w[0]
    c = v[0] * w[3] - v[3] * w[0]
    d = v[1] * w[2] - v[2] * w[1]
    e = v[1] * w[3] - v[3] * w[1]
    f = v[2] * w[3] - v[3] * w[2]
    return np.array([
        u[1] * f - u[2] * e + u[3] * d,
        -u[0] * f + u[2] * c - u[3] * b,
        u[0] * e - u[1] * c + u[3] * a,
        -u[0] * d + u[1] * b - u[2] * a,
    ], dtype=float)


def unique_points(points: Iterable[Tuple[float, float, float, float]], scale: float = 1e9) -> np.ndarray:
    """
    Груба дедуплікація з квантуванням (стабільніше для float).
    Порядок першої появи зберігається; `-0.0` зводиться до `0.0`.
    """
    seen: dict[Tuple[int, int, int, int], Tuple[float, ...]] = {}
    for p in points:
        x, y, z, w = (float(c) + 0.0 for c in p)
        key = (int(round(x * scale)), int(round(y * scale)), int(round(z * scale)), int(round(w * scale)))
        if key not in seen:
            seen[key] = (x, y, z, w)
    return np.array(list(seen.values()), dtype=float).reshape(-1, 4)
