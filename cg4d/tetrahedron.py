# cg4d/tetrahedron.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from .config import Settings, resolve
from .errors import SliceCountError
from .geom import as_points
from .hyperplane import Hyperplane
from .logging import logger
from .ordering import sort_points_on_plane

# шість ребер тетраедра, порядок фіксований
EDGE_INDICES: Tuple[Tuple[int, int], ...] = ((0, 1), (0, 2), (0, 3), (1, 2), (1, 3), (2, 3))
TRIANGLE_INDICES: Tuple[Tuple[int, int, int], ...] = ((0, 1, 2),)
QUAD_INDICES: Tuple[Tuple[int, int, int], ...] = ((0, 1, 2), (0, 2, 3))


class SliceKind(Enum):
    EMPTY = 0
    TRIANGLE = 3
    QUAD = 4


@dataclass(frozen=True, eq=False)
class SliceResult:
    """
    Результат зрізу одного тетраедра: вид і точки (0|3|4, 4) у циклічному
    порядку, придатному для віяла з точки 0.
    """
    kind: SliceKind
    points: np.ndarray

    def __post_init__(self):
        pts = np.array(self.points, dtype=float).reshape(-1, 4)
        if len(pts) != self.kind.value:
            raise ValueError(f"{self.kind.name} slice needs {self.kind.value} points, got {len(pts)}")
        pts.setflags(write=False)
        object.__setattr__(self, "points", pts)

    @classmethod
    def empty(cls) -> "SliceResult":
        return cls(SliceKind.EMPTY, np.zeros((0, 4)))

    @classmethod
    def triangle(cls, points) -> "SliceResult":
        return cls(SliceKind.TRIANGLE, points)

    @classmethod
    def quad(cls, points) -> "SliceResult":
        return cls(SliceKind.QUAD, points)

    def __len__(self) -> int:
        return len(self.points)

    def triangles(self) -> Tuple[Tuple[int, int, int], ...]:
        if self.kind is SliceKind.QUAD:
            return QUAD_INDICES
        if self.kind is SliceKind.TRIANGLE:
            return TRIANGLE_INDICES
        return ()

    def area(self) -> float:
        """Площа многокутника (сума площ трикутників віяла, формула Грама)."""
        total = 0.0
        for a, b, c in self.triangles():
            u = self.points[b] - self.points[a]
            v = self.points[c] - self.points[a]
            g = np.dot(u, u) * np.dot(v, v) - np.dot(u, v) ** 2
            total += 0.5 * float(np.sqrt(max(g, 0.0)))
        return total


@dataclass(frozen=True, eq=False)
class Tetrahedron:
    """
    4D-тетраедр, що належить одній комірці політопа.

    vertices копіюються (4, 4) і стають read-only; трансформація не
    зберігається, а передається при кожному зрізі.
    """
    vertices: np.ndarray
    cell_index: int = -1
    cell_centroid: Optional[np.ndarray] = None
    vertex_ids: Tuple[int, ...] = ()

    def __post_init__(self):
        v = np.array(self.vertices, dtype=float)
        if v.shape != (4, 4):
            raise ValueError(f"tetrahedron needs 4 vertices in 4D, got shape {v.shape}")
        v.setflags(write=False)
        object.__setattr__(self, "vertices", v)
        c = v.mean(axis=0) if self.cell_centroid is None else np.array(self.cell_centroid, dtype=float)
        c.setflags(write=False)
        object.__setattr__(self, "cell_centroid", c)
        object.__setattr__(self, "vertex_ids", tuple(int(i) for i in self.vertex_ids))

    def transformed_vertices(self, transform: Optional[np.ndarray] = None) -> np.ndarray:
        """Вершини після T (стовпчикова конвенція: p' = T p)."""
        if transform is None:
            return self.vertices
        return self.vertices @ np.asarray(transform, dtype=float).T

    def volume(self) -> float:
        """3-об'єм тетраедра в 4D: sqrt(det(Gram)) / 6."""
        m = self.vertices[1:] - self.vertices[0]
        return float(np.sqrt(max(np.linalg.det(m @ m.T), 0.0))) / 6.0

    def slice(
        self,
        hyperplane: Hyperplane,
        transform: Optional[np.ndarray] = None,
        settings: Optional[Settings] = None,
        index: Optional[int] = None,
    ) -> SliceResult:
        """Перетин (трансформованого) тетраедра з гіперплощиною."""
        crossings = edge_crossings(self.transformed_vertices(transform), hyperplane)
        return polygon_from_crossings(crossings, hyperplane, resolve(settings), index)


# ---------- спільні кроки зрізу (ними користується і пакетний зріз) ----------
def edge_crossings(vertices: np.ndarray, hyperplane: Hyperplane) -> np.ndarray:
    """
    Точки перетину ребер з гіперплощиною, t = -s(a) / (s(b) - s(a)), 0 <= t <= 1.
    Ребро з s(a) == s(b) не має єдиної точки перетину і пропускається.
    """
    s = hyperplane.signed_distance(vertices)
    out: List[np.ndarray] = []
    for a, b in EDGE_INDICES:
        denom = s[b] - s[a]
        if denom == 0.0:
            continue
        t = -s[a] / denom
        if 0.0 <= t <= 1.0:
            out.append(vertices[a] + t * (vertices[b] - vertices[a]))
    return as_points(out)


def merge_close(points: np.ndarray, eps: float) -> np.ndarray:
    """Зливає точки, ближчі за eps (зберігається перша з групи)."""
    kept: List[np.ndarray] = []
    for p in points:
        if all(np.max(np.abs(p - q)) > eps for q in kept):
            kept.append(p)
    return as_points(kept)


def polygon_from_crossings(
    crossings: np.ndarray,
    hyperplane: Hyperplane,
    settings: Settings,
    index: Optional[int] = None,
) -> SliceResult:
    pts = merge_close(crossings, settings.merge_eps)
    n = len(pts)
    if n < 3:
        # дотик у вершині чи ребрі: нульова площа
        return SliceResult.empty()
    if n == 3:
        return SliceResult.triangle(pts)
    if n == 4:
        return SliceResult.quad(sort_points_on_plane(pts, hyperplane))

    if settings.strict_slices:
        raise SliceCountError(n, index)
    logger.warning("Skipping tetrahedron {}: {} intersection points", index, n)
    return SliceResult.empty()
