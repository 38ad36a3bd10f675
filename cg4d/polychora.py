"""
Каталог правильних 4-політопів (поліхорів).

Exports:
    - Polychoron: перелік шести правильних опуклих поліхорів.
    - vertices / h_representation / topology: V-, H-представлення і
      комбінаторика, центровані в початку координат.
    - topology_from_hyperplanes: 2-грані й ребра з вершин і гіперплощин.
    - load: (Topology, гіперплощини) з кешуванням.
"""
from __future__ import annotations
from enum import Enum
from functools import lru_cache
from itertools import permutations, product
from math import sqrt
from typing import Dict, Iterator, List, Sequence, Tuple

import numpy as np

from .config import DEFAULT_SETTINGS
from .errors import TopologyError
from .geom import as_points, normalize, unique_points
from .hull import hull_hyperplanes
from .hyperplane import Hyperplane
from .logging import logger
from .ordering import planar_order
from .topology import Topology

PHI = (1.0 + sqrt(5.0)) / 2.0


class Polychoron(str, Enum):
    CELL_5 = "5-cell"
    CELL_8 = "8-cell"
    CELL_16 = "16-cell"
    CELL_24 = "24-cell"
    CELL_120 = "120-cell"
    CELL_600 = "600-cell"


# ---------- генератори координат ----------
def _is_even(perm: Sequence[int]) -> bool:
    inversions = sum(1 for i in range(len(perm)) for j in range(i + 1, len(perm)) if perm[i] > perm[j])
    return inversions % 2 == 0


def _signed(p: Sequence[float]) -> Iterator[Tuple[float, ...]]:
    """Усі варіанти знаків ненульових координат."""
    yield from product(*[(c, -c) if c else (0.0,) for c in p])


def _orbit(base: Sequence[float], even_only: bool = False) -> Iterator[Tuple[float, ...]]:
    """Перестановки (усі або лише парні) координат `base` з усіма знаками."""
    for perm in permutations(range(len(base))):
        if even_only and not _is_even(perm):
            continue
        yield from _signed([base[i] for i in perm])


def _vertices_5() -> np.ndarray:
    w = 1.0 / sqrt(5.0)
    return np.array([
        (1.0, 1.0, 1.0, -w),
        (1.0, -1.0, -1.0, -w),
        (-1.0, 1.0, -1.0, -w),
        (-1.0, -1.0, 1.0, -w),
        (0.0, 0.0, 0.0, 4.0 * w),
    ])


def _vertices_8() -> np.ndarray:
    return np.array(list(product((-1.0, 1.0), repeat=4)))


def _vertices_16() -> np.ndarray:
    return unique_points(_orbit((1.0, 0.0, 0.0, 0.0)))


def _vertices_24() -> np.ndarray:
    return np.vstack([_vertices_16(), _vertices_8() / 2.0])


def _vertices_600() -> np.ndarray:
    golden = unique_points(_orbit((PHI / 2.0, 0.5, 0.5 / PHI, 0.0), even_only=True))
    return np.vstack([_vertices_24(), golden])


def _vertices_120() -> np.ndarray:
    # радіус описаної сфери sqrt(8)
    s5 = sqrt(5.0)
    pts: List[Tuple[float, ...]] = []
    for base in ((2.0, 2.0, 0.0, 0.0), (1.0, 1.0, 1.0, s5),
                 (PHI ** -2, PHI, PHI, PHI), (1.0 / PHI, 1.0 / PHI, 1.0 / PHI, PHI ** 2)):
        pts.extend(_orbit(base))
    for base in ((0.0, PHI ** -2, 1.0, PHI ** 2), (0.0, 1.0 / PHI, PHI, s5),
                 (1.0 / PHI, 1.0, PHI, 2.0)):
        pts.extend(_orbit(base, even_only=True))
    return unique_points(pts)


_VERTICES = {
    Polychoron.CELL_5: _vertices_5,
    Polychoron.CELL_8: _vertices_8,
    Polychoron.CELL_16: _vertices_16,
    Polychoron.CELL_24: _vertices_24,
    Polychoron.CELL_120: _vertices_120,
    Polychoron.CELL_600: _vertices_600,
}


def vertices(p: Polychoron) -> np.ndarray:
    """Канонічні координати вершин (V, 4), центр у початку координат."""
    return _VERTICES[Polychoron(p)]()


# ---------- H-представлення ----------
def _normals(p: Polychoron) -> np.ndarray:
    if p is Polychoron.CELL_5:
        return -_vertices_5()
    if p is Polychoron.CELL_8:
        return _vertices_16()
    if p is Polychoron.CELL_16:
        return _vertices_8()
    # 24-cell: перестановки (±1, ±1, 0, 0)
    return unique_points(_orbit((1.0, 1.0, 0.0, 0.0)))


def _support_hyperplanes(verts: np.ndarray, normals: np.ndarray) -> List[Hyperplane]:
    """Опорні гіперплощини: d = -max(V·n), тож політоп лежить у normal·x + d <= 0."""
    out = []
    for n in normals:
        n = normalize(n)
        out.append(Hyperplane(n, -float(np.max(verts @ n))))
    return out


def h_representation(p: Polychoron) -> List[Hyperplane]:
    """
    Гіперплощини 3-комірок із зовнішніми нормалями. Для 5/8/16/24-cell —
    замкнені формули, для 120/600-cell — через Qhull (`hull_hyperplanes`).
    """
    p = Polychoron(p)
    if p in (Polychoron.CELL_120, Polychoron.CELL_600):
        return hull_hyperplanes(vertices(p))
    return _support_hyperplanes(vertices(p), _normals(p))


# ---------- комбінаторика ----------
def topology_from_hyperplanes(
    verts,
    hyperplanes: Sequence[Hyperplane],
    eps: float = DEFAULT_SETTINGS.coincidence_eps,
) -> Topology:
    """
    Будує Topology опуклого 4-політопа з вершин і гіперплощин його комірок:
      - 2-грань — перетин двох комірок, що мають >= 3 спільні вершини;
        її вершини впорядковуються по колу (`planar_order`);
      - ребра — сусідні пари вершин у многокутниках граней (без повторів);
      - faces_per_cell — кількість граней на комірку (має бути однаковою).
    """
    verts = as_points(verts)
    hyperplanes = list(hyperplanes)
    incidence = np.stack([hp.inside(verts, eps) for hp in hyperplanes])  # (H, V)
    shared = incidence.astype(int) @ incidence.T.astype(int)
    pairs = np.argwhere(np.triu(shared >= 3, 1))

    faces: List[List[int]] = []
    per_cell = np.zeros(len(hyperplanes), dtype=int)
    for h, g in pairs:
        ids = np.nonzero(incidence[h] & incidence[g])[0]
        ring = [int(ids[i]) for i in planar_order(verts[ids], hyperplanes[h])]
        faces.append(ring)
        per_cell[h] += 1
        per_cell[g] += 1

    if not faces:
        raise TopologyError("no 2-faces: no two cells share 3 vertices")
    arity = {len(f) for f in faces}
    if len(arity) != 1:
        raise TopologyError(f"faces have mixed vertex counts {sorted(arity)}")
    if len(set(per_cell.tolist())) != 1:
        raise TopologyError(f"cells have mixed face counts {sorted(set(per_cell.tolist()))}")

    edges: Dict[Tuple[int, int], None] = {}
    for ring in faces:
        for a, b in zip(ring, ring[1:] + ring[:1]):
            edges.setdefault((min(a, b), max(a, b)), None)

    return Topology.from_arrays(
        verts, list(edges), faces,
        faces_per_cell=int(per_cell[0]),
        cells=len(hyperplanes),
    )


def topology(p: Polychoron) -> Topology:
    p = Polychoron(p)
    return topology_from_hyperplanes(vertices(p), h_representation(p))


@lru_cache(maxsize=None)
def load(p: Polychoron) -> Tuple[Topology, Tuple[Hyperplane, ...]]:
    """Topology і H-представлення поліхора (кешується на процес)."""
    p = Polychoron(p)
    planes = tuple(h_representation(p))
    topo = topology_from_hyperplanes(vertices(p), planes)
    logger.info("Loaded {}: {}", p.value, topo.summary())
    return topo, planes
