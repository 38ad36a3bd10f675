"""
Покадровий зріз набору тетраедрів гіперплощиною.

Exports:
    - SliceParams: стан кадру (гіперплощина + 4x4 трансформація).
    - slice_tetrahedron / slice_tetrahedra: зріз одного тетраедра / пакета.
    - SliceMesh, slice_mesh: плоскі буфери вершин і трикутників для рендеру.
"""
from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .config import Settings, resolve
from .hyperplane import Hyperplane
from .tetrahedron import EDGE_INDICES, SliceResult, Tetrahedron, polygon_from_crossings

_EDGE_A = np.array([a for a, _ in EDGE_INDICES])
_EDGE_B = np.array([b for _, b in EDGE_INDICES])


def _identity() -> np.ndarray:
    return np.eye(4)


@dataclass(frozen=True, eq=False)
class SliceParams:
    """Параметри одного кадру: жива гіперплощина зрізу і трансформація T."""
    hyperplane: Hyperplane
    transform: np.ndarray = field(default_factory=_identity)

    def __post_init__(self):
        t = np.array(self.transform, dtype=float)
        if t.shape != (4, 4):
            raise ValueError(f"transform must be 4x4, got shape {t.shape}")
        t.setflags(write=False)
        object.__setattr__(self, "transform", t)

    def with_displacement(self, value: float, settings: Optional[Settings] = None) -> "SliceParams":
        """Нова гіперплощина з обмеженим і відсунутим від нуля зсувом."""
        d = resolve(settings).clamp_displacement(value)
        return SliceParams(self.hyperplane.with_displacement(d), self.transform)

    def with_transform(self, transform) -> "SliceParams":
        return SliceParams(self.hyperplane, transform)


def slice_tetrahedron(
    tet: Tetrahedron,
    params: SliceParams,
    settings: Optional[Settings] = None,
    index: Optional[int] = None,
) -> SliceResult:
    return tet.slice(params.hyperplane, params.transform, settings, index)


# ---------- пакетний зріз ----------
def _slice_chunk(
    vertices: np.ndarray,
    offset: int,
    params: SliceParams,
    settings: Settings,
) -> List[SliceResult]:
    """Ті самі кроки, що й Tetrahedron.slice, але для масиву (n, 4, 4)."""
    hp = params.hyperplane
    v = vertices @ params.transform.T
    s = v @ hp.normal + hp.displacement                       # (n, 4)
    sa, sb = s[:, _EDGE_A], s[:, _EDGE_B]                     # (n, 6)
    denom = sb - sa
    with np.errstate(divide="ignore", invalid="ignore"):
        t = -sa / denom
    hit = (denom != 0.0) & (t >= 0.0) & (t <= 1.0)
    va, vb = v[:, _EDGE_A], v[:, _EDGE_B]                     # (n, 6, 4)
    points = va + np.where(hit, t, 0.0)[..., None] * (vb - va)

    out: List[SliceResult] = []
    for i in range(len(v)):
        if not hit[i].any():
            out.append(SliceResult.empty())
            continue
        out.append(polygon_from_crossings(points[i][hit[i]], hp, settings, offset + i))
    return out


def slice_tetrahedra(
    tetrahedra: Sequence[Tetrahedron],
    params: SliceParams,
    settings: Optional[Settings] = None,
    workers: Optional[int] = None,
) -> List[SliceResult]:
    """
    Зріз усіх тетраедрів для одного кадру.

    Результат i відповідає тетраедру i. При workers > 1 шматки масиву
    обробляються у ThreadPoolExecutor; порядок результатів зберігається.
    """
    settings = resolve(settings)
    if not tetrahedra:
        return []
    verts = np.stack([t.vertices for t in tetrahedra])

    if not workers or workers <= 1:
        return _slice_chunk(verts, 0, params, settings)

    bounds = np.linspace(0, len(verts), min(workers, len(verts)) + 1).astype(int)
    spans = [(int(a), int(b)) for a, b in zip(bounds[:-1], bounds[1:]) if b > a]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        parts = pool.map(lambda ab: _slice_chunk(verts[ab[0]:ab[1]], ab[0], params, settings), spans)
        return [r for part in parts for r in part]


# ---------- плоскі буфери ----------
@dataclass(frozen=True, eq=False)
class SliceMesh:
    """
    Зріз у вигляді плоских буферів:
      vertices  — (N, 4) точки всіх многокутників підряд;
      triangles — (M, 3) індекси у vertices;
      slots     — для кожного тетраедра (offset, count) у vertices.
    """
    vertices: np.ndarray
    triangles: np.ndarray
    slots: Tuple[Tuple[int, int], ...]

    @classmethod
    def from_results(cls, results: Sequence[SliceResult]) -> "SliceMesh":
        verts: List[np.ndarray] = []
        tris: List[Tuple[int, int, int]] = []
        slots: List[Tuple[int, int]] = []
        offset = 0
        for r in results:
            slots.append((offset, len(r)))
            if len(r):
                verts.append(r.points)
                tris.extend((offset + a, offset + b, offset + c) for a, b, c in r.triangles())
            offset += len(r)
        vertices = np.vstack(verts) if verts else np.zeros((0, 4))
        triangles = np.array(tris, dtype=int).reshape(-1, 3)
        return cls(vertices, triangles, tuple(slots))

    @property
    def num_polygons(self) -> int:
        return sum(1 for _, n in self.slots if n)

    def polygon(self, i: int) -> np.ndarray:
        offset, n = self.slots[i]
        return self.vertices[offset:offset + n]

    def to_off(self, hyperplane: Hyperplane) -> str:
        """
        OFF зі трикутниками зрізу; вершини — 3D-координати в базисі
        гіперплощини (`Hyperplane.to_local`).
        """
        local = hyperplane.to_local(self.vertices) if len(self.vertices) else np.zeros((0, 3))
        lines = ["OFF", f"{len(local)} {len(self.triangles)} 0"]
        for x, y, z in local:
            lines.append(f"{x} {y} {z}")
        for a, b, c in self.triangles:
            lines.append(f"3 {a} {b} {c}")
        return "\n".join(lines)

    def write_off(self, path: str, hyperplane: Hyperplane) -> None:
        with open(path, "w", encoding="utf-8") as f:
            f.write(self.to_off(hyperplane))


def slice_mesh(
    tetrahedra: Sequence[Tetrahedron],
    params: SliceParams,
    settings: Optional[Settings] = None,
    workers: Optional[int] = None,
) -> SliceMesh:
    return SliceMesh.from_results(slice_tetrahedra(tetrahedra, params, settings, workers))
