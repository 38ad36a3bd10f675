# cg4d/topology.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple

import numpy as np

from .errors import TopologyError


def _flat_indices(values, name: str) -> Tuple[int, ...]:
    arr = np.asarray(values)
    if arr.size == 0:
        return ()
    if not np.issubdtype(arr.dtype, np.integer):
        raise TopologyError(f"{name}: indices must be integers, got {arr.dtype}")
    return tuple(int(i) for i in arr.ravel())


@dataclass(frozen=True)
class Topology:
    """
    Комбінаторний опис опуклого 4-політопа.

    vertices — масив (V, 4); edges і faces — плоскі послідовності індексів
    вершин: ребро i займає edges[2i : 2i+2], грань i — faces[k*i : k*i+k],
    де k = vertices_per_face. Вершини граней не впорядковані.
    `cells` — очікувана кількість комірок (0, якщо невідома).
    """
    vertices: np.ndarray
    edges: Tuple[int, ...]
    faces: Tuple[int, ...]
    vertices_per_edge: int = 2
    vertices_per_face: int = 4
    faces_per_cell: int = 6
    cells: int = 0

    def __post_init__(self):
        v = np.array(self.vertices, dtype=float)
        if v.size == 0:
            v = v.reshape(0, 4)
        if v.ndim != 2 or v.shape[1] != 4:
            raise TopologyError(f"vertices must have shape (V, 4), got {v.shape}")
        if not np.all(np.isfinite(v)):
            raise TopologyError("vertices contain non-finite coordinates")
        v.setflags(write=False)
        object.__setattr__(self, "vertices", v)
        object.__setattr__(self, "edges", _flat_indices(self.edges, "edges"))
        object.__setattr__(self, "faces", _flat_indices(self.faces, "faces"))

        for name in ("vertices_per_edge", "vertices_per_face", "faces_per_cell"):
            if int(getattr(self, name)) <= 0:
                raise TopologyError(f"{name} must be positive")
        if self.cells < 0:
            raise TopologyError("cells must be non-negative")
        if len(self.edges) % self.vertices_per_edge:
            raise TopologyError(
                f"edges length {len(self.edges)} is not a multiple of {self.vertices_per_edge}")
        if len(self.faces) % self.vertices_per_face:
            raise TopologyError(
                f"faces length {len(self.faces)} is not a multiple of {self.vertices_per_face}")

        n = len(v)
        for name in ("edges", "faces"):
            bad = [i for i in getattr(self, name) if i < 0 or i >= n]
            if bad:
                raise TopologyError(f"{name} reference vertex {bad[0]} outside [0, {n})")

    # ---------- конструктори ----------
    @classmethod
    def from_arrays(cls, vertices, edges, faces, faces_per_cell: int, cells: int = 0) -> "Topology":
        """Зручний конструктор з масивів ребер (E, 2) і граней (F, k)."""
        e = np.asarray(edges, dtype=int)
        f = np.asarray(faces, dtype=int)
        if e.ndim != 2 or f.ndim != 2:
            raise TopologyError("edges and faces must be 2D index arrays")
        return cls(
            vertices=vertices,
            edges=tuple(e.ravel().tolist()),
            faces=tuple(f.ravel().tolist()),
            vertices_per_edge=int(e.shape[1]),
            vertices_per_face=int(f.shape[1]),
            faces_per_cell=faces_per_cell,
            cells=cells,
        )

    # ---------- розміри ----------
    @property
    def num_vertices(self) -> int:
        return len(self.vertices)

    @property
    def num_edges(self) -> int:
        return len(self.edges) // self.vertices_per_edge

    @property
    def num_faces(self) -> int:
        return len(self.faces) // self.vertices_per_face

    # ---------- доступ ----------
    def vertex(self, i: int) -> np.ndarray:
        return self.vertices[i]

    def edge(self, i: int) -> Tuple[int, ...]:
        k = self.vertices_per_edge
        if not 0 <= i < self.num_edges:
            raise IndexError(f"edge index {i} out of range")
        return self.edges[k * i:k * i + k]

    def vertices_for_edge(self, i: int) -> Tuple[np.ndarray, np.ndarray]:
        a, b = self.edge(i)[:2]
        return self.vertices[a], self.vertices[b]

    def face(self, i: int) -> Tuple[int, ...]:
        k = self.vertices_per_face
        if not 0 <= i < self.num_faces:
            raise IndexError(f"face index {i} out of range")
        return self.faces[k * i:k * i + k]

    def vertices_for_face(self, i: int) -> np.ndarray:
        """Вершини грані (k, 4) у порядку зберігання (не обов'язково циклічному)."""
        return self.vertices[list(self.face(i))]

    def edge_array(self) -> np.ndarray:
        return np.asarray(self.edges, dtype=int).reshape(-1, self.vertices_per_edge)

    def face_array(self) -> np.ndarray:
        return np.asarray(self.faces, dtype=int).reshape(-1, self.vertices_per_face)

    def faces_containing(self, vertex_ids: Sequence[int]) -> np.ndarray:
        """Індекси граней, що містять усі вершини `vertex_ids`."""
        fa = self.face_array()
        mask = np.ones(len(fa), dtype=bool)
        for v in vertex_ids:
            mask &= np.any(fa == int(v), axis=1)
        return np.nonzero(mask)[0]

    def summary(self) -> str:
        return (f"V={self.num_vertices} E={self.num_edges} F={self.num_faces} "
                f"C={self.cells} k={self.vertices_per_face} faces/cell={self.faces_per_cell}")
