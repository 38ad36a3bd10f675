# cg4d/hyperplane.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
from scipy.linalg import null_space

from .config import DEFAULT_SETTINGS
from .geom import EPS, Point4, as_point, cross4, norm

Scalar = Union[float, np.ndarray]


@dataclass(frozen=True, eq=False)
class Hyperplane:
    """
    Орієнтована гіперплощина {x : normal·x + displacement = 0} у 4D.

    Нормаль зберігається одиничною: конструктор ділить і нормаль, і зсув на
    |normal|, тож множина точок не змінюється, а signed_distance — справжня
    евклідова відстань.
    """
    normal: Point4
    displacement: float = 0.0

    def __post_init__(self):
        n = as_point(self.normal)
        length = norm(n)
        if not np.isfinite(length) or length <= EPS:
            raise ValueError("hyperplane normal must be a non-zero finite vector")
        n = n / length
        n.setflags(write=False)
        object.__setattr__(self, "normal", n)
        object.__setattr__(self, "displacement", float(self.displacement) / length)

    # ---------- конструктори ----------
    @classmethod
    def from_points(cls, a, b, c, d) -> "Hyperplane":
        """Гіперплощина через чотири афінно незалежні точки."""
        a, b, c, d = (as_point(p) for p in (a, b, c, d))
        n = cross4(b - a, c - a, d - a)
        if norm(n) <= EPS:
            raise ValueError("points are affinely dependent: no unique hyperplane")
        return cls(n, -float(np.dot(n, a)))

    def with_displacement(self, displacement: float) -> "Hyperplane":
        return Hyperplane(self.normal, displacement)

    # ---------- предикати ----------
    def signed_distance(self, point) -> Scalar:
        """normal·p + displacement; для масиву (n, 4) повертає (n,)."""
        p = np.asarray(point, dtype=float)
        value = p @ self.normal + self.displacement
        return float(value) if p.ndim == 1 else value

    side = signed_distance

    def inside(self, point, eps: Optional[float] = None):
        """
        Тест збігу (не півпростору): |signed_distance| <= eps.
        Для масиву точок повертає масив bool.
        """
        if eps is None:
            eps = DEFAULT_SETTINGS.coincidence_eps
        dist = self.signed_distance(point)
        if isinstance(dist, float):
            return abs(dist) <= eps
        return np.abs(dist) <= eps

    # ---------- локальні координати ----------
    def origin(self) -> Point4:
        """Найближча до початку координат точка гіперплощини."""
        return -self.displacement * self.normal

    def basis(self) -> np.ndarray:
        """
        Ортонормований базис (3, 4) гіперплощини. Орієнтація узгоджена з
        нормаллю: det([e0, e1, e2, normal]) > 0.
        """
        rows = null_space(self.normal.reshape(1, 4)).T
        if np.linalg.det(np.vstack([rows, self.normal])) < 0.0:
            rows[2] = -rows[2]
        return rows

    def to_local(self, points) -> np.ndarray:
        """3D-координати точок (n, 4) у базисі `basis()` відносно `origin()`."""
        p = np.asarray(points, dtype=float)
        return (p - self.origin()) @ self.basis().T

    def __repr__(self) -> str:
        n = ", ".join(f"{c:.6g}" for c in self.normal)
        return f"Hyperplane(normal=({n}), displacement={self.displacement:.6g})"
