# cg4d/cells.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .config import Settings, resolve
from .errors import HRepresentationError
from .hyperplane import Hyperplane
from .logging import logger
from .topology import Topology


@dataclass(frozen=True)
class Cell:
    """3-вимірна комірка: опорна гіперплощина і відсортовані індекси її граней."""
    hyperplane: Hyperplane
    face_indices: Tuple[int, ...]

    def __iter__(self) -> Iterator[int]:
        return iter(self.face_indices)

    def __len__(self) -> int:
        return len(self.face_indices)


def face_membership(topology: Topology, hyperplanes: Sequence[Hyperplane], eps: float) -> np.ndarray:
    """
    Матриця (H, F): True, якщо всі вершини грані f лежать на гіперплощині h
    (тест `Hyperplane.inside` з допуском eps).
    """
    fa = topology.face_array()
    if not hyperplanes or len(fa) == 0:
        return np.zeros((len(hyperplanes), len(fa)), dtype=bool)
    on_plane = np.stack([hp.inside(topology.vertices, eps) for hp in hyperplanes])  # (H, V)
    return np.all(on_plane[:, fa], axis=2)


def reconstruct_cells(
    topology: Topology,
    hyperplanes: Sequence[Hyperplane],
    settings: Optional[Settings] = None,
) -> List[Cell]:
    """
    Збирає комірки з H-представлення: одна комірка на кожну гіперплощину
    (у порядку таблиці), грань належить комірці, якщо всі її вершини лежать
    на гіперплощині.

    Неузгодженості (грані поза комірками, грані не на двох комірках, порожні
    комірки, інша кількість комірок) логуються як попередження; при
    `settings.strict_cells` кидається HRepresentationError.
    """
    settings = resolve(settings)
    hyperplanes = list(hyperplanes)
    member = face_membership(topology, hyperplanes, settings.coincidence_eps)
    cells = [
        Cell(hp, tuple(int(f) for f in np.nonzero(member[h])[0]))
        for h, hp in enumerate(hyperplanes)
    ]
    logger.info("Reconstructed {} cells from {} faces", len(cells), topology.num_faces)

    report = validate_cells(topology, cells)
    problems = {k: v for k, v in report.items() if isinstance(v, list) and v}
    if problems:
        if settings.strict_cells:
            raise HRepresentationError("hyperplane table does not match the topology", report)
        for key, items in problems.items():
            logger.warning("Cell reconstruction: {} {} (first: {})", len(items), key, items[0])
    return cells


def validate_cells(topology: Topology, cells: Sequence[Cell]) -> dict:
    """
    Перевірка розбиття граней на комірки:
      - кожна грань належить хоча б одній комірці;
      - кожна 2-грань опуклого 4-політопа спільна рівно для двох комірок;
      - кількість граней у комірці дорівнює faces_per_cell;
      - немає порожніх комірок;
      - кількість комірок збігається з topology.cells (якщо вона відома).
    Повертає словник з діагностикою (порожні списки = все ок).
    """
    counts = np.zeros(topology.num_faces, dtype=int)
    for c in cells:
        counts[list(c.face_indices)] += 1

    orphan_faces = [int(f) for f in np.nonzero(counts == 0)[0]]
    not_shared = [(int(f), int(counts[f])) for f in np.nonzero((counts != 2) & (counts != 0))[0]]
    bad_sizes = [(i, len(c)) for i, c in enumerate(cells)
                 if len(c) and len(c) != topology.faces_per_cell]
    empty = [i for i, c in enumerate(cells) if not len(c)]
    mismatch = [(len(cells), topology.cells)] if topology.cells and topology.cells != len(cells) else []

    return {
        "cells": len(cells),
        "expected_cells": topology.cells,
        "orphan_faces": orphan_faces,                 # грані без комірки
        "faces_not_shared_by_two": not_shared,        # (face, кількість комірок)
        "bad_cell_sizes": bad_sizes,                  # (cell, кількість граней)
        "empty_cells": empty,
        "cell_count_mismatch": mismatch,              # (знайдено, очікувано)
    }
