# cg4d/palette.py
from __future__ import annotations
from typing import Sequence

import numpy as np


def cell_colors(cell_indices: Sequence[int], num_cells: int, cmap: str = "gist_rainbow") -> np.ndarray:
    """
    RGBA-кольори (n, 4) для многокутників зрізу: колір визначається
    індексом комірки, з якої походить тетраедр, тож одна комірка має
    один колір. Потрібен matplotlib (extra `viz`).
    """
    import matplotlib.pyplot as plt

    colormap = plt.get_cmap(cmap, max(int(num_cells), 1))
    idx = np.asarray(cell_indices, dtype=int).reshape(-1)
    return np.asarray(colormap(idx % colormap.N)).reshape(-1, 4)
