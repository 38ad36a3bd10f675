# examples/main.py
from __future__ import annotations

import sys

from cg4d.cells import reconstruct_cells, validate_cells
from cg4d.config import Settings, load_settings
from cg4d.hyperplane import Hyperplane
from cg4d.logging import set_level, setup_logfile
from cg4d.pipeline import tetrahedralize
from cg4d.polychora import Polychoron, load
from cg4d.rotations import Plane, compose, double_rotation, simple_rotation
from cg4d.slicing import SliceParams, slice_mesh


def main():
    # --- 1) Налаштування ---
    # python examples/main.py [shape] [settings.yaml]
    shape = Polychoron(sys.argv[1]) if len(sys.argv) > 1 else Polychoron.CELL_24
    settings = load_settings(sys.argv[2]) if len(sys.argv) > 2 else Settings()
    set_level(settings.log_level)
    setup_logfile("cg4d.log", level="DEBUG")

    # --- 2) Топологія + H-представлення ---
    topo, planes = load(shape)
    print(f"Політоп:          {shape.value}")
    print(f"Вершини:          {topo.num_vertices}")
    print(f"Ребра:            {topo.num_edges}")
    print(f"Грані:            {topo.num_faces}")

    # --- 3) Комірки + валідація ---
    cells = reconstruct_cells(topo, planes, settings)
    report = validate_cells(topo, cells)
    print(f"Комірок:          {len(cells)}")
    print("VALIDATION:", report)

    # --- 4) Тетраедралізація ---
    tets = tetrahedralize(topo, cells)
    print(f"Тетраедрів:       {len(tets)}")

    # --- 5) Зріз повернутого політопа ---
    transform = compose(double_rotation(Plane.XW, 0.5, 0.2), simple_rotation(Plane.YW, 0.3))
    params = SliceParams(Hyperplane((0, 0, 0, 1)), transform).with_displacement(-0.25, settings)
    mesh = slice_mesh(tets, params, settings, workers=4)
    print(f"Многокутників:    {mesh.num_polygons}")
    print(f"Трикутників:      {len(mesh.triangles)}")

    # --- 6) slice.off — 3D-переріз у координатах гіперплощини ---
    mesh.write_off("slice.off", params.hyperplane)
    print("slice.off записано (переріз для MeshLab/ParaView).")


if __name__ == "__main__":
    main()
