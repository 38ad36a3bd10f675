# examples/demo_hull.py
from cg4d.hull import hull_hyperplanes
from cg4d.polychora import topology_from_hyperplanes
from cg4d.cells import reconstruct_cells, validate_cells
from cg4d.geom import unique_points

if __name__ == "__main__":
    # тесеракт + кілька внутрішніх точок, які оболонка має відкинути
    raw = [
        (x, y, z, w)
        for x in (-1, 1) for y in (-1, 1) for z in (-1, 1) for w in (-1, 1)
    ] + [(0, 0, 0, 0), (0.2, -0.3, 0.5, 0.1), (-0.4, 0.4, 0.0, -0.6)]
    pts = unique_points(raw)
    planes = hull_hyperplanes(pts)
    print("Hyperplanes:", len(planes))
    for hp in planes:
        print("  ", hp)

    # внутрішні точки не лежать на жодній комірці: у топологію їх не беремо
    corners = pts[:16]
    topo = topology_from_hyperplanes(corners, planes)
    cells = reconstruct_cells(topo, planes)

    report = validate_cells(topo, cells)
    print("VALIDATION:", report)
