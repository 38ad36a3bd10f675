# examples/demo_pipeline.py
from cg4d.hyperplane import Hyperplane
from cg4d.pipeline import build_tetrahedra
from cg4d.polychora import Polychoron, load
from cg4d.slicing import SliceParams, slice_tetrahedra

if __name__ == "__main__":
    for shape in Polychoron:
        topo, planes = load(shape)
        tets = build_tetrahedra(topo, planes)

        params = SliceParams(Hyperplane((0, 0, 0, 1))).with_displacement(-0.3)
        results = slice_tetrahedra(tets, params)
        polygons = [r for r in results if len(r)]

        print(f"{shape.value}:")
        print("  Vertices:", topo.num_vertices)
        print("  Faces:", topo.num_faces)
        print("  Tets:", len(tets))
        print("  Slice polygons at w=0.3:", len(polygons))
