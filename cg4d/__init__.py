"""
cg4d — геометричне ядро для 4D опуклих політопів.
Зараз: комірки з H-представлення, тетраедралізація «віялом з вершини»
і покадровий зріз тетраедрів гіперплощиною.
"""

__version__ = "0.1.0"

from cg4d.geom import EPS, centroid, cross4, unique_points
from cg4d.config import DEFAULT_SETTINGS, Settings, load_settings
from cg4d.errors import HRepresentationError, SliceCountError, TopologyError
from cg4d.hyperplane import Hyperplane
from cg4d.ordering import fan_triangles, planar_order, sort_points_on_plane
from cg4d.topology import Topology
from cg4d.cells import Cell, reconstruct_cells, validate_cells
from cg4d.tetrahedron import SliceKind, SliceResult, Tetrahedron
from cg4d.pipeline import build_tetrahedra, tetrahedralize
from cg4d.slicing import SliceMesh, SliceParams, slice_mesh, slice_tetrahedra, slice_tetrahedron
from cg4d.rotations import Plane, compose, double_rotation, isoclinic_rotation, simple_rotation
from cg4d.hull import hull_hyperplanes
from cg4d.polychora import Polychoron, load
from cg4d.palette import cell_colors

__all__ = [
    "EPS", "centroid", "cross4", "unique_points",
    "DEFAULT_SETTINGS", "Settings", "load_settings",
    "HRepresentationError", "SliceCountError", "TopologyError",
    "Hyperplane",
    "fan_triangles", "planar_order", "sort_points_on_plane",
    "Topology",
    "Cell", "reconstruct_cells", "validate_cells",
    "SliceKind", "SliceResult", "Tetrahedron",
    "build_tetrahedra", "tetrahedralize",
    "SliceMesh", "SliceParams", "slice_mesh", "slice_tetrahedra", "slice_tetrahedron",
    "Plane", "compose", "double_rotation", "isoclinic_rotation", "simple_rotation",
    "hull_hyperplanes",
    "Polychoron", "load",
    "cell_colors",
    "__version__",
]
