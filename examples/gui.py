# examples/gui.py
from __future__ import annotations

import tkinter as tk
from tkinter import ttk, messagebox

import numpy as np

from cg4d.config import Settings
from cg4d.errors import HRepresentationError, SliceCountError, TopologyError
from cg4d.hyperplane import Hyperplane
from cg4d.palette import cell_colors
from cg4d.pipeline import build_tetrahedra
from cg4d.polychora import Polychoron, load
from cg4d.rotations import Plane, compose, simple_rotation
from cg4d.slicing import SliceParams, slice_tetrahedra

import matplotlib
matplotlib.use("TkAgg")
from matplotlib.figure import Figure
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from mpl_toolkits.mplot3d.art3d import Poly3DCollection

# площини, в яких користувач може обертати політоп
ROTATION_PLANES = (Plane.XW, Plane.YW, Plane.ZW, Plane.XY)


class SliceApp(tk.Tk):
    def __init__(self):
        super().__init__()
        self.title("Tetradeath of a Polytope: 4D slicer")
        self.geometry("900x750")

        self.settings = Settings(strict_slices=False)
        self.tets = []
        self.num_cells = 1
        self.params = SliceParams(Hyperplane((0, 0, 0, 1))).with_displacement(0.0, self.settings)

        # сюди покладемо Figure/Canvas
        self.fig = None
        self.ax = None
        self.canvas = None

        self._build_widgets()
        self.load_shape()

    def _build_widgets(self):
        main = ttk.Frame(self, padding=10)
        main.pack(fill="both", expand=True)

        # --- Вибір політопа ---
        shape_frame = ttk.LabelFrame(main, text="Політоп")
        shape_frame.pack(fill="x", pady=5)

        self.shape_var = tk.StringVar(value=Polychoron.CELL_8.value)
        shape_box = ttk.Combobox(
            shape_frame,
            textvariable=self.shape_var,
            values=[p.value for p in Polychoron],
            state="readonly",
            width=12,
        )
        shape_box.grid(row=0, column=0, sticky="w", padx=5, pady=5)
        shape_box.bind("<<ComboboxSelected>>", lambda _e: self.load_shape())

        self.info_var = tk.StringVar(value="—")
        ttk.Label(shape_frame, textvariable=self.info_var).grid(row=0, column=1, sticky="w", padx=10)

        # --- Зсув гіперплощини і кути обертання ---
        ctrl = ttk.LabelFrame(main, text="Зріз")
        ctrl.pack(fill="x", pady=5)

        self.displacement_var = tk.DoubleVar(value=0.0)
        ttk.Label(ctrl, text="Зсув w:").grid(row=0, column=0, sticky="w", padx=5, pady=2)
        tk.Scale(
            ctrl, variable=self.displacement_var, orient="horizontal", length=400,
            from_=self.settings.displacement_min, to=self.settings.displacement_max,
            resolution=0.01, command=lambda _v: self.redraw(),
        ).grid(row=0, column=1, sticky="we", padx=5)

        self.angle_vars = {}
        for row, plane in enumerate(ROTATION_PLANES, start=1):
            var = tk.DoubleVar(value=0.0)
            self.angle_vars[plane] = var
            ttk.Label(ctrl, text=f"Кут {plane.name}:").grid(row=row, column=0, sticky="w", padx=5, pady=2)
            tk.Scale(
                ctrl, variable=var, orient="horizontal", length=400,
                from_=-180.0, to=180.0, resolution=1.0, command=lambda _v: self.redraw(),
            ).grid(row=row, column=1, sticky="we", padx=5)

        self.slice_var = tk.StringVar(value="—")
        ttk.Label(main, textvariable=self.slice_var, foreground="gray").pack(fill="x", pady=5)

        # --- Фрейм для 3D-графіка ---
        plot_frame = ttk.LabelFrame(main, text="3D переріз")
        plot_frame.pack(fill="both", expand=True, pady=5)

        self.fig = Figure(figsize=(5, 4))
        self.ax = self.fig.add_subplot(111, projection="3d")
        self.canvas = FigureCanvasTkAgg(self.fig, master=plot_frame)
        self.canvas.draw()
        self.canvas.get_tk_widget().pack(fill="both", expand=True)

    def load_shape(self):
        try:
            topo, planes = load(Polychoron(self.shape_var.get()))
            self.tets = build_tetrahedra(topo, planes, self.settings)
            self.num_cells = len(planes)
        except (TopologyError, HRepresentationError) as e:
            messagebox.showerror("Помилка завантаження", str(e))
            return
        self.info_var.set(f"V={topo.num_vertices}  F={topo.num_faces}  "
                          f"C={len(planes)}  тетраедрів={len(self.tets)}")
        self.redraw()

    def current_transform(self) -> np.ndarray:
        rotations = [simple_rotation(p, np.radians(v.get())) for p, v in self.angle_vars.items()]
        return compose(*rotations)

    def redraw(self):
        self.params = (self.params
                       .with_transform(self.current_transform())
                       .with_displacement(-self.displacement_var.get(), self.settings))
        try:
            results = slice_tetrahedra(self.tets, self.params, self.settings)
        except SliceCountError as e:
            messagebox.showerror("Помилка зрізу", str(e))
            return
        hp = self.params.hyperplane
        hit = [(t.cell_index, r) for t, r in zip(self.tets, results) if len(r)]
        polygons = [hp.to_local(r.points) for _, r in hit]
        colors = cell_colors([ci for ci, _ in hit], self.num_cells)
        self.slice_var.set(f"Многокутників: {len(polygons)}   {hp}")
        self.update_plot(polygons, colors)

    def update_plot(self, polygons, colors):
        """
        Перемалювати 3D-графік у вікні для поточного перерізу.
        """
        self.ax.clear()

        if not polygons:
            self.ax.set_title("Гіперплощина не перетинає політоп")
            self.canvas.draw()
            return

        collection = Poly3DCollection(polygons, linewidths=0.3, alpha=0.6)
        # колір за коміркою
        collection.set_facecolor(colors)
        collection.set_edgecolor("k")
        self.ax.add_collection3d(collection)

        # однакові масштаби
        pts = np.vstack(polygons)
        lo, hi = pts.min(axis=0), pts.max(axis=0)
        max_range = float(np.max(hi - lo)) or 1.0
        mid = 0.5 * (lo + hi)
        self.ax.set_xlim(mid[0] - max_range / 2, mid[0] + max_range / 2)
        self.ax.set_ylim(mid[1] - max_range / 2, mid[1] + max_range / 2)
        self.ax.set_zlim(mid[2] - max_range / 2, mid[2] + max_range / 2)

        self.ax.set_xlabel("e0")
        self.ax.set_ylabel("e1")
        self.ax.set_zlabel("e2")
        self.ax.set_title("Slice (hyperplane frame)")

        self.canvas.draw()


if __name__ == "__main__":
    app = SliceApp()
    app.mainloop()
