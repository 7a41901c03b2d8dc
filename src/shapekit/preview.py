from __future__ import annotations

import math
import queue
import threading
from pathlib import Path
from typing import Callable, Iterable, List

import numpy as np
from rich.console import Console
from rich.panel import Panel
from watchfiles import Change, watch

from shapekit._config import SamplingSettings, UnitSettings, get_sampling_settings, get_unit_settings
from shapekit.modeling.drawing2d import Path2D, Path2DBuilder
from shapekit.modeling.geometry import Geometry, GeometryBuilder

SceneFactory = Callable[[], object]


class PreviewBackendError(RuntimeError):
    """Raised when a preview backend cannot run."""


def _load_pyvista():
    try:
        import pyvista as pv
    except ImportError as exc:  # pragma: no cover - runtime dep
        raise PreviewBackendError(
            "PyVista is required for previewing. Install shapekit with `pip install -e .`."
        ) from exc
    return pv


def collect_geometries(scene: object) -> List[Geometry]:
    """Flatten a model scene (a shape or nested lists of shapes) into shapes."""

    shapes: List[Geometry] = []

    def visit(item: object) -> None:
        if item is None:
            return
        if isinstance(item, Geometry):
            shapes.append(item)
            return
        if isinstance(item, (list, tuple)):
            for value in item:
                visit(value)
            return
        raise PreviewBackendError(
            f"Model build() must return shapes (e.g., Rectangle(), Circle(), or a list of them), got {type(item).__name__}."
        )

    visit(scene)
    if not shapes:
        raise PreviewBackendError("Scene did not produce any shapes.")
    return shapes


def emit_outlines(shapes: Iterable[Geometry]) -> List[Path2D]:
    """Emit shapes into a Path2DBuilder and return one outline per command."""

    geometry = GeometryBuilder()
    for shape in shapes:
        geometry.add(shape)
    builder = Path2DBuilder()
    geometry.emit_into(builder)
    return builder.paths


def outline_to_polydata(paths: Iterable[Path2D], segments_per_circle: int = 64, z: float = 0.0):
    """Return a PolyData with one line cell per non-empty outline."""

    pv = _load_pyvista()
    blocks: List[np.ndarray] = []
    cells: List[int] = []
    offset = 0
    for path in paths:
        pts = path.sample(segments_per_circle=segments_per_circle)
        if pts.shape[0] < 2:
            continue
        pts3 = np.column_stack([pts, np.full((pts.shape[0], 1), float(z))])
        blocks.append(pts3)
        cells.append(pts3.shape[0])
        cells.extend(range(offset, offset + pts3.shape[0]))
        offset += pts3.shape[0]

    if not blocks:
        return pv.PolyData()
    return pv.PolyData(np.vstack(blocks), lines=np.asarray(cells, dtype=int))


class PathPreviewer:
    """Render shape outlines using PyVista with optional hot reload."""

    def __init__(
        self,
        console: Console | None,
        unit_settings: UnitSettings | None = None,
        sampling: SamplingSettings | None = None,
    ):
        self.console = console
        self._pv = None
        self._unit_settings = unit_settings or get_unit_settings()
        self._sampling = sampling or get_sampling_settings()

    @property
    def unit_name(self) -> str:
        return self._unit_settings.name

    @property
    def unit_label(self) -> str:
        return self._unit_settings.label

    @property
    def unit_scale_to_mm(self) -> float:
        return self._unit_settings.scale_to_mm

    @property
    def segments_per_circle(self) -> int:
        return self._sampling.segments_per_circle

    def build_polydata(self, scene: object):
        """Collect the scene's shapes and flatten them into a single PolyData."""

        self._ensure_backend()
        outlines = emit_outlines(collect_geometries(scene))
        poly = outline_to_polydata(outlines, segments_per_circle=self.segments_per_circle)
        if poly.n_points == 0:
            raise PreviewBackendError("Scene produced only degenerate outlines.")
        return poly

    def save(self, poly, output: Path, binary: bool = True) -> None:
        try:
            poly.save(str(output), binary=binary)
        except Exception as exc:  # pragma: no cover - PyVista I/O failure
            raise PreviewBackendError(f"Failed to write {output}: {exc}") from exc

    def show(
        self,
        scene_factory: SceneFactory,
        initial_scene: object,
        model_path: Path,
        watch_files: bool,
        screenshot_path: Path | None = None,
    ) -> None:
        pv = self._ensure_backend()
        plotter = pv.Plotter(window_size=(1280, 800))
        self._apply_scene(plotter, self.build_polydata(initial_scene), align_camera=True)

        if screenshot_path is not None:
            screenshot_path.parent.mkdir(parents=True, exist_ok=True)
            plotter.show(title="shapekit Preview", auto_close=True, screenshot=str(screenshot_path))
            plotter.close()
            return

        if not watch_files:
            plotter.show(title="shapekit Preview")
            plotter.close()
            return

        reload_queue: queue.Queue[float] = queue.Queue()
        stop_event = threading.Event()
        watcher_thread = threading.Thread(
            target=self._watch_model_file,
            args=(model_path, reload_queue, stop_event),
            name="shapekit-watch",
            daemon=True,
        )
        watcher_thread.start()

        def process_queue() -> None:
            reload_requested = False
            while True:
                try:
                    reload_queue.get_nowait()
                    reload_requested = True
                except queue.Empty:
                    break
            if not reload_requested:
                return

            self._print(f"[yellow]Reloading {model_path}…[/yellow]")
            self._apply_scene(plotter, self.build_polydata(scene_factory()), align_camera=False)
            plotter.render()
            self._print(f"[green]Reloaded {model_path}[/green]")

        def guarded_process_queue(*_: object) -> None:
            try:
                process_queue()
            except Exception as exc:  # pragma: no cover - surfaced via console
                self._print(Panel.fit(str(exc), title="Reload failed", style="red"))

        plotter.add_timer_event(max_steps=10**9, duration=200, callback=guarded_process_queue)
        try:
            plotter.show(title="shapekit Preview", auto_close=False)
        finally:
            stop_event.set()
            plotter.close()

    # Internal helpers -----------------------------------------------------

    def _ensure_backend(self):
        if self._pv is None:
            pv = _load_pyvista()
            pv.set_plot_theme("document")
            self._pv = pv
        return self._pv

    def _print(self, message: object) -> None:
        if self.console is not None:
            self.console.print(message)

    def _apply_scene(self, plotter, poly, align_camera: bool = False) -> None:
        plotter.clear()
        plotter.set_background("#090c10", top="#1b2333")
        label = self._unit_settings.label
        plotter.show_bounds(grid="front", color="#5a677d", xlabel=f"X ({label})", ylabel=f"Y ({label})")
        plotter.add_mesh(poly, name="outlines", color="#6ab0ff", line_width=2.0)
        if align_camera:
            self._reset_camera(plotter, poly)

    def _reset_camera(self, plotter, poly) -> None:
        x0, x1, y0, y1, _, _ = poly.bounds
        x_center = (x0 + x1) / 2.0
        y_center = (y0 + y1) / 2.0
        distance = max(math.hypot(x1 - x0, y1 - y0), 1.0) * 1.5
        plotter.camera_position = [
            (x_center, y_center, distance),
            (x_center, y_center, 0.0),
            (0.0, 1.0, 0.0),
        ]

    def _watch_model_file(
        self,
        model_path: Path,
        reload_queue: "queue.Queue[float]",
        stop_event: threading.Event,
    ) -> None:
        resolved_model = model_path.resolve()
        watch_root = resolved_model if resolved_model.is_dir() else resolved_model.parent

        for changes in watch(str(watch_root), stop_event=stop_event, debounce=300):
            if stop_event.is_set():
                return

            for change, changed_path in changes:
                if Change.deleted == change and Path(changed_path) == resolved_model:
                    reload_queue.put_nowait(0.0)
                    break
                if Path(changed_path).resolve() == resolved_model:
                    reload_queue.put_nowait(0.0)
                    break
