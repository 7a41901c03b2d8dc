from __future__ import annotations

import importlib.util
import json
import pathlib
import sys
import traceback
from types import ModuleType
from typing import Callable

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from shapekit.modeling.builder import PathRecorder, command_to_dict
from shapekit.modeling.geometry import GeometryBuilder
from shapekit.preview import PathPreviewer, PreviewBackendError, collect_geometries
from shapekit.validation import ValidationError

console = Console()
app = typer.Typer(help="Emit declarative 2D shapes as path commands and preview their outlines.")


class ModelBuildError(RuntimeError):
    """Raised when a model module cannot provide a usable scene."""


def _log_active_units(previewer: PathPreviewer) -> None:
    scale = previewer.unit_scale_to_mm
    units = previewer.unit_name
    label = previewer.unit_label
    if abs(scale - 1.0) < 1e-9:
        console.print(f"[magenta]Units: {units} ({label}).[/magenta]")
    else:
        console.print(
            f"[magenta]Units: {units} ({label}); 1 {label} = {scale:.4g} mm.[/magenta]"
        )


def _load_module(path: pathlib.Path) -> ModuleType:
    module_name = "shapekit_user_model"
    if module_name in sys.modules:
        del sys.modules[module_name]

    spec = importlib.util.spec_from_file_location(module_name, path)
    if spec is None or spec.loader is None:
        raise ModelBuildError(f"Unable to import model at {path}")

    module = importlib.util.module_from_spec(spec)
    # Register module so features relying on sys.modules (e.g., dataclasses) work.
    sys.modules[module_name] = module
    spec.loader.exec_module(module)
    return module


def _format_exception(exc: BaseException) -> str:
    return "".join(traceback.format_exception(exc))


def _scene_factory_from_module(model_path: pathlib.Path) -> Callable[[], object]:
    def factory() -> object:
        module = _load_module(model_path)
        builder = getattr(module, "build", None)
        if builder is None or not callable(builder):
            raise ModelBuildError(f"{model_path} must define a callable build() function.")
        return builder()

    return factory


def _next_available_path(path: pathlib.Path) -> pathlib.Path:
    """Return a non-conflicting path by appending ' (n)' before the suffix."""

    if not path.exists():
        return path

    parent = path.parent
    stem = path.stem
    suffix = path.suffix
    n = 1
    while True:
        candidate = parent / f"{stem} ({n}){suffix}"
        if not candidate.exists():
            return candidate
        n += 1


def _require_model(model: pathlib.Path) -> Callable[[], object]:
    if not model.exists():
        raise typer.BadParameter(f"Model path {model} does not exist.")
    return _scene_factory_from_module(model)


def _run_model(scene_factory: Callable[[], object]) -> object:
    try:
        return scene_factory()
    except Exception as exc:
        raise typer.BadParameter(f"Model execution failed: {exc}") from exc


def _record_scene(scene: object) -> PathRecorder:
    geometry = GeometryBuilder()
    for shape in collect_geometries(scene):
        geometry.add(shape)
    return geometry.build()


def _commands_table(recorder: PathRecorder) -> Table:
    table = Table(title=f"{len(recorder)} path command(s)")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Command", style="cyan", no_wrap=True)
    table.add_column("Arguments", overflow="fold")
    for index, command in enumerate(recorder, start=1):
        data = command_to_dict(command)
        name = data.pop("command")
        args = ", ".join(f"{key}={value}" for key, value in data.items())
        table.add_row(str(index), str(name), args)
    return table


@app.command()
def emit(
    model: pathlib.Path = typer.Argument(..., help="Path to a Python module whose build() returns shapes."),
    as_json: bool = typer.Option(False, "--json", help="Print the commands as JSON instead of a table."),
) -> None:
    """
    Emit every shape of a model into a recording builder and list the commands.
    """

    scene = _run_model(_require_model(model))
    try:
        recorder = _record_scene(scene)
    except (PreviewBackendError, ValidationError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    if as_json:
        typer.echo(json.dumps([command_to_dict(command) for command in recorder], indent=2))
        return

    console.rule("shapekit Emit")
    console.print(f"Using model [green]{model}[/green]")
    console.print(_commands_table(recorder))


@app.command()
def preview(
    model: pathlib.Path = typer.Argument(..., help="Path to a Python module whose build() returns shapes."),
    watch: bool = typer.Option(True, help="Watch the model file for changes and hot-reload."),
    screenshot: pathlib.Path | None = typer.Option(
        None, "--screenshot", help="Optional path to save a screenshot of the preview."
    ),
) -> None:
    """
    Sample every shape outline and open an interactive PyVista window.
    """

    scene_factory = _require_model(model)
    initial_scene = _run_model(scene_factory)

    console.rule("shapekit Preview")
    console.print(f"Using model [green]{model}[/green]")
    if watch:
        console.print("[cyan]Watching for changes, save to hot reload, close the window to stop.[/cyan]")

    previewer = PathPreviewer(console=console)
    _log_active_units(previewer)
    try:
        previewer.show(
            scene_factory=scene_factory,
            initial_scene=initial_scene,
            model_path=model,
            watch_files=watch,
            screenshot_path=screenshot,
        )
    except (PreviewBackendError, ValidationError) as exc:
        console.print(Panel.fit(_format_exception(exc), title="Preview failed", style="red"))
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def export(
    model: pathlib.Path = typer.Argument(..., help="Model module to export."),
    output: pathlib.Path = typer.Option(
        pathlib.Path("outline.vtp"),
        "--output",
        "-o",
        help="Path to the polyline dataset that will be produced (.vtp, .vtk, .ply).",
    ),
    overwrite: bool = typer.Option(False, "--overwrite", help="Allow replacing an existing file."),
    ascii: bool = typer.Option(False, "--ascii", help="Write ASCII instead of binary."),
) -> None:
    """
    Sample the model's outlines and save them as a PyVista polyline dataset.
    """

    scene = _run_model(_require_model(model))

    final_output = output
    if output.exists() and not overwrite:
        final_output = _next_available_path(output)
        console.print(f"[yellow]Output {output} exists; writing to {final_output} instead.[/yellow]")

    previewer = PathPreviewer(console=console)
    _log_active_units(previewer)
    try:
        poly = previewer.build_polydata(scene)
        final_output.parent.mkdir(parents=True, exist_ok=True)
        previewer.save(poly, final_output, binary=not ascii)
    except (PreviewBackendError, ValidationError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    mode = "ASCII" if ascii else "binary"
    units_note = f"Units: {previewer.unit_name} ({previewer.unit_label})."
    console.print(
        Panel(
            f"Wrote {mode} outlines ({poly.n_lines} line(s)) to [green]{final_output}[/green]. {units_note}",
            title="Export complete",
            border_style="green",
        )
    )
