#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import matplotlib.image as mpimg
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure

from .BubbleOverlayChart import BubbleOverlayChart
from .ColorManager import ColorManager
from .errors import BubbleOverlayError
from .logging_config import setup_logging
from .utils import load_data_from_stdin
from .utils import load_points_file

APP_NAME = "bubbleoverlay"

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _collect_points(
    point: tuple[tuple[str, float, float], ...],
    points_file: None | Path,
) -> list[dict]:
    points = [{"name": name, "x": x, "y": y} for name, x, y in point]
    if points_file is not None:
        points.extend(load_points_file(points_file))
    return points


def _overlay_options(f):
    options = [
        click.option(
            "--point",
            "point",
            type=(str, float, float),
            multiple=True,
            help="Anchor point NAME X Y (repeatable)",
        ),
        click.option(
            "--points-file",
            type=click.Path(exists=True, dir_okay=False, path_type=Path),
            help="JSON file with a list of {name, x, y} or a name -> [x, y] mapping",
        ),
        click.option("--min-r", type=float, help="Minimum bubble radius (pixels)"),
        click.option("--max-r", type=float, help="Maximum bubble radius (pixels)"),
        click.option(
            "--colormap",
            type=str,
            default="tab20c",
            show_default=True,
            help="Matplotlib colormap for bubble fill",
        ),
        click.option("--debug", is_flag=True, help="Show the pointer position readout"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


@click.group(context_settings=CONTEXT_SETTINGS, no_args_is_help=True)
@click.option("--verbose", is_flag=True, help="Enable debug logging")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    help="Also write log output to this file",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    log_file: None | str,
) -> None:
    setup_logging(
        level=logging.DEBUG if verbose else logging.INFO,
        log_file=log_file,
    )
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@cli.command("render")
@click.argument(
    "image",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@_overlay_options
@click.option(
    "--out",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Output image path",
)
@click.option("--dpi", type=int, default=100, show_default=True)
@click.pass_context
def render(
    ctx: click.Context,
    image: Path,
    point: tuple[tuple[str, float, float], ...],
    points_file: None | Path,
    min_r: None | float,
    max_r: None | float,
    colormap: str,
    debug: bool,
    out: Path,
    dpi: int,
) -> None:
    """
    Render bubbles over IMAGE: reads (key, value) rows from stdin via messagepack.
    """
    points = _collect_points(point, points_file)
    if not points:
        print("[ERROR] No points given. Use --point or --points-file.")
        sys.exit(1)

    print("[INFO] Reading (key, value) rows from stdin...")
    data = load_data_from_stdin()
    print(f"[INFO] Loaded {len(data):,} row(s), {len(points):,} point(s)")

    image_arr = mpimg.imread(str(image))
    img_h, img_w = int(image_arr.shape[0]), int(image_arr.shape[1])

    fig = Figure(
        figsize=(img_w / dpi, img_h / dpi),
        dpi=dpi,
        frameon=False,
    )
    FigureCanvasAgg(fig)
    ax = fig.add_axes([0.0, 0.0, 1.0, 1.0])
    ax.imshow(image_arr)
    ax.set_axis_off()

    try:
        chart = (
            BubbleOverlayChart(ax)
            .set_data(data)
            .set_colors(ColorManager(colormap=colormap))
            .set_min_bubble_r(min_r)
            .set_max_bubble_r(max_r)
            .set_transition_duration(0)
            .add_points(points)
            .render()
        )
        if debug:
            chart.debug(True)
    except BubbleOverlayError as exc:
        print(f"[ERROR] {exc}")
        sys.exit(1)

    chart.transitions.flush()
    fig.savefig(str(out), dpi=dpi)
    print(f"[INFO] Radius range: {chart.radius_range}")
    print(f"[INFO] Wrote {out}")


@cli.command("show")
@click.argument(
    "image",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@_overlay_options
@click.option(
    "--transition-ms",
    type=float,
    default=750,
    show_default=True,
    help="Bubble transition duration",
)
@click.pass_context
def show(
    ctx: click.Context,
    image: Path,
    point: tuple[tuple[str, float, float], ...],
    points_file: None | Path,
    min_r: None | float,
    max_r: None | float,
    colormap: str,
    debug: bool,
    transition_ms: float,
) -> None:
    """
    Interactive overlay viewer: reads (key, value) rows from stdin via messagepack.
    """
    from PyQt6.QtWidgets import QApplication  # pylint: disable=E0611

    from .BubbleOverlayViewer import BubbleOverlayViewer
    from .BubbleOverlayViewer import enable_dark_mode

    points = _collect_points(point, points_file)
    if not points:
        print("[ERROR] No points given. Use --point or --points-file.")
        sys.exit(1)

    print("[INFO] Reading (key, value) rows from stdin...")
    data = load_data_from_stdin()

    app_qt = QApplication(sys.argv)
    enable_dark_mode(app_qt)
    try:
        viewer = BubbleOverlayViewer(
            mpimg.imread(str(image)),
            points=points,
            data=data,
            min_bubble_r=min_r,
            max_bubble_r=max_r,
            colormap=colormap,
            transition_duration=transition_ms,
            debug=debug,
            title=f"{APP_NAME}: {image.name}",
        )
    except BubbleOverlayError as exc:
        print(f"[ERROR] {exc}")
        sys.exit(1)
    viewer.show_gui()
