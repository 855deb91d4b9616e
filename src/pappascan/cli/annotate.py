"""pappascan annotate — render the live overlay onto an image."""

from __future__ import annotations

from pathlib import Path

import click

from pappascan.cli.utils import console, error_handler


@click.command()
@click.argument("image", type=click.Path(dir_okay=False))
@click.argument("output", type=click.Path(dir_okay=False))
@click.option(
    "-d", "--diameter", type=float, default=15.0, show_default=True,
    help="Declared physical disc diameter in centimetres.",
)
@click.option(
    "--clock", type=float, default=0.5, show_default=True,
    help="Animation time in seconds (positions the scan band).",
)
@click.option("--overwrite", is_flag=True, help="Overwrite OUTPUT if it exists.")
@error_handler
def annotate(image: str, output: str, diameter: float, clock: float, overwrite: bool) -> None:
    """Draw detections and the scan band from IMAGE into OUTPUT."""
    from pappascan.core.models import CalibrationContext
    from pappascan.io import read_frame, write_image
    from pappascan.overlay import OverlayRenderer, rasterize
    from pappascan.pipeline import AnalysisPipeline

    out_path = Path(output).expanduser()
    if out_path.exists() and not overwrite:
        console.print(
            f"[red]Error:[/red] Output file exists: {out_path}\n"
            "Use --overwrite to replace it."
        )
        raise SystemExit(1)
    if not out_path.parent.exists():
        console.print(f"[red]Error:[/red] Parent directory does not exist: {out_path.parent}")
        raise SystemExit(1)

    frame = read_frame(image)
    result = AnalysisPipeline().analyze(frame, CalibrationContext(declared_diameter_cm=diameter))

    renderer = OverlayRenderer()
    renderer.start_live()
    try:
        commands = renderer.advance(clock, result.detections, result.width, result.height)
    finally:
        renderer.stop_live()

    write_image(out_path, rasterize(commands, frame.pixels))
    console.print(
        f"[green]Annotated {result.stats.count} bubbles[/green] -> {out_path}"
    )
