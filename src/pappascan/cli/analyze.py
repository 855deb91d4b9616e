"""pappascan analyze — detect bubbles and report crunch statistics."""

from __future__ import annotations

import json
from collections import Counter

import click
from rich.table import Table

from pappascan.cli.utils import RATING_STYLES, console, error_handler


@click.command()
@click.argument("image", type=click.Path(dir_okay=False))
@click.option(
    "-d", "--diameter", type=float, default=15.0, show_default=True,
    help="Declared physical disc diameter in centimetres.",
)
@click.option("--json", "as_json", is_flag=True, help="Print the result as JSON.")
@click.option("--commentary", is_flag=True, help="Add playful commentary to the report.")
@error_handler
def analyze(image: str, diameter: float, as_json: bool, commentary: bool) -> None:
    """Detect bubbles in IMAGE and report crunch statistics."""
    from pappascan.core.models import CalibrationContext, SizeClass
    from pappascan.io import read_frame
    from pappascan.measure.commentary import SeededCommentary, oil_estimate_ml
    from pappascan.pipeline import AnalysisPipeline

    frame = read_frame(image)
    result = AnalysisPipeline().analyze(frame, CalibrationContext(declared_diameter_cm=diameter))
    stats = result.stats
    classes = Counter(d.size_class for d in result.detections)

    notes = None
    if commentary:
        notes = SeededCommentary().describe(stats.count, stats.avg_diameter_px)

    if as_json:
        payload = {
            "image": image,
            "width": result.width,
            "height": result.height,
            "declared_diameter_cm": diameter,
            "stats": stats.to_dict(),
            "size_classes": {sc.value: classes.get(sc, 0) for sc in SizeClass},
            "warnings": result.warnings,
        }
        if notes is not None:
            payload["commentary"] = {
                "personality": notes.personality,
                "horoscope": notes.horoscope,
                "oil_ml": oil_estimate_ml(stats.avg_diameter_cm, stats.count),
            }
        click.echo(json.dumps(payload, indent=2))
        return

    table = Table(title=f"Crunch report — {image}", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")
    table.add_row("Frame", f"{result.width} x {result.height} px")
    table.add_row("Bubbles", str(stats.count))
    for sc in SizeClass:
        table.add_row(f"  {sc.value}", str(classes.get(sc, 0)))
    table.add_row("Avg diameter", f"{stats.avg_diameter_px:.1f} px / {stats.avg_diameter_cm:.2f} cm")
    table.add_row("Density", f"{stats.density_per_cm2:.4f} /cm²")
    table.add_row("Crunch index", f"{stats.index_metric:.3f}")
    rating = stats.quality_rating.value
    table.add_row("Rating", f"[{RATING_STYLES[rating]}]{rating}[/]")
    console.print(table)

    if notes is not None:
        console.print(f"  Personality: {notes.personality}")
        console.print(f"  Horoscope: {notes.horoscope}")
        console.print(f"  Oil estimate: {oil_estimate_ml(stats.avg_diameter_cm, stats.count)} ml")

    for w in result.warnings:
        console.print(f"  [yellow]Warning:[/yellow] [dim]{w}[/dim]")
