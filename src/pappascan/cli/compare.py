"""pappascan compare — rank two images by bubble count."""

from __future__ import annotations

import click

from pappascan.cli.utils import console, error_handler

_MESSAGES = {
    "left": "Left image wins the bubble challenge!",
    "right": "Right image wins the bubble challenge!",
    "tie": "It's a crunchy tie!",
}


@click.command()
@click.argument("left", type=click.Path(dir_okay=False))
@click.argument("right", type=click.Path(dir_okay=False))
@error_handler
def compare(left: str, right: str) -> None:
    """Compare the bubble scores of LEFT and RIGHT."""
    from pappascan.io import read_frame
    from pappascan.measure.comparator import Comparator

    result = Comparator().compare(read_frame(left), read_frame(right))

    console.print(f"  Left:  {result.left.count} bubbles (score {result.left.metric:.2f})")
    console.print(f"  Right: {result.right.count} bubbles (score {result.right.metric:.2f})")
    console.print()
    console.print(f"[bold green]{_MESSAGES[result.winner.value]}[/bold green]")
