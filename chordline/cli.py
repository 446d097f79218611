"""Command-line interface for chordline.

Provides commands for:
- estimate: Chord progression from a segment analysis (and tonal features)
- info: Show what an analysis file contains
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

app = typer.Typer(
    name="chordline",
    help="Chord progression timelines from pitch-class segment analysis",
    rich_markup_mode="markdown",
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load(loader, analysis_file: Path, features_file: Optional[Path]):
    """Load inputs, turning I/O errors into a clean exit."""
    try:
        return loader.load(str(analysis_file), str(features_file) if features_file else None)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def estimate(
    analysis_file: Path = typer.Argument(..., help="Audio analysis JSON (segments and bars)"),
    features: Optional[Path] = typer.Option(
        None, "-f", "--features", help="Audio features JSON (key, mode, tempo, time signature)"
    ),
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Write the progression as a JSON report"
    ),
    midi: Optional[Path] = typer.Option(
        None, "--midi", help="Write the timeline as block chords to a MIDI file"
    ),
    use_bars: bool = typer.Option(
        True, "--bars/--no-bars", help="Align chords to bars when the analysis has them"
    ),
    json_output: bool = typer.Option(
        False, "--json", help="Output results as JSON (for scripting)"
    ),
    verbose: bool = typer.Option(
        False, "-v", "--verbose", help="Verbose output"
    ),
):
    """Estimate the chord progression of a track.

    **Examples:**

        chordline estimate analysis.json -f features.json

        chordline estimate analysis.json --midi chords.mid --no-bars
    """
    from .input import AnalysisLoader
    from .estimator import ChordEstimator, EstimatorConfig
    from .output import JSONExporter, MIDIExporter

    _setup_logging(verbose)

    analysis, tonal = _load(AnalysisLoader(), analysis_file, features)

    estimator = ChordEstimator(EstimatorConfig(use_bars=use_bars))
    progression = estimator.estimate(analysis, tonal)

    exporter = JSONExporter()
    if output is not None:
        exporter.export(progression, str(output))
    if midi is not None:
        MIDIExporter().export(progression, str(midi))

    if json_output:
        typer.echo(exporter.to_json(progression))
        return

    console.print(f"\n[bold blue]Chord Estimation: {analysis_file.name}[/bold blue]\n")
    console.print(f"   Segments: {len(analysis.segments)}, bars: {len(analysis.bars)}")
    if progression.key_label:
        console.print(f"   [green]Key: {progression.key_label}[/green]")
    if progression.tempo_bpm is not None:
        console.print(f"   Tempo: {progression.tempo_bpm:.1f} BPM")
    if progression.time_signature is not None:
        console.print(f"   Time signature: {progression.time_signature}/4")

    if progression.timeline:
        _show_timeline_table(progression)

    console.print(f"\n   [green]Progression: {progression.compact_progression}[/green]")

    if output is not None:
        console.print(f"   [dim]Report saved to {output}[/dim]")
    if midi is not None:
        console.print(f"   [dim]MIDI saved to {midi}[/dim]")


@app.command()
def info(
    analysis_file: Path = typer.Argument(..., help="Audio analysis JSON"),
):
    """Show information about an analysis file."""
    from .input import AnalysisLoader

    analysis, _ = _load(AnalysisLoader(), analysis_file, None)

    console.print(f"\n[bold]Analysis Info:[/bold] {analysis_file.name}")
    console.print(f"  Segments: {len(analysis.segments):,}")
    console.print(f"  Bars: {len(analysis.bars):,}")
    console.print(f"  Duration: {analysis.duration:.2f} seconds")
    silent = sum(1 for s in analysis.segments if not any(s.pitches))
    if silent:
        console.print(f"  Silent segments: {silent:,}")


def _show_timeline_table(progression):
    """Display the chord timeline in a table."""
    table = Table(title="Chord Timeline")
    table.add_column("Chord", style="cyan")
    table.add_column("Start (s)", style="green")
    table.add_column("End (s)", style="yellow")

    for entry in progression.timeline:
        table.add_row(entry.label, f"{entry.start:.2f}", f"{entry.end:.2f}")

    console.print(table)


def main():
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
