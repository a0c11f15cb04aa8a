"""
mathtone - digit strings to music
Main entry point
"""
import json
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import click

from audio.renderer import AudioRenderer, RenderSettings
from core import number_converter
from core.constants import NAMED_CONSTANTS
from core.exceptions import MathToneError
from core.models import NumberFormat, Sequence
from core.settings import load_settings
from core.timbre_profiles import TIMBRE_PROFILES, available_profiles, get_profile
from outputs.wav_file import WavFileOutput
from processors.registry import select_processor
from processors.timbre import expand_all

BASE_CHOICES = [str(fmt.base) for fmt in NumberFormat]


def _format(base: str) -> NumberFormat:
    return NumberFormat.from_base(int(base))


def _build_sequences(digits: str,
                     input_format: NumberFormat,
                     output_format: NumberFormat,
                     reach: bool,
                     chords: bool,
                     timbre: Optional[Tuple[float, ...]],
                     base_frequency: float,
                     base_duration_ms: float) -> List[Sequence]:
    """Run the processing pipeline for one output base."""
    processor = select_processor(
        digits,
        reach=reach,
        merge_chords=chords,
        base_frequency=base_frequency,
        base_duration_ms=base_duration_ms,
    )
    sequences = processor.process(digits, output_format, input_format)
    if timbre:
        sequences = expand_all(sequences, timbre)
    return sequences


def _resolve_timbre(name: Optional[str]) -> Optional[Tuple[float, ...]]:
    if name is None:
        return None
    coefficients = get_profile(name)
    if coefficients is None:
        raise click.BadParameter(
            f"Unknown timbre '{name}'. Available: {', '.join(available_profiles())}",
            param_hint="--timbre",
        )
    return coefficients


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """mathtone - turn digit strings into music

    Use 'mathtone COMMAND --help' for more information on a command.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[%(levelname)s] %(name)s: %(message)s",
    )


@cli.command("render")
@click.argument("digits")
@click.option("--from", "from_base", type=click.Choice(BASE_CHOICES), default=None,
              help="Base of the input digits (default from settings)")
@click.option("--to", "to_bases", type=click.Choice(BASE_CHOICES), multiple=True,
              help="Base whose digits become tones; repeat for several files")
@click.option("--reach", is_flag=True, help="One sustained track per octave group")
@click.option("--chords", is_flag=True, help="Merge '+' separated tracks into chords")
@click.option("--timbre", default=None, help="Named timbre profile (see 'mathtone timbres')")
@click.option("--base-frequency", type=float, default=None, help="Frequency of digit value 1 in Hz")
@click.option("--base-duration", type=float, default=None, help="Duration of one digit in ms")
@click.option("--output-dir", type=click.Path(file_okay=False), default=None,
              help="Directory for the WAV files")
@click.option("--settings", "settings_path", type=click.Path(dir_okay=False), default=None,
              help="Settings file (default ~/.mathtone/settings.json)")
def render(digits: str,
           from_base: Optional[str],
           to_bases: Tuple[str, ...],
           reach: bool,
           chords: bool,
           timbre: Optional[str],
           base_frequency: Optional[float],
           base_duration: Optional[float],
           output_dir: Optional[str],
           settings_path: Optional[str]) -> None:
    """Render DIGITS (or a named constant such as PI) to WAV files."""
    settings = load_settings(Path(settings_path) if settings_path else None)
    sound = settings["sound"]

    coefficients = _resolve_timbre(timbre)
    input_base = int(from_base) if from_base else sound["input_base"]
    output_bases = [int(b) for b in to_bases] or list(sound["output_bases"])
    reach = reach or bool(sound["reach"])

    try:
        input_format = NumberFormat.from_base(input_base)
        output_formats = [NumberFormat.from_base(b) for b in output_bases]
        renderer = AudioRenderer(RenderSettings.from_dict(settings["render"]))
        output = WavFileOutput(output_dir or settings["output"]["results_dir"], renderer)

        for output_format in output_formats:
            sequences = _build_sequences(
                digits, input_format, output_format, reach, chords, coefficients,
                base_frequency or sound["base_frequency"],
                base_duration or sound["base_duration_ms"],
            )
            if all(seq.is_empty for seq in sequences):
                click.echo(f"[RENDER] Base {output_format.base}: no digits to play, skipped")
                continue

            longest = max(seq.total_duration_seconds for seq in sequences)
            click.echo(f"[RENDER] Base {output_format.base}: "
                       f"{len(sequences)} sequence(s), {longest:.2f}s")
            path = output.send_and_get_path(sequences)
            click.echo(f"[SAVE] {path}")
    except (MathToneError, ValueError) as e:
        raise click.ClickException(str(e))
    except OSError as e:
        raise click.ClickException(f"Failed to write WAV file: {e}")


@cli.command("convert")
@click.argument("digits")
@click.option("--from", "from_base", type=click.Choice(BASE_CHOICES), required=True,
              help="Base of the input digits")
@click.option("--to", "to_base", type=click.Choice(BASE_CHOICES), required=True,
              help="Target base")
def convert(digits: str, from_base: str, to_base: str) -> None:
    """Convert DIGITS between bases."""
    from_format = _format(from_base)
    try:
        number_converter.validate(digits, from_format)
        click.echo(number_converter.convert(digits, from_format, _format(to_base)))
    except MathToneError as e:
        raise click.ClickException(str(e))


@cli.command("sequences")
@click.argument("digits")
@click.option("--from", "from_base", type=click.Choice(BASE_CHOICES), default="10",
              help="Base of the input digits")
@click.option("--to", "to_base", type=click.Choice(BASE_CHOICES), default="10",
              help="Base whose digits become tones")
@click.option("--reach", is_flag=True, help="One sustained track per octave group")
@click.option("--chords", is_flag=True, help="Merge '+' separated tracks into chords")
@click.option("--timbre", default=None, help="Named timbre profile")
@click.option("--base-frequency", type=float, default=180.0, help="Frequency of digit value 1 in Hz")
@click.option("--base-duration", type=float, default=300.0, help="Duration of one digit in ms")
def sequences(digits: str,
              from_base: str,
              to_base: str,
              reach: bool,
              chords: bool,
              timbre: Optional[str],
              base_frequency: float,
              base_duration: float) -> None:
    """Print the tone sequences for DIGITS as JSON."""
    coefficients = _resolve_timbre(timbre)
    try:
        result = _build_sequences(
            digits, _format(from_base), _format(to_base), reach, chords, coefficients,
            base_frequency, base_duration,
        )
    except (MathToneError, ValueError) as e:
        raise click.ClickException(str(e))
    click.echo(json.dumps([seq.to_dict() for seq in result], indent=2))


@cli.command("timbres")
def timbres() -> None:
    """List the built-in timbre profiles."""
    for name in available_profiles():
        coefficients = ", ".join(f"{c:g}" for c in TIMBRE_PROFILES[name])
        click.echo(f"{name:<12} [{coefficients}]")


@cli.command("constants")
def constants() -> None:
    """List the named constants accepted as input."""
    for name, digits in NAMED_CONSTANTS.items():
        click.echo(f"{name:<6} {digits[:20]}... ({len(digits)} digits)")


if __name__ == "__main__":
    cli()
