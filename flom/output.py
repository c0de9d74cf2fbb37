"""Terminal output for conversion results."""

import json

import click

from .result import ConversionResult


def format_source_line(result: ConversionResult) -> str:
    """Describe the source as "<platform> - <title> / <artist>"."""
    platform = result.source_platform or "Unknown"
    if result.source_info:
        title = result.source_info.title or "Unknown title"
        artist = result.source_info.artist or "Unknown artist"
        return f"{platform} - {title} / {artist}"
    return platform


def print_result(result: ConversionResult, simple: bool = False):
    """Print one conversion result.

    Args:
        result: Result to print
        simple: Print only the target URL
    """
    if simple:
        if result.target_url:
            click.echo(result.target_url)
        return

    click.echo(f"{click.style('From:', fg='cyan')} {format_source_line(result)}")
    click.echo(f"  {click.style('URL:', dim=True)} {result.source_url}")

    if result.target_url:
        click.echo(f"{click.style('To:', fg='green')} {result.target_url}")
    else:
        click.echo(f"{click.style('To:', fg='red')} (no target url)")

    if result.warning:
        click.echo(f"{click.style('Warning:', fg='yellow')} {result.warning}")

    click.echo()


def print_result_json(result: ConversionResult):
    """Print one conversion result as a JSON line."""
    click.echo(json.dumps(result.to_dict(), ensure_ascii=False))


def print_summary(total: int, success: int, failed: int, err: bool = False):
    """Print batch totals.

    Args:
        err: Write to stderr so stdout stays machine-readable
    """
    click.echo(
        f"{click.style('Summary:', bold=True)} "
        f"Total: {total} | Success: {success} | Failed: {failed}",
        err=err,
    )
