"""Command-line interface for flom."""

import logging
import sys
from pathlib import Path
from typing import List, Optional, Tuple

import click
import yaml

from . import __version__
from .batch import parse_lines, process_url, run_batch
from .config import (
    EXAMPLE_CONFIG,
    Config,
    default_config_path,
    resolve_default_target,
    resolve_odesli_key,
    resolve_simple_output,
    resolve_user_country,
)
from .converter import MusicConverter, targets_from_response
from .errors import FlomError, InvalidInput
from .odesli import OdesliClient, OdesliResponse
from .output import print_result, print_result_json, print_summary
from .shorten import ShortenClient
from .targets import TargetSelection, parse_target

CONFIG_KEYS = ["api.odesli_key", "default.target", "default.user_country", "output.simple"]


class DefaultGroup(click.Group):
    """Click group that defaults to a specified command when no command is given."""

    def __init__(self, *args, **kwargs):
        self.default_command = kwargs.pop("default_command", None)
        super().__init__(*args, **kwargs)

    def parse_args(self, ctx, args):
        # Anything that is not a subcommand or a group-level flag
        # (URLs, --to, --simple, ...) belongs to the default command,
        # including no arguments at all (URLs may be piped on stdin)
        if self.default_command is not None and (
            not args
            or (args[0] not in self.commands and args[0] not in ("--help", "-h", "--version"))
        ):
            args.insert(0, self.default_command)

        return super().parse_args(ctx, args)


def is_interactive() -> bool:
    """Check whether we can prompt the user."""
    return sys.stdin.isatty()


def load_config() -> Config:
    """Load config or exit with an error."""
    try:
        return Config()
    except FlomError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)


def gather_inputs(urls: Tuple[str, ...], input_file: Optional[str]) -> List[str]:
    """Collect URLs from arguments, an input file and piped stdin."""
    collected = list(urls)

    if input_file:
        try:
            content = Path(input_file).read_text()
        except OSError as e:
            raise InvalidInput(f"failed to read input file: {e}") from e
        collected.extend(parse_lines(content))

    if not collected and not is_interactive():
        collected.extend(parse_lines(sys.stdin.read()))

    return collected


def resolve_or_prompt_odesli_key(config: Config) -> Optional[str]:
    """Get the Odesli key from env/config, or ask for it once."""
    key = resolve_odesli_key(config)
    if key:
        return key

    if not is_interactive():
        return None

    entered = click.prompt(
        "Odesli API key (optional, press Enter to skip)",
        default="",
        show_default=False,
    ).strip()
    if not entered:
        return None

    if click.confirm(f"Save API key to {config.config_path}?", default=True):
        config.set("api.odesli_key", entered)
        try:
            config.save()
        except FlomError as e:
            click.echo(f"⚠️  Warning: {e}", err=True)

    return entered


def prompt_target(response: OdesliResponse) -> TargetSelection:
    """Ask the user to pick a target from the platforms in response."""
    if not is_interactive():
        raise InvalidInput("no target given; use --to or set default.target")

    options = sorted(targets_from_response(response), key=lambda option: option.label.lower())
    labels = [option.label for option in options]
    labels.append("All available")
    labels.append("Songlink page")

    click.echo("Select target platform:")
    for index, label in enumerate(labels, start=1):
        click.echo(f"  {index}. {label}")

    choice = click.prompt("Target", type=click.IntRange(1, len(labels)), default=1)

    if choice == len(labels) - 1:
        return TargetSelection.all()
    if choice == len(labels):
        return TargetSelection.generic_page()
    return TargetSelection.specific(options[choice - 1].key)


def report_failure(url: str, error: FlomError):
    click.echo(f"{click.style('Failed', fg='red')} {url}: {error}", err=True)


@click.group(cls=DefaultGroup, default_command="convert")
@click.version_option(__version__)
def cli():
    """flom - convert music links between streaming platforms."""


@cli.command()
@click.argument("urls", nargs=-1)
@click.option("--to", "target", help="Target platform, 'all' or 'songlink'")
@click.option(
    "--input", "-i", "input_file", type=click.Path(), help="Read URLs from file (one per line)"
)
@click.option("--simple", "-s", is_flag=True, help="Print only target URLs")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON lines")
@click.option("--shorten", is_flag=True, help="Shorten URLs with is.gd instead of converting")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def convert(
    urls: Tuple[str, ...],
    target: Optional[str],
    input_file: Optional[str],
    simple: bool,
    as_json: bool,
    shorten: bool,
    verbose: bool,
):
    """Convert music links to other platforms.

    URLs can be given as arguments, with --input, or piped on stdin.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )

    try:
        inputs = gather_inputs(urls, input_file)
    except FlomError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    if not inputs:
        click.echo("❌ Error: no input URLs provided", err=True)
        sys.exit(1)

    if shorten:
        client = ShortenClient()

        def shorten_url(url: str) -> List[Tuple[str, str]]:
            return [(url, client.shorten(url))]

        summary = run_batch(
            inputs,
            shorten_url,
            lambda pair: click.echo(f"{pair[0]} -> {pair[1]}"),
            report_failure,
        )
        print_summary(summary.total, summary.success, summary.failed)
        if summary.failed:
            sys.exit(1)
        return

    config = load_config()
    try:
        api_key = resolve_or_prompt_odesli_key(config)
        user_country = resolve_user_country(config)
        simple = simple or bool(resolve_simple_output(config))
        default_target = resolve_default_target(config)
    except FlomError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    converter = MusicConverter(OdesliClient(api_key=api_key, user_country=user_country))

    def handle(url: str):
        return process_url(converter, url, target, default_target, prompt_target)

    def emit(result):
        if as_json:
            print_result_json(result)
        else:
            print_result(result, simple)

    summary = run_batch(inputs, handle, emit, report_failure)

    print_summary(summary.total, summary.success, summary.failed, err=simple or as_json)

    if summary.failed:
        sys.exit(1)


@cli.command()
def init():
    """Create a starter configuration file."""
    config_path = default_config_path()

    if config_path.exists():
        click.echo(f"✅ Config already exists: {config_path}")
        click.echo()
        click.echo("To reconfigure, either:")
        click.echo(f"  1. Edit: {config_path}")
        click.echo("  2. Run: flom config set <key> <value>")
        return

    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(EXAMPLE_CONFIG)

    click.echo(f"✅ Created config: {config_path}")
    click.echo()
    click.echo("📝 Environment variables override the file:")
    click.echo("     FLOM_ODESLI_KEY, FLOM_DEFAULT_TARGET, FLOM_USER_COUNTRY, FLOM_OUTPUT_SIMPLE")
    click.echo()
    click.echo("✅ Ready! Try: flom https://open.spotify.com/track/<id> --to apple-music")


@cli.group("config")
def config_group():
    """View or edit the configuration file."""


@config_group.command("show")
def config_show():
    """Print the configuration file contents."""
    config = load_config()
    click.echo(f"# {config.config_path}")
    if config.config:
        click.echo(yaml.safe_dump(config.config, default_flow_style=False, sort_keys=True).rstrip())


@config_group.command("set")
@click.argument("key", type=click.Choice(CONFIG_KEYS))
@click.argument("value")
def config_set(key: str, value: str):
    """Set a configuration value and save it."""
    config = load_config()

    if key == "output.simple":
        parsed = value.strip().lower() in ("1", "true", "yes")
    elif key == "default.target":
        try:
            parse_target(value)
        except FlomError as e:
            click.echo(f"❌ Error: {e}", err=True)
            sys.exit(1)
        parsed = value.strip()
    elif key == "default.user_country":
        parsed = value.strip().upper()
    else:
        parsed = value.strip()

    config.set(key, parsed)
    try:
        config.save()
    except FlomError as e:
        click.echo(f"❌ Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"✅ Set {key} in {config.config_path}")


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
