# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from workflowgen.errors import InvalidKeyError, SettingsError, WorkflowDriftError
from workflowgen.generator import check, generate, render
from workflowgen.settings import DEFAULT_SETTINGS_FILE, GeneratorSettings, generated_jobs, load_settings
from workflowgen.ui.console import Console, get_console, set_console


def discover_settings(settings_arg: str | None) -> Path | None:
    """
    Discover the settings file from argument or default.

    Args:
        settings_arg: Optional --settings argument from CLI

    Returns:
        Path to the settings file, or None to use the built-in defaults

    Raises:
        SystemExit: If an explicitly given settings file cannot be found
    """
    console = get_console()

    if settings_arg:
        settings_path = Path(settings_arg)
        if not settings_path.exists() and settings_path.suffix != ".py":
            settings_path = Path(str(settings_path) + ".py")
        if not settings_path.exists():
            console.print_error(
                "Settings file not found",
                f"Could not find settings file: {settings_arg}",
                suggestion=f"Create a settings file or specify a different path:\n  workflowgen generate --settings {DEFAULT_SETTINGS_FILE}",
            )
            sys.exit(1)
        return settings_path

    default_settings = Path(".") / DEFAULT_SETTINGS_FILE
    if default_settings.exists():
        return default_settings

    console.print_debug(f"No {DEFAULT_SETTINGS_FILE} found, using default settings")
    return None


def _load(settings_arg: str | None, debug: bool) -> GeneratorSettings:
    console = get_console()
    settings_path = discover_settings(settings_arg)

    try:
        settings = load_settings(settings_path)
    except SettingsError as e:
        console.print_error(
            "Invalid settings file",
            e.message,
            details=e.details,
            suggestion="Define settings() -> GeneratorSettings or SETTINGS = GeneratorSettings(...)",
        )
        sys.exit(1)
    except Exception as e:
        console.print_error(
            "Failed to load settings",
            f"Could not load settings from {settings_path}",
            details={"reason": e},
        )
        if debug:
            import traceback
            traceback.print_exc()
        sys.exit(1)

    if settings_path is not None:
        console.print_debug(f"Loaded settings from {settings_path}")
    return settings


def _report_invalid_key(e: InvalidKeyError) -> None:
    get_console().print_error(
        "Invalid workflow model",
        e.message,
        details={"mapping": e.details["mapping"]},
        suggestion="Keys of env and action parameters must be bare names without spaces, ':' or '#'.",
    )


settings_option = click.option(
    "--settings",
    default=None,
    help=f"Settings file path (defaults to {DEFAULT_SETTINGS_FILE} if present)",
)
base_dir_option = click.option(
    "--base-dir",
    default=".",
    show_default=True,
    type=click.Path(file_okay=False),
    help="Repository root the .github/workflows directory lives under",
)


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """workflowgen — generate GitHub Actions CI workflows from typed jobs and steps."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command(name="generate")
@settings_option
@base_dir_option
@click.pass_context
def generate_cmd(ctx, settings, base_dir):
    """Write .github/workflows/ci.yml."""
    console = get_console()
    debug = ctx.obj.get("debug", False)
    loaded = _load(settings, debug)

    try:
        path = generate(loaded, base_dir)
    except InvalidKeyError as e:
        _report_invalid_key(e)
        sys.exit(1)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    console.print_generated(path, [j.id for j in generated_jobs(loaded)])


@cli.command(name="check")
@settings_option
@base_dir_option
@click.pass_context
def check_cmd(ctx, settings, base_dir):
    """Verify .github/workflows/ci.yml is up to date."""
    console = get_console()
    debug = ctx.obj.get("debug", False)
    loaded = _load(settings, debug)

    try:
        path = check(loaded, base_dir)
    except WorkflowDriftError as e:
        console.print_drift(e.details["path"], e.diff)
        sys.exit(1)
    except InvalidKeyError as e:
        _report_invalid_key(e)
        sys.exit(1)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    console.print_up_to_date(path)


@cli.command(name="show")
@settings_option
@click.pass_context
def show_cmd(ctx, settings):
    """Print the generated workflow to stdout."""
    console = get_console()
    debug = ctx.obj.get("debug", False)
    loaded = _load(settings, debug)

    try:
        contents = render(loaded)
    except InvalidKeyError as e:
        _report_invalid_key(e)
        sys.exit(1)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)

    click.echo(contents, nl=False)


if __name__ == "__main__":
    cli()
