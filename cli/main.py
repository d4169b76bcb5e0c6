"""CLI for buildcfg."""

import asyncio
import json
from pathlib import Path

import click
import yaml
from dotenv import load_dotenv

from buildcfg import __version__
from buildcfg.config.exceptions import ConfigError
from buildcfg.plugins.exceptions import PluginError
from buildcfg.utils.logging import setup_logging
from buildcfg.utils.share import clear_screen, pad

dir_option = click.option(
    "--dir",
    "-d",
    "config_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory containing build.yaml (default: current directory)",
)
mode_option = click.option("--mode", "-m", default=None, help="Mode (development/production)")


def _fail(error: Exception):
    click.echo(f"Error: {error}", err=True)
    raise SystemExit(1)


@click.group()
@click.version_option(version=__version__, prog_name="buildcfg")
@click.option("--log-level", default="WARNING", help="Log level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--log-format", type=click.Choice(["standard", "json"]), default="standard")
def cli(log_level: str, log_format: str):
    """Build configuration tools - resolve config and run plugin hooks."""
    load_dotenv(Path.cwd() / ".env")
    setup_logging(level=log_level, format_style=log_format)


@cli.command()
@dir_option
@mode_option
@click.option("--format", "-f", "fmt", type=click.Choice(["yaml", "json"]), default="yaml")
@click.option("--clear", is_flag=True, help="Clear the screen first")
def config(config_dir: Path, mode: str, fmt: str, clear: bool):
    """Show the resolved configuration."""
    from buildcfg.config.loader import ConfigLoader

    try:
        cfg = ConfigLoader(config_dir=config_dir).load(mode=mode)
    except (ConfigError, PluginError) as e:
        _fail(e)

    if clear:
        clear_screen()

    if fmt == "json":
        click.echo(json.dumps(cfg, indent=2, default=str))
    else:
        click.echo(yaml.safe_dump(cfg, sort_keys=False, default_flow_style=False), nl=False)


@cli.command()
def plugins():
    """List available plugins."""
    from buildcfg.plugins.registry import PLUGINS

    click.echo(f"\n{'='*60}")
    click.echo("Available Plugins")
    click.echo(f"{'='*60}\n")

    for name in sorted(PLUGINS):
        click.echo(f"  • {name}")
        doc = (PLUGINS[name].__doc__ or "").strip().splitlines()
        if doc:
            click.echo(pad(doc[0], 4))

    click.echo("\nUsage: add a name under `plugins:` in build.yaml")


@cli.command()
@click.argument("hook_name")
@dir_option
@mode_option
def hook(hook_name: str, config_dir: Path, mode: str):
    """Call HOOK_NAME on every configured plugin and print the results."""
    from buildcfg.config.loader import ConfigLoader
    from buildcfg.config.merger import deep_merge
    from buildcfg.plugins import PluginDriver

    try:
        loader = ConfigLoader(config_dir=config_dir)
        cfg = loader.load(mode=mode)
        driver = PluginDriver(loader.load_plugins(cfg))
        # Hooks default to the config directory as their root
        hook_cfg = deep_merge({"compilation": {"root": str(loader.config_dir)}}, cfg)
        results = asyncio.run(driver.call(hook_name, hook_cfg))
    except (ConfigError, PluginError) as e:
        _fail(e)

    for result in results:
        click.echo(result if isinstance(result, str) else json.dumps(result, default=str))


def main():
    """Entry point."""
    cli()


if __name__ == "__main__":
    main()
