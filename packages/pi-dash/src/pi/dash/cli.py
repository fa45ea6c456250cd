"""CLI entry point for pi-dash. Uses Click for argument parsing."""

from __future__ import annotations

import logging
import re
import sys

import click

from pi.dash.app import App
from pi.dash.config import LOG_LEVELS, DashConfig, load_config
from pi.dash.data import DataProvider, JsonDataProvider, StaticDataProvider
from pi.dash.errors import DashError

logger = logging.getLogger(__name__)

_SIZE_RE = re.compile(r"^(\d+)x(\d+)$")


def _parse_size(ctx, param, value):
    if value is None:
        return None
    match = _SIZE_RE.match(value.lower())
    if not match or int(match.group(1)) == 0 or int(match.group(2)) == 0:
        raise click.BadParameter("expected WIDTHxHEIGHT, e.g. 120x40")
    return int(match.group(1)), int(match.group(2))


def setup_logging(config: DashConfig) -> None:
    """Log to the configured file; the screen belongs to the dashboard."""
    if config.log_file:
        logging.basicConfig(
            filename=config.log_file,
            level=getattr(logging, config.log_level.upper()),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )
    else:
        logging.getLogger("pi.dash").addHandler(logging.NullHandler())


def build_app(config: DashConfig) -> App:
    provider: DataProvider
    if config.data_file:
        provider = JsonDataProvider(config.data_file)
    else:
        provider = StaticDataProvider()
    return App(
        provider,
        title=config.title,
        margin=config.margin,
        marker=config.marker_kind,
        map_resolution=config.resolution,
    )


@click.command()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Settings file (default: $PI_CONFIG_DIR/dash.json)")
@click.option("--data", "data_file", type=click.Path(dir_okay=False), default=None,
              help="JSON file with tasks, logs and servers")
@click.option("--margin", type=click.IntRange(min=0), default=None, help="Outer margin in cells")
@click.option("--marker", type=click.Choice(["braille", "dot", "block"]), default=None,
              help="Canvas marker")
@click.option("--map-resolution", type=click.Choice(["low", "high"]), default=None,
              help="World map detail")
@click.option("--title", default=None, help="Title of the tab bar")
@click.option("--log-file", type=click.Path(dir_okay=False), default=None, help="Write logs to this file")
@click.option("--log-level", type=click.Choice(list(LOG_LEVELS)), default=None, help="Log level")
@click.option("--snapshot", callback=_parse_size, default=None, metavar="WxH",
              help="Print one frame as plain text and exit")
def main(config_path, data_file, margin, marker, map_resolution, title, log_file, log_level, snapshot):
    """Terminal dashboard: tasks, logs and a server map.

    Left/Right switch tabs, Up/Down move the task selection, q quits.
    """
    config = load_config(
        config_path,
        overrides={
            "data_file": data_file,
            "margin": margin,
            "marker": marker,
            "map_resolution": map_resolution,
            "title": title,
            "log_file": log_file,
            "log_level": log_level,
        },
    )
    setup_logging(config)
    logger.debug("Effective config: %s", config)

    try:
        app = build_app(config)
        if snapshot is not None:
            from pi.dash.driver import render_buffer

            width, height = snapshot
            for line in render_buffer(app, width, height).plain_lines():
                click.echo(line.rstrip())
            return

        from pi.dash.driver import Dashboard
        from pi.dash.terminal import ProcessTerminal

        Dashboard(ProcessTerminal(), app).run()
    except DashError as e:
        logger.error("%s", e)
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
