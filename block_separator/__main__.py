"""CLI entry point for the block separator."""

from __future__ import annotations

import logging
import sys
from typing import Any

import click

from block_separator.config import AppConfig, load_config
from block_separator.domain.enums import OutputFormat
from block_separator.domain.exceptions import DomainException
from block_separator.domain.services import BlockSeparationService
from block_separator.infrastructure.source.loader import SourceLoader
from block_separator.presentation.formatter import BlockFormatter

DEFAULT_SEPARATORS = " ,\n"


def _load_app_config(ctx: click.Context, overrides: dict[str, Any]) -> AppConfig:
    """Merge YAML, env vars and CLI overrides, then set up logging."""
    cli_overrides = {"server.verbose": ctx.obj.get("verbose"), **overrides}
    app_config = load_config(config_path=ctx.obj.get("config_path"), cli_overrides=cli_overrides)

    log_level = logging.DEBUG if app_config.server.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return app_config


def _create_service(app_config: AppConfig) -> BlockSeparationService:
    loader = SourceLoader(encoding=app_config.source.encoding)
    return BlockSeparationService(app_config.parser, loader)


def _fail(formatter: BlockFormatter, exc: Exception) -> None:
    click.echo(formatter.format_error(exc), err=True, nl=False)
    sys.exit(1)


@click.group()
@click.option(
    "--config", "-c",
    default=None,
    help="Path to YAML config file",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=None,
    help="Enable debug logging (overrides config/env)",
)
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: bool | None) -> None:
    """Split text into nested blocks delimited by matched marker pairs.

    Configuration priority: YAML config < env vars (BLOCKSEP_*) < CLI arguments.
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose


@cli.command("parse")
@click.argument("file", type=click.Path(dir_okay=False))
@click.option(
    "--delimiters", "-d",
    default=None,
    help="Space-separated open/close pairs, e.g. '{} ()' (overrides config/env)",
)
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice([f.value for f in OutputFormat]),
    default=None,
    help="Output format (overrides config/env)",
)
@click.option(
    "--strict/--lenient",
    default=None,
    help="Reject close markers that do not match the innermost open block",
)
@click.option(
    "--max-depth",
    type=int,
    default=None,
    help="Maximum nesting depth (overrides config/env)",
)
@click.option(
    "--encoding",
    default=None,
    help="Input file encoding (overrides config/env)",
)
@click.pass_context
def parse_command(
    ctx: click.Context,
    file: str,
    delimiters: str | None,
    output_format: str | None,
    strict: bool | None,
    max_depth: int | None,
    encoding: str | None,
) -> None:
    """Parse FILE into a block tree and print it."""
    app_config = _load_app_config(
        ctx,
        {
            "parser.delimiters": delimiters,
            "parser.strict": strict,
            "parser.max_depth": max_depth,
            "source.encoding": encoding,
            "output.format": output_format,
        },
    )
    formatter = BlockFormatter()

    resolved_format = OutputFormat.from_string(app_config.output.format)
    if resolved_format is None:
        _fail(formatter, ValueError(f"Unknown output format: '{app_config.output.format}'"))

    try:
        service = _create_service(app_config)
        block = service.separate_file(file)
    except DomainException as e:
        _fail(formatter, e)

    click.echo(formatter.format(block, resolved_format))


@cli.command("split")
@click.argument("file", type=click.Path(dir_okay=False))
@click.option(
    "--separators", "-s",
    default=DEFAULT_SEPARATORS,
    show_default=True,
    help="Characters to split on",
)
@click.option(
    "--encoding",
    default=None,
    help="Input file encoding (overrides config/env)",
)
@click.pass_context
def split_command(ctx: click.Context, file: str, separators: str, encoding: str | None) -> None:
    """Split FILE on single-character separators, ignoring nesting."""
    app_config = _load_app_config(ctx, {"source.encoding": encoding})
    formatter = BlockFormatter()

    try:
        pieces = _create_service(app_config).split_file(file, separators)
    except DomainException as e:
        _fail(formatter, e)

    click.echo(formatter.format_split(pieces))


@cli.command("serve")
@click.option(
    "--mode", "-m",
    type=click.Choice(["stdio", "sse", "streamable-http"]),
    default=None,
    help="Transport mode: stdio, sse, or streamable-http (overrides config/env)",
)
@click.option(
    "--port",
    type=int,
    default=None,
    help="Port for HTTP server (overrides config/env)",
)
@click.pass_context
def serve_command(ctx: click.Context, mode: str | None, port: int | None) -> None:
    """Run the MCP server exposing the block separation tools."""
    app_config = _load_app_config(ctx, {"server.mode": mode, "server.port": port})

    from block_separator.server import create_server

    try:
        server = create_server(app_config)
    except DomainException as e:
        _fail(BlockFormatter(), e)

    if app_config.server.mode == "stdio":
        server.run(transport="stdio")
    else:
        server.run(transport=app_config.server.mode, port=app_config.server.port)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
