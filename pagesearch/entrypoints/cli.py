"""pagesearch CLI entrypoint.

Command-line interface that drives a paginated search controller over a
text file, without a TUI.
"""

from __future__ import annotations

import asyncio
import functools
import json
import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

import click

if TYPE_CHECKING:
    from pagesearch.domain.config import ControllerConfig, PagesearchConfig
    from pagesearch.domain.state import ControllerState

from pagesearch.core.errors import (
    PagesearchCliError,
    config_exists_error,
    invalid_config_error,
)
from pagesearch.core.fetch_errors import format_error_message
from pagesearch.domain.exceptions import ConflictingOptionsError, PagesearchDomainError
from pagesearch.version import __version__


def handle_cli_errors(command_name: str):
    """Decorator to handle common CLI errors.

    PagesearchCliError exceptions are re-raised to use their built-in
    formatting; domain and runtime errors are converted to them, with a
    traceback in verbose mode for anything unexpected.

    Args:
        command_name: Name of the command for error messages.

    Returns:
        Decorated function with error handling.
    """

    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except PagesearchCliError:
                raise
            except PagesearchDomainError as e:
                raise PagesearchCliError(e.message, hint=e.hint) from e
            except RuntimeError as e:
                raise PagesearchCliError(
                    str(e),
                    hint="Run with --verbose for more details",
                ) from e
            except Exception as e:
                ctx = click.get_current_context()
                if (ctx.obj or {}).get("verbose", False):
                    import traceback

                    traceback.print_exc()
                raise PagesearchCliError(
                    f"Unexpected error in {command_name}: {e}",
                    hint="Run with --verbose for more details",
                ) from e

        return wrapper

    return decorator


def configure_logging(verbose: bool, quiet: bool) -> None:
    """Set up root logging for a CLI run.

    Raises:
        ConflictingOptionsError: If both verbose and quiet are requested.
    """
    if verbose and quiet:
        raise ConflictingOptionsError(
            "--verbose and --quiet cannot be used together",
            hint="Pass only one of them",
        )
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def _load_config(config_dir: Path) -> PagesearchConfig:
    """Load merged global and local configuration for config_dir."""
    from pagesearch.adapters.config.toml_config_provider import TomlConfigProvider

    return TomlConfigProvider().load(config_dir)


def describe_state(state: ControllerState, operation: str | None = None) -> str:
    """Render a controller state as a one-line status message.

    Args:
        state: State to describe.
        operation: Operation a ``Failed`` state came from. Defaults to "search".
    """
    from pagesearch.domain.state import Data, Failed, Loading, OngoingLoading

    if isinstance(state, Loading):
        return "Searching..."
    if isinstance(state, OngoingLoading):
        return f"Loading more ({len(state.items)} shown)..."
    if isinstance(state, Failed):
        return f"Failed: {format_error_message(state.cause, operation or 'search')}"
    if isinstance(state, Data):
        return f"{len(state.items)} result(s)"
    return repr(state)


async def run_paged_search(
    source_path: Path,
    query: str,
    glob: str | None,
    pages: int,
    controller_config: ControllerConfig,
    config: PagesearchConfig,
    on_state=None,
) -> tuple[ControllerState, str | None]:
    """Run one search and up to ``pages - 1`` load-more requests.

    Debounce and cooldown are zeroed since there is no typing or scrolling
    to absorb.

    Args:
        source_path: Text file to search.
        query: Query text.
        glob: Optional glob filter for matching lines.
        pages: Maximum number of pages to load.
        controller_config: Batch size to page with.
        config: Full config, for source options.
        on_state: Optional listener called with every state and the failed
            operation name (None unless the state is ``Failed``).

    Returns:
        The controller's final state and, if it is ``Failed``, the name of
        the operation that failed.
    """
    from pagesearch.adapters.sources.line_source import LineFileSource
    from pagesearch.core.controller import PaginatedSearchController
    from pagesearch.core.query import TextQuery
    from pagesearch.domain.state import Failed
    from pagesearch.domain.value_objects import GlobFilter

    controller = PaginatedSearchController.from_config(
        LineFileSource(source_path, config.source),
        replace(controller_config, debounce_ms=0, cooldown_ms=0),
        GlobFilter(glob) if glob else None,
        query_source=TextQuery(query),
    )
    if on_state is not None:
        controller.add_listener(
            lambda state: on_state(state, controller.failed_operation),
            fire_immediately=False,
        )

    try:
        await controller.search()
        for _ in range(pages - 1):
            if controller.has_no_more_items or isinstance(controller.state, Failed):
                break
            await controller.fetch_next_batch()
        return controller.state, controller.failed_operation
    finally:
        controller.close()


@click.group()
@click.version_option(version=__version__, prog_name="pagesearch")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Suppress non-essential output.",
)
@click.pass_context
@handle_cli_errors("pagesearch")
def cli(ctx: click.Context, verbose: bool, quiet: bool) -> None:
    """pagesearch - Debounced, paginated search over your data.

    Runs the paginated search controller headlessly against a text file.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    configure_logging(verbose, quiet)


@cli.command()
@click.argument("source", type=click.Path(dir_okay=False, path_type=Path))
@click.argument("query", type=str)
@click.option(
    "--filter",
    "glob",
    type=str,
    default=None,
    help="Only return lines matching this glob (e.g., '*TODO*').",
)
@click.option(
    "--pages",
    "-p",
    type=click.IntRange(min=1),
    default=1,
    help="Maximum number of pages to load.",
)
@click.option(
    "--batch-size",
    "-n",
    type=click.IntRange(min=1),
    default=None,
    help="Results per page (default: from config).",
)
@click.option(
    "--case-sensitive/--ignore-case",
    default=None,
    help="Override case sensitivity from config.",
)
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory containing pagesearch.toml.",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Output results as JSON.",
)
@click.pass_context
@handle_cli_errors("search")
def search(
    ctx: click.Context,
    source: Path,
    query: str,
    glob: str | None,
    pages: int,
    batch_size: int | None,
    case_sensitive: bool | None,
    config_dir: Path,
    json_output: bool,
) -> None:
    """Search SOURCE for lines containing QUERY, one page at a time.

    Examples:
        pagesearch search notes.txt todo
        pagesearch search notes.txt todo --pages 3 -n 10
        pagesearch search app.log error --filter '*timeout*'
    """
    from pagesearch.domain.state import Failed

    config = _load_config(config_dir)
    if case_sensitive is not None:
        config = replace(config, source=replace(config.source, case_sensitive=case_sensitive))
    controller_config = config.controller
    if batch_size is not None:
        controller_config = replace(controller_config, batch_size=batch_size)

    quiet = ctx.obj.get("quiet", False)

    def show_state(state: ControllerState, operation: str | None) -> None:
        if not quiet and not json_output:
            click.secho(describe_state(state, operation), fg="cyan", err=True)

    final_state, failed_operation = asyncio.run(
        run_paged_search(
            source,
            query,
            glob,
            pages,
            controller_config,
            config,
            on_state=show_state,
        )
    )

    if isinstance(final_state, Failed):
        raise PagesearchCliError(
            format_error_message(final_state.cause, failed_operation or "search"),
            hint="Run with --verbose for more details",
        )

    if json_output:
        click.echo(json.dumps(list(final_state.items), indent=2))
        return

    if not final_state.items:
        click.echo("No results found")
        return
    for line in final_state.items:
        click.echo(line)


@cli.group()
def config() -> None:
    """Manage pagesearch configuration."""


@config.command("init")
@click.option(
    "--global",
    "global_",
    is_flag=True,
    help="Write the user-wide config instead of a local one.",
)
@click.option(
    "--force",
    "-f",
    is_flag=True,
    help="Overwrite an existing config file.",
)
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory to write pagesearch.toml into.",
)
@click.pass_context
@handle_cli_errors("config init")
def config_init(ctx: click.Context, global_: bool, force: bool, config_dir: Path) -> None:
    """Create a config file with default values."""
    from pagesearch.shared.config_io import (
        create_default_config_file,
        get_global_config_path,
        get_local_config_path,
    )

    path = get_global_config_path() if global_ else get_local_config_path(config_dir)
    if path.exists() and not force:
        config_exists_error(path)

    create_default_config_file(path)
    if not ctx.obj.get("quiet", False):
        click.echo(f"✓ Wrote {path}")


@config.command("show")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=Path("."),
    show_default=True,
    help="Directory containing pagesearch.toml.",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Fail on an invalid local config instead of ignoring it.",
)
@handle_cli_errors("config show")
def config_show(config_dir: Path, strict: bool) -> None:
    """Print the effective configuration as TOML."""
    from pagesearch.domain.config import PagesearchConfig
    from pagesearch.shared.config_io import (
        dumps_config,
        get_local_config_path,
        load_config_data,
    )

    if strict:
        local_path = get_local_config_path(config_dir)
        if local_path.exists():
            try:
                PagesearchConfig.from_partial(
                    PagesearchConfig.default(), load_config_data(local_path)
                )
            except (ValueError, TypeError) as e:
                invalid_config_error(local_path, str(e))

    click.echo(dumps_config(_load_config(config_dir)), nl=False)


def main() -> int:
    """Main entrypoint for the CLI."""
    try:
        cli(obj={})
        return 0
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
