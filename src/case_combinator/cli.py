"""Command line interface for inspecting combinators.

A combinator is referenced as ``module:attribute``, where the attribute is
either a TestCaseCombinator or a zero-argument callable returning one:

    case-combinator show tests.test_monkey:monkey_cases
    case-combinator show tests.test_monkey:build_cases --format markdown
    case-combinator count tests.test_monkey:monkey_cases
"""

from __future__ import annotations

import importlib
import json
import logging
import os
import sys
from typing import Any, NoReturn

import click
from pydantic import ValidationError

from case_combinator.combinator import TestCaseCombinator
from case_combinator.config import OUTPUT_FORMATS, CombinatorConfig, load_config
from case_combinator.errors import (
    CombinatorError,
    ErrorCode,
    ErrorContext,
    TargetLoadError,
)
from case_combinator.reporting import (
    CaseTableReporter,
    render_json,
    render_markdown,
    summarize,
)

logger = logging.getLogger(__name__)

EXIT_USAGE_ERROR = 2


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def load_target(target: str) -> TestCaseCombinator[Any]:
    """Resolve a ``module:attribute`` reference to a combinator.

    The current directory is put on ``sys.path`` first so that test modules
    of the project being inspected are importable.

    Raises:
        TargetLoadError: If the reference is malformed, the module or the
            factory raises, or the attribute is not a combinator.
    """
    module_name, sep, attribute = target.partition(":")
    context = ErrorContext(target=target)
    if not sep or not module_name or not attribute:
        raise TargetLoadError(
            f"Target must look like 'module:attribute', got {target!r}",
            error_code=ErrorCode.TARGET_INVALID,
            context=context,
        )

    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise TargetLoadError(
            f"Cannot import module '{module_name}': {e}",
            context=context,
            cause=e,
        ) from e
    except Exception as e:
        raise TargetLoadError(
            f"Importing module '{module_name}' failed: {type(e).__name__}: {e}",
            context=context,
            cause=e,
        ) from e

    try:
        obj = getattr(module, attribute)
    except AttributeError as e:
        raise TargetLoadError(
            f"Module '{module_name}' has no attribute '{attribute}'",
            context=context,
            cause=e,
        ) from e

    if not isinstance(obj, TestCaseCombinator) and callable(obj):
        logger.debug(f"Calling factory {target}")
        try:
            obj = obj()
        except Exception as e:
            raise TargetLoadError(
                f"Factory '{target}' failed: {type(e).__name__}: {e}",
                context=context,
                cause=e,
            ) from e

    if not isinstance(obj, TestCaseCombinator):
        raise TargetLoadError(
            f"'{target}' is a {type(obj).__name__}, not a TestCaseCombinator",
            error_code=ErrorCode.TARGET_INVALID,
            context=context,
        )
    return obj


def _fail(ctx: click.Context, error: CombinatorError) -> NoReturn:
    """Report a library error on stderr and exit with a usage error code."""
    verbose = ctx.obj.get("verbose", False) if ctx.obj else False
    click.echo(error.format_verbose() if verbose else str(error), err=True)
    ctx.exit(EXIT_USAGE_ERROR)


def _load_or_fail(ctx: click.Context, target: str) -> TestCaseCombinator[Any]:
    try:
        combinator = load_target(target)
    except TargetLoadError as e:
        _fail(ctx, e)

    config: CombinatorConfig = ctx.obj["config"]
    if len(combinator) > config.warn_threshold:
        logger.warning(
            f"{target} expands to {len(combinator)} combinations "
            f"(warn_threshold={config.warn_threshold})"
        )
    return combinator


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
@click.option("--config", "-c", type=click.Path(exists=True), help="Path to config file")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, config: str | None) -> None:
    """case-combinator - exhaustive test-case generation."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    try:
        config_obj = load_config(config)
    except CombinatorError as e:
        _fail(ctx, e)
    except ValidationError as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        ctx.exit(EXIT_USAGE_ERROR)

    if verbose:
        config_obj.verbose = True

    ctx.obj["config"] = config_obj
    ctx.obj["verbose"] = config_obj.verbose

    setup_logging(config_obj.verbose)


@cli.command()
@click.argument("target")
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(OUTPUT_FORMATS),
    default=None,
    help="Output format (default: from config, 'table')",
)
@click.option("--max-rows", type=click.IntRange(min=1), default=None, help="Truncate output")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def show(
    ctx: click.Context,
    target: str,
    output_format: str | None,
    max_rows: int | None,
    no_color: bool,
) -> None:
    """Show every test case of TARGET with its expected outcome."""
    config: CombinatorConfig = ctx.obj["config"]
    combinator = _load_or_fail(ctx, target)

    output_format = output_format or config.output_format
    max_rows = max_rows or config.max_rows

    if output_format == "json":
        click.echo(render_json(combinator))
        return

    if output_format == "markdown":
        click.echo(render_markdown(combinator, max_rows=max_rows))
    else:
        reporter = CaseTableReporter(color=config.color and not no_color, max_rows=max_rows)
        click.echo(reporter.render(combinator), nl=False)

    if config.show_summary:
        click.echo(f"\n{summarize(combinator)}")


@cli.command()
@click.argument("target")
@click.option("--json", "as_json", is_flag=True, help="Output counts as JSON")
@click.pass_context
def count(ctx: click.Context, target: str, as_json: bool) -> None:
    """Count TARGET's test cases by expected outcome."""
    summary = summarize(_load_or_fail(ctx, target))

    if as_json:
        click.echo(
            json.dumps(
                {
                    "total": summary.total,
                    "successful": summary.successful,
                    "failing": summary.failing,
                }
            )
        )
    else:
        click.echo(str(summary))


def main() -> None:
    """Main entry point for the case-combinator CLI."""
    cli()
