"""Render a combinator's test cases for humans and machines.

Three formats are supported:

- table: a rich table, one column per axis plus the expected outcome
- markdown: a pipe table suitable for docs and PR descriptions
- json: a list of ``{description, input, is_successful}`` objects

Rows are sorted by description so that output is stable between runs,
even though the combinator itself makes no ordering promise.

Example::

    reporter = CaseTableReporter()
    reporter.print_report(combinator)

    print(render_markdown(combinator))
"""

from __future__ import annotations

import io
import json
from dataclasses import dataclass
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from case_combinator.combinator import DESCRIPTION_SEPARATOR, TestCase, TestCaseCombinator

BASE_CASE_LABEL = "<base>"


@dataclass(frozen=True)
class CaseSummary:
    """Counts of expected successes and failures."""

    total: int
    successful: int
    failing: int

    def __str__(self) -> str:
        return f"{self.total} cases: {self.successful} successful, {self.failing} failing"


def summarize(combinator: TestCaseCombinator[Any]) -> CaseSummary:
    """Count the combinator's cases by expected outcome."""
    total = len(combinator)
    successful = len(combinator.successful_cases)
    return CaseSummary(total=total, successful=successful, failing=total - successful)


def sorted_cases(combinator: TestCaseCombinator[Any]) -> list[TestCase[Any]]:
    """Snapshot of the current test cases, sorted by description."""
    return sorted(combinator.test_cases, key=lambda case: case.description)


def column_headers(combinator: TestCaseCombinator[Any]) -> list[str]:
    """One header per axis, falling back to ``axis N`` for unnamed axes."""
    return [axis.name or f"axis {i + 1}" for i, axis in enumerate(combinator.axes)]


def _split_description(case: TestCase[Any], width: int) -> list[str]:
    """Split a description into per-axis cells.

    Candidate values whose text contains the separator make the split
    ambiguous; those rows keep the whole description in the first cell.
    """
    if width == 0:
        return []
    parts = case.description.split(DESCRIPTION_SEPARATOR)
    if len(parts) != width:
        return [case.description] + [""] * (width - 1)
    return parts


class CaseTableReporter:
    """Formats a combinator as a rich table.

    Example::

        reporter = CaseTableReporter(color=False, max_rows=20)
        text = reporter.render(combinator)
    """

    def __init__(
        self,
        console: Console | None = None,
        color: bool = True,
        max_rows: int | None = None,
    ) -> None:
        self.console = console or Console(no_color=not color)
        self.color = color
        self.max_rows = max_rows

    def build_table(self, combinator: TestCaseCombinator[Any]) -> Table:
        """Build the rich Table for the combinator's current state."""
        headers = column_headers(combinator)

        table = Table(title="Test cases")
        table.add_column("#", justify="right", style="dim")
        if headers:
            for header in headers:
                table.add_column(header)
        else:
            table.add_column("case")
        table.add_column("expected", justify="center")

        cases = sorted_cases(combinator)
        shown = cases if self.max_rows is None else cases[: self.max_rows]

        for index, case in enumerate(shown, start=1):
            cells = _split_description(case, len(headers)) or [BASE_CASE_LABEL]
            outcome = (
                Text("success", style="bold green")
                if case.is_successful
                else Text("failure", style="red")
            )
            table.add_row(str(index), *cells, outcome)

        hidden = len(cases) - len(shown)
        if hidden:
            table.add_row("…", *[""] * max(len(headers), 1), Text(f"{hidden} more", style="dim"))

        return table

    def render(self, combinator: TestCaseCombinator[Any]) -> str:
        """Render the table to a string."""
        buffer = io.StringIO()
        console = Console(
            file=buffer,
            no_color=not self.color,
            force_terminal=self.color,
            width=self.console.width,
        )
        console.print(self.build_table(combinator))
        return buffer.getvalue()

    def print_report(self, combinator: TestCaseCombinator[Any]) -> None:
        """Print the table to the configured console."""
        self.console.print(self.build_table(combinator))


def render_markdown(
    combinator: TestCaseCombinator[Any],
    max_rows: int | None = None,
) -> str:
    """Render the test cases as a Markdown pipe table."""
    headers = column_headers(combinator) or ["case"]
    lines = [
        "| " + " | ".join(headers + ["isSuccessful"]) + " |",
        "| " + " | ".join([":---:"] * (len(headers) + 1)) + " |",
    ]

    cases = sorted_cases(combinator)
    shown = cases if max_rows is None else cases[:max_rows]
    for case in shown:
        cells = _split_description(case, len(combinator.axes)) or [BASE_CASE_LABEL]
        cells = [cell.replace("|", "\\|") for cell in cells]
        lines.append("| " + " | ".join(cells + [str(case.is_successful).lower()]) + " |")

    hidden = len(cases) - len(shown)
    if hidden:
        lines.append("")
        lines.append(f"_{hidden} more cases not shown_")

    return "\n".join(lines)


def _jsonable(value: Any) -> Any:
    """Return value if json can encode it as-is, otherwise its repr()."""
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return repr(value)
    return value


def render_json(combinator: TestCaseCombinator[Any], indent: int | None = 2) -> str:
    """Render the test cases as a JSON array."""
    payload = [
        {
            "description": case.description,
            "input": _jsonable(case.input),
            "is_successful": case.is_successful,
        }
        for case in sorted_cases(combinator)
    ]
    return json.dumps(payload, indent=indent)
