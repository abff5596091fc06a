from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from baseline_buddy.core.rules import DEFAULT_RULES, Dialect

console = Console()


def rules(
    dialect: Annotated[Dialect | None, typer.Option(help="Only show rules for this dialect.")] = None,
) -> None:
    """List the line-classification rule table."""
    selected = DEFAULT_RULES.by_dialect(dialect) if dialect else DEFAULT_RULES.rules
    table = Table(show_lines=False)
    for header in ("name", "dialect", "signal", "pattern"):
        table.add_column(header)
    for r in selected:
        name = f"{r.name} (in code)" if r.in_code_only else r.name
        table.add_row(name, r.dialect.value, r.signal.value, r.pattern.pattern)
    console.print(table)
    console.print(f"({len(selected)} rows)")
