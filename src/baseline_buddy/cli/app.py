import logging
from typing import Annotated

import typer

from baseline_buddy.cli.rules import rules
from baseline_buddy.cli.segment import segment
from baseline_buddy.cli.serve import serve_app
from baseline_buddy.cli.suggestions import suggestions

app = typer.Typer(
    name="baseline-buddy",
    help="Baseline Buddy CLI: split AI answers into prose and code and render them.",
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)


@app.callback()
def configure(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


app.command("segment")(segment)
app.command("suggestions")(suggestions)
app.command("rules")(rules)
app.add_typer(serve_app, name="serve")


def main() -> None:
    app()
