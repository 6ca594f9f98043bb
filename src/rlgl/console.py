"""User-facing output for the rlgl command line."""
from typing import NoReturn

import typer

PROG = "rlgl"
PRECONDITION_EXIT = 2


def output(message: str) -> None:
    typer.echo(f"{typer.style(PROG, fg=typer.colors.CYAN)} {message}")


def exit_err(message: str) -> NoReturn:
    """Report an error in red and stop the process with exit code 2."""
    output(typer.style(message, fg=typer.colors.RED))
    raise typer.Exit(code=PRECONDITION_EXIT)
