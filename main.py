"""CLI entry point for rlgl - Red Light Green Light."""

import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import List, Optional

import httpx
import typer

from src.rlgl import config as config_store
from src.rlgl import evaluation
from src.rlgl.client import RlglClient
from src.rlgl.config import ConfigError
from src.rlgl.console import exit_err
from src.rlgl.logging_manager import configure_logging
from src.rlgl.models import SessionConfig
from src.rlgl.settings import RlglSettings

VERSION = "1.0.0"

logger = logging.getLogger("rlgl")


@dataclass
class Session:
    path: str
    config: SessionConfig


app = typer.Typer(help="Red Light Green Light", add_completion=False)


@contextmanager
def fatal_errors():
    """Turn config, file, URL and transport failures into a terminal error."""
    try:
        yield
    except (ConfigError, OSError, ValueError, httpx.HTTPError, httpx.InvalidURL) as e:
        logger.error("%s: %s", type(e).__name__, e)
        exit_err(str(e))


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="log requests to stderr"),
    version: bool = typer.Option(False, "--version", help="print the version and exit"),
):
    settings = RlglSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)

    if version:
        typer.echo(f"rlgl version {VERSION}")
        raise typer.Exit()

    # The session file is created on every run, help included.
    with fatal_errors():
        path = settings.config_path or config_store.locate()
        ctx.obj = Session(path=path, config=config_store.load(path))

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


@app.command()
def login(
    ctx: typer.Context,
    url: Optional[str] = typer.Argument(None, help="server URL"),
    key: str = typer.Option("", help="API key"),
    proxy: str = typer.Option("", help="proxy URL (eg. http://HOST:PORT)"),
    proxy_auth: str = typer.Option("", "--proxy-auth", help="proxy basic authentication (eg. USERNAME:PASSWORD)"),
):
    """Login to Red Light Green Light server."""
    if not url:
        exit_err("Missing server URL")
    if not key:
        slash = "" if url.endswith("/") else "/"
        exit_err(f"Missing API key.  Generate a new one at {url}{slash}get-api-key")

    client = RlglClient(proxy, proxy_auth)
    with fatal_errors():
        resp = client.get(f"{url}/login")
    typer.echo(resp.text)

    session: Session = ctx.obj
    session.config = SessionConfig(host=url, key=key, proxy=proxy, proxy_auth=proxy_auth)
    with fatal_errors():
        config_store.save(session.config, session.path)


@app.command()
def start(ctx: typer.Context):
    """Create a Player ID."""
    cfg: SessionConfig = ctx.obj.config
    if not cfg.logged_in():
        exit_err("Login to server first")

    client = RlglClient(cfg.proxy, cfg.proxy_auth)
    with fatal_errors():
        resp = client.get(f"{cfg.host}/start", token=cfg.key)
    typer.echo(resp.text)


@app.command()
def log(
    ctx: typer.Context,
    player: str = typer.Option("", "--id", help="player ID"),
    extra: Optional[List[str]] = typer.Argument(None, hidden=True),
):
    """Log evaluations."""
    cfg: SessionConfig = ctx.obj.config
    if not cfg.host:
        exit_err("Login to server first")
    if not player:
        exit_err("Missing player ID")
    if extra:
        exit_err("Too many arguments")

    client = RlglClient(cfg.proxy, cfg.proxy_auth)
    # The server expects the ID wrapped in literal double quotes. This looks
    # like a quoting bug on the server side but must be kept for compatibility.
    with fatal_errors():
        resp = client.get(f'{cfg.host}/report-log?id="{player}"')
    typer.echo(resp.text, nl=False)


@app.command()
def evaluate(
    ctx: typer.Context,
    reports: Optional[List[str]] = typer.Argument(None, metavar="REPORT", help="test results to evaluate"),
    policy: str = typer.Option("", help="evaluation policy"),
    player: str = typer.Option("", "--id", help="player ID"),
    title: str = typer.Option("", help="report title"),
):
    """Evaluate test results.

    Exits 0 on a GREEN verdict, 1 on RED and 2 on anything else.
    """
    cfg: SessionConfig = ctx.obj.config
    if not cfg.logged_in():
        exit_err("Login to server first")
    if not policy:
        exit_err("Missing policy")
    if not player:
        exit_err("Missing player ID")
    if not reports:
        exit_err("Missing report")
    if len(reports) > 1:
        exit_err("Too many arguments")

    client = RlglClient(cfg.proxy, cfg.proxy_auth)
    with fatal_errors():
        text = evaluation.submit(client, cfg, policy, player, title, reports[0])
    typer.echo(text, nl=False)

    verdict = evaluation.classify(text)
    logger.debug("verdict: %s", verdict.value)
    raise typer.Exit(code=verdict.exit_code)


# Short aliases.
app.command("l", hidden=True)(login)
app.command("s", hidden=True)(start)
app.command("e", hidden=True)(evaluate)


if __name__ == "__main__":
    app()
