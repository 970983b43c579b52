"""FastAPI app entrypoint and command line for httpdiag."""
from __future__ import annotations

import logging
import platform
import ssl
from datetime import datetime
from importlib.metadata import PackageNotFoundError, version as package_version
from typing import Optional

import typer
import uvicorn
from fastapi import FastAPI

from httpdiag.api.echo import router as echo_router
from httpdiag.api.errors import register_exception_handlers
from httpdiag.api.payload import router as payload_router
from httpdiag.env import BUILD_VERSION_ENV, CONFIG_ENV, LOG_LEVEL_ENV, env_str
from httpdiag.service.config import Configuration, load_config
from httpdiag.service.errors import ConfigError, TLSStartupError

_LOG = logging.getLogger(__name__)

LISTEN_HOST = "0.0.0.0"
LOG_FORMAT = "%(asctime)s %(name)s:%(lineno)d %(levelname)s %(message)s"


def create_app(config: Configuration) -> FastAPI:
    """Create and configure FastAPI application instance."""

    app = FastAPI(title="httpdiag", version=build_version())
    app.state.config = config
    register_exception_handlers(app)

    # echo owns every path, so it has to come last
    app.include_router(payload_router)
    app.include_router(echo_router)

    return app


def build_version() -> str:
    """Return the build identifier baked in at deploy time, else the package version."""
    override = env_str(BUILD_VERSION_ENV)
    if override:
        return override
    try:
        return package_version("httpdiag")
    except PackageNotFoundError:
        return "unknown"


def version_string() -> str:
    """Return the ``--version`` line."""
    today = datetime.now().strftime("%Y-%m-%d")
    return f"httpdiag git={build_version()} python={platform.python_version()} date={today}"


def uvicorn_config(app: FastAPI, config: Configuration) -> uvicorn.Config:
    """Build the listener config; TLS when both cert and key are configured.

    Peer certificates are not verified on the TLS listener. The access log
    is off: successful requests are not logged.
    """
    options: dict = {}
    if config.tls_enabled:
        options.update(
            ssl_certfile=config.tls_cert_path,
            ssl_keyfile=config.tls_key_path,
            ssl_cert_reqs=ssl.CERT_NONE,
        )
    return uvicorn.Config(app, host=LISTEN_HOST, port=config.port, access_log=False, **options)


def serve(config: Configuration) -> None:
    """Run the server until it is stopped."""
    server_config = uvicorn_config(create_app(config), config)
    if config.tls_enabled:
        try:
            server_config.load()
        except OSError as e:
            raise TLSStartupError(f"Unable to start the server {e}") from e
    uvicorn.Server(server_config).run()


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(version_string())
        raise typer.Exit()


cli_app = typer.Typer(name="httpdiag", help="Diagnostic HTTP echo and payload server", add_completion=False)


@cli_app.command()
def run(
    config: Optional[str] = typer.Option(None, "--config", envvar=CONFIG_ENV, help="JSON configuration file"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Print version information and exit"
    ),
) -> None:
    """Start the diagnostic server."""
    _ = version
    logging.basicConfig(level=(env_str(LOG_LEVEL_ENV, "INFO") or "INFO").upper(), format=LOG_FORMAT)

    try:
        settings = load_config(config)
        serve(settings)
    except (ConfigError, TLSStartupError) as e:
        _LOG.error("%s", e)
        raise typer.Exit(1)


def cli() -> None:
    """Console script entrypoint."""
    cli_app()


if __name__ == "__main__":
    cli()
