"""Serve command: run the HTTP API with uvicorn."""

import typer

from smartflow.cli._app import app
from smartflow.cli._common import setup_logging


@app.command("serve", help="Run the SmartFlow HTTP API.")
def serve_cmd(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Start uvicorn with the API app factory."""
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    import uvicorn

    uvicorn.run(
        "smartflow.api.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )
