import typer
from rich.console import Console

serve_app = typer.Typer(help="Start servers.")
console = Console()


@serve_app.command("api")
def api(
    host: str = "127.0.0.1",
    port: int = 8000,
) -> None:
    """Start the FastAPI REST API server."""
    import uvicorn

    from baseline_buddy.api.app import create_app

    app = create_app()
    console.print(f"[green]Starting API server on {host}:{port}[/green]")
    uvicorn.run(app, host=host, port=port)


@serve_app.command("mcp")
def mcp(
    transport: str = "stdio",
) -> None:
    """Start the MCP server."""
    from baseline_buddy.cli.segment import build_segmenter
    from baseline_buddy.mcp.server import create_mcp_server

    server = create_mcp_server(build_segmenter())
    console.print(f"[green]Starting MCP server (transport: {transport})[/green]")
    server.run(transport=transport)  # type: ignore[arg-type]


@serve_app.callback(invoke_without_command=True)
def serve_all(
    ctx: typer.Context,
    host: str = "0.0.0.0",
    port: int = 8000,
) -> None:
    """Start the API and the MCP server (SSE) side by side."""
    if ctx.invoked_subcommand is not None:
        return

    import threading

    import uvicorn

    from baseline_buddy.api.app import create_app
    from baseline_buddy.cli.segment import build_segmenter
    from baseline_buddy.mcp.server import create_mcp_server

    api_app = create_app()
    mcp_server = create_mcp_server(build_segmenter())
    mcp_port = port + 1

    threads = [
        threading.Thread(
            target=uvicorn.run,
            kwargs={"app": api_app, "host": host, "port": port},
            daemon=True,
        ),
        threading.Thread(
            target=mcp_server.run,
            kwargs={"transport": "sse", "host": host, "port": mcp_port},
            daemon=True,
        ),
    ]

    console.print(f"[green]Starting all servers on {host}[/green]")
    console.print(f"  API:       http://{host}:{port}")
    console.print(f"  MCP (SSE): http://{host}:{mcp_port}")

    for t in threads:
        t.start()
    for t in threads:
        t.join()
