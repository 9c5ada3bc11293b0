"""memoport CLI - serve the API and move snapshots in and out of it."""

import base64
import json

import click

from scitrera_app_framework import get_variables

DEFAULT_SERVER_URL = 'http://localhost:61010'


def _headers(user_id):
    return {"X-User-ID": str(user_id)} if user_id is not None else {}


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logs")
def cli(verbose: bool):
    """memoport - export and import server for personal memo collections."""
    v = get_variables()  # get variables instance prior to preconfigure() call
    if verbose:
        v.set("LOGGING_LEVEL", "DEBUG")


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
def serve(host: str, port: int):
    """Start the HTTP REST API server."""
    import uvicorn
    from memoport_server.config import (
        MEMOPORT_SERVER_HOST, MEMOPORT_SERVER_PORT, DEFAULT_MEMOPORT_SERVER_HOST, DEFAULT_MEMOPORT_SERVER_PORT
    )
    from memoport_server.dependencies import preconfigure
    from memoport_server.lifecycle.fastapi import fastapi_app_factory

    # preconfigure ensures that plugins are registered
    v = preconfigure()
    if host is None:
        host = v.environ(MEMOPORT_SERVER_HOST, default=DEFAULT_MEMOPORT_SERVER_HOST)
    if port is None:
        port = v.environ(MEMOPORT_SERVER_PORT, default=DEFAULT_MEMOPORT_SERVER_PORT, type_fn=int)

    app = fastapi_app_factory(v)

    click.echo(f"Starting memoport server on {host}:{port}")
    uvicorn.run(
        app,
        host=host,
        port=port,
        reload=False,
    )


@cli.command()
def version():
    """Show version information."""
    from memoport_server import __version__
    click.echo(f"memoport v{__version__}")


@cli.command()
@click.option('--output', '-o', default=None, help='Output file (default: server suggested filename)')
@click.option('--filter', 'filter_expr', default='', help='Filter expression, e.g. \'tag in ["work"]\'')
@click.option('--exclude-archived', is_flag=True, help='Skip archived memos')
@click.option('--attachments/--no-attachments', default=True, help='Include attachment metadata')
@click.option('--relations/--no-relations', default=True, help='Include memo relations')
@click.option('--server-url', default=DEFAULT_SERVER_URL, help='memoport server URL')
@click.option('--user-id', default=None, type=int, help='User to export as (X-User-ID)')
def export(output, filter_expr, exclude_archived, attachments, relations, server_url, user_id):
    """Export your memos to a JSON snapshot file."""
    import httpx

    body = {
        "format": "json",
        "filter": filter_expr,
        "exclude_archived": exclude_archived,
        "include_attachments": attachments,
        "include_relations": relations,
    }

    try:
        with httpx.Client(timeout=300.0) as client:
            response = client.post(f"{server_url}/api/v1/memos:export", json=body, headers=_headers(user_id))
            response.raise_for_status()
            result = response.json()
    except httpx.HTTPStatusError as e:
        click.echo(f"Error: Failed to export memos: {e.response.text}", err=True)
        raise SystemExit(1)
    except httpx.HTTPError as e:
        click.echo(f"Error: Failed to export memos: {e}", err=True)
        raise SystemExit(1)

    output = output or result["filename"]
    with open(output, 'wb') as f:
        f.write(base64.b64decode(result["data"]))

    click.echo(f"Exported {result['memo_count']} memos ({result['size_bytes']} bytes) to {output}")


@cli.command(name='import')
@click.argument('file', type=click.Path(exists=True, dir_okay=False))
@click.option('--overwrite', is_flag=True, help='Update memos whose UID already exists')
@click.option('--dry-run', is_flag=True, help='Validate without writing anything')
@click.option('--no-preserve-timestamps', is_flag=True, help='Stamp imported memos with the import time')
@click.option('--skip-attachments', is_flag=True, help='Ignore attachment references')
@click.option('--skip-relations', is_flag=True, help='Ignore relation references')
@click.option('--server-url', default=DEFAULT_SERVER_URL, help='memoport server URL')
@click.option('--user-id', default=None, type=int, help='User to import as (X-User-ID)')
def import_cmd(file, overwrite, dry_run, no_preserve_timestamps, skip_attachments, skip_relations,
               server_url, user_id):
    """Import memos from a JSON snapshot file."""
    import httpx

    with open(file, 'rb') as f:
        data = f.read()

    body = {
        "data": base64.b64encode(data).decode("ascii"),
        "format": "json",
        "overwrite_existing": overwrite,
        "validate_only": dry_run,
        "preserve_timestamps": not no_preserve_timestamps,
        "skip_attachments": skip_attachments,
        "skip_relations": skip_relations,
    }

    try:
        with httpx.Client(timeout=300.0) as client:
            response = client.post(f"{server_url}/api/v1/memos:import", json=body, headers=_headers(user_id))
            response.raise_for_status()
            result = response.json()
    except httpx.HTTPStatusError as e:
        click.echo(f"Error: Failed to import: {e.response.text}", err=True)
        raise SystemExit(1)
    except httpx.HTTPError as e:
        click.echo(f"Error: Failed to import: {e}", err=True)
        raise SystemExit(1)

    summary = result.get("summary", {})
    click.echo("Validation complete:" if dry_run else "Import complete:")
    click.echo(f"  Total: {summary.get('total_memos', 0)}")
    click.echo(f"  Imported: {result.get('imported_count', 0)}")
    click.echo(f"  Created: {summary.get('created_count', 0)}")
    click.echo(f"  Updated: {summary.get('updated_count', 0)}")
    click.echo(f"  Skipped: {result.get('skipped_count', 0)}")
    if dry_run:
        click.echo(f"  Validation errors: {result.get('validation_errors', 0)}")
    click.echo(f"  Duration: {summary.get('duration_ms', 0)}ms")
    for error in result.get("errors", []):
        click.echo(f"  error: {error}")
    for warning in result.get("warnings", []):
        click.echo(f"  warning: {warning}")


@cli.command(name='content-limit')
@click.argument('limit', required=False, type=click.IntRange(min=1))
@click.option('--server-url', default=DEFAULT_SERVER_URL, help='memoport server URL')
@click.option('--user-id', default=None, type=int, help='Acting user (X-User-ID)')
def content_limit(limit, server_url, user_id):
    """Show the memo content length limit, or set it to LIMIT bytes."""
    import httpx

    url = f"{server_url}/api/v1/instance/settings"
    try:
        with httpx.Client(timeout=30.0) as client:
            if limit is None:
                response = client.get(url, headers=_headers(user_id))
            else:
                response = client.put(url, json={"content_length_limit": limit}, headers=_headers(user_id))
            response.raise_for_status()
            result = response.json()
    except httpx.HTTPStatusError as e:
        click.echo(f"Error: Failed to access instance settings: {e.response.text}", err=True)
        raise SystemExit(1)
    except httpx.HTTPError as e:
        click.echo(f"Error: Failed to access instance settings: {e}", err=True)
        raise SystemExit(1)

    click.echo(f"Content length limit: {result['content_length_limit']} bytes")


@cli.command()
@click.option("--format", "output_format", default="text", type=click.Choice(["text", "json"]))
def info(output_format: str):
    """Show system information and configuration."""
    from memoport_server.dependencies import preconfigure

    v = get_variables()
    v.set("LOGGING_LEVEL", "ERROR")  # suppress logs during info output
    v = preconfigure(v)
    settings = {
        k.removeprefix('MEMOPORT_'): '(redacted)' if any(
            x in k.lower() for x in ('password', 'secret', 'credentials', 'token', 'key',)) else val
        for (k, val) in sorted(v.export_all_variables().items(), key=lambda kv: kv[0])
        if k.startswith('MEMOPORT')
    }

    if output_format == "json":
        click.echo(json.dumps(settings, indent=2, default=str))
    else:
        click.echo("memoport Configuration")
        click.echo("=" * 40)
        for k, val in settings.items():
            click.echo(f"{k}: {val}")
        click.echo("")


if __name__ == "__main__":
    cli()
