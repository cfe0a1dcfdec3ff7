"""
Showcase Catalog CLI Tool

Operator command-line interface talking to a running showcase API.

Usage:
    showcase list                      - List entries, newest first
    showcase submit NAME URL [...]     - Submit an entry (optionally with --video)
    showcase delete ID                 - Delete an entry
    showcase usage                     - Show estimated storage usage
    showcase serve                     - Start the API server
"""
import mimetypes
import os
import sys
from pathlib import Path

import click
import httpx
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

# Load environment variables
load_dotenv()

console = Console()

# API Configuration
API_BASE = os.getenv("API_BASE_URL", "http://localhost:8000")


def format_bytes(size: int) -> str:
    """Human readable byte count (binary units)."""
    value = float(size)
    for unit in ("B", "KB", "MB", "GB"):
        if value < 1024 or unit == "GB":
            return f"{value:.0f} {unit}" if unit == "B" else f"{value:.1f} {unit}"
        value /= 1024


def error_message(response: httpx.Response) -> str:
    """Pull the error text out of an API error response."""
    try:
        data = response.json()
    except ValueError:
        return response.text
    return data.get("detail") or data.get("error") or response.text


def start_server(port=8000):
    """Start the FastAPI server."""
    import subprocess

    cmd = [sys.executable, "-m", "uvicorn", "showcase.main:app", f"--port={port}"]
    subprocess.run(cmd)


@click.group()
@click.version_option(version="1.0.0", prog_name="Showcase Catalog")
def main():
    """
    Showcase Catalog - submit, browse, and delete website showcase entries.
    """
    pass


@main.command(name="list")
def list_entries():
    """
    List all entries, most recent first.

    Example:
        showcase list
    """
    try:
        response = httpx.get(f"{API_BASE}/api/v1/websites", timeout=10.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        console.print(f"[red]✗ Error: {error_message(e.response)}[/red]")
        sys.exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]✗ Could not reach API server: {e}[/red]")
        sys.exit(1)

    data = response.json()
    items = data.get("items", [])

    if not items:
        console.print("[yellow]No websites yet. Submit one with:[/yellow]")
        console.print("[cyan]showcase submit \"Name\" https://example.com[/cyan]")
        return

    table = Table(title=f"Websites ({data.get('total', len(items))} total)", show_header=True, header_style="bold cyan")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("URL")
    table.add_column("Categories")
    table.add_column("Video")
    table.add_column("Uploaded", style="dim")

    for item in items:
        table.add_row(
            item.get("id", ""),
            item.get("name", ""),
            item.get("url", ""),
            ", ".join(item.get("categories", [])),
            "yes" if item.get("videoUrl") else "",
            item.get("uploadedAt", "")[:19],
        )

    console.print(table)


@main.command()
@click.argument("name")
@click.argument("url")
@click.option("--categories", default="", help="Comma-separated categories")
@click.option("--twitter", default="", help="Twitter handle (without URL)")
@click.option("--instagram", default="", help="Instagram handle (without URL)")
@click.option("--built-with", default="", help="Main technology")
@click.option("--other-technologies", default="", help="Other technologies")
@click.option("--video", type=click.Path(exists=True, dir_okay=False, path_type=Path), help="Demo video file")
def submit(name, url, categories, twitter, instagram, built_with, other_technologies, video):
    """
    Submit a website entry.

    Example:
        showcase submit "Acme" https://acme.dev --categories "saas, ai" --video demo.mp4
    """
    form = {
        "name": name,
        "url": url,
        "categories": categories,
        "twitter": twitter,
        "instagram": instagram,
        "builtWith": built_with,
        "otherTechnologies": other_technologies,
    }
    files = None
    if video is not None:
        content_type = mimetypes.guess_type(video.name)[0] or "application/octet-stream"
        files = {"video": (video.name, video.read_bytes(), content_type)}

    try:
        response = httpx.post(f"{API_BASE}/api/v1/websites", data=form, files=files, timeout=300.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        console.print(f"[red]✗ Error: {error_message(e.response)}[/red]")
        sys.exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]✗ Could not reach API server: {e}[/red]")
        sys.exit(1)

    data = response.json()
    body = f"ID: [cyan]{data['id']}[/cyan]"
    if data.get("videoUrl"):
        body += f"\nVideo: [cyan]{data['videoUrl']}[/cyan]"
    console.print(Panel(body, title="✓ Website saved", border_style="green"))


@main.command()
@click.argument("website_id")
@click.confirmation_option(prompt="Are you sure you want to delete this website?")
def delete(website_id: str):
    """
    Delete a website entry.

    Example:
        showcase delete 4b7c...
    """
    try:
        response = httpx.delete(f"{API_BASE}/api/v1/websites/{website_id}", timeout=10.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        console.print(f"[red]✗ Error: {error_message(e.response)}[/red]")
        sys.exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]✗ Could not reach API server: {e}[/red]")
        sys.exit(1)

    console.print(f"[green]✓[/green] Deleted [cyan]{website_id}[/cyan]")


@main.command()
@click.option("--folder", "folders", multiple=True, help="Folder to include (repeatable)")
def usage(folders):
    """
    Show estimated storage usage against the quota.

    Example:
        showcase usage --folder videos/
    """
    params = [("folder", f) for f in folders]
    try:
        response = httpx.get(f"{API_BASE}/api/v1/storage/usage", params=params, timeout=30.0)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        console.print(f"[red]✗ Error: {error_message(e.response)}[/red]")
        sys.exit(1)
    except httpx.HTTPError as e:
        console.print(f"[red]✗ Could not reach API server: {e}[/red]")
        sys.exit(1)

    report = response.json()
    degraded = set(report.get("degradedFolders", []))

    table = Table(title="Storage usage (estimated)", show_header=True, header_style="bold cyan")
    table.add_column("Folder", style="cyan")
    table.add_column("Files", justify="right")
    table.add_column("Size", justify="right")
    for folder, stats in report.get("folders", {}).items():
        label = f"{folder} [red](unavailable)[/red]" if folder in degraded else folder
        table.add_row(label, str(stats["count"]), format_bytes(stats["size"]))
    console.print(table)

    summary = f"Files: {report['fileCount']}  Size: {format_bytes(report['totalSize'])}"
    if report.get("quotaBytes"):
        summary += f"  Quota: {format_bytes(report['quotaBytes'])} ({report['usagePercent']}% used)"
    console.print(summary)


@main.command()
@click.option("--port", default=8000, help="Port to run server on")
def serve(port: int):
    """
    Start the showcase API server.

    Example:
        showcase serve --port 8000
    """
    console.print(Panel(
        f"[bold green]Starting Showcase Catalog Server[/bold green]\n\n"
        f"API Docs: [cyan]http://localhost:{port}/docs[/cyan]\n\n"
        f"[dim]Press Ctrl+C to stop[/dim]",
        border_style="green"
    ))
    start_server(port=port)


if __name__ == "__main__":
    main()
