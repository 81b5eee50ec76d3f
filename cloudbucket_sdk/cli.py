"""
Command-line interface for the CloudBucket SDK.

This module provides the ``cloudbucket`` tool for creating and listing
buckets, searching files and inspecting storage statistics.
"""

import sys
import json
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import ClientConfig, DEFAULT_CONFIG_FILE
from .exceptions import CloudBucketError
from .models import APIResponse, Bucket, FileObject, StorageStats, FileListOptions, BucketListOptions, SortOptions, SortDirection
from .storage import StorageManager
from .transport import RequestsTransport
from .utils import format_file_size


console = Console()


class CLIContext:
    """CLI context object to share state between commands."""

    def __init__(self, config_file: Optional[Path] = None):
        self.config_file = config_file or DEFAULT_CONFIG_FILE
        self.storage: Optional[StorageManager] = None

    def get_storage(self) -> StorageManager:
        """Get a storage manager over a configured transport."""
        if self.storage is None:
            config = ClientConfig.load(self.config_file)
            self.storage = StorageManager(RequestsTransport(config))
        return self.storage


def _fail(message: str):
    console.print(f"[red]Error:[/red] {escape(message)}")
    sys.exit(1)


def _check(response: APIResponse) -> APIResponse:
    if not response.ok:
        _fail(str(response.errors))
    return response


def _listing_options(cls, limit, page, sort_field, sort_direction, count):
    options = cls(
        limit=limit,
        page=page,
        sort=SortOptions(sort_field, SortDirection(sort_direction)) if sort_field else None,
        return_count_info=True if count else None,
    )
    return options if options.to_dict() else None


def _split_count_info(data):
    """Return ``(items, count_info)`` for listing data with or without count info."""
    if isinstance(data, dict) and "data" in data:
        return data["data"], data.get("info")
    return data or [], None


def listing_options(func):
    """Attach the pagination and sorting options shared by listing commands."""
    func = click.option('--json', 'output_json', is_flag=True, help='Output as JSON')(func)
    func = click.option('--count', is_flag=True, help='Include total count information')(func)
    func = click.option('--sort-direction', type=click.Choice(['asc', 'desc']), default='asc', help='Sort direction')(func)
    func = click.option('--sort-field', help='Field to sort by')(func)
    func = click.option('--page', '-p', type=int, help='Page number (starts at 1)')(func)
    func = click.option('--limit', '-l', type=int, help='Maximum number of results per page')(func)
    return func


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--config-file', type=click.Path(dir_okay=False, path_type=Path), help='Path to the config file')
@click.pass_context
def cli(ctx, debug, config_file):
    """CloudBucket CLI - manage cloud storage buckets and files."""
    ctx.obj = CLIContext(config_file)

    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=console, show_path=False)],
        )
        console.print("[dim]Debug mode enabled[/dim]")


@cli.command()
@click.option('--endpoint', prompt=True, help='Storage service base URL')
@click.option('--api-key', help='API key sent as a bearer token')
@click.option('--session-token', help='Session token of a signed-in user')
@click.option('--timeout', type=float, default=30, help='Request timeout in seconds')
@click.pass_obj
def config(obj, endpoint, api_key, session_token, timeout):
    """Save connection settings."""
    try:
        path = ClientConfig(
            endpoint=endpoint,
            api_key=api_key,
            session_token=session_token,
            timeout=timeout,
        ).save(obj.config_file)
    except CloudBucketError as e:
        _fail(str(e))

    console.print(f"✅ Configuration saved to {path}")


@cli.command(name='create-bucket')
@click.argument('name')
@click.option('--private', is_flag=True, help='Make files in the bucket private by default')
@click.pass_obj
def create_bucket(obj, name, private):
    """Create a new bucket."""
    try:
        response = _check(obj.get_storage().create_bucket(name, is_public=not private))
    except CloudBucketError as e:
        _fail(str(e))

    if not response.data:
        console.print(f"✅ Created bucket: {escape(name)}")
        return

    bucket = Bucket.from_dict(response.data)
    console.print(f"✅ Created bucket: {escape(bucket.name)} (ID: {bucket.id})")


@cli.command()
@click.argument('expression', required=False)
@listing_options
@click.pass_obj
def buckets(obj, expression, limit, page, sort_field, sort_direction, count, output_json):
    """List buckets, optionally filtered by EXPRESSION."""
    options = _listing_options(BucketListOptions, limit, page, sort_field, sort_direction, count)
    try:
        response = _check(obj.get_storage().list_buckets(expression, options))
    except CloudBucketError as e:
        _fail(str(e))

    if output_json:
        click.echo(json.dumps(response.data, indent=2, default=str))
        return

    items, count_info = _split_count_info(response.data)
    if not items:
        console.print("No buckets found.")
        return

    table = Table(title="Buckets")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="green")
    table.add_column("Public", style="red")
    table.add_column("Created", style="magenta")

    for item in items:
        bucket = Bucket.from_dict(item)
        table.add_row(
            str(bucket.id),
            escape(bucket.name),
            "Yes" if bucket.is_public else "No",
            bucket.created_at.strftime('%Y-%m-%d %H:%M') if bucket.created_at else 'Unknown',
        )

    console.print(table)
    if count_info:
        console.print(f"Total: {count_info.get('count', len(items))}")


@cli.command()
@click.argument('expression')
@listing_options
@click.pass_obj
def search(obj, expression, limit, page, sort_field, sort_direction, count, output_json):
    """Search files in all buckets matching EXPRESSION."""
    options = _listing_options(FileListOptions, limit, page, sort_field, sort_direction, count)
    try:
        response = _check(obj.get_storage().search_files(expression, options))
    except CloudBucketError as e:
        _fail(str(e))

    if output_json:
        click.echo(json.dumps(response.data, indent=2, default=str))
        return

    items, count_info = _split_count_info(response.data)
    if not items:
        console.print("No files found matching the search criteria.")
        return

    table = Table(title=f"Search Results for '{escape(expression)}'")
    table.add_column("ID", style="cyan")
    table.add_column("Bucket", style="blue")
    table.add_column("Name", style="green")
    table.add_column("Size", style="yellow")
    table.add_column("Type", style="magenta")
    table.add_column("Public", style="red")

    for item in items:
        file = FileObject.from_dict(item)
        table.add_row(
            str(file.id),
            str(file.bucket_id),
            escape(file.file_name),
            format_file_size(file.size),
            file.mime_type or 'unknown',
            "Yes" if file.is_public else "No",
        )

    console.print(table)
    if count_info:
        console.print(f"Total: {count_info.get('count', len(items))}")


@cli.command()
@click.pass_obj
def stats(obj):
    """Display storage usage statistics."""
    try:
        response = _check(obj.get_storage().get_stats())
    except CloudBucketError as e:
        _fail(str(e))

    stats = StorageStats.from_dict(response.data or {})

    table = Table(title="Storage Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Total Files", str(stats.object_count))
    table.add_row("Total Size", format_file_size(stats.total_storage_size))
    table.add_row("Average File Size", format_file_size(stats.average_object_size))
    table.add_row("Smallest File", format_file_size(stats.min_object_size))
    table.add_row("Largest File", format_file_size(stats.max_object_size))

    console.print(table)


if __name__ == '__main__':
    cli()
