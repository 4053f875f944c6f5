"""Command line interface for azkit.

Provides three command groups:
    azkit arm   – get, list and delete ARM resources by ID
    azkit blob  – upload block blobs and inspect their block lists
    azkit docs  – analyze a document with a Document Analysis model
"""

import json
import logging
from pathlib import Path

import click

from azkit import __version__
from azkit.exceptions import AzkitError


def _echo_json(data: object) -> None:
    click.echo(json.dumps(data, indent=2, default=str))


@click.group()
@click.version_option(version=__version__, prog_name="azkit")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable verbose logging.",
)
def cli(verbose: bool) -> None:
    """Typed clients for Azure REST APIs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# ---------------------------------------------------------------------------
# arm
# ---------------------------------------------------------------------------


@cli.group()
def arm() -> None:
    """Azure Resource Manager resources."""


_api_version = click.option("--api-version", required=True, help="Resource provider API version.")
_tenant = click.option(
    "--tenant", "tenant_id", default=None, help="Tenant to authenticate against."
)


@arm.command("get")
@click.argument("resource_id")
@_api_version
@_tenant
def arm_get(resource_id: str, api_version: str, tenant_id: str | None) -> None:
    """Print the resource RESOURCE_ID as JSON."""
    from azkit.management import ResourceManagementClient

    try:
        _echo_json(ResourceManagementClient(tenant_id).get(resource_id, api_version))
    except AzkitError as exc:
        raise click.ClickException(str(exc)) from exc


@arm.command("list")
@click.argument("collection_path")
@_api_version
@_tenant
def arm_list(collection_path: str, api_version: str, tenant_id: str | None) -> None:
    """Print every item of COLLECTION_PATH as JSON."""
    from azkit.management import ResourceManagementClient

    try:
        _echo_json(ResourceManagementClient(tenant_id).list(collection_path, api_version))
    except AzkitError as exc:
        raise click.ClickException(str(exc)) from exc


@arm.command("delete")
@click.argument("resource_id")
@_api_version
@_tenant
@click.option("--no-wait", is_flag=True, default=False, help="Return once the delete is accepted.")
@click.option("--timeout", type=float, default=None, help="Seconds to wait for completion.")
def arm_delete(
    resource_id: str, api_version: str, tenant_id: str | None, no_wait: bool, timeout: float | None
) -> None:
    """Delete RESOURCE_ID."""
    from azkit.management import ResourceManagementClient

    try:
        poller = ResourceManagementClient(tenant_id).begin_delete(resource_id, api_version)
        if not no_wait:
            poller.result(timeout)
    except (AzkitError, TimeoutError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"{resource_id}: {poller.status()}")


# ---------------------------------------------------------------------------
# blob
# ---------------------------------------------------------------------------


@cli.group()
def blob() -> None:
    """Block blobs."""


@blob.command("upload")
@click.argument("blob_url")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--overwrite", is_flag=True, default=False, help="Replace an existing blob.")
@click.option("--block-size", type=int, default=None, help="Block size in bytes.")
@click.option("--concurrency", type=int, default=None, help="Blocks staged in parallel.")
@click.option("--content-type", default=None, help="Content-Type stored with the blob.")
@click.option("--tier", default=None, help="Access tier (Hot, Cool, Cold, Archive).")
def blob_upload(
    blob_url: str,
    file: Path,
    overwrite: bool,
    block_size: int | None,
    concurrency: int | None,
    content_type: str | None,
    tier: str | None,
) -> None:
    """Upload FILE to BLOB_URL in staged blocks."""
    from azkit.blob import BlockBlobClient
    from azkit.models.blob import BlobHttpHeaders

    headers = BlobHttpHeaders(content_type=content_type) if content_type else None
    try:
        client = BlockBlobClient(blob_url)
        with file.open("rb") as stream:
            item = client.upload_chunked(
                stream,
                block_size=block_size,
                max_concurrency=concurrency,
                overwrite=overwrite,
                headers=headers,
                tier=tier,
            )
    except (AzkitError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Uploaded {file} ({file.stat().st_size} bytes), ETag {item.etag}")


@blob.command("blocks")
@click.argument("blob_url")
@click.option(
    "--type",
    "list_type",
    type=click.Choice(["all", "committed", "uncommitted"]),
    default="all",
    show_default=True,
)
def blob_blocks(blob_url: str, list_type: str) -> None:
    """List the blocks of BLOB_URL."""
    from azkit.blob import BlockBlobClient
    from azkit.models.blob import BlockListType

    try:
        blocks = BlockBlobClient(blob_url).list_blocks(BlockListType(list_type))
    except (AzkitError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    groups = (("committed", blocks.committed_blocks), ("uncommitted", blocks.uncommitted_blocks))
    for label, items in groups:
        for block in items:
            click.echo(f"{label}\t{block.name}\t{block.size}")


@blob.command("commit")
@click.argument("blob_url")
@click.argument("block_ids", nargs=-1, required=True)
@click.option("--overwrite", is_flag=True, default=False, help="Replace an existing blob.")
def blob_commit(blob_url: str, block_ids: tuple[str, ...], overwrite: bool) -> None:
    """Commit already staged BLOCK_IDS, in order, as the content of BLOB_URL."""
    from azkit.blob import BlockBlobClient

    try:
        item = BlockBlobClient(blob_url).commit_block_list(block_ids, overwrite=overwrite)
    except (AzkitError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(f"Committed {len(block_ids)} blocks, ETag {item.etag}")


# ---------------------------------------------------------------------------
# docs
# ---------------------------------------------------------------------------


@cli.group()
def docs() -> None:
    """Document Analysis."""


@docs.command("analyze")
@click.argument("endpoint")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--model", "model_id", default="prebuilt-layout", show_default=True)
@click.option("--api-key", envvar="AZKIT_DOCUMENTS_KEY", default=None, help="Resource key.")
@click.option("--pages", default=None, help='Page selection, e.g. "1-3,5".')
@click.option("--timeout", type=float, default=None, help="Seconds to wait for the result.")
def docs_analyze(
    endpoint: str,
    file: Path,
    model_id: str,
    api_key: str | None,
    pages: str | None,
    timeout: float | None,
) -> None:
    """Analyze FILE and print the tables found in it."""
    from azkit.documents import DocumentAnalysisClient

    client = DocumentAnalysisClient(endpoint, api_key=api_key)
    try:
        poller = client.begin_analyze_document(model_id, file.read_bytes(), pages=pages)
        result = poller.result(timeout)
    except (AzkitError, TimeoutError, ValueError) as exc:
        raise click.ClickException(str(exc)) from exc
    tables = (result.tables if result else None) or []
    click.echo(f"{len(tables)} table(s)")
    for index, table in enumerate(tables):
        click.echo(f"\nTable {index}: {table.row_count} x {table.column_count}")
        for row in table.to_rows():
            click.echo("\t".join(cell or "" for cell in row))
