"""CLI entrypoint using typer."""

from __future__ import annotations

import asyncio

import structlog
import typer
from rich.console import Console
from rich.markup import escape

from doc_cache_core.config.settings import Settings
from doc_cache_core.exceptions import DocCacheError, DocumentFetchError, NonRetryableError
from doc_cache_core.models.cache_entry import DocumentData
from doc_cache_core.models.options import (
    CacheOptions,
    CacheTime,
    GetDocumentOptions,
    RetryOptions,
)
from doc_cache_engine.observability import (
    bind_request_context,
    clear_request_context,
    configure_logging,
)
from doc_cache_engine.reader import get_document
from doc_cache_engine.tools.factories import (
    create_cache_client,
    create_document_cache_store,
    create_document_client,
)

app = typer.Typer(
    name="doc-cache",
    help="Cached, retrying reads of single Firestore documents",
)
console = Console()
logger = structlog.get_logger()


@app.command()
def get(
    path: str = typer.Argument(..., help="Document path, e.g. users/alice"),
    cache: bool = typer.Option(False, "--cache/--no-cache", help="Use and manage the cache"),
    cache_time: float | None = typer.Option(
        None, "--cache-time", help="Cache time in milliseconds ('inf' never expires)"
    ),
    lock: bool = typer.Option(False, "--lock", help="Lock --cache-time for later reads"),
    bypass_lock: bool = typer.Option(
        False, "--bypass-lock", help="Ignore the locked cache time for this read"
    ),
    force_refresh: bool = typer.Option(
        False, "--force-refresh", help="Discard the cached entry and refetch"
    ),
    retry: bool = typer.Option(False, "--retry/--no-retry", help="Retry failed fetches"),
    max_retries: int = typer.Option(3, "--max-retries", help="Total attempts when retrying"),
    retry_delay: float = typer.Option(
        0.0, "--retry-delay", help="Milliseconds to wait between attempts"
    ),
    retry_on: list[str] | None = typer.Option(
        None, "--retry-on", help="Only retry these error codes (repeatable)"
    ),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Fetch one document and print it as JSON."""
    settings = Settings()  # type: ignore[call-arg]
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)

    options = GetDocumentOptions(
        cache_options=CacheOptions(
            enabled=cache,
            cache_time=CacheTime(
                time=cache_time, locked=lock, bypass_locked_time=bypass_lock
            ),
            force_refresh=force_refresh,
        ),
        retry_options=RetryOptions(
            enabled=retry,
            max_retries=max_retries,
            retry_delay=retry_delay,
            retry_on_error_code=retry_on or None,
        ),
    )

    bind_request_context(path)
    try:
        doc = asyncio.run(_get_document(settings, path, options))
    except NonRetryableError as exc:
        code = getattr(exc.__cause__, "code", None)
        console.print(f"[red]Error:[/red] {escape(str(exc))} (code: {code})")
        raise typer.Exit(code=1) from exc
    except DocumentFetchError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))} (code: {exc.code})")
        raise typer.Exit(code=1) from exc
    except DocCacheError as exc:
        console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    finally:
        clear_request_context()

    if doc is None:
        console.print(f"[yellow]Document not found:[/yellow] {escape(path)}")
        raise typer.Exit(code=1)
    console.print_json(data=doc)


@app.command()
def clear(
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Enable debug logging"),
) -> None:
    """Remove every cached document entry."""
    settings = Settings()  # type: ignore[call-arg]
    if verbose:
        settings.log_level = "DEBUG"
    configure_logging(settings)

    asyncio.run(_clear_cache(settings))
    console.print(f"[green]Cleared[/green] {settings.cache_namespace}")


async def _get_document(
    settings: Settings, path: str, options: GetDocumentOptions
) -> DocumentData | None:
    """Build collaborators from settings and read one document."""
    client = create_document_client(settings)
    cache_client = await create_cache_client(settings)
    try:
        store = create_document_cache_store(settings, cache_client)
        return await get_document(client, path, options, store=store)
    finally:
        await cache_client.close()


async def _clear_cache(settings: Settings) -> None:
    """Clear the configured document namespace."""
    cache_client = await create_cache_client(settings)
    try:
        await create_document_cache_store(settings, cache_client).clear()
        logger.info("document_cache_cleared", namespace=settings.cache_namespace)
    finally:
        await cache_client.close()


if __name__ == "__main__":
    app()
