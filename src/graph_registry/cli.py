"""CLI commands for the graph registry."""

import asyncio
import json
import logging
import re
import sys

import click

from graph_registry.config import settings


class SecretRedactingFilter(logging.Filter):
    """Filter to redact sensitive information from logs."""

    SECRET_PATTERNS = [
        (re.compile(r"(api[_-]?key[\s:=]+)[\w-]{20,}", re.IGNORECASE), r"\1[REDACTED]"),
        (re.compile(r"\bsk-[\w-]{20,}"), "[REDACTED]"),
        (re.compile(r"(bearer\s+)[\w-]+", re.IGNORECASE), r"\1[REDACTED]"),
        (re.compile(r"(password[\s:=]+)\S+", re.IGNORECASE), r"\1[REDACTED]"),
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        """Redact secrets from the formatted log message."""
        message = record.getMessage()
        for pattern, replacement in self.SECRET_PATTERNS:
            message = pattern.sub(replacement, message)
        record.msg = message
        record.args = None
        return True


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging with secret redaction."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Logger filters skip records propagated from child loggers; handlers see all
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, SecretRedactingFilter) for f in handler.filters):
            handler.addFilter(SecretRedactingFilter())


logger = logging.getLogger(__name__)


def _build_service():
    from graph_registry.db.database import async_session_maker
    from graph_registry.llm.client import get_completion_client
    from graph_registry.service import GraphDataService

    return GraphDataService(async_session_maker, get_completion_client())


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output")
def cli(verbose: bool) -> None:
    """Graph Registry CLI."""
    configure_logging(verbose)


@cli.command("init-db")
def init_db_command() -> None:
    """Create database tables."""
    from graph_registry.db.database import init_db

    asyncio.run(init_db())
    click.echo(f"Database initialized: {settings.DATABASE_URL}")


@cli.command("list")
def list_command() -> None:
    """List all graph data records."""
    asyncio.run(_list())


async def _list() -> None:
    from graph_registry.db.database import init_db
    from graph_registry.exceptions import GraphDataError

    await init_db()
    try:
        records = await _build_service().get_all_graph_data()
    except GraphDataError as e:
        click.echo(f"Error: {e.message}", err=True)
        sys.exit(1)

    if not records:
        click.echo("No graph data found.")
        return

    for record in records:
        click.echo(
            f"{record.id}  chat={record.chat_id}  index={record.index_name}  "
            f"provider={record.selected_provider}"
        )
    click.echo(f"\nTotal: {len(records)}")


@cli.command("show")
@click.argument("record_id")
def show_command(record_id: str) -> None:
    """Show one graph data record as JSON."""
    asyncio.run(_show(record_id))


async def _show(record_id: str) -> None:
    from graph_registry.db.database import init_db
    from graph_registry.exceptions import GraphDataError
    from graph_registry.schemas import GraphDataRead

    await init_db()
    try:
        record = await _build_service().get_graph_data(record_id)
    except GraphDataError as e:
        click.echo(f"Error: {e.message} ({e.kind.value})", err=True)
        sys.exit(1)

    if record is None:
        click.echo(f"No graph data with id {record_id}", err=True)
        sys.exit(1)

    click.echo(GraphDataRead.model_validate(record).model_dump_json(by_alias=True, indent=2))


@cli.command("generate-details")
@click.argument("transcript", type=click.File("r"), default="-")
def generate_details_command(transcript) -> None:
    """Generate a title and description from a chat transcript file (or stdin)."""
    chat_history = transcript.read()
    asyncio.run(_generate_details(chat_history))


async def _generate_details(chat_history: str) -> None:
    from graph_registry.exceptions import GraphDataError
    from graph_registry.llm.exceptions import LLMError

    try:
        details = await _build_service().generate_details(chat_history)
    except (GraphDataError, LLMError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps(details, indent=2, ensure_ascii=False))


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8000, type=int, help="Bind port")
def serve(host: str, port: int) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    uvicorn.run("graph_registry.main:app", host=host, port=port)


def main() -> None:
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
