"""
RAG Chunker CLI Application.

Main entry point for the rag-chunker command-line interface. Chunks documents
from files or stdin and exposes the markdown detector and structure parser for
inspection.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .. import __version__
from ..core.document_processor.chunking import chunk_document
from ..core.document_processor.markdown_detection import detect_markdown_indicators
from ..core.document_processor.markdown_parser import parse_markdown_structure
from ..exceptions.chunking_exceptions import ChunkingError
from ..exceptions.config_exceptions import ConfigurationError
from ..utils.config import ConfigManager
from ..utils.logging_config import setup_logging

# Rich consoles: results on stdout, logs on stderr
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)

# Create main Typer app
app = typer.Typer(
    name="rag-chunker",
    help="Split documents into context-tagged chunks for embedding",
    add_completion=False,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)

PREVIEW_LENGTH = 60
STDIN_PATH = "-"


def configure_logging(
    verbose: bool = False,
    level: str = "INFO",
    log_format: str = "standard",
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up logging with a rich console handler.

    Args:
        verbose: Enable verbose (DEBUG) logging, overriding level
        level: Configured log level
        log_format: Format for the optional log file
        log_file: Optional rotating log file

    Returns:
        Configured logger instance
    """
    rich_handler = RichHandler(
        console=err_console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )

    setup_logging(
        level="DEBUG" if verbose else level,
        log_format=log_format,
        log_file=log_file,
        console_handler=rich_handler,
    )
    return logging.getLogger("rag_chunker")


def get_config_manager(ctx: typer.Context) -> ConfigManager:
    """
    Get or create the configuration manager for this invocation.

    The first call loads configuration and applies its logging settings.

    Raises:
        typer.Exit: If configuration loading fails
    """
    state = ctx.ensure_object(dict)

    if state.get("config_manager") is None:
        try:
            manager = ConfigManager(config_file=state.get("config_path"), load_env=True)
            manager.load_config()
        except ConfigurationError as e:
            rprint(f"[red]Configuration Error:[/red] {escape(str(e))}")
            raise typer.Exit(1)

        settings = manager.logging_settings()
        configure_logging(
            verbose=state.get("verbose", False),
            level=settings["level"],
            log_format=settings["log_format"],
            log_file=settings["log_file"],
        )
        state["config_manager"] = manager

    return state["config_manager"]


def read_input(path: str) -> str:
    """
    Read document text from a file path, or from stdin for "-".

    Raises:
        FileNotFoundError: If the path does not exist
    """
    if path == STDIN_PATH:
        return sys.stdin.read()

    file_path = Path(path)
    if not file_path.is_file():
        raise FileNotFoundError(f"No such file: {path}")
    return file_path.read_text(encoding="utf-8")


def preview(text: Optional[str], max_length: int = PREVIEW_LENGTH) -> str:
    """Single-line, markup-safe preview of text."""
    if not text:
        return ""
    flat = " ".join(text.split())
    if len(flat) > max_length:
        flat = flat[:max_length - 3] + "..."
    return escape(flat)


# Global callback for common options
@app.callback()
def main(
    ctx: typer.Context,
    config_path: Optional[str] = typer.Option(
        None,
        "--config-path",
        "-c",
        help="Path to configuration file (default: ragchunker.config.json)",
        metavar="PATH",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging (DEBUG level)",
    ),
) -> None:
    """
    RAG Chunker CLI - structure-aware document chunking for retrieval.

    Common workflows:
    • Chunk a file: rag-chunker chunk notes.md --strategy hybrid
    • Pipe text in: cat notes.md | rag-chunker chunk - --format json
    • Inspect structure: rag-chunker parse notes.md

    For detailed help on any command, use: rag-chunker <command> --help
    """
    configure_logging(verbose)

    ctx.obj = {
        "config_path": config_path,
        "verbose": verbose,
        "config_manager": None,
    }


@app.command()
def chunk(
    ctx: typer.Context,
    path: str = typer.Argument(STDIN_PATH, help="File to chunk, or - for stdin"),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s",
        help="token_based, markdown, hybrid (semantic, sentence and recursive run as token_based)",
    ),
    chunk_size: Optional[int] = typer.Option(None, "--chunk-size", help="Target maximum tokens per chunk"),
    overlap: Optional[int] = typer.Option(None, "--overlap", help="Tokens of overlap for token_based chunking"),
    strip_non_ascii: Optional[bool] = typer.Option(
        None, "--strip-non-ascii/--keep-non-ascii",
        help="Replace non-ASCII characters before token_based chunking",
    ),
    output_format: str = typer.Option("table", "--format", "-f", help="Output format: table or json"),
    with_metadata: bool = typer.Option(
        False, "--with-metadata",
        help="With --format json, emit objects with index and token estimate",
    ),
) -> None:
    """Chunk a document and print the chunks."""
    if output_format not in ("table", "json"):
        rprint(f"[red]Error:[/red] Unknown format '{escape(output_format)}', use table or json")
        raise typer.Exit(1)

    try:
        config_manager = get_config_manager(ctx)
        chunk_config = config_manager.chunk_config(
            strategy=strategy,
            chunk_size=chunk_size,
            overlap=overlap,
            strip_non_ascii=strip_non_ascii,
        )
        text = read_input(path)
        chunks = chunk_document(text, chunk_config)
    except typer.Exit:
        raise
    except Exception as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    if output_format == "json":
        payload: List[Any]
        if with_metadata:
            payload = [
                {
                    "chunk_index": item.sequence_index,
                    "content": item.render(),
                    "token_estimate": item.token_estimate,
                }
                for item in chunks
            ]
        else:
            payload = [item.render() for item in chunks]
        typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))
        return

    table = Table(title=f"Chunks ({chunk_config.strategy}, chunk_size={chunk_config.chunk_size})")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Tokens", justify="right", style="green")
    table.add_column("Context", style="blue")
    table.add_column("Preview", style="white")

    for item in chunks:
        table.add_row(
            str(item.sequence_index),
            str(item.token_estimate),
            escape(item.heading_context or ""),
            preview(item.content),
        )

    console.print(table)
    total_tokens = sum(item.token_estimate for item in chunks)
    console.print(f"{len(chunks)} chunks, {total_tokens} estimated tokens")


@app.command()
def detect(
    path: str = typer.Argument(STDIN_PATH, help="File to inspect, or - for stdin"),
) -> None:
    """Report whether a document looks like markdown."""
    try:
        text = read_input(path)
    except Exception as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    indicators = detect_markdown_indicators(text)

    table = Table(title="Markdown Indicators")
    table.add_column("Indicator", style="cyan")
    table.add_column("Found", style="green")
    for name, found in (
        ("heading", indicators.has_heading),
        ("code fence", indicators.has_code_fence),
        ("list", indicators.has_list),
        ("blockquote", indicators.has_blockquote),
        ("table", indicators.has_table),
        ("link", indicators.has_link),
    ):
        table.add_row(name, "yes" if found else "no")

    console.print(table)
    verdict = "[green]markdown[/green]" if indicators.is_markdown else "[yellow]plain text[/yellow]"
    console.print(f"Detected: {verdict}")


@app.command()
def parse(
    ctx: typer.Context,
    path: str = typer.Argument(STDIN_PATH, help="File to parse, or - for stdin"),
) -> None:
    """Show the structural elements of a markdown document."""
    try:
        model = get_config_manager(ctx).get("chunking.model")
        text = read_input(path)
        elements = parse_markdown_structure(text, model)
    except typer.Exit:
        raise
    except Exception as e:
        handle_cli_error(e)
        raise typer.Exit(1)

    table = Table(title="Structural Elements")
    table.add_column("#", justify="right", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Level", justify="right")
    table.add_column("Tokens", justify="right", style="green")
    table.add_column("Context", style="blue")
    table.add_column("Preview", style="white")

    for index, element in enumerate(elements):
        table.add_row(
            str(index),
            element.kind.value,
            str(element.heading_level) if element.heading_level else "",
            str(element.token_estimate),
            escape(element.heading_context or ""),
            preview(element.content),
        )

    console.print(table)
    console.print(f"{len(elements)} elements")


@app.command()
def info(ctx: typer.Context) -> None:
    """Show effective configuration."""
    config_manager = get_config_manager(ctx)
    summary: Dict[str, Any] = config_manager.get_config_summary()
    chunking = config_manager.get("chunking", {})
    logging_settings = config_manager.logging_settings()

    info_text = Text()
    info_text.append("RAG Chunker Information\n\n", style="bold blue")
    info_text.append(f"Version: {__version__}\n")
    config_state = "loaded" if summary["config_file_loaded"] else "not found, using defaults"
    info_text.append(f"Config file: {summary['config_file']} ({config_state})\n")
    info_text.append(f"Project root: {summary['project_root']}\n\n")

    info_text.append("Chunking:\n", style="bold")
    info_text.append(f"• Strategy: {chunking.get('strategy')}\n")
    info_text.append(f"• Chunk size: {chunking.get('chunk_size')}\n")
    info_text.append(f"• Overlap: {chunking.get('overlap')}\n")
    info_text.append(f"• Strip non-ASCII: {chunking.get('strip_non_ascii')}\n")
    info_text.append(f"• Model: {chunking.get('model')}\n\n")

    info_text.append("Logging:\n", style="bold")
    info_text.append(f"• Level: {logging_settings['level']}\n")
    info_text.append(f"• Format: {logging_settings['log_format']}\n")

    overrides = summary["environment_overrides"]
    if overrides:
        info_text.append(f"\nEnvironment overrides: {', '.join(overrides)}\n")

    console.print(Panel(info_text, title="System Information", border_style="blue"))


@app.command()
def version() -> None:
    """Show version information."""
    rprint(f"RAG Chunker [blue]v{__version__}[/blue]")


def handle_cli_error(error: Exception) -> None:
    """
    Handle CLI errors with user-friendly messages.

    Args:
        error: The exception that occurred
    """
    message = escape(str(error))

    if isinstance(error, ConfigurationError):
        rprint(f"[red]Configuration Error:[/red] {message}")
    elif isinstance(error, ChunkingError):
        rprint(f"[red]Chunking Error:[/red] {message}")
    elif isinstance(error, FileNotFoundError):
        rprint(f"[red]File Not Found:[/red] {message}")
    elif isinstance(error, PermissionError):
        rprint(f"[red]Permission Denied:[/red] {message}")
    else:
        rprint(f"[red]Error:[/red] {message}")
    logger.debug("Error details", exc_info=True)


def cli_main() -> None:
    """
    Main CLI entry point with error handling.

    This function is called by the console script entry point.
    """
    try:
        app()
    except KeyboardInterrupt:
        rprint("\n[yellow]Operation cancelled by user[/yellow]")
        sys.exit(130)
    except Exception as e:
        handle_cli_error(e)
        sys.exit(1)


if __name__ == "__main__":
    cli_main()
