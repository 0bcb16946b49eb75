"""CLI entry point — all commands defined here."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from svga11y import __version__
from svga11y.config import AssistConfig, ClientConfig, resolve_client_config
from svga11y.models import FixResult

app = typer.Typer(
    name="svga11y",
    help="Accessible names for SVG and IMG elements in markup.",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    if value:
        console.print(f"svga11y {__version__}")
        raise typer.Exit()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(  # noqa: UP007
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log requests and fallbacks."),
    config: Optional[Path] = typer.Option(  # noqa: UP007
        None, "--config", "-c", help="Settings file. Defaults to ./svga11y.yaml.",
    ),
    env_file: Path = typer.Option(
        Path(".env"), "--env-file", help=".env file with provider credentials.",
    ),
) -> None:
    """svga11y — accessibility suggestions for SVG and IMG elements."""
    _setup_logging(verbose)
    ctx.obj = {"config": config, "env_file": env_file}


def _load_settings(ctx: typer.Context) -> AssistConfig:
    config_path = ctx.obj["config"]
    if config_path is not None and not config_path.is_file():
        console.print(f"[red]Config file not found:[/red] {config_path}")
        raise typer.Exit(code=1)
    try:
        return AssistConfig.load(config_path)
    except (ValueError, yaml.YAMLError) as exc:
        console.print(f"[red]Invalid config:[/red] {exc}")
        raise typer.Exit(code=1)


def _client_config(ctx: typer.Context, settings: AssistConfig) -> ClientConfig:
    return resolve_client_config(settings.ai, env_file=ctx.obj["env_file"])


def _read_document(path: Path) -> str:
    if not path.is_file():
        console.print(f"[red]File not found:[/red] {path}")
        raise typer.Exit(code=1)
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError:
        console.print(f"[red]Not a UTF-8 text file:[/red] {path}")
        raise typer.Exit(code=1)


@app.command()
def check(
    ctx: typer.Context,
    document: Path = typer.Argument(..., help="HTML, SVG or template file to analyze."),
    report: Optional[Path] = typer.Option(  # noqa: UP007
        None, "--report", "-r", help="Also write a report to this path.",
    ),
    report_format: Optional[str] = typer.Option(  # noqa: UP007
        None, "--format", "-f", help="Report format: json or markdown.",
    ),
) -> None:
    """Analyze a document for SVG and IMG elements without a name (no modification)."""
    from svga11y.analyzer import MarkupAnalyzer

    text = _read_document(document)
    result = MarkupAnalyzer().analyze_text(text, source=document)

    svg_flagged = sum(1 for i in result.issues if i.rule == "svg-missing-name")
    img_flagged = sum(1 for i in result.issues if i.rule == "img-missing-alt")

    table = Table(title=f"Accessibility Report: {document.name}")
    table.add_column("Metric", style="bold")
    table.add_column("Value")
    table.add_row("SVG elements", str(len(result.svg_nodes)))
    table.add_row(
        "SVG without name",
        "[green]0[/green]" if not svg_flagged else f"[red]{svg_flagged}[/red]",
    )
    table.add_row("Images", str(len(result.img_nodes)))
    table.add_row(
        "Images without alt",
        "[green]0[/green]" if not img_flagged else f"[red]{img_flagged}[/red]",
    )
    table.add_row("Errors", str(result.error_count))
    table.add_row("Warnings", str(result.warning_count))
    console.print(table)

    if result.issues:
        console.print()
        severity_icon = {
            "error": "[red]X[/red]",
            "warning": "[yellow]![/yellow]",
            "info": "[blue]i[/blue]",
        }
        for issue in result.issues:
            icon = severity_icon.get(issue.severity.value, " ")
            console.print(f"  {icon} {issue.line}:{issue.column} " + escape(f"[{issue.rule}] {issue.message}"))

    if report is not None:
        from svga11y.reporter import write_json_report, write_markdown_report

        fmt = report_format or _load_settings(ctx).output.report_format
        if fmt == "json":
            write_json_report(result, report)
        elif fmt == "markdown":
            write_markdown_report(result, report)
        else:
            console.print(f"[red]Unknown report format:[/red] {fmt}")
            raise typer.Exit(code=1)
        console.print(f"[dim]Report written to {report}[/dim]")


@app.command()
def suggest(
    ctx: typer.Context,
    document: Path = typer.Argument(..., help="Document whose flagged elements get suggestions."),
    as_json: bool = typer.Option(False, "--json", help="Print suggestions as JSON."),
) -> None:
    """Print suggestions for every flagged element without editing the file."""
    import httpx

    from svga11y.models import SvgNode
    from svga11y.pipeline import SuggestionPipeline
    from svga11y.reporter import format_wcag, wcag_classification
    from svga11y.scanner import scan_flagged_nodes

    text = _read_document(document)
    client_config = _client_config(ctx, _load_settings(ctx))

    nodes = scan_flagged_nodes(text)
    if not nodes:
        console.print("[dim]No SVG or IMG elements need an accessible name.[/dim]")
        raise typer.Exit()

    async def _suggest_all() -> list[dict[str, Any]]:
        rows: list[dict[str, Any]] = []
        async with httpx.AsyncClient(timeout=client_config.timeout) as client:
            pipeline = SuggestionPipeline(client_config, client=client)
            for node in nodes:
                result = await pipeline.suggest_for_node(node, document_path=document)
                analysis = result.suggestion.wcag_analysis
                wcag = None
                if analysis is not None:
                    wcag = {
                        "status": analysis.conformance.status,
                        "classification": wcag_classification(analysis),
                        "suggested_snippet": analysis.suggested_snippet,
                        "summary": format_wcag(analysis),
                    }
                rows.append({
                    "element": "svg" if isinstance(node, SvgNode) else "img",
                    "line": text.count("\n", 0, node.start) + 1,
                    "strategy": result.strategy.value,
                    "is_decorative": result.suggestion.is_decorative,
                    "title_text": result.suggestion.title_text,
                    "desc_text": result.suggestion.desc_text,
                    "wcag": wcag,
                    "warnings": result.warnings,
                })
        return rows

    rows = asyncio.run(_suggest_all())

    if as_json:
        console.print_json(json.dumps(rows, ensure_ascii=False))
        return

    table = Table(title=f"Suggestions: {document.name}")
    table.add_column("Line", justify="right")
    table.add_column("Element", style="bold")
    table.add_column("Source")
    table.add_column("Suggestion")
    for row in rows:
        label = "[dim]decorative[/dim]" if row["is_decorative"] else escape(row["title_text"])
        if row["desc_text"]:
            label += f"\n[dim]{escape(row['desc_text'])}[/dim]"
        if row["wcag"]:
            label += f"\n[cyan]{escape(row['wcag']['summary'])}[/cyan]"
        source = row["strategy"]
        if row["warnings"]:
            source = f"[yellow]{source}[/yellow]"
        table.add_row(str(row["line"]), f"<{row['element']}>", source, label)
    console.print(table)

    for row in rows:
        for w in row["warnings"]:
            console.print(f"  [yellow]![/yellow] line {row['line']}: {escape(w)}")


@app.command()
def fix(
    ctx: typer.Context,
    document: Path = typer.Argument(..., help="Document to fix."),
    output: Optional[Path] = typer.Option(  # noqa: UP007
        None, "--output", "-o", help="Output path. Defaults to <name>_accessible.<ext>.",
    ),
) -> None:
    """Write a copy of the document with accessible names added."""
    import httpx

    from svga11y.fixer import fix_markup
    from svga11y.pipeline import SuggestionPipeline
    from svga11y.reporter import format_fix_summary

    text = _read_document(document)
    settings = _load_settings(ctx)
    client_config = _client_config(ctx, settings)

    if output is None:
        output = document.with_stem(document.stem + settings.output.suffix)

    if output.resolve() == document.resolve():
        console.print("[red]Output path must differ from input — never modify the original.[/red]")
        raise typer.Exit(code=1)

    console.print(f"[dim]Fixing:[/dim] {document}")
    console.print(f"[dim]Output:[/dim] {output}")

    async def _fix() -> FixResult:
        async with httpx.AsyncClient(timeout=client_config.timeout) as client:
            pipeline = SuggestionPipeline(client_config, client=client)
            return await fix_markup(text, pipeline, document_path=document)

    result = asyncio.run(_fix())
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(result.text, encoding="utf-8")

    if result.warnings:
        console.print("[yellow]Completed with warnings.[/yellow]")
    else:
        console.print(f"[green]OK[/green] Done -- {result.total_changes} change(s) applied.")
    console.print(format_fix_summary(result, document, output), markup=False)


@app.command(name="config")
def show_config(ctx: typer.Context) -> None:
    """Show the resolved AI provider settings."""
    from svga11y.pipeline import strategies_for
    from svga11y.providers import detect_provider

    settings = _load_settings(ctx)
    client_config = _client_config(ctx, settings)

    table = Table(title="AI Provider")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_row("Endpoint", client_config.endpoint or "[red]Not set[/red]")
    table.add_row(
        "Provider",
        detect_provider(client_config.endpoint).value if client_config.endpoint else "-",
    )
    table.add_row("Model", client_config.model or "[dim]default[/dim]")
    table.add_row("API key", client_config.masked_key() or "[red]Not set[/red]")
    table.add_row("Vision", "Yes" if client_config.use_vision else "No")
    table.add_row(
        "Strategies",
        " -> ".join(s.value for s in strategies_for(client_config)),
    )
    console.print(table)
