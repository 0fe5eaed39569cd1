"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
from rich.console import Console
from rich.table import Table

from text_analyzer.config import AppConfig, load_config
from text_analyzer.errors import AnalyzerError
from text_analyzer.models.analysis import AnalysisResult
from text_analyzer.registry import ProviderRegistry
from text_analyzer.service import AnalysisService

app = typer.Typer(
    name="text-analyzer",
    help="Writing analysis through configurable LLM providers",
    no_args_is_help=True,
)
console = Console()


def _load(config_path: Path | None, verbose: bool) -> tuple[AppConfig, ProviderRegistry]:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    try:
        config = load_config(config_path)
    except ValueError as exc:
        console.print(f"[red]Invalid configuration: {exc}[/red]")
        raise typer.Exit(1)
    return config, ProviderRegistry.from_config(config)


def _select(registry: ProviderRegistry, provider_id: str | None):
    if provider_id is None:
        return registry.active()
    provider = registry.get(provider_id)
    if provider is None:
        console.print(f"[red]Unknown provider: {provider_id}[/red]")
        raise typer.Exit(1)
    return provider


@app.command()
def analyze(
    file: Path = typer.Argument(help="Text file to analyze"),
    provider_id: str = typer.Option(None, "--provider", "-p", help="Provider id (default: active)"),
    config_path: Path = typer.Option(None, "--config", "-c", help="config.yaml path"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Analyze a text file for writing quality."""
    if not file.exists():
        console.print(f"[red]File not found: {file}[/red]")
        raise typer.Exit(1)

    config, registry = _load(config_path, verbose)
    provider = _select(registry, provider_id)
    service = AnalysisService.from_config(config)

    try:
        result = asyncio.run(service.analyze(file.read_text(encoding="utf-8"), provider))
    except AnalyzerError as exc:
        console.print(f"[red]AI analysis failed: {exc}[/red]")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_wire(), ensure_ascii=False, indent=2))
        return
    _print_result(result)


@app.command("test-connection")
def test_connection(
    provider_id: str = typer.Argument(None, help="Provider id (default: active)"),
    config_path: Path = typer.Option(None, "--config", "-c", help="config.yaml path"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Check that a provider answers the canary prompt."""
    config, registry = _load(config_path, verbose)
    provider = _select(registry, provider_id)
    if provider is None:
        console.print("[red]No active provider configured[/red]")
        raise typer.Exit(1)

    ok = asyncio.run(AnalysisService.from_config(config).test_connection(provider))
    if ok:
        console.print(f"[green]OK[/green] {provider.id} ({provider.kind}, {provider.model})")
    else:
        console.print(f"[red]FAILED[/red] {provider.id} ({provider.kind}, {provider.model})")
        raise typer.Exit(1)


@app.command()
def providers(
    config_path: Path = typer.Option(None, "--config", "-c", help="config.yaml path"),
) -> None:
    """List configured providers."""
    _, registry = _load(config_path, verbose=False)
    table = Table(title="Providers")
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Kind")
    table.add_column("Model")
    table.add_column("Enabled")
    table.add_column("Active")
    for p in registry.providers():
        table.add_row(
            p.id,
            p.name,
            p.kind,
            p.model,
            "yes" if p.enabled else "no",
            "*" if p.id == registry.active_id else "",
        )
    console.print(table)


def _print_result(result: AnalysisResult) -> None:
    score = result.readability_score
    console.print(f"[bold]Readability:[/bold] {score.score:g} ({score.level})")
    for factor in score.factors:
        console.print(f"  [dim]{factor}[/dim]")

    if result.suggestions:
        table = Table(title="Suggestions")
        table.add_column("Type")
        table.add_column("Priority")
        table.add_column("Message")
        table.add_column("Suggested")
        for s in result.suggestions:
            table.add_row(s.kind, s.priority, s.message, s.suggested_text)
        console.print(table)

    if result.semantic_terms:
        table = Table(title="Key terms")
        table.add_column("Term")
        table.add_column("Category")
        table.add_column("Importance")
        for t in result.semantic_terms:
            table.add_row(t.term, t.category, f"{t.importance:.2f}")
        console.print(table)

    if result.summary:
        console.print(f"\n[bold]Summary:[/bold] {result.summary}")


if __name__ == "__main__":
    app()
