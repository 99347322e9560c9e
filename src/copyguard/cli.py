"""
copyguard CLI - copyright checks from the command line.

Commands:
    copyguard check SUMMARY_JSON [SOURCES_JSON]   Validate one summary
    copyguard audit BUNDLE_JSON                   Audit a batch of summaries
    copyguard serve                               Run the compliance API

SUMMARY_JSON holds one summary object (title, body, category, sources).
SOURCES_JSON holds a list of article objects; without it the summary's own
sources are used. BUNDLE_JSON holds {"summaries": [...], "articles":
{"<category>": [...]}}.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from .analysis.models import CandidateSummary, SourceDocument, Verdict
from .analysis.validators import ComplianceChecker, SummaryValidator
from .config import ConfigError, ValidationConfig, load_validation_config
from .pipeline.audit import audit_summaries

app = typer.Typer(help="Copyright safety checks for AI-generated news summaries")
console = Console()

POLICIES = {"summary": SummaryValidator, "compliance": ComplianceChecker}


def _load_json(path: Path) -> Any:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        console.print(f"[bold red]Error:[/bold red] {path} not found")
        raise typer.Exit(2)
    except json.JSONDecodeError as e:
        console.print(f"[bold red]Error:[/bold red] {path} is not valid JSON: {e}")
        raise typer.Exit(2)


def _bad_input(path: Path, e: Exception) -> typer.Exit:
    console.print(f"[bold red]Error:[/bold red] {path} has an unexpected shape: {e}")
    return typer.Exit(2)


def _load_summary(path: Path) -> CandidateSummary:
    try:
        return CandidateSummary.from_dict(_load_json(path))
    except (ValueError, TypeError, AttributeError) as e:
        raise _bad_input(path, e)


def _load_articles(path: Path) -> list[SourceDocument]:
    data = _load_json(path)
    try:
        if not isinstance(data, list):
            raise TypeError("expected a list of articles")
        return [SourceDocument.from_dict(a) for a in data]
    except (ValueError, TypeError, AttributeError) as e:
        raise _bad_input(path, e)


def _load_bundle(path: Path) -> tuple[list[CandidateSummary], dict[str, list[SourceDocument]]]:
    bundle = _load_json(path)
    try:
        summaries = [CandidateSummary.from_dict(s) for s in bundle.get("summaries", [])]
        articles = {
            category: [SourceDocument.from_dict(a) for a in items]
            for category, items in (bundle.get("articles") or {}).items()
        }
    except (ValueError, TypeError, AttributeError) as e:
        raise _bad_input(path, e)
    return summaries, articles


def _build_config(
    max_quote_length: int | None,
    max_similarity: float | None,
    min_transformation: float | None,
) -> ValidationConfig:
    base = load_validation_config()
    try:
        return ValidationConfig(
            max_quote_length=(
                base.max_quote_length if max_quote_length is None else max_quote_length
            ),
            max_similarity_score=base.max_similarity_score if max_similarity is None else max_similarity,
            min_transformation_ratio=(
                base.min_transformation_ratio if min_transformation is None else min_transformation
            ),
        )
    except ConfigError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(2)


def _format_metric(kind: str, metric: float | None) -> str:
    if metric is None:
        return "-"
    if kind in ("similarity", "transformation", "rewriting"):
        return f"{metric * 100:.1f}%"
    return str(int(metric))


def render_verdict(verdict: Verdict) -> Table:
    table = Table(title=f"Copyright check ({verdict.policy})")
    table.add_column("Check", style="bold")
    table.add_column("Status")
    table.add_column("Metric")
    table.add_column("Details")

    for kind, result in verdict.checks.items():
        status = "[red]FAIL[/red]" if result.violation else "[green]PASS[/green]"
        details = result.reason or ""
        if result.evidence:
            details = f"{details} ({result.evidence})" if details else result.evidence
        table.add_row(kind, status, _format_metric(kind, result.metric), details)
    return table


@app.command()
def check(
    summary_file: Path = typer.Argument(..., help="JSON file with one summary"),
    sources_file: Path = typer.Argument(None, help="JSON file with a list of articles"),
    policy: str = typer.Option("summary", help="summary or compliance"),
    max_quote_length: int = typer.Option(None, help="Verbatim run limit in words"),
    max_similarity: float = typer.Option(None, help="Similarity limit (0-1)"),
    min_transformation: float = typer.Option(None, help="Required rewritten share (0-1)"),
):
    """Validate one summary and print the per-check diagnostics."""
    if policy not in POLICIES:
        console.print(f"[bold red]Error:[/bold red] policy must be one of: {', '.join(POLICIES)}")
        raise typer.Exit(2)

    summary = _load_summary(summary_file)
    if sources_file is not None:
        articles = _load_articles(sources_file)
    else:
        articles = list(summary.sources)

    config = _build_config(max_quote_length, max_similarity, min_transformation)
    verdict = POLICIES[policy](config).validate(summary, articles)

    console.print(render_verdict(verdict))
    if verdict.is_safe:
        console.print(f"\n[bold green]{verdict.message}[/bold green]")
    else:
        console.print(f"\n[bold red]{verdict.message}[/bold red]")
        raise typer.Exit(1)


@app.command()
def audit(
    bundle_file: Path = typer.Argument(..., help="JSON file with summaries and articles"),
    concurrency: int = typer.Option(4, min=1, help="Parallel validations"),
):
    """Run the compliance policy over a batch of summaries."""
    summaries, articles = _load_bundle(bundle_file)

    checker = ComplianceChecker(load_validation_config())
    report = asyncio.run(audit_summaries(summaries, articles, checker, concurrency=concurrency))

    table = Table(title="Audit Report")
    table.add_column("Category", style="bold")
    table.add_column("Title")
    table.add_column("Violations")
    for item in report.violations:
        table.add_row(
            item["category"],
            item["title"],
            ", ".join(v["reason"] for v in item["violations"]),
        )
    if not report.violations:
        table.add_row("ALL", "", "[green]PASS[/green]")
    console.print(table)

    console.print(f"\n{report.passed}/{report.total} summaries passed")
    if report.failed:
        raise typer.Exit(1)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Bind address"),
    port: int = typer.Option(8000, help="Port"),
):
    """Run the compliance API with uvicorn."""
    import uvicorn

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s")
    uvicorn.run("copyguard.api.gateway:create_app", factory=True, host=host, port=port)


if __name__ == "__main__":
    app()
