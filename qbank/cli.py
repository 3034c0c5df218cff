"""qbank CLI - search study notes by keyword."""

from __future__ import annotations

import logging
import re
from pathlib import Path

import click

from qbank.config import load_config
from qbank.errors import ConfigError, FileAccessError, InvalidQueryError, RecordNotFoundError
from qbank.logging_utils import configure_logging
from qbank.pipeline.pipeline import Corpus, load_or_build, source_text
from qbank.schemas import SearchHitModel, SearchResponseModel
from qbank.search.query import MATCH_MODES, RANKINGS, SearchEngine, SearchHit
from qbank.storage.index_store import save_index

_ws_re = re.compile(r"\s+")
SNIPPET_CHARS = 160
QUIT_WORDS = {":q", "quit", "exit"}


def _snippet(text: str) -> str:
    collapsed = _ws_re.sub(" ", text).strip()
    if len(collapsed) <= SNIPPET_CHARS:
        return collapsed
    return collapsed[: SNIPPET_CHARS - 1].rstrip() + "…"


def _format_hit(rank: int, hit: SearchHit) -> str:
    record = hit.record
    score = f"{hit.score:g}"
    lines = [
        f"{rank}. [{record.kind}] {record.title or '(untitled)'}  (score {score})",
        f"   {record.id}",
    ]
    if len(record.heading_path) > 1:
        lines.append(f"   {' > '.join(record.heading_path)}")
    lines.append(f"   {_snippet(record.text)}")
    return "\n".join(lines)


def _load(ctx: click.Context, path: str | None, index_path: str | None = None) -> Corpus:
    """Load the corpus or abort with exit code 1."""
    config = ctx.obj["config"]
    try:
        return load_or_build(config, corpus_path=path, index_path=index_path)
    except FileAccessError as e:
        click.echo(f"✗ Load failed: {e}", err=True)
        raise click.Abort()


path_option = click.option(
    "--path", "-p", "path", default=None,
    help="Corpus directory or file (default: corpus.path / $QBANK_CORPUS_PATH)",
)


@click.group()
@click.option("--config", "-c", "config_path", default=None, help="Configuration file path")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool):
    """qbank - keyword search over Markdown study notes."""
    try:
        config = load_config(config_path)
    except (FileNotFoundError, ConfigError) as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        raise click.Abort()

    configure_logging(
        logging.DEBUG if verbose else config.logging.level,
        log_file=Path(config.logging.file) if config.logging.file else None,
    )
    ctx.obj = {"config": config}


@cli.command()
@path_option
@click.option("--index", "index_path", default=None, help="Index cache file to reuse or write")
@click.option("--mode", type=click.Choice(MATCH_MODES), default=None, help="Match all terms (and) or any term (or)")
@click.option("--ranking", type=click.Choice(RANKINGS), default=None, help="Ranking function")
@click.option("--limit", "-n", type=click.IntRange(min=1), default=None, help="Maximum number of results")
@click.option("--all", "show_all", is_flag=True, help="Return every match")
@click.option("--only", type=click.Choice(["section", "qa"]), default=None, help="Restrict record kind")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON")
@click.argument("query", nargs=-1, required=True)
@click.pass_context
def search(ctx, path, index_path, mode, ranking, limit, show_all, only, as_json, query):
    """Search the corpus for QUERY."""
    config = ctx.obj["config"]
    corpus = _load(ctx, path, index_path)
    engine = SearchEngine(corpus.index, corpus.tokenizer)

    query_text = " ".join(query)
    mode = mode or config.search.mode
    ranking = ranking or config.search.ranking
    if show_all:
        limit = None
    elif limit is None:
        limit = config.search.limit
    kinds = [only] if only else None

    try:
        hits = engine.search(query_text, mode=mode, ranking=ranking, limit=limit, kinds=kinds)
    except InvalidQueryError as e:
        click.echo(f"✗ Invalid query: {e}", err=True)
        ctx.exit(2)

    if as_json:
        response = SearchResponseModel(
            query=query_text,
            mode=mode,
            ranking=ranking,
            total=len(hits),
            results=[
                SearchHitModel(
                    id=hit.record.id,
                    kind=hit.record.kind,
                    doc_id=hit.record.doc_id,
                    title=hit.record.title,
                    heading_path=list(hit.record.heading_path),
                    score=hit.score,
                    matched_terms=list(hit.matched_terms),
                )
                for hit in hits
            ],
        )
        click.echo(response.model_dump_json(indent=2))
        return

    if not hits:
        click.echo("No matches.")
        return
    for rank, hit in enumerate(hits, start=1):
        click.echo(_format_hit(rank, hit))


@cli.command()
@path_option
@click.option("--output", "-o", required=True, help="Index file to write")
@click.pass_context
def build(ctx, path, output):
    """Build the index and save it to OUTPUT."""
    corpus = _load(ctx, path)
    save_index(corpus.index, output)
    stats = corpus.stats()
    click.echo(f"✓ Indexed {stats['records']} records from {stats['documents']} documents")
    click.echo(f"✓ Index saved to: {output}")


@cli.command()
@path_option
@click.argument("record_id")
@click.pass_context
def show(ctx, path, record_id):
    """Print the Markdown of one section or QA item."""
    corpus = _load(ctx, path)
    engine = SearchEngine(corpus.index, corpus.tokenizer)
    try:
        record = engine.get_record(record_id)
    except RecordNotFoundError as e:
        click.echo(f"✗ {e}", err=True)
        raise click.Abort()

    click.echo(f"[{record.kind}] {record.id}")
    if record.heading_path:
        click.echo(" > ".join(record.heading_path))
    click.echo("")
    click.echo(source_text(corpus.documents, record_id) or record.text)


@cli.command()
@path_option
@click.pass_context
def stats(ctx, path):
    """Show corpus statistics."""
    corpus = _load(ctx, path)
    for key, value in corpus.stats().items():
        click.echo(f"{key.replace('_', ' ').capitalize()}: {value}")


@cli.command()
@path_option
@click.option("--mode", type=click.Choice(MATCH_MODES), default=None, help="Match all terms (and) or any term (or)")
@click.option("--ranking", type=click.Choice(RANKINGS), default=None, help="Ranking function")
@click.pass_context
def repl(ctx, path, mode, ranking):
    """Interactive search prompt. Enter :q to quit."""
    config = ctx.obj["config"]
    corpus = _load(ctx, path)
    engine = SearchEngine(corpus.index, corpus.tokenizer)
    mode = mode or config.search.mode
    ranking = ranking or config.search.ranking

    click.echo(f"Loaded {len(corpus.index)} records. Enter :q to quit.")
    while True:
        try:
            query = click.prompt("qbank", default="", show_default=False, prompt_suffix="> ")
        except click.Abort:
            break
        if query.strip() in QUIT_WORDS:
            break
        try:
            hits = engine.search(query, mode=mode, ranking=ranking, limit=config.search.limit)
        except InvalidQueryError as e:
            click.echo(f"✗ Invalid query: {e}", err=True)
            continue
        if not hits:
            click.echo("No matches.")
        for rank, hit in enumerate(hits, start=1):
            click.echo(_format_hit(rank, hit))


@cli.command()
@click.option("--config", "-c", "config_path", required=True, help="Configuration file path")
def validate(config_path: str):
    """Validate configuration file."""
    try:
        cfg = load_config(config_path)
    except (FileNotFoundError, ConfigError) as e:
        click.echo(f"✗ Configuration error: {e}", err=True)
        raise click.Abort()

    click.echo("✓ Configuration is valid")
    click.echo(f"  Corpus path: {cfg.corpus.path}")
    click.echo(f"  Extensions: {', '.join(cfg.corpus.file_extensions)}")
    click.echo(f"  Search: mode={cfg.search.mode} ranking={cfg.search.ranking} limit={cfg.search.limit}")


def main():
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
