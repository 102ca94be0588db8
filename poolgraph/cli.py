import asyncio
import logging

import typer
from dotenv import load_dotenv
from web3 import Web3

from poolgraph.config.settings import DATABASE_URL
from poolgraph.utils.types import PoolVersion
from poolgraph.utils.logging_setup import setup_logging

log = logging.getLogger(__name__)

app = typer.Typer(help="Uniswap V2/V3 pool catalog and swap path search")


@app.callback()
def main_callback(
    log_level: str = typer.Option("INFO", help="Root log level"),
):
    load_dotenv()
    setup_logging(log_level)


@app.command("ingest")
def ingest():
    """
    Backfill every PairCreated / PoolCreated log from block 0 to the chain head.
    """
    from poolgraph.ingestion.runner import run_backfill
    from poolgraph.rpc.errors import ResourceExhausted

    try:
        stats = asyncio.run(run_backfill())
    except ResourceExhausted as e:
        log.error(f"[cli] Ingestion aborted: {e}")
        raise typer.Exit(code=1)
    except Exception:
        log.error("[cli] Ingestion failed", exc_info=True)
        raise typer.Exit(code=1)
    typer.echo(
        f"Stored {stats.pools_stored} pools from {stats.logs_fetched} logs "
        f"({stats.logs_rejected} rejected) in {stats.duration_seconds:.2f}s"
    )


@app.command("paths")
def paths(
    token_a: str = typer.Argument(..., help="0x... token address"),
    token_b: str = typer.Argument(..., help="0x... token address"),
    version: PoolVersion = typer.Option(PoolVersion.V2, help="V2 or V3 pools"),
    database_url: str = typer.Option(DATABASE_URL, help="SQLAlchemy database URL"),
):
    """
    List every swap path (at most two hops) between two tokens.
    """
    from sqlalchemy.orm import sessionmaker

    from poolgraph.graph.paths import find_swap_paths
    from poolgraph.storage.db import create_tables, make_engine
    from poolgraph.storage.pool_store import PoolStore

    for token in (token_a, token_b):
        if not Web3.is_address(token):
            typer.echo(f"Not an address: {token}", err=True)
            raise typer.Exit(code=2)

    engine = make_engine(database_url)
    create_tables(engine)
    store = PoolStore(sessionmaker(bind=engine)())
    try:
        found = find_swap_paths(token_a, token_b, version, store)
    finally:
        store.close()
        engine.dispose()

    if found is None:
        typer.echo("Tokens not found in the graph.")
        raise typer.Exit(code=1)

    typer.echo(f"Found {len(found)} paths from {token_a} to {token_b}:")
    for path in found:
        typer.echo(" -> ".join(path))


def main():
    app()


if __name__ == "__main__":
    main()
