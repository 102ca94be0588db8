from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from poolgraph.graph.builder import load_graphs
from poolgraph.graph.paths import find_paths, path_pools
from poolgraph.ingestion.runner import runner
from poolgraph.storage.db import get_db
from poolgraph.storage.pool_store import PoolStore
from poolgraph.utils.log_utils import normalize_address
from poolgraph.utils.types import PoolVersion

router = APIRouter()


@router.get("/")
def read_root():
    return {"message": "Welcome to the pool graph API!"}


@router.get("/paths")
def swap_paths(
    token_a: str = Query(..., min_length=42, max_length=42),
    token_b: str = Query(..., min_length=42, max_length=42),
    version: PoolVersion = PoolVersion.V2,
    db: Session = Depends(get_db),
):
    try:
        source = normalize_address(token_a)
        target = normalize_address(token_b)
    except ValueError:
        raise HTTPException(status_code=422, detail="token addresses must be hex")

    graph = load_graphs(PoolStore(db))[version]
    found = find_paths(graph, source, target)
    if found is None:
        raise HTTPException(status_code=404, detail="Tokens not found in the graph.")
    return {
        "version": version.value,
        "count": len(found),
        "paths": [{"tokens": p, "pools": path_pools(graph, p)} for p in found],
    }


@router.post("/trigger/ingestion")
async def trigger():
    runner()
    return {"status": "Ingestion started"}
