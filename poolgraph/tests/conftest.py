import json
import pathlib

import httpx
import pytest
from dotenv import load_dotenv
from sqlalchemy.orm import sessionmaker

# Automatically load .env from project root
load_dotenv(dotenv_path=pathlib.Path(__file__).parent.parent.parent / ".env")

from poolgraph.storage.db import create_tables, make_engine  # noqa: E402
from poolgraph.storage.pool_store import PoolStore  # noqa: E402
from poolgraph.utils.constants import PAIR_CREATED_TOPIC, POOL_CREATED_TOPIC  # noqa: E402

TOKEN_A = "0x55d398326f99059ff775485246999027b3197955"
TOKEN_B = "0xe9e7cea3dedca5984780bafc599bd69add087d56"
TOKEN_C = "0xbb4cdb9cbd36b01bd1cbaebf2de08d9173bc095c"
TOKEN_D = "0x0e09fabb73bd3ade0a17ecc321fd13a19e81ce82"
POOL_P = "0x16b9a82891338f9ba80e2d6970fdda79d1eb0dae"
POOL_Q = "0x58f876857a02d6762e0101bb5c46a8c1ed44dc16"
POOL_R = "0x7efaef62fddcca950418312c6c91aef321375a00"


def topic_for(address: str, padding: str = "00" * 12) -> str:
    return "0x" + padding + address[2:]


def make_log(
    token0: str,
    token1: str,
    pool: str,
    topic0: str = PAIR_CREATED_TOPIC,
    extra_word: int = 1,
) -> dict:
    """Raw eth_getLogs entry the way a node returns it."""
    if topic0 == POOL_CREATED_TOPIC:
        topics = [topic0, topic_for(token0), topic_for(token1), "0x" + "0" * 61 + "bb8"]
    else:
        topics = [topic0, topic_for(token0), topic_for(token1)]
    data = "0x" + "00" * 12 + pool[2:] + f"{extra_word:064x}"
    return {
        "address": "0x8909dc15e40173ff4699343b6eb8132c65e18ec6",
        "topics": topics,
        "data": data,
        "blockNumber": "0x10",
        "transactionHash": "0x" + "ab" * 32,
        "logIndex": "0x0",
    }


class FakeNode:
    """Scripted JSON-RPC endpoints behind an httpx.MockTransport.

    ``script`` maps an endpoint host to the replies it gives, in order; the
    last reply repeats once the list runs out. A reply is an int (bare HTTP
    status), a dict (JSON body), a str (raw text body), an exception to raise
    or a callable taking the parsed request payload.
    """

    def __init__(self, script: dict):
        self.script = {host: list(replies) for host, replies in script.items()}
        self.calls: list[tuple[str, dict]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        payload = json.loads(request.content)
        self.calls.append((host, payload))
        replies = self.script[host]
        reply = replies.pop(0) if len(replies) > 1 else replies[0]
        if callable(reply) and not isinstance(reply, type):
            reply = reply(payload)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, int):
            return httpx.Response(reply)
        if isinstance(reply, str):
            return httpx.Response(200, text=reply)
        return httpx.Response(200, json=reply)

    def hosts(self) -> list[str]:
        return [host for host, _ in self.calls]

    def http(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


def ok(result, req_id: int = 1) -> dict:
    return {"jsonrpc": "2.0", "id": req_id, "result": result}


def rpc_error(message: str, code: int = -32000) -> dict:
    return {"jsonrpc": "2.0", "id": 1, "error": {"code": code, "message": message}}


@pytest.fixture
def engine():
    eng = make_engine("sqlite://")
    create_tables(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def store(engine):
    s = PoolStore(sessionmaker(bind=engine, expire_on_commit=False)())
    yield s
    s.session.close()
