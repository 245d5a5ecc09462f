from __future__ import annotations

import logging
import sys

import httpx

import hirest

logger: logging.Logger = logging.getLogger(__name__)

HOST = "http://localhost:9200"


def _handler(request: httpx.Request) -> httpx.Response:
    if request.method == "HEAD":
        return httpx.Response(200 if request.url.path == "/" else 404)
    if request.url.path == "/index/_doc/1":
        return httpx.Response(
            200, json={"_index": "index", "_type": "_doc", "_id": "1", "found": True}
        )
    return httpx.Response(
        404, json={"_index": "index", "_type": "_doc", "_id": "2", "found": False}
    )


def _create_transport() -> hirest.RestClient:
    transport = httpx.MockTransport(_handler)
    return hirest.RestClient(
        config=hirest.TransportConfig(host=HOST),
        client=httpx.Client(transport=transport),
        async_client=httpx.AsyncClient(transport=transport),
    )


def check_ping() -> None:
    logger.info("Checking ping...")
    with _create_transport() as transport:
        assert hirest.HighLevelClient(transport).ping()


def check_get() -> None:
    logger.info("Checking get...")
    with _create_transport() as transport:
        client = hirest.HighLevelClient(transport)
        assert client.get(hirest.GetRequest("index", "1")).found
        assert not client.get(hirest.GetRequest("index", "2")).found


def check_exists() -> None:
    logger.info("Checking exists...")
    with _create_transport() as transport:
        assert not hirest.HighLevelClient(transport).exists(hirest.GetRequest("index", "2"))


def main() -> None:
    r"""Run all package checks to validate installation and
    functionality."""
    try:
        check_ping()
        check_get()
        check_exists()

        logger.info("✅ All package checks passed successfully!")
    except Exception:
        logger.exception("❌ Package check failed")
        sys.exit(1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
