# bacon_ipsum/cli.py
import asyncio
import os

import uvicorn

from bacon_ipsum.core.config import get_settings
from bacon_ipsum.core.logging import get_logger, setup_logging
from bacon_ipsum.services.cache import build_cache_store


def dev() -> None:
    uvicorn.run("bacon_ipsum.main:app", host="0.0.0.0", port=8000, reload=True)


def start() -> None:
    port = int(os.environ.get("PORT", 8000))
    uvicorn.run("bacon_ipsum.main:app", host="0.0.0.0", port=port)


async def _flush() -> int:
    store = build_cache_store(get_settings())
    try:
        return await store.flush_all()
    finally:
        await store.close()


def flush_cache() -> None:
    # Run on uninstall; block content lives in documents and is left alone
    setup_logging()
    count = asyncio.run(_flush())
    get_logger(__name__).info("Cache flushed", deleted=count)
