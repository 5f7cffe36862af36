"""
Chain control examples.

Demonstrates:
- Wrap semantics: code before and after ctx.next()
- Sharing values between handlers through the context store
- Aborting the chain with ChainAbort and ctx.abort()
- Appending handlers while the chain is running
- Copying the context for work that outlives the request
"""

import asyncio
import logging
import time

from starlette.applications import Starlette
from starlette.routing import Route

from request_chain import ChainAbort, ChainApp, Context, recovery

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("examples.wrap_and_abort")

API_KEYS = {"k-123": {"tenant": "acme"}}

_background: set[asyncio.Task[None]] = set()


async def timing(ctx: Context) -> None:
    """Set a header, run the rest of the chain, then log the duration."""
    start = time.perf_counter()
    ctx.response.headers["x-request-start"] = f"{start:.6f}"
    await ctx.next()
    logger.info("%s took %.3fms", ctx.url.path, (time.perf_counter() - start) * 1000)


async def api_key(ctx: Context) -> None:
    """Resolve the tenant or abort with 401."""
    account = API_KEYS.get(ctx.request.headers.get("x-api-key", ""))
    if account is None:
        raise ChainAbort("Invalid API key", status_code=401)
    ctx.set("tenant", account["tenant"])
    await ctx.next()


async def maintenance(ctx: Context) -> None:
    """Skip everything else when maintenance mode is on."""
    if ctx.request.query_params.get("maintenance") == "1":
        ctx.response.write_header(503)
        ctx.abort()
        return
    await ctx.next()


async def audit(ctx: Context) -> None:
    snapshot = ctx.copy()

    async def record() -> None:
        await asyncio.sleep(0)
        logger.info("audit tenant=%s path=%s", snapshot.get("tenant"), snapshot.url.path)

    task = asyncio.get_running_loop().create_task(record())
    _background.add(task)
    task.add_done_callback(_background.discard)
    await ctx.next()


async def router(ctx: Context) -> None:
    """Pick the endpoint at dispatch time."""
    if ctx.params["report"] == "daily":
        ctx.append_handlers(daily_report)
    await ctx.next()


async def daily_report(ctx: Context) -> None:
    await ctx.write_string(f"daily report for {ctx.get('tenant')}\n")


app = Starlette(
    routes=[
        Route(
            "/reports/{report}",
            ChainApp(recovery(), timing, maintenance, api_key, audit, router),
        ),
    ]
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)

    # Test with:
    # curl -H "X-API-Key: k-123" http://localhost:8000/reports/daily
    # curl -i http://localhost:8000/reports/daily
    # curl -i "http://localhost:8000/reports/daily?maintenance=1"
