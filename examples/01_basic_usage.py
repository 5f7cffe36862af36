"""
Basic usage example of request-chain.

Demonstrates:
- Building a handler chain with ChainApp
- Wrapping the rest of the chain with request_logger
- Short-circuiting with require_header
- Reading route params set by the router
"""

import logging

from starlette.applications import Starlette
from starlette.routing import Route

from request_chain import ChainApp, Context, request_logger, require_header

logging.basicConfig(level=logging.INFO)


async def hello(ctx: Context) -> None:
    """Main handler - writes the greeting."""
    await ctx.write_string(f"Hello, {ctx.params['name']}!\n")


async def whoami(ctx: Context) -> None:
    """Protected handler - only reached when the header is present."""
    await ctx.write_string(f"token: {ctx.request.headers['authorization']}\n")


app = Starlette(
    routes=[
        Route("/hello/{name}", ChainApp(request_logger(), hello)),
        Route(
            "/me",
            ChainApp(request_logger(), require_header("Authorization"), whoami),
        ),
    ]
)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)

    # Test with:
    # curl http://localhost:8000/hello/ada
    # curl -i http://localhost:8000/me
    # curl -H "Authorization: Bearer t" http://localhost:8000/me
