"""HTTP surface for Mastodon Feed."""

import json
from collections.abc import Callable

from fastapi import FastAPI, Request
from fastapi.responses import (
    HTMLResponse,
    JSONResponse,
    PlainTextResponse,
    RedirectResponse,
    Response,
)
from starlette.concurrency import run_in_threadpool

from .actions import Action, ActionProxy
from .config import Config
from .description import OutputFormat
from .errors import UpstreamError
from .logging_config import create_execution_logger
from .normalize import normalize_all
from .render import render_debug, render_html, render_rss
from .timeline import TimelineFetcher

RSS_MEDIA_TYPE = "application/rss+xml"

FetcherFactory = Callable[[str], TimelineFetcher]
ProxyFactory = Callable[[str], ActionProxy]


def create_app(
    config: Config | None = None,
    fetcher_factory: FetcherFactory | None = None,
    proxy_factory: ProxyFactory | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Every request gets its own fetcher or proxy, created by the factories
    with the request's execution id and closed when the request is done.
    Defaults build real clients from ``config``.

    Raises:
        ConfigError: If the configuration is incomplete
    """
    if config is None:
        config = Config()
    mastodon_config = config.get_mastodon_config()
    server_config = config.get_server_config()
    home_instance = server_config.home_instance

    if fetcher_factory is None:
        def fetcher_factory(execution_id: str) -> TimelineFetcher:
            return TimelineFetcher(mastodon_config, execution_id=execution_id)

    if proxy_factory is None:
        def proxy_factory(execution_id: str) -> ActionProxy:
            return ActionProxy(mastodon_config, execution_id=execution_id)

    app = FastAPI(
        title="Mastodon Feed",
        description="Home timeline as RSS and HTML, with like/boost/reply proxying",
        version="1.0.0",
    )

    @app.get("/", include_in_schema=False)
    def index():
        return RedirectResponse("/feed.html")

    @app.get("/feed.rss")
    def feed_rss():
        logger = create_execution_logger("app")
        try:
            with fetcher_factory(logger.execution_id) as fetcher:
                statuses = fetcher.fetch()
        except UpstreamError as e:
            logger.error(f"RSS feed failed: {e}", route="/feed.rss", status_code=e.status_code)
            return PlainTextResponse(str(e), status_code=500)

        items = normalize_all(statuses, OutputFormat.XML, home_instance)
        body = render_rss(items, channel_link=mastodon_config.instance_url)
        logger.info("Rendered RSS feed", route="/feed.rss", items_count=len(items))
        return Response(content=body, media_type=RSS_MEDIA_TYPE)

    @app.get("/feed.html")
    def feed_html():
        logger = create_execution_logger("app")
        try:
            with fetcher_factory(logger.execution_id) as fetcher:
                statuses = fetcher.fetch()
        except UpstreamError as e:
            logger.error(f"HTML feed failed: {e}", route="/feed.html", status_code=e.status_code)
            return PlainTextResponse(str(e), status_code=500)

        items = normalize_all(statuses, OutputFormat.HTML, home_instance)
        body = render_html(items, home_instance)
        logger.info("Rendered HTML feed", route="/feed.html", items_count=len(items))
        return HTMLResponse(body)

    @app.get("/debug")
    def debug():
        return HTMLResponse(render_debug(home_instance))

    @app.post("/api/like/{post_id}")
    def like(post_id: str):
        return _perform(proxy_factory, Action.LIKE, post_id)

    @app.post("/api/boost/{post_id}")
    def boost(post_id: str):
        return _perform(proxy_factory, Action.BOOST, post_id)

    @app.post("/api/reply/{post_id}")
    async def reply(post_id: str, request: Request):
        if not post_id.strip():
            return PlainTextResponse("Post ID required", status_code=400)

        text = _reply_text(await request.body())
        if text is None:
            return PlainTextResponse("Invalid JSON", status_code=400)

        return await run_in_threadpool(_perform, proxy_factory, Action.REPLY, post_id, text)

    @app.post("/api/{action}/")
    def missing_post_id(action: str):
        if action not in {a.value for a in Action}:
            return PlainTextResponse("Not Found", status_code=404)
        return PlainTextResponse("Post ID required", status_code=400)

    return app


def _perform(
    proxy_factory: ProxyFactory, action: Action, post_id: str, text: str = ""
) -> Response:
    if not post_id.strip():
        return PlainTextResponse("Post ID required", status_code=400)

    logger = create_execution_logger("app")
    try:
        with proxy_factory(logger.execution_id) as proxy:
            done = proxy.perform(action, post_id, text)
    except UpstreamError as e:
        logger.error(
            f"Error performing {action.value}: {e}",
            action=action.value,
            post_id=post_id,
            status_code=e.status_code,
        )
        return JSONResponse({"success": False, "error": str(e)}, status_code=500)

    return JSONResponse({"success": True, "action": done})


def _reply_text(body: bytes) -> str | None:
    """Extract ``text`` from a reply body, or None if the body is malformed."""
    try:
        data = json.loads(body)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None
    text = data.get("text", "")
    if not isinstance(text, str):
        return None
    return text
