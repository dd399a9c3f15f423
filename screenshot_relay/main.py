from __future__ import annotations

import asyncio
import logging
import os
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from . import screenshot
from .allowlist import is_allowed_target
from .auth import get_settings, require_basic_auth
from .config import Settings
from .errors import InvalidTarget, RelayError, RenderBusy
from .viewer import render_viewer_page


logger = logging.getLogger(__name__)


@asynccontextmanager
async def _render_slot(request: Request):
    semaphore: asyncio.Semaphore | None = request.app.state.render_semaphore
    if semaphore is None:
        yield
        return
    settings = get_settings(request)
    try:
        await asyncio.wait_for(semaphore.acquire(), timeout=settings.render_acquire_timeout_s)
    except asyncio.TimeoutError:
        logger.warning("Render slots exhausted (%d in flight)", settings.render_concurrency)
        raise RenderBusy() from None
    try:
        yield
    finally:
        semaphore.release()


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    app = FastAPI(title="Screenshot Relay", version="0.1.0")
    app.state.settings = settings
    app.state.render_semaphore = (
        asyncio.Semaphore(settings.render_concurrency) if settings.render_concurrency > 0 else None
    )

    @app.exception_handler(RelayError)
    async def relay_error_handler(request: Request, exc: RelayError):
        return PlainTextResponse(exc.message, status_code=exc.status_code, headers=exc.headers)

    @app.get("/healthz")
    def healthz():
        return {"ok": True}

    @app.get("/", response_class=HTMLResponse, dependencies=[Depends(require_basic_auth)])
    def viewer(target: str | None = None, settings: Settings = Depends(get_settings)):
        target = target or settings.default_target
        if not is_allowed_target(target, settings.allowed_hosts):
            raise InvalidTarget("Target not allowed. Update ALLOWED_HOSTS.")
        return HTMLResponse(render_viewer_page(target))

    @app.get("/screenshot", dependencies=[Depends(require_basic_auth)])
    async def screenshot_endpoint(
        request: Request,
        url: str | None = None,
        settings: Settings = Depends(get_settings),
    ):
        if not is_allowed_target(url, settings.allowed_hosts):
            raise InvalidTarget("Invalid or disallowed target")
        async with _render_slot(request):
            shot = await screenshot.capture_screenshot(
                url,
                viewport=settings.viewport,
                timeout_ms=settings.render_timeout_ms,
            )
        return Response(content=shot.data, media_type=shot.mime, headers={"cache-control": "no-store"})

    return app


def run() -> None:
    import uvicorn

    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = Settings.from_env()
    app = create_app(settings)
    logger.info("Server listening on port %d", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
