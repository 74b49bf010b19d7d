from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from loguru import logger
from starlette.exceptions import HTTPException as StarletteHTTPException

from relay.api.routes import api_router
from relay.api.routes.share import redirect_home
from relay.core.config import Settings, get_settings
from relay.core.logging import init_logging
from relay.services.cache import ResponseCache
from relay.services.resolver import ShareResolver

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-DNS-Prefetch-Control": "off",
}


def create_app(settings: Settings | None = None, resolver: ShareResolver | None = None) -> FastAPI:
    settings = settings or get_settings()
    init_logging(settings.log_level)

    app = FastAPI(title=settings.app_name, docs_url=None, redoc_url=None, openapi_url=None)
    app.state.settings = settings
    app.state.resolver = resolver or ShareResolver(
        settings,
        ResponseCache(ttl_seconds=settings.cache_ttl_seconds, maxsize=settings.cache_maxsize),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def unknown_route(request: Request, exc: StarletteHTTPException):
        # "/" is the redirect target itself
        if exc.status_code in (404, 405) and request.url.path != "/":
            return redirect_home()
        return await http_exception_handler(request, exc)

    app.include_router(api_router)

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        logger.info("Static directory {} not found, serving routes only", static_dir)

    @app.on_event("startup")
    def on_startup():
        logger.info("Share relay ready, resolving against {}", settings.api_base)

    @app.on_event("shutdown")
    def on_shutdown():
        app.state.resolver.close()

    return app


app = create_app()
