from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse
from loguru import logger

from relay.api.deps import get_app_settings, get_resolver
from relay.core.config import Settings
from relay.schemas.share import ResolutionResult, ShareReference, ShareType
from relay.services.pages import render_download_page, render_fallback_page
from relay.services.resolver import ShareResolver, browsable_share_url, upstream_error_details
from relay.services.routing import match_share_path

router = APIRouter(tags=["share"])


def redirect_home() -> RedirectResponse:
    return RedirectResponse("/", status_code=302)


@router.get("/ping", response_class=PlainTextResponse)
def ping():
    return "pong"


def _fallback(ref: ShareReference, result: ResolutionResult, settings: Settings) -> HTMLResponse:
    details = upstream_error_details(result.raw_body)
    if result.reason and "reason" not in details:
        details = {"reason": result.reason, **details}
    html = render_fallback_page(
        browsable_share_url(ref, result.share_url, settings.provider_host),
        result.status_code,
        details=details,
        reveal_after_ms=settings.fallback_reveal_ms,
        show_diagnostics=settings.show_diagnostics,
    )
    return HTMLResponse(html, status_code=200)


# the trailing `{rest:path}` is parsed by match_share_path, not by FastAPI
@router.get("/d/{rest:path}", response_class=HTMLResponse)
@router.get("/i/{rest:path}", response_class=HTMLResponse)
def resolve_share(
    request: Request,
    resolver: ShareResolver = Depends(get_resolver),
    settings: Settings = Depends(get_app_settings),
):
    try:
        # scope["path"] keeps characters that URL parsing would drop
        ref = match_share_path(request.scope["path"], request.query_params)
        if ref is None:
            return redirect_home()

        result = resolver.resolve(ref)
        if not result.ok:
            return _fallback(ref, result, settings)

        if ref.type is ShareType.preview:
            return RedirectResponse(result.direct_link, status_code=302)
        return HTMLResponse(render_download_page(result.direct_link), status_code=200)
    except Exception:
        logger.exception("Unhandled error while serving {}", request.url.path)
        return redirect_home()
