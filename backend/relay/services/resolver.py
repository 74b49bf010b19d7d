from __future__ import annotations

import json
from urllib.parse import quote, urlencode, urlsplit

import requests
from loguru import logger

from relay.core.config import Settings
from relay.schemas.share import ResolutionResult, ShareReference, UpstreamResponse
from relay.services.cache import ResponseCache


def build_share_url(ref: ShareReference, provider_host: str, include_path: bool = True) -> str:
    if ref.public_url:
        return ref.public_url
    url = f"https://{provider_host}/{ref.type.value}/{ref.token}"
    params: list[tuple[str, str]] = []
    if ref.resource_key:
        params.append(("resource_key", ref.resource_key))
    if include_path and ref.sub_path:
        params.append(("path", ref.sub_path))
    if params:
        url += "?" + urlencode(params, quote_via=quote)
    return url


WEB_SCHEMES = ("http", "https")


def browsable_share_url(ref: ShareReference, share_url: str, provider_host: str) -> str:
    """Share URL safe to frame or link from a relay page.

    A ``public_url`` override goes upstream verbatim, but only an http(s) URL
    is ever rendered; anything else is replaced by the provider's own page.
    """
    if urlsplit(share_url).scheme.lower() in WEB_SCHEMES:
        return share_url
    return build_share_url(ref.model_copy(update={"public_url": None}), provider_host)


def build_api_url(api_base: str, share_url: str, path: str | None = None) -> str:
    url = f"{api_base.rstrip('/')}/resources/download?public_key={quote(share_url, safe='')}"
    if path:
        url += f"&path={quote(path, safe='')}"
    return url


def _extract_href(body: str) -> str | None:
    try:
        payload = json.loads(body)
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    href = payload.get("href")
    return href if isinstance(href, str) and href else None


class ShareResolver:
    def __init__(
        self,
        settings: Settings,
        cache: ResponseCache,
        session: requests.Session | None = None,
    ) -> None:
        self.settings = settings
        self.cache = cache
        self.session = session or requests.Session()

    def close(self) -> None:
        self.session.close()

    def share_url_for(self, ref: ShareReference) -> str:
        return build_share_url(
            ref,
            self.settings.provider_host,
            include_path=not self.settings.separate_subpath,
        )

    def api_url_for(self, ref: ShareReference) -> str:
        path = ref.sub_path if self.settings.separate_subpath and not ref.public_url else None
        return build_api_url(self.settings.api_base, self.share_url_for(ref), path)

    def fetch(self, api_url: str) -> UpstreamResponse:
        cached = self.cache.get(api_url)
        if cached is not None:
            logger.debug("Upstream cache hit for {}", api_url)
            return cached

        response = self.session.get(
            api_url,
            headers={"Accept": "application/json"},
            timeout=self.settings.upstream_timeout_seconds,
        )
        upstream = UpstreamResponse(status_code=response.status_code, body=response.text)
        self.cache.put(api_url, upstream)
        return upstream

    def resolve(self, ref: ShareReference) -> ResolutionResult:
        share_url = self.share_url_for(ref)
        api_url = self.api_url_for(ref)

        try:
            upstream = self.fetch(api_url)
        except requests.RequestException as exc:
            logger.warning("Upstream request failed for {}: {}", api_url, exc)
            return ResolutionResult(
                ok=False,
                share_url=share_url,
                status_code=502,
                reason=f"upstream unreachable: {exc.__class__.__name__}",
            )

        href = _extract_href(upstream.body)
        if upstream.ok and href:
            return ResolutionResult(
                ok=True,
                share_url=share_url,
                status_code=upstream.status_code,
                raw_body=upstream.body,
                direct_link=href,
            )

        reason = "missing href" if upstream.ok else f"upstream status {upstream.status_code}"
        logger.warning(
            "Unable to resolve share link: status={} api_url={} body={}",
            upstream.status_code,
            api_url,
            upstream.body,
        )
        return ResolutionResult(
            ok=False,
            share_url=share_url,
            status_code=upstream.status_code,
            raw_body=upstream.body,
            reason=reason,
        )


ERROR_FIELDS = ("error", "description", "message")


def upstream_error_details(body: str) -> dict[str, str]:
    try:
        payload = json.loads(body)
    except ValueError:
        return {}
    if not isinstance(payload, dict):
        return {}
    return {key: str(payload[key]) for key in ERROR_FIELDS if payload.get(key)}
