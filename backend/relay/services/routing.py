from __future__ import annotations

import re
from typing import Mapping

from relay.schemas.share import ShareReference, ShareType

SHARE_PATH_RE = re.compile(r"/([di])/([A-Za-z0-9_-]+)(?:/(.*))?")


def _query_value(query: Mapping[str, str], name: str) -> str | None:
    value = query.get(name)
    return value or None


def match_share_path(path: str, query: Mapping[str, str] | None = None) -> ShareReference | None:
    """Turn a request path like ``/d/<token>/sub/dir`` into a share reference.

    Returns ``None`` when the path is not a share route; callers send the
    browser home in that case.
    """
    match = SHARE_PATH_RE.fullmatch(path)
    if not match:
        return None

    query = query or {}
    share_type, token, rest = match.groups()
    sub_path = f"/{rest}" if rest else None
    return ShareReference(
        type=ShareType(share_type),
        token=token,
        resource_key=_query_value(query, "resource_key"),
        sub_path=_query_value(query, "path") or sub_path,
        public_url=_query_value(query, "public_url"),
    )
