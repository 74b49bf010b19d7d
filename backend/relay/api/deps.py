from fastapi import Request

from relay.core.config import Settings
from relay.services.resolver import ShareResolver


def get_resolver(request: Request) -> ShareResolver:
    return request.app.state.resolver


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
