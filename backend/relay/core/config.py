from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_name: str = "Share Relay"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    provider_host: str = "disk.yandex.com"
    api_base: str = "https://cloud-api.yandex.net/v1/disk/public"
    # "fold" keeps `path` inside the share URL, "separate" sends it as its own query parameter
    subpath_mode: str = "fold"
    upstream_timeout_seconds: float = 10.0

    cache_ttl_seconds: int = 60
    cache_maxsize: int = 1024

    fallback_reveal_ms: int = 3000
    show_diagnostics: bool = True

    static_dir: str = "public"
    cors_origins: str = "*"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def separate_subpath(self) -> bool:
        return self.subpath_mode.strip().lower() == "separate"


@lru_cache
def get_settings() -> Settings:
    return Settings()
