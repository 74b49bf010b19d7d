from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ShareType(str, Enum):
    download = "d"
    preview = "i"


class ShareReference(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: ShareType
    token: str = Field(min_length=1, pattern=r"^[A-Za-z0-9_-]+$")
    resource_key: str | None = None
    sub_path: str | None = None
    public_url: str | None = None


class UpstreamResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    status_code: int
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class ResolutionResult(BaseModel):
    ok: bool
    share_url: str
    status_code: int
    raw_body: str = ""
    direct_link: str | None = None
    reason: str | None = None
