from typing import Optional
from urllib.parse import urlparse

from pydantic import field_validator

from infra.web.routers.schemas import CamelModel


class CheckRequestDTO(CamelModel):
    url: str

    @field_validator("url", mode="after")
    @classmethod
    def is_url_valid(cls, url: str):
        parsed = urlparse(url)
        if not all([parsed.scheme, parsed.netloc]):
            raise ValueError(f"Invalid URL: {url}")

        if parsed.scheme not in ("http", "https"):
            raise ValueError(f"URL must use http or https scheme: {url}")

        return url


class CheckResponseDTO(CamelModel):
    url: str
    ok: bool
    status_code: Optional[int] = None
    error: Optional[str] = None
