from __future__ import annotations

import os
from collections.abc import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .models import Viewport


DEFAULT_ALLOWED_HOSTS = ("your-site.example", "localhost")
DEFAULT_TARGET = "https://your-site.example/"


def _split_hosts(raw: str) -> frozenset[str]:
    return frozenset(h.strip() for h in raw.split(",") if h.strip())


class Settings(BaseModel):
    """Process-wide configuration. Built once at startup and never mutated."""

    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = Field(8080, ge=0, le=65535)
    allowed_hosts: frozenset[str] = frozenset(DEFAULT_ALLOWED_HOSTS)
    default_target: str = DEFAULT_TARGET

    # Basic auth is disabled while basic_user is empty.
    basic_user: str = ""
    basic_pass: str = ""

    viewport: Viewport = Field(default_factory=Viewport)
    render_timeout_ms: int = Field(15000, ge=1000, le=120000)
    # 0 leaves concurrent renders unbounded.
    render_concurrency: int = Field(0, ge=0)
    render_acquire_timeout_s: float = Field(0.25, gt=0)

    @property
    def auth_enabled(self) -> bool:
        return bool(self.basic_user)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Settings:
        if environ is None:
            # A local .env is a convenience for development; real env vars win.
            load_dotenv(override=False)
            environ = os.environ

        allowed = _split_hosts(environ.get("ALLOWED_HOSTS", ""))
        return cls(
            host=environ.get("HOST", "0.0.0.0"),
            port=int(environ.get("PORT") or 8080),
            allowed_hosts=allowed or frozenset(DEFAULT_ALLOWED_HOSTS),
            default_target=environ.get("DEFAULT_TARGET") or DEFAULT_TARGET,
            basic_user=environ.get("BASIC_USER", ""),
            basic_pass=environ.get("BASIC_PASS", ""),
            render_timeout_ms=int(environ.get("RENDER_TIMEOUT_MS") or 15000),
            render_concurrency=max(0, int(environ.get("RENDER_CONCURRENCY") or 0)),
            render_acquire_timeout_s=float(environ.get("RENDER_ACQUIRE_TIMEOUT_S") or 0.25),
        )
