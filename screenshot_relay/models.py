from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field


class Viewport(BaseModel):
    model_config = ConfigDict(frozen=True)

    width: int = Field(1280, gt=0, le=3840)
    height: int = Field(800, gt=0, le=2160)


@dataclass(frozen=True)
class ScreenshotResult:
    mime: str
    data: bytes
