"""
Pydantic models for the translation endpoint's JSON payloads.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator


# ─────────────────────────────────────────────────────────────
# Batch Translation
# ─────────────────────────────────────────────────────────────

class BatchTranslateItem(BaseModel):
    """One keyed fragment in a batch. Ids must be unique within a batch."""
    id: str
    text: str


class BatchTranslateRequest(BaseModel):
    batch: Literal[True] = True
    before: str
    after: str
    texts: list[BatchTranslateItem]
    mode: Literal["html"] = "html"


class BatchTranslateResult(BaseModel):
    """Per-item outcome reported by the endpoint."""
    id: str
    original: str
    translated: str | None = None
    success: bool
    error: str | None = None

    @model_validator(mode="after")
    def _drop_translation_on_failure(self) -> "BatchTranslateResult":
        if not self.success:
            self.translated = None
        return self


class BatchTranslateResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: bool
    results: list[BatchTranslateResult]
    processed: int | None = None
    total: int | None = None
    execution_time: float | None = Field(default=None, alias="executionTime")  # ms


# ─────────────────────────────────────────────────────────────
# Single Translation
# ─────────────────────────────────────────────────────────────

class TranslateRequest(BaseModel):
    before: str
    after: str
    text: str
    mode: Literal["html"] = "html"


class TranslateOutcome(BaseModel):
    status: bool = False
    result: str | None = None


class TranslateResponse(BaseModel):
    response: TranslateOutcome | None = None
