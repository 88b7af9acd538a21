"""Pydantic base model."""

import re

from pydantic import BaseModel, ConfigDict, Field


class FrozenBaseModel(BaseModel):
    """Pydantic frozen base model."""

    model_config = ConfigDict(frozen=True, strict=True)


class Match(FrozenBaseModel):
    """One occurrence of a query within a document."""

    text: str = Field(description="Text of the exact match itself.")
    fragment: str = Field(description="Fragment of the surrounding text containing the match.")
    line: int = Field(description="Zero-based line number of the match.")
    column: int = Field(description="Column offset of the match within its line.")
    index: int = Field(description="Index among the other matches.")


class DisplayState(BaseModel):
    """UI-facing snapshot of a search session."""

    current_index: int = -1
    total_matches: int = 0
    case_sensitive: bool = False
    use_regex: bool = False
    input_text: str = ""
    query: re.Pattern[str] | None = None
    error_message: str = ""
    force_focus: bool = False
