"""
Pydantic schemas for rewrite requests and responses.
"""
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, List, Optional


class RewriteRequest(BaseModel):
    """
    Rewrite request body.

    Fields are deliberately loose: any scalar (or nothing) is accepted and
    normalized by the sanitizer, which is also where required-field checks live.
    """
    model_config = ConfigDict(populate_by_name=True)

    text: Optional[Any] = Field(
        None,
        description="Source text to rewrite",
        examples=["However, it is important to utilize resources."]
    )
    anecdote1: Optional[Any] = Field(
        None,
        description="First personal detail to weave in",
        examples=["grew up in Ohio"]
    )
    anecdote2: Optional[Any] = Field(
        None,
        description="Second personal detail to weave in",
        examples=["loves hiking"]
    )
    tone_hint: Optional[Any] = Field(
        None,
        alias="toneHint",
        description="Desired tone (defaults to friendly, conversational)",
        examples=["casual"]
    )
    extra_detail: Optional[Any] = Field(
        None,
        alias="extraDetail",
        description="Additional context to include if provided"
    )


class RewriteResponse(BaseModel):
    """Rewritten text plus static guidance for the author."""
    model_config = ConfigDict(populate_by_name=True)

    rewritten: str
    suggestions: List[str]
    disclosure: str
    word_count: int = Field(..., alias="wordCount")


class ErrorResponse(BaseModel):
    """Body returned for any failed rewrite."""
    error: str
    kind: str
    details: Optional[str] = None
