"""
Data models for Quotebox.

Quotes are immutable values; two quotes are the same record when both
their text and category are exactly equal.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError as PydanticValidationError

from quotebox.errors import FormatError, ValidationError

# Fallbacks used when a remote item lacks a usable title or body
NO_TEXT = "No text"
UNCATEGORIZED = "Uncategorized"


class Quote(BaseModel):
    """A single quote and its category."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True, extra="ignore")

    text: str = Field(min_length=1, description="Quote text")
    category: str = Field(min_length=1, description="Quote category")

    @classmethod
    def create(cls, text: str, category: str) -> "Quote":
        """Build a quote from user input, raising ValidationError if either field is blank."""
        text = (text or "").strip()
        category = (category or "").strip()
        if not text or not category:
            raise ValidationError("Please enter both quote text and category.")
        return cls(text=text, category=category)

    @classmethod
    def from_json(cls, data: Any) -> "Quote":
        """Parse a decoded JSON object into a quote, raising FormatError on bad shape."""
        if not isinstance(data, dict):
            raise FormatError(f"Expected a quote object, got {type(data).__name__}")
        try:
            return cls.model_validate(data)
        except PydanticValidationError as e:
            raise FormatError(f"Invalid quote: {e.errors()[0]['msg']}") from e

    @property
    def key(self) -> tuple[str, str]:
        """Identity tuple used for deduplication."""
        return (self.text, self.category)

    def to_json(self) -> dict[str, str]:
        return {"text": self.text, "category": self.category}


class RemoteItem(BaseModel):
    """A post as served by the remote endpoint. Only title and body matter."""

    model_config = ConfigDict(extra="ignore")

    title: Any = None
    body: Any = None

    def to_quote(self) -> Quote:
        """Map title to text and body to category, with fixed fallbacks."""
        return Quote(
            text=_text_or(self.title, NO_TEXT),
            category=_text_or(self.body, UNCATEGORIZED),
        )


def _text_or(value: Any, fallback: str) -> str:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return fallback
