"""Result models returned by the AI adapter."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ModelDescriptor(BaseModel):
    """A ranked model name."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Model identifier without the 'models/' prefix")
    quality_score: int = Field(description="Ranking score, higher is preferred")


class WordSelection(BaseModel):
    """A word to patch in the markup, optionally paired with an emoji."""

    model_config = ConfigDict(frozen=True)

    word: str = Field(min_length=1)
    emoji: str | None = None


class WordSelectionResult(BaseModel):
    """Words chosen for coloring and the model that chose them."""

    model_config = ConfigDict(frozen=True)

    words: list[str] = Field(default_factory=list)
    model_used: str | None = None

    def as_selections(self) -> list[WordSelection]:
        return [WordSelection(word=w) for w in self.words]


class EmojiSelectionResult(BaseModel):
    """A single emoji grapheme chosen for a text fragment."""

    model_config = ConfigDict(frozen=True)

    emoji: str | None = None
    model_used: str | None = None
