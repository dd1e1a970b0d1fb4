"""Prompt profile data models."""

from string import Formatter
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator

ALLOWED_PLACEHOLDERS = {"content", "length"}


class SectionPrompts(BaseModel):
    """One prompt template per requestable section."""

    summary: str
    key_points: str
    qa: str
    code_explanation: str

    @field_validator("summary", "key_points", "qa", "code_explanation")
    @classmethod
    def validate_template(cls, v: str) -> str:
        """Templates must embed the content and use known placeholders only."""
        try:
            fields = {name for _, name, _, _ in Formatter().parse(v) if name is not None}
        except ValueError as e:
            raise ValueError(f"Invalid prompt template: {e}")
        unknown = fields - ALLOWED_PLACEHOLDERS
        if unknown:
            raise ValueError(f"Unknown placeholders: {', '.join(sorted(unknown))}")
        if "content" not in fields:
            raise ValueError("Template must contain a {content} placeholder")
        return v


class PromptProfile(BaseModel):
    """Prompt set used for one kind of input."""

    id: str = Field(..., pattern=r"^[a-z][a-z0-9_-]*$")
    title: str
    version: str = Field(default="1.0.0")
    description: Optional[str] = None
    input_type: Literal["text", "url"]
    prompts: SectionPrompts

    def render(self, section: str, content: str, length: str = "medium") -> str:
        template = getattr(self.prompts, section)
        return template.format(content=content, length=length)


class PromptProfileSummary(BaseModel):
    id: str
    title: str
    version: str
    description: Optional[str] = None
    input_type: str
