"""Domain models shared across the summarization flows."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Literal, Optional


InputKind = Literal["text", "url"]
LengthOption = Literal["short", "medium", "long"]


class RenderKind(str, Enum):
    LIST = "list"
    QA = "qa"
    CODE = "code"
    PROSE = "prose"


@dataclass(slots=True)
class SummaryOptions:
    key_points: bool = False
    qa: bool = False
    code_explanation: bool = False


@dataclass(slots=True)
class QAPair:
    question: str
    answer: str = ""


@dataclass(slots=True)
class ContentBlock:
    text: str
    is_code: bool = False


@dataclass(slots=True)
class FormattedSection:
    title: str
    body: str
    kind: RenderKind
    items: List[str] = field(default_factory=list)
    qa: List[QAPair] = field(default_factory=list)
    blocks: List[ContentBlock] = field(default_factory=list)


@dataclass(slots=True)
class PersistedRecord:
    input_type: InputKind
    original_content: str
    processed_content: str
    user_id: Optional[str] = None
    type: str = "summary"

    def to_row(self) -> dict:
        row = {
            "type": self.type,
            "input_type": self.input_type,
            "original_content": self.original_content,
            "processed_content": self.processed_content,
        }
        # Anonymous rows leave the column to its database default.
        if self.user_id:
            row["user_id"] = self.user_id
        return row


@dataclass(slots=True)
class SummaryResult:
    summary: str
    sections: List[FormattedSection]
    record: PersistedRecord
    video_id: Optional[str] = None
