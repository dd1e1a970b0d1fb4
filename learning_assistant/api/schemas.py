# learning_assistant/api/schemas.py
from typing import List, Literal, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from learning_assistant.summarizer.models import (
    FormattedSection,
    SummaryOptions,
    SummaryResult,
)
from learning_assistant.todos.store import TodoItem

LengthLiteral = Literal["short", "medium", "long"]
RenderKindLiteral = Literal["list", "qa", "code", "prose"]


class SummaryOptionsModel(BaseModel):
    # accept both snake_case and the camelCase names browser clients send
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    key_points: bool = Field(
        default=False, validation_alias=AliasChoices("key_points", "keyPoints")
    )
    qa: bool = Field(default=False)
    code_explanation: bool = Field(
        default=False,
        validation_alias=AliasChoices("code_explanation", "codeExplanation"),
    )

    def to_domain(self) -> SummaryOptions:
        return SummaryOptions(
            key_points=self.key_points,
            qa=self.qa,
            code_explanation=self.code_explanation,
        )


class TextSummaryRequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    text: str = Field(default="", description="Pasted or extracted text.")
    length: LengthLiteral = Field(default="medium")
    options: SummaryOptionsModel = Field(default_factory=SummaryOptionsModel)
    user_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("user_id", "userId")
    )


class VideoSummaryRequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    # plain str: shape checking is done by video-id extraction
    url: str = Field(default="", description="youtu.be or youtube.com/watch URL.")
    options: SummaryOptionsModel = Field(default_factory=SummaryOptionsModel)
    user_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("user_id", "userId")
    )


class SectionsRequestModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    text: str


class QAPairModel(BaseModel):
    question: str
    answer: str


class ContentBlockModel(BaseModel):
    text: str
    is_code: bool


class SectionModel(BaseModel):
    title: str
    kind: RenderKindLiteral
    body: str
    items: List[str] = Field(default_factory=list)
    qa: List[QAPairModel] = Field(default_factory=list)
    blocks: List[ContentBlockModel] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, section: FormattedSection) -> "SectionModel":
        return cls(
            title=section.title,
            kind=section.kind.value,
            body=section.body,
            items=list(section.items),
            qa=[QAPairModel(question=p.question, answer=p.answer) for p in section.qa],
            blocks=[
                ContentBlockModel(text=b.text, is_code=b.is_code)
                for b in section.blocks
            ],
        )


class SectionsResponseModel(BaseModel):
    sections: List[SectionModel]


class SummaryResponseModel(BaseModel):
    summary: str
    input_type: Literal["text", "url"]
    sections: List[SectionModel]
    video_id: Optional[str] = None

    @classmethod
    def from_domain(cls, result: SummaryResult) -> "SummaryResponseModel":
        return cls(
            summary=result.summary,
            input_type=result.record.input_type,
            sections=[SectionModel.from_domain(s) for s in result.sections],
            video_id=result.video_id,
        )


class DocumentTextModel(BaseModel):
    filename: Optional[str] = None
    text: str
    characters: int


class TodoCreateModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    text: str


class TodoModel(BaseModel):
    id: int
    text: str
    completed: bool

    @classmethod
    def from_domain(cls, item: TodoItem) -> "TodoModel":
        return cls(id=item.id, text=item.text, completed=item.completed)
