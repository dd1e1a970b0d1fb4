"""
Split a concatenated completion into titled, displayable sections.

The completion flow prefixes every section with a ``## <Section Name>``
header. This module reverses that purely textually: it has no notion of
nested markers or escaping, so malformed text still produces output, only
possibly a visually odd one. A ``*`` used for emphasis inside a key point
splits that point, and an odd number of code fences leaves the trailing
block misclassified. Both are accepted limitations of the heuristic.
"""

from typing import List

from learning_assistant.summarizer.models import (
    ContentBlock,
    FormattedSection,
    QAPair,
    RenderKind,
)

SECTION_MARKER = "##"
LIST_MARKER = "*"
QUESTION_MARKER = "Question:"
ANSWER_MARKER = "Answer:"
CODE_FENCE = "```"

# Checked in order; the first keyword found in the title wins.
_KIND_KEYWORDS = (
    ("key points", RenderKind.LIST),
    ("questions and answers", RenderKind.QA),
    ("code explanation", RenderKind.CODE),
)


def classify_title(title: str) -> RenderKind:
    lowered = title.lower()
    for keyword, kind in _KIND_KEYWORDS:
        if keyword in lowered:
            return kind
    return RenderKind.PROSE


def split_list_items(body: str) -> List[str]:
    items = (piece.strip() for piece in body.split(LIST_MARKER))
    return [item for item in items if item]


def split_qa_pairs(body: str) -> List[QAPair]:
    pairs: List[QAPair] = []
    for chunk in body.split(QUESTION_MARKER):
        if not chunk.strip():
            continue
        question, _, answer = chunk.partition(ANSWER_MARKER)
        pairs.append(QAPair(question=question.strip(), answer=answer.strip()))
    return pairs


def split_code_blocks(body: str) -> List[ContentBlock]:
    """Alternate prose and code around fences: odd positions are code."""
    return [
        ContentBlock(text=piece.strip(), is_code=index % 2 == 1)
        for index, piece in enumerate(body.split(CODE_FENCE))
    ]


def build_section(chunk: str) -> FormattedSection:
    title, _, body = chunk.partition("\n")
    title = title.strip()
    kind = classify_title(title)
    section = FormattedSection(title=title, body=body.strip(), kind=kind)

    if kind is RenderKind.LIST:
        section.items = split_list_items(body)
    elif kind is RenderKind.QA:
        section.qa = split_qa_pairs(body)
    elif kind is RenderKind.CODE:
        section.blocks = split_code_blocks(body)
    return section


def format_sections(text: str) -> List[FormattedSection]:
    """
    Turn a ``##``-delimited completion into an ordered list of sections.

    Args:
        text: Concatenated completion text.

    Returns:
        Sections in their original order. Empty or whitespace-only chunks
        between markers are skipped.
    """
    return [
        build_section(chunk)
        for chunk in text.split(SECTION_MARKER)
        if chunk.strip()
    ]
