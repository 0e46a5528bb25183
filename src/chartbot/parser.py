"""
Splits a message into prose and fenced code segments.

Two formats are recognised, tried in order:

1. Labeled blocks, as the code system prompt asks for::

       [Python]
       ```python
       print(1)
       ```

   Every match becomes a segment whose language is the bracket label.

2. Bare fenced blocks. Only used when no labeled block is found. The language
   is the fence's tag, or "code" when the fence has none.

An unterminated fence matches neither pattern and stays plain text. Parsing
never raises.
"""

import re

from chartbot.models.content import CodeSegment, ParsedContent

FENCE = "```"
DEFAULT_LANGUAGE = "code"

LABELED_BLOCK = re.compile(r"\[([^\]]+)\]\s*```([a-zA-Z]*)\n(.*?)```", re.DOTALL)
FENCED_BLOCK = re.compile(r"```([a-zA-Z]*)\n(.*?)```", re.DOTALL)


def _labeled_segments(content: str) -> list[CodeSegment]:
    segments = []
    prev_end = 0
    for match in LABELED_BLOCK.finditer(content):
        # Prose since the previous block, minus any stray fence left before the label.
        before = content[prev_end:match.start()]
        segments.append(CodeSegment(
            language=match.group(1).strip(),
            code=match.group(3).strip(),
            explanation=before.split(FENCE)[-1].strip(),
        ))
        prev_end = match.end()
    return segments


def _fenced_segments(content: str) -> list[CodeSegment]:
    explanation = content.split(FENCE, 1)[0].strip()
    return [
        CodeSegment(
            language=match.group(1).strip() or DEFAULT_LANGUAGE,
            code=match.group(2).strip(),
            explanation=explanation,
        )
        for match in FENCED_BLOCK.finditer(content)
    ]


def code_segments(content: str) -> list[CodeSegment]:
    """Extract code segments; labeled blocks win over bare fences."""
    return _labeled_segments(content) or _fenced_segments(content)


def text_content(content: str) -> str:
    """Prose to show as ordinary text: everything before the first label marker."""
    return content.split("[", 1)[0].strip()


def contains_code(content: str) -> bool:
    return bool(code_segments(content))


def parse(content: str) -> ParsedContent:
    return ParsedContent(text=text_content(content), segments=code_segments(content))
