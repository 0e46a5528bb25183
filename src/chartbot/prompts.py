"""
Query categorization and system prompts.

Code-flavoured questions get a system prompt that asks for [Language] labels
before each fenced block, which is the format parser.code_segments expects.
Everything else gets a plain conversational prompt.
"""

import re


class QueryType:
    CODE = "code"
    INFORMATIVE = "informative"


# Matched as substrings: "let" also hits "letter".
CODE_KEYWORDS = (
    "code", "program", "function", "implement", "algorithm",
    "javascript", "python", "swift", "java", "html", "css",
    "api", "database", "loop", "array", "class", "struct",
    "variable", "const", "let", "var", "func", "method",
)

CODE_SYNTAX_PATTERNS = tuple(re.compile(p) for p in (
    r"how (do|can|to) (i|we|you) (make|create|build|implement)",
    r"show me (how|an example)",
    r"write (a|the|some)",
    r"syntax for",
    r"example of",
))

CODE_PROMPT = """\
You are a helpful and friendly AI assistant specialized in providing clear, well-structured code examples.

When providing code examples:
1. Always wrap code blocks with triple backticks and specify the language
2. Include brief comments explaining key parts
3. Ensure consistent indentation
4. Add a brief explanation before each code block
5. For multiple programming languages:
   - Use [Language Name] before each code block
   - Maintain consistent formatting across examples

Example format:
Here's how to do X...

[Swift]
```swift
// Code example
```

[Python]
```python
# Code example
```"""

INFORMATIVE_PROMPT = """\
You are a helpful and friendly AI assistant providing clear, informative responses.

When answering questions:
1. Provide concise, accurate information
2. Use clear explanations without technical jargon unless necessary
3. Structure responses with proper paragraphs and bullet points when appropriate
4. Include relevant examples or analogies when helpful
5. Avoid using code blocks unless specifically asked

Focus on delivering information in a conversational, easy-to-understand manner."""


def categorize(query: str) -> str:
    """Return QueryType.CODE or QueryType.INFORMATIVE for a user query."""
    lowered = query.lower()
    if any(keyword in lowered for keyword in CODE_KEYWORDS):
        return QueryType.CODE
    if any(pattern.search(lowered) for pattern in CODE_SYNTAX_PATTERNS):
        return QueryType.CODE
    return QueryType.INFORMATIVE


def system_prompt(query_type: str) -> str:
    if query_type == QueryType.CODE:
        return CODE_PROMPT
    return INFORMATIVE_PROMPT
