"""Query categorization and system prompts."""

import pytest

from chartbot.prompts import CODE_PROMPT, INFORMATIVE_PROMPT, QueryType, categorize, system_prompt


@pytest.mark.parametrize("query", [
    "Write a Python script that renames files",
    "How do I reverse an ARRAY?",
    "show me an example with generics",
    "what's the syntax for pattern matching",
    "how can we build a todo app",
])
def test_code_queries(query):
    assert categorize(query) == QueryType.CODE


@pytest.mark.parametrize("query", [
    "Who painted the Mona Lisa?",
    "Tell me about the history of Rome",
    "Why is the sky blue?",
])
def test_informative_queries(query):
    assert categorize(query) == QueryType.INFORMATIVE


def test_keywords_match_as_substrings():
    # "let" inside "letter"
    assert categorize("help me draft a cover letter") == QueryType.CODE


def test_system_prompt_selection():
    assert system_prompt(QueryType.CODE) == CODE_PROMPT
    assert system_prompt(QueryType.INFORMATIVE) == INFORMATIVE_PROMPT
    assert "[Language Name]" in CODE_PROMPT
    assert "Avoid using code blocks" in INFORMATIVE_PROMPT
