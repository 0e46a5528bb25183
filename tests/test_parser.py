"""Response content parser."""

from chartbot.models.content import CodeSegment
from chartbot.parser import code_segments, contains_code, parse, text_content

FENCE = "```"


def test_labeled_blocks_yield_one_segment_each():
    content = f"Intro text.\n[Python]\n{FENCE}python\nprint(1)\n{FENCE}\n[JS]\n{FENCE}js\nconsole.log(1)\n{FENCE}"
    segments = code_segments(content)

    assert [(s.language, s.code) for s in segments] == [("Python", "print(1)"), ("JS", "console.log(1)")]
    assert "Intro text." in segments[0].explanation
    assert segments[1].explanation == ""


def test_labeled_block_explanation_is_prose_since_previous_block():
    content = (
        f"Two ways.\n[Swift]\n{FENCE}swift\nprint(1)\n{FENCE}\n"
        f"In Python it is shorter:\n[Python]\n{FENCE}python\nprint(1)\n{FENCE}"
    )
    segments = code_segments(content)
    assert segments[0].explanation == "Two ways."
    assert segments[1].explanation == "In Python it is shorter:"


def test_labeled_block_label_is_trimmed_and_fence_tag_may_be_empty():
    content = f"[ Rust ]\n{FENCE}\nfn main() {{}}\n{FENCE}"
    assert code_segments(content) == [CodeSegment(language="Rust", code="fn main() {}", explanation="")]


def test_single_fenced_block():
    segments = code_segments(f"Here is code:\n{FENCE}py\nx=1\n{FENCE}")
    assert segments == [CodeSegment(language="py", code="x=1", explanation="Here is code:")]


def test_untagged_fence_defaults_to_code():
    segments = code_segments(f"{FENCE}\n  echo hi  \n{FENCE}")
    assert segments[0].language == "code"
    assert segments[0].code == "echo hi"


def test_bare_fences_share_the_leading_explanation():
    content = f"First:\n{FENCE}sh\nls\n{FENCE}\nthen:\n{FENCE}sh\npwd\n{FENCE}"
    segments = code_segments(content)
    assert [s.code for s in segments] == ["ls", "pwd"]
    assert all(s.explanation == "First:" for s in segments)


def test_labeled_pass_wins_over_bare_fences():
    content = f"{FENCE}sh\nls\n{FENCE}\n[Go]\n{FENCE}go\nfmt.Println()\n{FENCE}"
    segments = code_segments(content)
    assert [s.language for s in segments] == ["Go"]


def test_labeled_explanation_drops_dangling_fence_text():
    content = f"Try:\n{FENCE}\nold\n{FENCE} and then see\n[Go]\n{FENCE}go\nx\n{FENCE}"
    segments = code_segments(content)
    assert segments == [CodeSegment(language="Go", code="x", explanation="and then see")]


def test_no_fences():
    parsed = parse("Just a normal sentence.")
    assert parsed.segments == []
    assert parsed.text == "Just a normal sentence."
    assert not parsed.contains_code


def test_unterminated_fence_is_plain_text():
    content = f"{FENCE}python\nprint(1)"
    assert code_segments(content) == []
    assert text_content(content) == content
    assert not contains_code(content)


def test_text_content_stops_at_first_label_marker():
    content = f"Intro text.\n[Python]\n{FENCE}python\nprint(1)\n{FENCE}"
    assert text_content(content) == "Intro text."
    assert text_content("  padded  ") == "padded"


def test_parse_never_raises_on_odd_input():
    for content in ["", "[", "]", "[]", FENCE, FENCE * 3, "[x]" + FENCE, "\x00\n" + FENCE + "\n"]:
        parsed = parse(content)
        assert isinstance(parsed.text, str)
