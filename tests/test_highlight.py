from __future__ import annotations

from folio.highlight import highlight, resolve_language, tokenize


def _span(kind: str, text: str) -> str:
    return f'<span class="sh__token--{kind}" style="color: var(--sh-{kind})">{text}</span>'


def test_javascript_tokens_are_classified() -> None:
    output = highlight("const total = 42 // answer")

    assert _span("keyword", "const") in output
    assert _span("identifier", "total") in output
    assert _span("sign", "=") in output
    assert _span("number", "42") in output
    assert _span("comment", "// answer") in output


def test_strings_classes_and_properties() -> None:
    output = highlight('const m = new Map(); console.log("hi")', "ts")

    assert _span("class", "Map") in output
    assert _span("identifier", "console") in output
    assert _span("property", "log") in output
    assert _span("string", "&quot;hi&quot;") in output


def test_python_profile_uses_hash_comments_and_python_keywords() -> None:
    output = highlight("def greet(name):  # say hi\n    return f'hi {name}'\n", "python")

    assert _span("keyword", "def") in output
    assert _span("keyword", "return") in output
    assert _span("comment", "# say hi") in output
    assert _span("string", "f&#x27;hi {name}&#x27;") in output


def test_output_is_escaped_and_split_into_lines() -> None:
    output = highlight("a < b\nb > c\n")

    assert output.count('<span class="sh__line">') == 2
    assert "&lt;" in output and "&gt;" in output


def test_multiline_comment_spans_lines() -> None:
    output = highlight("/* one\ntwo */ x")

    lines = output.split("\n")
    assert len(lines) == 2
    assert _span("comment", "/* one") in lines[0]
    assert _span("comment", "two */") in lines[1]


def test_tokens_cover_entire_input() -> None:
    code = "if (a && b) {\n  return `t ${x}`;\n}\n"

    assert "".join(token.text for token in tokenize(code)) == code


def test_unknown_language_falls_back_to_javascript() -> None:
    assert resolve_language("brainfuck") is resolve_language(None)
    assert resolve_language("PY").name == "python"
    assert resolve_language("bash").name == "shell"


def test_highlight_is_deterministic() -> None:
    code = "let x = 1;\nx += 2;"

    assert highlight(code, "js") == highlight(code, "js")
