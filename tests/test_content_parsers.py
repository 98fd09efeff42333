from __future__ import annotations

from folio.content import (
    derive_identifier,
    format_date,
    normalize_metadata,
    parse_document,
    split_front_matter,
)


def test_front_matter_round_trip() -> None:
    text = '---\ntitle: "T"\ndate: 2024-01-01\n---\nHello'

    fields, body = split_front_matter(text)

    assert fields == {"title": "T", "date": "2024-01-01"}
    assert body == "Hello"


def test_text_without_front_matter_is_all_body() -> None:
    text = "# Heading\n\n---\n\nNot front matter."

    fields, body = split_front_matter(text)

    assert fields == {}
    assert body == text


def test_unclosed_front_matter_degrades_to_body() -> None:
    text = "---\ntitle: Missing\nHello"

    assert split_front_matter(text) == ({}, text)


def test_invalid_yaml_degrades_to_body() -> None:
    text = "---\ntitle: [unclosed\n---\nBody"

    assert split_front_matter(text) == ({}, text)


def test_non_mapping_front_matter_degrades_to_body() -> None:
    text = "---\n- one\n- two\n---\nBody"

    assert split_front_matter(text) == ({}, text)


def test_empty_front_matter_block() -> None:
    assert split_front_matter("---\n---\nBody\n") == ({}, "Body\n")


def test_body_keeps_original_line_endings() -> None:
    fields, body = split_front_matter("---\r\ntitle: T\r\n---\r\nLine one\r\nLine two\r\n")

    assert fields == {"title": "T"}
    assert body == "Line one\r\nLine two\r\n"


def test_nested_dates_stay_strings() -> None:
    fields, _ = split_front_matter("---\nhistory:\n  - 2023-05-01\n---\n")

    assert fields == {"history": ["2023-05-01"]}


def test_derive_identifier_strips_only_final_extension() -> None:
    assert derive_identifier("hello-world.mdx") == "hello-world"
    assert derive_identifier("notes.v2.md") == "notes.v2"
    assert derive_identifier("README") == "README"


def test_filename_slug_wins_over_front_matter_slug() -> None:
    meta = normalize_metadata("real-slug.mdx", {"slug": "other", "title": "Title"})

    assert meta.slug == "real-slug"
    assert meta.title == "Title"


def test_missing_fields_are_absent() -> None:
    meta = normalize_metadata("bare.mdx", {})

    assert meta.title is None
    assert meta.summary is None
    assert meta.author is None
    assert meta.published_at is None
    assert meta.published_date is None
    assert meta.byline == ""


def test_original_field_names_are_accepted() -> None:
    meta = normalize_metadata(
        "post.mdx",
        {"date": "2024-01-01", "image": "/images/hero.png", "author": "Ada"},
    )

    assert meta.published_at == "2024-01-01"
    assert meta.hero_image == "/images/hero.png"
    assert meta.published_date is not None
    assert meta.published_date.year == 2024
    assert meta.byline == "Ada / January 1, 2024"


def test_unrecognized_fields_are_preserved() -> None:
    meta = normalize_metadata("post.mdx", {"title": "T", "tags": ["a", "b"], "draft": True})

    assert meta.extra_fields == {"tags": ["a", "b"], "draft": True}


def test_scalar_fields_are_coerced_and_non_scalars_dropped() -> None:
    meta = normalize_metadata("post.mdx", {"title": 2024, "summary": ["not", "scalar"]})

    assert meta.title == "2024"
    assert meta.summary is None


def test_unparseable_date_is_treated_as_missing() -> None:
    meta = normalize_metadata("post.mdx", {"date": "someday"})

    assert meta.published_at == "someday"
    assert meta.published_date is None
    assert meta.display_date is None


def test_parse_document_keeps_body_unchanged() -> None:
    document = parse_document("intro.mdx", "---\ntitle: Intro\n---\n\n# Hi\n")

    assert document.slug == "intro"
    assert document.meta.title == "Intro"
    assert document.body == "\n# Hi\n"


def test_format_date_accepts_common_spellings() -> None:
    assert format_date("2024-03-05") == "March 5, 2024"
    assert format_date("2024/03/05") == "March 5, 2024"
    assert format_date("March 5, 2024") == "March 5, 2024"
    assert format_date("2024-03-05T23:30:00+00:00") == "March 5, 2024"
    assert format_date("") is None
    assert format_date(None) is None


def test_front_matter_scalars_keep_their_written_form() -> None:
    document = parse_document(
        "a.mdx",
        "---\ntitle: No\nauthor: Yes\nsummary: 0755\nversion: 1.10\ndraft: true\ndate: 2024-01-01\n---\nHi",
    )
    meta = document.meta

    assert meta.title == "No"
    assert meta.author == "Yes"
    assert meta.summary == "0755"
    assert meta.published_at == "2024-01-01"
    assert meta.extra_fields == {"version": "1.10", "draft": "true"}


def test_slug_is_not_trimmed() -> None:
    meta = normalize_metadata(" hello.mdx", {})

    assert meta.slug == " hello"
    assert meta.slug == derive_identifier(" hello.mdx")


def test_extreme_offset_date_is_treated_as_missing() -> None:
    meta = normalize_metadata("post.mdx", {"date": "0001-01-01T00:00:00+01:00"})

    assert meta.published_date is None
    assert meta.display_date is None
