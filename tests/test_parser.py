"""Tests for parsing the model's analysis reply."""

import pytest

from tdg.core.errors import MalformedResponse
from tdg.llm.parser import (
    MIN_SUMMARY_LENGTH,
    extract_bullets,
    extract_section,
    fallback_key_points,
    parse_analysis,
)

LONG_SUMMARY = (
    "The speaker explains how caption tracks are listed and why manual tracks are preferred."
)


class TestDecoratedHeadings:
    def test_full_response(self, analysis_response: str):
        result = parse_analysis(analysis_response)
        assert result.abstract.startswith("The video explains how YouTube stores")
        assert result.key_points == [
            "Every video lists its caption tracks in the embedded player data",
            "Manual captions are written by people and are usually more accurate",
            "Automatic captions are generated by speech recognition",
            "Each track can be downloaded as a timed-text document",
        ]
        assert result.category == "Technology"
        assert result.summary.startswith("The presenter walks through")
        assert result.summary.endswith("reading its timed text.")

    def test_colon_outside_emphasis(self):
        raw = f"**Category**: Education\n**Detailed Summary**: {LONG_SUMMARY}"
        result = parse_analysis(raw)
        assert result.category == "Education"
        assert result.summary == LONG_SUMMARY

    def test_markdown_headings(self):
        raw = (
            "## Abstract\nA look at caption formats.\n\n"
            "## Key Concepts\n- Timed text\n- Track lists\n\n"
            f"## Detailed Summary\n{LONG_SUMMARY}\n"
        )
        result = parse_analysis(raw)
        assert result.abstract == "A look at caption formats."
        assert result.key_points == ["Timed text", "Track lists"]
        assert result.summary == LONG_SUMMARY

    def test_numbered_headings(self):
        raw = f"1. **Abstract:** A look at caption formats.\n4. **Detailed Summary:** {LONG_SUMMARY}"
        result = parse_analysis(raw)
        assert result.abstract == "A look at caption formats."
        assert result.summary == LONG_SUMMARY

    @pytest.mark.parametrize(
        "abstract_heading, summary_heading",
        [
            ("### **Abstract**", "### **Detailed Summary**"),
            ("## **Abstract:**", "## **Detailed Summary:**"),
            ("**1. Abstract**", "**4. Detailed Summary**"),
            ("## 1. Abstract", "## 4. Detailed Summary"),
            ("### 1. **Abstract**", "### 4. **Summary**:"),
        ],
    )
    def test_combined_heading_styles(self, abstract_heading, summary_heading):
        raw = f"{abstract_heading}\nA look at caption formats.\n\n{summary_heading}\n{LONG_SUMMARY}\n"
        result = parse_analysis(raw)
        assert result.abstract == "A look at caption formats."
        assert result.summary == LONG_SUMMARY

    def test_plain_section_ends_at_emphasised_heading(self):
        raw = f"Abstract: A look at caption formats.\n### **Detailed Summary**\n{LONG_SUMMARY}"
        assert parse_analysis(raw).abstract == "A look at caption formats."

    def test_bold_inside_bullets_does_not_end_section(self):
        raw = (
            "**Key Concepts:**\n- **Tracks**: listed per video\n- **ASR**: automatic\n"
            f"**Detailed Summary:** {LONG_SUMMARY}"
        )
        assert parse_analysis(raw).key_points == ["**Tracks**: listed per video", "**ASR**: automatic"]


class TestPlainHeadings:
    def test_plain_fallback(self):
        raw = (
            "Abstract: This video covers caption retrieval.\n"
            "Key Concepts:\n- one\n- two\n"
            "Category: Education\n"
            f"Detailed Summary: {LONG_SUMMARY}\n"
        )
        result = parse_analysis(raw)
        assert result.abstract == "This video covers caption retrieval."
        assert result.key_points == ["one", "two"]
        assert result.category == "Education"
        assert result.summary == LONG_SUMMARY

    def test_case_insensitive(self):
        result = parse_analysis(f"summary: {LONG_SUMMARY}")
        assert result.summary == LONG_SUMMARY

    def test_key_points_heading_alias(self):
        raw = f"Key Points:\n• alpha\n- beta\nSummary: {LONG_SUMMARY}"
        assert parse_analysis(raw).key_points == ["alpha", "beta"]

    def test_decorated_wins_over_plain(self):
        decorated = "Decorated body: " + LONG_SUMMARY
        raw = f"Summary: plain body that is long enough to pass the check on its own.\n\n**Detailed Summary:**\n{decorated}"
        assert parse_analysis(raw).summary == decorated


class TestValidation:
    def test_summary_49_chars_fails(self):
        raw = "**Detailed Summary:**\n" + "x" * (MIN_SUMMARY_LENGTH - 1)
        with pytest.raises(MalformedResponse):
            parse_analysis(raw)

    def test_summary_50_chars_passes(self):
        raw = "**Detailed Summary:**\n" + "x" * MIN_SUMMARY_LENGTH
        assert parse_analysis(raw).summary == "x" * 50

    def test_no_headings_at_all(self):
        raw = "This reply ignores the template entirely and just talks about the video for a while."
        with pytest.raises(MalformedResponse) as exc_info:
            parse_analysis(raw)
        assert exc_info.value.raw_text == raw

    def test_valid_fields_do_not_rescue_missing_summary(self, analysis_response: str):
        raw = analysis_response.split("**Detailed Summary:**")[0]
        with pytest.raises(MalformedResponse):
            parse_analysis(raw)

    def test_short_abstract_dropped(self):
        raw = f"**Abstract:** Too short\n**Detailed Summary:** {LONG_SUMMARY}"
        result = parse_analysis(raw)
        assert result.abstract == ""
        assert result.summary == LONG_SUMMARY

    def test_optional_fields_default_empty(self):
        result = parse_analysis(f"**Detailed Summary:** {LONG_SUMMARY}")
        assert result.abstract == ""
        assert result.key_points == []
        assert result.category == ""

    def test_non_text_input(self):
        with pytest.raises(MalformedResponse) as exc_info:
            parse_analysis(None)  # type: ignore[arg-type]
        assert exc_info.value.raw_text is None

    def test_idempotent(self, analysis_response: str):
        assert parse_analysis(analysis_response) == parse_analysis(analysis_response)


class TestHelpers:
    def test_extract_section_missing(self):
        assert extract_section("nothing here", "category") == ""

    def test_extract_bullets(self):
        section = "Intro line\n  - first \n-\n•   second\nnot a bullet\n* star bullet"
        assert extract_bullets(section) == ["first", "second"]

    def test_fallback_key_points(self):
        summary = (
            "Caption tracks are listed in the player data. Short one. "
            "Manual tracks are preferred over generated ones. "
            "Generated tracks cover most uploads on the site. A fourth long sentence is ignored."
        )
        assert fallback_key_points(summary) == [
            "Caption tracks are listed in the player data.",
            "Manual tracks are preferred over generated ones.",
            "Generated tracks cover most uploads on the site.",
        ]
