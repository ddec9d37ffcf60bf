"""Tests for chunking.sections."""

from chunking.sections import (
    Section,
    SectionKind,
    classify_section,
    extract_sections,
    group_by_section,
    heading_key,
    normalize_heading,
)

from conftest import make_chunk


class TestExtractSections:
    def test_empty_document(self):
        assert extract_sections("") == [Section(content="", heading=None, start=0)]

    def test_no_headings(self):
        text = "Just a paragraph.\nAnd another line."
        sections = extract_sections(text)
        assert len(sections) == 1
        assert sections[0].heading is None
        assert sections[0].content == text
        assert sections[0].start == 0

    def test_markdown_headings(self):
        text = "# Intro\nHello world.\n\n# Body\nMore text here."
        sections = extract_sections(text)

        assert [s.heading for s in sections] == ["Intro", "Body"]
        assert sections[0].start == 0
        assert sections[1].start == text.index("# Body")
        assert sections[0].content == "# Intro\nHello world.\n\n"
        assert sections[1].content == "# Body\nMore text here."

    def test_preamble_before_first_heading(self):
        text = "Preface text\n## Scope\nBody"
        sections = extract_sections(text)

        assert len(sections) == 2
        assert sections[0] == Section(content="Preface text\n", heading=None, start=0)
        assert sections[1].heading == "Scope"
        assert sections[1].start == len("Preface text\n")

    def test_numbered_headings(self):
        text = "1. Introduction\nSome text.\n2. Payment Terms\nMore text."
        sections = extract_sections(text)

        assert [s.heading for s in sections] == ["Introduction", "Payment Terms"]
        assert [s.kind for s in sections] == [SectionKind.INTRODUCTION, SectionKind.PAYMENT]

    def test_all_heading_levels(self):
        text = "\n".join(f"{'#' * level} Level {level}" for level in range(1, 7))
        sections = extract_sections(text)
        assert len(sections) == 6

    def test_not_headings(self):
        text = "#hashtag\n####### seven\n#   \n3.14 is pi\nmid # line"
        sections = extract_sections(text)
        assert len(sections) == 1
        assert sections[0].heading is None

    def test_heading_does_not_span_lines(self):
        text = "# Title\nfirst line"
        sections = extract_sections(text)
        assert sections[0].heading == "Title"

    def test_empty_section_between_headings(self):
        text = "# One\n# Two\ncontent"
        sections = extract_sections(text)
        assert [s.content for s in sections] == ["# One\n", "# Two\ncontent"]

    def test_sections_tile_document(self, contract_text):
        sections = extract_sections(contract_text)

        assert "".join(s.content for s in sections) == contract_text
        assert sections[0].start == 0
        for prev, nxt in zip(sections, sections[1:]):
            assert nxt.start == prev.end
        assert sections[-1].end == len(contract_text)


class TestHeadingLabels:
    def test_normalize_heading(self):
        assert normalize_heading("## Payment Terms  ") == "Payment Terms"
        assert normalize_heading("12. Termination") == "Termination"

    def test_heading_key(self):
        assert heading_key("2. Payment Terms") == "payment terms"
        assert heading_key("Payment   TERMS") == "payment terms"
        assert heading_key("[Verse 1]") == "verse"
        assert heading_key(None) == ""

    def test_classify_known_labels(self):
        assert classify_section("intro") == SectionKind.INTRODUCTION
        assert classify_section("summary") == SectionKind.OVERVIEW
        assert classify_section("glossary") == SectionKind.DEFINITIONS
        assert classify_section("annex") == SectionKind.APPENDIX

    def test_classify_fallbacks(self):
        assert classify_section("") == SectionKind.PREAMBLE
        assert classify_section("shipping and returns") == SectionKind.LABELED

    def test_digit_only_heading_is_labeled(self):
        section = Section(content="# 2024\n", heading="2024", start=0)
        assert section.kind == SectionKind.LABELED

    def test_preamble_kind(self):
        section = Section(content="text", heading=None, start=0)
        assert section.kind == SectionKind.PREAMBLE
        assert section.key == ""


class TestGroupBySection:
    def test_groups_by_normalized_key(self):
        chunks = [
            make_chunk(0, "preamble"),
            make_chunk(1, "first", heading="Payment Terms"),
            make_chunk(2, "second", heading="payment terms"),
            make_chunk(3, "third", heading="Privacy"),
        ]
        groups = group_by_section(chunks)

        assert [g.label.key for g in groups] == ["", "payment terms", "privacy"]
        assert groups[0].label.kind == SectionKind.PREAMBLE
        assert groups[0].label.display_name == "General"
        assert groups[1].label.heading == "Payment Terms"
        assert [c.index for c in groups[1].chunks] == [1, 2]
        assert groups[2].label.kind == SectionKind.PRIVACY

    def test_empty(self):
        assert group_by_section([]) == []
