# tests/unit/extraction/test_unit_diagram_extractor.py - v1
"""Tests for extraction/diagram_extractor.py."""

from __future__ import annotations

import hashlib
from pathlib import Path

from mermaid_processor.core.result import Err, Ok
from mermaid_processor.extraction.diagram_extractor import (
    analyze_document,
    diagram_id,
    extract_diagrams,
)


class TestExtractDiagrams:
    def test_single_block(self):
        text = "# T\n```mermaid\ngraph TD\nA-->B\n```"
        blocks = extract_diagrams(text)
        assert len(blocks) == 1
        block = blocks[0]
        assert block.index == 0
        assert block.code == "graph TD\nA-->B"
        assert block.label == "Diagram 1"
        assert text[block.start:block.end] == "```mermaid\ngraph TD\nA-->B\n```"

    def test_id_is_sha256_prefix_of_trimmed_body(self):
        blocks = extract_diagrams("```mermaid\n\n  graph LR\n  X-->Y  \n\n```\n")
        expected = hashlib.sha256(b"graph LR\n  X-->Y").hexdigest()[:8]
        assert blocks[0].id == expected
        assert diagram_id("graph LR\n  X-->Y") == expected

    def test_multiple_blocks_contiguous_indices(self):
        text = (
            "```mermaid\ngraph A\n```\n"
            "text\n"
            "```mermaid\ngraph B\n```\n"
            "```mermaid\ngraph C\n```\n"
        )
        blocks = extract_diagrams(text)
        assert [b.index for b in blocks] == [0, 1, 2]
        assert [b.label for b in blocks] == ["Diagram 1", "Diagram 2", "Diagram 3"]
        assert [b.code for b in blocks] == ["graph A", "graph B", "graph C"]

    def test_empty_block_skipped_without_consuming_index(self):
        text = (
            "```mermaid\n```\n"
            "```mermaid\n\n   \n```\n"
            "```mermaid\ngraph X\n```\n"
        )
        blocks = extract_diagrams(text)
        assert len(blocks) == 1
        assert blocks[0].index == 0
        assert blocks[0].label == "Diagram 1"

    def test_empty_block_with_blank_line(self):
        assert extract_diagrams("```mermaid\n\n```") == []

    def test_other_languages_ignored(self):
        text = "```python\nprint(1)\n```\n```\nplain\n```\n"
        assert extract_diagrams(text) == []

    def test_open_marker_must_be_exact_line(self):
        text = "  ```mermaid\ngraph A\n```\n```mermaid extra\ngraph B\n```\n"
        assert extract_diagrams(text) == []

    def test_first_close_marker_ends_block(self):
        text = "```mermaid\ngraph A\n```\ntrailing\n```\n"
        blocks = extract_diagrams(text)
        assert len(blocks) == 1
        assert blocks[0].code == "graph A"

    def test_unterminated_block_ignored(self):
        assert extract_diagrams("# Doc\n```mermaid\ngraph A\n") == []

    def test_crlf_line_endings(self):
        text = "# T\r\n```mermaid\r\ngraph TD\r\nA-->B\r\n```\r\nafter\r\n"
        blocks = extract_diagrams(text)
        assert len(blocks) == 1
        assert blocks[0].code == "graph TD\r\nA-->B"
        assert text[blocks[0].end:] == "\r\nafter\r\n"

    def test_custom_language(self):
        blocks = extract_diagrams("```plantuml\nA -> B\n```", language="plantuml")
        assert len(blocks) == 1

    def test_extraction_is_deterministic(self):
        text = "```mermaid\ngraph A\n```\n\n```mermaid\ngraph B\n```\n"
        first = extract_diagrams(text)
        second = extract_diagrams(text)
        assert [(b.id, b.label, b.code) for b in first] == [
            (b.id, b.label, b.code) for b in second
        ]
        assert first == second

    def test_identical_sources_share_id(self):
        text = "```mermaid\ngraph A\n```\n```mermaid\ngraph A\n```\n"
        blocks = extract_diagrams(text)
        assert blocks[0].id == blocks[1].id
        assert blocks[0].index != blocks[1].index


class TestAnalyzeDocument:
    def test_counts_blocks(self, tmp_path: Path):
        doc = tmp_path / "a.md"
        doc.write_text("```mermaid\ngraph A\n```\n```mermaid\n```\n", encoding="utf-8")
        result = analyze_document(doc)
        assert isinstance(result, Ok)
        assert result.value.total_blocks == 1
        assert result.value.needs_processing is True
        assert len(result.value.diagram_ids) == 1

    def test_missing_file(self, tmp_path: Path):
        result = analyze_document(tmp_path / "missing.md")
        assert isinstance(result, Err)
        assert result.error.operation == "read"

    def test_invalid_utf8(self, tmp_path: Path):
        doc = tmp_path / "bad.md"
        doc.write_bytes(b"\xff\xfe\x00bad")
        result = analyze_document(doc)
        assert isinstance(result, Err)
