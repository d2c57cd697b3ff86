"""Test suite for paragraph section splitting."""

from infrastructure.document_processors import ParagraphSectionSplitter, split_sections


class TestSplitSections:
    def test_splits_on_blank_lines(self) -> None:
        assert split_sections("A\n\nB\n\nC") == ["A", "B", "C"]

    def test_empty_content_has_no_sections(self) -> None:
        assert split_sections("") == []

    def test_whitespace_only_sections_are_dropped(self) -> None:
        assert split_sections("   \n\n  ") == []

    def test_sections_are_trimmed(self) -> None:
        assert split_sections("  first  \n\n\tsecond\n") == ["first", "second"]

    def test_runs_of_blank_lines_count_as_one_boundary(self) -> None:
        assert split_sections("A\n\n\n\nB") == ["A", "B"]

    def test_single_newline_stays_inside_section(self) -> None:
        assert split_sections("line one\nline two\n\nnext") == ["line one\nline two", "next"]

    def test_windows_line_endings(self) -> None:
        assert split_sections("A\r\n\r\nB") == ["A", "B"]

    def test_blank_line_with_spaces_is_a_boundary(self) -> None:
        assert split_sections("A\n   \nB") == ["A", "B"]

    def test_order_is_preserved(self) -> None:
        content = "\n\n".join(f"paragraph {i}" for i in range(20))
        assert split_sections(content) == [f"paragraph {i}" for i in range(20)]

    def test_splitter_class_delegates(self) -> None:
        assert ParagraphSectionSplitter().split("x\n\ny") == ["x", "y"]
