"""Tests for report_parser module."""

from ehour_sync.report_parser import ReportParser, parse_report


class TestParseReport:
    """Tests for parse_report."""

    def test_single_entry(self):
        """Test a header, hours line and subtask."""
        entries = parse_report("## 2025-07-03\n[5] MKIS-42: Fix bug\n  - add test")

        assert len(entries) == 1
        assert entries[0].to_dict() == {
            "date": "2025-07-03",
            "hours": 5,
            "tasks": ["MKIS-42"],
            "description": "MKIS-42: Fix bug",
            "subtasks": ["add test"],
        }

    def test_multiple_entries(self, sample_report):
        """Test each header starts a new entry."""
        entries = parse_report(sample_report)

        assert [e.date for e in entries] == ["2025-07-01", "2025-07-02", "2025-07-03"]
        assert [e.hours for e in entries] == [8, 6, 5]
        assert entries[1].description == "General work"
        assert entries[1].tasks == []
        assert entries[1].subtasks == ["Bump dependencies"]

    def test_continuation_ticket_folded_into_subtasks(self, sample_report):
        """Test ticket lines without hours become subtasks."""
        entry = parse_report(sample_report)[0]

        assert entry.tasks == ["MKIS-100"]
        assert entry.subtasks == [
            "validate fields",
            "fix redirect",
            "MKIS-101: Update profile page",
            "fix avatar upload",
        ]

    def test_header_without_hours_line(self):
        """Test an entry opened by a header alone."""
        entries = parse_report("## 2025-07-01\n")

        assert entries[0].hours == 0
        assert entries[0].description == ""
        assert entries[0].subtasks == []

    def test_last_hours_line_wins(self):
        """Test a second hours line overwrites the first."""
        entries = parse_report("## 2025-07-01\n[8] MKIS-1: First\n[4] MKIS-2: Second")

        assert entries[0].hours == 4
        assert entries[0].description == "MKIS-2: Second"
        assert entries[0].tasks == ["MKIS-2"]

    def test_tasks_from_all_ids_in_description(self):
        """Test every ticket id in the primary line is a task."""
        entries = parse_report("## 2025-07-01\n[8] MKIS-1, MKIS-22: shared work for MKIS-3")

        assert entries[0].tasks == ["MKIS-1", "MKIS-22", "MKIS-3"]

    def test_duplicate_subtasks_kept(self):
        """Test no deduplication happens on parse."""
        entries = parse_report("## 2025-07-01\n[8] General work\n  - same\n- same")

        assert entries[0].subtasks == ["same", "same"]

    def test_lines_before_header_ignored(self):
        """Test lines outside an entry are dropped."""
        entries = parse_report("[8] MKIS-1: Orphan\n  - orphan subtask\n## 2025-07-01\n[2] MKIS-2: Kept")

        assert len(entries) == 1
        assert entries[0].description == "MKIS-2: Kept"
        assert entries[0].subtasks == []

    def test_unrecognized_lines_ignored(self):
        """Test free text and raw commit lines are skipped."""
        entries = parse_report("## 2025-07-01\n[8] MKIS-1: Work\nBump dependencies\nMKIS-2:no space")

        assert entries[0].subtasks == []

    def test_input_order_preserved(self):
        """Test entries are not sorted by date."""
        entries = parse_report("## 2025-07-05\n[8] A\n## 2025-07-01\n[8] B")

        assert [e.date for e in entries] == ["2025-07-05", "2025-07-01"]

    def test_empty_input(self):
        """Test empty input produces no entries."""
        assert parse_report("") == []
        assert parse_report("just some notes\n- a dash line") == []

    def test_dash_description_limitation(self):
        """Test a free-text line starting with a dash is read as a subtask."""
        entries = parse_report("## 2025-07-01\n[8] General work\n- not really a subtask")

        assert entries[0].subtasks == ["not really a subtask"]


class TestReportParser:
    """Tests for ReportParser with a custom prefix."""

    def test_custom_prefix(self):
        """Test tasks and continuation lines use the configured prefix."""
        parser = ReportParser(ticket_prefix="ABC")

        entries = parser.parse("## 2025-07-01\n[8] ABC-1: Work on MKIS-9\nABC-2 Other")

        assert entries[0].tasks == ["ABC-1"]
        assert entries[0].subtasks == ["ABC-2: Other"]
