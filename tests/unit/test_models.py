"""
Unit tests for the build report and session state helpers.
"""

import pytest
from pydantic import ValidationError

from homefind.models.index_report import IndexBuildReport
from homefind.models.session import SessionState, SessionStatus


class TestIndexBuildReport:
    """Test cases for IndexBuildReport."""

    def test_defaults(self):
        report = IndexBuildReport(root="/home/a")

        assert report.files_indexed == 0
        assert not report.has_errors()

    def test_negative_counts_rejected(self):
        with pytest.raises(ValidationError):
            IndexBuildReport(root="/home/a", files_indexed=-1)

    @pytest.mark.parametrize("seconds, expected", [
        (0.0042, "4ms"),
        (3.5, "3.50s"),
        (125.0, "2m5s"),
    ])
    def test_elapsed_human_readable(self, seconds, expected):
        assert IndexBuildReport(root="/", elapsed_seconds=seconds).get_elapsed_human_readable() == expected

    def test_to_dict(self):
        data = IndexBuildReport(root="/home/a", files_indexed=3, errors=1).to_dict()

        assert data['files_indexed'] == 3
        assert isinstance(data['finished_at'], str)
        assert 'elapsed_human' in data

    def test_str(self):
        text = str(IndexBuildReport(root="/home/a", files_indexed=12, errors=2))

        assert "Indexed 12 files" in text
        assert "Errors: 2" in text


class TestSessionState:
    """Test cases for SessionState helpers."""

    def test_window_end_clamped(self):
        state = SessionState(matches=("a", "b", "c"), window_size=10)

        assert state.get_window_end() == 3
        assert state.get_visible_matches() == ("a", "b", "c")

    def test_visible_slice(self):
        state = SessionState(matches=tuple("abcdefgh"), cursor=5, window_start=3, window_size=3)

        assert state.get_visible_matches() == ("d", "e", "f")
        assert state.get_current_match() == "f"

    def test_current_match_empty(self):
        assert SessionState().get_current_match() is None
        assert not SessionState().has_matches()

    def test_window_size_must_be_positive(self):
        with pytest.raises(ValidationError):
            SessionState(window_size=0)

    def test_status(self):
        assert not SessionState().is_terminated()
        assert SessionState(status=SessionStatus.TERMINATED).is_terminated()
