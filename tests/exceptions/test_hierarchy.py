"""Tests for the exception hierarchy."""

import pytest

from codemeasure.exceptions import (
    AnalysisError,
    CodeMeasureError,
    ConfigurationError,
    DistributionError,
    FinalizedDistributionError,
    InvalidBoundariesError,
    InvalidConfigError,
    MalformedIndexError,
    MissingMetricError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error,parent",
        [
            (MalformedIndexError("file:/a.c", "duplicate node id"), AnalysisError),
            (MissingMetricError("file:/a.c", "lines"), AnalysisError),
            (InvalidBoundariesError([], "empty"), DistributionError),
            (FinalizedDistributionError("file_complexity_distribution"), DistributionError),
            (InvalidConfigError("workers", 0, "must be at least 1"), ConfigurationError),
        ],
    )
    def test_parents(self, error, parent):
        assert isinstance(error, parent)
        assert isinstance(error, CodeMeasureError)


class TestMessages:
    def test_details_rendered(self):
        error = MissingMetricError("file:/a.c", "lines")
        assert str(error) == "Missing metric 'lines' on file:/a.c (node=file:/a.c, metric=lines)"

    def test_no_details(self):
        assert str(CodeMeasureError("plain")) == "plain"

    def test_boundaries_kept(self):
        error = InvalidBoundariesError([3, 1], "not increasing")
        assert error.boundaries == (3, 1)
        assert error.details == {"reason": "not increasing"}

    def test_to_json(self):
        error = InvalidConfigError("workers", 0, "must be at least 1")
        assert error.to_json() == {
            "error": "InvalidConfigError",
            "message": "Invalid configuration for workers: 0",
            "details": {"key": "workers", "reason": "must be at least 1"},
        }
