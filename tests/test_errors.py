"""Tests for MaintenanceReport."""

from schoerke.errors import MaintenanceReport, OutcomeStatus


class TestMaintenanceReport:
    def test_empty(self):
        report = MaintenanceReport(operation="noop")
        assert report.ok is True
        assert report.counts == {"succeeded": 0, "skipped": 0, "failed": 0}

    def test_accumulates(self):
        report = MaintenanceReport(operation="populate-slugs:artists")
        report.add_success(1, "Maurice Steger")
        report.add_skip(2, "Other", "already has slug")
        report.add_error(3, "Broken", "boom")

        assert report.counts == {"succeeded": 1, "skipped": 1, "failed": 1}
        assert report.ok is False
        assert report.failed[0].status == OutcomeStatus.FAILED
        assert report.summary() == (
            "populate-slugs:artists: 1 succeeded, 1 skipped, 1 failed"
        )

    def test_dry_run_summary(self):
        report = MaintenanceReport(operation="cleanup", dry_run=True)
        assert report.summary().startswith("[dry run] cleanup")

    def test_error_is_logged(self, caplog):
        MaintenanceReport(operation="op").add_error(7, "rec", "bad")
        assert "rec (7) failed: bad" in caplog.text
