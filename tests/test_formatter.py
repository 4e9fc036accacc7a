"""Tests for summary composition."""

import json

import pytest

from reify_summary.config import RenderConfig
from reify_summary.diff_summary import DiffSummary
from reify_summary.formatter import (
    audited_count,
    format_elapsed,
    format_summary,
    packages_changed_message,
)
from reify_summary.models import AuditReport, Diff, Inventory, PackageNode, ResultBundle

CLEAN_AUDIT = {"vulnerabilities": {"total": 0}}


def _audited_tree(size: int) -> PackageNode:
    root = PackageNode(name="root")
    root.inventory = Inventory([PackageNode(name=f"pkg{i}") for i in range(size)])
    return root


class TestFormatElapsed:
    """Test elapsed time formatting."""

    @pytest.mark.parametrize("ms, expected", [
        (0, "0ms"),
        (-5, "0ms"),
        (999, "999ms"),
        (1000, "1s"),
        (1499, "1s"),
        (1500, "2s"),
        (90_000, "2m"),
        (3_600_000, "1h"),
        (2 * 86_400_000, "2d"),
    ])
    def test_format(self, ms, expected):
        """Test short duration formatting."""
        assert format_elapsed(ms) == expected


class TestPackagesChangedMessage:
    """Test the change summary sentence."""

    def test_up_to_date(self):
        """Test a sentence with no changes."""
        assert packages_changed_message(DiffSummary(), 0, 12) == "up to date in 12ms"

    def test_up_to_date_audited(self):
        """Test an unchanged but audited tree."""
        assert packages_changed_message(DiffSummary(), 2, 5) == "up to date, audited 2 packages in 5ms"

    def test_single_clause(self):
        """Test a sentence with one clause."""
        assert packages_changed_message(DiffSummary(added=1), 0, 1200) == "added 1 package in 1s"

    def test_two_clauses(self):
        """Test joining two clauses."""
        message = packages_changed_message(DiffSummary(added=2, removed=1), 0, 1200)
        assert message == "added 2 packages, and removed 1 package in 1s"

    def test_all_clauses_audited(self):
        """Test joining every clause."""
        message = packages_changed_message(DiffSummary(added=1, removed=1, changed=1), 3, 2000)
        assert message == (
            "added 1 package, removed 1 package, changed 1 package, and audited 3 packages in 2s"
        )

    def test_zero_clauses_omitted(self):
        """Test that zero counts are left out."""
        message = packages_changed_message(DiffSummary(changed=2), 1, 0)
        assert message == "changed 2 packages, and audited 1 package in 0ms"


class TestAuditedCount:
    """Test the audited package count."""

    def test_no_report(self):
        """Test that no audit report means nothing audited."""
        assert audited_count(ResultBundle(actual_tree=_audited_tree(4))) == 0

    def test_inventory_size(self):
        """Test that the audited count is the inventory size."""
        bundle = ResultBundle(actual_tree=_audited_tree(4), audit_report=AuditReport(metadata=CLEAN_AUDIT))
        assert audited_count(bundle) == 4

    def test_no_inventory(self):
        """Test an audit report on a tree without an inventory."""
        bundle = ResultBundle(actual_tree=PackageNode(), audit_report=AuditReport(metadata=CLEAN_AUDIT))
        assert audited_count(bundle) == 0


class TestFormatSummary:
    """Test the assembled text and JSON blocks."""

    def test_empty_bundle(self):
        """Test formatting an empty bundle."""
        assert format_summary(ResultBundle(), RenderConfig(), 3) == "up to date in 3ms"

    def test_section_order(self, funded_tree, mixed_diff):
        """Test that sections appear in order with funding last."""
        funded_tree.inventory = Inventory([funded_tree, PackageNode(name="baz", version="2.0.0")])
        bundle = ResultBundle(
            actual_tree=funded_tree,
            diff=mixed_diff,
            audit_report=AuditReport(metadata=CLEAN_AUDIT),
        )

        assert format_summary(bundle, RenderConfig(), 1000) == (
            "added 2 packages, removed 1 package, changed 1 package, and audited 2 packages in 1s\n"
            "+ baz@2.0.0\n"
            "\n"
            "found 0 vulnerabilities\n"
            "\n"
            "3 packages are looking for funding"
        )

    def test_fund_disabled(self, funded_tree, empty_diff):
        """Test that fund=False drops the funding section."""
        bundle = ResultBundle(actual_tree=funded_tree, diff=empty_diff)
        text = format_summary(bundle, RenderConfig(fund=False), 0)

        assert "looking for funding" not in text
        assert text == "up to date in 0ms"

    def test_json_install(self, mixed_diff, inventory_tree):
        """Test the JSON document for an install."""
        bundle = ResultBundle(
            actual_tree=inventory_tree,
            diff=mixed_diff,
            audit_report=AuditReport(metadata=CLEAN_AUDIT),
        )
        text = format_summary(bundle, RenderConfig(json=True), 1234)
        document = json.loads(text)

        assert list(document) == ["added", "removed", "changed", "audited", "funding", "audit"]
        assert document == {
            "added": 2,
            "removed": 1,
            "changed": 1,
            "audited": 2,
            "funding": 0,
            "audit": CLEAN_AUDIT,
        }
        assert text.startswith('{\n  "added": 2,')

    def test_json_audit_command_has_full_report(self, inventory_tree):
        """Test that the audit command embeds the whole report."""
        report = AuditReport(vulnerabilities={"a": {"severity": "low"}}, metadata={"vulnerabilities": {"total": 1}})
        bundle = ResultBundle(actual_tree=inventory_tree, audit_report=report, command="audit")
        document = json.loads(format_summary(bundle, RenderConfig(json=True), 0))

        assert document["audit"] == report.to_json()

    def test_json_funding_and_no_audit(self, funded_tree):
        """Test the JSON funding count without an audit."""
        bundle = ResultBundle(actual_tree=funded_tree, diff=Diff())
        document = json.loads(format_summary(bundle, RenderConfig(json=True), 0))

        assert document["funding"] == 3
        assert "audit" not in document

    def test_json_funding_disabled(self, funded_tree):
        """Test that suppressed funding is 0 in JSON."""
        bundle = ResultBundle(actual_tree=funded_tree)
        document = json.loads(format_summary(bundle, RenderConfig(json=True, fund=False), 0))

        assert document["funding"] == 0
