"""
Unit tests for interaction severity classification.
"""

import pytest

from medsafe.services.safety.models import Severity
from medsafe.services.safety.severity_classifier import classify_severity


class TestClassifySeverity:
    """Trigger-term tiers and precedence."""

    @pytest.mark.parametrize("text", [None, "", "   "])
    def test_empty_description_is_minor(self, text):
        """Missing or blank text -> minor"""
        assert classify_severity(text) == Severity.MINOR

    def test_major_trigger(self):
        """'contraindicated' is a major trigger"""
        assert classify_severity("Concomitant use is contraindicated.") == Severity.MAJOR

    def test_moderate_trigger(self):
        """'monitor' alone is moderate"""
        assert classify_severity("Monitor blood glucose when starting therapy.") == Severity.MODERATE

    def test_major_wins_over_moderate(self):
        """Text with both tiers' triggers is major"""
        text = "Monitor patients closely and avoid concurrent use where possible."
        assert classify_severity(text) == Severity.MAJOR

    def test_case_insensitive(self):
        """Triggers match regardless of case"""
        assert classify_severity("SEVERE HYPOTENSION HAS BEEN REPORTED") == Severity.MAJOR

    def test_no_trigger_is_minor(self):
        """Descriptive text without trigger terms -> minor"""
        assert classify_severity("Absorption is slightly delayed when taken with food.") == Severity.MINOR

    def test_bleeding_is_moderate(self):
        """'bleeding' counts as moderate, 'hemorrhage' as major"""
        assert classify_severity("Reports of bleeding with combined use.") == Severity.MODERATE
        assert classify_severity("Reports of hemorrhage with combined use.") == Severity.MAJOR
