"""
Tests for the heuristic diff scanner.
"""

import pytest

from app.reporting.heuristics import DEFAULT_RULES, HeuristicRule, SPELLING_LABEL, contains_any, scan_diff

CREDENTIAL = "Possible credential exposure (password/secret/apikey)"
DANGEROUS_EXEC = "Potential dangerous runtime/exec call"
DEBUG_PRINTS = "Debug prints found (console.log / print)"
TODO_MARKERS = "TODO/FIXME markers present"
SQL_CONCAT = "Potential SQL concatenation risk"


class TestScanDiff:
    """Test suite for scan_diff."""

    def test_api_key_assignment_is_only_a_credential_finding(self):
        assert scan_diff("const apiKey = '123'") == [CREDENTIAL]

    @pytest.mark.parametrize(
        "diff, expected",
        [
            ("+ PASSWORD = 'hunter2'", CREDENTIAL),
            ("+ db_passwd: x", CREDENTIAL),
            ("+ client_secret", CREDENTIAL),
            ("+ API_KEY=abc", CREDENTIAL),
            ("+ System.exit(1);", DANGEROUS_EXEC),
            ("+ Runtime.getRuntime()", DANGEROUS_EXEC),
            ("+ os.exec(cmd)", DANGEROUS_EXEC),
            ("+ console.log(x)", DEBUG_PRINTS),
            ("+ print(x)", DEBUG_PRINTS),
            ("+ // TODO: handle", TODO_MARKERS),
            ("+ # FixMe later", TODO_MARKERS),
            ("+ cursor.execute(SQL)", SQL_CONCAT),
            ("+ query = CONCAT(a, b) -- sql", SQL_CONCAT),
        ],
    )
    def test_single_rule_triggers(self, diff, expected):
        assert scan_diff(diff) == [expected]

    def test_sql_needs_both_terms(self):
        """sql alone, execute alone, or concat( alone are not findings."""
        assert scan_diff("+ sql = 'select 1'") == []
        assert scan_diff("+ runner.execute_all()") == []
        assert scan_diff("+ concat(a, b)") == []

    def test_findings_follow_table_order(self):
        """Each rule contributes once, in table order."""
        diff = "\n".join([
            "+ // TODO remove",
            "+ print(password)",
            "+ print(secret)",
            "+ sql.execute(q)",
            "+ Runtime.exec(cmd)",
        ])

        assert scan_diff(diff) == [CREDENTIAL, DANGEROUS_EXEC, DEBUG_PRINTS, TODO_MARKERS, SQL_CONCAT]

    def test_spelling_suggestions_are_appended(self):
        findings = scan_diff("+ print(x)", ["recieve -> receive", "teh -> the"])

        assert findings == [
            DEBUG_PRINTS,
            f"{SPELLING_LABEL}recieve -> receive",
            f"{SPELLING_LABEL}teh -> the",
        ]

    def test_empty_and_missing_diff(self):
        assert scan_diff("") == []
        assert scan_diff(None) == []
        assert scan_diff(None, ["typo"]) == [f"{SPELLING_LABEL}typo"]

    def test_scan_is_repeatable(self):
        diff = "+ password = secret\n+ console.log(1)"
        assert scan_diff(diff) == scan_diff(diff)

    def test_custom_rule_table(self):
        """The rule table can be extended without touching scan_diff."""
        rules = DEFAULT_RULES + (HeuristicRule("Uses eval", contains_any("eval(")),)

        assert scan_diff("+ eval(input)", rules=rules) == ["Uses eval"]
