"""
Unit tests for the heuristic analyzer rules.
"""

import pytest

from pr_review_action.models.pr_diff import FileChange, PRReference
from pr_review_action.review.heuristics import DEFAULT_RULES, HeuristicAnalyzer, RuleType


MESSAGES = {rule.rule_type: rule.message for rule in DEFAULT_RULES}


def make_file(path, status="modified", patch=None):
    return FileChange(path=path, status=status, additions=1, deletions=1, changes=2, patch=patch)


class TestHeuristicRules:
    """Unit tests for individual rules."""

    def setup_method(self):
        self.analyzer = HeuristicAnalyzer()

    def test_large_diff_threshold(self):
        at_limit = self.analyzer.review_files([make_file("src/a.py", patch="x" * 2000)])
        over_limit = self.analyzer.review_files([make_file("src/a.py", patch="x" * 2001)])

        assert at_limit == []
        assert [c.body for c in over_limit] == [MESSAGES[RuleType.LARGE_DIFF]]

    def test_missing_patch_is_not_large(self):
        assert self.analyzer.review_files([make_file("bin/tool.exe", patch=None)]) == []

    def test_config_rule_requires_modified(self):
        modified = self.analyzer.review_files([make_file("settings/AppConfig.yaml", status="modified")])
        added = self.analyzer.review_files([make_file("settings/AppConfig.yaml", status="added")])

        assert [c.body for c in modified] == [MESSAGES[RuleType.CONFIG_MODIFIED]]
        assert added == []

    def test_test_deleted_rule(self):
        comments = self.analyzer.review_files([make_file("Test_utils.py", status="removed")])

        assert len(comments) == 1
        assert comments[0].path == "Test_utils.py"
        assert comments[0].body == MESSAGES[RuleType.TEST_DELETED]

    def test_test_file_modified_not_flagged(self):
        assert self.analyzer.review_files([make_file("tests/test_api.py")]) == []

    @pytest.mark.parametrize("path", ["src/Auth/login.py", "config/SECRETS.md", "oauth_client.go"])
    def test_security_rule(self, path):
        comments = self.analyzer.review_files([make_file(path, status="added")])
        assert MESSAGES[RuleType.SECURITY_SENSITIVE] in [c.body for c in comments]

    def test_rules_fire_independently_in_order(self):
        file_change = make_file("src/auth/config_test.py", status="modified", patch="+" * 2500)

        comments = self.analyzer.review_files([file_change])

        assert [c.body for c in comments] == [
            MESSAGES[RuleType.LARGE_DIFF],
            MESSAGES[RuleType.CONFIG_MODIFIED],
            MESSAGES[RuleType.SECURITY_SENSITIVE],
        ]
        assert all(c.path == "src/auth/config_test.py" for c in comments)

    def test_removed_test_with_other_matches(self):
        file_change = make_file("tests/test_auth.py", status="removed", patch="-" * 3000)

        comments = self.analyzer.review_files([file_change])
        bodies = [c.body for c in comments]

        assert bodies.count(MESSAGES[RuleType.TEST_DELETED]) == 1
        assert bodies == [
            MESSAGES[RuleType.LARGE_DIFF],
            MESSAGES[RuleType.TEST_DELETED],
            MESSAGES[RuleType.SECURITY_SENSITIVE],
        ]

    def test_comments_follow_file_order(self):
        files = [make_file("b/secret.txt"), make_file("a/auth.py")]
        comments = self.analyzer.review_files(files)
        assert [c.path for c in comments] == ["b/secret.txt", "a/auth.py"]

    def test_position_not_set(self):
        comments = self.analyzer.review_files([make_file("auth.py")])
        assert comments[0].position is None


class TestHeuristicSummary:
    """Unit tests for the templated summary."""

    def test_no_matches(self):
        result = HeuristicAnalyzer().analyze(
            PRReference("acme", "widgets", 3),
            [make_file("README.md", patch="+docs")]
        )

        assert result.comments == []
        assert result.summary == "Automated PR analysis found 0 suggestion(s) for acme/widgets#3."

    def test_acme_widgets_example(self):
        files = [make_file("src/config/db.yaml", status="modified", patch="+" * 1500)]

        result = HeuristicAnalyzer().analyze(PRReference("acme", "widgets", 7), files)

        assert [(c.path, c.body) for c in result.comments] == [(
            "src/config/db.yaml",
            "Configuration file modified. Ensure environment-specific values are documented "
            "and secrets are not committed.",
        )]
        assert result.summary == "Automated PR analysis found 1 suggestion(s) for acme/widgets#7."
