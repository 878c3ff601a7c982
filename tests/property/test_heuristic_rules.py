"""
Property-based tests for heuristic analysis.

Property: each rule fires independently on its own predicate, and the
summary count matches the comment list.
"""

from hypothesis import given, strategies as st

from pr_review_action.models.pr_diff import FileChange, PRReference
from pr_review_action.review.heuristics import DEFAULT_RULES, LARGE_DIFF_CHARS, HeuristicAnalyzer, RuleType


MESSAGES = {rule.rule_type: rule.message for rule in DEFAULT_RULES}

path_strategy = st.lists(
    st.sampled_from(['src', 'Auth', 'config', 'tests', 'secret', 'utils', 'README.md', 'test_api.py', 'app.py']),
    min_size=1,
    max_size=4
).map('/'.join)

file_strategy = st.builds(
    FileChange,
    path=path_strategy,
    status=st.sampled_from(['added', 'modified', 'removed', 'renamed']),
    additions=st.integers(min_value=0, max_value=100),
    deletions=st.integers(min_value=0, max_value=100),
    changes=st.integers(min_value=0, max_value=200),
    patch=st.one_of(st.none(), st.integers(min_value=0, max_value=4000).map(lambda n: '+' * n))
)


def expected_rules(file_change):
    path = file_change.path.lower()
    rules = []
    if file_change.patch_length > LARGE_DIFF_CHARS:
        rules.append(RuleType.LARGE_DIFF)
    if file_change.status == 'modified' and 'config' in path:
        rules.append(RuleType.CONFIG_MODIFIED)
    if 'test' in path and file_change.status == 'removed':
        rules.append(RuleType.TEST_DELETED)
    if 'auth' in path or 'secret' in path:
        rules.append(RuleType.SECURITY_SENSITIVE)
    return rules


class TestHeuristicRules:
    """Property tests for the heuristic analyzer."""

    @given(files=st.lists(file_strategy, max_size=10))
    def test_rules_match_predicates(self, files):
        """
        Property: Comments are exactly the matching rules per file, in file then rule order.

        Given: Any list of changed files
        When: Heuristic rules are applied
        Then: Each file yields one comment per matching rule and nothing else
        """
        comments = HeuristicAnalyzer().review_files(files)

        expected = [
            (file_change.path, MESSAGES[rule_type])
            for file_change in files
            for rule_type in expected_rules(file_change)
        ]
        assert [(c.path, c.body) for c in comments] == expected

    @given(
        files=st.lists(file_strategy, max_size=10),
        number=st.integers(min_value=1, max_value=100000)
    )
    def test_summary_counts_comments(self, files, number):
        """
        Property: The summary reports the number of generated comments.

        Given: Any list of changed files and PR number
        When: The heuristic analysis runs
        Then: The summary count equals len(comments) and names the PR
        """
        pr_ref = PRReference("acme", "widgets", number)

        result = HeuristicAnalyzer().analyze(pr_ref, files)

        assert result.summary == (
            f"Automated PR analysis found {len(result.comments)} suggestion(s) for acme/widgets#{number}."
        )
        assert all(c.position is None for c in result.comments)
