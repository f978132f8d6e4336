"""
Tests for ancestry distances.
"""

import pytest

from flow_version.ancestry import count_until_any_of, position_of
from flow_version.exceptions import CommitNotFoundError, MissingDataError, NoCommonAncestorError
from flow_version.repository import commits_of


@pytest.fixture
def history():
    return commits_of('c0', 'c1', 'c2', 'c3')


class TestPositionOf:
    """Test position_of()"""

    def test_position(self, history):
        """Test [c0,c1,c2,c3] and c2 -> 2"""
        assert position_of('c2', history) == 2

    def test_head_is_zero(self, history):
        """Test the HEAD commit is 0 commits ahead of itself"""
        assert position_of('c0', history) == 0

    def test_first_occurrence(self):
        """Test the first matching index is returned"""
        assert position_of('c1', commits_of('c0', 'c1', 'c1')) == 1

    def test_not_found(self, history):
        """Test a sha outside the history"""
        with pytest.raises(CommitNotFoundError, match="'c9'") as exc_info:
            position_of('c9', history)

        assert isinstance(exc_info.value, MissingDataError)
        assert exc_info.value.context == {'sha': 'c9'}


class TestCountUntilAnyOf:
    """Test count_until_any_of()"""

    def test_count(self, history):
        """Test [c0,c1,c2,c3] and {c3,c9} -> 3"""
        assert count_until_any_of({'c3', 'c9'}, history) == 3

    def test_first_target_reached_stops(self, history):
        """Test the scan stops at the first target"""
        assert count_until_any_of(['c3', 'c1'], history) == 1

    def test_head_in_targets(self, history):
        """Test zero when HEAD itself is a target"""
        assert count_until_any_of(['c0'], history) == 0

    def test_no_common_ancestor(self, history):
        """Test failure when the history never reaches a target"""
        with pytest.raises(NoCommonAncestorError):
            count_until_any_of(['x1', 'x2'], history)

    def test_empty_targets(self, history):
        """Test failure with no targets"""
        with pytest.raises(NoCommonAncestorError):
            count_until_any_of([], history)
