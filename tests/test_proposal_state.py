"""Tests for sipdocs.proposals.state module."""

import pytest

from sipdocs.proposals.state import (
    Stage,
    Status,
    Recommendation,
    State,
    VALID_STATES,
    is_valid_state,
)


class TestEnums:
    """Label strings carried by the enums."""

    def test_stage_labels(self):
        assert [s.label for s in Stage] == [
            "pre-sip", "design", "implementation", "completed",
        ]

    def test_status_labels(self):
        assert [s.label for s in Status] == [
            "submitted",
            "under-review",
            "vote-requested",
            "waiting-for-implementation",
            "accepted",
            "shipped",
            "rejected",
            "withdrawn",
        ]

    def test_recommendation_labels(self):
        assert [r.label for r in Recommendation] == ["accept", "reject"]


class TestStateInvariants:
    """State construction rejects malformed triples."""

    def test_stageless_rejected_is_allowed(self):
        state = State(None, Status.REJECTED)
        assert state.stage is None
        assert state.recommendation is None

    def test_stageless_withdrawn_is_allowed(self):
        assert State(None, Status.WITHDRAWN).status is Status.WITHDRAWN

    def test_stageless_under_review_raises(self):
        with pytest.raises(ValueError, match="requires a stage"):
            State(None, Status.UNDER_REVIEW)

    def test_vote_requested_without_recommendation_raises(self):
        with pytest.raises(ValueError, match="requires a recommendation"):
            State(Stage.DESIGN, Status.VOTE_REQUESTED)

    def test_recommendation_without_vote_requested_raises(self):
        with pytest.raises(ValueError, match="cannot carry a recommendation"):
            State(Stage.DESIGN, Status.UNDER_REVIEW, Recommendation.ACCEPT)

    def test_stageless_with_recommendation_raises(self):
        with pytest.raises(ValueError, match="cannot carry a recommendation"):
            State(None, Status.REJECTED, Recommendation.REJECT)

    def test_states_are_hashable_and_comparable(self):
        a = State(Stage.DESIGN, Status.UNDER_REVIEW)
        b = State(Stage.DESIGN, Status.UNDER_REVIEW)
        assert a == b
        assert len({a, b}) == 1


class TestStateLabels:
    """Encoded label sets."""

    def test_full_triple(self):
        state = State(Stage.IMPLEMENTATION, Status.VOTE_REQUESTED, Recommendation.REJECT)
        assert state.labels() == {
            "stage:implementation",
            "status:vote-requested",
            "recommendation:reject",
        }

    def test_status_only(self):
        assert State(None, Status.WITHDRAWN).labels() == {"status:withdrawn"}

    def test_describe(self):
        state = State(Stage.DESIGN, Status.VOTE_REQUESTED, Recommendation.ACCEPT)
        assert state.describe() == "design / vote-requested / accept"
        assert State(None, Status.REJECTED).describe() == "- / rejected / -"


class TestCatalog:
    """The catalog of valid states."""

    def test_has_twelve_entries(self):
        assert len(VALID_STATES) == 12

    def test_entries_are_distinct(self):
        assert len(set(VALID_STATES)) == 12
        assert len({s.labels() for s in VALID_STATES}) == 12

    def test_order(self):
        assert VALID_STATES[0] == State(Stage.PRE_SIP, Status.SUBMITTED)
        assert VALID_STATES[2] == State(
            Stage.DESIGN, Status.VOTE_REQUESTED, Recommendation.ACCEPT
        )
        assert VALID_STATES[-2] == State(None, Status.REJECTED)
        assert VALID_STATES[-1] == State(None, Status.WITHDRAWN)

    def test_recommendation_only_with_vote_requested(self):
        for state in VALID_STATES:
            if state.recommendation is not None:
                assert state.status is Status.VOTE_REQUESTED

    def test_is_valid_state(self):
        assert is_valid_state(State(Stage.COMPLETED, Status.SHIPPED))
        assert not is_valid_state(State(Stage.PRE_SIP, Status.SHIPPED))
