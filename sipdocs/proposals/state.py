"""Proposal states and the catalog of valid combinations.

A proposal's position in the process is a (stage, status, recommendation)
triple. Only the combinations listed in VALID_STATES exist; the order of
that list is the order in which label sets are matched against it.

Usage:
    from sipdocs.proposals.state import State, Stage, Status

    State(Stage.DESIGN, Status.UNDER_REVIEW)
    state.labels()  # {"stage:design", "status:under-review"}
"""

from dataclasses import dataclass
from enum import Enum

STAGE_PREFIX = "stage:"
STATUS_PREFIX = "status:"
RECOMMENDATION_PREFIX = "recommendation:"


class Stage(Enum):
    """Process stage. Values are the label strings."""
    PRE_SIP = "pre-sip"
    DESIGN = "design"
    IMPLEMENTATION = "implementation"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return self.value


class Status(Enum):
    """Status within a stage. Values are the label strings."""
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under-review"
    VOTE_REQUESTED = "vote-requested"
    WAITING_FOR_IMPLEMENTATION = "waiting-for-implementation"
    ACCEPTED = "accepted"
    SHIPPED = "shipped"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"

    @property
    def label(self) -> str:
        return self.value


class Recommendation(Enum):
    """Committee recommendation attached to a vote request."""
    ACCEPT = "accept"
    REJECT = "reject"

    @property
    def label(self) -> str:
        return self.value


# Statuses a proposal can have once it has left the stages entirely
STAGELESS_STATUSES = frozenset({Status.REJECTED, Status.WITHDRAWN})


@dataclass(frozen=True)
class State:
    """A (stage, status, recommendation) triple.

    Raises ValueError on construction when the triple is not well-formed.
    """
    stage: Stage | None
    status: Status
    recommendation: Recommendation | None = None

    def __post_init__(self):
        if self.stage is None and self.status not in STAGELESS_STATUSES:
            raise ValueError(f"Status '{self.status.label}' requires a stage")
        if self.status is Status.VOTE_REQUESTED and self.recommendation is None:
            raise ValueError("Status 'vote-requested' requires a recommendation")
        if self.recommendation is not None and self.status is not Status.VOTE_REQUESTED:
            raise ValueError(
                f"Status '{self.status.label}' cannot carry a recommendation"
            )

    def labels(self) -> frozenset[str]:
        """Issue labels that encode this state."""
        labels = {STATUS_PREFIX + self.status.label}
        if self.stage is not None:
            labels.add(STAGE_PREFIX + self.stage.label)
        if self.recommendation is not None:
            labels.add(RECOMMENDATION_PREFIX + self.recommendation.label)
        return frozenset(labels)

    def describe(self) -> str:
        """Human-readable form, e.g. "design / vote-requested / accept"."""
        parts = [
            self.stage.label if self.stage else "-",
            self.status.label,
            self.recommendation.label if self.recommendation else "-",
        ]
        return " / ".join(parts)


VALID_STATES: tuple[State, ...] = (
    State(Stage.PRE_SIP,        Status.SUBMITTED),
    State(Stage.DESIGN,         Status.UNDER_REVIEW),
    State(Stage.DESIGN,         Status.VOTE_REQUESTED,             Recommendation.ACCEPT),
    State(Stage.DESIGN,         Status.VOTE_REQUESTED,             Recommendation.REJECT),
    State(Stage.IMPLEMENTATION, Status.WAITING_FOR_IMPLEMENTATION),
    State(Stage.IMPLEMENTATION, Status.UNDER_REVIEW),
    State(Stage.IMPLEMENTATION, Status.VOTE_REQUESTED,             Recommendation.ACCEPT),
    State(Stage.IMPLEMENTATION, Status.VOTE_REQUESTED,             Recommendation.REJECT),
    State(Stage.COMPLETED,      Status.ACCEPTED),
    State(Stage.COMPLETED,      Status.SHIPPED),
    State(None,                 Status.REJECTED),
    State(None,                 Status.WITHDRAWN),
)


def is_valid_state(state: State) -> bool:
    """Check whether a state belongs to the catalog."""
    return state in VALID_STATES
