"""Decode issue labels into a catalog state."""

import logging
from typing import Iterable

from sipdocs.lib.github import Issue
from sipdocs.proposals.state import State, VALID_STATES

logger = logging.getLogger(__name__)


def matching_states(labels: Iterable[str]) -> list[State]:
    """All catalog states whose labels are all present, in catalog order.

    Labels that do not encode anything are ignored.
    """
    present = frozenset(labels)
    return [state for state in VALID_STATES if state.labels() <= present]


def classify_labels(labels: Iterable[str]) -> State | None:
    """
    Return the first catalog state encoded by `labels`, or None.

    A well-formed label set matches at most one state. When a malformed set
    (e.g. two status labels) matches several, the earliest in catalog order
    wins and a warning is logged.
    """
    matches = matching_states(labels)
    if not matches:
        return None
    if len(matches) > 1:
        candidates = ", ".join(s.describe() for s in matches)
        logger.warning(
            f"Ambiguous labels match {len(matches)} states ({candidates}); "
            f"using {matches[0].describe()}"
        )
    return matches[0]


def decode_pull_request(issue: Issue) -> State | None:
    """Classify a pull request's labels, logging when it cannot be decoded."""
    state = classify_labels(issue.labels)
    if state is None:
        logger.warning(f"Ignoring pull request #{issue.number}. Unable to decode its state.")
    return state
