"""
Proposal state handling for sipdocs.

Maps issue labels to the catalog of proposal states and renders
classified proposals as frontmatter documents.
"""

from sipdocs.proposals.state import (
    Stage,
    Status,
    Recommendation,
    State,
    VALID_STATES,
    is_valid_state,
)
from sipdocs.proposals.classify import (
    classify_labels,
    decode_pull_request,
    matching_states,
)
from sipdocs.proposals.frontmatter import (
    build_frontmatter,
    render_document,
    proposal_filename,
    strip_sip_prefix,
)

__all__ = [
    "Stage",
    "Status",
    "Recommendation",
    "State",
    "VALID_STATES",
    "is_valid_state",
    "classify_labels",
    "decode_pull_request",
    "matching_states",
    "build_frontmatter",
    "render_document",
    "proposal_filename",
    "strip_sip_prefix",
]
