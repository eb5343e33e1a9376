"""
Render proposal pull requests as frontmatter-only Markdown documents.

The docs site builds its proposal listing from these headers; the
document body stays empty.
"""

import re

import yaml

from sipdocs.lib.validate import validate
from sipdocs.proposals.state import State

FRONTMATTER_DELIMITER = "---"

# "SIP-46 - Title" -> "Title"
SIP_PREFIX_PATTERN = re.compile(r'^SIP-\d+ - ')


def build_frontmatter(title: str, number: int, state: State) -> dict:
    """
    Build the ordered frontmatter mapping for a proposal.

    Key order is title, status, pull-request-number, then stage and
    recommendation when the state has them.
    """
    fields = {
        "title": title,
        "status": state.status.label,
        "pull-request-number": number,
    }
    if state.stage is not None:
        fields["stage"] = state.stage.label
    if state.recommendation is not None:
        fields["recommendation"] = state.recommendation.label
    return fields


def render_document(title: str, number: int, state: State) -> str:
    """
    Render the document text: a YAML header between `---` lines, no body.

    Raises:
        ValidationError: if the frontmatter does not match its schema
    """
    fields = build_frontmatter(title, number, state)
    validate(fields, "frontmatter")
    header = yaml.safe_dump(
        fields,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        width=float("inf"),
    )
    return f"{FRONTMATTER_DELIMITER}\n{header}{FRONTMATTER_DELIMITER}\n"


def strip_sip_prefix(title: str) -> str:
    """Remove a leading "SIP-<number> - " marker, if fully present."""
    return SIP_PREFIX_PATTERN.sub("", title, count=1)


def proposal_filename(title: str) -> str:
    """
    Derive the output file name from a pull request title.

    Raises:
        ValueError: if nothing usable remains of the title
    """
    slug = strip_sip_prefix(title).replace(" ", "-")
    slug = "".join(c for c in slug if c.isalnum() or c == "-").lower()
    if not slug.strip("-"):
        raise ValueError(f"Cannot derive a file name from title '{title}'")
    return f"{slug}.md"
