"""Render character evidence as prompt text."""

from __future__ import annotations

from collections.abc import Mapping

from scenesmith.enrichment.evidence import CharacterEvidence

TOP_CO_OCCURRENCES = 5


def format_evidence_for_prompt(evidence: CharacterEvidence) -> str:
    """Format evidence for a single character into a prompt section.

    Empty sections are omitted, so a character with no evidence renders as
    just its heading.
    """
    parts = [f"### {evidence.name}"]

    if evidence.dialogue_excerpts:
        parts.append("**Dialogue samples:**")
        for excerpt in evidence.dialogue_excerpts:
            parts.append(excerpt)
            parts.append("---")

    if evidence.action_mentions:
        parts.append("**Action descriptions:**")
        parts.extend(f"- {action}" for action in evidence.action_mentions)

    top = sorted(evidence.co_occurrences.items(), key=lambda item: -item[1])
    if top:
        parts.append("**Frequently appears with:**")
        parts.extend(
            f"- {name} ({count} scenes)" for name, count in top[:TOP_CO_OCCURRENCES]
        )

    return "\n".join(parts)


def format_all_evidence_for_prompt(
    evidence_map: Mapping[str, CharacterEvidence], max_characters: int = 20
) -> str:
    """Format the most prominent characters' evidence into one prompt block.

    Args:
        evidence_map: Evidence keyed by character name
        max_characters: Maximum number of characters to include

    Returns:
        Sections ordered by dialogue excerpt count, most first
    """
    ranked = sorted(evidence_map.values(), key=lambda e: -len(e.dialogue_excerpts))
    return "\n\n".join(format_evidence_for_prompt(e) for e in ranked[:max_characters])
