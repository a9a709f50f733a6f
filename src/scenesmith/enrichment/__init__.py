"""Character evidence extraction and fill-only-missing enrichment."""

from __future__ import annotations

from .evidence import (
    CharacterEvidence,
    EvidenceOptions,
    extract_character_evidence,
)
from .formatters import format_all_evidence_for_prompt, format_evidence_for_prompt
from .merge import (
    ENRICHABLE_FIELDS,
    MergeResult,
    apply_enrichments,
    build_character_id_map,
    is_field_empty,
    merge_characters,
    merge_enriched_profile,
)
from .validators import parse_enrichment_response

__all__ = [
    "ENRICHABLE_FIELDS",
    "CharacterEvidence",
    "EvidenceOptions",
    "MergeResult",
    "apply_enrichments",
    "build_character_id_map",
    "extract_character_evidence",
    "format_all_evidence_for_prompt",
    "format_evidence_for_prompt",
    "is_field_empty",
    "merge_characters",
    "merge_enriched_profile",
    "parse_enrichment_response",
]
