"""Property-based tests using Hypothesis.

Screenplays are generated from a small vocabulary of headings, speeches and
action lines so that the generated text exercises every element type.
"""

import string

from hypothesis import given, settings
from hypothesis import strategies as st

from scenesmith.enrichment import (
    ENRICHABLE_FIELDS,
    EvidenceOptions,
    extract_character_evidence,
    is_field_empty,
    merge_enriched_profile,
)
from scenesmith.models import Character, EnrichedCharacterProfile
from scenesmith.parser import FountainParser, count_scenes, tokenize

HEADINGS = ["INT. OFFICE - DAY", "EXT. PARK - NIGHT", ".DREAM", "INT. CAR"]
NAMES = ["JOHN", "SARAH", "MIKE", "DR. WHO"]
SPEECH = ["Hello.", "(quietly)", "Where were you?", "I don't know.", "CUT TO:"]
ID_MAP = {"JOHN": "c1", "SARAH": "c2", "MIKE": "c3"}

field_values = st.one_of(
    st.none(),
    st.sampled_from(["", "  "]),
    st.text(alphabet=string.ascii_letters + " ", max_size=12),
)

speeches = st.tuples(
    st.sampled_from(NAMES), st.lists(st.sampled_from(SPEECH), min_size=1, max_size=6)
).map(lambda t: "\n".join([t[0], *t[1]]))

actions = st.tuples(
    st.sampled_from(NAMES), st.integers(min_value=0, max_value=60)
).map(lambda t: f"{t[0].title()} crosses the room" + " slowly" * t[1] + ".")

screenplays = st.lists(
    st.one_of(st.sampled_from(HEADINGS), speeches, actions), max_size=30
).map("\n\n".join)


@st.composite
def characters(draw):
    """Character records with a mix of empty and filled fields."""
    values = {name: draw(field_values) for name in ENRICHABLE_FIELDS}
    relationships = draw(
        st.dictionaries(st.sampled_from(["c1", "c2", "c3"]), field_values.filter(bool))
    )
    return Character(id="c1", name="JOHN", relationships=relationships, **values)


@st.composite
def profiles(draw):
    """Enriched profiles with arbitrary optional fields."""
    values = {name: draw(field_values) for name in ENRICHABLE_FIELDS}
    relationships = draw(
        st.one_of(
            st.none(),
            st.dictionaries(
                st.sampled_from(["SARAH", "MIKE", "NOBODY"]),
                st.text(alphabet=string.ascii_letters, min_size=1, max_size=10),
            ),
        )
    )
    return EnrichedCharacterProfile(name="JOHN", relationships=relationships, **values)


class TestMergeProperties:
    """Properties of fill-only-missing merges."""

    @given(existing=characters(), profile=profiles())
    def test_idempotent(self, existing, profile):
        """Test that a second merge of the same profile changes nothing."""
        once = merge_enriched_profile(existing, profile, ID_MAP)
        assert merge_enriched_profile(once, profile, ID_MAP) == once

    @given(existing=characters(), profile=profiles())
    def test_non_destructive(self, existing, profile):
        """Test that filled fields and relationships keep their values."""
        merged = merge_enriched_profile(existing, profile, ID_MAP)
        for name in ENRICHABLE_FIELDS:
            if not is_field_empty(getattr(existing, name)):
                assert getattr(merged, name) == getattr(existing, name)
        for target, description in existing.relationships.items():
            if not is_field_empty(description):
                assert merged.relationships[target] == description

    @given(existing=characters(), profile=profiles())
    def test_input_unchanged(self, existing, profile):
        """Test that the existing record is never modified."""
        before = existing.model_copy(deep=True)
        merge_enriched_profile(existing, profile, ID_MAP)
        assert existing == before


class TestParserProperties:
    """Properties of scene segmentation."""

    @given(text=screenplays)
    @settings(max_examples=50)
    def test_scene_numbering(self, text):
        """Test contiguous numbering and ordered, disjoint line ranges."""
        scenes = FountainParser().parse(text).scenes

        assert len(scenes) == count_scenes(text)
        assert [s.number for s in scenes] == list(range(1, len(scenes) + 1))
        assert len({s.id for s in scenes}) == len(scenes)
        for scene in scenes:
            assert scene.start_line <= scene.end_line
        for earlier, later in zip(scenes, scenes[1:], strict=False):
            assert earlier.end_line < later.start_line


class TestEvidenceProperties:
    """Properties of evidence extraction."""

    @given(text=screenplays)
    @settings(max_examples=50)
    def test_co_occurrence_symmetric(self, text):
        """Test that shared scenes are counted the same from both sides."""
        evidence = extract_character_evidence(tokenize(text), NAMES)
        for a in NAMES:
            for b in NAMES:
                if a != b:
                    assert evidence[a].co_occurrences.get(b) == evidence[
                        b
                    ].co_occurrences.get(a)
            assert a not in evidence[a].co_occurrences

    @given(
        text=screenplays,
        options=st.builds(
            EvidenceOptions,
            max_dialogue_excerpts=st.integers(min_value=0, max_value=3),
            max_action_mentions=st.integers(min_value=0, max_value=3),
            max_dialogue_lines_per_excerpt=st.integers(min_value=1, max_value=3),
            max_action_length=st.integers(min_value=4, max_value=80),
        ),
    )
    @settings(max_examples=50)
    def test_bounded(self, text, options):
        """Test that evidence never exceeds the configured limits."""
        evidence = extract_character_evidence(tokenize(text), NAMES, options)
        for item in evidence.values():
            assert len(item.dialogue_excerpts) <= options.max_dialogue_excerpts
            assert len(item.action_mentions) <= options.max_action_mentions
            for excerpt in item.dialogue_excerpts:
                lines = excerpt.split("\n")
                assert len(lines) - 1 <= options.max_dialogue_lines_per_excerpt
            for mention in item.action_mentions:
                assert len(mention) <= options.max_action_length
