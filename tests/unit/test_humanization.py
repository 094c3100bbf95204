"""
Unit tests for the humanization pipeline.
"""
import random

import pytest

from rewriter.humanization import (
    ELLIPSIS,
    FILLERS,
    HUMANIZATION_STAGES,
    VARIATIONS,
    add_human_texture,
    add_imperfections,
    humanize,
    split_long_sentences,
)

SAMPLE_TEXT = (
    "However, the team decided to utilize the new tool in order to ship faster. "
    "Moreover, it's clear the plan is not perfect and I am still unsure. "
    "It is important to remember that we do not control every input."
)

EDGE_CASES = [
    "",
    " ",
    "no punctuation at all",
    "...",
    ". . .",
    ",,,,",
    "x" * 500,
    "x" * 150 + ", " + "y" * 150,
    "Émigré café naïve. Ünïcödé text here.",
]


class TestAddImperfections:
    """Test typo injection."""

    def test_always_fire_rewrites_every_whole_word(self, always_fire):
        """Test every whole-word 'the' becomes 'teh' and substrings are left alone."""
        text = "the cat will bathe in the sun. Then the end."
        result = add_imperfections(text, always_fire)

        assert result == "teh cat will bathe in teh sun. Then teh end."

    def test_all_typo_rules_applied(self, always_fire):
        text = "it's time to walk the dog and the cat"
        result = add_imperfections(text, always_fire)

        assert result == "its time too walk teh dog adn teh cat"

    def test_case_sensitive(self, always_fire):
        """Test capitalized words are not matched."""
        text = "The And To"
        assert add_imperfections(text, always_fire) == text

    def test_never_fire_is_noop(self, never_fire):
        assert add_imperfections(SAMPLE_TEXT, never_fire) == SAMPLE_TEXT

    def test_stage_fires_but_no_rule_does(self):
        """Test the stage coin flip and per-rule coin flips are independent."""

        class Draws(random.Random):
            def __init__(self, draws):
                super().__init__(0)
                self.draws = list(draws)

            def random(self):
                return self.draws.pop(0)

        # Stage fires (0.1 < 0.4), every rule skipped (0.5 >= 0.3)
        rng = Draws(draws=[0.1, 0.5, 0.5, 0.5, 0.5])
        assert add_imperfections("the and to it's", rng) == "the and to it's"

        # Only the second rule ('and') applies
        rng = Draws(draws=[0.1, 0.5, 0.0, 0.5, 0.5])
        assert add_imperfections("the and to it's", rng) == "the adn to it's"


class TestAddHumanTexture:
    """Test lexical variation, contractions and filler insertion."""

    def test_always_fire(self, always_fire):
        text = "However, the plan is not bad. I am sure we do not need to utilize more. Moreover it works."
        result = add_human_texture(text, always_fire)

        assert result == (
            "you know, That said, that plan isn't bad. "
            "you know, I'm sure we don't need to use more. "
            "you know, Also it works."
        )

    def test_never_fire_skips_fillers_but_still_substitutes(self, never_fire):
        text = "However, I am here. It is important to utilize it in order to win."
        result = add_human_texture(text, never_fire)

        assert "However" not in result
        assert "utilize" not in result
        assert "in order to" not in result
        assert "It is important to" not in result
        assert "I'm here" in result
        assert not any(filler in result for filler in FILLERS)

    def test_contractions_are_global(self, never_fire):
        text = "I do not know. You do not know. It is not here and is not there."
        result = add_human_texture(text, never_fire)

        assert "do not" not in result
        assert "is not" not in result
        assert result.count("don't") == 2
        assert result.count("isn't") == 2

    def test_each_match_draws_its_own_replacement(self):
        """Test repeated occurrences can receive different replacements."""
        text = " ".join(["However"] * 200)
        result = add_human_texture(text, random.Random(7))

        candidates = dict((p.pattern, r) for p, r in VARIATIONS)[r"\bHowever\b"]
        seen = {c for c in candidates if c in result}
        assert len(seen) > 1

    def test_substring_not_replaced(self, always_fire):
        text = "theory and other themes"
        result = add_human_texture(text, always_fire)

        assert "theory" in result
        assert "other" in result
        assert "themes" in result

    def test_fillers_run_after_substitution(self, always_fire):
        """Test filler split sees already-substituted text."""
        text = "Moreover. Moreover"
        result = add_human_texture(text, always_fire)

        assert result == "you know, Also. you know, Also"


class TestSplitLongSentences:
    """Test sentence-length normalization."""

    def test_truncates_without_usable_comma(self):
        sentence = "a" * 199 + "."
        result = split_long_sentences(sentence)

        assert result == "a" * 90 + ELLIPSIS
        assert len(result) == 90 + len(ELLIPSIS)

    def test_splits_at_comma(self):
        sentence = "a" * 50 + "," + "b" * 148 + "."
        assert len(sentence) == 200

        result = split_long_sentences(sentence)

        assert result == "a" * 50 + ". " + "b" * 148 + "."

    def test_comma_too_early_truncates(self):
        sentence = "a" * 10 + "," + "b" * 189
        result = split_long_sentences(sentence)

        assert result == sentence[:90] + ELLIPSIS

    def test_comma_after_search_window_truncates(self):
        sentence = "a" * 100 + "," + "b" * 99
        result = split_long_sentences(sentence)

        assert result == sentence[:90] + ELLIPSIS

    def test_comma_at_index_80_is_used(self):
        sentence = "a" * 80 + ", " + "b" * 60
        result = split_long_sentences(sentence)

        assert result == "a" * 80 + ". " + "b" * 60

    def test_boundary_length_unchanged(self):
        sentence = "a" * 119 + "."
        assert split_long_sentences(sentence) == sentence

    def test_short_sentences_rejoined_with_single_space(self):
        text = "One.   Two.\nThree."
        assert split_long_sentences(text) == "One. Two. Three."

    def test_only_long_segment_changes(self):
        long_sentence = "c" * 130 + "."
        text = f"Short one. {long_sentence} Short two."
        result = split_long_sentences(text)

        assert result == "Short one. " + "c" * 90 + ELLIPSIS + " Short two."


class TestHumanizePipeline:
    """Test the composed pipeline."""

    def test_stage_order(self):
        assert HUMANIZATION_STAGES == [add_imperfections, add_human_texture, split_long_sentences]

    def test_deterministic_with_seeded_rng(self):
        first = humanize(SAMPLE_TEXT, random.Random(1234))
        second = humanize(SAMPLE_TEXT, random.Random(1234))

        assert first == second

    def test_typos_applied_before_lexical_variation(self, always_fire):
        """Test 'the' turned into 'teh' is no longer a lexical variation target."""
        result = humanize("the end", always_fire)

        assert result == "you know, teh end"

    def test_unseeded_rng_still_returns_text(self):
        result = humanize(SAMPLE_TEXT)

        assert isinstance(result, str)
        assert result

    @pytest.mark.parametrize("text", EDGE_CASES)
    @pytest.mark.parametrize("draw", [0.0, 0.5, 0.99])
    def test_total_function(self, text, draw, fixed_random):
        """Test every stage returns a string for awkward inputs."""
        rng = fixed_random(draw)
        for stage in HUMANIZATION_STAGES:
            assert isinstance(stage(text, rng), str)
        assert isinstance(humanize(text, rng), str)

    def test_empty_string(self, always_fire, never_fire):
        assert humanize("", never_fire) == ""
        assert humanize("", always_fire) == "you know, "
