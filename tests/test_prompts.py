"""Tests for gims.llm.prompts module."""

from gims.llm.prompts import (
    BODY_DIRECTIVE,
    CONVENTIONAL_DIRECTIVE,
    LEAD_SENTENCES,
    PLAIN_DIRECTIVE,
    SUBJECT_ONLY_DIRECTIVE,
    build_prompt,
)
from gims.models import GenerationOptions, ReductionStrategy


class TestBuildPrompt:
    """Tests for build_prompt function."""

    def test_plain_subject_only(self):
        """Test the default prompt layout."""
        prompt = build_prompt("+x", ReductionStrategy.FULL, GenerationOptions())

        assert prompt == (
            f"{LEAD_SENTENCES[ReductionStrategy.FULL]}\n+x\n\n"
            f"{PLAIN_DIRECTIVE} {SUBJECT_ONLY_DIRECTIVE}"
        )

    def test_conventional_with_body(self):
        """Test conventional and body directives."""
        options = GenerationOptions(conventional=True, body=True)

        prompt = build_prompt("+x", ReductionStrategy.FULL, options)

        assert prompt.endswith(f"{CONVENTIONAL_DIRECTIVE} {BODY_DIRECTIVE}")
        assert PLAIN_DIRECTIVE not in prompt

    def test_content_embedded_verbatim(self, sample_diff):
        """Test that the content appears unchanged."""
        prompt = build_prompt(sample_diff, ReductionStrategy.FULL, GenerationOptions())

        assert sample_diff in prompt

    def test_each_strategy_has_distinct_lead(self):
        """Test the model is told which kind of content it sees."""
        leads = {
            build_prompt("c", strategy, GenerationOptions()).split("\n")[0]
            for strategy in ReductionStrategy
        }

        assert len(leads) == len(ReductionStrategy)
