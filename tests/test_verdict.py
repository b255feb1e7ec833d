"""Unit tests for verdict assembly."""

import json

import pytest

from jobmatch.config.models import MatchingConfig, VerdictStrategy
from jobmatch.domain.models import JobCategory, NormalizedFields
from jobmatch.llm.exceptions import LanguageModelError
from jobmatch.matching import ReferenceTechSet, VerdictAssembler, deterministic_reasons, score_exact


@pytest.fixture
def normalized():
    return NormalizedFields(
        title="Senior Full-Stack Engineer",
        techs=["React", "Node.js", "AWS Lambda"],
        category=JobCategory.FULL_STACK,
    )


@pytest.fixture
def score(reference_names, normalized):
    return score_exact(normalized.techs, ReferenceTechSet.from_names(reference_names))


def _events(caplog):
    return [getattr(r, "event", None) for r in caplog.records]


class TestDeterministicReasons:
    def test_sufficient(self, score):
        reasons = deterministic_reasons(score, 49)

        assert reasons == [
            "Sufficient technology overlap: 2 of 3 required technologies known (67% >= 49% threshold)"
        ]

    def test_insufficient(self, score):
        reasons = deterministic_reasons(score, 70)

        assert reasons[0].startswith("Insufficient technology overlap")
        assert "67% < 70%" in reasons[0]


class TestDeterministicStrategy:
    """Tests for the fixed-reason verdict."""

    def test_match_above_threshold(self, score, normalized):
        verdict = VerdictAssembler().assemble(score, normalized, threshold=49)

        assert verdict.match is True
        assert verdict.tech_match_count == 2
        assert verdict.total_required_techs == 3
        assert verdict.match_percentage == 67
        assert verdict.strategy == "deterministic"
        assert len(verdict.reasons) == 1

    def test_no_match_below_threshold(self, score, normalized):
        verdict = VerdictAssembler().assemble(score, normalized, threshold=70)

        assert verdict.match is False

    def test_equal_to_threshold_matches(self, score, normalized):
        assert VerdictAssembler().assemble(score, normalized, threshold=67).match is True

    def test_no_technologies(self, normalized, reference_names):
        empty = score_exact([], ReferenceTechSet.from_names(reference_names))

        verdict = VerdictAssembler().assemble(empty, NormalizedFields(), threshold=50)

        assert verdict.match is False
        assert verdict.match_percentage == 0
        assert verdict.reasons

    def test_empty_score_misses_lowest_threshold(self, reference_names):
        empty = score_exact([], ReferenceTechSet.from_names(reference_names))

        assert VerdictAssembler().assemble(empty, NormalizedFields(), threshold=1).match is False

    def test_logs_completion(self, score, normalized, caplog):
        with caplog.at_level("INFO", logger="jobmatch.matching.verdict"):
            VerdictAssembler().assemble(score, normalized, threshold=50)

        assert "verdict.completed" in _events(caplog)


class TestModelStrategy:
    """Tests for model-authored verdicts and their fallback."""

    def _assembler(self, make_llm, reply, reference_names):
        llm = make_llm([reply])
        return llm, VerdictAssembler(
            strategy=VerdictStrategy.MODEL, language_model=llm, reference_names=reference_names
        )

    def test_requires_language_model(self):
        with pytest.raises(ValueError, match="language model"):
            VerdictAssembler(strategy=VerdictStrategy.MODEL)

    def test_model_reasons_used(self, make_llm, reference_names, score, normalized):
        reply = json.dumps({"match": True, "reasons": ["Strong React and Node.js background"]})
        llm, assembler = self._assembler(make_llm, reply, reference_names)

        verdict = assembler.assemble(score, normalized, threshold=49)

        assert verdict.match is True
        assert verdict.reasons == ("Strong React and Node.js background",)
        assert verdict.strategy == "model"
        assert "2 out of 3" in llm.prompts[0]
        assert "React, Node.js, AWS, GraphQL" in llm.prompts[0]

    def test_counts_from_score_not_reply(self, make_llm, reference_names, score, normalized):
        reply = json.dumps(
            {"match": True, "reasons": ["ok"], "techMatchCount": 9, "totalRequiredTechs": 9, "matchPercentage": 100}
        )
        _, assembler = self._assembler(make_llm, reply, reference_names)

        verdict = assembler.assemble(score, normalized, threshold=49)

        assert verdict.tech_match_count == 2
        assert verdict.total_required_techs == 3
        assert verdict.match_percentage == 67

    def test_fenced_reply_accepted(self, make_llm, reference_names, score, normalized):
        reply = '```json\n{"match": false, "reasons": ["Missing AWS Lambda"]}\n```'
        _, assembler = self._assembler(make_llm, reply, reference_names)

        verdict = assembler.assemble(score, normalized, threshold=70)

        assert verdict.match is False
        assert verdict.reasons == ("Missing AWS Lambda",)

    def test_context_quoted_in_prompt(self, make_llm, reference_names, score, normalized):
        reply = json.dumps({"match": True, "reasons": ["ok"]})
        llm, assembler = self._assembler(make_llm, reply, reference_names)

        assembler.assemble(score, normalized, threshold=49, context="Led a React migration")

        assert "Resume excerpts:\nLed a React migration" in llm.prompts[0]

    def test_garbage_reply_falls_back(self, make_llm, reference_names, score, normalized, caplog):
        _, assembler = self._assembler(make_llm, "I cannot decide.", reference_names)

        with caplog.at_level("DEBUG", logger="jobmatch.matching.verdict"):
            verdict = assembler.assemble(score, normalized, threshold=49)

        assert verdict.strategy == "fallback"
        assert verdict.match is True
        assert verdict.reasons[0].startswith("Sufficient technology overlap")
        assert verdict.reasons[-1].startswith("Could not parse model verdict")
        assert verdict.reasons[-1].endswith("defaulting to true")
        assert "verdict.fallback" in _events(caplog)

    def test_missing_reasons_falls_back(self, make_llm, reference_names, score, normalized):
        _, assembler = self._assembler(make_llm, '{"match": false}', reference_names)

        verdict = assembler.assemble(score, normalized, threshold=70)

        assert verdict.strategy == "fallback"
        assert verdict.match is False
        assert "reasons" in verdict.reasons[-1]
        assert verdict.reasons[-1].endswith("defaulting to false")

    def test_blank_reasons_fall_back(self, make_llm, reference_names, score, normalized):
        _, assembler = self._assembler(make_llm, '{"match": true, "reasons": ["  "]}', reference_names)

        assert assembler.assemble(score, normalized, threshold=49).strategy == "fallback"

    def test_threshold_overrides_model(self, make_llm, reference_names, score, normalized, caplog):
        reply = json.dumps({"match": True, "reasons": ["Looks close enough"]})
        _, assembler = self._assembler(make_llm, reply, reference_names)

        with caplog.at_level("WARNING", logger="jobmatch.matching.verdict"):
            verdict = assembler.assemble(score, normalized, threshold=70)

        assert verdict.match is False
        assert verdict.reasons == ("Looks close enough",)
        assert "verdict.override" in _events(caplog)

    def test_model_error_propagates(self, make_llm, reference_names, score, normalized):
        llm = make_llm(error=LanguageModelError("unreachable"))
        assembler = VerdictAssembler(strategy=VerdictStrategy.MODEL, language_model=llm)

        with pytest.raises(LanguageModelError):
            assembler.assemble(score, normalized, threshold=50)

    def test_from_config(self, make_llm):
        config = MatchingConfig(verdict_strategy="model")

        assembler = VerdictAssembler.from_config(config, language_model=make_llm(), reference_names=["Go"])

        assert assembler.strategy == VerdictStrategy.MODEL
        assert assembler.reference_names == ["Go"]
