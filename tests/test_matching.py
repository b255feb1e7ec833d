"""Unit tests for overlap scoring and the verdict data models."""

import pytest

from jobmatch.config.models import MatchingConfig, ScoringMode
from jobmatch.llm.exceptions import EmbeddingError
from jobmatch.matching import (
    MatchVerdict,
    OverlapScore,
    OverlapScorer,
    ReferenceEmbeddingCache,
    ReferenceTechSet,
    compute_match_percentage,
    score_exact,
    score_in_context,
)

KEYWORDS = ["react", "node", "aws", "graphql", "rust"]


@pytest.fixture
def reference(reference_names):
    return ReferenceTechSet.from_names(reference_names)


class TestComputeMatchPercentage:
    """Tests for the rounded percentage helper."""

    @pytest.mark.parametrize(
        "count, total, expected",
        [
            (0, 0, 0),
            (0, 5, 0),
            (5, 5, 100),
            (2, 3, 67),
            (1, 3, 33),
            (1, 8, 13),
            (1, 200, 1),
            (1, 2, 50),
        ],
    )
    def test_values(self, count, total, expected):
        assert compute_match_percentage(count, total) == expected


class TestReferenceTechSet:
    def test_from_names_strips_and_dedupes(self):
        ref = ReferenceTechSet.from_names([" React", "React", "", "Node.js"])

        assert ref.names == ("React", "Node.js")
        assert len(ref) == 2
        assert "React" in ref
        assert "react" not in ref

    def test_iteration_keeps_order(self, reference):
        assert list(reference) == ["React", "Node.js", "AWS", "GraphQL"]


class TestScoreExact:
    """Tests for exact-name scoring."""

    def test_two_of_three(self, reference):
        score = score_exact(["React", "Node.js", "AWS Lambda"], reference)

        assert score.tech_match_count == 2
        assert score.total_required_techs == 3
        assert score.match_percentage == 67
        assert score.matched_techs == ("React", "Node.js")
        assert score.unmatched_techs == ("AWS Lambda",)
        assert score.mode == "exact"

    def test_empty_techs(self, reference):
        score = score_exact([], reference)

        assert score.tech_match_count == 0
        assert score.total_required_techs == 0
        assert score.match_percentage == 0

    def test_empty_reference(self):
        score = score_exact(["React"], ReferenceTechSet())

        assert score.tech_match_count == 0
        assert score.match_percentage == 0

    def test_duplicates_each_count(self, reference):
        score = score_exact(["React", "React", "Rust"], reference)

        assert score.tech_match_count == 2
        assert score.total_required_techs == 3

    def test_case_sensitive(self, reference):
        assert score_exact(["react"], reference).tech_match_count == 0

    def test_to_dict(self, reference):
        data = score_exact(["React", "Rust"], reference).to_dict()

        assert data["techMatchCount"] == 1
        assert data["totalRequiredTechs"] == 2
        assert data["matchPercentage"] == 50
        assert data["unmatchedTechs"] == ["Rust"]

    def test_tech_lists_stored_as_tuples(self):
        matched = ["React"]
        score = OverlapScore(1, 2, 50, matched_techs=matched, unmatched_techs=["Rust"])
        matched.append("AWS")

        assert score.matched_techs == ("React",)
        assert isinstance(score.unmatched_techs, tuple)


class TestScoreInContext:
    def test_mentions_in_context(self):
        context = "Built React dashboards backed by GraphQL services."

        score = score_in_context(["React", "GraphQL", "Kafka"], context)

        assert score.matched_techs == ("React", "GraphQL")
        assert score.match_percentage == 67
        assert score.mode == "context"

    def test_empty_context(self):
        assert score_in_context(["React"], "").tech_match_count == 0


class TestOverlapScorer:
    """Tests for the OverlapScorer service."""

    def test_exact_mode_default(self, reference):
        scorer = OverlapScorer(reference)

        assert scorer.score(["React", "Rust"]).match_percentage == 50

    def test_similarity_requires_embedder(self, reference):
        with pytest.raises(ValueError, match="requires an embedder"):
            OverlapScorer(reference, mode=ScoringMode.SIMILARITY)

    def test_similarity_mode(self, reference, make_embedder):
        embedder = make_embedder(KEYWORDS)
        scorer = OverlapScorer(reference, mode=ScoringMode.SIMILARITY, embedder=embedder)

        score = scorer.score(["NodeJS", "AWS Lambda", "Rust"])

        assert score.matched_techs == ("NodeJS", "AWS Lambda")
        assert score.unmatched_techs == ("Rust",)
        assert score.match_percentage == 67
        assert score.mode == "similarity"

    def test_similarity_threshold_respected(self, reference, make_embedder):
        embedder = make_embedder(KEYWORDS)
        scorer = OverlapScorer(
            reference, mode=ScoringMode.SIMILARITY, similarity_threshold=0.9, embedder=embedder
        )

        # "react node" is equally close to React and Node.js: cosine ~0.707
        assert scorer.score(["react node"]).tech_match_count == 0

    def test_similarity_duplicates_embedded_once(self, reference, make_embedder):
        embedder = make_embedder(KEYWORDS)
        scorer = OverlapScorer(reference, mode=ScoringMode.SIMILARITY, embedder=embedder)

        score = scorer.score(["React", "React"])

        assert score.tech_match_count == 2
        assert embedder.calls[-1] == ["React"]

    def test_similarity_empty_techs_skips_embedding(self, reference, make_embedder):
        embedder = make_embedder(KEYWORDS)
        scorer = OverlapScorer(reference, mode=ScoringMode.SIMILARITY, embedder=embedder)

        assert scorer.score([]).match_percentage == 0
        assert embedder.calls == []

    def test_similarity_embedding_error_propagates(self, reference, make_embedder):
        embedder = make_embedder(KEYWORDS, error=EmbeddingError("down"))
        scorer = OverlapScorer(reference, mode=ScoringMode.SIMILARITY, embedder=embedder)

        with pytest.raises(EmbeddingError):
            scorer.score(["React"])

    def test_context_mode(self, reference):
        scorer = OverlapScorer(reference, mode=ScoringMode.CONTEXT)

        score = scorer.score(["React", "Kafka"], context="Five years of React.")

        assert score.matched_techs == ("React",)

    def test_context_mode_without_context(self, reference, caplog):
        scorer = OverlapScorer(reference, mode=ScoringMode.CONTEXT)

        with caplog.at_level("WARNING", logger="jobmatch.matching.scorer"):
            score = scorer.score(["React"])

        assert score.tech_match_count == 0
        assert any(getattr(r, "event", None) == "scoring.context.missing" for r in caplog.records)

    def test_from_config(self, reference, make_embedder):
        config = MatchingConfig(scoring_mode="similarity", similarity_threshold=0.5)

        scorer = OverlapScorer.from_config(reference, config, embedder=make_embedder(KEYWORDS))

        assert scorer.mode == ScoringMode.SIMILARITY
        assert scorer.similarity_threshold == 0.5
        assert isinstance(scorer.reference_cache, ReferenceEmbeddingCache)


class TestReferenceEmbeddingCache:
    """Tests for the lazily built reference matrix."""

    def test_embeds_once(self, reference, make_embedder):
        embedder = make_embedder(KEYWORDS)
        cache = ReferenceEmbeddingCache(reference, embedder)

        assert not cache.initialized
        first = cache.get()
        second = cache.get()

        assert first is second
        assert cache.initialized
        assert embedder.calls == [["React", "Node.js", "AWS", "GraphQL"]]
        assert first.shape == (4, len(KEYWORDS))

    def test_matrix_is_read_only(self, reference, make_embedder):
        matrix = ReferenceEmbeddingCache(reference, make_embedder(KEYWORDS)).get()

        with pytest.raises(ValueError):
            matrix[0, 0] = 5.0

    def test_failure_leaves_cache_empty(self, reference, make_embedder):
        embedder = make_embedder(KEYWORDS, error=EmbeddingError("down"))
        cache = ReferenceEmbeddingCache(reference, embedder)

        with pytest.raises(EmbeddingError):
            cache.get()

        assert not cache.initialized
        embedder.error = None
        assert cache.get().shape[0] == 4

    def test_shared_across_scorers(self, reference, make_embedder):
        embedder = make_embedder(KEYWORDS)
        cache = ReferenceEmbeddingCache(reference, embedder)
        scorers = [
            OverlapScorer(reference, mode=ScoringMode.SIMILARITY, embedder=embedder, reference_cache=cache)
            for _ in range(3)
        ]

        for scorer in scorers:
            scorer.score(["React"])

        reference_calls = [call for call in embedder.calls if call == list(reference.names)]
        assert len(reference_calls) == 1


class TestMatchVerdict:
    """Tests for verdict invariants."""

    def test_valid(self):
        verdict = MatchVerdict(
            match=True, reasons=["ok"], tech_match_count=2, total_required_techs=3, match_percentage=67
        )

        assert verdict.to_dict() == {
            "match": True,
            "reasons": ["ok"],
            "techMatchCount": 2,
            "totalRequiredTechs": 3,
            "matchPercentage": 67,
        }

    def test_reasons_stored_as_tuple(self):
        reasons = ["ok"]
        verdict = MatchVerdict(
            match=True, reasons=reasons, tech_match_count=1, total_required_techs=1, match_percentage=100
        )
        reasons.append("tampered")

        assert verdict.reasons == ("ok",)

    @pytest.mark.parametrize("reasons", [[], [""], ["  "]])
    def test_reasons_required(self, reasons):
        with pytest.raises(ValueError, match="reason"):
            MatchVerdict(
                match=False, reasons=reasons, tech_match_count=0, total_required_techs=0, match_percentage=0
            )

    def test_count_cannot_exceed_total(self):
        with pytest.raises(ValueError, match="exceeds"):
            MatchVerdict(
                match=True, reasons=["x"], tech_match_count=4, total_required_techs=3, match_percentage=100
            )

    def test_negative_counts_rejected(self):
        with pytest.raises(ValueError, match="negative"):
            MatchVerdict(
                match=False, reasons=["x"], tech_match_count=-1, total_required_techs=3, match_percentage=0
            )

    def test_percentage_must_agree_with_counts(self):
        with pytest.raises(ValueError, match="does not match counts"):
            MatchVerdict(
                match=True, reasons=["x"], tech_match_count=2, total_required_techs=3, match_percentage=66
            )
