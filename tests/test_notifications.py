"""Unit tests for match report rendering and sinks."""

import io
import json
from datetime import datetime, timezone
from unittest.mock import Mock

import pytest

from jobmatch.config.models import OutputFormat
from jobmatch.domain.models import ExtractedFields, JobCategory, JobPost, NormalizedFields
from jobmatch.matching import MatchVerdict, ReferenceTechSet, score_exact
from jobmatch.notifications import (
    ConsoleSink,
    JsonSink,
    NotificationDeliveryError,
    NotificationTemplateError,
    TemplateRenderer,
    build_report_context,
    build_sink,
)
from jobmatch.pipeline import PipelineState


@pytest.fixture
def finished_state(reference_names):
    normalized = NormalizedFields(
        title="Senior Full-Stack Engineer",
        techs=["React", "Node.js", "Docker"],
        category=JobCategory.FULL_STACK,
        seniority="Senior",
        remote=True,
    )
    score = score_exact(normalized.techs, ReferenceTechSet.from_names(reference_names))
    verdict = MatchVerdict(
        match=True,
        reasons=["Sufficient technology overlap"],
        tech_match_count=score.tech_match_count,
        total_required_techs=score.total_required_techs,
        match_percentage=score.match_percentage,
    )
    return PipelineState(
        run_id="abc123",
        started_at=datetime(2025, 11, 4, 12, 0, tzinfo=timezone.utc),
        post=JobPost(text="Senior Full-Stack Engineer", source="text"),
        extracted=ExtractedFields(
            title="Senior Full-Stack Engineer",
            technologies=["ReactJS", "NodeJS", "Docker"],
            seniority="Senior",
            remote=True,
        ),
        normalized=normalized,
        score=score,
        verdict=verdict,
    )


class TestBuildReportContext:
    def test_sections(self, finished_state):
        context = build_report_context(finished_state)

        assert context["run_id"] == "abc123"
        assert context["generated_at"] == "2025-11-04T12:00:00Z"
        assert context["post_source"] == "text"
        assert context["extracted"]["technologies"] == ["ReactJS", "NodeJS", "Docker"]
        assert context["normalized"]["category"] == "Full-Stack"
        assert context["matchResult"]["matchPercentage"] == 67
        assert context["matched_techs"] == ["React", "Node.js"]
        assert context["unmatched_techs"] == ["Docker"]
        assert context["strategy"] == "deterministic"
        assert context["extraction_error"] is None

    def test_partial_state(self):
        context = build_report_context(PipelineState(run_id="r1"))

        assert context["matchResult"] is None
        assert context["post_source"] is None
        assert context["normalized"]["techs"] == []
        assert context["extracted"]["title"] is None


class TestTemplateRenderer:
    def test_renders_report(self, finished_state):
        text = TemplateRenderer().render(build_report_context(finished_state))

        assert text.startswith("Job match report")
        assert "Match:        YES" in text
        assert "Overlap:      2 of 3 (67%)" in text
        assert "Not matched:  Docker" in text
        assert "Remote:       yes" in text
        assert "Salary range: -" in text
        assert "  - Sufficient technology overlap" in text
        assert "extraction failed" not in text

    def test_extraction_note(self, finished_state):
        state = finished_state.merge(extraction_error="Model returned an empty response")

        text = TemplateRenderer().render(build_report_context(state))

        assert "Note: extraction failed (Model returned an empty response)" in text

    def test_no_verdict(self):
        text = TemplateRenderer().render(build_report_context(PipelineState(run_id="r1")))

        assert "No verdict." in text

    def test_missing_variable_raises(self):
        with pytest.raises(NotificationTemplateError):
            TemplateRenderer().render({"run_id": "r1"})

    def test_missing_template_raises(self, finished_state):
        renderer = TemplateRenderer(report_template="nope.txt.j2")

        with pytest.raises(NotificationTemplateError):
            renderer.render(build_report_context(finished_state))


class TestSinks:
    """Tests for ConsoleSink and JsonSink."""

    def test_console_sink(self, finished_state):
        stream = io.StringIO()

        ConsoleSink(stream).emit(finished_state)

        assert "Job match report" in stream.getvalue()

    def test_json_sink(self, finished_state):
        stream = io.StringIO()

        JsonSink(stream).emit(finished_state)

        output = stream.getvalue()
        assert output.endswith("\n")
        document = json.loads(output)
        assert set(document) == {
            "runId",
            "generatedAt",
            "post",
            "extracted",
            "normalized",
            "matchResult",
            "extractionError",
        }
        assert document["matchResult"] == {
            "match": True,
            "reasons": ["Sufficient technology overlap"],
            "techMatchCount": 2,
            "totalRequiredTechs": 3,
            "matchPercentage": 67,
        }
        assert document["normalized"]["techs"] == ["React", "Node.js", "Docker"]

    def test_write_failure(self, finished_state):
        stream = Mock()
        stream.write.side_effect = OSError("Broken pipe")

        with pytest.raises(NotificationDeliveryError, match="Broken pipe"):
            JsonSink(stream).emit(finished_state)

    def test_defaults_to_stdout(self, finished_state, capsys):
        ConsoleSink().emit(finished_state)

        assert "Job match report" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "output_format, expected",
        [("text", ConsoleSink), ("json", JsonSink), (OutputFormat.JSON, JsonSink)],
    )
    def test_build_sink(self, output_format, expected):
        assert isinstance(build_sink(output_format), expected)

    def test_build_sink_unknown_format(self):
        with pytest.raises(ValueError):
            build_sink("xml")
