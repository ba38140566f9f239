from types import SimpleNamespace

import pytest

from services.context_assembler import CORE_DIRECTIVE
from services.fit_scoring import (
    DEFAULT_SUMMARY,
    FitScoringEngine,
    LocalFitScorer,
    RemoteFitScorer,
    classify_score,
    normalize_fit_payload,
)
from utils.errors import InputError, UpstreamError

ENTERPRISE_JD = "Looking for a B2B enterprise sales engineer with deep ML engineering experience"
PM_JD = ("Senior product manager, own roadmap and strategy, strong stakeholder management, "
         "consumer B2C product")


@pytest.fixture
def local():
    return LocalFitScorer()


@pytest.mark.unit
@pytest.mark.parametrize("score,expected", [
    (0, "not_ideal"), (49, "not_ideal"), (50, "consider"), (74, "consider"),
    (75, "good_fit"), (100, "good_fit"),
])
def test_classify_score_thresholds(score, expected):
    assert classify_score(score) == expected


@pytest.mark.unit
def test_no_keyword_matches_is_neutral(local, demo_context):
    result = local.score("Barista wanted for a busy downtown cafe", demo_context)
    assert result.score == 50
    assert result.recommendation == "consider"
    assert result.strengths == [LocalFitScorer.DEFAULT_STRENGTH]
    assert result.gaps == [LocalFitScorer.GENERIC_GAP]
    assert result.summary == LocalFitScorer.SUMMARIES["consider"]


@pytest.mark.unit
def test_enterprise_ml_role_is_not_ideal(local, demo_context):
    matches = local.match(ENTERPRISE_JD)
    assert matches.strong == () and matches.moderate == ()
    assert {"b2b", "enterprise", "ml engineer"} <= set(matches.gap)

    result = local.score(ENTERPRISE_JD, demo_context)
    assert result.score == 20
    assert result.recommendation == "not_ideal"
    assert "Limited enterprise/B2B experience - background is consumer and SMB products" in result.gaps
    assert result.summary == LocalFitScorer.SUMMARIES["not_ideal"]


@pytest.mark.unit
def test_consumer_pm_role_is_good_fit(local, demo_context):
    result = local.score(PM_JD, demo_context)
    assert result.score >= 75
    assert result.recommendation == "good_fit"
    assert result.gaps == []
    assert "Deep consumer/B2C product experience (3M+ MAU)" in result.strengths
    assert "Strong product strategy and roadmap planning experience" in result.strengths


@pytest.mark.unit
def test_mixed_weights(local):
    # s=1 (roadmap), m=1 (sql), g=1 (b2b): (1 + 0.6 - 0.8) / 3 -> 63
    result = local.score("Own the roadmap, write SQL, sell B2B")
    assert result.score == 63
    assert result.recommendation == "consider"
    assert result.strengths == [
        "Strong product strategy and roadmap planning experience",
        "Can pull own data and run basic SQL queries",
    ]


@pytest.mark.unit
def test_director_product_role_flags_people_management(local):
    result = local.score("Director of Product to lead our consumer roadmap")
    assert LocalFitScorer.PEOPLE_MANAGEMENT_GAP in result.gaps


@pytest.mark.unit
@pytest.mark.parametrize("jd", [
    ENTERPRISE_JD,
    PM_JD,
    "coding programming software engineer procurement",
    "agile scrum jira",
    "roadmap",
    "B2B",
    "Product management at an enterprise company with a long sales cycle, okr and kpi driven",
])
def test_local_score_always_in_range(local, jd):
    result = local.score(jd)
    assert 20 <= result.score <= 95
    assert result.recommendation == classify_score(result.score)


@pytest.mark.unit
def test_local_scoring_is_idempotent(local, demo_context):
    assert local.score(PM_JD, demo_context) == local.score(PM_JD, demo_context)


@pytest.mark.unit
def test_matching_is_case_insensitive(local):
    assert local.score("ROADMAP").score == local.score("roadmap").score == 95


@pytest.mark.unit
@pytest.mark.parametrize("blank", ["", "   ", "\n\t"])
def test_blank_job_description_rejected(local, blank):
    with pytest.raises(InputError):
        local.score(blank)


@pytest.mark.unit
def test_remote_and_local_agree_on_classification():
    for score in range(0, 101):
        assert normalize_fit_payload({"match_score": score}).recommendation == classify_score(score)


@pytest.mark.unit
def test_normalize_defaults_each_field_independently():
    result = normalize_fit_payload({
        "match_score": "high",
        "recommendation": "amazing",
        "strengths": "not a list",
        "gaps": ["Real gap", 3, None, "  "],
        "summary": 42,
    })
    assert result.score == 50
    assert result.recommendation == "consider"
    assert result.strengths == []
    assert result.gaps == ["Real gap"]
    assert result.summary == DEFAULT_SUMMARY
    assert result.strategy == "remote"


@pytest.mark.unit
def test_normalize_keeps_valid_fields():
    result = normalize_fit_payload({
        "match_score": 82.4,
        "recommendation": "good_fit",
        "strengths": ["Consumer depth"],
        "gaps": [],
        "summary": "Strong overlap.",
    })
    assert (result.score, result.recommendation, result.strengths, result.summary) == (
        82, "good_fit", ["Consumer depth"], "Strong overlap.")


@pytest.mark.unit
@pytest.mark.parametrize("payload,score", [
    ({"match_score": True}, 50),
    ({"match_score": 140}, 100),
    ({"match_score": -3}, 0),
    ({"score": 30}, 30),
    ({}, 50),
    ([1, 2, 3], 50),
    (None, 50),
])
def test_normalize_score_edge_cases(payload, score):
    assert normalize_fit_payload(payload).score == score


@pytest.mark.unit
def test_remote_recommendation_follows_score():
    result = normalize_fit_payload({"match_score": 40, "recommendation": "good_fit"})
    assert result.recommendation == "not_ideal"


@pytest.mark.unit
def test_remote_scorer_sends_context_and_job_description(demo_context):
    calls = {}

    def invoke_model_json(prompt, system=None, max_tokens=0):
        calls.update(prompt=prompt, system=system, max_tokens=max_tokens)
        return {"match_score": 77, "recommendation": "good_fit", "strengths": ["a"], "gaps": ["b"],
                "summary": "ok"}

    scorer = RemoteFitScorer(SimpleNamespace(invoke_model_json=invoke_model_json), max_tokens=512)
    result = scorer.score(PM_JD, demo_context)

    assert result.score == 77 and result.strategy == "remote"
    assert PM_JD in calls["prompt"]
    assert CORE_DIRECTIVE in calls["system"]
    assert "Blaine Holt" in calls["system"]
    assert calls["max_tokens"] == 512


@pytest.mark.unit
def test_remote_scorer_unparseable_output_defaults(demo_context):
    def invoke_model_json(prompt, system=None, max_tokens=0):
        raise ValueError("Could not parse JSON from response: sure! here you go")

    result = RemoteFitScorer(SimpleNamespace(invoke_model_json=invoke_model_json)).score(PM_JD, demo_context)
    assert result.score == 50
    assert result.recommendation == "consider"
    assert result.strengths == [] and result.gaps == []
    assert result.summary == DEFAULT_SUMMARY


@pytest.mark.unit
def test_engine_falls_back_to_local_when_remote_unreachable(demo_context):
    class Unreachable:
        def score(self, job_description, context):
            raise UpstreamError("Bedrock unreachable")

    engine = FitScoringEngine(Unreachable(), LocalFitScorer())
    result = engine.analyze(ENTERPRISE_JD, demo_context)
    assert result.strategy == "local"
    assert result.score == 20


@pytest.mark.unit
def test_engine_rejects_blank_input_before_strategy(demo_context):
    class Exploding:
        def score(self, job_description, context):
            raise AssertionError("strategy should not run")

    with pytest.raises(InputError):
        FitScoringEngine(Exploding()).analyze("  ", demo_context)


@pytest.mark.unit
def test_local_only_engine_reraises_upstream(monkeypatch, demo_context):
    local = LocalFitScorer()
    engine = FitScoringEngine(local)
    assert engine.fallback is local

    def boom(job_description, context=None):
        raise UpstreamError("unexpected")

    monkeypatch.setattr(local, "score", boom)
    with pytest.raises(UpstreamError):
        engine.analyze(PM_JD, demo_context)
