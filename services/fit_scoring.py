"""
Fit scoring engine - scores a job description against the candidate.

Two interchangeable strategies share one recommendation mapping: the
remote strategy asks the Bedrock model, the local strategy is a
deterministic keyword/weight heuristic used when the model is
unconfigured or unreachable.
"""

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from models.fit import FitResult
from services.context_assembler import ContextBlock
from utils.bedrock_client import BedrockClient
from utils.errors import InputError, UpstreamError

NEUTRAL_SCORE = 50
GOOD_FIT_THRESHOLD = 75
CONSIDER_THRESHOLD = 50

DEFAULT_SUMMARY = "Analysis complete."


def classify_score(score: int) -> str:
    """
    Map a score to a recommendation. Shared by every strategy.

    Args:
        score: Match score 0-100

    Returns:
        "good_fit" for 75+, "not_ideal" below 50, "consider" otherwise
    """
    if score >= GOOD_FIT_THRESHOLD:
        return "good_fit"
    if score < CONSIDER_THRESHOLD:
        return "not_ideal"
    return "consider"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def require_job_description(job_description: Optional[str]) -> str:
    if not job_description or not job_description.strip():
        raise InputError("job_description is required")
    return job_description


def neutral_result() -> FitResult:
    """Result returned when no candidate profile exists"""
    return FitResult(
        score=NEUTRAL_SCORE,
        recommendation=classify_score(NEUTRAL_SCORE),
        strengths=["Unable to analyze - no candidate profile found"],
        gaps=["Please add profile data first"],
        summary="No candidate profile available for analysis.",
        strategy="neutral",
    )


class FitScorer(ABC):
    """A scoring strategy"""

    @abstractmethod
    def score(self, job_description: str, context: ContextBlock) -> FitResult:
        ...


@dataclass(frozen=True)
class KeywordMatches:
    strong: Tuple[str, ...]
    moderate: Tuple[str, ...]
    gap: Tuple[str, ...]

    @property
    def total(self) -> int:
        return len(self.strong) + len(self.moderate) + len(self.gap)

    @property
    def all(self) -> frozenset:
        return frozenset(self.strong + self.moderate + self.gap)


class LocalFitScorer(FitScorer):
    """Deterministic keyword/weight heuristic. Same text in, same result out."""

    STRONG_KEYWORDS = (
        "product manager", "product management", "roadmap", "strategy", "user research",
        "stakeholder", "metrics", "okr", "kpi", "consumer", "b2c", "prioritization",
        "cross-functional",
    )
    MODERATE_KEYWORDS = (
        "sql", "a/b test", "agile", "scrum", "analytics", "amplitude", "mixpanel", "jira",
        "data-driven", "user interview",
    )
    GAP_KEYWORDS = (
        "engineering manager", "software engineer", "coding", "programming",
        "machine learning engineer", "ml engineer", "b2b", "enterprise", "sales cycle",
        "procurement",
    )

    STRONG_WEIGHT = 1.0
    MODERATE_WEIGHT = 0.6
    GAP_WEIGHT = 0.8
    MIN_SCORE = 20
    MAX_SCORE = 95

    # (any of these keywords matched) -> sentence, in output order
    STRENGTH_MESSAGES = (
        (("product manager", "product management"), "7 years of product management experience (9/10 self-rating)"),
        (("roadmap", "strategy"), "Strong product strategy and roadmap planning experience"),
        (("user research",), "200+ user interviews conducted, built research practice from scratch"),
        (("stakeholder", "cross-functional"), "Proven stakeholder management with C-suite and cross-functional teams"),
        (("metrics", "okr", "kpi"), "Data-driven decision maker, strong with OKRs and product metrics"),
        (("consumer", "b2c"), "Deep consumer/B2C product experience (3M+ MAU)"),
        (("sql", "analytics"), "Can pull own data and run basic SQL queries"),
        (("a/b test",), "Experience designing and running A/B experiments"),
    )
    GAP_MESSAGES = (
        (("engineering manager", "software engineer", "coding", "programming"),
         "Not a technical IC - can discuss architecture but cannot implement code"),
        (("machine learning engineer", "ml engineer"),
         "No ML engineering background - would need strong ML partner for deep technical work"),
        (("b2b", "enterprise", "sales cycle", "procurement"),
         "Limited enterprise/B2B experience - background is consumer and SMB products"),
    )
    DEFAULT_STRENGTH = "General product management background"
    PEOPLE_MANAGEMENT_GAP = "Haven't managed other PMs directly - cross-functional leadership only"
    GENERIC_GAP = "Role may require skills not prominently featured in my background"
    GENERIC_GAP_BELOW = 70

    SUMMARIES = {
        "good_fit": (
            "Based on the job description, this looks like a strong match. My core skills align well "
            "with what you're looking for. Happy to dig into any specific areas."
        ),
        "consider": (
            "There's decent overlap here, but some gaps worth discussing. I can ramp up on some areas, "
            "but you should know what you'd be getting into."
        ),
        "not_ideal": (
            "I want to be honest - this might not be the best fit. The role emphasizes skills that aren't "
            "my strengths. I'd rather tell you now than waste your time."
        ),
    }

    def match(self, job_description: str) -> KeywordMatches:
        """Case-insensitive substring match against each vocabulary"""
        lower = job_description.lower()
        return KeywordMatches(
            strong=tuple(k for k in self.STRONG_KEYWORDS if k in lower),
            moderate=tuple(k for k in self.MODERATE_KEYWORDS if k in lower),
            gap=tuple(k for k in self.GAP_KEYWORDS if k in lower),
        )

    def compute_score(self, matches: KeywordMatches) -> int:
        """Weighted keyword balance mapped onto [20, 95]; 50 when nothing matched"""
        if matches.total == 0:
            return NEUTRAL_SCORE
        raw = (
            len(matches.strong) * self.STRONG_WEIGHT
            + len(matches.moderate) * self.MODERATE_WEIGHT
            - len(matches.gap) * self.GAP_WEIGHT
        ) / matches.total
        score = round_half_up((raw + 1) * 50)
        return max(self.MIN_SCORE, min(self.MAX_SCORE, score))

    def score(self, job_description: str, context: Optional[ContextBlock] = None) -> FitResult:
        require_job_description(job_description)
        matches = self.match(job_description)
        score = self.compute_score(matches)
        recommendation = classify_score(score)

        matched = matches.all
        strengths = [msg for keys, msg in self.STRENGTH_MESSAGES if matched.intersection(keys)]
        if not strengths:
            strengths.append(self.DEFAULT_STRENGTH)

        gaps = [msg for keys, msg in self.GAP_MESSAGES if matched.intersection(keys)]
        lower = job_description.lower()
        if "director" in lower and "product" in lower:
            gaps.append(self.PEOPLE_MANAGEMENT_GAP)
        if not gaps and score < self.GENERIC_GAP_BELOW:
            gaps.append(self.GENERIC_GAP)

        return FitResult(
            score=score,
            recommendation=recommendation,
            strengths=strengths,
            gaps=gaps,
            summary=self.SUMMARIES[recommendation],
            strategy="local",
        )


ANALYZE_SYSTEM_PROMPT = """You are analyzing a job description to assess fit for {name}.

Analyze the job description and return a JSON object with these EXACT fields:
{{
  "match_score": <number 0-100>,
  "recommendation": "good_fit" | "consider" | "not_ideal",
  "strengths": ["strength 1", "strength 2", ...],
  "gaps": ["gap 1", "gap 2", ...],
  "summary": "1-2 sentence assessment"
}}

Use "good_fit" for scores of 75 and above, "not_ideal" below 50, "consider" otherwise.

CANDIDATE CONTEXT:
{context}

IMPORTANT: Return ONLY valid JSON, no markdown code blocks."""


def _coerce_score(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return max(0, min(100, round_half_up(value)))


def _coerce_string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item.strip() for item in value if isinstance(item, str) and item.strip()]


def normalize_fit_payload(payload: Any) -> FitResult:
    """
    Validate loosely-typed model output field by field

    Args:
        payload: Parsed JSON from the model (any shape)

    Returns:
        FitResult where each unusable field has its default
    """
    if not isinstance(payload, dict):
        payload = {}

    raw_score = payload.get("match_score", payload.get("score"))
    score = _coerce_score(raw_score)
    if score is None:
        if raw_score is not None:
            print(f"⚠️ Remote scorer returned non-numeric score {raw_score!r}, defaulting to {NEUTRAL_SCORE}")
        score = NEUTRAL_SCORE

    recommendation = classify_score(score)
    claimed = payload.get("recommendation")
    if claimed is not None and claimed != recommendation:
        print(f"⚠️ Remote recommendation {claimed!r} disagrees with score {score}, using {recommendation!r}")

    summary = payload.get("summary")
    if not isinstance(summary, str) or not summary.strip():
        summary = DEFAULT_SUMMARY

    return FitResult(
        score=score,
        recommendation=recommendation,
        strengths=_coerce_string_list(payload.get("strengths")),
        gaps=_coerce_string_list(payload.get("gaps")),
        summary=summary.strip(),
        strategy="remote",
    )


class RemoteFitScorer(FitScorer):
    """Delegates scoring to the Bedrock model using the assembled context"""

    def __init__(self, bedrock_client: BedrockClient, max_tokens: int = 2048):
        """
        Initialize remote scorer

        Args:
            bedrock_client: Bedrock client instance
            max_tokens: Maximum tokens for the model response
        """
        self.bedrock_client = bedrock_client
        self.max_tokens = max_tokens

    def score(self, job_description: str, context: ContextBlock) -> FitResult:
        require_job_description(job_description)
        system = ANALYZE_SYSTEM_PROMPT.format(name=context.candidate_name, context=context.text)
        prompt = f"Analyze this job description:\n\n{job_description}"

        try:
            payload = self.bedrock_client.invoke_model_json(prompt, system=system, max_tokens=self.max_tokens)
        except ValueError as e:
            print(f"⚠️ Remote scorer returned unparseable output: {str(e)}")
            payload = {}

        return normalize_fit_payload(payload)


class FitScoringEngine:
    """Runs the primary strategy, falling back to the local heuristic on upstream failure"""

    def __init__(self, primary: FitScorer, fallback: Optional[LocalFitScorer] = None):
        self.primary = primary
        self.fallback = fallback or (primary if isinstance(primary, LocalFitScorer) else LocalFitScorer())

    def analyze(self, job_description: str, context: ContextBlock) -> FitResult:
        """
        Score a job description

        Args:
            job_description: Pasted job description text
            context: Assembled candidate context

        Returns:
            FitResult from the primary strategy, or the local one if the primary is unreachable

        Raises:
            InputError: job description is blank
        """
        require_job_description(job_description)
        try:
            return self.primary.score(job_description, context)
        except UpstreamError as e:
            if self.primary is self.fallback:
                raise
            print(f"⚠️ Remote scoring unavailable, using local heuristic: {str(e)}")
            return self.fallback.score(job_description, context)
