"""
Fit analysis result model
"""

from pydantic import BaseModel, Field
from typing import List, Literal

Recommendation = Literal["good_fit", "consider", "not_ideal"]


class FitResult(BaseModel):
    """Outcome of scoring a job description against the candidate"""
    score: int = Field(..., ge=0, le=100, description="Match score percentage")
    recommendation: Recommendation
    strengths: List[str] = Field(default_factory=list)
    gaps: List[str] = Field(default_factory=list)
    summary: str
    strategy: Literal["remote", "local", "neutral"] = "local"

    def to_response(self) -> dict:
        """Wire shape returned to the analyzer UI"""
        return {
            "match_score": self.score,
            "recommendation": self.recommendation,
            "strengths": self.strengths,
            "gaps": self.gaps,
            "summary": self.summary,
        }
