"""
Candidate knowledge records
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from typing import Dict, List, Optional, Any, Literal
from datetime import date, datetime


class CandidateProfile(BaseModel):
    """The single candidate profile for this deployment"""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    name: str
    email: Optional[EmailStr] = None
    title: str = ""
    target_titles: List[str] = Field(default_factory=list)
    target_company_stages: List[str] = Field(default_factory=list)
    elevator_pitch: Optional[str] = None
    career_narrative: Optional[str] = None
    looking_for: Optional[str] = None
    not_looking_for: Optional[str] = None
    salary_min: Optional[int] = None
    salary_max: Optional[int] = None
    availability_status: Literal["actively_looking", "open", "not_looking"] = "open"
    availability_date: Optional[date] = None
    location: Optional[str] = None
    remote_preference: Literal["remote", "hybrid", "onsite", "flexible"] = "flexible"
    github_url: Optional[str] = None
    linkedin_url: Optional[str] = None
    twitter_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def compensation_band(self) -> Optional[str]:
        """Human readable salary band, or None when no bound is set"""
        if self.salary_min and self.salary_max:
            return f"${self.salary_min:,} - ${self.salary_max:,}"
        if self.salary_min:
            return f"${self.salary_min:,}+"
        if self.salary_max:
            return f"up to ${self.salary_max:,}"
        return None


class Experience(BaseModel):
    """One work stint, with public achievements and private reflections"""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    company_name: str
    title: str
    title_progression: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: bool = False
    bullet_points: List[str] = Field(default_factory=list)
    proudest_achievement: Optional[str] = None
    display_order: int = 0

    # Private fields - grounding only, never rendered publicly
    why_joined: Optional[str] = None
    why_left: Optional[str] = None
    actual_contributions: Optional[str] = None
    challenges_faced: Optional[str] = None
    lessons_learned: Optional[str] = None
    would_do_differently: Optional[str] = None
    manager_would_say: Optional[str] = None
    reports_would_say: Optional[str] = None
    quantified_impact: Optional[Dict[str, Any]] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @model_validator(mode="after")
    def _current_role_has_no_end(self):
        # a current role never carries an end date
        if self.is_current and self.end_date is not None:
            self.end_date = None
        return self


class Skill(BaseModel):
    """Self-assessed skill. `category` is a domain label, not a strength tier."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    skill_name: str
    category: Optional[str] = None
    self_rating: Optional[int] = None  # 1-10
    evidence: Optional[str] = None
    honest_notes: Optional[str] = None
    years_experience: Optional[float] = None
    last_used: Optional[datetime] = None


class GapWeakness(BaseModel):
    """A named deficiency the candidate is upfront about"""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    gap_type: Optional[str] = None
    description: str
    why_its_a_gap: Optional[str] = None
    interest_in_learning: bool = False
    created_at: Optional[datetime] = None


class FaqResponse(BaseModel):
    """Canonical answer to a question visitors keep asking"""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    question: str
    answer: str
    is_common_question: bool = False


class AiInstruction(BaseModel):
    """Operator supplied directive; higher priority is listed first"""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    instruction_type: Optional[str] = None
    instruction: str
    priority: int = 0
