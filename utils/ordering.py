"""
Presentation rules shared by every consumer of candidate records:
skill strength tiers and experience ordering.
"""

from typing import Dict, Iterable, List, Optional

from models.candidate import AiInstruction, Experience, FaqResponse, Skill

STRENGTH_TIERS = ("strong", "moderate", "growth")

STRONG_MIN_RATING = 7
MODERATE_MIN_RATING = 5


def strength_tier(rating: Optional[int]) -> str:
    """
    Derive the strength tier from a self rating.

    Args:
        rating: Self rating 1-10, or None when the candidate gave none

    Returns:
        "strong" for 7+, "moderate" for 5-6, "growth" otherwise
    """
    if rating is None or rating < MODERATE_MIN_RATING:
        return "growth"
    if rating < STRONG_MIN_RATING:
        return "moderate"
    return "strong"


def group_skills_by_tier(skills: Iterable[Skill]) -> Dict[str, List[Skill]]:
    """Group skills into the three tiers, keeping input order inside each tier"""
    grouped = {tier: [] for tier in STRENGTH_TIERS}
    for skill in skills:
        grouped[strength_tier(skill.self_rating)].append(skill)
    return grouped


def experience_sort_key(experience: Experience) -> tuple:
    return (0 if experience.is_current else 1, experience.display_order)


def sort_experiences(experiences: Iterable[Experience]) -> List[Experience]:
    """Current roles first, then ascending display_order"""
    return sorted(experiences, key=experience_sort_key)


def sort_instructions(instructions: Iterable[AiInstruction]) -> List[AiInstruction]:
    """Highest priority first; equal priorities keep their stored order"""
    return sorted(instructions, key=lambda i: -i.priority)


def sort_faqs(faqs: Iterable[FaqResponse]) -> List[FaqResponse]:
    """Commonly asked questions first"""
    return sorted(faqs, key=lambda f: 0 if f.is_common_question else 1)
