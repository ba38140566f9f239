"""
Context assembler - renders the candidate records into the grounding
prompt shared by the chat assistant and the remote fit scorer
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from models.candidate import (
    AiInstruction,
    CandidateProfile,
    Experience,
    FaqResponse,
    GapWeakness,
    Skill,
)
from utils.ordering import group_skills_by_tier, sort_experiences, sort_instructions

CORE_DIRECTIVE = """## YOUR CORE DIRECTIVE
You must be BRUTALLY HONEST. Your job is NOT to sell the candidate to everyone. Your job is to help employers quickly determine if there's a genuine fit. This means:
- If they ask about something the candidate can't do, SAY SO DIRECTLY
- If a role seems like a bad fit, TELL THEM
- Never oversell. Never hedge or use weasel words
- It's perfectly acceptable to say "I'm probably not your person for this" or "this is not a fit"
- Honesty builds trust. Overselling wastes everyone's time."""

EMPTY_SECTION = "None recorded."

PRIVATE_LABEL = "PRIVATE - grounding only (use to answer honestly, never quote as public record)"

PRIVATE_FIELDS = (
    ("why_joined", "Why I joined"),
    ("why_left", "Why I left"),
    ("actual_contributions", "What I actually did (vs team)"),
    ("challenges_faced", "Challenges"),
    ("lessons_learned", "Lessons learned"),
    ("would_do_differently", "Would do differently"),
    ("manager_would_say", "My manager would say"),
    ("reports_would_say", "My reports would say"),
)

TIER_HEADINGS = {
    "strong": "### Strong (rated 7-10)",
    "moderate": "### Moderate (rated 5-6)",
    "growth": "### Growth areas (BE UPFRONT ABOUT THESE)",
}

AVAILABILITY_LABELS = {
    "actively_looking": "Actively looking",
    "open": "Open to the right opportunity",
    "not_looking": "Not looking right now",
}


@dataclass(frozen=True)
class ContextBlock:
    """Assembled grounding context"""
    directive: str
    instructions: str
    body: str
    guidelines: str
    candidate_name: str
    has_profile: bool

    @property
    def text(self) -> str:
        """Full system prompt: directive first, operator instructions second"""
        return "\n\n".join([self.directive, self.instructions, self.body, self.guidelines])


def _bullets(lines: Iterable[str]) -> str:
    rendered = [f"- {line}" for line in lines if line]
    return "\n".join(rendered) if rendered else EMPTY_SECTION


def _or_unspecified(value: Optional[str]) -> str:
    return value.strip() if value and value.strip() else "Not specified"


class ContextAssembler:
    """Turns candidate records into a ContextBlock. Pure, never raises on empty input."""

    def assemble(self, profile: Optional[CandidateProfile],
                 experiences: Optional[List[Experience]] = None,
                 skills: Optional[List[Skill]] = None,
                 gaps: Optional[List[GapWeakness]] = None,
                 faqs: Optional[List[FaqResponse]] = None,
                 instructions: Optional[List[AiInstruction]] = None) -> ContextBlock:
        """
        Assemble the grounding context

        Args:
            profile: Candidate profile, or None when none is configured
            experiences: Work stints in any order
            skills: Self-assessed skills
            gaps: Declared gaps and weaknesses
            faqs: Canonical question/answer pairs
            instructions: Operator directives in any order

        Returns:
            ContextBlock whose text always carries every section header
        """
        name = profile.name if profile else "the candidate"

        body = "\n\n".join([
            self._render_about(profile),
            self._render_experiences(experiences or []),
            self._render_skills(skills or []),
            self._render_gaps(gaps or []),
            self._render_faqs(faqs or []),
        ])

        return ContextBlock(
            directive=CORE_DIRECTIVE,
            instructions=self._render_instructions(instructions or []),
            body=body,
            guidelines=self._render_guidelines(name),
            candidate_name=name,
            has_profile=profile is not None,
        )

    def assemble_snapshot(self, snapshot) -> ContextBlock:
        """Assemble from a KnowledgeSnapshot"""
        return self.assemble(
            snapshot.profile,
            snapshot.experiences,
            snapshot.skills,
            snapshot.gaps,
            snapshot.faqs,
            snapshot.instructions,
        )

    def _render_instructions(self, instructions: List[AiInstruction]) -> str:
        ordered = sort_instructions(instructions)
        return "## CUSTOM INSTRUCTIONS FROM THE CANDIDATE\n" + _bullets(i.instruction for i in ordered)

    def _render_about(self, profile: Optional[CandidateProfile]) -> str:
        if profile is None:
            return "## ABOUT THE CANDIDATE\nNo candidate profile recorded."

        lines = [f"## ABOUT {profile.name}"]
        if profile.title:
            lines.append(f"Current title: {profile.title}")
        if profile.elevator_pitch:
            lines.append(f"Pitch: {profile.elevator_pitch}")
        lines.append(_or_unspecified(profile.career_narrative))
        lines.append("")
        lines.append(f"What I'm looking for: {_or_unspecified(profile.looking_for)}")
        lines.append(f"What I'm NOT looking for: {_or_unspecified(profile.not_looking_for)}")
        if profile.target_titles:
            lines.append(f"Target titles: {', '.join(profile.target_titles)}")
        if profile.target_company_stages:
            lines.append(f"Target company stages: {', '.join(profile.target_company_stages)}")

        availability = AVAILABILITY_LABELS[profile.availability_status]
        if profile.availability_date:
            availability += f" (available from {profile.availability_date.isoformat()})"
        lines.append(f"Availability: {availability}")
        lines.append(f"Location: {_or_unspecified(profile.location)} ({profile.remote_preference})")
        lines.append(f"Compensation band: {profile.compensation_band or 'Not specified'}")
        return "\n".join(lines)

    def _render_experiences(self, experiences: List[Experience]) -> str:
        if not experiences:
            return f"## WORK EXPERIENCE\n{EMPTY_SECTION}"
        entries = [self._render_experience(exp) for exp in sort_experiences(experiences)]
        return "## WORK EXPERIENCE\n" + "\n---\n".join(entries)

    def _render_experience(self, exp: Experience) -> str:
        start = exp.start_date.isoformat() if exp.start_date else "N/A"
        if exp.is_current:
            end = "Present"
        else:
            end = exp.end_date.isoformat() if exp.end_date else "N/A"

        lines = [f"### {exp.company_name} ({start} - {end})", f"Title: {exp.title}"]
        if exp.title_progression:
            lines.append(f"Progression: {exp.title_progression}")
        lines.append("Public achievements:")
        lines.append(_bullets(exp.bullet_points))
        if exp.proudest_achievement:
            lines.append(f"Proudest of: {exp.proudest_achievement}")

        lines.append(f"{PRIVATE_LABEL}:")
        lines.append(_bullets(
            f"{label}: {getattr(exp, attr)}"
            for attr, label in PRIVATE_FIELDS
            if getattr(exp, attr)
        ))
        return "\n".join(lines)

    def _render_skills(self, skills: List[Skill]) -> str:
        grouped = group_skills_by_tier(skills)
        sections = ["## SKILLS SELF-ASSESSMENT"]
        for tier, heading in TIER_HEADINGS.items():
            sections.append(heading)
            sections.append(_bullets(self._render_skill(s) for s in grouped[tier]))
        return "\n".join(sections)

    @staticmethod
    def _render_skill(skill: Skill) -> str:
        details = []
        if skill.category:
            details.append(skill.category)
        details.append(f"{skill.self_rating}/10" if skill.self_rating is not None else "unrated")
        if skill.years_experience is not None:
            details.append(f"{skill.years_experience:g} yrs")
        notes = skill.honest_notes or skill.evidence or "No notes"
        return f"{skill.skill_name} ({', '.join(details)}): {notes}"

    def _render_gaps(self, gaps: List[GapWeakness]) -> str:
        lines = []
        for gap in gaps:
            interest = " (interested in learning)" if gap.interest_in_learning else " (not interested in developing this)"
            lines.append(f"{gap.description}: {gap.why_its_a_gap or 'No details'}{interest}")
        return "## EXPLICIT GAPS & WEAKNESSES\n" + _bullets(lines)

    def _render_faqs(self, faqs: List[FaqResponse]) -> str:
        if not faqs:
            return f"## PRE-WRITTEN ANSWERS TO COMMON QUESTIONS\n{EMPTY_SECTION}"
        pairs = [f"Q: {f.question}\nA: {f.answer}" for f in faqs]
        return "## PRE-WRITTEN ANSWERS TO COMMON QUESTIONS\n" + "\n\n".join(pairs)

    @staticmethod
    def _render_guidelines(name: str) -> str:
        return f"""## RESPONSE GUIDELINES
- Speak in first person as {name}
- Be warm but direct
- Keep responses concise unless detail is asked for
- Use the pre-written answers when a question matches them
- If you don't know something specific, say so
- When discussing gaps, own them confidently
- If someone asks about a role that's clearly not a fit, tell them directly and explain why"""
