"""
Knowledge Store Adapter - typed read access to the candidate records and
append-only access to chat history
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from models.candidate import (
    AiInstruction,
    CandidateProfile,
    Experience,
    FaqResponse,
    GapWeakness,
    Skill,
)
from models.chat import ChatMessage
from utils.database import DatabaseManager, rows_as
from utils.ordering import sort_experiences, sort_faqs, sort_instructions
from utils import demo_data


@dataclass
class KnowledgeSnapshot:
    """Every record the context assembler needs, read in one pass"""
    profile: Optional[CandidateProfile]
    experiences: List[Experience] = field(default_factory=list)
    skills: List[Skill] = field(default_factory=list)
    gaps: List[GapWeakness] = field(default_factory=list)
    faqs: List[FaqResponse] = field(default_factory=list)
    instructions: List[AiInstruction] = field(default_factory=list)


class KnowledgeStore(ABC):
    """Read access to candidate records plus the chat log"""

    @abstractmethod
    def get_profile(self) -> Optional[CandidateProfile]:
        ...

    @abstractmethod
    def list_experiences(self) -> List[Experience]:
        """Current roles first, then ascending display_order"""

    @abstractmethod
    def list_skills(self) -> List[Skill]:
        ...

    @abstractmethod
    def list_gaps(self) -> List[GapWeakness]:
        ...

    @abstractmethod
    def list_faqs(self) -> List[FaqResponse]:
        ...

    @abstractmethod
    def list_instructions(self) -> List[AiInstruction]:
        """Highest priority first"""

    @abstractmethod
    def append_messages(self, session_id: str, messages: List[ChatMessage]) -> None:
        """Persist messages for one session in a single write"""

    @abstractmethod
    def list_messages(self, session_id: str, limit: int) -> List[ChatMessage]:
        """The most recent `limit` messages of a session, oldest first"""

    def load_snapshot(self) -> KnowledgeSnapshot:
        """Read every record collection fresh from the store"""
        return KnowledgeSnapshot(
            profile=self.get_profile(),
            experiences=self.list_experiences(),
            skills=self.list_skills(),
            gaps=self.list_gaps(),
            faqs=self.list_faqs(),
            instructions=self.list_instructions(),
        )


class PostgresKnowledgeStore(KnowledgeStore):
    """Knowledge store backed by the hosted PostgreSQL tables"""

    def __init__(self, db_manager: DatabaseManager):
        """
        Initialize the store

        Args:
            db_manager: Database manager instance
        """
        self.db_manager = db_manager

    def get_profile(self) -> Optional[CandidateProfile]:
        row = self.db_manager.execute_query(
            "SELECT * FROM candidate_profile ORDER BY created_at LIMIT 1",
            fetch_one=True
        )
        return rows_as(CandidateProfile, [row])[0] if row else None

    def list_experiences(self) -> List[Experience]:
        rows = self.db_manager.execute_query(
            "SELECT * FROM experiences ORDER BY display_order ASC"
        )
        return sort_experiences(rows_as(Experience, rows))

    def list_skills(self) -> List[Skill]:
        rows = self.db_manager.execute_query(
            "SELECT * FROM skills ORDER BY self_rating DESC NULLS LAST, skill_name ASC"
        )
        return rows_as(Skill, rows)

    def list_gaps(self) -> List[GapWeakness]:
        rows = self.db_manager.execute_query(
            "SELECT * FROM gaps_weaknesses ORDER BY created_at DESC"
        )
        return rows_as(GapWeakness, rows)

    def list_faqs(self) -> List[FaqResponse]:
        rows = self.db_manager.execute_query(
            "SELECT * FROM faq_responses ORDER BY is_common_question DESC, created_at ASC"
        )
        return sort_faqs(rows_as(FaqResponse, rows))

    def list_instructions(self) -> List[AiInstruction]:
        rows = self.db_manager.execute_query(
            "SELECT * FROM ai_instructions ORDER BY priority DESC, created_at ASC"
        )
        return sort_instructions(rows_as(AiInstruction, rows))

    def append_messages(self, session_id: str, messages: List[ChatMessage]) -> None:
        query = """
            INSERT INTO chat_history (id, session_id, role, content, created_at)
            VALUES (%s, %s, %s, %s, %s)
        """
        self.db_manager.execute_batch(
            query,
            [(m.id, session_id, m.role, m.content, m.created_at) for m in messages]
        )

    def list_messages(self, session_id: str, limit: int) -> List[ChatMessage]:
        # newest `limit` rows, flipped back to chronological order.
        # A pair never shares a timestamp; equal timestamps only come from
        # concurrent sends, which have no insertion order, so id fixes one.
        query = """
            SELECT id, session_id, role, content, created_at FROM (
                SELECT id, session_id, role, content, created_at
                FROM chat_history
                WHERE session_id = %s
                ORDER BY created_at DESC, id DESC
                LIMIT %s
            ) AS recent
            ORDER BY created_at ASC, id ASC
        """
        rows = self.db_manager.execute_query(query, params=(session_id, limit))
        return rows_as(ChatMessage, rows)


class InMemoryKnowledgeStore(KnowledgeStore):
    """Process-local store, used for demo mode and in tests"""

    def __init__(self, profile: Optional[CandidateProfile] = None,
                 experiences: Optional[List[Experience]] = None,
                 skills: Optional[List[Skill]] = None,
                 gaps: Optional[List[GapWeakness]] = None,
                 faqs: Optional[List[FaqResponse]] = None,
                 instructions: Optional[List[AiInstruction]] = None):
        self.profile = profile
        self.experiences = list(experiences or [])
        self.skills = list(skills or [])
        self.gaps = list(gaps or [])
        self.faqs = list(faqs or [])
        self.instructions = list(instructions or [])
        self._messages: dict = {}

    @classmethod
    def from_demo(cls) -> "InMemoryKnowledgeStore":
        """Store seeded with the demo candidate"""
        return cls(
            profile=CandidateProfile.model_validate(demo_data.DEMO_PROFILE),
            experiences=rows_as(Experience, demo_data.DEMO_EXPERIENCES),
            skills=rows_as(Skill, demo_data.DEMO_SKILLS),
            gaps=rows_as(GapWeakness, demo_data.DEMO_GAPS),
            faqs=rows_as(FaqResponse, demo_data.DEMO_FAQS),
            instructions=rows_as(AiInstruction, demo_data.DEMO_INSTRUCTIONS),
        )

    def get_profile(self) -> Optional[CandidateProfile]:
        return self.profile

    def list_experiences(self) -> List[Experience]:
        return sort_experiences(self.experiences)

    def list_skills(self) -> List[Skill]:
        return list(self.skills)

    def list_gaps(self) -> List[GapWeakness]:
        return list(self.gaps)

    def list_faqs(self) -> List[FaqResponse]:
        return sort_faqs(self.faqs)

    def list_instructions(self) -> List[AiInstruction]:
        return sort_instructions(self.instructions)

    def append_messages(self, session_id: str, messages: List[ChatMessage]) -> None:
        log = self._messages.setdefault(session_id, [])
        log.extend(m.model_copy() for m in messages)

    def list_messages(self, session_id: str, limit: int) -> List[ChatMessage]:
        if limit <= 0:
            return []
        # sorted() is stable, so equal timestamps keep insertion order
        log = sorted(self._messages.get(session_id, []), key=lambda m: m.created_at)
        return [m.model_copy() for m in log[-limit:]]
