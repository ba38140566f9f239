import pytest

from models.candidate import AiInstruction, CandidateProfile, Experience, Skill
from services.context_assembler import ContextAssembler
from services.knowledge_store import InMemoryKnowledgeStore


@pytest.fixture
def demo_store():
    return InMemoryKnowledgeStore.from_demo()


@pytest.fixture
def assembler():
    return ContextAssembler()


@pytest.fixture
def demo_context(demo_store, assembler):
    return assembler.assemble_snapshot(demo_store.load_snapshot())


@pytest.fixture
def small_store():
    """A store with just enough records to assert on ordering"""
    return InMemoryKnowledgeStore(
        profile=CandidateProfile(name="Sam Rivera", title="Product Lead"),
        experiences=[
            Experience(company_name="Oldco", title="PM", display_order=1, end_date="2020-01-01"),
            Experience(company_name="Nowco", title="Lead PM", display_order=9, is_current=True),
        ],
        skills=[
            Skill(skill_name="Roadmapping", category="Product", self_rating=8),
            Skill(skill_name="Kotlin", category="strong", self_rating=3),
        ],
        instructions=[
            AiInstruction(instruction="Low priority rule", priority=1),
            AiInstruction(instruction="High priority rule", priority=10),
        ],
    )
