import pytest

from services.context_assembler import CORE_DIRECTIVE, PRIVATE_LABEL, TIER_HEADINGS


@pytest.mark.unit
def test_directive_first_then_instructions_by_priority(small_store, assembler):
    context = assembler.assemble_snapshot(small_store.load_snapshot())
    text = context.text
    assert text.startswith(CORE_DIRECTIVE)
    assert text.index("High priority rule") < text.index("Low priority rule")
    assert text.index("## CUSTOM INSTRUCTIONS") < text.index("## ABOUT Sam Rivera")


@pytest.mark.unit
def test_empty_collections_keep_every_section(assembler):
    context = assembler.assemble(None, [], [], [], [], [])
    text = context.text
    assert not context.has_profile
    assert text.startswith(CORE_DIRECTIVE)
    for header in ("## CUSTOM INSTRUCTIONS", "## ABOUT THE CANDIDATE", "## WORK EXPERIENCE",
                   "## SKILLS SELF-ASSESSMENT", "## EXPLICIT GAPS & WEAKNESSES",
                   "## PRE-WRITTEN ANSWERS TO COMMON QUESTIONS", "## RESPONSE GUIDELINES"):
        assert header in text
    assert "## WORK EXPERIENCE\nNone recorded." in text
    for heading in TIER_HEADINGS.values():
        assert f"{heading}\nNone recorded." in text


@pytest.mark.unit
def test_assemble_accepts_missing_arguments(assembler):
    context = assembler.assemble(None)
    assert "the candidate" in context.guidelines


@pytest.mark.unit
def test_current_experience_rendered_first(small_store, assembler):
    text = assembler.assemble_snapshot(small_store.load_snapshot()).text
    assert text.index("### Nowco") < text.index("### Oldco")
    assert "### Nowco (N/A - Present)" in text


@pytest.mark.unit
def test_experience_includes_private_fields(demo_context):
    text = demo_context.text
    assert PRIVATE_LABEL in text
    assert "Why I left: Great run, but company pivoted to enterprise." in text
    assert "- Own product strategy for consumer payments vertical" in text


@pytest.mark.unit
def test_skills_grouped_by_rating_not_category(small_store, assembler):
    text = assembler.assemble_snapshot(small_store.load_snapshot()).text
    growth = text.index(TIER_HEADINGS["growth"])
    strong = text.index(TIER_HEADINGS["strong"])
    # "Kotlin" carries the literal category "strong" but is rated 3
    assert text.index("Kotlin") > growth
    assert strong < text.index("Roadmapping") < text.index(TIER_HEADINGS["moderate"])


@pytest.mark.unit
def test_unrated_skill_lands_in_growth(assembler):
    from models.candidate import Skill

    context = assembler.assemble(None, skills=[Skill(skill_name="Figma")])
    assert f"{TIER_HEADINGS['growth']}\n- Figma (unrated): No notes" in context.text


@pytest.mark.unit
def test_profile_details_and_faqs(demo_context):
    text = demo_context.text
    assert "Compensation band: $200,000 - $260,000" in text
    assert "Availability: Actively looking" in text
    assert "Q: What are your salary expectations?" in text
    assert "(not interested in developing this)" in text
    assert demo_context.candidate_name == "Blaine Holt"


@pytest.mark.unit
def test_assemble_is_pure(demo_store, assembler):
    snapshot = demo_store.load_snapshot()
    assert assembler.assemble_snapshot(snapshot).text == assembler.assemble_snapshot(snapshot).text
