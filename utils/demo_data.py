"""
Demo candidate records used when no database is configured
"""

DEMO_PROFILE = {
    "id": "demo",
    "name": "Blaine Holt",
    "email": "blaine@example.com",
    "title": "Senior Product Manager",
    "elevator_pitch": (
        "I ship products that solve real problems. 7 years turning ambiguous customer needs into "
        "clear roadmaps, aligning stakeholders who don't agree, and making hard prioritization calls."
    ),
    "target_titles": ["Director of Product", "Group Product Manager", "VP Product"],
    "target_company_stages": ["Series B", "Growth", "Late Stage"],
    "career_narrative": (
        "Started as a customer success rep who asked too many questions about the product. "
        "Transitioned to PM by being the person who always knew what customers actually needed. "
        "Now I lead product strategy for consumer-facing products."
    ),
    "looking_for": (
        "A company with strong product culture, clear business metrics, and engineers who want "
        "a PM partner (not a ticket-taker)."
    ),
    "not_looking_for": (
        "Feature factories, roles where PM is just project management, or companies that ship by committee."
    ),
    "salary_min": 200000,
    "salary_max": 260000,
    "availability_status": "actively_looking",
    "location": "San Francisco, CA",
    "remote_preference": "hybrid",
    "linkedin_url": "https://linkedin.com/in/blaineholt",
    "twitter_url": "https://twitter.com/blaineholt",
}

DEMO_EXPERIENCES = [
    {
        "id": "1",
        "company_name": "Fintech Co",
        "title": "Senior Product Manager",
        "title_progression": "Started as PM, promoted to Senior PM after 18 months",
        "start_date": "2022-03-01",
        "end_date": None,
        "is_current": True,
        "bullet_points": [
            "Own product strategy for consumer payments vertical (3M+ MAU, $50M ARR)",
            "Led cross-functional team of 8 engineers, 2 designers to ship 12 major features",
            "Reduced user churn 23% through data-driven onboarding redesign",
        ],
        "why_joined": "Opportunity to own a large product area with direct revenue impact. Strong engineering culture.",
        "actual_contributions": (
            "Primary PM for mobile app. Drove adoption of OKR framework. "
            "Spend a lot of time in Amplitude and talking to customers."
        ),
        "proudest_achievement": (
            "Killed a feature the CEO loved because data showed it confused users. "
            "Revenue went up 15% after removal."
        ),
        "would_do_differently": "Would have hired for product ops earlier. Spent too much time on manual reporting.",
        "challenges_faced": (
            "Inherited a product with significant tech debt. Had to balance new features vs fixing existing issues."
        ),
        "lessons_learned": "Saying no is the hardest and most important part of the job. Data wins arguments.",
        "manager_would_say": (
            "Strong strategic thinker, can be impatient with slow decision-making. Gets alignment without drama."
        ),
        "quantified_impact": {"revenue_impact": 8000000, "users_impacted": 500000},
        "display_order": 1,
    },
    {
        "id": "2",
        "company_name": "Series A Startup",
        "title": "Product Manager",
        "start_date": "2019-08-01",
        "end_date": "2022-02-28",
        "is_current": False,
        "bullet_points": [
            "First PM hire - built product practice from scratch (roadmap process, customer feedback loops, metrics)",
            "Took core product from MVP to product-market fit, 10x user growth in 18 months",
            "Led discovery for 3 new product lines, 2 of which became profitable",
        ],
        "why_joined": "Wanted early-stage experience and the chance to shape product culture from day one.",
        "why_left": "Great run, but company pivoted to enterprise. Wanted to stay consumer-focused.",
        "actual_contributions": (
            "Built customer research practice. Created the first product roadmap. "
            "A lot of the work was just talking to users."
        ),
        "proudest_achievement": (
            "Discovered a pivot opportunity from user research that saved the company. New direction led to Series B."
        ),
        "would_do_differently": "Should have documented decisions better. Institutional knowledge walked out with me.",
        "challenges_faced": "No PM mentor. Founders had strong opinions. Had to learn stakeholder management fast.",
        "lessons_learned": (
            "Early-stage PM is 70% customer discovery, 20% prioritization, 10% specs. Get comfortable with ambiguity."
        ),
        "manager_would_say": "Customer-obsessed. Not afraid to push back on founders. Sometimes moves too fast.",
        "quantified_impact": {"features_launched": 15, "user_growth": "10x"},
        "display_order": 2,
    },
]

DEMO_SKILLS = [
    {"id": "1", "skill_name": "Product Strategy", "category": "Product", "self_rating": 9,
     "evidence": "Defined strategy for products with $50M+ ARR. Led roadmap prioritization.",
     "honest_notes": "Strong at connecting business goals to product decisions. Best in B2C consumer.",
     "years_experience": 5},
    {"id": "2", "skill_name": "User Research", "category": "Research", "self_rating": 8,
     "evidence": "Conducted 200+ user interviews. Built research practice from scratch.",
     "honest_notes": "Love talking to users. Sometimes over-index on qualitative vs quantitative.",
     "years_experience": 6},
    {"id": "3", "skill_name": "Stakeholder Management", "category": "Leadership", "self_rating": 8,
     "evidence": "Regularly present to C-suite. Align engineering, design, marketing.",
     "honest_notes": "Good at getting buy-in. Can be impatient with slow decision-makers.",
     "years_experience": 5},
    {"id": "4", "skill_name": "Data Analysis", "category": "Analytics", "self_rating": 8,
     "evidence": "Daily Amplitude/Mixpanel user. Built dashboards, ran A/B tests.",
     "honest_notes": "Can find insights in data. Would call myself data-informed, not data-driven.",
     "years_experience": 5},
    {"id": "5", "skill_name": "Roadmap Planning", "category": "Product", "self_rating": 8,
     "evidence": "Own quarterly and annual roadmaps. Balance short-term wins vs long-term bets.",
     "honest_notes": "Good at prioritization. Still learning to leave buffer for surprises.",
     "years_experience": 4},
    {"id": "6", "skill_name": "SQL", "category": "Technical", "self_rating": 6,
     "evidence": "Write queries for analysis, join tables, basic aggregations",
     "honest_notes": "Can pull my own data. Complex queries I ask data team to review.",
     "years_experience": 3},
    {"id": "7", "skill_name": "A/B Testing", "category": "Analytics", "self_rating": 6,
     "evidence": "Designed and ran 20+ experiments. Understand statistical significance.",
     "honest_notes": "Know enough to be dangerous. Call in data science for complex designs.",
     "years_experience": 3},
    {"id": "8", "skill_name": "Technical Architecture", "category": "Technical", "self_rating": 5,
     "evidence": "Can discuss tradeoffs with engineers. Understand APIs, databases, caching.",
     "honest_notes": "Enough to have productive conversations. Cannot implement.",
     "years_experience": 4},
    {"id": "9", "skill_name": "Agile/Scrum", "category": "Process", "self_rating": 6,
     "evidence": "Run sprints, backlog grooming, retros. Certified Scrum Product Owner.",
     "honest_notes": "Pragmatic about process. Adapt methodology to team, not the other way.",
     "years_experience": 5},
    {"id": "10", "skill_name": "Machine Learning Concepts", "category": "Technical", "self_rating": 4,
     "evidence": "Understand basics, worked with ML teams on product requirements",
     "honest_notes": "Can PM an ML product but would need strong ML partner for deep work.",
     "years_experience": 1},
    {"id": "11", "skill_name": "Public Speaking", "category": "Leadership", "self_rating": 4,
     "evidence": "Comfortable in meetings and small groups. Nervous at large events.",
     "honest_notes": "Working on this. Fine for team updates, not great at conferences.",
     "years_experience": 2},
    {"id": "12", "skill_name": "Enterprise Sales", "category": "Business", "self_rating": 3,
     "evidence": "Limited B2B experience. Mostly consumer/SMB products.",
     "honest_notes": "Would need to learn enterprise sales cycles, procurement, etc.",
     "years_experience": 0},
]

DEMO_GAPS = [
    {"id": "1", "gap_type": "Technical", "description": "Deep technical implementation",
     "why_its_a_gap": (
         "Can discuss architecture and tradeoffs with engineers, but cannot implement. "
         "I'm a PM who can read code, not write it."
     ),
     "interest_in_learning": False},
    {"id": "2", "gap_type": "Soft Skill", "description": "Public speaking at large events",
     "why_its_a_gap": (
         "Confident in meetings and team settings, but nervous at conferences or all-hands with 100+ people. "
         "Actively working on this."
     ),
     "interest_in_learning": True},
    {"id": "3", "gap_type": "Domain", "description": "Enterprise / B2B product experience",
     "why_its_a_gap": (
         "My background is consumer and SMB products. Would need to learn enterprise sales cycles, "
         "procurement, and longer deal cycles."
     ),
     "interest_in_learning": True},
    {"id": "4", "gap_type": "Experience", "description": "Managing other PMs",
     "why_its_a_gap": (
         "Led cross-functional teams but never had PM direct reports. "
         "Interested in people management but would be learning on the job."
     ),
     "interest_in_learning": True},
]

DEMO_FAQS = [
    {"id": "1", "question": "What are your salary expectations?",
     "answer": (
         "I'm targeting $200k-$260k base, depending on total comp, equity, and scope. For Director-level "
         "roles or exceptional opportunities, I'm flexible. Let's make sure we're in the same ballpark "
         "before going deep."
     ),
     "is_common_question": True},
    {"id": "2", "question": "Why did you leave your last job?",
     "answer": (
         "The company pivoted from consumer to enterprise. Great opportunity, just not what I'm strongest at. "
         "I stayed through the transition to hand off properly, then found my next consumer-focused role. "
         "Happy to connect you with my former manager."
     ),
     "is_common_question": True},
    {"id": "3", "question": "Are you technical enough for this role?",
     "answer": (
         "I can read code, discuss architecture tradeoffs, and have productive technical conversations with "
         "engineers. But I won't pretend I can implement. I'm a PM who respects the craft of engineering - "
         "I set vision and priorities, engineers own how we build it."
     ),
     "is_common_question": True},
    {"id": "4", "question": "What's your biggest weakness?",
     "answer": (
         "I can be impatient with slow decision-making. When the data is clear and the direction is obvious, "
         "I want to move. I've learned to slow down and bring people along, but it's still something I "
         "actively manage."
     ),
     "is_common_question": True},
    {"id": "5", "question": "Have you managed other PMs?",
     "answer": (
         "Not yet. I've led cross-functional teams of 8-10 people (engineers, designers, data) and mentored "
         "junior PMs informally. Managing PMs directly is a growth area - I'm interested but honest that "
         "I'd be learning."
     ),
     "is_common_question": False},
]

DEMO_INSTRUCTIONS = [
    {"id": "1", "instruction_type": "tone", "priority": 10,
     "instruction": "If a role is enterprise B2B, say up front that it is outside my background."},
    {"id": "2", "instruction_type": "boundaries", "priority": 5,
     "instruction": "Do not share salary history; share only the target range."},
]
