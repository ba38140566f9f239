"""
FitAgent - answers "how well does this job description match the candidate?"
"""

from models.fit import FitResult
from services.context_assembler import ContextAssembler, ContextBlock
from services.fit_scoring import FitScoringEngine, neutral_result, require_job_description
from services.knowledge_store import KnowledgeStore
from utils.errors import MissingProfileError


class FitAgent:
    """Loads fresh candidate context and runs the scoring engine"""

    def __init__(self, store: KnowledgeStore, assembler: ContextAssembler, engine: FitScoringEngine):
        """
        Initialize FitAgent

        Args:
            store: Knowledge store instance
            assembler: Context assembler
            engine: Scoring engine with its strategies already selected
        """
        self.store = store
        self.assembler = assembler
        self.engine = engine

    def load_context(self) -> ContextBlock:
        """
        Build the scoring context from the current records

        Raises:
            MissingProfileError: no candidate profile is configured
        """
        snapshot = self.store.load_snapshot()
        if snapshot.profile is None:
            raise MissingProfileError("No candidate profile configured")
        return self.assembler.assemble_snapshot(snapshot)

    def analyze_fit(self, job_description: str) -> FitResult:
        """
        Score a job description

        Args:
            job_description: Pasted job description text

        Returns:
            FitResult; the neutral result when no profile exists

        Raises:
            InputError: job description is blank
            PersistenceError: the knowledge store could not be read
        """
        require_job_description(job_description)
        try:
            context = self.load_context()
        except MissingProfileError:
            print("⚠️ No candidate profile found, returning neutral fit result")
            return neutral_result()

        result = self.engine.analyze(job_description, context)
        print(f"🔍 DEBUG: Fit analysis ({result.strategy}) scored {result.score} -> {result.recommendation}")
        return result
