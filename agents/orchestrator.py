"""
Orchestrator - wires the store, strategies and agents together and
exposes the operations used by the HTTP layer
"""

from typing import List, Optional

from agents.fit_agent import FitAgent
from agents.session_manager import ConversationSessionManager
from config import Config
from models.chat import ChatMessage
from models.fit import FitResult
from services.context_assembler import ContextAssembler
from services.fit_scoring import FitScoringEngine, LocalFitScorer, RemoteFitScorer
from services.knowledge_store import InMemoryKnowledgeStore, KnowledgeStore, PostgresKnowledgeStore
from services.responders import BedrockResponder, LocalResponder, ResponseStrategy
from utils.bedrock_client import BedrockClient
from utils.database import get_db_manager


class Orchestrator:
    """Entry point for fit analysis and chat"""

    def __init__(self, store: KnowledgeStore, engine: FitScoringEngine,
                 responder: ResponseStrategy, history_limit: int = 20):
        """
        Initialize orchestrator

        Args:
            store: Knowledge store instance
            engine: Fit scoring engine
            responder: Chat response strategy
            history_limit: Persisted messages replayed per chat turn
        """
        self.store = store
        assembler = ContextAssembler()
        self.fit_agent = FitAgent(store, assembler, engine)
        self.session_manager = ConversationSessionManager(store, assembler, responder, history_limit)

    @classmethod
    def from_config(cls, config: Optional[Config] = None) -> "Orchestrator":
        """
        Resolve strategies once from configuration

        Database URL present -> PostgreSQL store, otherwise the demo store.
        AWS credentials present -> Bedrock strategies, otherwise local ones.
        """
        config = config or Config()

        if config.has_database:
            store = PostgresKnowledgeStore(get_db_manager(config.db_connection_string))
            print("✅ Using PostgreSQL knowledge store")
        else:
            store = InMemoryKnowledgeStore.from_demo()
            print("⚠️ Using demo knowledge store")

        if config.has_remote_credentials:
            bedrock_client = BedrockClient(
                region_name=config.aws_region,
                model_id=config.bedrock_model_id,
                read_timeout=config.bedrock_read_timeout
            )
            engine = FitScoringEngine(RemoteFitScorer(bedrock_client, config.analyze_max_tokens), LocalFitScorer())
            responder = BedrockResponder(bedrock_client, config.chat_max_tokens)
            print(f"✅ Using Bedrock model {config.bedrock_model_id} for scoring and chat")
        else:
            engine = FitScoringEngine(LocalFitScorer())
            responder = LocalResponder()
            print("⚠️ Using local scoring heuristic and canned chat replies")

        return cls(store, engine, responder, config.chat_history_limit)

    def analyze_fit(self, job_description: str) -> FitResult:
        return self.fit_agent.analyze_fit(job_description)

    def send_message(self, session_id: str, text: str) -> ChatMessage:
        return self.session_manager.send_message(session_id, text)

    def clear_session(self, session_id: str) -> None:
        self.session_manager.clear_messages(session_id)

    def session_messages(self, session_id: str) -> List[ChatMessage]:
        return self.session_manager.get_messages(session_id)

    def status(self) -> dict:
        """Selected strategies, for the health endpoint"""
        return {
            "store": type(self.store).__name__,
            "fit_strategy": type(self.fit_agent.engine.primary).__name__,
            "chat_strategy": type(self.session_manager.responder).__name__,
            "chat_history_limit": self.session_manager.history_limit,
        }
