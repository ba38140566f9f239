from types import SimpleNamespace

import pytest

import agents.orchestrator as orchestrator_module
from agents.orchestrator import Orchestrator
from services.fit_scoring import LocalFitScorer, RemoteFitScorer
from services.knowledge_store import InMemoryKnowledgeStore, PostgresKnowledgeStore
from services.responders import BedrockResponder, LocalResponder


def make_config(**overrides):
    values = dict(
        has_database=False,
        has_remote_credentials=False,
        db_connection_string=None,
        aws_region="us-east-1",
        bedrock_model_id="test-model",
        bedrock_read_timeout=30,
        analyze_max_tokens=2048,
        chat_max_tokens=512,
        chat_history_limit=8,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


@pytest.mark.unit
def test_unconfigured_deployment_uses_local_strategies():
    orchestrator = Orchestrator.from_config(make_config())
    status = orchestrator.status()

    assert isinstance(orchestrator.store, InMemoryKnowledgeStore)
    assert status["fit_strategy"] == "LocalFitScorer"
    assert status["chat_strategy"] == "LocalResponder"
    assert status["chat_history_limit"] == 8


@pytest.mark.unit
def test_credentials_select_bedrock_with_local_fallback(monkeypatch):
    built = {}

    class FakeBedrockClient:
        def __init__(self, region_name, model_id, read_timeout):
            built.update(region_name=region_name, model_id=model_id, read_timeout=read_timeout)

    monkeypatch.setattr(orchestrator_module, "BedrockClient", FakeBedrockClient)
    orchestrator = Orchestrator.from_config(make_config(has_remote_credentials=True))

    engine = orchestrator.fit_agent.engine
    assert isinstance(engine.primary, RemoteFitScorer)
    assert isinstance(engine.fallback, LocalFitScorer)
    assert isinstance(orchestrator.session_manager.responder, BedrockResponder)
    assert orchestrator.session_manager.responder.max_tokens == 512
    assert built == {"region_name": "us-east-1", "model_id": "test-model", "read_timeout": 30}


@pytest.mark.unit
def test_database_url_selects_postgres_store(monkeypatch):
    seen = []
    monkeypatch.setattr(orchestrator_module, "get_db_manager",
                        lambda dsn: seen.append(dsn) or SimpleNamespace())
    orchestrator = Orchestrator.from_config(
        make_config(has_database=True, db_connection_string="postgresql://db/candidate")
    )
    assert isinstance(orchestrator.store, PostgresKnowledgeStore)
    assert seen == ["postgresql://db/candidate"]


@pytest.mark.unit
def test_demo_deployment_end_to_end():
    orchestrator = Orchestrator.from_config(make_config())

    result = orchestrator.analyze_fit("Enterprise B2B sales engineer, heavy coding")
    assert result.recommendation == "not_ideal"

    reply = orchestrator.send_message("visitor-1", "Tell me about your background")
    assert reply.content == LocalResponder.REPLIES["experience"]
    assert [m.role for m in orchestrator.session_messages("visitor-1")] == ["user", "assistant"]
