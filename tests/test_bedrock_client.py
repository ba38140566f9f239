import io
import json

import pytest
from botocore.exceptions import ClientError, EndpointConnectionError

from utils.bedrock_client import ANTHROPIC_VERSION, BedrockClient, parse_json_response
from utils.errors import UpstreamError


class StubRuntime:
    """Stands in for the bedrock-runtime client"""

    def __init__(self, payload=None, error=None):
        self.payload = payload
        self.error = error
        self.requests = []

    def invoke_model(self, modelId, body):
        self.requests.append((modelId, json.loads(body)))
        if self.error:
            raise self.error
        return {"body": io.BytesIO(json.dumps(self.payload).encode("utf-8"))}


def text_payload(*texts):
    return {"content": [{"type": "text", "text": t} for t in texts], "stop_reason": "end_turn"}


@pytest.mark.unit
def test_invoke_messages_builds_anthropic_body():
    runtime = StubRuntime(text_payload("Hello ", "there"))
    client = BedrockClient(model_id="test-model", runtime_client=runtime)

    reply = client.invoke_messages([{"role": "user", "content": "hi"}], system="be honest", max_tokens=77)

    assert reply == "Hello there"
    model_id, body = runtime.requests[0]
    assert model_id == "test-model"
    assert body["anthropic_version"] == ANTHROPIC_VERSION
    assert body["system"] == "be honest"
    assert body["max_tokens"] == 77
    assert body["messages"] == [{"role": "user", "content": "hi"}]


@pytest.mark.unit
def test_system_omitted_when_empty():
    runtime = StubRuntime(text_payload("ok"))
    BedrockClient(runtime_client=runtime).invoke_model("prompt")
    assert "system" not in runtime.requests[0][1]


@pytest.mark.unit
def test_client_error_becomes_upstream_error():
    error = ClientError({"Error": {"Code": "ThrottlingException", "Message": "slow down"}}, "InvokeModel")
    client = BedrockClient(runtime_client=StubRuntime(error=error))
    with pytest.raises(UpstreamError, match="ThrottlingException"):
        client.invoke_model("prompt")


@pytest.mark.unit
def test_connection_error_becomes_upstream_error():
    error = EndpointConnectionError(endpoint_url="https://bedrock-runtime.us-east-1.amazonaws.com")
    client = BedrockClient(runtime_client=StubRuntime(error=error))
    with pytest.raises(UpstreamError):
        client.invoke_model("prompt")


@pytest.mark.unit
def test_response_without_text_is_upstream_error():
    client = BedrockClient(runtime_client=StubRuntime({"content": [], "stop_reason": "max_tokens"}))
    with pytest.raises(UpstreamError, match="max_tokens"):
        client.invoke_model("prompt")


@pytest.mark.unit
def test_invoke_model_json_parses_fenced_output():
    runtime = StubRuntime(text_payload('```json\n{"match_score": 80}\n```'))
    assert BedrockClient(runtime_client=runtime).invoke_model_json("prompt") == {"match_score": 80}


@pytest.mark.unit
@pytest.mark.parametrize("text,expected", [
    ('{"a": 1}', {"a": 1}),
    ('```\n{"a": 2}\n```', {"a": 2}),
    ('Here is the analysis: {"a": 3} hope that helps', {"a": 3}),
])
def test_parse_json_response(text, expected):
    assert parse_json_response(text) == expected


@pytest.mark.unit
def test_parse_json_response_rejects_prose():
    with pytest.raises(ValueError):
        parse_json_response("I could not analyze this job description.")
