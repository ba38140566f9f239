"""
AWS Bedrock client wrapper for the remote chat and scoring strategies
"""

import json
import re
import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from typing import Dict, Any, List, Optional

from utils.errors import UpstreamError

ANTHROPIC_VERSION = "bedrock-2023-05-31"


class BedrockClient:
    """
    Wrapper for AWS Bedrock Anthropic message calls
    """

    def __init__(self, region_name: str = "us-east-1",
                 model_id: str = "anthropic.claude-3-5-sonnet-20240620-v1:0",
                 read_timeout: int = 60, runtime_client=None):
        """
        Initialize Bedrock client

        Args:
            region_name: AWS region
            model_id: Bedrock model identifier
            read_timeout: Seconds to wait for a model response
            runtime_client: Pre-built bedrock-runtime client (tests inject a stub)
        """
        self.region_name = region_name
        self.model_id = model_id
        self.bedrock_runtime = runtime_client or boto3.client(
            'bedrock-runtime',
            region_name=region_name,
            config=BotoConfig(read_timeout=read_timeout, retries={"max_attempts": 2, "mode": "standard"})
        )

    def _build_body(self, messages: List[Dict[str, str]], system: Optional[str],
                    max_tokens: int, temperature: float) -> Dict[str, Any]:
        body = {
            "anthropic_version": ANTHROPIC_VERSION,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [
                {"role": m["role"], "content": m["content"]}
                for m in messages
            ]
        }
        if system:
            body["system"] = system
        return body

    def invoke_messages(self, messages: List[Dict[str, str]], system: Optional[str] = None,
                        max_tokens: int = 1024, temperature: float = 0.3) -> str:
        """
        Invoke the model with a system prompt and a list of turns

        Args:
            messages: Chronological {"role", "content"} turns, starting with a user turn
            system: System prompt
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature

        Returns:
            Model response text

        Raises:
            UpstreamError: the call failed or the response had no text
        """
        body = self._build_body(messages, system, max_tokens, temperature)
        try:
            response = self.bedrock_runtime.invoke_model(
                modelId=self.model_id,
                body=json.dumps(body)
            )
            response_body = json.loads(response['body'].read())
        except ClientError as e:
            error_code = e.response['Error']['Code']
            error_message = e.response['Error']['Message']
            raise UpstreamError(f"Bedrock API error ({error_code}): {error_message}") from e
        except BotoCoreError as e:
            raise UpstreamError(f"Bedrock unreachable: {str(e)}") from e

        text_blocks = [
            block.get("text", "")
            for block in response_body.get("content", [])
            if block.get("type") == "text"
        ]
        if not text_blocks:
            raise UpstreamError(f"Bedrock returned no text content (stop_reason={response_body.get('stop_reason')})")
        return "".join(text_blocks)

    def invoke_model(self, prompt: str, system: Optional[str] = None,
                     max_tokens: int = 1024, temperature: float = 0.0) -> str:
        """Invoke the model with a single user prompt"""
        return self.invoke_messages(
            [{"role": "user", "content": prompt}],
            system=system,
            max_tokens=max_tokens,
            temperature=temperature
        )

    def invoke_model_json(self, prompt: str, system: Optional[str] = None,
                          max_tokens: int = 2048, temperature: float = 0.0) -> Dict[str, Any]:
        """
        Invoke the model and parse a JSON object out of the response

        Args:
            prompt: Input prompt text
            system: System prompt
            max_tokens: Maximum tokens to generate
            temperature: Sampling temperature

        Returns:
            Parsed JSON response

        Raises:
            UpstreamError: the call itself failed
            ValueError: the response did not contain parseable JSON
        """
        response_text = self.invoke_model(prompt, system=system, max_tokens=max_tokens, temperature=temperature)
        return parse_json_response(response_text)


def parse_json_response(response_text: str) -> Any:
    """Extract JSON from a model response, tolerating markdown code fences"""
    if "```json" in response_text:
        json_start = response_text.find("```json") + 7
        json_end = response_text.find("```", json_start)
        json_text = response_text[json_start:json_end if json_end != -1 else None].strip()
    elif "```" in response_text:
        json_start = response_text.find("```") + 3
        json_end = response_text.find("```", json_start)
        json_text = response_text[json_start:json_end if json_end != -1 else None].strip()
    else:
        json_text = response_text.strip()

    try:
        return json.loads(json_text)
    except json.JSONDecodeError:
        # If JSON parsing fails, try to extract JSON object from text
        json_match = re.search(r'\{.*\}', response_text, re.DOTALL)
        if json_match:
            try:
                return json.loads(json_match.group())
            except json.JSONDecodeError:
                pass
        raise ValueError(f"Could not parse JSON from response: {response_text[:200]}")
