"""
Chat response strategies: Bedrock-backed and a canned local responder
for deployments without model credentials
"""

from abc import ABC, abstractmethod
from typing import Dict, List

from utils.bedrock_client import BedrockClient
from utils.errors import UpstreamError


class ResponseStrategy(ABC):
    """Produces the assistant reply for a prepared prompt"""

    @abstractmethod
    def respond(self, system_prompt: str, turns: List[Dict[str, str]]) -> str:
        """
        Args:
            system_prompt: Directive plus assembled context
            turns: Chronological {"role", "content"} turns ending with the new user turn

        Returns:
            Assistant reply text

        Raises:
            UpstreamError: the reply could not be produced
        """


def _merge_consecutive_roles(turns: List[Dict[str, str]]) -> List[Dict[str, str]]:
    """Anthropic models need alternating roles starting with a user turn"""
    merged: List[Dict[str, str]] = []
    for turn in turns:
        if not merged and turn["role"] != "user":
            continue
        if merged and merged[-1]["role"] == turn["role"]:
            merged[-1] = {"role": turn["role"], "content": merged[-1]["content"] + "\n\n" + turn["content"]}
        else:
            merged.append({"role": turn["role"], "content": turn["content"]})
    return merged


class BedrockResponder(ResponseStrategy):
    """Replies through the Bedrock model"""

    def __init__(self, bedrock_client: BedrockClient, max_tokens: int = 1024, temperature: float = 0.3):
        self.bedrock_client = bedrock_client
        self.max_tokens = max_tokens
        self.temperature = temperature

    def respond(self, system_prompt: str, turns: List[Dict[str, str]]) -> str:
        messages = _merge_consecutive_roles(turns)
        if not messages:
            raise UpstreamError("No user turn to respond to")
        reply = self.bedrock_client.invoke_messages(
            messages,
            system=system_prompt,
            max_tokens=self.max_tokens,
            temperature=self.temperature
        )
        if not reply.strip():
            raise UpstreamError("Model returned an empty reply")
        return reply.strip()


class LocalResponder(ResponseStrategy):
    """Keyword-routed canned replies for demo deployments"""

    # topic -> trigger substrings, checked in order
    ROUTES = (
        ("weakness", ("weakness", "gap", "struggle", "not good")),
        ("salary", ("salary", "compensation", "pay", "money")),
        ("experience", ("experience", "background", "worked")),
        ("fit", ("fit", "right", "good for", "team")),
    )

    REPLIES = {
        "weakness": (
            "Good question. I'm honest about my gaps:\n\n"
            "• **Technical depth** - I can discuss architecture and read code, but I'm a PM, not an engineer. "
            "If you need someone who can implement, that's not me.\n\n"
            "• **Public speaking** - Confident in meetings and small groups, but large conferences still make "
            "me nervous. Working on it.\n\n"
            "• **Enterprise/B2B** - My background is consumer and SMB. Long sales cycles and procurement "
            "processes would be new territory.\n\n"
            "I'd rather you know this upfront than discover it later."
        ),
        "salary": (
            "I'm targeting $200k-$260k base, depending on total comp, equity, and scope of the role. For "
            "Director-level opportunities, I'm flexible. But if you're significantly below this range, let's "
            "save each other time."
        ),
        "experience": (
            "I have about 7 years of product management experience:\n\n"
            "• Currently at Fintech Co (3 years) as Senior PM, owning consumer payments vertical - 3M+ MAU, "
            "$50M ARR.\n\n"
            "• Before that, first PM at a Series A startup where I built the product practice from scratch "
            "and helped find product-market fit.\n\n"
            "I'm strongest in consumer products, user research, and data-driven decision making. I partner "
            "closely with engineering but don't pretend to be technical."
        ),
        "fit": (
            "Honestly? It depends. Here's where I'd be a strong fit:\n\n"
            "• **Consumer products** with clear metrics and user feedback loops\n"
            "• **Teams that value data** over opinions (including mine)\n"
            "• **Companies with strong engineering culture** who want a PM partner, not a ticket-taker\n\n"
            "Where I'd struggle:\n\n"
            "• Heavy enterprise/B2B (not my background)\n"
            "• Roles that are really project management in disguise\n"
            "• Organizations that ship by committee\n\n"
            "What's the role you're considering?"
        ),
        "default": (
            "Good question. I try to be transparent about my background - including both strengths and gaps. "
            "Is there something specific about my PM experience you'd like to explore?"
        ),
    }

    def route(self, message: str) -> str:
        lower = message.lower()
        for topic, triggers in self.ROUTES:
            if any(trigger in lower for trigger in triggers):
                return topic
        return "default"

    def respond(self, system_prompt: str, turns: List[Dict[str, str]]) -> str:
        latest = next((t["content"] for t in reversed(turns) if t["role"] == "user"), "")
        return self.REPLIES[self.route(latest)]
