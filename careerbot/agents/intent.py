"""
Intent classifiers: does a question need job-market data?

Two strategies behind one interface so the coach can run on a model or on
fixed rules (tests, offline use).
"""

import logging
import re
from typing import Protocol

from careerbot.agents.prompts import decision_prompt
from careerbot.config import Settings
from careerbot.models import UserProfile

logger = logging.getLogger(__name__)


class CompletionModel(Protocol):
    async def complete(self, prompt: str) -> str: ...


class IntentClassifier(Protocol):
    async def needs_job_data(self, question: str, profile: UserProfile | None) -> bool: ...


MARKET_DATA_PATTERNS = [
    r"\b(top|key|required|in[- ]demand|most important)\s+skills?\b",
    r"\bskills?\s+(do\s+i\s+need|needed|for)\b",
    r"\bcompan(y|ies)\b.*\b(hir(e|es|ing)|recruit)",
    r"\bwho\s+is\s+hiring\b",
    r"\bsalar(y|ies)\s+(range|for|of)\b",
    r"\bhow\s+much\b.*\b(pay|earn|make)\b",
    r"\b(job\s+)?requirements?\s+(for|of)\b",
    r"\btrend(ing|s)?\b.*\b(technolog|tool|skill|stack)",
    r"\b(which|what)\s+(locations?|cities|countries)\b",
    r"\b(job|career)\s+(opportunit(y|ies)|openings?|market|postings?)\b",
    r"\bopen\s+(positions?|roles?)\b",
]


class KeywordIntentClassifier:
    """Deterministic rules over the question text."""

    def __init__(self, patterns: list[str] | None = None):
        self.patterns = [re.compile(p, re.IGNORECASE) for p in (patterns or MARKET_DATA_PATTERNS)]

    async def needs_job_data(self, question: str, profile: UserProfile | None) -> bool:
        return any(p.search(question) for p in self.patterns)


def parse_decision(reply: str) -> bool:
    """Only an exact YES (any case, surrounding whitespace ignored) counts."""
    return reply.strip().upper() == "YES"


class ModelIntentClassifier:
    """Asks the LLM and reads a YES/NO answer."""

    def __init__(self, llm: CompletionModel):
        self.llm = llm

    async def needs_job_data(self, question: str, profile: UserProfile | None) -> bool:
        reply = await self.llm.complete(decision_prompt(question, profile))
        decision = parse_decision(reply)
        logger.info(f"Model intent decision: {reply.strip()[:20]!r} -> {decision}")
        return decision


def build_intent_classifier(config: Settings, llm: CompletionModel) -> IntentClassifier:
    if config.intent_classifier == "keyword":
        return KeywordIntentClassifier()
    if config.intent_classifier != "model":
        logger.warning(f"Unknown intent_classifier '{config.intent_classifier}', using model")
    return ModelIntentClassifier(llm)
