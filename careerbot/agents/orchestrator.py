"""
Orchestrator for the career coach.

Answers one question per call: decide whether job-market data is needed,
turn the question into a search query, search the index, then compose the
final answer. Steps run strictly in sequence; any failure short-circuits to
a fixed apology.
"""

import logging
from collections.abc import Sequence
from typing import Protocol

from careerbot.agents.intent import CompletionModel, IntentClassifier, ModelIntentClassifier
from careerbot.agents.prompts import compose_prompt, query_prompt
from careerbot.errors import SearchUnavailableError
from careerbot.models import CoachAnswer, ConversationTurn, JobRecord, UserProfile
from careerbot.utils.sanitize import sanitize_input

logger = logging.getLogger(__name__)

FALLBACK_REPLY = (
    "I apologize, but I'm having trouble processing your request right now. Please try again later."
)

# Most recent turns a client may send along with a question
HISTORY_WINDOW = 10


class JobSearcher(Protocol):
    async def text_search(self, query: str) -> list[JobRecord]: ...

    async def vector_search(self, query: str, num_candidates: int = 100) -> list[JobRecord]: ...


class CareerCoach:
    """Question -> (optional job search) -> answer."""

    def __init__(
        self,
        llm: CompletionModel,
        index: JobSearcher,
        classifier: IntentClassifier | None = None,
    ):
        self.llm = llm
        self.index = index
        self.classifier = classifier or ModelIntentClassifier(llm)

    async def generate_query(self, question: str, profile: UserProfile | None) -> str:
        """Ask the model for a 2-5 word search query."""
        reply = await self.llm.complete(query_prompt(question, profile))
        query = reply.strip()
        if not query:
            # Blank model output would match nothing useful
            logger.warning("Model returned an empty search query, using the question")
            return question
        return query

    async def retrieve(self, query: str, use_vector_search: bool = False) -> list[JobRecord]:
        """Search the index; an unavailable index yields no jobs."""
        if use_vector_search:
            try:
                return await self.index.vector_search(query)
            except SearchUnavailableError as e:
                logger.warning(f"Vector search failed, trying text search: {e}")

        try:
            return await self.index.text_search(query)
        except SearchUnavailableError as e:
            logger.error(f"Job search failed, continuing without job data: {e}")
            return []

    async def answer(
        self,
        question: str,
        profile: UserProfile | None = None,
        history: Sequence[ConversationTurn] = (),
        use_vector_search: bool = False,
    ) -> CoachAnswer:
        """
        Answer a user question.

        Args:
            question: Raw user question
            profile: Session profile (position, level, optional LinkedIn data)
            history: Prior turns, oldest first
            use_vector_search: Retrieve with kNN instead of lexical search

        Returns:
            CoachAnswer with the reply and whatever jobs were retrieved
        """
        clean_question = sanitize_input(question)
        if not clean_question:
            raise ValueError("Search query is required")

        jobs: list[JobRecord] = []
        search_query = None
        needs_data = False

        try:
            logger.info("Step 1: Deciding if job market data is needed...")
            needs_data = await self.classifier.needs_job_data(clean_question, profile)
            logger.info(f"Needs job market data: {needs_data}")

            if needs_data:
                logger.info("Step 2: Generating search query...")
                search_query = await self.generate_query(clean_question, profile)
                logger.info(f"Generated search query: {search_query}")

                logger.info("Step 3: Searching jobs...")
                jobs = await self.retrieve(search_query, use_vector_search)
                logger.info(f"Found {len(jobs)} jobs matching query: {search_query}")

            logger.info("Step 4: Composing final response...")
            prompt = compose_prompt(clean_question, profile, jobs, list(history)[-HISTORY_WINDOW:])
            reply = await self.llm.complete(prompt)
        except Exception as e:
            logger.error(f"Career coach pipeline failed: {e}")
            reply = FALLBACK_REPLY

        return CoachAnswer(
            answer=reply,
            jobs=jobs,
            used_job_data=needs_data,
            search_query=search_query,
        )
