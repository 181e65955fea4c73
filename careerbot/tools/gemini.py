"""
Gemini completion tool.

Single-shot prompt completion; callers serialize all context into the prompt.
"""

import logging

import httpx

from careerbot.config import Settings
from careerbot.errors import LLMConfigurationError, LLMServiceError

logger = logging.getLogger(__name__)

NO_CANDIDATE_REPLY = "I apologize, but I was unable to generate a response at this time."


class GeminiClient:
    """Calls the generateContent endpoint."""

    def __init__(self, config: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self.config = config
        self._transport = transport

    async def complete(self, prompt: str) -> str:
        """
        Complete a prompt.

        Args:
            prompt: Full prompt text

        Returns:
            First candidate's text, or NO_CANDIDATE_REPLY when there is none
        """
        if not self.config.gemini_api_key or not self.config.gemini_api_url:
            raise LLMConfigurationError("GEMINI_API_KEY or GEMINI_API_URL not set")

        payload = {"contents": [{"parts": [{"text": prompt}]}]}

        try:
            async with httpx.AsyncClient(timeout=self.config.llm_timeout, transport=self._transport) as client:
                response = await client.post(
                    self.config.gemini_api_url,
                    params={"key": self.config.gemini_api_key},
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Gemini HTTP error: {e.response.status_code} - {e.response.text[:300]}")
            raise LLMServiceError(f"Gemini API request failed: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise LLMServiceError(f"Gemini API unreachable: {e}") from e
        except ValueError as e:
            raise LLMServiceError("Gemini API returned a non-JSON body") from e

        text = _first_candidate_text(data)
        if text is None:
            logger.warning("Gemini response had no usable candidate")
            return NO_CANDIDATE_REPLY

        logger.debug(f"Gemini completion length: {len(text)}")
        return text


def _first_candidate_text(data) -> str | None:
    """candidates[0].content.parts[0].text, or None."""
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text else None
