"""Tests for the Gemini completion tool."""

import unittest

import httpx

from careerbot.errors import LLMConfigurationError, LLMServiceError
from careerbot.tools.gemini import NO_CANDIDATE_REPLY, GeminiClient
from helpers import Recorder, empty_settings, json_body, make_settings

GENERATE = ("POST", "/v1/generate")


def candidate(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestGeminiClient(unittest.IsolatedAsyncioTestCase):
    def client(self, recorder, config=None):
        return GeminiClient(config or make_settings(), transport=recorder.transport)

    async def test_returns_first_candidate(self):
        recorder = Recorder({GENERATE: httpx.Response(200, json=candidate("Focus on SQL and Python."))})

        reply = await self.client(recorder).complete("What should I learn?")

        self.assertEqual(reply, "Focus on SQL and Python.")
        request = recorder.requests[0]
        self.assertEqual(request.url.params["key"], "gemini-key")
        self.assertEqual(json_body(request), {"contents": [{"parts": [{"text": "What should I learn?"}]}]})

    async def test_missing_candidate_returns_apology(self):
        payloads = [{}, {"candidates": []}, {"candidates": [{"content": {"parts": []}}]}]
        for payload in payloads:
            with self.subTest(payload=payload):
                recorder = Recorder({GENERATE: httpx.Response(200, json=payload)})
                self.assertEqual(await self.client(recorder).complete("hi"), NO_CANDIDATE_REPLY)

    async def test_non_ok_raises_service_error(self):
        recorder = Recorder({GENERATE: httpx.Response(429, json={"error": "quota"})})

        with self.assertRaises(LLMServiceError):
            await self.client(recorder).complete("hi")

    async def test_non_json_body_raises_service_error(self):
        recorder = Recorder({GENERATE: httpx.Response(200, text="<html>oops</html>")})

        with self.assertRaises(LLMServiceError):
            await self.client(recorder).complete("hi")

    async def test_missing_key_raises_configuration_error(self):
        recorder = Recorder()

        with self.assertRaises(LLMConfigurationError):
            await self.client(recorder, empty_settings()).complete("hi")
        self.assertEqual(recorder.requests, [])


if __name__ == "__main__":
    unittest.main()
