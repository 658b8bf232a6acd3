"""
Tests for the async API client (jobdeck/client.py).

Requests are served by httpx.MockTransport; nothing leaves the process.
"""

import asyncio
import json

import httpx
import pytest

from jobdeck.client import APIClientError, JobDeckClient


def _run(handler, call):
    async def _go():
        async with JobDeckClient("http://testserver/api/", transport=httpx.MockTransport(handler)) as client:
            return await call(client)
    return asyncio.run(_go())


class TestParseJobDescription:
    def test_posts_json_and_returns_reply(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"company": "Acme"})

        result = _run(handler, lambda c: c.parse_job_description("Acme is hiring"))

        assert result == {"company": "Acme"}
        assert seen["url"] == "http://testserver/api/parse-job-description"
        assert seen["body"] == {"jobDescription": "Acme is hiring"}

    def test_error_uses_server_details(self):
        def handler(request):
            return httpx.Response(500, json={"error": "Failed to parse job description", "details": "quota exceeded"})

        with pytest.raises(APIClientError, match="quota exceeded") as exc_info:
            _run(handler, lambda c: c.parse_job_description("text"))
        assert exc_info.value.status_code == 500

    def test_error_without_details_uses_fallback(self):
        def handler(request):
            return httpx.Response(502, text="Bad Gateway")

        with pytest.raises(APIClientError, match="Failed to parse job description"):
            _run(handler, lambda c: c.parse_job_description("text"))


class TestGenerateApplication:
    def test_serializes_resume_model(self, complete_resume):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"tailored_resume": {}, "cover_letter": "Hi"})

        result = _run(handler, lambda c: c.generate_application(complete_resume, {"company": "Acme"}))

        assert result["cover_letter"] == "Hi"
        assert seen["body"]["masterResume"]["header"]["name"] == "Jordan Lee"
        assert seen["body"]["jobDescription"] == {"company": "Acme"}

    def test_error_fallback(self):
        def handler(request):
            return httpx.Response(400, json={"error": "Both masterResume and jobDescription are required"})

        with pytest.raises(APIClientError, match="Failed to generate application") as exc_info:
            _run(handler, lambda c: c.generate_application({}, {}))
        assert exc_info.value.status_code == 400
