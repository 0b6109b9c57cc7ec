import json
import logging
from typing import Any, Dict, Optional, Protocol

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI

from config.settings import Settings
from services.errors import InsightParseError, UpstreamError
from services.insight_parser import extract_insight
from static.prompts import INSIGHT_PROMPT, INSIGHT_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class InsightModel(Protocol):
    async def complete(self, prompt: str) -> str:
        ...

    async def aclose(self) -> None:
        ...


class GeminiInsightModel:
    def __init__(self, api_key: str, model_name: str, timeout: Optional[float] = None):
        genai.configure(api_key=api_key)
        self._model = genai.GenerativeModel(model_name)
        self._request_options = {"timeout": timeout} if timeout else None

    async def complete(self, prompt: str) -> str:
        try:
            response = await self._model.generate_content_async(prompt, request_options=self._request_options)
        except google_exceptions.DeadlineExceeded as e:
            raise UpstreamError("Upstream request timed out", details=None, status_code=504) from e
        except google_exceptions.GoogleAPICallError as e:
            raise UpstreamError(e.message or str(e), details=None, status_code=e.code or 500) from e

        try:
            return response.text
        except ValueError as e:
            # blocked by safety filters or no candidates returned
            raise InsightParseError("", f"Model returned no text: {e}") from e

    async def aclose(self) -> None:
        # the SDK keeps no per-model connection to release
        pass


class OpenAIInsightModel:
    def __init__(self, api_key: str, model_name: str, timeout: Optional[float] = None):
        self._client = AsyncOpenAI(api_key=api_key, timeout=timeout)
        self._model_name = model_name

    async def complete(self, prompt: str) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self._model_name,
                messages=[
                    {"role": "system", "content": INSIGHT_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=0.3,
            )
        except APITimeoutError as e:
            raise UpstreamError("Upstream request timed out", details=None, status_code=504) from e
        except APIStatusError as e:
            raise UpstreamError(e.message, details=e.body, status_code=e.status_code) from e
        except APIConnectionError as e:
            raise UpstreamError(f"Model request failed: {e}", details=None, status_code=500) from e

        return response.choices[0].message.content or ""

    async def aclose(self) -> None:
        await self._client.close()


def build_insight_model(settings: Settings) -> InsightModel:
    if settings.insight_provider == "openai":
        return OpenAIInsightModel(settings.model_api_key, settings.openai_model, settings.upstream_timeout)
    return GeminiInsightModel(settings.model_api_key, settings.gemini_model, settings.upstream_timeout)


def build_prompt(contact_data: Dict[str, Any]) -> str:
    return INSIGHT_PROMPT.format(contact_json=json.dumps(contact_data))


async def generate_insight(model: InsightModel, contact_data: Dict[str, Any]) -> Dict[str, Any]:
    text = await model.complete(build_prompt(contact_data))
    try:
        return extract_insight(text)
    except InsightParseError:
        logger.warning("Could not parse insight from model output: %r", text)
        raise
