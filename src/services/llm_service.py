"""
LLM Service
===========

Pulls contact fields out of resume text with an OpenAI-compatible
chat completion endpoint (OpenRouter by default).

Workflow:
---------
1. **Prompt**: Embed the cleaned resume text in a fixed parsing prompt.
2. **Completion**: POST to ``{base_url}/chat/completions`` with low temperature.
3. **Parsing**: Locate the JSON object in the reply and coerce the four fields.
4. **Retry**: On any failure, wait ``base_delay * attempt`` and try again,
   up to ``max_retries`` attempts in total.
"""

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from core.config import Settings
from core.exceptions import ModelCallError
from schemas.extraction import ExtractionResult
from utils.text_utils import extract_json

logger = logging.getLogger(__name__)

RESUME_FIELDS = ("name", "email", "phone", "address")

SYSTEM_PROMPT = (
    "You are a precise resume parser that responds only with valid JSON. "
    "Never include explanatory text."
)

PARSING_PROMPT = """You are a resume parser. Extract the following information from the resume text and respond ONLY with valid JSON in this exact format:
{{
  "name": "Full name of the person",
  "email": "email@example.com",
  "phone": "phone number",
  "address": "full address"
}}

If any information is not found, use an empty string "". Do not include any other text in your response, only the JSON object.

Resume text:
{TEXT}"""


class CompletionClient:
    """Thin async client for an OpenAI-compatible chat completions API."""

    def __init__(self, settings: Settings, http_client: Optional[httpx.AsyncClient] = None):
        self.settings = settings
        self._client = http_client or httpx.AsyncClient(timeout=settings.request_timeout)
        self._owns_client = http_client is None

    @property
    def url(self) -> str:
        return self.settings.ai_base_url.rstrip("/") + "/chat/completions"

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.settings.openrouter_api_key}",
            "X-Title": self.settings.app_name,
        }
        # OpenRouter app attribution, only when a site URL is configured
        if self.settings.ai_referer_url:
            headers["HTTP-Referer"] = self.settings.ai_referer_url
        return headers

    async def complete(self, system: str, user: str) -> str:
        """
        Send one chat completion request and return the reply text.

        Raises:
            ModelCallError: On transport errors, timeouts, non-2xx status
                or a response without message content.
        """
        payload = {
            "model": self.settings.ai_model,
            "messages": [
                {"role": "system", "content": system},
                {"role": "user", "content": user},
            ],
            "temperature": self.settings.ai_temperature,
            "max_tokens": self.settings.ai_max_tokens,
        }

        try:
            response = await self._client.post(self.url, json=payload, headers=self._headers())
        except httpx.TimeoutException as e:
            raise ModelCallError(f"Request timed out: {e}") from e
        except httpx.HTTPError as e:
            raise ModelCallError(f"Request failed: {e}") from e

        if response.status_code >= 400:
            raise ModelCallError(
                f"API returned {response.status_code}: {response.text[:200]}"
            )

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ModelCallError(f"Unexpected API response: {e}") from e

        if content is None:
            raise ModelCallError("API response has no message content")
        return content

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "CompletionClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


def _render_value(value: Any) -> str:
    # JSON scalars and arrays rendered the way a JavaScript template would
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list):
        return ",".join(_render_value(item) for item in value)
    if isinstance(value, dict):
        return "[object Object]"
    return str(value)


def coerce_field(value: Any) -> str:
    """Turn one JSON value into a CSV cell; falsy values (null, false, 0, "") become empty."""
    if not value and not isinstance(value, (list, dict)):
        return ""
    return _render_value(value).strip()


def parse_fields(response_text: str) -> Dict[str, str]:
    """
    Parse the model reply into the four contact fields.

    Extra prose around the JSON object is tolerated. Missing keys become
    empty strings and extra keys are dropped.

    Raises:
        ModelCallError: If no JSON object can be parsed from the reply.
    """
    content = (response_text or "").strip()
    try:
        parsed = json.loads(content)
    except ValueError:
        try:
            parsed = json.loads(extract_json(content))
        except ValueError as e:
            raise ModelCallError(f"Invalid JSON in AI response: {e}") from e

    if not isinstance(parsed, dict):
        raise ModelCallError("AI response is not a JSON object")

    return {key: coerce_field(parsed.get(key)) for key in RESUME_FIELDS}


class FieldExtractor:
    """Extracts name, email, phone and address from resume text, with retries."""

    def __init__(
        self,
        client: Any,
        max_retries: int = 3,
        base_delay: float = 1.0,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.client = client
        self.max_retries = max(1, max_retries)
        self.base_delay = base_delay
        self._sleep = sleep

    @classmethod
    def from_settings(cls, settings: Settings, client: Any) -> "FieldExtractor":
        return cls(client, max_retries=settings.max_retries, base_delay=settings.retry_base_delay)

    async def extract(self, text: str, label: str) -> ExtractionResult:
        """
        Extract contact fields for one resume. Never raises.

        Args:
            text: Normalized resume text
            label: File name recorded on the result

        Returns:
            ExtractionResult with ``error`` set if every attempt failed
        """
        prompt = PARSING_PROMPT.format(TEXT=text)
        last_error = "Unknown error"

        for attempt in range(1, self.max_retries + 1):
            try:
                response_text = await self.client.complete(SYSTEM_PROMPT, prompt)
                fields = parse_fields(response_text)
                return ExtractionResult(file_name=label, **fields)
            except Exception as e:
                last_error = str(e) or type(e).__name__
                logger.warning(
                    f"AI parsing error for {label} (attempt {attempt}/{self.max_retries}): {last_error}"
                )

            if attempt < self.max_retries:
                logger.info(f"Retrying {label}...")
                await self._sleep(self.base_delay * attempt)

        return ExtractionResult.failed(label, last_error)
