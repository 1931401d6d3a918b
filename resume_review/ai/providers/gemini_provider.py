from __future__ import annotations

import base64
import os
from typing import Optional

from google import genai
from google.genai import types

from resume_review.ai.prompts import IMAGE_PROMPT, RESPONSE_SCHEMA, SYSTEM_INSTRUCTION, text_prompt
from resume_review.ai.types import InlineMedia, NormalizedPayload


class GeminiProvider:
    provider = "gemini"

    def __init__(
        self,
        model: str,
        api_key: Optional[str] = None,
        temperature: float = 0.2,
    ):
        self.model = model
        self._temperature = temperature
        key = (api_key or os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or "").strip()
        if not key:
            raise RuntimeError("GEMINI_API_KEY is missing")

        self._client = genai.Client(api_key=key)

    def _contents(self, payload: NormalizedPayload) -> list:
        if isinstance(payload, InlineMedia):
            return [
                types.Part.from_bytes(data=base64.b64decode(payload.data), mime_type=payload.mime_type),
                IMAGE_PROMPT,
            ]
        return [text_prompt(payload.text)]

    async def analyze(self, payload: NormalizedPayload) -> str:
        response = await self._client.aio.models.generate_content(
            model=self.model,
            contents=self._contents(payload),
            config=types.GenerateContentConfig(
                system_instruction=SYSTEM_INSTRUCTION,
                response_mime_type="application/json",
                response_schema=RESPONSE_SCHEMA,
                temperature=self._temperature,
            ),
        )
        return response.text or ""
