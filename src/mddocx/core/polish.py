"""Optional AI polishing of markdown text; failures fall back to the input text"""

from typing import Optional, Protocol

import google.generativeai as genai
from pydantic import BaseModel

from mddocx.config import Settings
from mddocx.core.logs import LogLevel, Sink


POLISH_PROMPT = """You are a professional technical writer.
Please fix any formatting issues in the following Markdown content.
Ensure headers are consistent, fix broken lists, and sanitize syntax without changing the actual meaning of the text.
Return ONLY the fixed Markdown content.

Content:
{content}"""


class Polisher(Protocol):
    async def polish(self, text: str) -> str: ...


class GeminiPolisher:
    """Polisher backed by the google-generativeai async SDK.

    With api_key=None the SDK falls back to the GOOGLE_API_KEY env var.
    """

    def __init__(self, api_key: Optional[str] = None, model: str = "gemini-2.0-flash") -> None:
        genai.configure(api_key=api_key)
        self._model = genai.GenerativeModel(model)

    async def polish(self, text: str) -> str:
        response = await self._model.generate_content_async(POLISH_PROMPT.format(content=text))
        if not response.text:
            raise ValueError("No text content in Gemini response")
        return response.text


class PolishResult(BaseModel):
    """Outcome of a polish attempt; `text` is always usable."""
    text: str
    polished: bool = False
    error: Optional[str] = None


def make_polisher(settings: Settings) -> Optional[Polisher]:
    """Return a GeminiPolisher when polishing is enabled, else None."""
    if not settings.polish:
        return None
    return GeminiPolisher(api_key=settings.api_key, model=settings.polish_model)


async def polish_text(text: str, polisher: Optional[Polisher], log: Sink) -> PolishResult:
    """Run polisher on text; any failure is logged and the original text returned."""
    if polisher is None:
        return PolishResult(text=text)

    log("AI Polishing enabled. Analyzing content...", LogLevel.info)
    try:
        polished = await polisher.polish(text)
    except Exception as e:
        log(f"AI Polishing failed, keeping original text: {e}", LogLevel.warning)
        return PolishResult(text=text, error=str(e))

    if not polished:
        log("AI Polishing returned no text, keeping original text.", LogLevel.warning)
        return PolishResult(text=text, error="empty response")

    log("AI Polishing complete.", LogLevel.success)
    return PolishResult(text=polished, polished=True)
