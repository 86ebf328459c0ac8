"""
Claude API wrapper used as the generative collaborator.

Takes a prompt, optionally lets the model ground its answer with the
server-side web search tool, and returns the reply as plain text. Nothing
here interprets the text; see ``sanitizer`` for that.
"""

import logging

import anthropic

from importer_intel.config import Settings
from importer_intel.errors import GenerationError

logger = logging.getLogger("intel.generative")

SYSTEM_PROMPT = """You are a trade intelligence researcher specializing in US import records (CBP, AMS and bill of lading data). Be factual. When asked for JSON, return only the JSON object with no commentary."""


def _web_search_tool(max_uses: int) -> dict:
    return {"type": "web_search_20250305", "name": "web_search", "max_uses": max_uses}


def _response_text(message) -> str:
    """Join the text blocks of a response; tool-use blocks are skipped."""
    parts = []
    for block in message.content:
        text = getattr(block, "text", None)
        if text:
            parts.append(text)
    return "\n".join(parts)


class GenerativeService:
    def __init__(self, settings: Settings):
        self.client = anthropic.AsyncAnthropic(api_key=settings.anthropic_api_key)
        self.model = settings.claude_model
        self.max_tokens = settings.claude_max_tokens
        self.web_search_max_uses = settings.web_search_max_uses
        self.default_web_search = settings.web_search_enabled

    async def generate(
        self,
        prompt: str,
        *,
        web_search_enabled: bool | None = None,
        model: str | None = None,
    ) -> str:
        """Send ``prompt`` and return the raw reply text.

        Args:
            prompt: Natural-language prompt.
            web_search_enabled: Attach the web search tool. Defaults to the
                configured setting.
            model: Override the configured model.

        Raises:
            GenerationError: the API call failed.
        """
        use_search = self.default_web_search if web_search_enabled is None else web_search_enabled
        kwargs: dict = {
            "model": model or self.model,
            "max_tokens": self.max_tokens,
            "system": SYSTEM_PROMPT,
            "messages": [{"role": "user", "content": prompt}],
        }
        if use_search:
            kwargs["tools"] = [_web_search_tool(self.web_search_max_uses)]

        logger.info("Generating (model=%s, web_search=%s, prompt_chars=%d)", kwargs["model"], use_search, len(prompt))
        try:
            message = await self.client.messages.create(**kwargs)
        except anthropic.APIError as e:
            logger.error("Claude API call failed: %s", e)
            raise GenerationError(str(e)) from e

        return _response_text(message)
