"""Anthropic text backend with optional web-search grounding."""

from typing import Any, Dict, List, Optional

from anthropic import AsyncAnthropic

from orchestra.core.config import settings
from orchestra.core.errors import OrchestraError
from orchestra.core.logging import get_logger
from orchestra.core.model_selection import ModelParameters
from orchestra.llm.base import GroundedCompletion, ImageResult
from orchestra.llm.images import OpenAIImageGenerator

logger = get_logger(__name__)


class AnthropicBackend:
    """Default ``GenerativeBackend``.

    Text goes to the Anthropic Messages API. Grounded calls enable the
    server-side web search tool and collect the cited sources. Image calls
    are delegated to ``image_generator``.
    """

    def __init__(
        self,
        client: Optional[AsyncAnthropic] = None,
        image_generator: Optional[OpenAIImageGenerator] = None,
        max_searches: Optional[int] = None,
    ):
        if client is None and settings.anthropic_api_key:
            client = AsyncAnthropic(api_key=settings.anthropic_api_key)
        self.client = client
        self.image_generator = image_generator or OpenAIImageGenerator()
        self.max_searches = max_searches if max_searches is not None else settings.grounding_max_searches

    async def complete(self, prompt: str, model: str, params: ModelParameters) -> str:
        message = await self._create(prompt, model, params)
        return _join_text(message.content)

    async def complete_grounded(
        self, prompt: str, model: str, params: ModelParameters
    ) -> GroundedCompletion:
        tools = [{
            "type": "web_search_20250305",
            "name": "web_search",
            "max_uses": self.max_searches,
        }]
        message = await self._create(prompt, model, params, tools=tools)
        sources = _extract_sources(message.content)

        logger.debug("grounded_completion", model=model, sources=len(sources))
        return GroundedCompletion(text=_join_text(message.content), sources=sources)

    async def generate_image(
        self,
        prompt: str,
        style: Optional[str] = None,
        aspect_ratio: Optional[str] = None,
    ) -> ImageResult:
        return await self.image_generator.generate_image(prompt, style=style, aspect_ratio=aspect_ratio)

    async def _create(
        self,
        prompt: str,
        model: str,
        params: ModelParameters,
        tools: Optional[List[Dict[str, Any]]] = None,
    ):
        if self.client is None:
            raise OrchestraError("ANTHROPIC_API_KEY is not configured")

        kwargs: Dict[str, Any] = {
            "model": model,
            "max_tokens": params.max_output_tokens,
            "temperature": params.temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if tools:
            kwargs["tools"] = tools

        message = await self.client.messages.create(**kwargs)
        logger.debug(
            "completion_received",
            model=model,
            input_tokens=message.usage.input_tokens,
            output_tokens=message.usage.output_tokens,
        )
        return message


def _join_text(blocks) -> str:
    return "".join(block.text for block in blocks if getattr(block, "type", None) == "text").strip()


def _extract_sources(blocks) -> List[Dict[str, Any]]:
    """Sources from search results and text citations, deduplicated by URL."""
    sources: Dict[str, Dict[str, Any]] = {}

    for block in blocks:
        block_type = getattr(block, "type", None)

        if block_type == "web_search_tool_result":
            content = getattr(block, "content", None)
            # an error result carries a single object instead of a list
            if not isinstance(content, list):
                continue
            for result in content:
                url = getattr(result, "url", None)
                if url and url not in sources:
                    sources[url] = {"url": url, "title": getattr(result, "title", None) or url}

        elif block_type == "text":
            for citation in getattr(block, "citations", None) or []:
                url = getattr(citation, "url", None)
                if not url:
                    continue
                entry = sources.setdefault(url, {"url": url, "title": getattr(citation, "title", None) or url})
                cited_text = getattr(citation, "cited_text", None)
                if cited_text and "snippet" not in entry:
                    entry["snippet"] = cited_text

    return list(sources.values())
