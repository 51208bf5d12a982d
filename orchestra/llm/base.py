"""Generative backend interface.

The engine only talks to a backend through this protocol, so tests and
alternative providers can stand in for the default Anthropic/OpenAI pair.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol

from orchestra.core.model_selection import ModelParameters


@dataclass
class GroundedCompletion:
    """Completion text plus the web sources it drew on."""
    text: str
    sources: List[Dict[str, Any]] = field(default_factory=list)


@dataclass
class ImageResult:
    """Outcome of an image generation call. Exactly one field is set."""
    url: Optional[str] = None
    inline_data: Optional[str] = None  # base64 payload
    error: Optional[str] = None

    @property
    def reference(self) -> Optional[str]:
        """A string a deliverable can embed: the URL or a data URI."""
        if self.url:
            return self.url
        if self.inline_data:
            return f"data:image/png;base64,{self.inline_data}"
        return None


class GenerativeBackend(Protocol):
    """Text, grounded text and image generation."""

    async def complete(self, prompt: str, model: str, params: ModelParameters) -> str:
        ...

    async def complete_grounded(
        self, prompt: str, model: str, params: ModelParameters
    ) -> GroundedCompletion:
        ...

    async def generate_image(
        self,
        prompt: str,
        style: Optional[str] = None,
        aspect_ratio: Optional[str] = None,
    ) -> ImageResult:
        ...
