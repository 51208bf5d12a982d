"""Generative backends."""

from .anthropic_backend import AnthropicBackend
from .base import GenerativeBackend, GroundedCompletion, ImageResult
from .images import OpenAIImageGenerator

__all__ = [
    "AnthropicBackend",
    "GenerativeBackend",
    "GroundedCompletion",
    "ImageResult",
    "OpenAIImageGenerator",
]
