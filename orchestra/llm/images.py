"""Image generation through the OpenAI Images API."""

from typing import Optional

from openai import AsyncOpenAI

from orchestra.core.config import settings
from orchestra.core.errors import OrchestraError
from orchestra.core.logging import get_logger
from orchestra.llm.base import ImageResult

logger = get_logger(__name__)

ASPECT_RATIO_SIZES = {
    "1:1": "1024x1024",
    "square": "1024x1024",
    "16:9": "1536x1024",
    "3:2": "1536x1024",
    "landscape": "1536x1024",
    "9:16": "1024x1536",
    "2:3": "1024x1536",
    "portrait": "1024x1536",
}


class OpenAIImageGenerator:
    """Generates one image per call; failures come back as ``ImageResult.error``."""

    def __init__(self, client: Optional[AsyncOpenAI] = None, model: Optional[str] = None):
        if client is None and settings.openai_api_key:
            client = AsyncOpenAI(api_key=settings.openai_api_key)
        self.client = client
        self.model = model or settings.image_model

    async def generate_image(
        self,
        prompt: str,
        style: Optional[str] = None,
        aspect_ratio: Optional[str] = None,
    ) -> ImageResult:
        if self.client is None:
            raise OrchestraError("OPENAI_API_KEY is not configured")

        if style:
            prompt = f"{prompt}\n\nStyle: {style}"
        size = ASPECT_RATIO_SIZES.get((aspect_ratio or "1:1").lower(), "1024x1024")

        try:
            response = await self.client.images.generate(
                model=self.model,
                prompt=prompt,
                size=size,
                n=1,
            )
        except Exception as e:
            logger.warning("image_generation_failed", model=self.model, error=str(e))
            return ImageResult(error=str(e))

        if not response.data:
            return ImageResult(error="Image API returned no data")

        image = response.data[0]
        if getattr(image, "url", None):
            return ImageResult(url=image.url)
        if getattr(image, "b64_json", None):
            return ImageResult(inline_data=image.b64_json)
        return ImageResult(error="Image API returned neither a URL nor image data")
