# builds the multimodal request for the model and parses its answer
import logging
from typing import List, Optional

from .llm_service import AnthropicLLMService, GenerationError, get_llm_service
from .models import (
    Base64Source, ContentBlock, DocumentBlock, FileData, GeneratedPost,
    ImageBlock, Message, TextBlock
)
from .response_parser import ResponseParser

logger = logging.getLogger(__name__)

# text block first, then the questionnaire, then the images in upload order
def build_content_blocks(pdf: FileData, images: List[FileData], user_prompt: str) -> List[ContentBlock]:
    blocks: List[ContentBlock] = [TextBlock(text=user_prompt)]
    blocks.append(DocumentBlock(source=Base64Source(media_type=pdf.type, data=pdf.data)))
    blocks.extend(
        ImageBlock(source=Base64Source(media_type=image.type, data=image.data))
        for image in images
    )
    return blocks

class PostGenerator:
    """Generates a social media post from a questionnaire and room visualizations"""

    def __init__(self, llm_service: Optional[AnthropicLLMService] = None, parser: Optional[ResponseParser] = None):
        self.llm_service = llm_service or get_llm_service()
        self.parser = parser or ResponseParser()

    def generate_post(
        self,
        pdf: FileData,
        images: List[FileData],
        system_prompt: str,
        user_prompt: str
    ) -> GeneratedPost:
        """Send one multimodal request and split the answer into post and photo order"""
        if not images:
            raise ValueError("At least one image is required")

        message = Message(role="user", content=build_content_blocks(pdf, images, user_prompt))
        logger.info(f"Generating post from {pdf.name} and {len(images)} images")

        try:
            result = self.llm_service.generate(system_prompt, [message])
        except GenerationError as e:
            logger.error(f"Error generating post: {str(e)}")
            raise type(e)(f"Failed to generate post: {str(e)}") from e

        parsed = self.parser.parse(result.text.strip())
        logger.info(
            f"✓ Post generated: {len(parsed.post)} chars, {len(parsed.photo_items)} photo items, "
            f"{result.usage.total_tokens} tokens"
        )

        return GeneratedPost(post=parsed.post, photo_items=parsed.photo_items, usage=result.usage)
