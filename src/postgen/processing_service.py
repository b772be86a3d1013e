import time
import logging
from datetime import datetime, timezone
from typing import List, Optional

from .file_utils import IMAGE_ERRORS, UploadedFile, create_thumbnail, files_to_file_data, file_to_file_data, validate_images, validate_pdf
from .models import (
    FileData, GeneratePostRequest, GeneratePostResponse, GenerationMetadata,
    PostType, ProjectType
)
from .post_generator import PostGenerator
from .prompt_manager import PromptManager

logger = logging.getLogger(__name__)

class UploadValidationError(Exception):
    """Uploaded files were rejected"""

# post generation service ties prompt building, the model call and result metadata together
class PostProcessingService:
    def __init__(self, prompt_manager: Optional[PromptManager] = None, post_generator: Optional[PostGenerator] = None):
        self.prompt_manager = prompt_manager or PromptManager()
        self._post_generator = post_generator

    # created on first use so the service can start without provider settings
    @property
    def post_generator(self) -> PostGenerator:
        if self._post_generator is None:
            self._post_generator = PostGenerator()
        return self._post_generator

    def generate(self, request: GeneratePostRequest) -> GeneratePostResponse:
        """Main generation pipeline"""
        start_time = time.time()

        logger.info(f"Starting post generation: {request.post_type.value} / {request.project_type.value}")
        logger.info("=" * 60)

        # Step 1: Build prompts
        logger.info("Step 1: Building prompts...")
        system_prompt = self.prompt_manager.build_system_prompt(request.post_type, request.project_type)
        user_prompt = self.prompt_manager.build_user_prompt(request.project_type)
        logger.info(f"  ✓ System prompt: {len(system_prompt)} chars")

        # Step 2: Generate and parse
        logger.info("Step 2: Generating post...")
        generated = self.post_generator.generate_post(request.pdf, request.images, system_prompt, user_prompt)

        logger.info(f"✓ Generation complete in {time.time() - start_time:.2f} seconds")

        return GeneratePostResponse(
            success=True,
            post=generated.post,
            photo_items=generated.photo_items,
            usage=generated.usage,
            metadata=GenerationMetadata(
                post_type=request.post_type,
                project_type=request.project_type,
                image_count=len(request.images),
                generated_at=datetime.now(timezone.utc).isoformat()
            )
        )

    # validate raw uploads, compress images and generate
    def generate_from_uploads(
        self,
        pdf: UploadedFile,
        images: List[UploadedFile],
        post_type: PostType,
        project_type: ProjectType
    ) -> GeneratePostResponse:
        valid, error = validate_pdf(pdf)
        if not valid:
            raise UploadValidationError(error)

        valid, error = validate_images(images)
        if not valid:
            raise UploadValidationError(error)

        request = GeneratePostRequest(
            pdf=file_to_file_data(pdf),
            images=files_to_file_data(images),
            post_type=post_type,
            project_type=project_type
        )
        log_payload(request.pdf, request.images)

        response = self.generate(request)
        response.thumbnails = create_thumbnails(images)
        return response

# previews are optional, an unreadable image just gets no thumbnail
def create_thumbnails(images: List[UploadedFile]) -> List[str]:
    thumbnails = []
    for image in images:
        try:
            thumbnails.append(create_thumbnail(image.content))
        except IMAGE_ERRORS as e:
            logger.warning(f"Failed to create thumbnail for {image.name}: {str(e)}")
    return thumbnails

# log encoded payload sizes before sending
def log_payload(pdf: FileData, images: List[FileData]) -> None:
    total_images = sum(len(image.data) for image in images)
    average = total_images / len(images) / 1024 if images else 0
    logger.info(
        f"Payload: {len(images)} images, pdf {len(pdf.data) / 1024:.2f} KB, "
        f"images {total_images / 1024 / 1024:.2f} MB, avg image {average:.2f} KB"
    )
