# fastapi web api for social media post generation
from fastapi import FastAPI, HTTPException, UploadFile, File, Form, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool
import logging
from typing import List

from .config import settings
from .llm_service import ConfigurationError, GenerationError
from .file_utils import UploadedFile
from .models import (
    GeneratePostRequest, GeneratePostResponse, PostType, ProjectType,
    PromptUpdateRequest
)
from .processing_service import PostProcessingService, UploadValidationError, log_payload
from .prompt_manager import PromptError, PromptManager

# configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# initialize fastapi application
app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Generate social media posts from a client questionnaire and room visualizations",
    version=settings.PROJECT_VERSION
)

# add cors middleware to allow cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# initialize services
processing_service = PostProcessingService()

def get_processing_service() -> PostProcessingService:
    return processing_service

def get_prompt_manager() -> PromptManager:
    return processing_service.prompt_manager

def _generation_failed(e: Exception) -> HTTPException:
    if isinstance(e, ConfigurationError):
        return HTTPException(status_code=500, detail=f"Server misconfigured: {str(e)}")
    return HTTPException(status_code=500, detail=str(e))

# endpoint to generate a post from base64 encoded files
@app.post("/api/generate-post", response_model=GeneratePostResponse)
def generate_post(
    payload: GeneratePostRequest,
    request: Request,
    service: PostProcessingService = Depends(get_processing_service)
):
    """Generate a post from a questionnaire PDF and 3-10 images"""
    logger.info(f"Request received: content-length {request.headers.get('content-length', 'unknown')}")
    log_payload(payload.pdf, payload.images)

    try:
        return service.generate(payload)
    except (GenerationError, PromptError) as e:
        logger.error(f"Error in /api/generate-post: {str(e)}")
        raise _generation_failed(e)

# endpoint to generate a post from a multipart upload
@app.post("/api/generate-post/upload", response_model=GeneratePostResponse)
async def generate_post_upload(
    pdf: UploadFile = File(...),
    images: List[UploadFile] = File(...),
    post_type: PostType = Form(...),
    project_type: ProjectType = Form(...),
    service: PostProcessingService = Depends(get_processing_service)
):
    """Upload a PDF and images, compress them and generate a post"""
    try:
        pdf_file = UploadedFile(
            name=pdf.filename or "ankieta.pdf",
            content_type=pdf.content_type or "",
            content=await pdf.read()
        )
        image_files = [
            UploadedFile(
                name=image.filename or f"image-{i + 1}",
                content_type=image.content_type or "",
                content=await image.read()
            )
            for i, image in enumerate(images)
        ]

        logger.info(f"Files uploaded: {pdf_file.name} and {len(image_files)} images")

        # compression and the provider call block, keep them off the event loop
        return await run_in_threadpool(
            service.generate_from_uploads, pdf_file, image_files, post_type, project_type
        )

    except UploadValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (GenerationError, PromptError) as e:
        logger.error(f"Error in /api/generate-post/upload: {str(e)}")
        raise _generation_failed(e)

# endpoint to list prompt templates
@app.get("/api/prompts")
def list_prompts(prompt_manager: PromptManager = Depends(get_prompt_manager)):
    """List all available prompts"""
    return {
        "success": True,
        "prompts": [prompt.model_dump(mode="json") for prompt in prompt_manager.get_available_prompts()]
    }

@app.get("/api/prompts/{filename}")
def get_prompt(filename: str, prompt_manager: PromptManager = Depends(get_prompt_manager)):
    """Get the content of a prompt template"""
    if not prompt_manager.is_known_prompt(filename):
        raise HTTPException(status_code=404, detail="Prompt not found")

    try:
        return {"success": True, "filename": filename, "content": prompt_manager.load_prompt(filename)}
    except PromptError as e:
        logger.error(f"Error loading prompt: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

@app.post("/api/prompts/{filename}")
def save_prompt(
    filename: str,
    payload: PromptUpdateRequest,
    prompt_manager: PromptManager = Depends(get_prompt_manager)
):
    """Save an edited prompt template"""
    if not prompt_manager.is_known_prompt(filename):
        raise HTTPException(status_code=404, detail="Prompt not found")

    try:
        prompt_manager.save_prompt(filename, payload.content)
        return {"success": True, "filename": filename}
    except PromptError as e:
        logger.error(f"Error saving prompt: {str(e)}")
        raise HTTPException(status_code=500, detail=str(e))

@app.get("/api")
async def api_info():
    """API information endpoint"""
    return {
        "message": settings.PROJECT_NAME,
        "version": settings.PROJECT_VERSION,
        "endpoints": {
            "generate": "/api/generate-post",
            "upload": "/api/generate-post/upload",
            "prompts": "/api/prompts",
            "prompt": "/api/prompts/{filename}",
            "health": "/health"
        }
    }

@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {"status": "healthy", "service": "post-generator"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
