# pydantic models for requests, provider payloads and parsed results
from pydantic import BaseModel, Field
from typing import Annotated, List, Optional, Union, Literal
from enum import Enum

# enum for the kind of social media post
class PostType(str, Enum):
    FB_IG = "fb-ig"
    FB_GROUP = "fb-group"

# enum for the design package the post is about
class ProjectType(str, Enum):
    MROOMYGO = "mroomygo"
    PREMIUM = "premium"
    PREMIUM_PLUS = "premium-plus"

# uploaded file encoded as base64 (no data url prefix)
class FileData(BaseModel):
    name: str
    type: str  # mime type
    data: str

# base64 payload shared by document and image blocks
class Base64Source(BaseModel):
    type: Literal["base64"] = "base64"
    media_type: str
    data: str

class TextBlock(BaseModel):
    type: Literal["text"] = "text"
    text: str

class DocumentBlock(BaseModel):
    type: Literal["document"] = "document"
    source: Base64Source

class ImageBlock(BaseModel):
    type: Literal["image"] = "image"
    source: Base64Source

# one entry of a multimodal message, discriminated on "type"
ContentBlock = Annotated[
    Union[TextBlock, DocumentBlock, ImageBlock],
    Field(discriminator="type")
]

class Message(BaseModel):
    role: Literal["user", "assistant"] = "user"
    content: List[ContentBlock]

# token counters reported by the provider
class TokenUsage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0

# raw provider output
class GenerationResult(BaseModel):
    text: str
    usage: TokenUsage

# one suggested photo in the output order list
class PhotoItem(BaseModel):
    position: int  # zero-based, as numbered by the provider minus one
    description: str

# post body split from the photo order section
class ParsedResult(BaseModel):
    post: str
    photo_items: List[PhotoItem] = []

# parsed post together with usage counters
class GeneratedPost(BaseModel):
    post: str
    photo_items: List[PhotoItem] = []
    usage: TokenUsage

# prompt template listing entry
class PromptInfo(BaseModel):
    filename: str
    post_type: PostType
    title: str
    description: str

# request model for json based post generation
class GeneratePostRequest(BaseModel):
    pdf: FileData
    images: List[FileData] = Field(..., min_length=3, max_length=10)
    post_type: PostType
    project_type: ProjectType

class GenerationMetadata(BaseModel):
    post_type: PostType
    project_type: ProjectType
    image_count: int
    generated_at: str

# response model for post generation
class GeneratePostResponse(BaseModel):
    success: bool
    post: str
    photo_items: List[PhotoItem] = []
    usage: TokenUsage
    metadata: GenerationMetadata
    thumbnails: Optional[List[str]] = None  # data urls, only for multipart uploads

# request model for saving an edited prompt template
class PromptUpdateRequest(BaseModel):
    content: str
