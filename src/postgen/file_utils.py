# file helpers for uploads: validation, image compression and base64 encoding
import base64
import io
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from PIL import Image

from .models import FileData

logger = logging.getLogger(__name__)

PDF_MAX_SIZE = 10 * 1024 * 1024
IMAGE_MAX_SIZE = 5 * 1024 * 1024
MIN_IMAGES = 3
MAX_IMAGES = 10
IMAGE_TYPES = ["image/jpeg", "image/png", "image/jpg"]

# 1200-1400px is enough detail for the vision model
COMPRESS_MAX_SIZE = 1400
COMPRESS_QUALITY = 70
THUMBNAIL_MAX_SIZE = 400
THUMBNAIL_QUALITY = 50

# errors Pillow raises for unreadable or oversized images
IMAGE_ERRORS = (OSError, ValueError, Image.DecompressionBombError)

# an uploaded file before it is encoded
@dataclass
class UploadedFile:
    name: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

def file_data_to_data_url(file: FileData) -> str:
    """Convert FileData to a data url, e.g. data:application/pdf;base64,JVBERi0..."""
    return f"data:{file.type};base64,{file.data}"

def validate_pdf(file: UploadedFile) -> Tuple[bool, Optional[str]]:
    """Validate PDF file"""
    if file.content_type != "application/pdf":
        return False, "Plik musi być w formacie PDF"

    if file.size > PDF_MAX_SIZE:
        return False, "Plik PDF nie może być większy niż 10MB"

    return True, None

def validate_images(files: List[UploadedFile]) -> Tuple[bool, Optional[str]]:
    """Validate image files"""
    if len(files) < MIN_IMAGES:
        return False, "Musisz dodać minimum 3 zdjęcia"

    if len(files) > MAX_IMAGES:
        return False, "Możesz dodać maksymalnie 10 zdjęć"

    if any(file.content_type not in IMAGE_TYPES for file in files):
        return False, "Wszystkie pliki muszą być w formacie JPG lub PNG"

    if any(file.size > IMAGE_MAX_SIZE for file in files):
        return False, "Każde zdjęcie nie może być większe niż 5MB"

    return True, None

# scale down so neither side exceeds max_size, keeping the aspect ratio
def _resize_to_fit(image: Image.Image, max_size: int) -> Image.Image:
    width, height = image.size
    scale = min(1.0, max_size / width, max_size / height)
    if scale < 1.0:
        image = image.resize((max(1, round(width * scale)), max(1, round(height * scale))), Image.LANCZOS)
    return image

def _encode_jpeg(content: bytes, max_size: int, quality: int) -> bytes:
    with Image.open(io.BytesIO(content)) as image:
        image = _resize_to_fit(image.convert("RGB"), max_size)
        output = io.BytesIO()
        image.save(output, format="JPEG", quality=quality)
        return output.getvalue()

def compress_image(content: bytes) -> bytes:
    """Compress an image to JPEG, max 1400px on the longer side"""
    return _encode_jpeg(content, COMPRESS_MAX_SIZE, COMPRESS_QUALITY)

def create_thumbnail(content: bytes) -> str:
    """Create a small JPEG preview (max 400px) as a data url"""
    thumbnail = _encode_jpeg(content, THUMBNAIL_MAX_SIZE, THUMBNAIL_QUALITY)
    return f"data:image/jpeg;base64,{base64.b64encode(thumbnail).decode('ascii')}"

# convert an upload to FileData, compressing images first
def file_to_file_data(file: UploadedFile) -> FileData:
    name, content_type, content = file.name, file.content_type, file.content

    if content_type in IMAGE_TYPES:
        try:
            compressed = compress_image(content)
            logger.info(f"Compressed {name}: {format_file_size(len(content))} → {format_file_size(len(compressed))}")
            content_type, content = "image/jpeg", compressed
        except IMAGE_ERRORS as e:
            logger.warning(f"Failed to compress image {name}, using original: {str(e)}")

    return FileData(
        name=name,
        type=content_type,
        data=base64.b64encode(content).decode("ascii")
    )

def files_to_file_data(files: List[UploadedFile]) -> List[FileData]:
    return [file_to_file_data(file) for file in files]

def format_file_size(size: int) -> str:
    """Get file size in human readable format"""
    if size == 0:
        return "0 Bytes"

    k = 1024
    sizes = ["Bytes", "KB", "MB", "GB"]
    i = min(int(math.floor(math.log(size) / math.log(k))), len(sizes) - 1)

    return f"{round(size / math.pow(k, i), 2):g} {sizes[i]}"
