from dataclasses import dataclass
from datetime import datetime, timezone
from io import BytesIO
from typing import List, Optional, Sequence, Tuple
import logging
import os
import time
from fastapi import HTTPException
from PIL import Image, ImageOps, UnidentifiedImageError
from werkzeug.utils import secure_filename

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredObject:
    name: str
    url: str
    created_at: datetime
    size: int


def process_uploaded_image(content: bytes, filename: str, max_size: int = 2000, quality: int = 85) -> Tuple[bytes, str]:
    """
    Normaliza la imagen subida:
    - Corrige la orientación según EXIF
    - Convierte a RGB (fondo blanco para transparencias)
    - Limita el lado mayor a max_size
    - Guarda como JPEG
    Si no es una imagen legible se devuelve el contenido original.
    """
    try:
        image = Image.open(BytesIO(content))
        image = ImageOps.exif_transpose(image)

        if image.mode in ('RGBA', 'LA', 'P'):
            if image.mode == 'P':
                image = image.convert('RGBA')
            rgb_image = Image.new('RGB', image.size, (255, 255, 255))
            rgb_image.paste(image, mask=image.split()[-1])
            image = rgb_image
        elif image.mode != 'RGB':
            image = image.convert('RGB')

        image.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)

        output = BytesIO()
        image.save(output, format='JPEG', quality=quality, optimize=True)
        return output.getvalue(), '.jpg'
    except (UnidentifiedImageError, OSError) as e:
        logger.warning("Could not process image %s: %s", filename, e)
        return content, os.path.splitext(filename)[1] or '.jpg'


class ObjectStorage:
    """Bucket de archivos en disco con URL pública"""

    def __init__(self, root_dir: str, bucket: str, public_url: str, max_image_size: int = 2000):
        self.bucket = bucket
        self.root_dir = root_dir
        self.public_base = public_url.rstrip('/')
        self.directory = os.path.join(root_dir, bucket)
        self.public_prefix = f"{self.public_base}/{bucket}/"
        self.max_image_size = max_image_size

    def start(self):
        os.makedirs(self.directory, exist_ok=True)

    def _path(self, name: str) -> str:
        safe = secure_filename(name)
        if not safe or safe != name:
            raise HTTPException(status_code=400, detail="Invalid object name")
        return os.path.join(self.directory, safe)

    def unique_name(self, filename: str) -> str:
        base = secure_filename(filename) or "image"
        return f"{int(time.time() * 1000)}-{base}"

    def public_url(self, name: str) -> str:
        return f"{self.public_prefix}{name}"

    def name_from_url(self, url: str) -> Optional[str]:
        if url and url.startswith(self.public_prefix):
            return url[len(self.public_prefix):]
        return None

    def upload(self, filename: str, content: bytes, process_image: bool = True) -> StoredObject:
        """Sube un archivo con nombre único; nunca sobrescribe"""
        if process_image:
            content, ext = process_uploaded_image(content, filename, self.max_image_size)
            stem = os.path.splitext(filename)[0] or "image"
            filename = f"{stem}{ext}"

        name = self.unique_name(filename)
        os.makedirs(self.directory, exist_ok=True)
        filepath = self._path(name)

        try:
            with open(filepath, "xb") as buffer:
                buffer.write(content)
        except FileExistsError:
            raise HTTPException(status_code=409, detail="Object already exists")
        except OSError as e:
            logger.error("Error saving %s: %s", name, e, exc_info=True)
            raise HTTPException(status_code=500, detail=f"Error saving image: {str(e)}")

        logger.info("Uploaded %s to bucket %s", name, self.bucket)
        return self._describe(name)

    def _describe(self, name: str) -> StoredObject:
        stat = os.stat(self._path(name))
        return StoredObject(
            name=name,
            url=self.public_url(name),
            created_at=datetime.fromtimestamp(stat.st_mtime, timezone.utc),
            size=stat.st_size,
        )

    def list(self, limit: int = 100, offset: int = 0) -> List[StoredObject]:
        """Objetos del bucket, los más nuevos primero"""
        if not os.path.isdir(self.directory):
            return []
        objects = [
            self._describe(name) for name in os.listdir(self.directory)
            if os.path.isfile(os.path.join(self.directory, name))
        ]
        objects.sort(key=lambda obj: (obj.created_at, obj.name), reverse=True)
        return objects[offset:offset + limit]

    def read(self, name: str) -> bytes:
        with open(self._path(name), "rb") as f:
            return f.read()

    def remove(self, names: Sequence[str]) -> int:
        removed = 0
        for name in names:
            filepath = self._path(name)
            if os.path.exists(filepath):
                os.remove(filepath)
                removed += 1
        logger.info("Removed %d objects from bucket %s", removed, self.bucket)
        return removed
