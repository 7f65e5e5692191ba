# apps/core/storage.py

import logging
import secrets
from io import BytesIO

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from PIL import Image, UnidentifiedImageError

from .exceptions import UpstreamError, ValidationError

logger = logging.getLogger(__name__)


class AvatarStorage:
    """
    Guarda avatares no storage padrão do Django

    Em desenvolvimento é o sistema de arquivos (MEDIA_ROOT); com USE_S3
    o mesmo código grava no bucket via django-storages.
    """

    folder = 'avatars'

    def __init__(self, storage=None, max_size: int = None):
        self._storage = storage or default_storage
        self._max_size = max_size or settings.TASKPRO_AVATAR_SIZE

    def upload(self, user, uploaded_file) -> str:
        """
        Redimensiona a imagem e devolve a URL durável do arquivo salvo

        Raises:
            ValidationError: o arquivo não é uma imagem
            UpstreamError: o storage falhou ao gravar
        """
        content, extension = self._thumbnail(uploaded_file)
        name = f"{self.folder}/{user.pk}-{secrets.token_hex(6)}.{extension}"

        try:
            saved_name = self._storage.save(name, ContentFile(content))
            url = self._storage.url(saved_name)
        except OSError as e:
            logger.error("Falha ao gravar avatar do usuário %s: %s", user.pk, e)
            raise UpstreamError('Avatar upload failed') from e

        logger.info("Avatar do usuário %s salvo em %s", user.pk, saved_name)
        return url

    def _thumbnail(self, uploaded_file):
        try:
            img = Image.open(uploaded_file)
            img.load()
        except (UnidentifiedImageError, OSError):
            raise ValidationError('Avatar must be an image')

        image_format = img.format or 'PNG'
        if img.height > self._max_size or img.width > self._max_size:
            img.thumbnail((self._max_size, self._max_size))

        if image_format == 'JPEG' and img.mode not in ('RGB', 'L'):
            img = img.convert('RGB')

        buffer = BytesIO()
        img.save(buffer, format=image_format)
        return buffer.getvalue(), image_format.lower().replace('jpeg', 'jpg')
