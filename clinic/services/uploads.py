import mimetypes

from django.conf import settings
from django.core.files.storage import default_storage
from rest_framework.exceptions import ValidationError

from clinic.models import upload_path

# browsers execute script inside these even when served as images
BLOCKED_UPLOAD_TYPES = {'image/svg+xml'}


def save_upload(f) -> str:
    """Store an uploaded report image/document and return its public URL.

    The stored name never reuses the client's file extension: it is derived
    from the accepted content type, so a file is always served as the type
    it was accepted as.
    """
    size_mb = (f.size or 0) / (1024*1024)
    if size_mb > settings.UPLOAD_MAX_MB:
        raise ValidationError({'file': ['File too large']})
    ctype = (getattr(f, 'content_type', '') or '').split(';')[0].strip().lower()
    if ctype in BLOCKED_UPLOAD_TYPES or not any(ctype.startswith(prefix) for prefix in settings.ALLOWED_UPLOAD_TYPES):
        raise ValidationError({'file': ['Unsupported file type']})
    extension = mimetypes.guess_extension(ctype)
    if not extension:
        raise ValidationError({'file': ['Unsupported file type']})
    name = default_storage.save(upload_path(extension), f)
    return default_storage.url(name)
