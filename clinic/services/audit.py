"""
Audit trail for logins and patient, report and profile writes.
"""
import logging
from typing import Any, Dict, Optional

from clinic.models import AuditEvent

logger = logging.getLogger(__name__)


def log_action(*, user, action: str, object_type: Optional[str] = None, object_id: Optional[int] = None,
               detail: Optional[Dict[str, Any]] = None) -> AuditEvent:
    """Record ``action`` on ``object_type``/``object_id``; anonymous users are stored as NULL."""
    event = AuditEvent.objects.create(
        user=user if getattr(user, 'pk', None) else None,
        action=action,
        object_type=object_type,
        object_id=object_id,
        detail=detail or {},
    )
    logger.debug("audit %s %s:%s by %s", action, object_type, object_id, event.user_id)
    return event


def client_ip(request) -> Optional[str]:
    # first hop of X-Forwarded-For when behind the TLS proxy
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR', '')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')
