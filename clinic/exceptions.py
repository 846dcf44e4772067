import logging

from rest_framework.views import exception_handler as drf_exception_handler
from rest_framework.response import Response

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        logger.exception("unhandled API error in %s", context.get("view"))
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': 'Internal Server Error'}}, status=500)
    # normalize response
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    code = getattr(exc, 'default_code', None) or 'api_error'
    return Response({'ok': False, 'error': {'code': code, 'message': detail}}, status=resp.status_code, headers=_passthrough_headers(resp))


def _passthrough_headers(resp):
    return {k: v for k, v in resp.items() if k in ('WWW-Authenticate', 'Retry-After', 'Allow')}
