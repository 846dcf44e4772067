from rest_framework.decorators import api_view, permission_classes, parser_classes, throttle_classes
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from clinic.services.uploads import save_upload
from clinic.throttling import UploadRateThrottle


@api_view(['POST'])
@permission_classes([IsAuthenticated])
@parser_classes([MultiPartParser, FormParser])
@throttle_classes([UploadRateThrottle])
def upload(request):
    """Store one report image (multipart field ``file``) and return its URL."""
    f = request.FILES.get('file')
    if not f:
        return Response({'ok': False, 'detail': 'No file uploaded'}, status=400)
    return Response({'url': save_upload(f)})
