"""
Storage bucket views.

Endpoints:
    POST   /api/v1/storage/{bucket}/         - Upload an object (multipart)
    DELETE /api/v1/storage/{bucket}/{path}   - Remove an object
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from core.exceptions import PermissionDeniedError
from storage.permissions import can_write
from storage.serializers import StoredObjectSerializer, UploadSerializer
from storage.services import StorageService, timestamp_ms


class BucketUploadView(APIView):
    """
    Upload a file into a bucket.

    Request (multipart):
        file: The file
        path: Optional object path (defaults to <user_id>/<timestamp>-<name>)
        upsert: Overwrite an existing object (default false)

    Returns:
        201 {"bucket", "path", "public_url"}
    """

    permission_classes = [IsAuthenticated]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        summary="Upload an object",
        tags=["Storage"],
        request=UploadSerializer,
        responses={201: StoredObjectSerializer},
    )
    def post(self, request, bucket):
        StorageService.check_bucket(bucket)
        serializer = UploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        upload = serializer.validated_data["file"]
        path = serializer.validated_data.get("path") or (
            f"{request.user.id}/{timestamp_ms()}-{upload.name}"
        )
        if not can_write(request.user, bucket, path):
            raise PermissionDeniedError(
                "You cannot write to this location",
                details={"bucket": bucket, "path": path},
            )

        stored = StorageService.upload(
            bucket,
            path,
            upload,
            upsert=serializer.validated_data["upsert"],
        )
        return Response(
            StoredObjectSerializer(stored).data,
            status=status.HTTP_201_CREATED,
        )


class BucketObjectView(APIView):
    """Remove an object the requesting user owns."""

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Remove an object", tags=["Storage"], responses={204: None})
    def delete(self, request, bucket, path):
        StorageService.check_bucket(bucket)
        if not can_write(request.user, bucket, path):
            raise PermissionDeniedError(
                "You cannot remove this object",
                details={"bucket": bucket, "path": path},
            )
        StorageService.remove(bucket, [path])
        return Response(status=status.HTTP_204_NO_CONTENT)
