"""
Serializers for storage uploads.
"""

from rest_framework import serializers


class UploadSerializer(serializers.Serializer):
    """
    Multipart upload request.

    ``path`` defaults to ``<user_id>/<timestamp>-<filename>``.
    """

    file = serializers.FileField()
    path = serializers.CharField(required=False, max_length=500)
    upsert = serializers.BooleanField(required=False, default=False)


class StoredObjectSerializer(serializers.Serializer):
    bucket = serializers.CharField()
    path = serializers.CharField()
    public_url = serializers.CharField()
