"""
URL configuration for storage buckets.
"""

from django.urls import path

from storage.views import BucketObjectView, BucketUploadView

app_name = "storage"

urlpatterns = [
    path("<str:bucket>/", BucketUploadView.as_view(), name="upload"),
    path("<str:bucket>/<path:path>", BucketObjectView.as_view(), name="object"),
]
