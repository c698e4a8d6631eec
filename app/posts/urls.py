"""
URL configuration for posts API.

Routes:
    /                   - Feed (GET) / create post (POST)
    /{id}/              - Post detail (GET)
    /{id}/like/         - Like (POST) / unlike (DELETE)
    /{id}/comments/     - Comments (GET) / add comment (POST)
"""

from rest_framework.routers import DefaultRouter

from posts.views import PostViewSet

router = DefaultRouter()
router.register(r"", PostViewSet, basename="post")

app_name = "posts"
urlpatterns = router.urls
