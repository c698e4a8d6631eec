import django_filters as filters

from posts.models import Post


class PostFilter(filters.FilterSet):
    author = filters.UUIDFilter(field_name="author_id")
    since = filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="gte")
    until = filters.IsoDateTimeFilter(field_name="created_at", lookup_expr="lte")

    class Meta:
        model = Post
        fields = ["is_announcement", "author", "since", "until"]
