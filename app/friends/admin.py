"""
Django admin configuration for friends.
"""

from django.contrib import admin

from friends.models import FriendRequest, Friendship


@admin.register(FriendRequest)
class FriendRequestAdmin(admin.ModelAdmin):
    list_display = ("sender", "receiver", "status", "created_at")
    list_filter = ("status", "created_at")
    search_fields = ("sender__email", "receiver__email")
    raw_id_fields = ("sender", "receiver")
    readonly_fields = ("created_at", "updated_at")


@admin.register(Friendship)
class FriendshipAdmin(admin.ModelAdmin):
    list_display = ("user", "friend", "created_at")
    search_fields = ("user__email", "friend__email")
    raw_id_fields = ("user", "friend")
    readonly_fields = ("created_at", "updated_at")
