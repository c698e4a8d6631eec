"""
Feed store.

Posts are kept as the rows the API returns. Counters are never adjusted
locally: likes take the counts of the row the like/unlike call returns,
and comments are counted once per comment id. Pushes:

- "posts" INSERT: reload the first page
- "posts" UPDATE: take the backend's counters for that post
- "post_comments" INSERT: append and count, once per comment id
- "friendships" INSERT/DELETE: reload, since the feed depends on friends
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from client.base import BaseStore
from client.exceptions import CampusAPIError

if TYPE_CHECKING:
    from client.models import Attachment, ChangeEvent


class FeedStore(BaseStore):
    channel_prefix = "feed"

    def __init__(self, backend, realtime, self_id=None, page_size: int = 20):
        super().__init__(backend, realtime, self_id)
        self.page_size = page_size
        self.posts: list[dict] = []
        self.has_more = True

    async def start(self) -> None:
        await self.listen("posts", self._on_post)
        await self.listen("post_comments", self._on_comment)
        if self.self_id is not None:
            await self.listen("friendships", self._on_friendship)
        await self.load()

    def get(self, post_id: str) -> dict | None:
        post_id = str(post_id)
        return next((p for p in self.posts if str(p["id"]) == post_id), None)

    async def load(self) -> list[dict]:
        try:
            page = await self.backend.get_feed(offset=0, limit=self.page_size)
        except CampusAPIError as e:
            self.fail("loading posts", e)
            return self.posts
        finally:
            self.loading = False
        self.posts = list(page)
        self.has_more = len(page) >= self.page_size
        return self.posts

    async def load_more(self) -> list[dict]:
        try:
            page = await self.backend.get_feed(offset=len(self.posts), limit=self.page_size)
        except CampusAPIError as e:
            self.fail("loading posts", e)
            return []
        known = {str(p["id"]) for p in self.posts}
        self.posts.extend(p for p in page if str(p["id"]) not in known)
        self.has_more = len(page) >= self.page_size
        return page

    async def create_post(
        self, content: str, image: Attachment | None = None, is_announcement: bool = False
    ) -> dict | None:
        try:
            post = await self.backend.create_post(
                content, image=image, is_announcement=is_announcement
            )
        except CampusAPIError as e:
            self.fail("creating post", e)
            return None
        await self.load()
        return post

    async def like(self, post_id: str) -> bool:
        try:
            row = await self.backend.like_post(post_id)
        except CampusAPIError as e:
            self.fail("liking post", e)
            return False
        self._take_counts(row, fields=("likes_count",), liked_by_me=True)
        return True

    async def unlike(self, post_id: str) -> bool:
        try:
            row = await self.backend.unlike_post(post_id)
        except CampusAPIError as e:
            self.fail("unliking post", e)
            return False
        self._take_counts(row, fields=("likes_count",), liked_by_me=False)
        return True

    def _take_counts(
        self, row: dict, fields=("likes_count", "comments_count"), liked_by_me: bool | None = None
    ) -> None:
        """Copy the backend's counters for ``row`` onto the cached post."""
        post = self.get(row.get("id", ""))
        if post is None:
            return
        for name in fields:
            if name in row:
                post[name] = max(0, row[name])
        if liked_by_me is not None:
            post["liked_by_me"] = liked_by_me

    async def add_comment(self, post_id: str, content: str) -> dict | None:
        try:
            comment = await self.backend.add_comment(post_id, content)
        except CampusAPIError as e:
            self.fail("adding comment", e)
            return None
        self._append_comment(comment)
        return comment

    def _append_comment(self, comment: dict) -> None:
        post = self.get(comment["post_id"])
        if post is None:
            return
        comments = post.setdefault("comments", [])
        if any(str(c["id"]) == str(comment["id"]) for c in comments):
            return
        comments.append(comment)
        post["comments_count"] = post.get("comments_count", 0) + 1

    async def _on_post(self, event: ChangeEvent) -> None:
        if event.event_type == "INSERT":
            await self.load()
        elif event.event_type == "UPDATE":
            self._take_counts(event.new)

    async def _on_comment(self, event: ChangeEvent) -> None:
        if event.event_type == "INSERT":
            self._append_comment(event.new)

    async def _on_friendship(self, event: ChangeEvent) -> None:
        if event.event_type in ("INSERT", "DELETE"):
            self.get_logger().debug("Friendship changed, reloading posts")
            await self.load()
