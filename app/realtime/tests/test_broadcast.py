"""
Tests for realtime.broadcast.

publish_change is exercised against the in-memory channel layer that
config.test_settings selects.
"""

import uuid

import pytest
from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from realtime.broadcast import group_name, publish_change


class TestGroupName:
    def test_global_topic_has_single_group(self):
        assert group_name("posts") == "posts"
        assert group_name("posts", user_id="ignored") == "posts"

    def test_user_topic_is_scoped_by_user(self):
        user_id = uuid.uuid4()

        assert group_name("messages", user_id) == f"messages.{user_id}"

    def test_user_topic_without_user_raises(self):
        with pytest.raises(ValueError):
            group_name("notifications")


@pytest.mark.django_db
class TestPublishChange:
    """Tests for publish_change()."""

    def test_unknown_topic_raises(self):
        with pytest.raises(ValueError):
            publish_change("gossip", table="gossip", event_type="INSERT")

    def test_change_is_sent_only_on_commit(self, published, django_capture_on_commit_callbacks):
        """
        Nothing leaves before the transaction commits.

        Why it matters: Subscribers must never see rows that were rolled back.
        """
        with django_capture_on_commit_callbacks(execute=False) as callbacks:
            publish_change("posts", table="posts", event_type="INSERT", new={"id": "1"})

        assert published == []
        assert len(callbacks) == 1

    def test_user_topic_fans_out_to_each_user_once(
        self, published, django_capture_on_commit_callbacks
    ):
        a, b = uuid.uuid4(), uuid.uuid4()

        with django_capture_on_commit_callbacks(execute=True):
            publish_change(
                "friend_requests",
                table="friend_requests",
                event_type="UPDATE",
                new={"status": "accepted"},
                old={"status": "pending"},
                user_ids=[a, b, a],
            )

        groups, event = published[0]
        assert groups == [f"friend_requests.{a}", f"friend_requests.{b}"]
        assert event["event_type"] == "UPDATE"
        assert event["old"] == {"status": "pending"}

    def test_payload_is_json_plain(self, published, django_capture_on_commit_callbacks):
        row_id = uuid.uuid4()

        with django_capture_on_commit_callbacks(execute=True):
            publish_change("posts", table="posts", event_type="INSERT", new={"id": row_id})

        _, event = published[0]
        assert event["new"] == {"id": str(row_id)}
        assert event["old"] == {}

    def test_user_topic_without_recipients_sends_nothing(
        self, published, django_capture_on_commit_callbacks
    ):
        with django_capture_on_commit_callbacks(execute=True) as callbacks:
            publish_change("messages", table="messages", event_type="INSERT", user_ids=[])

        assert callbacks == []
        assert published == []

    def test_change_reaches_channel_layer_group(self, django_capture_on_commit_callbacks):
        layer = get_channel_layer()
        channel = async_to_sync(layer.new_channel)()
        async_to_sync(layer.group_add)("post_comments", channel)

        with django_capture_on_commit_callbacks(execute=True):
            publish_change(
                "post_comments", table="post_comments", event_type="INSERT", new={"id": "c1"}
            )

        message = async_to_sync(layer.receive)(channel)
        assert message["type"] == "realtime.change"
        assert message["topic"] == "post_comments"
        assert message["new"] == {"id": "c1"}
        async_to_sync(layer.group_discard)("post_comments", channel)
