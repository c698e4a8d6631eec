"""
Storage app: bucket-style object storage.

Three public buckets hold user uploads:
    - avatars: profile pictures (<user_id>/avatar-<timestamp>.jpg)
    - posts: post images (<user_id>/post-<timestamp>.jpg)
    - messages: message attachments (<conversation_id>/<timestamp>-<name>)

Usage:
    from storage.services import StorageService

    stored = StorageService.upload("posts", path, image_file, upsert=True)
    post.image_url = stored.public_url
"""
