"""
Posts app.

The campus feed: posts with an optional image, likes and comments.
"""
