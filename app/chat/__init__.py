"""
Chat app.

Direct and group conversations, messages with optional attachments, read
tracking through each participant's ``last_read_at`` and typing indicators.

New messages and typing changes are pushed on the "messages" and
"typing_indicators" realtime topics (see realtime.broadcast).
"""
