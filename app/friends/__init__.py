"""
Friends app.

Friend requests between users and the friendships they turn into.
Friendships are stored in both directions so that "my friends" is a
single indexed lookup.
"""
