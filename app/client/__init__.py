"""
Campus Connect client.

An asyncio package holding the client-side state of the app: the
conversation list, per-conversation message windows, typing indicators,
the optimistic message composer and the feed, friends and notification
stores. It talks to the backend over REST (``client.transport``) and the
realtime change feed (``client.realtime``), both on aiohttp.

Usage:
    from client.config import ClientConfig
    from client.realtime import RealtimeClient
    from client.store import MessagingStore
    from client.transport import CampusAPI

    config = ClientConfig.from_env()
    async with CampusAPI(config) as api:
        realtime = RealtimeClient.from_config(config)
        await realtime.connect()
        store = MessagingStore(api, realtime, self_id=my_user_id)
        await store.start()
"""
