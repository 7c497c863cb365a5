"""
Server services.

Business logic shared by several routers: authentication, real-time relay,
notifications, scheduling rules and profile completion.
"""
