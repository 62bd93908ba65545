"""
FastAPI routers.

Only the liveness/status surface lives here; domain endpoints belong to the
application that embeds this storage layer.
"""
