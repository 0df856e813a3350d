from immoauto.api.routes import admin, analytics, auth, favorites, messages, properties, reports, search, upload, users, vehicles

__all__ = [
    "auth",
    "users",
    "properties",
    "vehicles",
    "favorites",
    "messages",
    "search",
    "upload",
    "analytics",
    "reports",
    "admin",
]
