from fastapi import APIRouter

from immoauto.api.routes import admin, analytics, auth, favorites, messages, properties, reports, search, upload, users, vehicles

api_router = APIRouter()
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(properties.router)
api_router.include_router(vehicles.router)
api_router.include_router(favorites.router)
api_router.include_router(messages.router)
api_router.include_router(search.router)
api_router.include_router(upload.router)
api_router.include_router(analytics.router)
api_router.include_router(reports.router)
api_router.include_router(admin.router)
