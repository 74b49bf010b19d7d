from fastapi import APIRouter

from relay.api.routes.share import router as share_router

api_router = APIRouter()
api_router.include_router(share_router)
