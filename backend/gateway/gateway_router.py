# backend/gateway/gateway_router.py
from fastapi import APIRouter

from routers.auth_router import router as auth_router
from routers.company_router import router as company_router
from routers.requirements_router import router as requirements_router
from routers.media_router import router as media_router

gateway_router = APIRouter()

gateway_router.include_router(auth_router)           # /auth/...
gateway_router.include_router(company_router)        # /company/...
gateway_router.include_router(requirements_router)   # /requirements/...

# external services
gateway_router.include_router(media_router)          # /media/...
