from fastapi import APIRouter
from .menu import router as menu_router
from .dashboard import router as dashboard_router

router = APIRouter()
router.include_router(menu_router)
router.include_router(dashboard_router)
