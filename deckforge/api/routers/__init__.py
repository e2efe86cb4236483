"""
Session router.
"""

from fastapi import APIRouter

from .exports import router as exports_router
from .plan import router as plan_router
from .render import router as render_router
from .session import router as session_router

router = APIRouter(prefix="/v1/session", tags=["session"])

router.include_router(session_router)
router.include_router(plan_router, tags=["plan"])
router.include_router(render_router, tags=["render"])
router.include_router(exports_router, tags=["exports"])
