from fastapi import APIRouter

from .errors import router as errors_router
from .up import router as up_router

router = APIRouter()

router.include_router(up_router)
router.include_router(errors_router)
