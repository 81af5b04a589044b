from fastapi import APIRouter

from textcraft.api.v1 import detect, humanize

router = APIRouter()
router.include_router(detect.router, tags=["detect"])
router.include_router(humanize.router, tags=["humanize"])
