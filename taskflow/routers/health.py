from fastapi import APIRouter

from ..config import settings

router = APIRouter()


@router.get("")
def health():
    return {"status": "ok", "env": settings.app_env}
