from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from .. import crud
from ..db import get_session
from ..schemas import AreaOut

router = APIRouter()


@router.get("", response_model=list[AreaOut])
async def list_areas(db: AsyncSession = Depends(get_session)):
    return await crud.list_areas(db)
