from fastapi import APIRouter, Depends, HTTPException
from typing import List
import logging
from netbill.core.stats import user_stats
from netbill.db.session import Database, get_db
from netbill.schemas.status import RecordStatus
from netbill.schemas.user import UserPublic, UserStats, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])
logger = logging.getLogger(__name__)

@router.get("", response_model=List[UserPublic])
async def list_users(db: Database = Depends(get_db)):
    return [UserPublic.from_user(u) for u in await db.users.list_all()]

@router.get("/stats", response_model=UserStats)
async def get_user_stats(db: Database = Depends(get_db)):
    return user_stats(await db.users.list_all())

@router.get("/{user_id}", response_model=UserPublic)
async def get_user(user_id: str, db: Database = Depends(get_db)):
    user = await db.users.find_by_id(user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return UserPublic.from_user(user)

@router.put("/{user_id}", response_model=UserPublic)
async def update_user(user_id: str, payload: UserUpdate, db: Database = Depends(get_db)):
    changes = payload.model_dump(exclude_none=True)
    if "email" in changes:
        holder = await db.users.find_by_email(changes["email"])
        if holder and holder.id != user_id:
            raise HTTPException(status_code=400, detail="User with this email already exists")
    return UserPublic.from_user(await db.users.update(user_id, changes))

@router.delete("/{user_id}")
async def deactivate_user(user_id: str, db: Database = Depends(get_db)):
    await db.users.update(user_id, {"status": RecordStatus.INACTIVE})
    return {"message": "User deactivated successfully"}

@router.post("/{user_id}/activate")
async def activate_user(user_id: str, db: Database = Depends(get_db)):
    await db.users.update(user_id, {"status": RecordStatus.ACTIVE})
    return {"message": "User activated successfully"}
