"""Profile router - the authenticated professional's profile and stamps"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import ProfileResponse, ProfileUpdate, StampCreate, StampResponse, StampUpdate
from .service import ProfileService

router = APIRouter(prefix="/profile", tags=["Profile"])
stamps_router = APIRouter(prefix="/stamps", tags=["Stamps"])


def get_profile_service(db: Session = Depends(get_db)) -> ProfileService:
    """Dependency injection for ProfileService"""
    return ProfileService(db)


@router.get("", response_model=ProfileResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("", response_model=ProfileResponse)
def update_profile(
    data: ProfileUpdate,
    current_user: User = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    return service.update_profile(current_user, data)


# ============================================
# Stamps
# ============================================


@stamps_router.get("", response_model=list[StampResponse])
def get_stamps(
    current_user: User = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    return service.get_stamps(current_user)


@stamps_router.post("", response_model=StampResponse, status_code=201)
def create_stamp(
    data: StampCreate,
    current_user: User = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    return service.create_stamp(data, current_user)


@stamps_router.put("/{stamp_id}", response_model=StampResponse)
def update_stamp(
    stamp_id: int,
    data: StampUpdate,
    current_user: User = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    return service.update_stamp(stamp_id, data, current_user)


@stamps_router.delete("/{stamp_id}")
def delete_stamp(
    stamp_id: int,
    current_user: User = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service),
):
    return service.delete_stamp(stamp_id, current_user)
