from fastapi import APIRouter, Depends, HTTPException, status

from listo.dependencies import get_current_user, get_storage
from listo.schemas import ProfileUpdate, UserInDB, UserResponse
from listo.storage.base import Storage

router = APIRouter()


@router.put("/{user_id}", response_model=UserResponse)
async def update_profile(
    user_id: int,
    profile: ProfileUpdate,
    current_user: UserInDB = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Update your own name and avatar.
    """
    if user_id != current_user.id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only update your own profile",
        )

    changes = profile.model_dump(exclude_unset=True)
    # name is required on the user, so an explicit null is not a change
    if "name" in changes and changes["name"] is None:
        del changes["name"]
    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Nothing to update",
        )

    return storage.update_user(user_id, changes)
