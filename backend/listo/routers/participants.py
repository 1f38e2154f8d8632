"""
Sharing endpoints: list participants, share by email, revoke.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from listo.core.access import require_list_access, require_list_owner
from listo.core.exceptions import ConflictError
from listo.dependencies import get_current_user, get_storage
from listo.schemas import ListParticipant, MessageResponse, ShareRequest, UserInDB, UserResponse
from listo.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{list_id}/participants", response_model=List[UserResponse])
async def list_participants(
    list_id: int,
    current_user: UserInDB = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Users the list is shared with. The owner is not included; the client
    decides whether to hide the current user.
    """
    require_list_access(storage, current_user.id, list_id)
    return storage.get_list_participants(list_id)


@router.post("/{list_id}/share", response_model=ListParticipant, status_code=status.HTTP_201_CREATED)
async def share_list(
    list_id: int,
    share_in: ShareRequest,
    current_user: UserInDB = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Share a list with the user registered under ``email``.

    Owner only. Sharing with yourself or with someone who already has access
    is rejected.
    """
    require_list_owner(storage, current_user.id, list_id)

    target = storage.get_user_by_email(share_in.email)
    if target is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No user with this email")

    if target.id == current_user.id:
        raise ConflictError("You cannot share a list with yourself")

    if storage.is_list_shared_with_user(list_id, target.id):
        raise ConflictError("List is already shared with this user")

    participant = storage.add_list_participant(list_id, target.id)
    logger.info(f"User {current_user.id} shared list {list_id} with user {target.id}")
    return participant


@router.delete("/{list_id}/participants/{participant_id}", response_model=MessageResponse)
async def remove_participant(
    list_id: int,
    participant_id: int,
    current_user: UserInDB = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    """
    Revoke access. ``participant_id`` is the participant's user id, as
    returned by the participants listing.
    """
    require_list_owner(storage, current_user.id, list_id)

    participant = storage.get_list_participant(list_id, participant_id)
    if participant is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Participant not found")

    storage.remove_list_participant(participant.id)
    logger.info(f"User {current_user.id} removed user {participant_id} from list {list_id}")
    return {"message": "Participant removed"}
