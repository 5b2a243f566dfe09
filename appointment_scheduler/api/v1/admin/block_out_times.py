# ============================================================================
# FILE: appointment_scheduler/api/v1/admin/block_out_times.py
# Admin endpoints for block-out intervals
# ============================================================================
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID

from appointment_scheduler.api.dependencies import get_db, require_admin
from appointment_scheduler.models.user import User
from appointment_scheduler.schemas.availability import (
    BlockOutTimeCreate,
    BlockOutTimeUpdate,
    BlockOutTimeResponse,
)
from appointment_scheduler.schemas.auth import MessageResponse
from appointment_scheduler.services.admin.block_out_service import BlockOutService

router = APIRouter(prefix="/admin/block-out-times", tags=["Admin - Availability"])


@router.get("", response_model=List[BlockOutTimeResponse])
async def list_block_outs(
        admin: User = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return BlockOutService.list_block_outs(db)


@router.post("", response_model=BlockOutTimeResponse, status_code=status.HTTP_201_CREATED)
async def create_block_out(
        request: BlockOutTimeCreate,
        admin: User = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """Block a time range. Existing appointments inside it are not touched."""
    return BlockOutService.create_block_out(db, request)


@router.put("/{block_out_id}", response_model=BlockOutTimeResponse)
async def update_block_out(
        request: BlockOutTimeUpdate,
        block_out_id: UUID = Path(..., description="The block-out ID"),
        admin: User = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return BlockOutService.update_block_out(db, block_out_id, request)


@router.delete("/{block_out_id}", response_model=MessageResponse)
async def delete_block_out(
        block_out_id: UUID = Path(..., description="The block-out ID"),
        admin: User = Depends(require_admin),
        db: Session = Depends(get_db)
):
    BlockOutService.delete_block_out(db, block_out_id)
    return MessageResponse(message="Block-out time deleted successfully.")
