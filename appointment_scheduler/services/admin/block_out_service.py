# ============================================================================
# appointment_scheduler/services/admin/block_out_service.py
# ============================================================================
"""Admin management of block-out intervals"""
from typing import List
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from appointment_scheduler.core.exceptions import NotFoundError, ValidationError
from appointment_scheduler.models.availability import BlockOutTime
from appointment_scheduler.schemas.availability import BlockOutTimeCreate, BlockOutTimeUpdate
from appointment_scheduler.utils.timeutils import ensure_utc, format_instant

logger = logging.getLogger(__name__)


class BlockOutService:
    """CRUD for block-out times"""

    @staticmethod
    def list_block_outs(db: Session) -> List[BlockOutTime]:
        return db.query(BlockOutTime).order_by(BlockOutTime.start_time.asc()).all()

    @staticmethod
    def get_block_out(db: Session, block_out_id: UUID) -> BlockOutTime:
        block = db.query(BlockOutTime).filter(BlockOutTime.id == block_out_id).first()
        if not block:
            raise NotFoundError("Block-out time not found.")
        return block

    @staticmethod
    def create_block_out(db: Session, data: BlockOutTimeCreate) -> BlockOutTime:
        start_time = ensure_utc(data.start_time)
        end_time = ensure_utc(data.end_time)
        if end_time <= start_time:
            raise ValidationError("End time must be after start time.")

        block = BlockOutTime(start_time=start_time, end_time=end_time, reason=data.reason or None)
        db.add(block)
        db.commit()
        db.refresh(block)

        logger.info(f"Block-out created: {format_instant(start_time)} - {format_instant(end_time)} ({block.reason})")
        return block

    @staticmethod
    def update_block_out(db: Session, block_out_id: UUID, changes: BlockOutTimeUpdate) -> BlockOutTime:
        updates = changes.model_dump(exclude_unset=True)
        if not updates:
            raise ValidationError("No update fields provided.")

        for field in ("start_time", "end_time"):
            if field in updates:
                if updates[field] is None:
                    raise ValidationError(f"{field} cannot be null.")
                updates[field] = ensure_utc(updates[field])

        block = BlockOutService.get_block_out(db, block_out_id)

        start_time = updates.get("start_time", block.start_time)
        end_time = updates.get("end_time", block.end_time)
        if end_time <= start_time:
            raise ValidationError("End time must be after start time.")

        for field, value in updates.items():
            setattr(block, field, value)

        db.commit()
        db.refresh(block)

        logger.info(f"Block-out {block_out_id} updated: {sorted(updates)}")
        return block

    @staticmethod
    def delete_block_out(db: Session, block_out_id: UUID) -> None:
        block = BlockOutService.get_block_out(db, block_out_id)
        db.delete(block)
        db.commit()
        logger.info(f"Block-out {block_out_id} deleted")
