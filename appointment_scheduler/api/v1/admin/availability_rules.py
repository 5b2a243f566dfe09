# ============================================================================
# FILE: appointment_scheduler/api/v1/admin/availability_rules.py
# Admin endpoints for weekly availability rules
# ============================================================================
from fastapi import APIRouter, Depends, Path, status
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID

from appointment_scheduler.api.dependencies import get_db, require_admin
from appointment_scheduler.models.user import User
from appointment_scheduler.schemas.availability import (
    AvailabilityRuleCreate,
    AvailabilityRuleUpdate,
    AvailabilityRuleResponse,
)
from appointment_scheduler.schemas.auth import MessageResponse
from appointment_scheduler.services.admin.availability_rule_service import AvailabilityRuleService

router = APIRouter(prefix="/admin/availability-rules", tags=["Admin - Availability"])


@router.get("", response_model=List[AvailabilityRuleResponse])
async def list_rules(
        admin: User = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return AvailabilityRuleService.list_rules(db)


@router.post("", response_model=AvailabilityRuleResponse, status_code=status.HTTP_201_CREATED)
async def create_rule(
        request: AvailabilityRuleCreate,
        admin: User = Depends(require_admin),
        db: Session = Depends(get_db)
):
    return AvailabilityRuleService.create_rule(db, request)


@router.put("/{rule_id}", response_model=AvailabilityRuleResponse)
async def update_rule(
        request: AvailabilityRuleUpdate,
        rule_id: UUID = Path(..., description="The availability rule ID"),
        admin: User = Depends(require_admin),
        db: Session = Depends(get_db)
):
    """
    Partially update a rule. Only send fields you want to change.

    Changes apply to availability computed from now on; existing
    appointments are left as they are.
    """
    return AvailabilityRuleService.update_rule(db, rule_id, request)


@router.delete("/{rule_id}", response_model=MessageResponse)
async def delete_rule(
        rule_id: UUID = Path(..., description="The availability rule ID"),
        admin: User = Depends(require_admin),
        db: Session = Depends(get_db)
):
    AvailabilityRuleService.delete_rule(db, rule_id)
    return MessageResponse(message="Availability rule deleted successfully.")
