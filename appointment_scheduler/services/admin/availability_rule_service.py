# ============================================================================
# appointment_scheduler/services/admin/availability_rule_service.py
# ============================================================================
"""Admin management of weekly availability rules"""
from typing import List
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from appointment_scheduler.core.exceptions import NotFoundError, ValidationError
from appointment_scheduler.models.availability import AvailabilityRule
from appointment_scheduler.schemas.availability import AvailabilityRuleCreate, AvailabilityRuleUpdate

logger = logging.getLogger(__name__)


def _validate_rule_fields(day_of_week, start_time, end_time, slot_duration_minutes) -> None:
    if day_of_week is None or not 0 <= day_of_week <= 6:
        raise ValidationError("day_of_week must be between 0 (Sunday) and 6 (Saturday).")
    if start_time is None or end_time is None:
        raise ValidationError("start_time and end_time are required.")
    if start_time >= end_time:
        raise ValidationError("start_time must be before end_time.")
    if slot_duration_minutes is None or slot_duration_minutes <= 0:
        raise ValidationError("slot_duration_minutes must be a positive number of minutes.")


class AvailabilityRuleService:
    """CRUD for availability rules. Availability is computed on demand, so no cascade is needed."""

    @staticmethod
    def list_rules(db: Session) -> List[AvailabilityRule]:
        return db.query(AvailabilityRule).order_by(
            AvailabilityRule.day_of_week.asc(),
            AvailabilityRule.start_time.asc()
        ).all()

    @staticmethod
    def get_rule(db: Session, rule_id: UUID) -> AvailabilityRule:
        rule = db.query(AvailabilityRule).filter(AvailabilityRule.id == rule_id).first()
        if not rule:
            raise NotFoundError("Availability rule not found.")
        return rule

    @staticmethod
    def create_rule(db: Session, data: AvailabilityRuleCreate) -> AvailabilityRule:
        _validate_rule_fields(data.day_of_week, data.start_time, data.end_time, data.slot_duration_minutes)

        rule = AvailabilityRule(
            day_of_week=data.day_of_week,
            start_time=data.start_time,
            end_time=data.end_time,
            slot_duration_minutes=data.slot_duration_minutes,
            is_active=data.is_active,
        )
        db.add(rule)
        db.commit()
        db.refresh(rule)

        logger.info(f"Availability rule created: {rule!r}")
        return rule

    @staticmethod
    def update_rule(db: Session, rule_id: UUID, changes: AvailabilityRuleUpdate) -> AvailabilityRule:
        """
        Apply only the fields present in the request, then re-validate the
        merged rule as a whole.
        """
        updates = changes.model_dump(exclude_unset=True)
        if not updates:
            raise ValidationError("No update fields provided.")

        for field, value in updates.items():
            if value is None:
                raise ValidationError(f"{field} cannot be null.")

        rule = AvailabilityRuleService.get_rule(db, rule_id)

        _validate_rule_fields(
            updates.get("day_of_week", rule.day_of_week),
            updates.get("start_time", rule.start_time),
            updates.get("end_time", rule.end_time),
            updates.get("slot_duration_minutes", rule.slot_duration_minutes),
        )

        for field, value in updates.items():
            setattr(rule, field, value)

        db.commit()
        db.refresh(rule)

        logger.info(f"Availability rule {rule_id} updated: {sorted(updates)}")
        return rule

    @staticmethod
    def delete_rule(db: Session, rule_id: UUID) -> None:
        rule = AvailabilityRuleService.get_rule(db, rule_id)
        db.delete(rule)
        db.commit()
        logger.info(f"Availability rule {rule_id} deleted")
