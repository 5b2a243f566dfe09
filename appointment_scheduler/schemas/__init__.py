# appointment_scheduler/schemas/__init__.py
from .availability import (
    AvailabilityRuleCreate,
    AvailabilityRuleUpdate,
    AvailabilityRuleResponse,
    BlockOutTimeCreate,
    BlockOutTimeUpdate,
    BlockOutTimeResponse
)

from .appointment import (
    BookAppointmentRequest,
    UpdateAppointmentStatusRequest,
    AppointmentActionResponse
)

from .auth import (
    RegisterRequest,
    LoginRequest,
    UserResponse,
    TokenResponse,
    MessageResponse
)

__all__ = [
    "AvailabilityRuleCreate",
    "AvailabilityRuleUpdate",
    "AvailabilityRuleResponse",
    "BlockOutTimeCreate",
    "BlockOutTimeUpdate",
    "BlockOutTimeResponse",
    "BookAppointmentRequest",
    "UpdateAppointmentStatusRequest",
    "AppointmentActionResponse",
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "TokenResponse",
    "MessageResponse",
]
