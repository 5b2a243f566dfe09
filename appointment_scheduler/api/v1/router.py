"""
API v1 router setup
Organized into: public, customer (JWT) and admin (JWT + admin role) routes
"""
from fastapi import APIRouter

from appointment_scheduler.api.v1.public import auth
from appointment_scheduler.api.v1.customer import appointments
from appointment_scheduler.api.v1.admin import (
    appointments as admin_appointments,
    availability_rules,
    block_out_times,
)

api_v1_router = APIRouter()

# ============================================================================
# PUBLIC ROUTES (No authentication required)
# ============================================================================
api_v1_router.include_router(
    auth.router,
    # No prefix needed - auth.router already has "/auth" prefix
    tags=["Authentication"]
)

# ============================================================================
# CUSTOMER ROUTES (JWT authentication required, except /appointments/available)
# ============================================================================
api_v1_router.include_router(
    appointments.router,
    tags=["Appointments"]
)

# ============================================================================
# ADMIN ROUTES (JWT authentication + admin role required)
# ============================================================================
api_v1_router.include_router(admin_appointments.router, tags=["Admin"])
api_v1_router.include_router(availability_rules.router, tags=["Admin"])
api_v1_router.include_router(block_out_times.router, tags=["Admin"])


# ============================================================================
# ROOT ENDPOINT - API Info
# ============================================================================
@api_v1_router.get("/", tags=["Info"])
async def api_info():
    """
    API information and available endpoints.
    """
    return {
        "version": "1.0",
        "authentication": {
            "public": "No authentication required (/auth, /appointments/available)",
            "customer": "JWT Bearer token required",
            "admin": "JWT Bearer token + admin role required"
        }
    }
