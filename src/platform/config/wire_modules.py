"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.consultation.app.command import (
    create_booking_use_case,
    publish_review_use_case,
    reset_monthly_slots_use_case,
    submit_review_use_case,
    update_booking_status_use_case,
    verify_review_use_case,
)
from src.service.consultation.app.query import (
    get_admin_dashboard_use_case,
    get_slot_state_use_case,
    list_published_reviews_use_case,
)


WIRE_MODULES: list[ModuleType] = [
    create_booking_use_case,
    update_booking_status_use_case,
    reset_monthly_slots_use_case,
    submit_review_use_case,
    verify_review_use_case,
    publish_review_use_case,
    get_slot_state_use_case,
    list_published_reviews_use_case,
    get_admin_dashboard_use_case,
]
