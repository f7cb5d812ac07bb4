# API Route Constants

# Base API
API_BASE = '/api'

# Slot routes
SLOT_BASE = f'{API_BASE}/slots'
SLOT_STATE = f'{SLOT_BASE}/state'

# Booking routes
BOOKING_BASE = f'{API_BASE}/bookings'
BOOKING_CREATE = f'{BOOKING_BASE}/create'

# Review routes
REVIEW_BASE = f'{API_BASE}/reviews'
REVIEW_LIST = REVIEW_BASE
REVIEW_SUMMARY = f'{REVIEW_BASE}/summary'
REVIEW_CREATE = f'{REVIEW_BASE}/create'
REVIEW_VERIFY = f'{REVIEW_BASE}/verify'
REVIEW_PUBLISH = f'{REVIEW_BASE}/publish'

# Admin routes
ADMIN_BASE = f'{API_BASE}/admin'
ADMIN_BOOKING_APPROVE = f'{ADMIN_BASE}/bookings/approve'
ADMIN_BOOKING_REJECT = f'{ADMIN_BASE}/bookings/reject'
ADMIN_RESET_SLOTS = f'{ADMIN_BASE}/reset-slots'
ADMIN_DASHBOARD = f'{ADMIN_BASE}/dashboard'
