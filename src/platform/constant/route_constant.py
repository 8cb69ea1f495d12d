# API Route Constants

# Base API
API_BASE = '/api'

# User routes
USER_BASE = f'{API_BASE}/user'
USER_CREATE = USER_BASE
USER_CREATE_ADMIN = f'{USER_BASE}/admin'
USER_LOGIN = f'{USER_BASE}/login'
USER_LIST = USER_BASE
USER_ME = f'{USER_BASE}/me'

# Venue routes
VENUE_BASE = f'{API_BASE}/venue'
VENUE_CREATE = VENUE_BASE
VENUE_LIST = VENUE_BASE
VENUE_GET = f'{VENUE_BASE}/{{venue_id}}'
VENUE_UPDATE = f'{VENUE_BASE}/{{venue_id}}'
VENUE_DELETE = f'{VENUE_BASE}/{{venue_id}}'

# Category routes
CATEGORY_BASE = f'{API_BASE}/category'
CATEGORY_CREATE = CATEGORY_BASE
CATEGORY_LIST = CATEGORY_BASE
CATEGORY_GET = f'{CATEGORY_BASE}/{{category_id}}'
CATEGORY_UPDATE = f'{CATEGORY_BASE}/{{category_id}}'
CATEGORY_DELETE = f'{CATEGORY_BASE}/{{category_id}}'

# Event routes
EVENT_BASE = f'{API_BASE}/event'
EVENT_CREATE = EVENT_BASE
EVENT_LIST = EVENT_BASE
EVENT_FEATURED = f'{EVENT_BASE}/featured'
EVENT_GET = f'{EVENT_BASE}/{{event_id}}'
EVENT_UPDATE = f'{EVENT_BASE}/{{event_id}}'
EVENT_DELETE = f'{EVENT_BASE}/{{event_id}}'
EVENT_UPDATE_STATUS = f'{EVENT_BASE}/{{event_id}}/status'

# Booking routes
BOOKING_BASE = f'{API_BASE}/booking'
BOOKING_CREATE = BOOKING_BASE
BOOKING_LIST = BOOKING_BASE
BOOKING_MY_BOOKINGS = f'{BOOKING_BASE}/my'
BOOKING_GET = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_GET_BY_REFERENCE = f'{BOOKING_BASE}/reference/{{reference}}'
BOOKING_UPDATE = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_DELETE = f'{BOOKING_BASE}/{{booking_id}}'
BOOKING_BY_EVENT = f'{BOOKING_BASE}/event/{{event_id}}'
