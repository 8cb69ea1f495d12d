"""
Booking reference value object

References look like `BR-1A2B3C4D`: a fixed prefix plus 32 random bits in
upper-case hex. Nothing here guarantees uniqueness, the booking table's unique
constraint does.
"""

import re
import secrets

BOOKING_REFERENCE_PREFIX = 'BR-'
BOOKING_REFERENCE_PATTERN = re.compile(r'^BR-[0-9A-F]{8}$')


def generate_booking_reference() -> str:
    return f'{BOOKING_REFERENCE_PREFIX}{secrets.token_hex(4).upper()}'


def normalize_booking_reference(reference: str) -> str:
    """Lookups are case-insensitive."""
    return reference.strip().upper()
