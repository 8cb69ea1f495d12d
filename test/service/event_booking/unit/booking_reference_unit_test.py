import re

import pytest

from src.service.event_booking.domain.value_object.booking_reference import (
    BOOKING_REFERENCE_PATTERN,
    generate_booking_reference,
    normalize_booking_reference,
)
from test.util_constant import BOOKING_REFERENCE_REGEX


@pytest.mark.unit
class TestBookingReference:
    def test_generated_reference_matches_format(self) -> None:
        for _ in range(200):
            reference = generate_booking_reference()
            assert re.match(BOOKING_REFERENCE_REGEX, reference)
            assert BOOKING_REFERENCE_PATTERN.match(reference)

    def test_references_are_random(self) -> None:
        references = {generate_booking_reference() for _ in range(200)}

        assert len(references) > 190

    def test_normalize_makes_lookup_case_insensitive(self) -> None:
        assert normalize_booking_reference(' br-1a2b3c4d ') == 'BR-1A2B3C4D'
