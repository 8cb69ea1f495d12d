"""
Ticket Type Enum - fixed set of tier names an event may price.

An event lists the subset it sells (with a multiplier each); a booking must
name one of those.
"""

from enum import StrEnum


class TicketType(StrEnum):
    GENERAL = 'General'
    VIP = 'VIP'
    VIP_GOLD = 'VIP Gold'
    VIP_PLATINUM = 'VIP Platinum'
