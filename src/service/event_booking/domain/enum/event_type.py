from enum import StrEnum


class EventType(StrEnum):
    ONLINE = 'online'
    IN_PERSON = 'in-person'
    HYBRID = 'hybrid'
