from enum import StrEnum


class EventStatus(StrEnum):
    DRAFT = 'draft'
    PUBLISHED = 'published'
    CANCELLED = 'cancelled'
    COMPLETED = 'completed'  # end time passed, set by the lifecycle sweep
