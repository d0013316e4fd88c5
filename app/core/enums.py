from enum import Enum


class EnrollmentStatus(str, Enum):
    OPEN = "OPEN"
    FULL = "FULL"

    @classmethod
    def for_counts(cls, enrolled: int, capacity: int) -> "EnrollmentStatus":
        return cls.OPEN if enrolled < capacity else cls.FULL


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"
