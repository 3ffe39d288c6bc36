"""String enums shared by lending domain records"""

from enum import Enum


class StringEnum(str, Enum):
    """Enum whose members compare and serialize as their string value"""


class EmploymentStatus(StringEnum):
    EMPLOYED = "employed"
    SELF_EMPLOYED = "self-employed"
    UNEMPLOYED = "unemployed"
    STUDENT = "student"
    RETIRED = "retired"


class RepaymentFrequency(StringEnum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class LoanStatus(StringEnum):
    ACTIVE = "active"
    COMPLETED = "completed"
    DEFAULTED = "defaulted"
    CANCELLED = "cancelled"


class RepaymentStatus(StringEnum):
    PENDING = "pending"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class RiskRating(StringEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
