"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidLoanTermsError(DomainException):
    """Loan principal, rate or term cannot produce a valid loan"""

    pass


class InvalidPaymentError(DomainException):
    """Payment amount cannot be applied to a loan"""

    pass


class InvalidStatusTransitionError(DomainException):
    """Installment is not in a state that allows the requested change"""

    pass
