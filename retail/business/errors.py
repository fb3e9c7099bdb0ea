"""
Domain exceptions for retail business logic

These exceptions represent business rule violations and domain-specific errors.
They are raised by the business layer and translated to HTTP responses by the
presentation layer.
"""


class RetailDomainError(Exception):
    """Base exception for all retail domain errors"""
    pass


class DomainValidationError(RetailDomainError):
    """Raised when input fails one or more business rules.

    ``errors`` lists every failing rule so the caller can show all of them at once.
    """

    def __init__(self, errors, message=None):
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__(message or "; ".join(self.errors))


class InvoiceValidationError(DomainValidationError):
    """Raised when invoice line items or amounts are invalid"""
    pass


class PurchaseValidationError(DomainValidationError):
    """Raised when a purchase or inventory batch is invalid"""
    pass


class RecordNotFoundError(RetailDomainError):
    """Raised when a referenced record does not exist"""

    def __init__(self, entity_type, entity_id):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} {entity_id} not found")


class InvalidStatusTransitionError(RetailDomainError):
    """Raised when a status transition is not allowed"""
    pass


class PaymentError(RetailDomainError):
    """Raised when a payment cannot be recorded against an invoice"""
    pass
