"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
Every class carries a machine-readable ``kind`` alongside its message.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""

    kind = "domain_error"

    @property
    def message(self) -> str:
        return str(self)


class ValidationError(DomainException):
    """A business rule or invariant was violated."""

    kind = "validation_error"


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = "not_found"


class PersistenceError(DomainException):
    """The backing store could not be read or written."""

    kind = "persistence_error"


class DuplicateNameError(ValidationError):
    kind = "duplicate_name"


class CategoryNotFound(EntityNotFoundError):
    kind = "category_not_found"

    def __init__(self, name: str) -> None:
        super().__init__(f"Category not found: '{name}'")
        self.name = name


# --- Withdrawal transaction ---------------------------------------------------


class InvalidQuantity(ValidationError):
    kind = "invalid_quantity"

    def __init__(self, quantity: int) -> None:
        super().__init__(f"Quantity must be greater than 0, got {quantity}")
        self.quantity = quantity


class InsufficientStock(ValidationError):
    """Requested total exceeds the stock on hand.

    ``available`` is the product's stock at the time of the check.
    """

    kind = "insufficient_stock"

    def __init__(self, product_name: str, requested: int, available: int) -> None:
        super().__init__(
            f"Insufficient stock for {product_name} "
            f"(requested {requested}, only {available} available)"
        )
        self.product_name = product_name
        self.requested = requested
        self.available = available


class EmptyCart(ValidationError):
    kind = "empty_cart"

    def __init__(self) -> None:
        super().__init__("The cart is empty")


class MissingWithdrawerName(ValidationError):
    kind = "missing_withdrawer_name"

    def __init__(self) -> None:
        super().__init__("The name of the person withdrawing is required")


class MissingWithdrawerSection(ValidationError):
    kind = "missing_withdrawer_section"

    def __init__(self) -> None:
        super().__init__("The section of the person withdrawing is required")


class NotAuthenticated(DomainException):
    kind = "not_authenticated"

    def __init__(self) -> None:
        super().__init__("You must be signed in to confirm a withdrawal")


class TransactionInProgress(DomainException):
    kind = "transaction_in_progress"

    def __init__(self) -> None:
        super().__init__("A withdrawal is already being submitted")


class SubmissionFailed(DomainException):
    """The create-withdrawal collaborator rejected or failed the request.

    Wraps the collaborator's error in ``cause``.  ``stock_changed`` is set
    when the store refused the withdrawal for lack of stock even though
    the cart passed local validation.
    """

    kind = "submission_failed"

    def __init__(self, cause: Exception) -> None:
        self.cause = cause
        self.stock_changed = isinstance(cause, InsufficientStock)
        if self.stock_changed:
            message = (
                "Stock changed after the items were added to the cart: "
                f"{cause}"
            )
        else:
            message = f"Could not confirm the withdrawal: {cause}"
        super().__init__(message)
