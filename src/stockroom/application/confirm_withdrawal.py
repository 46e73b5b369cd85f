"""Application service: Confirm Withdrawal use case.

Turns the session's cart plus the withdrawer's details into a persisted
Withdrawal.  All local checks run before the repository is touched; the
repository call is the single point where the withdrawal can still be
refused.  Stock is never decremented here: after a commit the product
list is reloaded so it reflects what the store deducted.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum

from stockroom.application.dto import WithdrawalDTO
from stockroom.application.session import WithdrawalSession
from stockroom.domain.exceptions import (
    DomainException,
    EmptyCart,
    MissingWithdrawerName,
    MissingWithdrawerSection,
    NotAuthenticated,
    SubmissionFailed,
    TransactionInProgress,
)
from stockroom.domain.model.value_objects import Quantity, UserIdentity
from stockroom.domain.model.withdrawal import Withdrawal, WithdrawalItem
from stockroom.domain.repository.withdrawal_repository import WithdrawalRepository

LOGGER = logging.getLogger(__name__)


class WithdrawalState(Enum):
    IDLE = "IDLE"
    VALIDATING = "VALIDATING"
    SUBMITTING = "SUBMITTING"
    COMMITTED = "COMMITTED"
    FAILED = "FAILED"


class ConfirmWithdrawalHandler:

    def __init__(
        self,
        session: WithdrawalSession,
        withdrawal_repo: WithdrawalRepository,
    ) -> None:
        self._session = session
        self._withdrawal_repo = withdrawal_repo
        self._in_flight = threading.Lock()
        self.state = WithdrawalState.IDLE
        self.products_stale = False
        self.last_error: SubmissionFailed | None = None

    def handle(
        self,
        withdrawer_name: str,
        withdrawer_section: str,
        notes: str | None = None,
        current_user: UserIdentity | None = None,
    ) -> WithdrawalDTO:
        """Confirm the cart as a withdrawal.

        Steps:
        1. Reject if another confirmation is still running.
        2. Check user, cart and withdrawer fields, in that order.
        3. Submit the whole withdrawal in one repository call.
        4. On success: record it, clear the cart, reload products.
           On failure: leave everything as it was, return to IDLE and raise
           SubmissionFailed (also kept in ``last_error``).
        """
        if not self._in_flight.acquire(blocking=False):
            raise TransactionInProgress()

        try:
            self.state = WithdrawalState.VALIDATING
            try:
                withdrawal = self._build(
                    withdrawer_name, withdrawer_section, notes, current_user
                )
            except DomainException:
                self.state = WithdrawalState.IDLE
                raise

            self.state = WithdrawalState.SUBMITTING
            try:
                stored = self._withdrawal_repo.create(withdrawal)
            except DomainException as exc:
                self.state = WithdrawalState.FAILED
                LOGGER.warning("Withdrawal submission refused: %s", exc)
                self.last_error = SubmissionFailed(exc)
                # Failed returns to Idle with the cart as it was
                self.state = WithdrawalState.IDLE
                raise self.last_error from exc

            self.state = WithdrawalState.COMMITTED
            self.last_error = None
            LOGGER.info(
                "Withdrawal #%s committed: %d items for %s (%s)",
                stored.id,
                stored.total_items,
                stored.withdrawer_name,
                stored.withdrawer_section,
            )
            self._session.record_withdrawal(stored)
            self._session.cart.clear()
            self._refresh_products()
            return WithdrawalDTO.from_domain(stored)
        finally:
            self._in_flight.release()

    @property
    def in_progress(self) -> bool:
        return self._in_flight.locked()

    # --- Internal helpers -----------------------------------------------------

    def _build(
        self,
        withdrawer_name: str,
        withdrawer_section: str,
        notes: str | None,
        current_user: UserIdentity | None,
    ) -> Withdrawal:
        if current_user is None:
            raise NotAuthenticated()
        cart = self._session.cart
        if cart.is_empty():
            raise EmptyCart()
        if not withdrawer_name or not withdrawer_name.strip():
            raise MissingWithdrawerName()
        if not withdrawer_section or not withdrawer_section.strip():
            raise MissingWithdrawerSection()

        # The cart's product snapshots are sent as-is, not re-read.
        items = [
            WithdrawalItem(
                product_id=item.product_id,
                quantity=Quantity(item.quantity),
                product=item.product,
            )
            for item in cart
        ]
        return Withdrawal.create(
            registered_by=current_user,
            withdrawer_name=withdrawer_name,
            withdrawer_section=withdrawer_section,
            items=items,
            notes=notes,
        )

    def _refresh_products(self) -> None:
        # The withdrawal is already committed; a failed reload only leaves
        # the local product list out of date.
        try:
            self._session.reload_products()
        except DomainException as exc:
            self.products_stale = True
            LOGGER.warning("Could not reload products after withdrawal: %s", exc)
        else:
            self.products_stale = False
