"""Abstract repository for Withdrawal aggregate.

``create`` is the "create withdrawal" collaborator: it is trusted to
check stock at write time and to store the withdrawal and decrement
stock as one atomic step.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from stockroom.domain.model.withdrawal import Withdrawal


class WithdrawalRepository(ABC):

    @abstractmethod
    def create(self, withdrawal: Withdrawal) -> Withdrawal:
        """Persist a new withdrawal and deduct its quantities from stock.

        Returns the stored withdrawal with its ID and timestamp assigned.
        Raises a DomainException (e.g. InsufficientStock) if the store
        refuses it, in which case nothing is changed.
        """

    @abstractmethod
    def get_by_id(self, withdrawal_id: int) -> Withdrawal | None:
        """Return a withdrawal by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Withdrawal]:
        """Return every withdrawal, newest first."""
