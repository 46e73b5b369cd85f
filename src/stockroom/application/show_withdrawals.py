"""Application services: List / Show Withdrawals use cases (queries)."""

from __future__ import annotations

from datetime import date

from stockroom.application.dto import WithdrawalDTO
from stockroom.domain.exceptions import EntityNotFoundError, ValidationError
from stockroom.domain.repository.withdrawal_repository import WithdrawalRepository
from stockroom.domain.service.reporting import recent_withdrawals, withdrawals_between


class ListWithdrawalsHandler:

    def __init__(self, withdrawal_repo: WithdrawalRepository) -> None:
        self._withdrawal_repo = withdrawal_repo

    def handle(
        self,
        start: date | None = None,
        end: date | None = None,
        limit: int | None = None,
    ) -> list[WithdrawalDTO]:
        """Withdrawals between two dates (both inclusive), newest first.

        ``limit`` keeps only that many of the most recent ones.
        """
        if start is not None and end is not None and start > end:
            raise ValidationError("Start date must not be after end date")
        if limit is not None and limit < 0:
            raise ValidationError("Limit cannot be negative")

        withdrawals = withdrawals_between(self._withdrawal_repo.list_all(), start, end)
        if limit is not None:
            withdrawals = recent_withdrawals(withdrawals, limit)
        return [WithdrawalDTO.from_domain(w) for w in withdrawals]


class ShowWithdrawalHandler:

    def __init__(self, withdrawal_repo: WithdrawalRepository) -> None:
        self._withdrawal_repo = withdrawal_repo

    def handle(self, withdrawal_id: int) -> WithdrawalDTO:
        withdrawal = self._withdrawal_repo.get_by_id(withdrawal_id)
        if withdrawal is None:
            raise EntityNotFoundError(f"Withdrawal #{withdrawal_id} not found")
        return WithdrawalDTO.from_domain(withdrawal)
