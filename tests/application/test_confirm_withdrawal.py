"""Integration tests for the ConfirmWithdrawal use case."""

import pytest

from stockroom.application.confirm_withdrawal import (
    ConfirmWithdrawalHandler,
    WithdrawalState,
)
from stockroom.application.session import WithdrawalSession
from stockroom.domain.exceptions import (
    EmptyCart,
    InsufficientStock,
    MissingWithdrawerName,
    MissingWithdrawerSection,
    NotAuthenticated,
    PersistenceError,
    SubmissionFailed,
    TransactionInProgress,
)
from tests.fakes import (
    ALICE,
    FakeProductRepository,
    FakeWithdrawalRepository,
    make_product,
)


def _setup(*, load: bool = True):
    product_repo = FakeProductRepository([
        make_product(1, "Paper", stock=10, min_stock=2),
        make_product(2, "Toner", stock=5, min_stock=1),
    ])
    withdrawal_repo = FakeWithdrawalRepository(product_repo)
    session = WithdrawalSession(product_repo, withdrawal_repo)
    if load:
        session.load()
    handler = ConfirmWithdrawalHandler(session, withdrawal_repo)
    return product_repo, withdrawal_repo, session, handler


def _confirm(handler, **overrides):
    kwargs = dict(
        withdrawer_name="Bob",
        withdrawer_section="Ayudantía",
        current_user=ALICE,
    )
    kwargs.update(overrides)
    return handler.handle(**kwargs)


class TestConfirmWithdrawalHappyPath:

    def test_commit_records_withdrawal_and_deducts_stock(self):
        product_repo, withdrawal_repo, session, handler = _setup()
        session.add_to_cart(1, 3)
        session.add_to_cart(2, 4)

        dto = _confirm(handler, notes="monthly supplies")

        assert dto.id == 1
        assert dto.total_items == 7
        assert dto.registered_by == "Alice"
        assert dto.notes == "monthly supplies"
        assert [(i.product_name, i.quantity) for i in dto.items] == [("Paper", 3), ("Toner", 4)]
        assert product_repo.stock_of(1) == 7
        assert product_repo.stock_of(2) == 1
        assert handler.state is WithdrawalState.COMMITTED

    def test_commit_clears_cart_and_prepends_history(self):
        _, withdrawal_repo, session, handler = _setup()
        session.add_to_cart(1, 2)
        _confirm(handler)
        session.add_to_cart(1, 1)

        dto = _confirm(handler, withdrawer_name="Carol")

        assert session.cart.is_empty()
        assert [w.id for w in session.withdrawals] == [dto.id, 1]
        assert session.withdrawals[0].withdrawer_name == "Carol"
        assert session.withdrawals[0].total_items == 1

    def test_products_reloaded_after_commit(self):
        product_repo, _, session, handler = _setup()
        calls_before = product_repo.list_calls
        session.add_to_cart(1, 4)

        _confirm(handler)

        assert product_repo.list_calls == calls_before + 1
        assert session.get_product(1).stock == 6
        assert handler.products_stale is False

    def test_cart_snapshot_is_sent_not_live_product(self):
        product_repo, withdrawal_repo, session, handler = _setup()
        session.add_to_cart(1, 2)
        renamed = product_repo.get_by_id(1)
        renamed.name = "Printer paper"
        product_repo.save(renamed)

        _confirm(handler)

        assert withdrawal_repo.created[0].items[0].product.name == "Paper"


class TestConfirmWithdrawalValidation:

    def test_not_signed_in(self):
        _, withdrawal_repo, session, handler = _setup()
        session.add_to_cart(1, 1)

        with pytest.raises(NotAuthenticated):
            _confirm(handler, current_user=None)
        assert withdrawal_repo.created == []

    def test_empty_cart(self):
        _, withdrawal_repo, _, handler = _setup()

        with pytest.raises(EmptyCart):
            _confirm(handler)
        assert withdrawal_repo.created == []

    def test_user_checked_before_cart(self):
        _, _, _, handler = _setup()

        with pytest.raises(NotAuthenticated):
            _confirm(handler, current_user=None)

    @pytest.mark.parametrize("name", ["", "   ", "\t"])
    def test_blank_withdrawer_name(self, name):
        _, withdrawal_repo, session, handler = _setup()
        session.add_to_cart(1, 1)

        with pytest.raises(MissingWithdrawerName):
            _confirm(handler, withdrawer_name=name)
        assert withdrawal_repo.created == []

    def test_blank_withdrawer_section(self):
        _, withdrawal_repo, session, handler = _setup()
        session.add_to_cart(1, 1)

        with pytest.raises(MissingWithdrawerSection):
            _confirm(handler, withdrawer_section="  ")
        assert withdrawal_repo.created == []

    def test_validation_failure_returns_to_idle_and_keeps_cart(self):
        _, _, session, handler = _setup()
        session.add_to_cart(1, 2)
        before = session.cart.snapshot()

        with pytest.raises(MissingWithdrawerName):
            _confirm(handler, withdrawer_name="")

        assert handler.state is WithdrawalState.IDLE
        assert session.cart.snapshot() == before
        assert handler.in_progress is False


class TestConfirmWithdrawalSubmissionFailure:

    def test_stock_changed_behind_the_cart(self):
        product_repo, withdrawal_repo, session, handler = _setup()
        session.add_to_cart(1, 8)
        # Someone else takes stock after the item was added.
        paper = product_repo.get_by_id(1)
        paper.stock = 3
        product_repo.save(paper)
        cart_before = session.cart.snapshot()
        history_before = session.withdrawals
        products_before = session.products

        with pytest.raises(SubmissionFailed) as excinfo:
            _confirm(handler)

        assert excinfo.value.stock_changed is True
        assert isinstance(excinfo.value.cause, InsufficientStock)
        assert "Stock changed" in str(excinfo.value)
        assert session.cart.snapshot() == cart_before
        assert session.withdrawals == history_before
        assert session.products == products_before
        assert product_repo.stock_of(1) == 3
        assert handler.state is WithdrawalState.IDLE
        assert handler.last_error is excinfo.value
        assert handler.in_progress is False

    def test_store_error_is_wrapped(self):
        product_repo, withdrawal_repo, session, handler = _setup()
        session.add_to_cart(2, 1)
        withdrawal_repo.fail_with = PersistenceError("disk full")
        cart_before = session.cart.snapshot()

        with pytest.raises(SubmissionFailed, match="disk full") as excinfo:
            _confirm(handler)

        assert excinfo.value.stock_changed is False
        assert session.cart.snapshot() == cart_before
        assert product_repo.stock_of(2) == 5

    def test_retry_after_failure_succeeds(self):
        _, withdrawal_repo, session, handler = _setup()
        session.add_to_cart(2, 1)
        withdrawal_repo.fail_with = PersistenceError("timeout")
        with pytest.raises(SubmissionFailed):
            _confirm(handler)

        assert handler.state is WithdrawalState.IDLE
        assert handler.last_error is not None

        withdrawal_repo.fail_with = None
        dto = _confirm(handler)

        assert dto.total_items == 1
        assert handler.state is WithdrawalState.COMMITTED
        assert handler.last_error is None
        assert len(withdrawal_repo.created) == 2


class TestConfirmWithdrawalConcurrency:

    def test_second_confirm_while_submitting_is_rejected(self):
        _, withdrawal_repo, session, handler = _setup()
        session.add_to_cart(1, 1)
        rejected = []

        def reenter():
            assert handler.in_progress is True
            assert handler.state is WithdrawalState.SUBMITTING
            try:
                _confirm(handler)
            except TransactionInProgress as exc:
                rejected.append(exc)

        withdrawal_repo.on_create = reenter
        _confirm(handler)

        assert len(rejected) == 1
        assert len(withdrawal_repo.created) == 1
        assert handler.in_progress is False


class TestProductReloadAfterCommit:

    def test_failed_reload_marks_products_stale(self):
        product_repo, withdrawal_repo, session, handler = _setup()
        session.add_to_cart(1, 2)
        product_repo.fail_on_list = PersistenceError("read failed")

        dto = _confirm(handler)

        assert dto.id == 1
        assert handler.state is WithdrawalState.COMMITTED
        assert handler.products_stale is True
        assert session.cart.is_empty()
        assert product_repo.stock_of(1) == 8

    def test_next_successful_reload_clears_stale_flag(self):
        product_repo, _, session, handler = _setup()
        session.add_to_cart(1, 1)
        product_repo.fail_on_list = PersistenceError("read failed")
        _confirm(handler)

        product_repo.fail_on_list = None
        session.add_to_cart(2, 1)
        _confirm(handler)

        assert handler.products_stale is False
