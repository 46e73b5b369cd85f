"""End-to-end tests for the click CLI against a temporary data directory."""

import pytest
from click.testing import CliRunner

from stockroom.infrastructure.cli.main import cli

USER = ["--user-id", "1", "--user-name", "Alice", "--user-section", "Unidad de compras"]


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def invoke(*args, user=True):
        base = ["--data-dir", str(tmp_path)] + (USER if user else [])
        return runner.invoke(cli, base + list(args))

    return invoke


@pytest.fixture
def stocked(run):
    assert run("category", "add", "--name", "Office").exit_code == 0
    assert run(
        "product", "add", "--name", "Paper", "--category", "office",
        "--stock", "10", "--min-stock", "4",
    ).exit_code == 0
    assert run(
        "product", "add", "--name", "Toner", "--category", "Office",
        "--stock", "2", "--min-stock", "3",
    ).exit_code == 0
    return run


class TestCategoryCommands:

    def test_add_and_list(self, run):
        result = run("category", "add", "--name", "Office")
        assert result.exit_code == 0
        assert "Category #1 'Office' added" in result.output

        result = run("category", "list")
        assert "Office" in result.output

    def test_duplicate_is_reported(self, run):
        run("category", "add", "--name", "Office")
        result = run("category", "add", "--name", "office")
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_delete_in_use_refused(self, stocked):
        result = stocked("category", "delete", "--id", "1")
        assert result.exit_code == 1
        assert "still use it" in result.output


class TestProductCommands:

    def test_add_reports_stock(self, run):
        run("category", "add", "--name", "Office")
        result = run(
            "product", "add", "--name", "Paper", "--category", "Office",
            "--stock", "10", "--min-stock", "4",
        )
        assert result.exit_code == 0
        assert "Product #1 'Paper' (PROD-0001) added with 10 in stock" in result.output

    def test_unknown_category(self, run):
        result = run(
            "product", "add", "--name", "Paper", "--category", "Tools",
            "--stock", "1", "--min-stock", "0",
        )
        assert result.exit_code == 1
        assert "Category not found" in result.output

    def test_list_flags_low_stock(self, stocked):
        result = stocked("product", "list")
        toner_line = next(line for line in result.output.splitlines() if "Toner" in line)
        assert toner_line.endswith("LOW")

    def test_stock_adjustment(self, stocked):
        result = stocked("product", "stock", "--id", "2", "--delta", "5")
        assert "stock is now 7" in result.output

    def test_deactivate_hides_from_list(self, stocked):
        stocked("product", "deactivate", "--id", "2")
        assert "Toner" not in stocked("product", "list").output
        assert "Toner" in stocked("product", "list", "--inactive").output


class TestWithdrawalCommands:

    def test_create_deducts_stock(self, stocked):
        result = stocked(
            "withdrawal", "create", "--items", "Paper:3, Toner:2",
            "--withdrawer", "Bob", "--section", "Ayudantía",
        )
        assert result.exit_code == 0, result.output
        assert "Withdrawal #1" in result.output
        assert "Total items" in result.output

        listing = stocked("product", "list").output
        paper_line = next(line for line in listing.splitlines() if "Paper" in line)
        assert " 7 " in paper_line

    def test_create_requires_signed_in_user(self, stocked):
        result = stocked(
            "withdrawal", "create", "--items", "Paper:1",
            "--withdrawer", "Bob", "--section", "Ayudantía",
            user=False,
        )
        assert result.exit_code == 1
        assert "signed in" in result.output

    def test_over_stock_rejected_before_submission(self, stocked):
        result = stocked(
            "withdrawal", "create", "--items", "Toner:3",
            "--withdrawer", "Bob", "--section", "Ayudantía",
        )
        assert result.exit_code == 1
        assert "Insufficient stock for Toner" in result.output
        assert "No withdrawals found." in stocked("withdrawal", "list").output

    def test_bad_item_format(self, stocked):
        result = stocked(
            "withdrawal", "create", "--items", "Paper",
            "--withdrawer", "Bob", "--section", "Ayudantía",
        )
        assert result.exit_code == 2
        assert "ProductName:Quantity" in result.output

    def test_partial_user_identity_rejected(self, run):
        result = run("--user-id", "1", "category", "list", user=False)
        assert result.exit_code == 1
        assert "User identity" in result.output

    def test_show_and_list(self, stocked):
        stocked(
            "withdrawal", "create", "--items", "Paper:1",
            "--withdrawer", "Bob", "--section", "Ayudantía", "--notes", "desk",
        )
        assert "Notes: desk" in stocked("withdrawal", "show", "--id", "1").output
        assert "1 withdrawals, 1 items, 1 people" in stocked("withdrawal", "list").output

    def test_sections(self, run):
        result = run("withdrawal", "sections")
        assert result.exit_code == 0
        assert "Ayudantía" in result.output


class TestReportCommands:

    def test_low_stock(self, stocked):
        result = stocked("report", "low-stock")
        assert "Toner" in result.output
        assert "Paper" not in result.output

    def test_stats(self, stocked):
        stocked(
            "withdrawal", "create", "--items", "Paper:2",
            "--withdrawer", "Bob", "--section", "Ayudantía",
        )
        result = stocked("report", "stats", "--period", "week")
        assert result.exit_code == 0
        assert "Items withdrawn:    2" in result.output
        assert "Ayudantía" in result.output
