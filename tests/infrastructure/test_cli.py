"""Drive the click commands against an in-memory database."""

import pytest
from click.testing import CliRunner

from laundry.infrastructure import bootstrap
from laundry.infrastructure.cli.main import cli
from laundry.infrastructure.config import Settings


@pytest.fixture
def run():
    bootstrap.configure(Settings(database_url="sqlite://"))
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(cli, list(args))

    assert invoke("db", "init").exit_code == 0
    yield invoke
    bootstrap.configure(Settings(database_url="sqlite://"))


@pytest.fixture
def shop(run):
    run("material", "add", "--name", "Deterjen", "--sku", "DET-01", "--unit", "ml",
        "--stock", "5000", "--alert", "1000")
    run("service", "add", "--code", "ck", "--name", "Cuci Kering", "--price", "7000",
        "--express")
    run("service", "recipe", "--service", "CK", "--material", "DET-01", "--qty", "100")
    return run


class TestCatalogCommands:

    def test_service_list(self, shop):
        result = shop("service", "list")
        assert result.exit_code == 0
        assert "CK" in result.output
        assert "Rp 7,000.00" in result.output
        assert "x1.50" in result.output

    def test_recipe_for_unknown_service(self, shop):
        result = shop("service", "recipe", "--service", "XX", "--material", "DET-01",
                      "--qty", "1")
        assert result.exit_code == 1
        assert "Service not found" in result.output


class TestOrderCommands:

    def test_walk_in_and_cancel(self, shop):
        result = shop("order", "walk-in", "--name", "Sari", "--phone", "08123",
                      "--items", "1:5", "--actor", "3")
        assert result.exit_code == 0, result.output
        assert "Rp 35,000.00" in result.output
        assert "PENDING" in result.output

        assert "4500" in shop("material", "list").output

        result = shop("order", "status", "--id", "1", "--to", "cancelled")
        assert result.exit_code == 0
        assert "is now CANCELLED" in result.output

        history = shop("material", "history", "--id", "1").output
        assert "OUT" in history and "IN" in history

    def test_invalid_transition_reported(self, shop):
        shop("order", "walk-in", "--name", "Sari", "--phone", "08123", "--items", "1:1")
        result = shop("order", "status", "--id", "1", "--to", "TAKEN")
        assert result.exit_code == 1
        assert "Allowed: WASHING, CANCELLED" in result.output

    def test_insufficient_stock_reported(self, shop):
        result = shop("order", "walk-in", "--name", "Sari", "--phone", "08123",
                      "--items", "1:60")
        assert result.exit_code == 1
        assert "Insufficient stock" in result.output
        assert "No orders found." in shop("order", "list").output

    def test_bad_items_rejected(self, shop):
        result = shop("order", "walk-in", "--name", "Sari", "--phone", "08123",
                      "--items", "1-5")
        assert result.exit_code == 2

    def test_booking_then_confirm(self, shop):
        result = shop("order", "book", "--name", "Sari", "--phone", "08123",
                      "--service", "1", "--qty", "2", "--express")
        assert result.exit_code == 0
        assert "estimate Rp 21,000.00" in result.output

        result = shop("order", "confirm", "--id", "1", "--items", "1:3",
                      "--payment", "paid", "--method", "cash")
        assert result.exit_code == 0, result.output
        assert "Rp 21,000.00" in result.output
        assert "payment=PAID via CASH" in result.output


class TestCustomerCommands:

    def test_show_and_reconcile(self, shop):
        shop("order", "walk-in", "--name", "Sari", "--phone", "08123", "--items", "1:5")
        for status in ("WASHING", "COMPLETED", "TAKEN"):
            shop("order", "status", "--id", "1", "--to", status)

        result = shop("customer", "show", "--phone", "08123")
        assert "Points:      3" in result.output
        assert "Orders:      1" in result.output

        result = shop("customer", "reconcile")
        assert "All customer counters match" in result.output
