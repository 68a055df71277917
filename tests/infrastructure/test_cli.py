"""End-to-end tests for the click command line."""

import pytest
from click.testing import CliRunner

from stockflow.infrastructure import bootstrap
from stockflow.infrastructure.cli import main
from stockflow.infrastructure.cli.errors import NOT_FOUND_EXIT_CODE


@pytest.fixture
def run(tmp_path, monkeypatch):
    monkeypatch.setenv("STOCKFLOW_DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setenv("STOCKFLOW_BINDING", "sql")
    # log output is covered separately; keep the runner's streams plain
    monkeypatch.setattr(main, "configure_logging", lambda *args, **kwargs: None)
    runner = CliRunner()

    def invoke(*args):
        return runner.invoke(main.cli, list(args))

    yield invoke
    bootstrap.dispose_engines()


def _seed(run):
    assert run("user", "register", "--username", "alice", "--email", "alice@example.com").exit_code == 0
    assert run("product", "add", "--name", "Widget", "--price", "100.0", "--stock", "50").exit_code == 0


class TestCatalogCommands:

    def test_db_init(self, run):
        result = run("db", "init")
        assert result.exit_code == 0
        assert "Database ready" in result.output

    def test_register_and_list_users(self, run):
        _seed(run)
        result = run("user", "list")
        assert result.exit_code == 0
        assert "alice@example.com" in result.output

    def test_invalid_email(self, run):
        result = run("user", "register", "--username", "bob", "--email", "bob")
        assert result.exit_code == 1
        assert "Invalid email format." in result.output

    def test_add_and_show_product(self, run):
        _seed(run)
        result = run("product", "show", "--id", "1")
        assert result.exit_code == 0
        assert "Price: 100.00" in result.output
        assert "Stock: 50" in result.output

    def test_unknown_product(self, run):
        result = run("product", "show", "--id", "9")
        assert result.exit_code == NOT_FOUND_EXIT_CODE
        assert "Product not found with id 9" in result.output

    def test_empty_listings(self, run):
        assert "No products found." in run("product", "list").output
        assert "No users found." in run("user", "list").output
        assert "No orders found." in run("order", "list").output


class TestOrderCommands:

    def test_create_update_cancel(self, run):
        _seed(run)

        result = run("order", "create", "--user", "1", "--product", "1", "--quantity", "5")
        assert result.exit_code == 0
        assert "Order #1 created" in result.output
        assert "Stock left for 'Widget': 45" in result.output

        result = run("order", "update", "--id", "1", "--quantity", "10")
        assert result.exit_code == 0
        assert "1000.00" in result.output

        assert run("order", "total", "--id", "1").output.strip() == "1000.00"

        result = run("order", "cancel", "--id", "1")
        assert result.exit_code == 0
        assert "10 unit(s) returned to stock" in result.output
        assert "Stock: 50" in run("product", "show", "--id", "1").output

    def test_cancel_twice(self, run):
        _seed(run)
        run("order", "create", "--user", "1", "--product", "1", "--quantity", "5")
        run("order", "cancel", "--id", "1")

        result = run("order", "cancel", "--id", "1")
        assert result.exit_code == 1
        assert "Only pending orders can be canceled." in result.output

    def test_insufficient_stock(self, run):
        _seed(run)
        result = run("order", "create", "--user", "1", "--product", "1", "--quantity", "60")
        assert result.exit_code == 1
        assert "Insufficient stock for product id 1" in result.output

    def test_unknown_order(self, run):
        result = run("order", "show", "--id", "5")
        assert result.exit_code == NOT_FOUND_EXIT_CODE
        assert "Order not found with id 5" in result.output

    def test_list_by_user_and_date(self, run):
        _seed(run)
        run("order", "create", "--user", "1", "--product", "1", "--quantity", "2")

        by_user = run("order", "list", "--user", "1")
        assert by_user.exit_code == 0
        assert "Widget" in by_user.output

        by_date = run("order", "list", "--from", "2000-01-01", "--to", "2000-12-31")
        assert by_date.exit_code == 0
        assert "No orders found." in by_date.output

    @pytest.mark.parametrize(
        "start, end",
        [
            ("2000-01-01T10:00", "2999-12-31T23:59"),
            ("2000-01-01T10:00:00.5", "2999-12-31T23:59:59.999999"),
            ("2000-01-01 10:00:00", "2999-12-31 23:59:59"),
        ],
    )
    def test_list_accepts_iso_date_times(self, run, start, end):
        _seed(run)
        run("order", "create", "--user", "1", "--product", "1", "--quantity", "2")

        result = run("order", "list", "--from", start, "--to", end)

        assert result.exit_code == 0, result.output
        assert "Widget" in result.output

    def test_list_rejects_half_open_range(self, run):
        result = run("order", "list", "--from", "2024-01-01")
        assert result.exit_code == 2
        assert "--from and --to must be given together" in result.output

    def test_list_unknown_user(self, run):
        result = run("order", "list", "--user", "4")
        assert result.exit_code == NOT_FOUND_EXIT_CODE


class TestConfiguration:

    def test_invalid_binding(self, run, monkeypatch):
        monkeypatch.setenv("STOCKFLOW_BINDING", "csv")
        result = run("user", "list")
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
