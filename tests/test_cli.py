"""Tests for the CLI interface."""

import pytest
from typer.testing import CliRunner

from circulation import __version__
from circulation.cli import app


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


def desk_input(*lines: str) -> str:
    """Join desk answers into stdin text, always ending with quit."""
    return "\n".join([*lines, "q"]) + "\n"


class TestCLIBasics:
    """Tests for basic CLI functionality."""

    def test_help(self, runner: CliRunner):
        """Test that help command works."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "circulation desk" in result.stdout

    def test_version(self, runner: CliRunner):
        """Test version command."""
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.stdout


class TestCatalogCommand:
    """Tests for the catalog command."""

    def test_catalog_lists_seed_items(self, runner: CliRunner):
        """Test the seed catalog is shown."""
        result = runner.invoke(app, ["catalog"])
        assert result.exit_code == 0
        assert "BK001" in result.stdout
        assert "RB005" in result.stdout


class TestShellCommand:
    """Tests for the interactive desk."""

    def test_quit(self, runner: CliRunner):
        """Test the desk exits cleanly."""
        result = runner.invoke(app, ["shell"], input=desk_input())
        assert result.exit_code == 0
        assert "Goodbye." in result.stdout

    def test_end_of_input_exits(self, runner: CliRunner):
        """Test running out of input ends the session."""
        result = runner.invoke(app, ["shell"], input="")
        assert result.exit_code == 0
        assert "Goodbye." in result.stdout

    def test_register_and_checkout(self, runner: CliRunner):
        """Test registering a user and checking out an item."""
        result = runner.invoke(
            app,
            ["shell"],
            input=desk_input(
                "1", "Alice Smith", "1 Elm St", "555-0101",
                "2", "1000", "BK001",
            ),
        )
        assert result.exit_code == 0
        assert "Library card number: 1000" in result.stdout
        assert "User ID: 0001" in result.stdout
        assert "Item checked out successfully." in result.stdout
        assert "Item due date:" in result.stdout

    def test_duplicate_registration(self, runner: CliRunner):
        """Test registering the same person twice."""
        result = runner.invoke(
            app,
            ["shell"],
            input=desk_input(
                "1", "Alice Smith", "1 Elm St", "555-0101",
                "1", "alice smith", "1 elm st", "555-0101",
            ),
        )
        assert result.exit_code == 0
        assert "already exists" in result.stdout

    def test_request_blocks_checkout(self, runner: CliRunner):
        """Test the outstanding request message reaches the user."""
        result = runner.invoke(
            app,
            ["shell"],
            input=desk_input(
                "1", "Alice Smith", "1 Elm St", "555-0101",
                "1", "Bob Jones", "2 Oak Ave", "555-0102",
                "2", "1000", "BK001",
                "5", "1001", "BK001",
                "3", "1000", "BK001",
                "2", "1001", "BK001",
                "8", "1001",
            ),
        )
        assert result.exit_code == 0
        assert "Item requested successfully." in result.stdout
        assert "outstanding request" in result.stdout
        assert "Requested items: BK001" in result.stdout

    def test_renew_not_renewable(self, runner: CliRunner):
        """Test renewing an item whose policy forbids it."""
        result = runner.invoke(
            app,
            ["shell"],
            input=desk_input(
                "1", "Alice Smith", "1 Elm St", "555-0101",
                "2", "1000", "AV001",
                "4", "1000", "AV001",
            ),
        )
        assert result.exit_code == 0
        assert "Item cannot be renewed." in result.stdout

    def test_fines_unknown_user(self, runner: CliRunner):
        """Test fines for a card that does not exist."""
        result = runner.invoke(app, ["shell"], input=desk_input("6", "4242"))
        assert result.exit_code == 0
        assert "User not found." in result.stdout

    def test_fulfill_requests(self, runner: CliRunner):
        """Test clearing requests from the desk."""
        result = runner.invoke(
            app,
            ["shell"],
            input=desk_input(
                "1", "Alice Smith", "1 Elm St", "555-0101",
                "2", "1000", "BK003",
                "5", "1000", "BK003",
                "9", "BK003",
            ),
        )
        assert result.exit_code == 0
        assert "Cleared 1 request(s) for BK003" in result.stdout
