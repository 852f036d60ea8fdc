"""Tests for generator handlers"""

import json
from pathlib import Path

import pytest

from mcp_server.handlers import GeneratorHandler, result_to_json
from sqlgen.models import GenerationResult


@pytest.fixture
def handler() -> GeneratorHandler:
    return GeneratorHandler()


class TestResultSerialization:
    """Tests for the success/message response shape"""

    def test_success(self) -> None:
        payload = json.loads(result_to_json(GenerationResult.ok("views", "GO"), "views"))
        assert payload == {"success": True, "generatedSQL": "GO"}

    def test_empty_script_is_success(self) -> None:
        """Test that a schema with nothing to generate still succeeds"""
        payload = json.loads(result_to_json(GenerationResult.ok("views", ""), "views"))
        assert payload == {"success": True, "generatedSQL": ""}

    def test_validation_failure_keeps_message(self) -> None:
        result = GenerationResult.failed("procedures", "validation", "Connection string is required.")
        payload = json.loads(result_to_json(result, "procedures"))
        assert payload == {"success": False, "message": "Connection string is required."}

    def test_generation_failure_is_prefixed(self) -> None:
        result = GenerationResult.failed("views", "metadata", "Failed to read columns for table 'Orders'")
        payload = json.loads(result_to_json(result, "views"))
        assert payload["message"] == "Error generating views: Failed to read columns for table 'Orders'"


class TestGeneratorHandler:
    """Tests for handler methods against a real database"""

    def test_generate_procedures(self, handler: GeneratorHandler, shop_db: str) -> None:
        payload = json.loads(handler.generate_procedures(connection_string=shop_db))

        assert payload["success"] is True
        assert "CREATE PROCEDURE GetAllCustomers" in payload["generatedSQL"]
        assert "CREATE PROCEDURE GetOrdersByCustomerID" in payload["generatedSQL"]

    def test_generate_views_with_exclusions(self, handler: GeneratorHandler, chain_db: str) -> None:
        payload = json.loads(handler.generate_views(connection_string=chain_db, exclude_tables=["C"]))

        assert payload["success"] is True
        assert "A_B_View" in payload["generatedSQL"]
        assert "B_C_View" not in payload["generatedSQL"]

    @pytest.mark.parametrize("method", ["generate_procedures", "generate_views", "list_tables"])
    def test_missing_connection_string(self, handler: GeneratorHandler, method: str) -> None:
        payload = json.loads(getattr(handler, method)(connection_string=""))
        assert payload == {"success": False, "message": "Connection string is required."}

    def test_unreachable_database(self, handler: GeneratorHandler, tmp_path: Path) -> None:
        """Test that connection failures are reported, not raised"""
        missing = tmp_path / "missing" / "db.sqlite"
        payload = json.loads(handler.generate_views(connection_string=f"sqlite:///{missing}"))

        assert payload["success"] is False
        assert payload["message"].startswith("Error generating views: Could not connect")

    def test_malformed_connection_string(self, handler: GeneratorHandler) -> None:
        """Test that an unparsable URL gives the JSON failure shape"""
        payload = json.loads(handler.generate_views(connection_string="postgresql://u:p@host:notaport/db"))

        assert payload["success"] is False
        assert payload["message"].startswith("Error generating views: Invalid connection string")

    def test_list_tables(self, handler: GeneratorHandler, shop_db: str) -> None:
        payload = json.loads(handler.list_tables(connection_string=shop_db))

        assert payload["success"] is True
        assert payload["count"] == 2
        orders = next(table for table in payload["tables"] if table["name"] == "Orders")
        assert orders["primary_key"] == {"column": "OrderID", "is_auto_increment": True}
        assert [column["name"] for column in orders["columns"]] == ["OrderID", "CustomerID", "Amount"]

    def test_list_tables_unreachable(self, handler: GeneratorHandler, tmp_path: Path) -> None:
        missing = tmp_path / "missing" / "db.sqlite"
        payload = json.loads(handler.list_tables(connection_string=f"sqlite:///{missing}"))

        assert payload["success"] is False
        assert payload["message"].startswith("Error listing tables: Could not connect")
