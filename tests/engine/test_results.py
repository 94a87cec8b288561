"""
Tests for the execution result structure.
"""

from decimal import Decimal

from sqlhub.engine.cells import Cell, to_cell
from sqlhub.engine.results import ExecuteResult


class TestExecuteResult:
    def test_defaults(self):
        result = ExecuteResult(sql="UPDATE t SET x = 1", update_count=4)

        assert result.success is True
        assert result.header == ()
        assert result.rows == ()
        assert result.row_count == 0
        assert result.has_next_page is False

    def test_to_dict(self):
        result = ExecuteResult(
            sql="SELECT id, price FROM t",
            header=(Cell.string("id"), Cell.string("price")),
            rows=((to_cell(1), to_cell(Decimal("9.99"))),),
            has_next_page=True,
        )

        assert result.to_dict() == {
            "sql": "SELECT id, price FROM t",
            "success": True,
            "description": None,
            "header": ["id", "price"],
            "rows": [[{"type": "number", "value": 1}, {"type": "number", "value": "9.99"}]],
            "update_count": None,
            "has_next_page": True,
        }
