"""Tests for rate, plan, schedule, export and import commands."""

import csv
import io
import json
from datetime import date
from decimal import Decimal

from fundplan.cli.main import cli


def _invoke(cli_runner, temp_db, *args, **kwargs):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)


def test_rate_show_default(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "rate", "show")

    assert result.exit_code == 0
    assert "1 USD = 32 THB" in result.output


def test_rate_set(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "rate", "set", "35.5")
    assert result.exit_code == 0
    assert "1 USD = 35.5 THB" in result.output

    result = _invoke(cli_runner, temp_db, "rate", "show")
    assert "1 USD = 35.5 THB" in result.output


def test_rate_set_invalid(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "rate", "set", "0")

    assert result.exit_code == 1
    assert "Error: Exchange rate must be positive" in result.output


def test_plan_empty(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "plan")

    assert result.exit_code == 0
    assert "No investments found." in result.output


def test_plan_shows_costs_and_overspent(cli_runner, temp_db, sample_accounts, investment_service, sample_investment):
    investment_service.create_investment(
        name="Emergency",
        percentage=Decimal("90"),
        account_priority=[sample_accounts["savings"].id],
        start_date=date(2024, 1, 1),
    )

    result = _invoke(cli_runner, temp_db, "plan")

    assert result.exit_code == 0
    assert "Total funds: 13,200.00 THB" in result.output
    assert "from Savings" in result.output
    assert "3,300.00 THB" in result.output
    emergency = next(line for line in result.output.splitlines() if line.startswith("Emergency"))
    assert emergency.endswith("OVERSPENT")
    assert "Remaining balances:" in result.output
    assert "100.00 USD" in result.output


def test_schedule_show_and_toggle(cli_runner, temp_db, sample_investment):
    result = _invoke(cli_runner, temp_db, "schedule", "show", "Index Fund")
    assert result.exit_code == 0
    assert "Schedule (0/3 completed)" in result.output
    assert "[ ] 2024-02-01" in result.output

    result = _invoke(cli_runner, temp_db, "schedule", "toggle", "Index Fund", "2024-02-01")
    assert result.exit_code == 0
    assert "Marked 2024-02-01 as completed" in result.output

    result = _invoke(cli_runner, temp_db, "schedule", "show", "Index Fund")
    assert "Schedule (1/3 completed)" in result.output
    assert "[x] 2024-02-01" in result.output

    result = _invoke(cli_runner, temp_db, "schedule", "toggle", "Index Fund", "2024-02-01")
    assert "Marked 2024-02-01 as not completed" in result.output


def test_schedule_unknown_investment(cli_runner, temp_db):
    result = _invoke(cli_runner, temp_db, "schedule", "show", "Missing")

    assert result.exit_code == 1
    assert "Investment 'Missing' not found" in result.output


def test_export_text(cli_runner, temp_db, sample_investment):
    result = _invoke(cli_runner, temp_db, "export")

    assert result.exit_code == 0
    assert "Investment Plan" in result.output
    assert "Index Fund" in result.output
    assert "[0/3]" in result.output


def test_export_csv_to_file(cli_runner, temp_db, sample_investment, tmp_path):
    output = tmp_path / "plan.csv"

    result = _invoke(cli_runner, temp_db, "export", "--format", "csv", "--output", str(output))

    assert result.exit_code == 0
    assert f"Exported plan to {output}" in result.output
    rows = list(csv.reader(io.StringIO(output.read_text(encoding="utf-8"))))
    assert rows[0] == ["exchange_rate", "32"]
    assert ["", "Index Fund", "25", "3300.00", "1100.00", "0", "3", "no"] in rows


def test_import_plan(cli_runner, temp_db, tmp_path):
    document = {
        "exchangeRate": 33,
        "accounts": [{"id": 1, "name": "Savings", "currency": "THB", "amount": 5000}],
        "groups": [{"id": 1, "name": "Core", "percentage": 60}],
        "investments": [
            {
                "id": 1,
                "name": "Index Fund",
                "percentage": 50,
                "accountPriority": [1],
                "groupId": 1,
                "dcaType": "monthly",
                "dcaStartDate": "2024-01-01",
                "dcaHistory": [{"date": "2024-01-01", "completed": True}],
            }
        ],
    }
    path = tmp_path / "plan.json"
    path.write_text(json.dumps(document), encoding="utf-8")

    result = _invoke(cli_runner, temp_db, "import", str(path))
    assert result.exit_code == 0
    assert "Investments: 1" in result.output

    result = _invoke(cli_runner, temp_db, "schedule", "show", "Index Fund")
    assert "[x] 2024-01-01" in result.output
    assert "[ ] 2024-02-01" in result.output


def test_import_invalid_json(cli_runner, temp_db, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[1, 2", encoding="utf-8")

    result = _invoke(cli_runner, temp_db, "import", str(path))

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_help_does_not_touch_database(cli_runner, tmp_path):
    db_path = tmp_path / "never.db"

    result = cli_runner.invoke(cli, ["--db-path", str(db_path), "--help"])

    assert result.exit_code == 0
    assert "Investment allocation planner" in result.output
    assert not db_path.exists()
