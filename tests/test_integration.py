"""Integration tests for end-to-end workflows."""

from fundplan.cli.main import cli


def test_full_workflow(cli_runner, temp_db):
    """Test complete workflow: accounts -> groups -> investments -> plan -> schedule -> export."""
    base = ["--db-path", temp_db.database_path]

    steps = [
        ["rate", "set", "35"],
        ["account", "create", "Savings", "--balance", "30000"],
        ["account", "create", "Brokerage", "--currency", "USD", "--balance", "1000"],
        ["group", "create", "Long Term", "--percentage", "80"],
        ["group", "create", "Equity", "--parent", "Long Term", "--percentage", "75"],
        [
            "investment", "create", "World Index",
            "--percentage", "50",
            "--group", "Long Term > Equity",
            "--account", "Brokerage",
            "--account", "Savings",
            "--start", "2024-01-05",
            "--end", "2024-06-05",
        ],
        [
            "investment", "create", "Cash Buffer",
            "--percentage", "20",
            "--account", "Savings",
            "--every", "quarterly",
            "--start", "2024-01-01",
        ],
    ]
    for args in steps:
        result = cli_runner.invoke(cli, base + args)
        assert result.exit_code == 0, result.output

    # Total funds: 30000 + 1000 * 35 = 65000 THB
    # World Index: 50% of (80% * 75%) of 65000 = 19500 THB, all from Brokerage
    result = cli_runner.invoke(cli, base + ["plan"])
    assert result.exit_code == 0
    assert "Total funds: 65,000.00 THB" in result.output
    assert "Long Term > Equity > World Index" in result.output
    assert "19,500.00 THB" in result.output
    assert "557.14 USD" in result.output
    assert "OVERSPENT" not in result.output

    result = cli_runner.invoke(cli, base + ["schedule", "toggle", "World Index", "2024-01-05"])
    assert result.exit_code == 0

    result = cli_runner.invoke(cli, base + ["investment", "show", "World Index"])
    assert "Progress:    1/6" in result.output

    result = cli_runner.invoke(cli, base + ["export"])
    assert result.exit_code == 0
    assert "Long Term (80%)" in result.output
    assert "[1/6]" in result.output
    assert "Cash Buffer" in result.output

    # Savings is still listed by both investments
    result = cli_runner.invoke(cli, base + ["account", "delete", "Savings", "--yes"])
    assert result.exit_code == 1

    result = cli_runner.invoke(cli, base + ["investment", "delete", "Cash Buffer", "--yes"])
    assert result.exit_code == 0
    result = cli_runner.invoke(cli, base + ["investment", "update", "World Index", "--account", "Brokerage"])
    assert result.exit_code == 0
    result = cli_runner.invoke(cli, base + ["account", "delete", "Savings", "--yes"])
    assert result.exit_code == 0
