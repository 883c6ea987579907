import csv
from datetime import date

from helpers import make_series
from snowball.config import default_params
from snowball.export import columns_for, timeline_rows, write_timeline_csv
from snowball.simulator import run_backtest, run_forecast, run_simulation


def test_backtest_rows_are_formatted():
    params = default_params(initial_capital=1000, monthly_investment=100, commission_rate=0.0, tax_rate=0.0)
    result = run_backtest(make_series([10.0, 12.5, 11.0]), params)
    rows = timeline_rows(result)

    assert list(rows[0]) == list(columns_for(result))
    assert rows[0]["date"] == "2020-01-01"
    assert rows[0]["price"] == "10.00"
    assert rows[0]["units"] == "100.00"
    assert rows[0]["cost"] == "1000"
    assert rows[0]["rsi"] == ""
    assert rows[1]["unrealized_gain_pct"] == "22.73%"
    assert rows[2]["drawdown"].endswith("%")


def test_forecast_and_simulation_columns():
    params = default_params(years=1, monte_carlo_runs=5, seed=3, anchor_date=date(2024, 1, 1))
    forecast = run_forecast(None, params)
    simulation = run_simulation(params)
    assert columns_for(forecast) == ("date", "capital", "p10", "p50", "p90")
    assert columns_for(simulation) == ("date", "capital", "value", "gain", "gain_pct")
    assert timeline_rows(simulation)[0] == {
        "date": "2024-01-01",
        "capital": "100000",
        "value": "100000",
        "gain": "0",
        "gain_pct": "0.00%",
    }
    assert len(timeline_rows(forecast)) == 13


def test_write_timeline_csv_with_bom(tmp_path):
    params = default_params(years=1, anchor_date=date(2024, 1, 1))
    result = run_simulation(params)
    path = write_timeline_csv(result, tmp_path / "out" / "timeline.csv")

    assert path.read_bytes().startswith(b"\xef\xbb\xbf")
    with path.open(encoding="utf-8-sig", newline="") as handle:
        rows = list(csv.DictReader(handle))
    assert len(rows) == 13
    assert rows[-1]["date"] == "2025-01-01"
    assert rows[-1]["capital"] == "220000"
