from datetime import date
from pathlib import Path

from snowball.config import InvestmentPhase, default_params
from snowball.data import load_series, with_computed_stats
from snowball.simulator import assess_goal, run_backtest, run_forecast, run_simulation


series = with_computed_stats(load_series(Path("configs") / "sample_series.json"))

params = default_params(
    initial_capital=100000,
    monthly_investment=10000,
    years=3,
    use_phases=True,
    investment_phases=(InvestmentPhase(12, 5000), InvestmentPhase(24, 10000)),
)
backtest = run_backtest(series, params)
print("Backtest total cost:", round(backtest.summary.total_cost))
print("Backtest final value:", round(backtest.summary.final_market_value))
print("CAGR:", f"{backtest.summary.cagr:.2%}")
print("Max drawdown:", f"{backtest.summary.max_drawdown:.2%}")
print("Sharpe:", round(backtest.summary.sharpe_ratio, 2))

forecast = run_forecast(
    series,
    default_params(years=10, monte_carlo_runs=500, seed=7, anchor_date=date(2025, 1, 1)),
)
print("Forecast median:", round(forecast.summary.median))
goal = assess_goal(forecast, 2_000_000)
print("Goal probability:", f"{goal.probability:.1%}", goal.band)

fixed = run_simulation(default_params(annual_return=0.07, years=20, anchor_date=date(2025, 1, 1)))
print("Fixed-rate final value:", round(fixed.summary.final_value))
print("Doubling time (years):", round(fixed.summary.double_years, 1))
