from datetime import date

from snowball.analytics import add_months
from snowball.data import DividendEvent, HistoricalSeries, PricePoint, SeriesStats


def make_series(prices, start=date(2020, 1, 1), dividends=(), stats=None, name="TEST"):
    history = tuple(
        PricePoint(
            date=add_months(start, index),
            open=price,
            high=price,
            low=price,
            close=price,
            volume=1000.0,
        )
        for index, price in enumerate(prices)
    )
    return HistoricalSeries(
        name=name,
        history=history,
        dividends=tuple(DividendEvent(date=day, amount=amount) for day, amount in dividends),
        stats=stats,
    )


def flat_stats(monthly_return=0.01, monthly_std_dev=0.04):
    return SeriesStats(monthly_return=monthly_return, monthly_std_dev=monthly_std_dev)
