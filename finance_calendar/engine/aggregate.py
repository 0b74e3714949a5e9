import pandas as pd

REQUIRED_COLUMNS = {"Date", "MonthIndex", "CalendarYear", "MonthInYear"}


def _prepare(df: pd.DataFrame) -> pd.DataFrame:
    missing = REQUIRED_COLUMNS.difference(df.columns)
    if missing:
        raise KeyError(f"Missing required columns: {', '.join(sorted(missing))}")
    return df.sort_values("Date").copy()


def aggregate_period(df: pd.DataFrame, freq: str = "M") -> pd.DataFrame:
    """Collapse projected days to monthly/quarterly/yearly snapshots.

    Figures are cumulative, so each period keeps its last row.
    """
    if df.empty:
        return df

    freq = (freq or "M").upper()
    df = _prepare(df)

    if freq == "Q":
        df["PeriodValue"] = df["MonthIndex"] // 3
        quarter = ((df["MonthInYear"] - 1) // 3 + 1).astype(int)
        df["Period"] = df["CalendarYear"].astype(str) + " Q" + quarter.astype(str)
    elif freq == "Y":
        df["PeriodValue"] = df["MonthIndex"] // 12
        df["Period"] = df["CalendarYear"].astype(str)
    elif freq == "M":
        df["PeriodValue"] = df["MonthIndex"]
        df["Period"] = df["CalendarYear"].astype(str) + "-" + df["MonthInYear"].map("{:02d}".format)
    else:
        raise ValueError(f"Unsupported frequency: {freq!r}")

    return df.groupby("PeriodValue", as_index=False).last()
