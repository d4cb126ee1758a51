"""
Stock Price Analyzer

A CLI tool that downloads daily stock prices for a fixed set of securities and reports
simple statistics on them.

USAGE
    python src/stock_price_analyzer.py
    python src/stock_price_analyzer.py --max-daily-profit --busy-day --biggest-loser
    python src/stock_price_analyzer.py --source yahoo --biggest-loser

REPORTS
    Monthly average open and close prices (always shown).

    --max-daily-profit (optional)
        For each security, the day with the largest high-low range and that range.

    --busy-day (optional)
        For each security, the days on which volume was more than 10% above average.

    --biggest-loser (optional)
        The security with the most days closing below its open.

    --source (optional)
        Price data provider: "quandl" (default) or "yahoo".

    Optional reports are shown in the order given. Unknown arguments are ignored.

DEPENDENCIES
    requests - HTTP library for the Quandl datatable CSV endpoint.
    yfinance - Third-party library for fetching stock data from Yahoo Finance.
    pandas   - Data manipulation library (returned by yfinance history calls).
"""

import argparse
import logging
import math
import os
import re
import sys
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple, Union

import requests
import yfinance

logger = logging.getLogger(__name__)

# Exception Classes

class RowParseError(Exception):
    """Raised when a raw price row cannot be turned into a day record."""
    pass


class DateParseError(RowParseError):
    """Raised when a date is not in YYYY-MM-DD format."""
    pass


class FetchError(Exception):
    """Raised when price data for a ticker cannot be retrieved."""
    pass


class EmptySeriesError(Exception):
    """Raised when an analysis needs at least one day record and there is none."""
    pass


class CliArgumentError(Exception):
    """Raised when CLI arguments are invalid."""
    pass


# Constants

DATE_FORMAT: str = "%Y-%m-%d"  # Format for record dates (e.g., 2017-01-31)
DATE_PATTERN: str = r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$"  # Regex pattern for date validation (ASCII digits only)
QUANDL_DATE_FORMAT: str = "%Y%m%d"  # Date format of the Quandl date filters (e.g., 20170101)
QUANDL_DATA_URL: str = "https://www.quandl.com/api/v3/datatables/WIKI/PRICES.csv"  # Quandl WIKI prices datatable (CSV)
QUANDL_DATA_COLUMNS: str = "ticker,date,open,high,low,close,volume"  # Columns requested from Quandl, in row order
QUANDL_API_KEY_ENV: str = "QUANDL_API_KEY"  # Environment variable holding the Quandl API key
RECORD_FIELD_COUNT: int = 7  # Number of comma-separated fields in a raw price row
BUSY_DAY_VOLUME_FACTOR: float = 1.1  # Volume must exceed average by more than 10%
HTTP_TIMEOUT_SECONDS: float = 30.0  # Timeout for data provider requests
QUERY_SEPARATOR: str = "*" * 40  # Line printed around each report
NO_DATA_MESSAGE: str = "No data available"  # Shown for a security with no records

DEFAULT_TICKERS: Tuple[str, ...] = ("COF", "GOOGL", "MSFT")  # Securities analysed
DEFAULT_START_DATE: date = date(2017, 1, 1)  # First day of the analysed interval
DEFAULT_END_DATE: date = date(2017, 6, 30)  # Last day of the analysed interval

SOURCE_QUANDL: str = "quandl"
SOURCE_YAHOO: str = "yahoo"

REPORT_MAX_DAILY_PROFIT: str = "max_daily_profit"
REPORT_BUSY_DAYS: str = "busy_days"
REPORT_BIGGEST_LOSER: str = "biggest_loser"

DICT_REPORT_FLAGS: Dict[str, str] = {
    "--max-daily-profit": REPORT_MAX_DAILY_PROFIT,
    "--busy-day": REPORT_BUSY_DAYS,
    "--biggest-loser": REPORT_BIGGEST_LOSER,
}  # Command-line flag of each optional report


# Configuration

@dataclass(frozen=True)
class AnalyzerConfig:
    """Securities, interval and data provider used for one run."""
    tuple_s_tickers: Tuple[str, ...] = DEFAULT_TICKERS
    dt_start_date: date = DEFAULT_START_DATE
    dt_end_date: date = DEFAULT_END_DATE
    s_data_url: str = QUANDL_DATA_URL
    s_api_key: str = ""
    s_data_source: str = SOURCE_QUANDL
    n_timeout_seconds: float = HTTP_TIMEOUT_SECONDS


def load_config(s_data_source: str = SOURCE_QUANDL) -> AnalyzerConfig:
    """
    Build the run configuration from the module defaults and the environment.

    Args:
        s_data_source: Name of the price data provider ("quandl" or "yahoo").

    Returns:
        AnalyzerConfig for the configured tickers and interval.
    """
    s_api_key: str = os.environ.get(QUANDL_API_KEY_ENV, "")  # Quandl API key, empty if unset

    if s_data_source == SOURCE_QUANDL and not s_api_key:
        logger.warning("%s is not set; Quandl requests may be rejected.", QUANDL_API_KEY_ENV)

    return AnalyzerConfig(s_api_key=s_api_key, s_data_source=s_data_source)


# Data Model

@dataclass(frozen=True)
class DayRecord:
    """One trading day of one security."""
    dt_date: date
    n_open: float
    n_high: float
    n_low: float
    n_close: float
    n_volume: float

    def daily_range(self) -> float:
        """Profit from buying at the day's low and selling at the day's high."""
        return self.n_high - self.n_low

    def is_losing_day(self) -> bool:
        return self.n_close < self.n_open


@dataclass(frozen=True)
class RowParseResult:
    """Outcome of parsing one raw row: either a record or an error message."""
    record: Optional[DayRecord] = None
    s_error: str = ""

    @property
    def b_ok(self) -> bool:
        return self.record is not None


# Monthly bucketing scan states

@dataclass(frozen=True)
class NoBucketYet:
    """No record has been scanned yet."""


@dataclass(frozen=True)
class InBucket:
    """Running totals of the current contiguous calendar-month run."""
    n_year: int
    n_month: int
    n_total_open: float
    n_total_close: float
    n_count: int

    def matches(self, record: DayRecord) -> bool:
        return (self.n_year, self.n_month) == (record.dt_date.year, record.dt_date.month)

    def add(self, record: DayRecord) -> "InBucket":
        return InBucket(
            self.n_year,
            self.n_month,
            self.n_total_open + record.n_open,
            self.n_total_close + record.n_close,
            self.n_count + 1
        )

    def close_out(self) -> Dict[str, Any]:
        return {
            "n_year": self.n_year,
            "n_month": self.n_month,
            "n_avg_open": self.n_total_open / self.n_count,
            "n_avg_close": self.n_total_close / self.n_count
        }


BucketState = Union[NoBucketYet, InBucket]


def start_bucket(record: DayRecord) -> InBucket:
    """Open a new month run holding only *record*."""
    return InBucket(record.dt_date.year, record.dt_date.month, record.n_open, record.n_close, 1)


# Row Parsing Functions

def parse_date(s_date: str) -> date:
    """
    Parse a record date.

    Args:
        s_date: Date string in YYYY-MM-DD format.

    Returns:
        Parsed date.

    Raises:
        DateParseError: If the string is not a valid YYYY-MM-DD date.
    """
    if not re.match(DATE_PATTERN, s_date):
        raise DateParseError(f"Invalid date format. Expected YYYY-MM-DD (e.g., 2017-01-31), got: {s_date}")

    try:
        dt_parsed: datetime = datetime.strptime(s_date, DATE_FORMAT)  # Parsed datetime object
    except ValueError as e:
        raise DateParseError(f"Invalid date {s_date}: {str(e)}")

    return dt_parsed.date()


def parse_price_field(s_field_name: str, s_value: str) -> float:
    """Parse one numeric column, raising RowParseError naming the column.

    Only finite plain decimals are accepted: nan, inf and underscore-grouped digits are rejected.
    """
    if "_" in s_value:
        raise RowParseError(f"Invalid {s_field_name} value: {s_value!r}")

    try:
        n_value: float = float(s_value)  # Parsed column value
    except ValueError:
        raise RowParseError(f"Invalid {s_field_name} value: {s_value!r}")

    if not math.isfinite(n_value):
        raise RowParseError(f"Non-finite {s_field_name} value: {s_value!r}")

    return n_value


def parse_day_record_fields(s_row: str) -> DayRecord:
    """
    Build a day record from a raw row.

    Args:
        s_row: Row of the form "ticker,YYYY-MM-DD,open,high,low,close,volume".
               The ticker column is not checked.

    Returns:
        DayRecord for the row.

    Raises:
        RowParseError: If the row does not have 7 fields or a value does not parse.
        DateParseError: If the date is not in YYYY-MM-DD format.
    """
    list_s_fields: List[str] = s_row.strip().rstrip(",").split(",")  # Raw column values, trailing empty columns dropped

    if len(list_s_fields) != RECORD_FIELD_COUNT:
        raise RowParseError(f"Expected {RECORD_FIELD_COUNT} fields, got {len(list_s_fields)}: {s_row!r}")

    dt_date: date = parse_date(list_s_fields[1].strip())  # Trading day

    return DayRecord(
        dt_date=dt_date,
        n_open=parse_price_field("open", list_s_fields[2]),
        n_high=parse_price_field("high", list_s_fields[3]),
        n_low=parse_price_field("low", list_s_fields[4]),
        n_close=parse_price_field("close", list_s_fields[5]),
        n_volume=parse_price_field("volume", list_s_fields[6])
    )


def parse_day_record(s_row: str) -> RowParseResult:
    """
    Parse a raw row into a RowParseResult.

    Args:
        s_row: Raw price row.

    Returns:
        RowParseResult holding the record, or the reason the row was rejected.
    """
    try:
        return RowParseResult(record=parse_day_record_fields(s_row))
    except RowParseError as e:
        return RowParseResult(s_error=str(e))


# Aggregation

def find_max_range_record(list_records: List[DayRecord]) -> Optional[DayRecord]:
    """
    Return the record with the largest high-low range.

    The first record wins a tie. Returns None for an empty list.
    """
    record_max: Optional[DayRecord] = None  # Best record so far

    for record in list_records:
        if record_max is None or record.daily_range() > record_max.daily_range():
            record_max = record

    return record_max


class SecuritySeries:
    """
    Price history of one security.

    Records are expected to be added in chronological order; this is not checked.
    """

    def __init__(self, s_ticker: str) -> None:
        self.s_ticker: str = s_ticker  # Ticker symbol
        self.list_records: List[DayRecord] = []  # Day records in insertion order

    def __repr__(self) -> str:
        return f"SecuritySeries({self.s_ticker!r}, {len(self.list_records)} records)"

    def add_record(self, record: DayRecord) -> None:
        self.list_records.append(record)

    def is_empty(self) -> bool:
        return not self.list_records

    def monthly_open_close(self) -> List[Dict[str, Any]]:
        """
        Average open and close prices per calendar-month run.

        Records are scanned in order and a new run starts whenever the month differs from
        the previous record's. A month that appears in two separate stretches of the series
        therefore produces two entries.

        Returns:
            List of dictionaries, one per run, in order of appearance:
                - n_year: Year of the run
                - n_month: Month of the run (1-12)
                - n_avg_open: Average open price
                - n_avg_close: Average close price
        """
        list_dict_months: List[Dict[str, Any]] = []  # Closed-out month runs
        state: BucketState = NoBucketYet()  # Scan state

        # Loop through each record in order
        for record in self.list_records:
            if isinstance(state, InBucket) and state.matches(record):
                state = state.add(record)
                continue

            if isinstance(state, InBucket):
                list_dict_months.append(state.close_out())
            state = start_bucket(record)

        if isinstance(state, InBucket):
            list_dict_months.append(state.close_out())

        return list_dict_months

    def max_daily_profit(self) -> Dict[str, Any]:
        """
        Find the day with the largest profit from buying at the low and selling at the high.

        Returns:
            Dictionary containing:
                - s_ticker: Ticker symbol
                - dt_date: Day of the maximum range (first one on ties)
                - n_max_profit: High minus low on that day

        Raises:
            EmptySeriesError: If the series has no records.
        """
        record_max: Optional[DayRecord] = find_max_range_record(self.list_records)  # Day with the largest range

        if record_max is None:
            raise EmptySeriesError(f"No price data for {self.s_ticker}.")

        return {"s_ticker": self.s_ticker, "dt_date": record_max.dt_date, "n_max_profit": record_max.daily_range()}

    def num_losing_days(self) -> int:
        """Number of days on which the close was lower than the open."""
        return sum(1 for record in self.list_records if record.is_losing_day())

    def average_volume(self) -> float:
        """
        Average daily traded volume.

        Raises:
            EmptySeriesError: If the series has no records.
        """
        if self.is_empty():
            raise EmptySeriesError(f"No price data for {self.s_ticker}.")

        n_total_volume: float = sum(record.n_volume for record in self.list_records)  # Sum of daily volumes

        return n_total_volume / len(self.list_records)

    def busy_days(self) -> Dict[str, Any]:
        """
        Find the days whose volume is more than 10% above the average volume.

        Returns:
            Dictionary containing:
                - s_ticker: Ticker symbol
                - n_average_volume: Average daily volume
                - list_records_busy: Busy day records in series order

        Raises:
            EmptySeriesError: If the series has no records.
        """
        n_average_volume: float = self.average_volume()  # Average daily volume
        n_threshold: float = BUSY_DAY_VOLUME_FACTOR * n_average_volume  # Volume a busy day must exceed

        list_records_busy: List[DayRecord] = [
            record for record in self.list_records if record.n_volume > n_threshold
        ]  # Days strictly above the threshold

        return {"s_ticker": self.s_ticker, "n_average_volume": n_average_volume, "list_records_busy": list_records_busy}


class Portfolio:
    """The analysed securities, in configuration order."""

    def __init__(self, list_series: Optional[List[SecuritySeries]] = None) -> None:
        self.list_series: List[SecuritySeries] = list(list_series or [])  # Series in configuration order

    def __iter__(self) -> Iterator[SecuritySeries]:
        return iter(self.list_series)

    def __len__(self) -> int:
        return len(self.list_series)

    def add_series(self, series: SecuritySeries) -> None:
        self.list_series.append(series)

    def biggest_loser(self) -> Optional[Tuple[SecuritySeries, int]]:
        """
        Find the security with the most losing days.

        A security needs at least one losing day to qualify, and the first security wins
        a tie. A portfolio with no losing days at all has no biggest loser.

        Returns:
            Tuple of (series, number of losing days), or None.
        """
        series_loser: Optional[SecuritySeries] = None  # Current biggest loser
        n_max_losing_days: int = 0  # Losing days of the current biggest loser

        # Loop through each security in configuration order
        for series in self.list_series:
            n_losing_days: int = series.num_losing_days()  # Losing days of this security

            if n_losing_days > n_max_losing_days:
                n_max_losing_days = n_losing_days
                series_loser = series

        if series_loser is None:
            return None

        return series_loser, n_max_losing_days


# Stock Data Fetching Functions

@dataclass
class TickerFetchResult:
    """Outcome of reading one security: the series plus what went wrong, if anything."""
    series: SecuritySeries
    n_rows_rejected: int = 0
    s_error: str = ""

    @property
    def b_ok(self) -> bool:
        return not self.s_error


def build_quandl_params(s_ticker: str, config: AnalyzerConfig) -> Dict[str, str]:
    """
    Build the query parameters for the Quandl prices datatable.

    Args:
        s_ticker: Ticker symbol.
        config: Run configuration (interval and API key).

    Returns:
        Dictionary of query string parameters.
    """
    return {
        "date.gte": config.dt_start_date.strftime(QUANDL_DATE_FORMAT),
        "date.lte": config.dt_end_date.strftime(QUANDL_DATE_FORMAT),
        "ticker": s_ticker,
        "qopts.columns": QUANDL_DATA_COLUMNS,
        "api_key": config.s_api_key
    }


def fetch_quandl_rows(s_ticker: str, config: AnalyzerConfig) -> List[str]:
    """
    Fetch raw price rows for a ticker from the Quandl CSV endpoint.

    Args:
        s_ticker: Ticker symbol.
        config: Run configuration.

    Returns:
        Raw CSV rows without the header line.

    Raises:
        FetchError: If the endpoint is unreachable or returns an error status.
    """
    dict_params: Dict[str, str] = build_quandl_params(s_ticker, config)  # Query parameters

    try:
        response_api = requests.get(config.s_data_url, params=dict_params, timeout=config.n_timeout_seconds)
    except Exception as e:
        raise FetchError(f"Quandl API unreachable for {s_ticker}. Error: {str(e)}")

    if response_api.status_code != 200:
        raise FetchError(f"Quandl API returned error status {response_api.status_code} for {s_ticker}")

    list_s_lines: List[str] = response_api.text.splitlines()  # Header followed by data rows

    return list_s_lines[1:]


def fetch_yahoo_rows(s_ticker: str, config: AnalyzerConfig) -> List[str]:
    """
    Fetch daily prices for a ticker using yfinance library.

    The history is rendered into the same "ticker,date,open,high,low,close,volume" rows
    the Quandl endpoint returns, so both sources share one parser. yfinance treats the
    end date as exclusive, so one day is added to keep the configured end date.

    Args:
        s_ticker: Ticker symbol.
        config: Run configuration.

    Returns:
        Raw price rows in date order.

    Raises:
        FetchError: If yfinance fails.
    """
    s_yfinance_start_date: str = config.dt_start_date.strftime(DATE_FORMAT)  # Start date in yfinance format
    s_yfinance_end_date: str = (config.dt_end_date + timedelta(days=1)).strftime(DATE_FORMAT)  # Exclusive end date

    try:
        ticker_stock = yfinance.Ticker(s_ticker)  # yfinance Ticker object for the stock
        df_history = ticker_stock.history(start=s_yfinance_start_date, end=s_yfinance_end_date, auto_adjust=False)  # Price history dataframe from Yahoo Finance
    except Exception as e:
        raise FetchError(f"Yahoo Finance request failed for {s_ticker}. Error: {str(e)}")

    list_s_rows: List[str] = []  # Rendered rows

    if df_history is None or df_history.empty:
        return list_s_rows

    # Loop through each trading day
    for ts_day, series_day in df_history.iterrows():
        s_row: str = ",".join([
            s_ticker,
            ts_day.strftime(DATE_FORMAT),
            str(series_day["Open"]),
            str(series_day["High"]),
            str(series_day["Low"]),
            str(series_day["Close"]),
            str(series_day["Volume"])
        ])  # Raw row for the day
        list_s_rows.append(s_row)

    return list_s_rows


DICT_DATA_SOURCES: Dict[str, Callable[[str, AnalyzerConfig], List[str]]] = {
    SOURCE_QUANDL: fetch_quandl_rows,
    SOURCE_YAHOO: fetch_yahoo_rows,
}


def read_security_series(s_ticker: str, config: AnalyzerConfig) -> TickerFetchResult:
    """
    Fetch and parse the price history of one security.

    Rows that do not parse are logged and skipped. A failed fetch is logged and leaves an
    empty series; nothing is raised to the caller.

    Args:
        s_ticker: Ticker symbol.
        config: Run configuration.

    Returns:
        TickerFetchResult with the series, the rejected row count and any fetch error.
    """
    series: SecuritySeries = SecuritySeries(s_ticker)  # Series being filled
    fetch_rows: Callable[[str, AnalyzerConfig], List[str]] = DICT_DATA_SOURCES[config.s_data_source]  # Data provider

    try:
        list_s_rows: List[str] = fetch_rows(s_ticker, config)
    except FetchError as e:
        logger.warning("Failed to get data for %s: %s", s_ticker, str(e))
        return TickerFetchResult(series=series, s_error=str(e))

    n_rows_rejected: int = 0  # Rows that did not parse

    # Loop through each raw row
    for s_row in list_s_rows:
        result_row: RowParseResult = parse_day_record(s_row)  # Parsed row or rejection

        if result_row.b_ok:
            series.add_record(result_row.record)
        else:
            n_rows_rejected += 1
            logger.warning("Skipping row for %s: %s", s_ticker, result_row.s_error)

    logger.info("Read %d records for %s (%d rejected)", len(series.list_records), s_ticker, n_rows_rejected)

    return TickerFetchResult(series=series, n_rows_rejected=n_rows_rejected)


def build_portfolio(config: AnalyzerConfig) -> Portfolio:
    """
    Read every configured security, one after another.

    Args:
        config: Run configuration.

    Returns:
        Portfolio with one series per configured ticker, in configuration order.
    """
    portfolio: Portfolio = Portfolio()  # Portfolio being filled

    # Loop through each configured ticker
    for s_ticker in config.tuple_s_tickers:
        result_fetch: TickerFetchResult = read_security_series(s_ticker, config)
        portfolio.add_series(result_fetch.series)

    return portfolio


# Output Functions

def format_price(n_price: float) -> str:
    return f"{n_price:.2f}"


def format_volume(n_volume: float) -> str:
    return f"{n_volume:.1f}"


def format_date(dt_date: date) -> str:
    return dt_date.strftime(DATE_FORMAT)


def wrap_report(s_title: str, list_s_body: List[str]) -> List[str]:
    """Surround report lines with separators and a title, as printed to the terminal."""
    return [QUERY_SEPARATOR, s_title, ""] + list_s_body + [QUERY_SEPARATOR]


def format_monthly_open_close_report(portfolio: Portfolio) -> List[str]:
    """
    Format the monthly average open and close prices of every security.

    Args:
        portfolio: Analysed securities.

    Returns:
        List of output lines.
    """
    list_s_lines: List[str] = []  # Report body

    # Loop through each security
    for series in portfolio:
        list_s_lines.append(f"{series.s_ticker}:")

        list_dict_months: List[Dict[str, Any]] = series.monthly_open_close()  # Month runs

        if not list_dict_months:
            list_s_lines.append(NO_DATA_MESSAGE)

        # Loop through each month run
        for dict_month in list_dict_months:
            list_s_lines.append(
                f"month: {dict_month['n_year']}-{dict_month['n_month']:02d}, "
                f"avg-open: {format_price(dict_month['n_avg_open'])}, "
                f"avg-close: {format_price(dict_month['n_avg_close'])}"
            )

        list_s_lines.append("")

    return wrap_report("Monthly average open and close prices", list_s_lines)


def format_max_daily_profit_report(portfolio: Portfolio) -> List[str]:
    """
    Format the maximum daily profit of every security.

    Args:
        portfolio: Analysed securities.

    Returns:
        List of output lines.
    """
    list_s_lines: List[str] = []  # Report body

    # Loop through each security
    for series in portfolio:
        s_ticker_padded: str = f"{series.s_ticker:<5}"  # Ticker padded to a fixed column

        try:
            dict_profit: Dict[str, Any] = series.max_daily_profit()
        except EmptySeriesError:
            list_s_lines.append(f"{s_ticker_padded} {NO_DATA_MESSAGE}")
            continue

        list_s_lines.append(
            f"{s_ticker_padded} {format_date(dict_profit['dt_date'])} {format_price(dict_profit['n_max_profit'])}"
        )

    return wrap_report("Maximum daily profit", list_s_lines)


def format_biggest_loser_report(portfolio: Portfolio) -> List[str]:
    """
    Format the biggest loser of the portfolio.

    Args:
        portfolio: Analysed securities.

    Returns:
        List of output lines. The body is empty when no security had a losing day.
    """
    list_s_lines: List[str] = []  # Report body
    tuple_loser: Optional[Tuple[SecuritySeries, int]] = portfolio.biggest_loser()  # Biggest loser and its losing days

    if tuple_loser is not None:
        series_loser, n_losing_days = tuple_loser
        list_s_lines.append(f"{series_loser.s_ticker} Number of losing days: {n_losing_days}")

    return wrap_report("Biggest loser", list_s_lines)


def format_busy_days_report(portfolio: Portfolio) -> List[str]:
    """
    Format the busy days of every security.

    Args:
        portfolio: Analysed securities.

    Returns:
        List of output lines.
    """
    list_s_lines: List[str] = []  # Report body

    # Loop through each security
    for series in portfolio:
        list_s_lines.append(series.s_ticker)

        try:
            dict_busy: Dict[str, Any] = series.busy_days()
        except EmptySeriesError:
            list_s_lines.extend([NO_DATA_MESSAGE, ""])
            continue

        list_s_lines.append(f"Average volume: {format_volume(dict_busy['n_average_volume'])}")
        list_s_lines.append("Busy days:")

        # Loop through each busy day
        for record in dict_busy["list_records_busy"]:
            list_s_lines.append(f"{series.s_ticker} {format_date(record.dt_date)} {format_volume(record.n_volume)}")

        list_s_lines.append("")

    return wrap_report("Busy days", list_s_lines)


DICT_REPORT_FORMATTERS: Dict[str, Callable[[Portfolio], List[str]]] = {
    REPORT_MAX_DAILY_PROFIT: format_max_daily_profit_report,
    REPORT_BUSY_DAYS: format_busy_days_report,
    REPORT_BIGGEST_LOSER: format_biggest_loser_report,
}


def print_report(list_s_lines: List[str]) -> None:
    """Print report lines to terminal."""
    # Loop through each output line
    for s_line in list_s_lines:
        print(s_line)


# CLI Argument Parsing Functions

def parse_arguments(list_s_args: List[str]) -> Dict[str, Any]:
    """
    Parse command-line arguments.

    Unknown arguments are ignored. Report flags are kept in the order given, and a
    repeated flag repeats its report.

    Args:
        list_s_args: List of command-line argument strings.

    Returns:
        Dictionary containing:
            - list_s_reports: Optional reports to show, in order
            - s_data_source: Name of the price data provider

    Raises:
        CliArgumentError: If a known argument has an invalid value.
    """
    # Report flags match exact tokens only, so "--busy-day=1" is just an unknown argument
    list_s_reports: List[str] = [
        DICT_REPORT_FLAGS[s_arg] for s_arg in list_s_args if s_arg in DICT_REPORT_FLAGS
    ]  # Optional reports in order

    parser_args = argparse.ArgumentParser(description="Analyse daily stock prices.", add_help=False, allow_abbrev=False, exit_on_error=False)

    parser_args.add_argument("--source", dest="s_data_source", type=str, default=SOURCE_QUANDL, help="Price data provider (quandl or yahoo)")

    try:
        namespace_args, list_s_unknown = parser_args.parse_known_args(list_s_args)
        s_data_source: str = namespace_args.s_data_source  # Price data provider
    except argparse.ArgumentError as e:
        logger.warning("Ignoring --source without a value (%s); using %s.", str(e), SOURCE_QUANDL)
        s_data_source = SOURCE_QUANDL
        list_s_unknown = []

    list_s_ignored: List[str] = [s_arg for s_arg in list_s_unknown if s_arg not in DICT_REPORT_FLAGS]  # Arguments with no meaning here

    if list_s_ignored:
        logger.debug("Ignoring unknown arguments: %s", " ".join(list_s_ignored))

    if s_data_source not in DICT_DATA_SOURCES:
        raise CliArgumentError(f"Unknown --source {s_data_source!r}. Expected one of: {', '.join(DICT_DATA_SOURCES)}")

    return {"list_s_reports": list_s_reports, "s_data_source": s_data_source}


def main() -> None:
    """Main entry point for the stock price analyzer."""
    logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")

    list_s_args: List[str] = sys.argv[1:]  # Command line arguments

    try:
        dict_args: Dict[str, Any] = parse_arguments(list_s_args)
    except CliArgumentError as e:
        print(f"Error: {str(e)}")
        sys.exit(1)

    config: AnalyzerConfig = load_config(dict_args["s_data_source"])  # Run configuration
    portfolio: Portfolio = build_portfolio(config)  # Fetched securities

    print_report(format_monthly_open_close_report(portfolio))

    # Loop through each requested report in order
    for s_report in dict_args["list_s_reports"]:
        print_report(DICT_REPORT_FORMATTERS[s_report](portfolio))


if __name__ == "__main__":
    main()
