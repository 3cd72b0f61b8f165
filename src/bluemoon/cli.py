import subprocess
import sys
from pathlib import Path

import typer

from bluemoon.config import settings
from bluemoon.logging import get_session_id, logger

app = typer.Typer(no_args_is_help=True)


@app.callback()
def main():
    """
    Blue Moon apartment administration CLI.
    """
    pass


@app.command(name="doctor")
def doctor():
    """
    Check configuration and backend reachability.
    """
    from bluemoon.ui.validation import validate_api_url, validate_backend_connection

    logger.info("Running doctor check...")

    failures: list[str] = []
    passed = 0

    print("\n🌙 Blue Moon Doctor\n")

    # ── Check 1: Environment / Interpreter ──────────────────────────────────
    print("[Environment]")
    print(f"  Python:      {sys.version.split()[0]}")
    print(f"  Session ID:  {get_session_id()}")
    passed += 1

    # ── Check 2: Backend URL ─────────────────────────────────────────────────
    print("\n[Configuration]")
    url_errors = validate_api_url()
    if url_errors:
        print(f"  BLUEMOON_API_URL:          ❌ {settings.API_URL}")
        failures.extend(url_errors)
    else:
        print(f"  BLUEMOON_API_URL:          ✅ {settings.API_URL}")
        passed += 1
    print(f"  BLUEMOON_REQUEST_TIMEOUT:  {settings.REQUEST_TIMEOUT}s")
    print(f"  BLUEMOON_LOG_LEVEL:        {settings.LOG_LEVEL}")
    print(f"  SYNTHETIC_TREND_FALLBACK:  {settings.SYNTHETIC_TREND_FALLBACK}")

    # ── Check 3: Backend reachable ───────────────────────────────────────────
    print("\n[Backend]")
    if url_errors:
        print("  /health                    ⚠️  Skipped (invalid URL)")
    else:
        conn_errors = validate_backend_connection()
        if conn_errors:
            print("  /health                    ❌ Unreachable")
            failures.extend(conn_errors)
        else:
            print("  /health                    ✅ Reachable")
            passed += 1

    # ── Summary ──────────────────────────────────────────────────────────────
    total = passed + len(failures)
    print(f"\n{'─' * 50}")
    if failures:
        print(f"Result: {passed}/{total} checks passed\n")
        for msg in failures:
            print(f"  ❌ {msg}")
        print()
        raise typer.Exit(code=1)
    else:
        print(f"Result: {passed}/{total} checks passed — all good ✅")
        print()


@app.command(name="stats")
def stats(
    username: str = typer.Option(None, help="Defaults to BLUEMOON_USERNAME"),
    password: str = typer.Option(None, help="Defaults to BLUEMOON_PASSWORD", hide_input=True),
    all_counts: bool = typer.Option(False, "--all-counts", help="Include temporary residence/absence counts"),
):
    """Log in and print the dashboard figures as text."""
    from bluemoon.domain.exceptions import APIError, FormValidationError, error_message
    from bluemoon.domain.formatting import format_vnd
    from bluemoon.services.auth_service import LOGIN_ERROR, login
    from bluemoon.services.dashboard_service import (
        LOAD_ERROR, DashboardScreen, counts_series, percentage, recent_payment_rows,
    )
    from bluemoon.ui.api_client import BlueMoonClient

    username = username or settings.USERNAME
    if password is None and settings.PASSWORD is not None:
        password = settings.PASSWORD.get_secret_value()

    with BlueMoonClient() as client:
        try:
            session = login(client, username or "", password or "")
        except FormValidationError as e:
            for msg in e.errors.values():
                print(f"❌ {msg}")
            raise typer.Exit(code=1)
        except APIError as e:
            print(f"❌ {error_message(e, LOGIN_ERROR)}")
            raise typer.Exit(code=1)
        logger.info("Fetching dashboard stats as %s", session.username)

        screen = DashboardScreen(client)
        data = screen.load()
        charts = screen.charts
        if charts is None:
            print(f"❌ {screen.error or LOAD_ERROR}")
            raise typer.Exit(code=1)

    print(f"\n[Tổng quan] {charts.month_name}")
    counts = counts_series(data.counts, include_temporary=all_counts)
    for label, value in zip(counts.labels, counts.values):
        print(f"  {label:<14} {value}")
    print(f"  {'Doanh thu':<14} {format_vnd(data.financials.monthly_revenue)}")

    revenue = charts.revenue_by_type
    print("\n[Doanh thu theo loại phí]")
    if not revenue:
        print("  (không có dữ liệu)")
    for label, value in zip(revenue.labels, revenue.values):
        print(f"  {label} ({percentage(value, revenue.total)}%)")

    trend = charts.monthly_trend
    print("\n[Doanh thu hàng tháng]")
    for label, value in zip(trend.labels, trend.values):
        print(f"  {label:<8} {format_vnd(value)}")

    print("\n[Thanh toán gần đây]")
    for row in recent_payment_rows(data):
        print("  " + " | ".join(row.values()))
    print()


@app.command(name="ui")
def ui(port: int = typer.Option(8501, help="Streamlit server port")):
    """Launch the Streamlit admin front-end."""
    app_path = Path(__file__).resolve().parent / "ui" / "app.py"
    logger.info("Starting Streamlit on port %s", port)
    result = subprocess.run(
        [sys.executable, "-m", "streamlit", "run", str(app_path), "--server.port", str(port)],
        check=False,
    )
    raise typer.Exit(code=result.returncode)


if __name__ == "__main__":
    app()
