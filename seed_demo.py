"""Fill a local log store with random notification rows for the dashboard.

Usage examples:

- Seed the default SQLite file (backend/notification_logs.db):
    `python seed_demo.py`

- Two weeks of heavier traffic, reproducible:
    `python seed_demo.py --days 14 --per-day 300 --seed 7`

- Preview without writing and export the per-day tally:
    `python seed_demo.py --dry-run --excel seed_preview.xlsx`

Only SQLite URLs are accepted unless `--allow-remote` is given; the production
log store is owned by the notification service and is read-only here.
"""
from __future__ import annotations

import argparse
import random
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional, Tuple

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from app.config import get_settings
from application.report_service import make_today_provider
from domain.notification_log import (
    Channel,
    DeliveryStatus,
    EventType,
    NotificationLogRow,
    NotificationTemplate,
)
from infrastructure.database import DEFAULT_SQLITE_URL, build_engine
from infrastructure.sql_repo import SQLNotificationLogRepository

CONSOLE = Console()

# share of rows per field value; anything outside the allow-lists is noise the
# dashboard must ignore
EVENT_WEIGHTS = {
    EventType.PAYMENT_REMINDER.value: 0.4,
    EventType.SESSION_REMINDER.value: 0.5,
    "marketing-blast": 0.1,
}
CHANNEL_WEIGHTS = {Channel.PUSH.value: 0.65, Channel.WHATSAPP.value: 0.3, "sms": 0.05}
STATUS_WEIGHTS = {DeliveryStatus.SUCCESS.value: 0.85, "failed": 0.1, "pending": 0.05}
EXTRA_TEMPLATES = ["welcome_message_v1"]


def _weighted(rng: random.Random, weights: Dict[str, float]) -> str:
    return rng.choices(list(weights), weights=list(weights.values()), k=1)[0]


def generate_rows(
    today: date, days: int, per_day: int, seed: Optional[int] = None
) -> List[NotificationLogRow]:
    """Random rows for ``today`` and the ``days`` days before it."""
    rng = random.Random(seed)
    templates = [item.value for item in NotificationTemplate] + EXTRA_TEMPLATES
    rows: List[NotificationLogRow] = []
    for offset in range(days + 1):
        day = today - timedelta(days=offset)
        for _ in range(per_day):
            sent_at = datetime.combine(day, datetime.min.time()) + timedelta(seconds=rng.randrange(86400))
            rows.append(
                NotificationLogRow(
                    event_type=_weighted(rng, EVENT_WEIGHTS),
                    notification_type=_weighted(rng, CHANNEL_WEIGHTS),
                    template=rng.choice(templates),
                    status=_weighted(rng, STATUS_WEIGHTS),
                    created_at=sent_at,
                )
            )
    return rows


def tally_by_day(rows: List[NotificationLogRow]) -> List[Tuple[date, int, int, int]]:
    """(day, rows, push+whatsapp reminders, successful tracked templates), newest first."""
    totals: Counter = Counter()
    reminders: Counter = Counter()
    delivered: Counter = Counter()
    for row in rows:
        day = row.created_date
        totals[day] += 1
        if EventType.parse(row.event_type) and Channel.parse(row.notification_type):
            reminders[day] += 1
        if (
            DeliveryStatus.parse(row.status) is DeliveryStatus.SUCCESS
            and NotificationTemplate.parse(row.template)
        ):
            delivered[day] += 1
    return [(day, totals[day], reminders[day], delivered[day]) for day in sorted(totals, reverse=True)]


def print_tally(tally: List[Tuple[date, int, int, int]]) -> None:
    table = Table(title="Seeded Rows per Day", box=box.SIMPLE)
    table.add_column("date", style="bold cyan")
    table.add_column("rows", justify="right")
    table.add_column("reminders", justify="right")
    table.add_column("delivered templates", justify="right")
    for day, total, reminder_count, delivered_count in tally:
        table.add_row(day.isoformat(), str(total), str(reminder_count), str(delivered_count))
    CONSOLE.print(table)


def export_excel(tally: List[Tuple[date, int, int, int]], filename: str) -> None:
    wb = Workbook()
    ws = wb.active
    ws.title = "seeded"
    header_fill = PatternFill(start_color="DDEBF7", end_color="DDEBF7", fill_type="solid")
    for column, title in enumerate(["date", "rows", "reminders", "delivered templates"], start=1):
        cell = ws.cell(row=1, column=column, value=title)
        cell.font = Font(bold=True)
        cell.fill = header_fill
        cell.alignment = Alignment(horizontal="center")
    for row_idx, (day, total, reminder_count, delivered_count) in enumerate(tally, start=2):
        ws.cell(row=row_idx, column=1, value=day.isoformat())
        ws.cell(row=row_idx, column=2, value=total)
        ws.cell(row=row_idx, column=3, value=reminder_count)
        ws.cell(row=row_idx, column=4, value=delivered_count)
    ws.column_dimensions["A"].width = 12
    ws.column_dimensions["D"].width = 20
    wb.save(filename)
    CONSOLE.print(f"[green]✔ Excel exported: {filename}[/]")


def seed_today() -> date:
    """Today on the same clock the dashboard reads with."""
    return make_today_provider(get_settings().timezone)()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed random notification log rows for the dashboard")
    parser.add_argument("--database-url", type=str, default=DEFAULT_SQLITE_URL, help="Target SQLAlchemy URL")
    parser.add_argument("--days", type=int, default=7, help="How many days before today to cover")
    parser.add_argument("--per-day", type=int, default=120, help="Rows generated per day")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible data")
    parser.add_argument("--dry-run", action="store_true", help="Generate and print without writing")
    parser.add_argument("--excel", type=str, default=None, help="Also export the per-day tally to this .xlsx file")
    parser.add_argument("--allow-remote", action="store_true", help="Permit non-SQLite database URLs")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    if not args.database_url.startswith("sqlite") and not args.allow_remote:
        CONSOLE.print("[red]Refusing to seed a non-SQLite database without --allow-remote[/]")
        raise SystemExit(2)

    rows = generate_rows(seed_today(), args.days, args.per_day, args.seed)
    tally = tally_by_day(rows)
    print_tally(tally)

    if args.dry_run:
        CONSOLE.print(Panel.fit(f"[DRY] {len(rows)} rows not written", title="Dry Run", border_style="magenta"))
    else:
        repository = SQLNotificationLogRepository(build_engine(args.database_url), create_tables=True)
        written = repository.add_rows(rows)
        CONSOLE.print(f"[green]✔ Wrote {written} rows to {args.database_url}[/]")

    if args.excel:
        export_excel(tally, args.excel)


if __name__ == "__main__":
    main()
