"""Print the stored machines and users as plain-text tables."""

import asyncio
from typing import List, Sequence

from sqlalchemy import select

from runtracker.core.database import SessionFactory, engine
from runtracker.models.user import User
from runtracker.repositories.machine_repository import MachineRepository

MS_PER_HOUR = 3_600_000


def render_table(headers: Sequence[str], rows: List[List[str]]) -> str:
    if not rows:
        return "_No rows found._"

    col_widths = [
        max(len(str(row[i])) for row in ([list(headers)] + rows))
        for i in range(len(headers))
    ]

    header_line = " | ".join(headers[i].ljust(col_widths[i]) for i in range(len(headers)))
    divider = "-+-".join("-" * col_widths[i] for i in range(len(headers)))
    data_lines = [
        " | ".join(row[i].ljust(col_widths[i]) for i in range(len(headers)))
        for row in rows
    ]
    return "\n".join([header_line, divider] + data_lines)


def format_hours(ms: int) -> str:
    return f"{ms / MS_PER_HOUR:.2f}h"


async def collect_tables() -> str:
    async with SessionFactory() as session:
        machines = await MachineRepository(session).list_all()
        users = (await session.execute(select(User).order_by(User.id))).scalars().all()

    machine_rows = [
        [
            m.id,
            m.status.value,
            format_hours(m.accumulated_time),
            format_hours(m.target_time),
            str(m.was_running_before_outage),
        ]
        for m in machines
    ]
    user_rows = [[str(u.id), u.username] for u in users]

    return "\n".join([
        "Machines:",
        render_table(["ID", "Status", "Accumulated", "Target", "RunningBeforeOutage"], machine_rows),
        "",
        "Users:",
        render_table(["ID", "Username"], user_rows),
    ])


async def main() -> None:
    try:
        print(await collect_tables())
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
