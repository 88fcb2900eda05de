"""Dashboard aggregate counts."""

from __future__ import annotations

import asyncio
from datetime import date, timedelta
from typing import Dict, Optional, Tuple

from supabase_service.supabase_adapter import SupabaseAdapter


def day_bounds(today: Optional[date] = None) -> Tuple[str, str]:
    """Return ``[today, tomorrow)`` as ISO dates for the local calendar day."""

    today = today or date.today()
    return today.isoformat(), (today + timedelta(days=1)).isoformat()


async def collect_dashboard_stats(
    data_client: SupabaseAdapter,
    today: Optional[date] = None,
) -> Dict[str, int]:
    """Run the four counts concurrently; any failure fails the whole call."""

    start, end = day_bounds(today)
    patients, doctors, appointments, appointments_today = await asyncio.gather(
        data_client.count("patients"),
        data_client.count("doctors"),
        data_client.count("appointments"),
        data_client.count(
            "appointments",
            filters=[
                ("appointment_date", "gte", start),
                ("appointment_date", "lt", end),
            ],
        ),
    )

    return {
        "totalPatients": patients or 0,
        "totalDoctors": doctors or 0,
        "totalAppointments": appointments or 0,
        "appointmentsToday": appointments_today or 0,
    }
