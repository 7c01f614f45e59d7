"""Example: rank teachers for the current month through the service layer (no Flask).

Controllers stay thin; the ranking rules live in RankingService.
"""

import importlib

from config import get_settings_module

from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.core.enums import PersonCategory, ScoringMode


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    service = container.ranking_service

    today = service.today()
    result = service.compute_ranking_for(PersonCategory.TEACHER, today.replace(day=1), today, ScoringMode.MERIT)
    print(f"{result.active_school_days} active school day(s)")
    for entry in result.top(5):
        print(entry.rank, "*" * entry.tier, entry.person.name, f"{entry.summary.attendance_percentage:.1f}%")


if __name__ == "__main__":
    main()
