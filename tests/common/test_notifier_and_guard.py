from datetime import date

from src.school_attendance.school_attendance.common.generation import RecomputeGuard
from src.school_attendance.school_attendance.common.observers import ChangeNotifier, StatusChanged
from src.school_attendance.school_attendance.core.enums import DailyStatus


def test_notifier_delivers_until_unsubscribed():
    notifier = ChangeNotifier()
    received = []
    unsubscribe = notifier.subscribe(received.append)
    change = StatusChanged("1001", date(2025, 3, 3), DailyStatus.SICK)

    notifier.publish(change)
    unsubscribe()
    unsubscribe()
    notifier.publish(change)

    assert received == [change]


def test_guard_only_accepts_latest_token():
    guard = RecomputeGuard()
    first = guard.begin()
    second = guard.begin()

    assert not guard.is_current(first)
    assert guard.is_current(second)
