# Progress, score and weekly statistics for hydration history.
from __future__ import annotations

from datetime import date, timedelta
from typing import Iterable

from drinkwater.models.hydration import DailyHistoryRecord, DailyProgress, WeeklyDay, WeeklyStats
from drinkwater.services.formulas import round_half_up

DAY_LABELS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]   # date.weekday() order
WEEK_LENGTH = 7


def score_hydration(total_ml: int, target_ml: int) -> int:
    """Linear 0–100 against the target; capped at 100."""
    if total_ml <= 0:
        return 0
    ratio = total_ml / max(target_ml, 1)
    return int(round_half_up(min(ratio * 100, 100)))


def summarize_progress(consumed: int, target: int) -> DailyProgress:
    percentage = round_half_up(consumed / max(target, 1) * 100)
    if percentage >= 100:
        status = "goal_achieved"
    elif percentage >= 75:
        status = "almost_there"
    elif percentage >= 50:
        status = "halfway"
    else:
        status = "keep_going"
    return DailyProgress(
        percentage=percentage,
        remaining=max(0, target - consumed),
        score=score_hydration(consumed, target),
        status=status,
    )


def build_weekly_history(
    records: Iterable[DailyHistoryRecord],
    today: date,
    default_target: int,
) -> list[WeeklyDay]:
    """
    The seven days ending today, oldest first.
    Days without a record count as 0 ml against `default_target`.
    """
    by_day = {r.day: r for r in records}
    days: list[WeeklyDay] = []
    for offset in range(WEEK_LENGTH - 1, -1, -1):
        day = today - timedelta(days=offset)
        record = by_day.get(day)
        days.append(WeeklyDay(
            day=day,
            label=DAY_LABELS[day.weekday()],
            amount=record.amount if record else 0,
            target=record.target if record else default_target,
        ))
    return days


def weekly_stats(days: list[WeeklyDay]) -> WeeklyStats:
    if not days:
        return WeeklyStats(days=[], average_intake=0, goal_days=0, current_streak=0)

    average = round_half_up(sum(d.amount for d in days) / len(days))
    goal_days = sum(1 for d in days if d.amount >= d.target)

    # Consecutive goal days counted back from the most recent day
    streak = 0
    for d in reversed(days):
        if d.amount < d.target:
            break
        streak += 1

    return WeeklyStats(
        days=days,
        average_intake=average,
        goal_days=goal_days,
        current_streak=streak,
    )
