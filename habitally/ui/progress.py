# ui/progress.py

from datetime import datetime, tzinfo
from typing import Optional

from habitally.core.statistics import Tracked, current_streak

# (минимальная серия, значок) от большей к меньшей
STREAK_BADGES = (
    (30, "🏆"),
    (7, "🔥"),
    (3, "✨"),
    (0, "🔹"),
)


def percent(ratio: float) -> int:
    """Доля 0..1 -> целый процент 0..100"""
    return int(round(max(0.0, min(ratio, 1.0)) * 100))


def progress_bar(percent_done: int, length: int = 12):
    """Генерирует текстовый progress bar (emoji/блоки)"""
    percent_done = max(0, min(percent_done, 100))
    done = int(length * percent_done // 100)
    todo = length - done
    return "🟩" * done + "⬜️" * todo + f" {percent_done}%"


def streak_emoji(streak: int) -> str:
    return next((badge for minimum, badge in STREAK_BADGES if streak >= minimum), STREAK_BADGES[-1][1])


def streak_badge(item: Tracked, now: Optional[datetime] = None, tz: Optional[tzinfo] = None) -> str:
    """Текущая серия привычки или распорядка: '🔥 12'"""
    streak = current_streak(item, now, tz)
    return f"{streak_emoji(streak)} {streak}"


def format_minutes(total: int) -> str:
    """90 -> '1h 30m', 45 -> '45m'"""
    if total >= 60:
        return f"{total // 60}h {total % 60}m"
    return f"{total}m"
