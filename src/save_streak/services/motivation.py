"""Mensajes de motivación y detección de logros para metas de ahorro.

Produce datos para las capas externas de display y notificaciones;
no envía nada por sí mismo.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date
from typing import Any

from save_streak.config.settings import settings
from save_streak.core.constants import (
    ALMOST_THERE_PROGRESS,
    FINAL_PUSH_DAYS,
    HALFWAY_PROGRESS,
    ON_FIRE_STREAK,
)
from save_streak.models.enums import Cadence, MilestoneType


@dataclass
class Achievement:
    """Un logro alcanzado con la última actualización de la meta."""

    type: MilestoneType
    title: str
    message: str
    streak: int | None = None

    def to_dict(self) -> dict:
        """Convierte a diccionario para serialización."""
        return {
            "type": self.type.value,
            "title": self.title,
            "message": self.message,
            "streak": self.streak,
        }


def format_amount(cents: int) -> str:
    """Formatea centavos como monto: 123456 -> "$1,234.56"."""
    sign = "-" if cents < 0 else ""
    whole, frac = divmod(abs(cents), 100)
    return f"{sign}${whole:,}.{frac:02d}"


def _progress(goal: Any) -> float:
    if goal.target_amount_cents <= 0:
        return 0.0
    return min(goal.total_saved_cents / goal.target_amount_cents, 1.0)


def streak_message(goal: Any) -> str:
    """Texto corto del badge de racha."""
    streak = goal.current_streak or 0
    if streak == 0:
        return "Start your streak today!"
    return f"🔥 {streak} {Cadence(goal.cadence).unit} streak!"


def motivational_message(goal: Any, at_risk: bool, today: date | None = None) -> str:
    """
    Mensaje motivacional según el estado de la meta.

    Prioridad: racha en riesgo, casi completa, racha larga,
    empuje final antes del deadline, mensaje por defecto.
    """
    today = today or date.today()
    streak = goal.current_streak or 0
    unit = Cadence(goal.cadence).unit

    if at_risk and streak > 0:
        return f"⚠️ Don't break your {streak}-{unit} streak!"

    if _progress(goal) >= ALMOST_THERE_PROGRESS:
        return "Almost there! You're so close!"

    if streak >= ON_FIRE_STREAK:
        return "You're on fire! Keep it going!"

    if goal.deadline is not None:
        days_remaining = (goal.deadline - today).days
        if days_remaining < FINAL_PUSH_DAYS:
            return f"Final push! {days_remaining} days left!"

    return "Every save counts. You got this! 💪"


def detect_achievements(
    goal: Any,
    previous_streak: int,
    previous_saved_cents: int,
    milestones: Iterable[int] | None = None,
) -> list[Achievement]:
    """
    Logros cruzados por la última actualización de la meta.

    Cada hito se dispara solo al cruzarlo: una racha que ya estaba en 7
    no vuelve a celebrar el hito de 7.

    Args:
        goal: Meta con el estado ya actualizado
        previous_streak: Racha antes de la actualización
        previous_saved_cents: Total ahorrado antes de la actualización
        milestones: Longitudes de racha a celebrar (por defecto las de settings)

    Returns:
        Lista de logros, en orden: rachas, mitad de camino, meta completada
    """
    milestones = sorted(milestones if milestones is not None else settings.streak_milestones)
    streak = goal.current_streak or 0
    unit = Cadence(goal.cadence).unit
    achievements: list[Achievement] = []

    for milestone in milestones:
        if previous_streak < milestone <= streak:
            achievements.append(
                Achievement(
                    type=MilestoneType.STREAK,
                    title=f"🎉 {milestone}-{unit.capitalize()} Streak!",
                    message=f"Amazing! You've saved {milestone} {unit}s in a row!",
                    streak=milestone,
                )
            )

    target = goal.target_amount_cents
    saved = goal.total_saved_cents
    if target <= 0:
        return achievements

    name = getattr(goal, "name", "savings")
    halfway = target * HALFWAY_PROGRESS
    if previous_saved_cents < halfway <= saved < target:
        achievements.append(
            Achievement(
                type=MilestoneType.HALFWAY,
                title="🎯 Halfway There!",
                message=f"You're 50% of the way to your {name} goal!",
            )
        )

    if previous_saved_cents < target <= saved:
        achievements.append(
            Achievement(
                type=MilestoneType.COMPLETED,
                title="🎊 Goal Completed!",
                message=f"Congratulations! You've reached your {name} goal!",
            )
        )

    return achievements


__all__ = [
    "Achievement",
    "detect_achievements",
    "format_amount",
    "motivational_message",
    "streak_message",
]
