"""Map community aggregates to a green, yellow or red alert level.

Decision table (first matching rule wins, strict ``>`` comparisons):

    ┌────────┬────────────────────┬───────────────────┐
    │ level  │ high-impact share  │ top attack share  │
    ├────────┼────────────────────┼───────────────────┤
    │ red    │ > 40 %             │ or > 60 %         │
    │ yellow │ > 20 %             │ or > 40 %         │
    │ green  │ otherwise                              │
    └────────┴────────────────────────────────────────┘

With no reports at all the high-impact share is undefined; that case is
answered with ``green`` before any division happens.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from safetrade.contracts.enums import AlertLevel
from safetrade.contracts.insights import AlertState, AnalyticsOverview, TrendSummary

log = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class AlertRule:
    """Fires when either share strictly exceeds its threshold."""

    level: AlertLevel
    high_impact_over: float
    top_attack_over: float

    def matches(self, high_impact_pct: float, top_attack_pct: float) -> bool:
        return high_impact_pct > self.high_impact_over or top_attack_pct > self.top_attack_over


DEFAULT_RULES: tuple[AlertRule, ...] = (
    AlertRule(AlertLevel.RED, high_impact_over=40.0, top_attack_over=60.0),
    AlertRule(AlertLevel.YELLOW, high_impact_over=20.0, top_attack_over=40.0),
)

FALLBACK_LEVEL = AlertLevel.GREEN

MESSAGES: dict[AlertLevel, str] = {
    AlertLevel.RED: (
        "Se ha detectado un incremento significativo en ataques cibernéticos. "
        "{main_threat} es la amenaza predominante."
    ),
    AlertLevel.YELLOW: "Actividad cibernética elevada detectada. {main_threat} requiere atención.",
    AlertLevel.GREEN: (
        "Actividad cibernética dentro de parámetros normales. "
        "Continúa con buenas prácticas de seguridad."
    ),
}

RECOMMENDATIONS: dict[AlertLevel, tuple[str, ...]] = {
    AlertLevel.RED: (
        "Evita hacer clic en enlaces sospechosos",
        "Verifica todas las comunicaciones antes de actuar",
        "Mantén actualizados todos tus sistemas",
        "Considera usar autenticación de dos factores",
        "Reporta cualquier actividad sospechosa inmediatamente",
    ),
    AlertLevel.YELLOW: (
        "Mantente alerta ante comunicaciones inusuales",
        "Verifica la autenticidad de mensajes importantes",
        "Revisa regularmente la configuración de privacidad",
        "Reporta incidentes para ayudar a la comunidad",
    ),
    AlertLevel.GREEN: (
        "Continúa con buenas prácticas de ciberseguridad",
        "Mantén actualizados tus sistemas",
        "Participa en la comunidad reportando incidentes",
        "Comparte conocimientos de seguridad con otros",
    ),
}


def classify_level(
    high_impact_pct: float,
    top_attack_pct: float,
    rules: tuple[AlertRule, ...] | list[AlertRule] = DEFAULT_RULES,
) -> AlertLevel:
    """Walk *rules* in order and return the first level that matches."""
    for rule in rules:
        if rule.matches(high_impact_pct, top_attack_pct):
            return rule.level
    return FALLBACK_LEVEL


def high_impact_percentage(overview: AnalyticsOverview) -> float | None:
    """Share of highest-impact reports, or None when there are no reports."""
    if overview.total_reports <= 0:
        return None
    return overview.highest_impact_count / overview.total_reports * 100


def render_message(level: AlertLevel, main_threat: str) -> str:
    return MESSAGES[level].format(main_threat=main_threat)


def classify_alert(
    overview: AnalyticsOverview,
    trends: TrendSummary,
    generated_at: str,
    rules: tuple[AlertRule, ...] | list[AlertRule] = DEFAULT_RULES,
) -> AlertState:
    """Build the AlertState for the given aggregates.

    Only *generated_at* carries time; level, message and recommendations
    depend on *overview* and *trends* alone.
    """
    high_pct = high_impact_percentage(overview)
    if high_pct is None:
        level = FALLBACK_LEVEL
        log.debug("No reports — alert defaults to %s", level.value)
    else:
        level = classify_level(high_pct, trends.top_attack_percentage, rules)
        log.info(
            "Alert level %s (high_impact=%.1f%%, top_attack=%.1f%%)",
            level.value,
            high_pct,
            trends.top_attack_percentage,
        )

    return AlertState(
        level=level,
        message=render_message(level, trends.main_threat),
        generated_at=generated_at,
        recommendations=list(RECOMMENDATIONS[level]),
    )
