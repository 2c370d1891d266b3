"""Community settings — load ``config/community.yaml``.

Expected layout::

    catalog:   {ttl_sec: 300, base_url: null, timeout_sec: 10}
    trends:    {default_period: 30days, precision: 1}
    analytics: {highest_impact_id: null, resolved_statuses: [cerrado]}
    alert:
      rules:
        - {level: red, high_impact_over: 40, top_attack_over: 60}
        - {level: yellow, high_impact_over: 20, top_attack_over: 40}

Every key is optional; missing values fall back to the defaults below.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from safetrade.community.alert_classifier import DEFAULT_RULES, AlertRule
from safetrade.community.analytics import DEFAULT_RESOLVED_STATUSES
from safetrade.community.catalog_cache import DEFAULT_TTL_SEC
from safetrade.community.catalog_client import DEFAULT_TIMEOUT_SEC
from safetrade.community.trends import DEFAULT_PRECISION
from safetrade.contracts.enums import AlertLevel, TrendPeriod
from safetrade.shared.config_loader import load_yaml

log = logging.getLogger(__name__)

CONFIG_FILE = "community.yaml"


@dataclass
class CommunitySettings:
    catalog_ttl_sec: float = DEFAULT_TTL_SEC
    catalog_url: str | None = None
    catalog_timeout_sec: float = DEFAULT_TIMEOUT_SEC
    default_period: TrendPeriod = TrendPeriod.THIRTY_DAYS
    precision: int = DEFAULT_PRECISION
    highest_impact_id: int | None = None
    resolved_statuses: tuple[str, ...] = DEFAULT_RESOLVED_STATUSES
    alert_rules: tuple[AlertRule, ...] = field(default_factory=lambda: DEFAULT_RULES)


def _parse_rules(raw: Any) -> tuple[AlertRule, ...]:
    if raw is None:
        return DEFAULT_RULES
    if not isinstance(raw, list) or not raw:
        raise ValueError("alert.rules must be a non-empty list")

    rules: list[AlertRule] = []
    for idx, item in enumerate(raw):
        try:
            level = AlertLevel(item["level"])
        except (KeyError, TypeError, ValueError):
            raise ValueError(f"alert.rules[{idx}]: unknown level {item!r}") from None
        if level is AlertLevel.GREEN:
            raise ValueError(f"alert.rules[{idx}]: green is the fallback level and cannot be a rule")
        rules.append(
            AlertRule(
                level=level,
                high_impact_over=float(item.get("high_impact_over", 100.0)),
                top_attack_over=float(item.get("top_attack_over", 100.0)),
            )
        )
    return tuple(rules)


def settings_from_dict(cfg: dict[str, Any]) -> CommunitySettings:
    """Build CommunitySettings from a parsed config mapping."""
    catalog = cfg.get("catalog") or {}
    trends = cfg.get("trends") or {}
    analytics = cfg.get("analytics") or {}
    alert = cfg.get("alert") or {}

    settings = CommunitySettings()
    settings.catalog_ttl_sec = float(catalog.get("ttl_sec", DEFAULT_TTL_SEC))
    settings.catalog_url = catalog.get("base_url") or None
    settings.catalog_timeout_sec = float(catalog.get("timeout_sec", DEFAULT_TIMEOUT_SEC))
    settings.default_period = TrendPeriod.parse(trends.get("default_period", TrendPeriod.THIRTY_DAYS))
    settings.precision = int(trends.get("precision", DEFAULT_PRECISION))

    highest = analytics.get("highest_impact_id")
    settings.highest_impact_id = int(highest) if highest is not None else None
    resolved = analytics.get("resolved_statuses")
    if resolved is not None:
        settings.resolved_statuses = tuple(str(s) for s in resolved)

    settings.alert_rules = _parse_rules(alert.get("rules"))

    if settings.catalog_ttl_sec < 0:
        raise ValueError("catalog.ttl_sec must be >= 0")
    if settings.precision < 0:
        raise ValueError("trends.precision must be >= 0")
    return settings


def load_settings(config_dir: str | Path = "config") -> CommunitySettings:
    """Load ``<config_dir>/community.yaml``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: On invalid values.
    """
    path = Path(config_dir) / CONFIG_FILE
    settings = settings_from_dict(load_yaml(path))
    log.info(
        "Loaded settings from %s: %d alert rules, catalog ttl %.0fs",
        path,
        len(settings.alert_rules),
        settings.catalog_ttl_sec,
    )
    return settings
