"""Catalog reference data: attack types, impact levels, statuses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from safetrade.contracts.enums import CatalogKind

UNKNOWN_NAME = "Desconocido"

# Seed rows of the catalog tables (id -> name)
DEFAULT_ATTACK_TYPES: dict[int, str] = {
    1: "email",
    2: "SMS",
    3: "whatsapp",
    4: "llamada",
    5: "redes_sociales",
    6: "otro",
}

DEFAULT_IMPACTS: dict[int, str] = {
    1: "ninguno",
    2: "robo_datos",
    3: "robo_dinero",
    4: "cuenta_comprometida",
}

DEFAULT_STATUSES: dict[int, str] = {
    1: "nuevo",
    2: "revisado",
    3: "en_investigacion",
    4: "cerrado",
}

DISPLAY_NAMES: dict[CatalogKind, dict[str, str]] = {
    CatalogKind.ATTACK_TYPE: {
        "email": "Email",
        "SMS": "SMS",
        "whatsapp": "WhatsApp",
        "llamada": "Llamada telefónica",
        "redes_sociales": "Redes sociales",
        "otro": "Otro",
    },
    CatalogKind.IMPACT: {
        "ninguno": "Sin impacto",
        "robo_datos": "Robo de datos",
        "robo_dinero": "Robo de dinero",
        "cuenta_comprometida": "Cuenta comprometida",
    },
    CatalogKind.STATUS: {
        "nuevo": "Nuevo",
        "revisado": "Revisado",
        "en_investigacion": "En investigación",
        "cerrado": "Cerrado",
    },
}

# camelCase keys used by the catalog API, snake_case used in config/fixtures
_PAYLOAD_KEYS: dict[CatalogKind, tuple[str, str]] = {
    CatalogKind.ATTACK_TYPE: ("attackTypes", "attack_types"),
    CatalogKind.IMPACT: ("impacts", "impacts"),
    CatalogKind.STATUS: ("statuses", "statuses"),
}


def display_name(kind: CatalogKind, name: str) -> str:
    """Human-friendly label for a catalog name, or the name itself."""
    return DISPLAY_NAMES.get(kind, {}).get(name, name)


@dataclass(slots=True, frozen=True)
class CatalogEntry:
    """One row of a catalog table."""

    id: int
    name: str


@dataclass(slots=True)
class CatalogData:
    """Snapshot of the three catalogs backing report foreign keys."""

    attack_types: list[CatalogEntry] = field(default_factory=list)
    impacts: list[CatalogEntry] = field(default_factory=list)
    statuses: list[CatalogEntry] = field(default_factory=list)

    def entries(self, kind: CatalogKind) -> list[CatalogEntry]:
        if kind is CatalogKind.ATTACK_TYPE:
            return self.attack_types
        if kind is CatalogKind.IMPACT:
            return self.impacts
        return self.statuses

    def name_map(self, kind: CatalogKind) -> dict[int, str]:
        return {e.id: e.name for e in self.entries(kind)}

    def id_map(self, kind: CatalogKind) -> dict[str, int]:
        # first entry wins when a name is duplicated
        result: dict[str, int] = {}
        for e in self.entries(kind):
            result.setdefault(e.name, e.id)
        return result

    def is_complete(self) -> bool:
        return bool(self.attack_types and self.impacts and self.statuses)

    def to_dict(self) -> dict[str, list[dict[str, Any]]]:
        return {
            camel: [{"id": e.id, "name": e.name} for e in self.entries(kind)]
            for kind, (camel, _snake) in _PAYLOAD_KEYS.items()
        }

    @classmethod
    def from_dict(cls, payload: dict[str, Any]) -> CatalogData:
        """Build from ``{"attackTypes": [...], "impacts": [...], "statuses": [...]}``.

        snake_case keys are accepted as well. Rows must carry ``id`` and
        ``name``; a malformed row raises ``KeyError``/``ValueError``.
        """
        lists: dict[CatalogKind, list[CatalogEntry]] = {}
        for kind, (camel, snake) in _PAYLOAD_KEYS.items():
            rows = payload.get(camel)
            if rows is None:
                rows = payload.get(snake) or []
            lists[kind] = [CatalogEntry(id=int(r["id"]), name=str(r["name"])) for r in rows]
        return cls(
            attack_types=lists[CatalogKind.ATTACK_TYPE],
            impacts=lists[CatalogKind.IMPACT],
            statuses=lists[CatalogKind.STATUS],
        )


def default_catalogs() -> CatalogData:
    """Built-in catalog used when the live catalog cannot be fetched."""
    return CatalogData(
        attack_types=[CatalogEntry(i, n) for i, n in DEFAULT_ATTACK_TYPES.items()],
        impacts=[CatalogEntry(i, n) for i, n in DEFAULT_IMPACTS.items()],
        statuses=[CatalogEntry(i, n) for i, n in DEFAULT_STATUSES.items()],
    )
