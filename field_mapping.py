# field_mapping.py
from __future__ import annotations

from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, field_validator

# Semantic fields a route-distance upload must be mapped onto
FIELD_KEYS: tuple[str, ...] = (
    "source_3dz",
    "source_5dz",
    "source_country",
    "dest_3dz",
    "dest_5dz",
    "dest_country",
)

FIELD_LABELS: dict[str, str] = {
    "source_3dz": "Origin 3DZ",
    "source_5dz": "Origin 5DZ",
    "source_country": "Origin Country",
    "dest_3dz": "Destination 3DZ",
    "dest_5dz": "Destination 5DZ",
    "dest_country": "Destination Country",
}

ORIGIN_KEYS = ("source_3dz", "source_5dz", "source_country")
DESTINATION_KEYS = ("dest_3dz", "dest_5dz", "dest_country")
REQUIRED_KEYS = ("source_country", "dest_country")


class FieldMapping(BaseModel):
    """Uploaded column chosen for each semantic field; None means unmapped."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    source_3dz: Optional[str] = None
    source_5dz: Optional[str] = None
    source_country: Optional[str] = None
    dest_3dz: Optional[str] = None
    dest_5dz: Optional[str] = None
    dest_country: Optional[str] = None

    @field_validator(*FIELD_KEYS, mode="before")
    @classmethod
    def _blank_is_unset(cls, value):
        if value is None:
            return None
        value = str(value)
        return value if value.strip() else None

    def merged(self, partial: Mapping[str, Optional[str]]) -> "FieldMapping":
        """New mapping with ``partial`` applied on top; unknown keys are rejected."""
        unknown = set(partial) - set(FIELD_KEYS)
        if unknown:
            raise ValueError(f"Unknown mapping field(s): {', '.join(sorted(unknown))}")
        data = self.model_dump()
        data.update(partial)
        return FieldMapping(**data)

    def columns_in_use(self, exclude: Optional[str] = None) -> set[str]:
        """Columns already assigned to a field other than ``exclude``."""
        return {
            value for key, value in self.model_dump().items()
            if value and key != exclude
        }

    def available_columns(self, columns: list[str], key: str) -> list[str]:
        """Columns selectable for ``key``: everything not taken by another field."""
        taken = self.columns_in_use(exclude=key)
        return [c for c in columns if c not in taken]

    def to_form(self) -> dict[str, str]:
        """Only the mapped fields; unmapped ones are not sent at all."""
        return {key: value for key, value in self.model_dump().items() if value}


def can_submit_mapping(mapping: FieldMapping) -> bool:
    """
    True iff both countries are mapped and each side has at least one ZIP
    field (3DZ or 5DZ) mapped.
    """
    return bool(
        mapping.source_country
        and mapping.dest_country
        and (mapping.source_3dz or mapping.source_5dz)
        and (mapping.dest_3dz or mapping.dest_5dz)
    )
