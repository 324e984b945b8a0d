"""Join-key, id and name resolution shared by the pipeline and the runtime transformer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from geoenrich.common.constants import UNKNOWN_NAME
from geoenrich.common.errors import ConfigError


@dataclass(frozen=True)
class KeyPolicy:
    boundary_type: str
    join_fields: tuple[str, ...]
    id_fields: tuple[str, ...]
    name_fields: tuple[str, ...]


KEY_POLICIES: dict[str, KeyPolicy] = {
    "district": KeyPolicy(
        boundary_type="district",
        join_fields=("code_state_district", "code"),
        id_fields=("code_state_district", "code_district", "code", "id", "ID"),
        name_fields=("district", "name", "NAME"),
    ),
    "parliament": KeyPolicy(
        boundary_type="parliament",
        join_fields=("code_parlimen", "code"),
        id_fields=("code_parlimen", "code_state_parlimen", "code", "id", "ID"),
        name_fields=("parlimen", "name", "NAME"),
    ),
    "dun": KeyPolicy(
        boundary_type="dun",
        join_fields=("code_state_dun", "code_dun", "code"),
        id_fields=("code_state_dun", "code_dun", "code", "id", "ID"),
        name_fields=("dun", "name", "NAME"),
    ),
}


def policy_for(boundary_type: str) -> KeyPolicy:
    try:
        return KEY_POLICIES[boundary_type]
    except KeyError as exc:
        raise ConfigError(f"Unknown boundary type: {boundary_type}") from exc


def first_present(props: Mapping[str, Any], fields: Sequence[str]) -> str:
    """Return the first candidate whose value is non-empty, as a stripped string."""
    for field in fields:
        value = props.get(field)
        if value is None:
            continue
        text = str(value).strip()
        if text:
            return text
    return ""


def resolve_join_key(boundary_type: str, props: Mapping[str, Any]) -> str:
    return first_present(props, policy_for(boundary_type).join_fields)


def resolve_feature_id(boundary_type: str, props: Mapping[str, Any]) -> str:
    return first_present(props, policy_for(boundary_type).id_fields)


def resolve_display_name(boundary_type: str, props: Mapping[str, Any]) -> str:
    return first_present(props, policy_for(boundary_type).name_fields) or UNKNOWN_NAME
