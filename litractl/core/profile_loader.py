"""Loading and validation of the packaged YAML device profiles."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from functools import lru_cache
from importlib import resources
from importlib.resources.abc import Traversable
from types import MappingProxyType
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from litractl.core.errors import ProfileLoadError, ProfileValidationError
from litractl.core.model import DeviceProfile, DeviceType
from litractl.core.utils import multiples_within_range

LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ProfileValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@lru_cache(maxsize=None)
def _load_schema_validator() -> Any:
    schema_text = resources.files("litractl.schemas").joinpath("profile.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _read_yaml(path: Traversable) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ProfileLoadError(f"Could not read profile file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ProfileValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ProfileValidationError(f"Profile file {path} must contain a mapping at root")
    return loaded


def build_profile(doc: dict[str, Any], source: object) -> DeviceProfile:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ProfileValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    try:
        device_type = DeviceType(doc["id"])
    except ValueError as exc:
        raise ProfileValidationError(f"Unknown device type '{doc['id']}' in {source}") from exc

    brightness = doc["brightness"]
    if brightness["minimum_lumen"] > brightness["maximum_lumen"]:
        raise ProfileValidationError(
            f"{doc['id']}.brightness.minimum_lumen must not exceed maximum_lumen"
        )

    temperature = doc["temperature"]
    allowed = multiples_within_range(
        temperature["step_kelvin"],
        temperature["minimum_kelvin"],
        temperature["maximum_kelvin"],
    )
    if not allowed:
        raise ProfileValidationError(f"{doc['id']}.temperature allows no values")

    return DeviceProfile(
        device_type=device_type,
        name=doc["name"],
        minimum_brightness_in_lumen=brightness["minimum_lumen"],
        maximum_brightness_in_lumen=brightness["maximum_lumen"],
        allowed_temperatures_in_kelvin=allowed,
    )


def _iter_packaged_profile_paths() -> list[Traversable]:
    profile_root = resources.files("litractl.profiles")
    return [item for item in profile_root.iterdir() if item.name.endswith((".yml", ".yaml"))]


def build_profiles(docs: list[tuple[dict[str, Any], object]]) -> Mapping[DeviceType, DeviceProfile]:
    profiles: dict[DeviceType, DeviceProfile] = {}
    for doc, source in docs:
        profile = build_profile(doc, source)
        if profile.device_type in profiles:
            raise ProfileValidationError(
                f"Duplicate profile '{profile.device_type.value}' in {source}"
            )
        profiles[profile.device_type] = profile

    missing = [t.value for t in DeviceType if t not in profiles]
    if missing:
        raise ProfileValidationError(f"No profile defined for: {', '.join(missing)}")
    return MappingProxyType(profiles)


@lru_cache(maxsize=None)
def load_profiles() -> Mapping[DeviceType, DeviceProfile]:
    paths = sorted(_iter_packaged_profile_paths(), key=lambda p: p.name)
    profiles = build_profiles([(_read_yaml(path), path) for path in paths])
    LOGGER.debug("Loaded %d device profile(s)", len(profiles))
    return profiles
