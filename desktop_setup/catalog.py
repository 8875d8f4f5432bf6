from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import yaml

from .pipeline import Policy, Step
from .steps import (
    AptInstallStep,
    AptUpgradeStep,
    ConfigMapping,
    ConfigSyncStep,
    DebPackageStep,
    EnableServiceStep,
    FlatpakInstallStep,
    FlatpakRemoteStep,
    InstallerScriptStep,
    SnapAppsStep,
    UserGroupsStep,
)

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parent / "manifests" / "catalog.yaml"


class CatalogError(ValueError):
    pass


@dataclass(frozen=True)
class Catalog:
    steps: List[Step]
    reminders: List[str]


def _require(entry: Dict[str, Any], key: str) -> Any:
    value = entry.get(key)
    if value in (None, ""):
        raise CatalogError(f"step {entry.get('id')!r}: missing {key!r}")
    return value


def _optional_str(entry: Dict[str, Any], key: str) -> Optional[str]:
    value = entry.get(key)
    if value is None or str(value).strip() == "":
        return None
    return str(value).strip()


def _str_list(entry: Dict[str, Any], key: str) -> List[str]:
    value = entry.get(key) or []
    if not isinstance(value, list):
        raise CatalogError(f"step {entry.get('id')!r}: {key!r} must be a list")
    return [str(v).strip() for v in value if str(v).strip()]


def _mappings(entry: Dict[str, Any]) -> List[ConfigMapping]:
    out: List[ConfigMapping] = []
    for m in _require(entry, "mappings"):
        if not isinstance(m, dict):
            raise CatalogError(f"step {entry.get('id')!r}: each mapping must be a mapping/dict")
        out.append(ConfigMapping(repo=str(_require(m, "repo")), path=str(_require(m, "path")), dest=str(_require(m, "dest"))))
    return out


_BUILDERS: Dict[str, Callable[[str, Policy, Dict[str, Any]], Step]] = {
    "apt_upgrade": lambda sid, pol, e: AptUpgradeStep(step_id=sid, policy=pol),
    "apt_install": lambda sid, pol, e: AptInstallStep(step_id=sid, packages=_str_list(e, "packages"), policy=pol),
    "flatpak_remote": lambda sid, pol, e: FlatpakRemoteStep(
        step_id=sid, name=str(_require(e, "name")), url=str(_require(e, "url")), policy=pol
    ),
    "flatpak_install": lambda sid, pol, e: FlatpakInstallStep(
        step_id=sid, remote=str(_require(e, "remote")), apps=_str_list(e, "apps"), policy=pol
    ),
    "service": lambda sid, pol, e: EnableServiceStep(step_id=sid, unit=str(_require(e, "unit")), policy=pol),
    "user_groups": lambda sid, pol, e: UserGroupsStep(step_id=sid, groups=_str_list(e, "groups"), policy=pol),
    "deb_package": lambda sid, pol, e: DebPackageStep(
        step_id=sid,
        package=str(_require(e, "package")),
        url=str(_require(e, "url")),
        label=str(e.get("label") or ""),
        policy=pol,
    ),
    "installer_script": lambda sid, pol, e: InstallerScriptStep(
        step_id=sid,
        label=str(e.get("label") or sid),
        url=str(_require(e, "url")),
        args=_str_list(e, "args"),
        binary=_optional_str(e, "binary"),
        sha256=_optional_str(e, "sha256"),
        policy=pol,
    ),
    "snap": lambda sid, pol, e: SnapAppsStep(
        step_id=sid, apps=_str_list(e, "apps"), classic=bool(e.get("classic", True)), policy=pol
    ),
    "config_sync": lambda sid, pol, e: ConfigSyncStep(
        step_id=sid, base_url=str(_require(e, "base_url")), mappings=_mappings(e), policy=pol
    ),
}


def build_step(entry: Dict[str, Any]) -> Step:
    if not isinstance(entry, dict):
        raise CatalogError(f"step entries must be mappings, got {type(entry).__name__}")

    step_id = str(_require(entry, "id"))
    kind = str(_require(entry, "kind"))
    raw_policy = _require(entry, "policy")

    try:
        policy = Policy(str(raw_policy))
    except ValueError as e:
        raise CatalogError(f"step {step_id!r}: unknown policy {raw_policy!r}") from e

    builder = _BUILDERS.get(kind)
    if builder is None:
        raise CatalogError(f"step {step_id!r}: unknown kind {kind!r}")
    return builder(step_id, policy, entry)


def parse_catalog(data: Any) -> Catalog:
    if not isinstance(data, dict):
        raise CatalogError("catalog must be a mapping/dict")

    entries = data.get("steps") or []
    if not isinstance(entries, list):
        raise CatalogError("catalog: steps must be a list")

    steps = [build_step(e) for e in entries]
    seen: set[str] = set()
    for s in steps:
        if s.step_id in seen:
            raise CatalogError(f"duplicate step id {s.step_id!r}")
        seen.add(s.step_id)

    reminders = data.get("reminders") or []
    if not isinstance(reminders, list):
        raise CatalogError("catalog: reminders must be a list")

    return Catalog(steps=steps, reminders=[str(r) for r in reminders])


def load_catalog(path: Optional[str] = None) -> Catalog:
    p = Path(path) if path else DEFAULT_CATALOG_PATH
    data = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    catalog = parse_catalog(data)
    logger.info("Loaded %d steps from %s", len(catalog.steps), str(p))
    return catalog
