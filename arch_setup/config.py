from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .errors import PreconditionError

DEFAULT_MANIFEST_PATH = Path(__file__).resolve().parent / "manifests" / "default.yaml"


@dataclass(frozen=True)
class RunConfig:
    """Flags resolved once from the command line. Read-only for every step."""

    dry_run: bool = False
    verbose: bool = False


@dataclass(frozen=True)
class SetupManifest:
    """Declarative action tables, one section per step."""

    raw: Dict[str, Any] = field(default_factory=dict)
    source: str = "<memory>"

    @property
    def vars(self) -> Dict[str, Any]:
        return dict(self.raw.get("vars") or {})

    @property
    def steps(self) -> Dict[str, Any]:
        return dict(self.raw.get("steps") or {})

    def section(self, name: str) -> Dict[str, Any]:
        data = self.steps.get(name)
        if data is None:
            raise PreconditionError(f"{self.source}: missing steps.{name}")
        if not isinstance(data, dict):
            raise PreconditionError(f"{self.source}: steps.{name} must be a mapping")
        return data

    def actions(self, name: str, key: str = "actions") -> List[Mapping[str, Any]]:
        templates = self.section(name).get(key) or []
        if not isinstance(templates, list):
            raise PreconditionError(f"{self.source}: steps.{name}.{key} must be a list")
        for t in templates:
            if not isinstance(t, dict) or not t.get("program"):
                raise PreconditionError(f"{self.source}: steps.{name}.{key} entries need a program")
        return templates


def load_manifest(path: Optional[str] = None) -> SetupManifest:
    p = Path(path) if path else DEFAULT_MANIFEST_PATH
    if not p.exists():
        raise PreconditionError(f"Manifest not found: {p}")

    if p.suffix.lower() not in {".yaml", ".yml"}:
        raise PreconditionError(f"Manifest must be YAML: {p}")

    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8")) or {}
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        raise PreconditionError(f"Invalid manifest {p}: {e}") from e
    if not isinstance(raw, dict):
        raise PreconditionError(f"Manifest must contain a mapping/object: {p}")

    return SetupManifest(raw=raw, source=str(p))
