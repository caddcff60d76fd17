from __future__ import annotations

import getpass
from typing import Any, Mapping, Optional

from ..errors import PreconditionError


class TemplateVars(dict):
    """Lazily resolved placeholders for action templates.

    `home` and `user` are looked up only when a template uses them, so a
    missing $HOME fails just the steps that need it. Manifest vars may
    reference each other.
    """

    def __init__(
        self,
        environ: Mapping[str, str],
        manifest_vars: Optional[Mapping[str, Any]] = None,
        **fixed: Any,
    ) -> None:
        super().__init__(fixed)
        self._environ = environ
        self._manifest_vars = dict(manifest_vars or {})
        self._resolving: set[str] = set()

    def child(self, **extra: Any) -> "TemplateVars":
        out = TemplateVars(self._environ, self._manifest_vars)
        out.update(self)
        out.update(extra)
        return out

    def __missing__(self, key: str) -> str:
        if key == "home":
            value = self._environ.get("HOME")
            if not value:
                raise PreconditionError("HOME is not set; cannot resolve {home}")
        elif key == "user":
            value = self._environ.get("USER") or getpass.getuser()
        elif key in self._manifest_vars:
            if key in self._resolving:
                raise PreconditionError(f"Template variable {key!r} references itself")
            self._resolving.add(key)
            try:
                value = render(str(self._manifest_vars[key]), self)
            finally:
                self._resolving.discard(key)
        else:
            raise PreconditionError(f"Unknown template variable {{{key}}}")
        self[key] = value
        return value


def render(template: str, variables: TemplateVars) -> str:
    try:
        return template.format_map(variables)
    except (ValueError, IndexError) as e:
        raise PreconditionError(f"Bad template {template!r}: {e}") from e


def render_all(values: Any, variables: TemplateVars) -> list[str]:
    if values is None:
        return []
    if isinstance(values, (str, int, float)):
        values = [values]
    return [render(str(v), variables) for v in values]
