#!/usr/bin/env python3
"""
Session defaults store.

Holds default tool parameters (scheme, simulator, project, ...) in a global
profile plus any number of named profiles. Each profile is an independent
map: a named profile never falls back to the global profile's values.
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

logger = logging.getLogger(__name__)

SESSION_DEFAULT_KEYS = (
    "scheme",
    "configuration",
    "simulatorId",
    "simulatorName",
    "deviceId",
    "projectPath",
    "workspacePath",
    "useLatestOS",
    "arch",
    "derivedDataPath",
    "preferXcodebuild",
    "platform",
    "bundleId",
    "suppressWarnings",
    "env",
)


class SessionStore:
    def __init__(self):
        self._global: Dict[str, Any] = {}
        self._profiles: Dict[str, Dict[str, Any]] = {}
        self._active_profile: Optional[str] = None

    def _active_map(self) -> Dict[str, Any]:
        if self._active_profile is None:
            return self._global
        return self._profiles.setdefault(self._active_profile, {})

    def set_defaults(self, partial: Mapping[str, Any]) -> None:
        """
        Merge values into the active profile.

        Keys present overwrite, absent keys are untouched, and keys whose value
        is None are ignored. Use clear_keys() to remove a key.
        """
        values = {key: value for key, value in partial.items() if value is not None}
        if isinstance(values.get("env"), dict):
            values["env"] = dict(values["env"])
        self._active_map().update(values)
        logger.debug("Session defaults updated for %s: %s", self.active_profile_label, sorted(values))

    def get_all(self) -> Dict[str, Any]:
        snapshot = dict(self._active_map())
        if isinstance(snapshot.get("env"), dict):
            snapshot["env"] = dict(snapshot["env"])
        return snapshot

    def get(self, key: str, default: Any = None) -> Any:
        return self._active_map().get(key, default)

    def clear_keys(self, keys: Iterable[str]) -> None:
        active = self._active_map()
        for key in keys:
            active.pop(key, None)

    def clear_profile(self) -> None:
        """Empty the active profile's map, keeping the profile itself."""
        self._active_map().clear()

    def set_active_profile(self, name: Optional[str]) -> None:
        self._active_profile = name
        if name is not None:
            self._profiles.setdefault(name, {})

    def get_active_profile(self) -> Optional[str]:
        return self._active_profile

    @property
    def active_profile_label(self) -> str:
        return self._active_profile if self._active_profile is not None else "global"

    def create_profile(self, name: str) -> None:
        self._profiles.setdefault(name, {})

    def has_profile(self, name: str) -> bool:
        return name in self._profiles

    def list_profiles(self) -> List[str]:
        return sorted(self._profiles)

    def load(self,
             global_defaults: Optional[Mapping[str, Any]] = None,
             profiles: Optional[Mapping[str, Mapping[str, Any]]] = None,
             active_profile: Optional[str] = None) -> None:
        """Seed the store, typically from the project config file at startup."""
        if global_defaults:
            self._global.update({k: v for k, v in global_defaults.items() if v is not None})
        for name, values in (profiles or {}).items():
            self._profiles.setdefault(name, {}).update(
                {k: v for k, v in (values or {}).items() if v is not None}
            )
        if active_profile is not None:
            self.set_active_profile(active_profile)

    def clear_all_values(self) -> None:
        """Empty the global map and every named profile, then switch back to global."""
        self._global.clear()
        for values in self._profiles.values():
            values.clear()
        self._active_profile = None

    def clear(self) -> None:
        """Reset every profile and the active pointer. Test setup/teardown only."""
        self._global = {}
        self._profiles = {}
        self._active_profile = None


_default_store = SessionStore()


def get_session_store() -> SessionStore:
    return _default_store
