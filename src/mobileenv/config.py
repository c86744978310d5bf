"""Detection options shared by every subsystem detector.

``DetectOptions`` carries the one flag the orchestrator itself reads
(``bypass_cache``) plus the subsystem-specific settings that are passed
through, unmodified, to each detector. Options can be built in code, from
a mapping (camelCase keys as written in JSON tool configs are
accepted alongside snake_case), or from a YAML file:

.. code-block:: yaml

    bypassCache: true
    androidHomePath: ~/android
    minIosVersion: "15.0"
    profileDir: ~/Library/MobileDevice/Provisioning Profiles
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from mobileenv.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

_CAMEL_RE = re.compile(r"(?<!^)(?=[A-Z])")

# Options that must hold a real boolean.
_BOOL_FIELDS = ("bypass_cache", "valid_only")


def _snake_case(key: str) -> str:
    """Convert ``androidHomePath`` to ``android_home_path``."""
    return _CAMEL_RE.sub("_", key).lower()


@dataclass(frozen=True)
class DetectOptions:
    """Options passed to the orchestrator and every detector.

    Attributes:
        bypass_cache: Re-run every detector even if a cached report exists.
        app_id: Application identifier used to filter provisioning profiles.
        android_home_path: Path to the Android home directory.
        sdk_path: Path to a known Android SDK directory.
        ndk_path: Path to a known Android NDK directory.
        min_ios_version: Minimum iOS SDK version to detect.
        min_watchos_version: Minimum watchOS SDK version to detect.
        profile_dir: Directory to search for provisioning profiles.
        security: Path to the ``security`` executable.
        supported_versions: Version or range an Xcode install must satisfy.
        type: Simulator type filter ("iphone" or "ipad"); None means all.
        valid_only: Only report non-expired, valid certificates.
        xcode_select: Path to the ``xcode-select`` executable.
        extra: Any other subsystem-specific keys, passed through untouched.
    """

    bypass_cache: bool = False
    app_id: str | None = None
    android_home_path: str | None = None
    sdk_path: str | None = None
    ndk_path: str | None = None
    min_ios_version: str | None = None
    min_watchos_version: str | None = None
    profile_dir: str | None = None
    security: str | None = None
    supported_versions: str | None = None
    type: str | None = None
    valid_only: bool = True
    xcode_select: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> DetectOptions:
        """Build options from a mapping of camelCase or snake_case keys.

        Unknown keys are kept in ``extra`` so detectors still see them.

        Raises:
            ConfigurationError: If a boolean option holds a non-boolean value.
        """
        if not data:
            return cls()
        known = {f.name for f in fields(cls)} - {"extra"}
        kwargs: dict[str, Any] = {}
        extra: dict[str, Any] = dict(data.get("extra") or {})
        for key, value in data.items():
            if key == "extra":
                continue
            name = _snake_case(key)
            if name not in known:
                extra[key] = value
                continue
            if name in _BOOL_FIELDS and not isinstance(value, bool):
                raise ConfigurationError(
                    f"Option '{key}' must be a boolean, got {type(value).__name__}"
                )
            kwargs[name] = value
        return cls(extra=extra, **kwargs)

    @classmethod
    def from_yaml(cls, path: Path | str) -> DetectOptions:
        """Load options from a YAML file.

        An empty file yields default options.

        Raises:
            ConfigurationError: If the file cannot be read, is not valid
                YAML, or does not contain a mapping.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigurationError(f"Cannot read options file {path}: {exc}") from exc
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in options file {path}: {exc}") from exc
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Options file {path} must contain a mapping, got {type(data).__name__}"
            )
        logger.debug("Loaded detection options from %s", path)
        return cls.from_mapping(data)

    def to_mapping(self) -> dict[str, Any]:
        """Return the options as a flat snake_case dict (extras merged in)."""
        data = {f.name: getattr(self, f.name) for f in fields(self) if f.name != "extra"}
        data.update(self.extra)
        return data

    def with_overrides(self, **overrides: Any) -> DetectOptions:
        """Return a copy with the given fields replaced."""
        return replace(self, **overrides)

    def get(self, key: str, default: Any = None) -> Any:
        """Look up an option by name, falling back to ``extra``."""
        name = _snake_case(key)
        if name != "extra" and name in {f.name for f in fields(self)}:
            return getattr(self, name)
        return self.extra.get(key, default)
