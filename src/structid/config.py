from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Mapping, Optional, Type, TypeVar

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .charset import Charset
from .checksums import Algorithm
from .errors import ProfileNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_GROUPS = 4
DEFAULT_GROUP_SIZE = 4


# ---- Per-operation options (immutable, explicit defaults) ----
class _ShapeOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    groups: int = Field(default=DEFAULT_GROUPS, ge=1)
    group_size: int = Field(default=DEFAULT_GROUP_SIZE, ge=1)
    total_length: Optional[int] = None  # overrides groups * group_size when set
    charset: Charset = "numeric"
    algorithm: Algorithm = "none"
    pattern: Optional[str] = None  # '#' = generated character; supersedes grouping

    @property
    def expected_length(self) -> int:
        if self.total_length is not None:
            return self.total_length
        return self.groups * self.group_size

    @property
    def pattern_text(self) -> str:
        """Trimmed pattern, empty when pattern mode is off."""
        return (self.pattern or "").strip()


class GenerateOptions(_ShapeOptions):
    separator: Optional[str] = None
    rng: Optional[Callable[[], float]] = None  # uniform float in [0, 1)
    use_crypto: bool = False


class ValidateOptions(_ShapeOptions):
    pass


class FormatOptions(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    groups: int = Field(default=DEFAULT_GROUPS, ge=1)
    group_size: int = Field(default=DEFAULT_GROUP_SIZE, ge=1)
    separator: str = " "
    charset: Charset = "numeric"


OptionsT = TypeVar("OptionsT", bound=BaseModel)


def coerce_options(
    cls: Type[OptionsT],
    options: BaseModel | Mapping[str, Any] | None,
    overrides: Mapping[str, Any],
) -> OptionsT:
    """
    Build a ``cls`` instance from an options model or mapping plus keyword overrides.

    Only fields that ``cls`` declares are carried over from ``options`` and
    ``overrides``, so the options (or keywords) that generated an identifier
    can be reused to validate it.
    """
    if isinstance(options, cls) and not overrides:
        return options

    data: Dict[str, Any] = {}
    if isinstance(options, BaseModel):
        data.update({k: getattr(options, k) for k in options.model_fields_set if k in cls.model_fields})
    elif options is not None:
        data.update({k: v for k, v in options.items() if k in cls.model_fields})
    data.update({k: v for k, v in overrides.items() if k in cls.model_fields})
    return cls(**data)


# ---- Named profiles (toggle and tune without code changes) ----
class Profile(BaseModel):
    model_config = ConfigDict(extra="forbid")

    groups: Optional[int] = Field(default=None, ge=1)
    group_size: Optional[int] = Field(default=None, ge=1)
    total_length: Optional[int] = None
    separator: Optional[str] = None
    charset: Optional[Charset] = None
    algorithm: Optional[Algorithm] = None
    pattern: Optional[str] = None
    use_crypto: Optional[bool] = None

    def as_options(self) -> Dict[str, Any]:
        return {k: v for k, v in self.model_dump().items() if v is not None}


# ---- Root config ----
class StructIdConfig(BaseModel):
    defaults: Profile = Field(default_factory=Profile)
    profiles: Dict[str, Profile] = Field(default_factory=dict)

    def profile(self, name: Optional[str] = None) -> Dict[str, Any]:
        """Merge the defaults with the named profile (profile values win)."""
        merged = self.defaults.as_options()
        if name is None:
            return merged
        if name not in self.profiles:
            raise ProfileNotFoundError(name, sorted(self.profiles))
        merged.update(self.profiles[name].as_options())
        return merged

    def _build(self, cls: Type[OptionsT], name: Optional[str], overrides: Dict[str, Any]) -> OptionsT:
        # None means "not given" for CLI/API callers, so it never masks a profile value.
        data = self.profile(name)
        data.update({k: v for k, v in overrides.items() if v is not None})
        return coerce_options(cls, data, {})

    def generate_options(self, name: Optional[str] = None, **overrides: Any) -> GenerateOptions:
        return self._build(GenerateOptions, name, overrides)

    def validate_options(self, name: Optional[str] = None, **overrides: Any) -> ValidateOptions:
        return self._build(ValidateOptions, name, overrides)

    def format_options(self, name: Optional[str] = None, **overrides: Any) -> FormatOptions:
        return self._build(FormatOptions, name, overrides)


# ---- Loader ----
def load_config(path: Optional[Path]) -> StructIdConfig:
    if not path:
        return StructIdConfig()
    data = yaml.safe_load(Path(path).read_text()) or {}
    cfg = StructIdConfig(**data)
    logger.debug("Loaded config from %s with %d profile(s)", path, len(cfg.profiles))
    return cfg
