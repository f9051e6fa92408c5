"""Configuration for the Imposter word game."""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml

from passplay.core.exceptions import ConfigurationError


MIN_PLAYERS = 3
TROLL_PROBABILITY = 0.20

# camelCase keys accepted from web clients
CAMEL_CASE_ALIASES = {
    "imposterCount": "imposter_count",
    "timerEnabled": "timer_enabled",
    "timerDuration": "timer_duration_minutes",
    "timerDurationMinutes": "timer_duration_minutes",
    "imposterHint": "imposter_hint",
    "trollMode": "troll_mode",
    "jesterEnabled": "jester_enabled",
    "confusedEnabled": "confused_enabled",
    "accompliceEnabled": "accomplice_enabled",
    "imposterNeverStarts": "imposter_never_starts",
}


def max_imposters(n_players: int) -> int:
    """Largest imposter count the roster allows (never below 1)."""
    return max(1, n_players // 2)


@dataclass(frozen=True)
class ImposterSettings:
    """Settings for an Imposter session.
    
    Attributes:
        imposter_count: Requested imposters per round (clamped to floor(n/2))
        timer_enabled: Whether the discussion timer runs
        timer_duration_minutes: Discussion timer length
        imposter_hint: Imposters see the category name on their card
        troll_mode: Rounds may turn into troll rounds (20% chance)
        jester_enabled: Assign a jester who wins if voted out
        confused_enabled: Assign a confused player who gets the twin word
        accomplice_enabled: Assign an accomplice who knows the imposter
        imposter_never_starts: Imposters are never picked to speak first
    """
    imposter_count: int = 1
    timer_enabled: bool = True
    timer_duration_minutes: int = 5
    imposter_hint: bool = True
    troll_mode: bool = False
    jester_enabled: bool = False
    confused_enabled: bool = False
    accomplice_enabled: bool = False
    imposter_never_starts: bool = False
    
    def __post_init__(self):
        """Validate configuration."""
        for name in ("imposter_count", "timer_duration_minutes"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer", details={name: value})
            if value < 1:
                raise ConfigurationError(f"{name} must be positive", details={name: value})
        
        for f in fields(self):
            if f.type in (bool, "bool") and not isinstance(getattr(self, f.name), bool):
                raise ConfigurationError(
                    f"{f.name} must be true or false",
                    details={f.name: getattr(self, f.name)}
                )
    
    @property
    def discussion_seconds(self) -> Optional[int]:
        """Length of the discussion timer, or None when it is disabled."""
        if not self.timer_enabled:
            return None
        return self.timer_duration_minutes * 60
    
    def merge(self, partial: Dict[str, Any]) -> "ImposterSettings":
        """Return a validated copy with ``partial`` applied.
        
        Raises:
            ConfigurationError: On unknown keys or invalid values
        """
        updates = _normalize_keys(partial)
        unknown = set(updates) - self.field_names()
        if unknown:
            raise ConfigurationError(
                f"Unknown settings: {', '.join(sorted(unknown))}",
                details={"valid": sorted(self.field_names())}
            )
        return replace(self, **updates)
    
    @classmethod
    def field_names(cls) -> set:
        return {f.name for f in fields(cls)}
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ImposterSettings":
        """Create settings from a mapping, ignoring keys that are not settings."""
        normalized = _normalize_keys(data)
        valid = cls.field_names()
        return cls(**{k: v for k, v in normalized.items() if k in valid})
    
    def to_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _normalize_keys(data: Dict[str, Any]) -> Dict[str, Any]:
    return {CAMEL_CASE_ALIASES.get(k, k): v for k, v in data.items()}


def load_settings(
    path: Union[str, Path],
    overrides: Optional[Dict[str, Any]] = None,
) -> Tuple[ImposterSettings, Dict[str, Any]]:
    """Load settings from a YAML config file.
    
    Args:
        path: Path to the YAML file
        overrides: Settings applied on top of the file
        
    Returns:
        Tuple of (settings, logging_settings)
        
    Raises:
        ConfigurationError: If the file is missing, malformed or invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found: {config_path}")
    
    try:
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse {config_path}", details={"error": str(e)})
    
    if not isinstance(yaml_config, dict):
        raise ConfigurationError(f"Config file {config_path} must contain a mapping")
    
    settings_config = {k: v for k, v in yaml_config.items()
                       if k not in ["catalog", "logging"]}
    if overrides:
        settings_config.update(overrides)
    
    logging_settings = yaml_config.get("logging", {}) or {}
    return ImposterSettings.from_dict(settings_config), logging_settings
