"""
Engine configuration and per-source profiles.

Counties disagree on name order and vocabulary, so each source (county
scraper) can carry a profile in config/sources.yaml:

    defaults:
      name_order: first_last
    sources:
      volusia:
        name_order: last_first
        company_keywords: [TRUSTEE]

Environment (.env is loaded on import):
    OWNERSHIP_SOURCES_CONFIG  path to the YAML file (default config/sources.yaml)
    OWNERSHIP_LOG_LEVEL       default log level for the command line
"""

import os
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import yaml
from dotenv import load_dotenv
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .classification.entity_classifier import DEFAULT_COMPANY_KEYWORDS
from .models import ContractError, NameOrder
from .normalization.noise_filter import (
    DEFAULT_PLACEHOLDER_PHRASES,
    DEFAULT_PLACEHOLDERS,
    DEFAULT_STREET_TOKENS,
)

# .env values become visible to os.getenv
load_dotenv()

DEFAULT_SOURCES_CONFIG = "config/sources.yaml"


class SourceProfile(BaseModel):
    """Overrides for one source. Keyword lists extend the defaults."""

    model_config = ConfigDict(from_attributes=True, extra="forbid")

    name_order: NameOrder = NameOrder.FIRST_LAST
    description: Optional[str] = None
    company_keywords: List[str] = Field(default_factory=list)
    street_tokens: List[str] = Field(default_factory=list)
    placeholders: List[str] = Field(default_factory=list)

    @field_validator("company_keywords", "street_tokens", "placeholders")
    @classmethod
    def upper_keywords(cls, v):
        return [item.strip().upper() for item in v if item and item.strip()]


class SourcesFile(BaseModel):
    """Contents of config/sources.yaml."""

    model_config = ConfigDict(from_attributes=True)

    defaults: SourceProfile = Field(default_factory=SourceProfile)
    sources: Dict[str, SourceProfile] = Field(default_factory=dict)

    def profile(self, source: Optional[str]) -> SourceProfile:
        """Profile for a source name (case-insensitive), or the defaults."""
        if not source:
            return self.defaults

        wanted = source.strip().lower()
        for name, profile in self.sources.items():
            if name.lower() == wanted:
                return profile

        logger.warning(f"⚠️ No profile for source '{source}', using defaults")
        return self.defaults


class EngineConfig(BaseModel):
    """Immutable configuration of one OwnershipEngine."""

    model_config = ConfigDict(frozen=True)

    name_order: NameOrder = NameOrder.FIRST_LAST
    company_keywords: Tuple[str, ...] = DEFAULT_COMPANY_KEYWORDS
    street_tokens: Tuple[str, ...] = DEFAULT_STREET_TOKENS
    placeholders: Tuple[str, ...] = DEFAULT_PLACEHOLDERS
    placeholder_phrases: Tuple[str, ...] = DEFAULT_PLACEHOLDER_PHRASES

    @classmethod
    def from_profile(cls, *profiles: SourceProfile) -> "EngineConfig":
        """
        Builds a config from profiles applied in order.

        Keyword lists accumulate over the built-in defaults; the last
        profile that sets name_order decides it.
        """
        name_order = NameOrder.FIRST_LAST
        keywords, streets, placeholders = [], [], []
        for profile in profiles:
            if "name_order" in profile.model_fields_set:
                name_order = profile.name_order
            keywords += profile.company_keywords
            streets += profile.street_tokens
            placeholders += profile.placeholders

        return cls(
            name_order=name_order,
            company_keywords=_merge(DEFAULT_COMPANY_KEYWORDS, keywords),
            street_tokens=_merge(DEFAULT_STREET_TOKENS, streets),
            placeholders=_merge(DEFAULT_PLACEHOLDERS, placeholders),
        )


def _merge(base: Tuple[str, ...], extra: List[str]) -> Tuple[str, ...]:
    merged = list(base)
    for item in extra:
        if item not in merged:
            merged.append(item)
    return tuple(merged)


def get_sources_config_path() -> Path:
    return Path(os.getenv("OWNERSHIP_SOURCES_CONFIG", DEFAULT_SOURCES_CONFIG))


def load_sources_config(config_path: Optional[Union[str, Path]] = None) -> SourcesFile:
    """
    Loads source profiles from YAML.

    Args:
        config_path: YAML file; defaults to OWNERSHIP_SOURCES_CONFIG or
            config/sources.yaml

    Returns:
        SourcesFile validated (empty defaults if the file does not exist)

    Raises:
        ContractError: if the file is not valid YAML or has the wrong shape
    """
    config_file = Path(config_path) if config_path else get_sources_config_path()

    if not config_file.exists():
        logger.warning(f"⚠️ Sources config not found: {config_file} (using defaults)")
        return SourcesFile()

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            config_dict = yaml.safe_load(f) or {}
        return SourcesFile(**config_dict)
    except (yaml.YAMLError, ValidationError, TypeError) as exc:
        raise ContractError(f"Invalid sources config {config_file}: {exc}") from exc


def get_engine_config(
    source: Optional[str] = None,
    config_path: Optional[Union[str, Path]] = None
) -> EngineConfig:
    """EngineConfig for a source, merged over the built-in defaults."""
    sources = load_sources_config(config_path)
    profile = sources.profile(source)
    if profile is sources.defaults:
        config = EngineConfig.from_profile(sources.defaults)
    else:
        config = EngineConfig.from_profile(sources.defaults, profile)
    logger.debug(f"⚙️ Engine config for '{source or 'default'}': name_order={config.name_order.value}")
    return config
