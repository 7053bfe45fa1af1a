"""
Owner name classification and ownership timeline resolution.

Turns the free-text owner names scraped from county assessor pages into
structured person/company records grouped by the date ownership began.
"""

from ownership.config import EngineConfig, get_engine_config, load_sources_config
from ownership.engine import OwnershipEngine, run_many
from ownership.models import (
    CompanyOwner,
    ContractError,
    InvalidEntry,
    NameOrder,
    ParseResult,
    PersonOwner,
    PropertyOwnership,
    ReasonCode,
    SalesRecord,
)

__version__ = "0.1.0"

__all__ = [
    'EngineConfig',
    'get_engine_config',
    'load_sources_config',
    'OwnershipEngine',
    'run_many',
    'CompanyOwner',
    'ContractError',
    'InvalidEntry',
    'NameOrder',
    'ParseResult',
    'PersonOwner',
    'PropertyOwnership',
    'ReasonCode',
    'SalesRecord',
]
