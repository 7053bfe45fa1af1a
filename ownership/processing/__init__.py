"""
Per-bucket deduplication, timeline assembly, rejection collection and
owner indexing.
"""

from .deduplication import Deduplicator
from .indexing import OwnerIndex
from .invalid_collector import InvalidCollector
from .timeline import TimelineAssembler

__all__ = [
    'Deduplicator',
    'InvalidCollector',
    'OwnerIndex',
    'TimelineAssembler',
]
