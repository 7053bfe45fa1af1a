"""
Text cleanup and noise rejection for raw owner strings.
"""

from .noise_filter import NoiseFilter
from .text_normalizer import TextNormalizer

__all__ = [
    'NoiseFilter',
    'TextNormalizer',
]
