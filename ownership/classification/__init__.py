"""
Person/company classification, person name parsing and company keys.
"""

from .company_canonicalizer import CompanyNameCanonicalizer
from .entity_classifier import CompanyKeywordTable, EntityClassifier
from .person_parser import PersonNameParser

__all__ = [
    'CompanyNameCanonicalizer',
    'CompanyKeywordTable',
    'EntityClassifier',
    'PersonNameParser',
]
