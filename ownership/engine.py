"""
Ownership Engine
================

Turns one property's scraped owner text into a deduplicated, date-ordered
ownership history.

INPUT:
------
- raw_owner_lines: current-owner lines from the parcel page (the mailing
  address line already removed by the scraper)
- sales_records:   one {date, grantor, grantee} row per sale

FLOW (per owner string):
------------------------
1. TextNormalizer      -> strip H&W, TTEE, C/O, ET AL, annotations...
2. NoiseFilter         -> reject empties, placeholders, address fragments
3. EntityClassifier    -> company keyword? CompanyOwner
4. PersonNameParser    -> otherwise one or more PersonOwner
5. InvalidCollector    -> every rejection, with its reason code

FLOW (per property):
--------------------
1. Current owners      -> "current"
2. Dated grantees      -> their sale date (YYYY-MM-DD)
3. Undatable grantees  -> one unknown_date_N per sale row
4. Historical grantors that never appear as a grantee -> one more
   unknown_date_N batch
5. TimelineAssembler   -> per-bucket dedup and output ordering

Malformed data never raises; only input of the wrong shape raises
ContractError. The engine keeps no state between runs, so one instance
can serve any number of properties (also from several threads).

Author: BellaTerra Intelligence Team
Date: December 2025
"""

import re
from typing import Any, Dict, Iterable, List, Optional

from loguru import logger
from pydantic import ValidationError

from .classification.company_canonicalizer import CompanyNameCanonicalizer
from .classification.entity_classifier import CompanyKeywordTable, EntityClassifier
from .classification.person_parser import PersonNameParser
from .config import EngineConfig
from .models import (
    CompanyOwner,
    ContractError,
    EntityType,
    OwnerRecord,
    ParseResult,
    PropertyOwnership,
    ReasonCode,
    SalesRecord,
)
from .normalization.noise_filter import NoiseFilter
from .normalization.text_normalizer import TextNormalizer
from .processing.deduplication import Deduplicator
from .processing.invalid_collector import InvalidCollector
from .processing.timeline import TimelineAssembler, UnknownDateCounter


UNKNOWN_PROPERTY_ID = "unknown_id"


class OwnershipEngine:
    """
    Classifies owner strings and assembles the ownership timeline.

    Args:
        config: Name order and keyword tables (defaults if omitted)
        keyword_table: Replaces the company keyword table built from config
    """

    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        keyword_table: Optional[CompanyKeywordTable] = None
    ):
        self.config = config or EngineConfig()

        self.noise_filter = NoiseFilter(
            street_tokens=self.config.street_tokens,
            placeholders=self.config.placeholders,
            placeholder_phrases=self.config.placeholder_phrases,
        )
        if keyword_table is None:
            keyword_table = CompanyKeywordTable(self.config.company_keywords)
        self.classifier = EntityClassifier(keyword_table)
        self.person_parser = PersonNameParser(self.config.name_order)
        self.canonicalizer = CompanyNameCanonicalizer()
        self.deduplicator = Deduplicator(self.canonicalizer)

    # ==========================================================================
    # SINGLE STRING
    # ==========================================================================

    def classify(self, raw: Any) -> ParseResult:
        """
        Classifies one raw owner string.

        Examples:
            >>> OwnershipEngine().classify("ACME HOLDINGS LLC").records[0].name
            'ACME HOLDINGS LLC'
            >>> OwnershipEngine().classify("123 MAIN ST").reason.value
            'address_or_noise'
        """
        text = TextNormalizer.normalize(raw)

        reason = self.noise_filter.check(text)
        if reason is not None:
            return ParseResult.reject(reason)

        if self.classifier.classify(text) == EntityType.COMPANY:
            return ParseResult.ok([CompanyOwner(name=self.canonicalizer.display_name(text))])

        result = self.person_parser.parse(text)
        if not result.success and result.reason is None:
            return ParseResult.reject(ReasonCode.UNCLASSIFIED)
        return result

    # ==========================================================================
    # ONE PROPERTY
    # ==========================================================================

    def run(
        self,
        property_id: Any,
        raw_owner_lines: Any,
        sales_records: Any = None
    ) -> PropertyOwnership:
        """
        Builds the ownership history of one property.

        Args:
            property_id: Parcel identifier (None -> "unknown_id")
            raw_owner_lines: List of current-owner strings
            sales_records: List of SalesRecord or {date, grantor, grantee}

        Returns:
            PropertyOwnership with owners_by_date in output order

        Raises:
            ContractError: if any argument has the wrong shape
        """
        property_key = self._check_property_id(property_id)
        lines = self._check_owner_lines(raw_owner_lines)
        sales = self._check_sales_records(sales_records)

        stats = {
            'owner_lines': len(lines),
            'sales_records': len(sales),
            'persons': 0,
            'companies': 0,
            'invalid': 0,
        }

        collector = InvalidCollector()
        counter = UnknownDateCounter()
        assembler = TimelineAssembler(counter, self.deduplicator)

        # 1. Current owners
        current: List[OwnerRecord] = []
        for line in lines:
            current.extend(self._resolve(line, collector))
        assembler.add_current(current)

        # 2-3. Grantees, by sale date
        grantee_keys = set()
        for sale in sales:
            if not self._has_text(sale.grantee):
                continue
            grantee_keys.add(self._match_key(sale.grantee))
            assembler.add_dated(sale.date, self._resolve(sale.grantee, collector))

        # 4. Grantors never seen as grantees: owners from before the
        # recorded sales history, with no acquisition date of their own
        previous_owners: List[OwnerRecord] = []
        for sale in sales:
            if not self._has_text(sale.grantor):
                continue
            if self._match_key(sale.grantor) in grantee_keys:
                continue
            previous_owners.extend(self._resolve(sale.grantor, collector))
        assembler.add_undated_batch(previous_owners)

        owners_by_date = assembler.build()
        invalid = collector.entries()

        for records in owners_by_date.values():
            for record in records:
                if isinstance(record, CompanyOwner):
                    stats['companies'] += 1
                else:
                    stats['persons'] += 1
        stats['invalid'] = len(invalid)
        stats['buckets'] = len(owners_by_date)
        stats['unknown_date_buckets'] = counter.allocated

        logger.info(
            f"✅ property_{property_key}: {len(owners_by_date)} bucket(s), "
            f"{stats['persons']} person(s), {stats['companies']} company(ies), "
            f"{stats['invalid']} invalid"
        )

        return PropertyOwnership(
            property_id=property_key,
            owners_by_date=owners_by_date,
            invalid_owners=invalid,
            stats=stats,
        )

    # ==========================================================================
    # HELPERS
    # ==========================================================================

    def _resolve(self, raw: str, collector: InvalidCollector) -> List[OwnerRecord]:
        result = self.classify(raw)
        if result.found_owner:
            if result.multiple_owners:
                logger.debug(f"👥 '{raw}' names {len(result.records)} owners")
            return result.records

        collector.add(raw, result.reason or ReasonCode.UNCLASSIFIED)
        logger.debug(f"🚫 Rejected '{raw}': {(result.reason or ReasonCode.UNCLASSIFIED).value}")
        return []

    @staticmethod
    def _has_text(value: Optional[str]) -> bool:
        return bool(value and value.strip())

    @staticmethod
    def _match_key(raw: str) -> str:
        """Grantor/grantee comparison key: normalized text, letters and digits only."""
        return re.sub(r'[^A-Z0-9]', '', TextNormalizer.normalize(raw).upper())

    @staticmethod
    def _check_property_id(property_id: Any) -> str:
        if property_id is None:
            return UNKNOWN_PROPERTY_ID
        if isinstance(property_id, bool) or not isinstance(property_id, (str, int)):
            raise ContractError(
                f"property_id must be a string or integer, got {type(property_id).__name__}"
            )
        text = str(property_id).strip()
        return text or UNKNOWN_PROPERTY_ID

    @staticmethod
    def _check_owner_lines(raw_owner_lines: Any) -> List[str]:
        if not isinstance(raw_owner_lines, (list, tuple)):
            raise ContractError(
                f"raw_owner_lines must be a list of strings, got {type(raw_owner_lines).__name__}"
            )
        for position, line in enumerate(raw_owner_lines):
            if not isinstance(line, str):
                raise ContractError(
                    f"raw_owner_lines[{position}] must be a string, got {type(line).__name__}"
                )
        return list(raw_owner_lines)

    @staticmethod
    def _check_sales_records(sales_records: Any) -> List[SalesRecord]:
        if sales_records is None:
            return []
        if not isinstance(sales_records, (list, tuple)):
            raise ContractError(
                f"sales_records must be a list, got {type(sales_records).__name__}"
            )

        records = []
        for position, row in enumerate(sales_records):
            try:
                records.append(SalesRecord.model_validate(row))
            except ValidationError as exc:
                raise ContractError(f"sales_records[{position}] is malformed: {exc}") from exc
        return records


def run_many(
    engine: OwnershipEngine,
    properties: Iterable[Dict[str, Any]]
) -> List[PropertyOwnership]:
    """
    Runs the engine over several properties, in input order.

    Each item is {"property_id", "owner_lines", "sales"}.
    """
    results: List[PropertyOwnership] = []
    for item in properties:
        if not isinstance(item, dict):
            raise ContractError(f"property input must be an object, got {type(item).__name__}")
        results.append(
            engine.run(item.get("property_id"), item.get("owner_lines", []), item.get("sales"))
        )
    return results
