"""
Price Extractor - material/price pairs from Comex price sheet text

Scans loosely formatted PDF text line by line. Each line is offered to an
ordered list of strategies; the first strategy that resolves a catalog
material commits and the rest are skipped for that line:

1. SameLinePrice  - "Aluminum Cans $0.79", "Bare Bright Copper: 3.25"
2. NextLinePrice  - "Aluminum Cans" followed by a line holding only "0.79"
3. InlinePrice    - "Aluminum Cans 0.79 per lb (was 0.75)"

Material names are resolved with parsers.similarity.find_best_match. When a
material is mentioned more than once, the last mention in the document wins.
"""

import logging
import re
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, List, Optional, Sequence

from .errors import ParseWarning
from .material_catalog import MaterialCatalog, MaterialCatalogEntry, load_catalog
from .similarity import SIMILARITY_THRESHOLD, find_best_match

logger = logging.getLogger(__name__)

# Resolves candidate text to a catalog entry (or None)
Resolver = Callable[[str], Optional[MaterialCatalogEntry]]

SAME_LINE_PATTERN = re.compile(r'^(.+?)\s*:?\s*\$?\s*(\d+\.?\d*)\s*$')
BARE_PRICE_PATTERN = re.compile(r'^\$?\s*(\d+\.?\d*)\s*$')
INLINE_PRICE_PATTERN = re.compile(r'\$?\s*(\d+\.?\d{0,2})\b')

MIN_CANDIDATE_LENGTH = 3
SHORT_CANDIDATE_LENGTH = 5
MAX_INLINE_PRICE = Decimal('1000')


@dataclass(frozen=True)
class PriceEntry:
    """A resolved price for one catalog material."""
    material: str
    price: Decimal
    cell_reference: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "material": self.material,
            "price": str(self.price),
            "cell_reference": self.cell_reference,
        }


@dataclass
class StrategyHit:
    """A strategy's successful match on a line."""
    entry: MaterialCatalogEntry
    price: Decimal
    source_text: str
    lines_consumed: int = 1


@dataclass
class PriceCandidate:
    """A raw mention found in the document, before deduplication."""
    line_number: int
    strategy: str
    material: str
    price: Decimal
    cell_reference: str
    source_text: str


@dataclass
class ExtractionResult:
    """Final entries plus the raw candidates and skipped lines behind them."""
    entries: List[PriceEntry] = field(default_factory=list)
    candidates: List[PriceCandidate] = field(default_factory=list)
    warnings: List[ParseWarning] = field(default_factory=list)


def normalize_price(price_str: str) -> Optional[Decimal]:
    """
    Parse a loosely formatted price string.

    "$1,234.50" -> Decimal("1234.50"). Anything other than digits and dots
    is dropped; dots after the first are removed. Returns None when nothing
    numeric is left.
    """
    cleaned = re.sub(r'[$,\s]', '', price_str)
    cleaned = re.sub(r'[^0-9.]', '', cleaned)

    parts = cleaned.split('.')
    if len(parts) > 2:
        cleaned = parts[0] + '.' + ''.join(parts[1:])

    try:
        return Decimal(cleaned)
    except InvalidOperation:
        return None


def preprocess_lines(text: str) -> List[str]:
    """Split text into trimmed, whitespace-collapsed, non-empty lines."""
    lines = []
    for raw_line in re.split(r'\r\n|\r|\n', text or ''):
        line = re.sub(r'\s+', ' ', raw_line).strip()
        if line:
            lines.append(line)
    return lines


class PriceStrategy:
    """Base class for a single-line extraction heuristic."""

    name = "base"

    def match(self, lines: Sequence[str], index: int, resolve: Resolver) -> Optional[StrategyHit]:
        raise NotImplementedError


class SameLinePrice(PriceStrategy):
    """Price at the end of the line, material text before it."""

    name = "same_line"

    def match(self, lines, index, resolve):
        line = lines[index]
        found = SAME_LINE_PATTERN.match(line)
        if not found:
            return None

        material_text = found.group(1).strip()
        price = normalize_price(found.group(2))
        if price is None or price <= 0 or len(material_text) < MIN_CANDIDATE_LENGTH:
            return None

        entry = resolve(material_text)
        if entry is None:
            return None
        return StrategyHit(entry=entry, price=price, source_text=line)


class NextLinePrice(PriceStrategy):
    """Material on this line, bare price alone on the next line."""

    name = "next_line"

    def match(self, lines, index, resolve):
        if index + 1 >= len(lines):
            return None

        line = lines[index]
        found = BARE_PRICE_PATTERN.match(lines[index + 1])
        if not found:
            return None

        price = normalize_price(found.group(1))
        if price is None or price <= 0 or len(line) < MIN_CANDIDATE_LENGTH:
            return None

        entry = resolve(line)
        if entry is None:
            return None
        return StrategyHit(
            entry=entry,
            price=price,
            source_text=f"{line} / {lines[index + 1]}",
            lines_consumed=2,
        )


class InlinePrice(PriceStrategy):
    """
    First plausible price anywhere in the line.

    The text before the price is the material. Short prefixes (a label that
    wrapped onto the previous line) are joined with the previous line.
    Only the first price that resolves a material is taken per line.
    """

    name = "inline"

    def __init__(self, max_price: Decimal = MAX_INLINE_PRICE):
        self.max_price = Decimal(max_price)

    def match(self, lines, index, resolve):
        line = lines[index]

        for found in INLINE_PRICE_PATTERN.finditer(line):
            price = normalize_price(found.group(0))
            if price is None or not (0 < price < self.max_price):
                continue

            material_text = line[:found.start()].strip()
            if len(material_text) < SHORT_CANDIDATE_LENGTH and index > 0:
                material_text = f"{lines[index - 1]} {material_text}"

            if len(material_text) < MIN_CANDIDATE_LENGTH:
                continue

            entry = resolve(material_text)
            if entry is not None:
                return StrategyHit(entry=entry, price=price, source_text=line)

        return None


def default_strategies() -> List[PriceStrategy]:
    return [SameLinePrice(), NextLinePrice(), InlinePrice()]


class PriceExtractor:
    """
    Runs the strategy cascade over a document and deduplicates the result.

    Usage:
        extractor = PriceExtractor()
        entries = extractor.extract(pdf_text)
    """

    def __init__(
        self,
        catalog: Optional[MaterialCatalog] = None,
        strategies: Optional[List[PriceStrategy]] = None,
        threshold: float = SIMILARITY_THRESHOLD
    ):
        self.catalog = catalog if catalog is not None else load_catalog()
        self.strategies = strategies if strategies is not None else default_strategies()
        self.threshold = threshold

    def _resolve(self, text: str) -> Optional[MaterialCatalogEntry]:
        return find_best_match(text, self.catalog, self.threshold)

    def extract(self, text: str) -> List[PriceEntry]:
        return self.extract_report(text).entries

    def extract_report(self, text: str) -> ExtractionResult:
        """Extract prices and keep the raw candidates and skipped lines."""
        result = ExtractionResult()
        lines = preprocess_lines(text)

        i = 0
        while i < len(lines):
            hit = None
            strategy_name = None
            for strategy in self.strategies:
                hit = strategy.match(lines, i, self._resolve)
                if hit:
                    strategy_name = strategy.name
                    break

            if hit is None:
                result.warnings.append(ParseWarning(i + 1, "no_price_match", lines[i]))
                i += 1
                continue

            logger.debug(
                f"Line {i + 1} [{strategy_name}]: {hit.entry.material_name} -> "
                f"{hit.price} ({hit.entry.cell_reference})"
            )
            result.candidates.append(PriceCandidate(
                line_number=i + 1,
                strategy=strategy_name,
                material=hit.entry.material_name,
                price=hit.price,
                cell_reference=hit.entry.cell_reference,
                source_text=hit.source_text,
            ))
            i += hit.lines_consumed

        result.entries = deduplicate_candidates(result.candidates)

        logger.info(
            f"Extracted {len(result.candidates)} price mentions from {len(lines)} lines, "
            f"{len(result.entries)} distinct materials"
        )
        return result


def deduplicate_candidates(candidates: List[PriceCandidate]) -> List[PriceEntry]:
    """
    Keep one entry per material; later mentions overwrite earlier ones.

    Output keeps the order in which materials were first seen.
    """
    by_material: Dict[str, PriceEntry] = {}
    for candidate in candidates:
        if candidate.material in by_material:
            logger.debug(
                f"Overwriting {candidate.material}: "
                f"{by_material[candidate.material].price} -> {candidate.price}"
            )
        by_material[candidate.material] = PriceEntry(
            material=candidate.material,
            price=candidate.price,
            cell_reference=candidate.cell_reference,
        )
    return list(by_material.values())


def extract_prices(text: str, catalog: Optional[MaterialCatalog] = None) -> List[PriceEntry]:
    """
    Convenience function: extract deduplicated prices from document text.

    Args:
        text: Raw text extracted from the price sheet PDF
        catalog: Optional catalog (defaults to the built-in Comex catalog)

    Returns:
        List of PriceEntry, one per material
    """
    return PriceExtractor(catalog).extract(text)
