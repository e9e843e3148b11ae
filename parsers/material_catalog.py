"""
Material Catalog - Comex price sheet materials

Maps every recognized material name to the spreadsheet cell that holds its
price. Catalog order is fixed and matters: fuzzy matching keeps the first
entry on ties.
"""

import csv
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional

logger = logging.getLogger(__name__)


MATERIAL_CELL_MAP: Dict[str, str] = {
    'Aluminum Cans': 'B3',
    'Aluminum Sheet': 'B4',
    'Aluminum Painted Siding': 'B5',
    'Aluminum 6061': 'B6',
    'Aluminum 6063': 'B7',
    'Aluminum Cast': 'B8',
    'Aluminum Clips': 'B9',
    'Aluminum Wheel - Clean': 'B10',
    'Aluminum Wheel - Dirty': 'B11',
    'Aluminum Chrome Wheel': 'B12',
    'Aluminum Truck Wheels': 'B13',
    'EC Wire': 'B14',
    'ACSR - Aluminum Coated Steel Reinforced': 'B15',
    'Insulated Wire Aluminum (Neoprene)': 'B16',
    'Aluminum Turnings/Shavings': 'B17',
    'Aluminum Die Cast': 'B18',
    'Aluminum Breakage': 'B19',
    'Stainless - Clean': 'B20',
    'Stainless - Dirty': 'B21',
    'Stainless Turnings/Shavings': 'B22',
    'Bare Bright Copper': 'B23',
    '#1 Copper': 'B24',
    '#2 Copper': 'B25',
    'Yellow Brass - Clean': 'B26',
    'Yellow Brass - Dirty': 'B27',
    'Mixed Brass Shells': 'B28',
    'Brass Turnings/Shavings': 'B29',
    'Red Brass': 'B30',
    'Hard Brass': 'B31',
    'Brass/Copper Radiators - Clean': 'B32',
    'Brass/Copper Radiators - Dirty': 'B33',
    'Heater Core': 'B34',
    'Aluminum/Copper Reefer - Clean': 'B35',
    'Aluminum/Copper Reefer - Dirty': 'B36',
    'Aluminum Radiators - Clean': 'B37',
    'Aluminum Radiators - Dirty': 'B38',
    'Aluminum/Copper Reefer Ends': 'B39',
    '85 % MCM': 'B40',
    'ICW #1 65 %': 'B41',
    'ICW #2 45 %': 'B42',
    'ICW #3 30 % (Low Grade)': 'B43',
    'Data/Cat 5 ICW': 'B44',
    'Christmas Lights': 'B45',
    'Soft Lead – Clean': 'B46',
    'Lead Acid Battery': 'B47',
    'Steel Case Battery (Lead Acid)': 'B48',
    'Indoor Range Lead': 'B49',
    'Lead Wheel Weights': 'B50',
    'Electric Motors': 'B51',
    'Large Electric Motors': 'B52',
    'Sealed Units': 'B53',
    'Alternators': 'B54',
    'Aluminum Nose Starter': 'B55',
    'Steel Nose Starter': 'B56',
    'Comex': 'B57',
}


@dataclass(frozen=True)
class MaterialCatalogEntry:
    """A material from the price sheet and its destination cell."""
    material_name: str      # Unique key, e.g. "Bare Bright Copper"
    cell_reference: str     # Spreadsheet cell, e.g. "B23"


class MaterialCatalog:
    """
    Ordered, read-only collection of catalog entries.

    Lookups by exact name go through by_name; fuzzy lookups are done by
    parsers.similarity.find_best_match, which walks the entries in order.
    """

    def __init__(self, entries: Optional[List[MaterialCatalogEntry]] = None):
        self.entries: List[MaterialCatalogEntry] = []
        self.by_name: Dict[str, MaterialCatalogEntry] = {}
        for entry in entries or []:
            self._add_entry(entry)

    @classmethod
    def from_mapping(cls, mapping: Dict[str, str]) -> 'MaterialCatalog':
        """Build a catalog from a {material name: cell} mapping, keeping its order."""
        return cls([MaterialCatalogEntry(name, cell) for name, cell in mapping.items()])

    @classmethod
    def from_csv(cls, csv_path: Path) -> 'MaterialCatalog':
        """Load a catalog from a CSV with 'Material' and 'Cell' columns."""
        catalog = cls()

        with open(csv_path, 'r', encoding='utf-8') as f:
            reader = csv.DictReader(f)
            for row in reader:
                name = (row.get('Material') or '').strip()
                cell = (row.get('Cell') or '').strip()
                if not name or not cell:
                    logger.debug(f"Skipping catalog row without material/cell: {row}")
                    continue
                catalog._add_entry(MaterialCatalogEntry(name, cell))

        logger.info(f"Loaded {len(catalog)} materials from {csv_path}")
        return catalog

    def _add_entry(self, entry: MaterialCatalogEntry):
        if entry.material_name in self.by_name:
            raise ValueError(f"Duplicate material in catalog: {entry.material_name}")
        self.entries.append(entry)
        self.by_name[entry.material_name] = entry

    def get(self, material_name: str) -> Optional[MaterialCatalogEntry]:
        return self.by_name.get(material_name)

    def cell_for(self, material_name: str) -> Optional[str]:
        entry = self.by_name.get(material_name)
        return entry.cell_reference if entry else None

    def __contains__(self, material_name: str) -> bool:
        return material_name in self.by_name

    def __len__(self):
        return len(self.entries)

    def __iter__(self) -> Iterator[MaterialCatalogEntry]:
        return iter(self.entries)


_DEFAULT_CATALOG: Optional[MaterialCatalog] = None


def load_catalog(csv_path: Optional[Path] = None) -> MaterialCatalog:
    """
    Load the material catalog.

    Without a path the built-in Comex catalog is returned (built once and
    shared, it is never mutated).
    """
    global _DEFAULT_CATALOG

    if csv_path:
        return MaterialCatalog.from_csv(Path(csv_path))

    if _DEFAULT_CATALOG is None:
        _DEFAULT_CATALOG = MaterialCatalog.from_mapping(MATERIAL_CELL_MAP)
    return _DEFAULT_CATALOG
