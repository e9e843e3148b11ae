"""
Static lookup tables for delivery contract processing.

Keys of GRADE_DESCRIPTION_MAP and FILE_NAME_MAP are the material descriptions
exactly as they appear in the delivery CSV export. COORDINATE_MAP is keyed by
the normalized material number (leading zeros removed) and gives the position
of the stamp image on the contract template.
"""

from typing import Dict, NamedTuple, Optional


class Coordinate(NamedTuple):
    """Stamp position on the contract template, in PDF points."""
    x: float
    y: float


GRADE_DESCRIPTION_MAP: Dict[str, str] = {
    'O/S P&S': 'O/S P&S / Unprepared P&S',
    'UNPREP 1&2': 'UnPrepared 1&2 Mix/Long Iron',
    '1 HM': 'No.1 Heavy Melt / Short Iron',
    '2 HM': 'No.2 Heavy Melt / Short Iron',
    'MIX 1 & 2': 'No.1&2 Heavy Melt / Short Iron',
    'P&S': 'P&S / Plate & Structural',
    'TURN': 'Turnings',
    '2LTSHRD': 'No.2 Light / Tin',
    'DLR CLIPS 3': 'Dealer Clips 3',
    'INCOMPLETE CARS': 'Incomplete Cars',
    'SHD LOG': 'Shredder Bundles',
    'CAR BODY': 'Car Body (Complete)',
}

FILE_NAME_MAP: Dict[str, str] = {
    'O/S P&S': 'UnPrepared P&S',
    'UNPREP 1&2': 'UnPrepared 1&2MixLong Iron',
    '1 HM': '#1 Heavy Melt',
    '2 HM': '#2 Heavy Melt',
    'MIX 1 & 2': '#1&2 Mix Short Iron',
    'P&S': 'P&S',
    'TURN': 'Turn',
    '2LTSHRD': '#2 Light Tin',
    'DLR CLIPS 3': 'Dealer Clips 3',
    'INCOMPLETE CARS': 'Incomplete Cars',
    'SHD LOG': 'Shred Bales',
    'CAR BODY': 'HiWay Scrap Cars',
}

# Two columns of checkboxes on the contract form
COORDINATE_MAP: Dict[str, Coordinate] = {
    '50000241': Coordinate(220, 553.7),
    '50000242': Coordinate(220, 569.345),
    '50000245': Coordinate(220, 584.99),
    '50000250': Coordinate(220, 600.635),
    '50000339': Coordinate(220, 616.28),
    '50000332': Coordinate(220, 631.925),
    '50000249': Coordinate(220, 647.57),
    '50000341': Coordinate(220, 663.215),
    '50000313': Coordinate(220, 678.86),
    '50000665': Coordinate(411.31, 553.7),
    '50000320': Coordinate(411.31, 569.345),
    '50000281': Coordinate(411.31, 584.99),
    '50000319': Coordinate(411.31, 600.635),
    '50000302': Coordinate(411.31, 616.28),
    '50000325': Coordinate(411.31, 631.925),
    '50000252': Coordinate(411.31, 647.57),
    '50000294': Coordinate(411.31, 663.215),
    '50000246': Coordinate(411.31, 678.86),
}

# Reference value that overrides the grade/file name lookups
TIN_CAN_BUNDLE_REFERENCE = 'TIN CAN BUND'
TIN_CAN_BUNDLE_GRADE = 'Shredder Bundles'
TIN_CAN_BUNDLE_FILE_NAME = 'Tin Can Bundles'


def lookup_grade_description(material_description: str) -> str:
    """Map a material description to its grade description, or pass it through."""
    return GRADE_DESCRIPTION_MAP.get(material_description, material_description)


def lookup_file_name(material_description: str) -> str:
    """Map a material description to its output file name, or pass it through."""
    return FILE_NAME_MAP.get(material_description, material_description)


def lookup_coordinate(material_number: str) -> Optional[Coordinate]:
    return COORDINATE_MAP.get(material_number)
