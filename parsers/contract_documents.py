"""
Contract Documents - template fill plans for delivery rows

For every DeliveryRow this builds the instructions the template-filling
service needs: which template (FOB or non-FOB), the text annotations and
their positions, the optional stamp image, and the output file name. Rows
are then routed into the two output bundles by their sequence ids.

Rendering the PDFs is done elsewhere; pack_bundle() zips whatever was
rendered.
"""

import io
import logging
import re
import zipfile
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from .delivery_transformer import DeliveryBatch, DeliveryRow

logger = logging.getLogger(__name__)

FOB_TEMPLATE = 'fob'
NON_FOB_TEMPLATE = 'non_fob'

# field -> (x, y, font size), in PDF points on the contract form
ANNOTATION_POSITIONS: Dict[str, Tuple[float, float, int]] = {
    'month': (129.21, 165.21, 13),
    'contract': (320.65, 293.3, 12),
    'material_number': (108.17, 464.58, 12),
    'grade_description': (347.57, 464.58, 12),
}


@dataclass(frozen=True)
class TextAnnotation:
    field: str
    text: str
    x: float
    y: float
    size: int
    bold: bool = False


@dataclass(frozen=True)
class StampImage:
    """Stamp placed at the row's coordinate; scale keeps the top-left corner fixed."""
    image_path: str
    x: float
    y: float
    scale: float


@dataclass
class TemplateLayout:
    fob_template_path: str = 'fob.pdf'
    non_fob_template_path: str = 'nonfob.pdf'
    stamp_image_path: str = 'circle.png'
    stamp_scale: float = 0.75
    fob_bundle_name: str = 'K&L(FOB).zip'
    non_fob_bundle_name: str = 'K&L.zip'
    positions: Dict[str, Tuple[float, float, int]] = field(
        default_factory=lambda: dict(ANNOTATION_POSITIONS)
    )


@dataclass
class DocumentPlan:
    """Everything needed to render one contract PDF."""
    row_index: int
    sequence_id: str
    template: str
    template_path: str
    output_name: str
    annotations: List[TextAnnotation]
    stamp: Optional[StampImage] = None


@dataclass
class BundlePlan:
    """One output archive and the documents routed into it."""
    name: str
    fob: bool
    sequence_ids: List[str]
    documents: List[DocumentPlan]


@dataclass
class DocumentSet:
    documents: List[DocumentPlan]
    bundles: List[BundlePlan]


def output_file_name(file_name: str, row_index: int) -> str:
    """'FOB #1 Heavy Melt', 0 -> 'FOB__1_Heavy_Melt_1.pdf'"""
    safe = re.sub(r'[^a-zA-Z0-9]', '_', file_name)
    return f"{safe}_{row_index + 1}.pdf"


def build_annotations(row: DeliveryRow, layout: TemplateLayout) -> List[TextAnnotation]:
    annotations = []
    for field_name, (x, y, size) in layout.positions.items():
        annotations.append(TextAnnotation(
            field=field_name,
            text=getattr(row, field_name),
            x=x,
            y=y,
            size=size,
        ))
    return annotations


def plan_document(row: DeliveryRow, row_index: int, layout: TemplateLayout) -> DocumentPlan:
    """Build the fill plan for a single row."""
    if row.is_fob:
        template, template_path = FOB_TEMPLATE, layout.fob_template_path
    else:
        template, template_path = NON_FOB_TEMPLATE, layout.non_fob_template_path

    stamp = None
    if row.coordinate is not None:
        stamp = StampImage(
            image_path=layout.stamp_image_path,
            x=row.coordinate.x,
            y=row.coordinate.y,
            scale=layout.stamp_scale,
        )

    return DocumentPlan(
        row_index=row_index,
        sequence_id=row.sequence_id,
        template=template,
        template_path=template_path,
        output_name=output_file_name(row.file_name, row_index),
        annotations=build_annotations(row, layout),
        stamp=stamp,
    )


def plan_documents(batch: DeliveryBatch, layout: Optional[TemplateLayout] = None) -> DocumentSet:
    """
    Plan every contract document of a batch and route them into bundles.

    The non-FOB bundle comes first, matching the attachment order of the
    outgoing email. Bundles without documents are left out.
    """
    layout = layout or TemplateLayout()
    documents = [plan_document(row, idx, layout) for idx, row in enumerate(batch.rows)]

    by_class: Dict[Tuple[bool, str], DocumentPlan] = {
        (doc.template == FOB_TEMPLATE, doc.sequence_id): doc for doc in documents
    }

    bundles = []
    for is_fob, name, sequence_ids in (
        (False, layout.non_fob_bundle_name, batch.non_fob_sequence_ids),
        (True, layout.fob_bundle_name, batch.fob_sequence_ids),
    ):
        if not sequence_ids:
            continue
        bundles.append(BundlePlan(
            name=name,
            fob=is_fob,
            sequence_ids=list(sequence_ids),
            documents=[by_class[(is_fob, sid)] for sid in sequence_ids],
        ))

    logger.info(
        f"Planned {len(documents)} documents in {len(bundles)} bundle(s): "
        + ", ".join(f"{b.name}={len(b.documents)}" for b in bundles)
    )
    return DocumentSet(documents=documents, bundles=bundles)


def is_pdf(data: bytes) -> bool:
    return len(data) >= 4 and data[:4] == b'%PDF'


def pack_bundle(files: Mapping[str, bytes]) -> bytes:
    """
    Zip rendered documents in memory.

    Raises:
        ValueError: if a document is empty or not a PDF
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED, compresslevel=9) as archive:
        for name, data in files.items():
            if not data:
                raise ValueError(f"Rendered document is empty: {name}")
            if not is_pdf(data):
                raise ValueError(f"Rendered document is not a valid PDF: {name}")
            archive.writestr(name, data)
            logger.debug(f"Added {name} ({len(data)} bytes)")

    return buffer.getvalue()
