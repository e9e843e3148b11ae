"""Outgoing email composition. Sending is left to the dispatcher."""

from email.mime.application import MIMEApplication
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import List, Optional, Tuple
import logging

logger = logging.getLogger(__name__)

DELIVERY_SUBJECT = "Delivery Contract PDFs"
DELIVERY_BODY = "The zip file of pdfs is attached-one for FOB and one for non-FOB"
COMEX_SUBJECT = "Comex Pricing Update"
COMEX_BODY = "Please find attached the updated Comex pricing sheet."
XLSX_SUBTYPE = "vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _attach(msg: MIMEMultipart, name: str, data: bytes, subtype: str = "octet-stream"):
    part = MIMEApplication(data, _subtype=subtype, Name=name)
    part['Content-Disposition'] = f'attachment; filename="{name}"'
    msg.attach(part)
    logger.debug(f"Attached: {name} ({len(data)} bytes)")


def build_message(
    to_addr: str,
    subject: str,
    body: str,
    attachments: Optional[List[Tuple[str, bytes, str]]] = None,
    from_addr: Optional[str] = None,
) -> MIMEMultipart:
    """
    Build a plain-text email with attachments.

    Args:
        to_addr: Recipient email address
        subject: Email subject
        body: Plain text body
        attachments: (filename, data, MIME subtype) tuples, attached in order
        from_addr: Optional From header
    """
    if not to_addr:
        raise ValueError("Recipient email address is required")

    msg = MIMEMultipart()
    if from_addr:
        msg['From'] = from_addr
    msg['To'] = to_addr
    msg['Subject'] = subject
    msg.attach(MIMEText(body, 'plain', 'utf-8'))

    for name, data, subtype in attachments or []:
        _attach(msg, name, data, subtype)

    return msg


def build_delivery_email(
    to_addr: str,
    bundles: List[Tuple[str, bytes]],
    from_addr: Optional[str] = None,
) -> MIMEMultipart:
    """Email carrying the zipped contract bundles (non-FOB bundle first)."""
    attachments = [(name, data, "zip") for name, data in bundles]
    return build_message(to_addr, DELIVERY_SUBJECT, DELIVERY_BODY, attachments, from_addr)


def build_comex_email(
    to_addr: str,
    xlsx_data: bytes,
    attachment_name: str = "comex_pricing.xlsx",
    from_addr: Optional[str] = None,
) -> MIMEMultipart:
    """Email carrying the exported pricing workbook."""
    return build_message(
        to_addr,
        COMEX_SUBJECT,
        COMEX_BODY,
        [(attachment_name, xlsx_data, XLSX_SUBTYPE)],
        from_addr,
    )
