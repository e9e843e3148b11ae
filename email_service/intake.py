"""Incoming email helpers for price sheet intake."""

import logging
import re
from dataclasses import dataclass
from email.message import Message
from email.utils import parseaddr
from typing import Any, Dict, Iterable, Optional

logger = logging.getLogger(__name__)


@dataclass
class PdfAttachment:
    """A PDF attachment found in a message."""
    filename: str
    attachment_id: Optional[str] = None   # API-side id, when parts come from a mail API
    content: Optional[bytes] = None       # Decoded payload, when parts come from a MIME message


def parse_sender_address(from_header: str) -> str:
    """
    Get the reply address from a From header.

    "Yard Office <office@example.com>" -> "office@example.com". Headers
    without angle brackets are returned as given (trimmed).
    """
    if not from_header:
        return ""
    found = re.search(r'<(.+)>', from_header)
    if found:
        return found.group(1).strip()
    return from_header.strip()


def is_comex_subject(subject: str, query: str = "comex") -> bool:
    return query.lower() in (subject or "").lower()


def find_pdf_attachment(parts: Iterable[Dict[str, Any]]) -> Optional[PdfAttachment]:
    """
    Depth-first search of mail API message parts for the first PDF.

    Parts are dicts shaped like {"filename": ..., "body": {"attachmentId": ...},
    "parts": [...]}.
    """
    for part in parts or []:
        filename = part.get("filename") or ""
        if filename.lower().endswith(".pdf"):
            body = part.get("body") or {}
            return PdfAttachment(filename=filename, attachment_id=body.get("attachmentId"))

        nested = part.get("parts")
        if nested:
            found = find_pdf_attachment(nested)
            if found:
                return found

    return None


def find_pdf_attachment_in_message(message: Message) -> Optional[PdfAttachment]:
    """First PDF attachment of a parsed MIME message, with its decoded content."""
    for part in message.walk():
        if part.is_multipart():
            continue
        filename = part.get_filename() or ""
        if filename.lower().endswith(".pdf"):
            logger.debug(f"Found PDF attachment: {filename}")
            return PdfAttachment(filename=filename, content=part.get_payload(decode=True))
    return None


def sender_of(message: Message) -> str:
    """Reply address of a parsed MIME message."""
    _, addr = parseaddr(message.get("From", ""))
    return addr or parse_sender_address(message.get("From", ""))
