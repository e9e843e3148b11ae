"""
Node 1: Document Reading
Loads the price sheet text or the delivery CSV into the workflow state.
"""

import logging
from pathlib import Path
from typing import Dict, Any

from ..state import ComexState, DeliveryState

logger = logging.getLogger(__name__)


def _read_comex_email(document_path: str, state: ComexState) -> Dict[str, Any]:
    """Pull the price sheet PDF out of a saved .eml message."""
    from email import message_from_bytes
    from email_service.intake import find_pdf_attachment_in_message, is_comex_subject, sender_of
    from parsers.pdf_text import extract_text_from_pdf_bytes

    message = message_from_bytes(Path(document_path).read_bytes())
    subject = message.get("Subject", "")
    query = state.get("subject_query") or "comex"

    if not is_comex_subject(subject, query):
        logger.warning(f"Skipping email, subject does not mention '{query}': {subject}")
        return {"last_error": f"Email subject does not mention '{query}': {subject}"}

    attachment = find_pdf_attachment_in_message(message)
    if attachment is None:
        return {"last_error": "No PDF attachment found in email"}

    logger.info(f"Reading price sheet attachment: {attachment.filename}")
    text = extract_text_from_pdf_bytes(attachment.content, attachment.filename)

    # Configured recipient wins over replying to the sender
    recipient = state.get("recipient_email") or sender_of(message)
    return {"document_text": text, "recipient_email": recipient or None, "last_error": None}


def read_document_node(state: ComexState) -> Dict[str, Any]:
    """
    Read the price sheet text.

    Text passed in the initial state is used as-is; otherwise the file at
    document_path is read (PDFs through pypdf). A saved .eml message is
    checked against the subject query and its PDF attachment is read.

    Args:
        state: Current workflow state

    Returns:
        State updates with document_text, or last_error
    """
    if state.get("document_text") is not None:
        logger.debug("Using document text from initial state")
        return {"last_error": None}

    document_path = state.get("document_path")
    if not document_path:
        return {"last_error": "No document specified"}

    logger.info(f"Reading price sheet: {Path(document_path).name}")

    try:
        if Path(document_path).suffix.lower() == ".eml":
            return _read_comex_email(document_path, state)

        from parsers.pdf_text import read_document_text

        text = read_document_text(document_path)
        logger.info(f"Read {len(text)} chars")
        return {"document_text": text, "last_error": None}

    except Exception as e:
        logger.error(f"Reading document failed: {e}")
        return {"last_error": f"Reading document failed: {str(e)}"}


def read_delivery_csv_node(state: DeliveryState) -> Dict[str, Any]:
    """
    Read the delivery CSV export.

    Args:
        state: Current workflow state

    Returns:
        State updates with csv_text, or last_error
    """
    csv_text = state.get("csv_text")

    if csv_text is None:
        csv_path = state.get("csv_path")
        if not csv_path:
            return {"last_error": "No CSV file provided"}

        try:
            csv_text = Path(csv_path).read_text(encoding="utf-8-sig")
        except OSError as e:
            logger.error(f"Reading CSV failed: {e}")
            return {"last_error": f"Reading CSV failed: {str(e)}"}

        logger.info(f"Read CSV: {Path(csv_path).name}")

    if not csv_text.strip():
        logger.warning("CSV file is empty")
        return {"csv_text": csv_text, "last_error": "CSV file is empty"}

    return {"csv_text": csv_text, "last_error": None}
