# Email intake and outgoing message helpers
from .intake import parse_sender_address, find_pdf_attachment, find_pdf_attachment_in_message, is_comex_subject
from .messages import build_delivery_email, build_comex_email

__all__ = [
    "parse_sender_address",
    "find_pdf_attachment",
    "find_pdf_attachment_in_message",
    "is_comex_subject",
    "build_delivery_email",
    "build_comex_email",
]
