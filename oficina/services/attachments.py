# -*- coding: utf-8 -*-
"""
Data URL decoding for photos and budget images
"""
import base64
import binascii
import logging
import re

from oficina.exceptions import InvalidInputError
from oficina.models import Attachment

logger = logging.getLogger(__name__)

DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?P<params>(;[^,;]+)*)?,(?P<payload>.*)$", re.DOTALL)


def from_data_url(data_url: str, filename: str) -> Attachment:
    """
    Decode a data URL into an attachment.

    A data URL without mime type falls back to an empty attachment.
    """
    match = DATA_URL_RE.match(data_url or "")
    if not match or not match.group("mime"):
        logger.warning(f"No mime type in data URL for {filename}, storing empty file")
        return Attachment(filename=filename)

    payload = match.group("payload")
    if ";base64" in (match.group("params") or ""):
        try:
            raw = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise InvalidInputError(f"Invalid base64 payload in {filename}", {"error": str(e)})
    else:
        raw = payload.encode("utf-8")

    return Attachment(
        filename=filename,
        content_type=match.group("mime"),
        data=base64.b64encode(raw).decode("ascii"),
        size=len(raw),
    )
