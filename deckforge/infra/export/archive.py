"""
Zip packaging of rendered slide images.
"""

import base64
import io
import re
import zipfile
from dataclasses import dataclass
from typing import Optional, Sequence

from deckforge.domain.entities import split_data_uri


@dataclass(frozen=True)
class SlideArchive:
    filename: str
    content: bytes
    slide_count: int


def archive_filename(topic: str) -> str:
    stem = re.sub(r"\s+", "_", topic.strip()) or "slides"
    return f"{stem}_presentation.zip"


def build_slide_archive(topic: str, images: Sequence[Optional[str]]) -> Optional[SlideArchive]:
    """
    Package rendered slides as ``slide_<n>.png`` entries.

    Args:
        topic: Deck topic, used for the archive file name
        images: Per-slide data URIs in plan order; ``None`` for missing slides

    Returns:
        The archive, or None when no slide has been rendered
    """
    buffer = io.BytesIO()
    written = 0
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for index, image in enumerate(images):
            if not image:
                continue
            _, payload = split_data_uri(image)
            archive.writestr(f"slide_{index + 1}.png", base64.b64decode(payload))
            written += 1

    if not written:
        return None
    return SlideArchive(filename=archive_filename(topic), content=buffer.getvalue(), slide_count=written)
