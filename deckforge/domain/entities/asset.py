"""
Image asset entity: an uploaded reference image held as a data URI.
"""

import base64
from dataclasses import dataclass
from typing import Tuple

DEFAULT_IMAGE_MIME = "image/jpeg"


def split_data_uri(data_uri: str) -> Tuple[str, str]:
    """Split ``data:<mime>;base64,<payload>`` into (mime, payload).

    A bare base64 string is accepted and assumed to be JPEG.
    """
    if data_uri.startswith("data:") and "," in data_uri:
        header, payload = data_uri.split(",", 1)
        mime = header[len("data:"):].split(";", 1)[0] or DEFAULT_IMAGE_MIME
        return mime, payload
    return DEFAULT_IMAGE_MIME, data_uri


def to_data_uri(payload: str, mime_type: str = "image/png") -> str:
    return f"data:{mime_type};base64,{payload}"


@dataclass(frozen=True)
class ImageAsset:
    id: str
    name: str
    data_url: str

    @property
    def mime_type(self) -> str:
        return split_data_uri(self.data_url)[0]

    @property
    def base64_data(self) -> str:
        return split_data_uri(self.data_url)[1]

    @classmethod
    def from_bytes(cls, asset_id: str, name: str, raw: bytes, mime_type: str) -> "ImageAsset":
        payload = base64.b64encode(raw).decode("ascii")
        return cls(id=asset_id, name=name, data_url=to_data_uri(payload, mime_type))


@dataclass(frozen=True)
class InlineImage:
    """Binary image content attached to a generation request."""

    mime_type: str
    data: str  # base64 payload without the data-URI header

    @classmethod
    def from_data_uri(cls, data_uri: str) -> "InlineImage":
        mime, payload = split_data_uri(data_uri)
        return cls(mime_type=mime, data=payload)

    def to_bytes(self) -> bytes:
        return base64.b64decode(self.data)
