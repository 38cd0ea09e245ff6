"""Embedded-data image representation."""

import base64
import binascii
import re

from pydantic import BaseModel, ConfigDict

from pawrecognition.core.errors import ImageValidationError

DATA_URI_PATTERN = re.compile(
    r"^data:(?P<media_type>[\w.+-]+/[\w.+-]+)(?:;[^,;]+=[^,;]*)*;base64,(?P<payload>[A-Za-z0-9+/=\s]*)$"
)


class EncodedImage(BaseModel):
    """An image as a media type plus base64 payload.

    Renders as ``data:<media_type>;base64,<payload>``, the format the
    inference service accepts in the ``image`` field.
    """

    model_config = ConfigDict(frozen=True)

    media_type: str
    payload: str

    @classmethod
    def from_bytes(cls, data: bytes, media_type: str) -> "EncodedImage":
        return cls(
            media_type=media_type.lower(),
            payload=base64.b64encode(data).decode("ascii"),
        )

    @classmethod
    def from_data_uri(cls, uri: str) -> "EncodedImage":
        """Parse a data URI, checking that its payload is valid base64."""
        match = DATA_URI_PATTERN.match(uri.strip()) if isinstance(uri, str) else None
        if match is None:
            raise ImageValidationError("Image must be a base64 data URI")

        payload = "".join(match.group("payload").split())
        try:
            base64.b64decode(payload, validate=True)
        except binascii.Error as e:
            raise ImageValidationError("Image data is not valid base64") from e

        return cls(media_type=match.group("media_type").lower(), payload=payload)

    @property
    def data_uri(self) -> str:
        return f"data:{self.media_type};base64,{self.payload}"

    @property
    def size(self) -> int:
        """Decoded size in bytes, computed without decoding."""
        padding = len(self.payload) - len(self.payload.rstrip("="))
        return len(self.payload) * 3 // 4 - padding

    def decode(self) -> bytes:
        return base64.b64decode(self.payload)

    def __str__(self) -> str:
        return self.data_uri
