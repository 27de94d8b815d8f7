# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""multipart/form-data body builder for file and blob uploads.

Parts are rendered lazily: files are read and text is encoded in `to_bytes()`, so
an unreadable file surfaces as an EncodingError when the request is constructed.
"""

from __future__ import annotations

import mimetypes
import secrets
from dataclasses import dataclass
from pathlib import Path

from ..errors import EncodingError

CRLF = b"\r\n"


def _quote(value: str) -> str:
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("\r", "%0D").replace("\n", "%0A")


@dataclass(frozen=True)
class FormPart:
    name: str
    source: bytes | str | Path
    filename: str | None = None
    content_type: str | None = None

    def header_block(self) -> bytes:
        disposition = f'form-data; name="{_quote(self.name)}"'
        if self.filename is not None:
            disposition += f'; filename="{_quote(self.filename)}"'
        lines = [f"Content-Disposition: {disposition}"]
        if self.content_type:
            lines.append(f"Content-Type: {self.content_type}")
        try:
            return "\r\n".join(lines).encode("utf-8")
        except UnicodeEncodeError as exc:
            raise EncodingError(f"form part {self.name!r} has an unencodable header: {exc}") from exc

    def payload(self) -> bytes:
        if isinstance(self.source, Path):
            try:
                return self.source.read_bytes()
            except OSError as exc:
                raise EncodingError(f"could not read {self.source} for form part {self.name!r}: {exc}") from exc
        if isinstance(self.source, str):
            try:
                return self.source.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise EncodingError(f"form part {self.name!r} is not valid text: {exc}") from exc
        return self.source


class MultipartFormData:
    """Accumulates form parts and renders them with a random boundary."""

    def __init__(self, boundary: str | None = None):
        self.boundary = boundary or f"cloudrest.boundary.{secrets.token_hex(12)}"
        self.parts: list[FormPart] = []

    @property
    def content_type(self) -> str:
        return f"multipart/form-data; boundary={self.boundary}"

    def append(
        self,
        data: bytes | str,
        name: str,
        *,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> None:
        if isinstance(data, (bytearray, memoryview)):
            data = bytes(data)
        self.parts.append(FormPart(name=name, source=data, filename=filename, content_type=content_type))

    def append_file(self, path: str | Path, name: str, *, content_type: str | None = None) -> None:
        """Add a file part; the content type is guessed from the file name when omitted."""
        file_path = Path(path)
        guessed = content_type or mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
        self.parts.append(FormPart(name=name, source=file_path, filename=file_path.name, content_type=guessed))

    def to_bytes(self) -> bytes:
        if not self.parts:
            raise EncodingError("multipart body has no parts")
        delimiter = b"--" + self.boundary.encode("ascii")
        out = bytearray()
        for part in self.parts:
            if not isinstance(part.source, (bytes, str, Path)):
                raise EncodingError(f"form part {part.name!r} must be bytes, str or a path, got {type(part.source).__name__}")
            out += delimiter + CRLF
            out += part.header_block() + CRLF + CRLF
            out += part.payload() + CRLF
        out += delimiter + b"--" + CRLF
        return bytes(out)


__all__ = ["FormPart", "MultipartFormData"]
