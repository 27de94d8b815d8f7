# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Discovery request and result models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .common import drop_none, list_of, optional_str, require_mapping


@dataclass
class EnvironmentRequest:
    """Body of create/update environment calls."""

    name: str | None = None
    description: str | None = None
    size: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return drop_none({"name": self.name, "description": self.description, "size": self.size})


@dataclass(frozen=True)
class Environment:
    environment_id: str
    name: str | None = None
    description: str | None = None
    created: str | None = None
    updated: str | None = None
    status: str | None = None
    read_only: bool | None = None
    size: str | None = None

    @classmethod
    def from_mapping(cls, data: Any) -> Environment:
        data = require_mapping(data, "environment")
        read_only = data.get("read_only")
        return cls(
            environment_id=str(data["environment_id"]),
            name=optional_str(data, "name"),
            description=optional_str(data, "description"),
            created=optional_str(data, "created"),
            updated=optional_str(data, "updated"),
            status=optional_str(data, "status"),
            read_only=read_only if isinstance(read_only, bool) else None,
            size=optional_str(data, "size"),
        )


@dataclass(frozen=True)
class ListEnvironmentsResponse:
    environments: list[Environment] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> ListEnvironmentsResponse:
        data = require_mapping(data, "environment list")
        return cls(environments=list_of(Environment.from_mapping, data.get("environments"), "environments"))


@dataclass(frozen=True)
class Collection:
    collection_id: str
    name: str | None = None
    description: str | None = None
    created: str | None = None
    updated: str | None = None
    status: str | None = None
    configuration_id: str | None = None
    language: str | None = None

    @classmethod
    def from_mapping(cls, data: Any) -> Collection:
        data = require_mapping(data, "collection")
        return cls(
            collection_id=str(data["collection_id"]),
            name=optional_str(data, "name"),
            description=optional_str(data, "description"),
            created=optional_str(data, "created"),
            updated=optional_str(data, "updated"),
            status=optional_str(data, "status"),
            configuration_id=optional_str(data, "configuration_id"),
            language=optional_str(data, "language"),
        )


@dataclass(frozen=True)
class ListCollectionsResponse:
    collections: list[Collection] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> ListCollectionsResponse:
        data = require_mapping(data, "collection list")
        return cls(collections=list_of(Collection.from_mapping, data.get("collections"), "collections"))


@dataclass(frozen=True)
class Notice:
    notice_id: str | None = None
    severity: str | None = None
    description: str | None = None
    step: str | None = None

    @classmethod
    def from_mapping(cls, data: Any) -> Notice:
        data = require_mapping(data, "notice")
        return cls(
            notice_id=optional_str(data, "notice_id"),
            severity=optional_str(data, "severity"),
            description=optional_str(data, "description"),
            step=optional_str(data, "step"),
        )


@dataclass(frozen=True)
class DocumentAccepted:
    document_id: str | None = None
    status: str | None = None
    notices: list[Notice] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> DocumentAccepted:
        data = require_mapping(data, "document accepted")
        return cls(
            document_id=optional_str(data, "document_id"),
            status=optional_str(data, "status"),
            notices=list_of(Notice.from_mapping, data.get("notices"), "notices"),
        )


@dataclass(frozen=True)
class DocumentStatus:
    document_id: str
    status: str
    configuration_id: str | None = None
    status_description: str | None = None
    filename: str | None = None
    file_type: str | None = None
    sha1: str | None = None
    notices: list[Notice] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, data: Any) -> DocumentStatus:
        data = require_mapping(data, "document status")
        return cls(
            document_id=str(data["document_id"]),
            status=str(data["status"]),
            configuration_id=optional_str(data, "configuration_id"),
            status_description=optional_str(data, "status_description"),
            filename=optional_str(data, "filename"),
            file_type=optional_str(data, "file_type"),
            sha1=optional_str(data, "sha1"),
            notices=list_of(Notice.from_mapping, data.get("notices"), "notices"),
        )


@dataclass(frozen=True)
class DeleteResponse:
    """Status object returned by Discovery delete calls."""

    resource_id: str
    status: str

    @classmethod
    def decoder(cls, id_field: str):
        def _decode(data: Any) -> DeleteResponse:
            mapping = require_mapping(data, "delete response")
            return cls(resource_id=str(mapping[id_field]), status=str(mapping["status"]))

        return _decode
