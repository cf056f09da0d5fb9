"""
Typed document and schema wrappers over Session.

Example:
    >>> chat = Schema(Chat, session)
    >>> doc = await chat.create({"message": "ahoy"})
    >>> doc.get("message")
    'ahoy'
    >>> await doc.update({"message": "ahoy!"})
    >>> await doc.delete()
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .errors import FieldNotFoundError, InvalidArgumentError
from .schema import SchemaDef
from .types import DocumentViewId

if TYPE_CHECKING:
    from .session import Session

logger = logging.getLogger(__name__)


class Document:
    """Local view of one document.

    Attributes:
        schema: Schema id or SchemaDef of the document
        document_id: Id of the create operation
        view_id: Latest local view id
        deleted: Whether a delete was published through this object
    """

    def __init__(
        self,
        schema: str | SchemaDef,
        document_id: DocumentViewId,
        view_id: DocumentViewId,
        fields: dict[str, Any],
        session: Session,
    ) -> None:
        self.schema = schema
        self.document_id = document_id
        self.view_id = view_id
        self.deleted = False
        self._fields = dict(fields)
        self._session = session

    @property
    def schema_id(self) -> str:
        if isinstance(self.schema, SchemaDef):
            return self.schema.schema_id
        return self.schema

    @property
    def fields(self) -> dict[str, Any]:
        """Copy of the current field values."""
        return dict(self._fields)

    def get(self, name: str) -> Any:
        """Return a field value.

        Raises:
            FieldNotFoundError: If the document has no such field
        """
        if name not in self._fields:
            raise FieldNotFoundError(name, document_id=str(self.document_id))
        return self._fields[name]

    async def update(self, fields: dict[str, Any]) -> DocumentViewId:
        """Publish an update on the latest view and advance to it."""
        self._ensure_not_deleted()
        view_id = await self._session.update(fields, self.view_id, schema_id=self.schema)
        self._fields.update(fields)
        self.view_id = view_id
        return view_id

    async def delete(self) -> DocumentViewId:
        """Publish a delete on the latest view."""
        self._ensure_not_deleted()
        view_id = await self._session.delete(self.view_id, schema_id=self.schema)
        self.view_id = view_id
        self.deleted = True
        logger.debug(f"Deleted document {self.document_id}")
        return view_id

    def _ensure_not_deleted(self) -> None:
        if self.deleted:
            raise InvalidArgumentError(
                f"Document {self.document_id} was deleted",
                argument="document",
            )

    def __repr__(self) -> str:
        return f"<Document {self.document_id} view {self.view_id}>"


class Schema:
    """Create documents of one schema."""

    def __init__(self, schema: str | SchemaDef, session: Session) -> None:
        self.schema = schema
        self.session = session

    @property
    def schema_id(self) -> str:
        if isinstance(self.schema, SchemaDef):
            return self.schema.schema_id
        return self.schema

    async def create(self, fields: dict[str, Any]) -> Document:
        """Publish a create operation and return the new document."""
        view_id = await self.session.create(fields, schema_id=self.schema)
        return Document(
            schema=self.schema,
            document_id=view_id,
            view_id=view_id,
            fields=fields,
            session=self.session,
        )
