"""Abstract contract for supplier record persistence."""

from abc import ABC, abstractmethod

from core.models.supplier import Supplier, SupplierFields


class SupplierRepository(ABC):
    """Contract for storing and retrieving supplier records.

    Implementations could be MySQL, PostgreSQL, SQLite, etc.
    Handlers depend on this interface, not the implementation.
    """

    @abstractmethod
    def create(self, *, fields: SupplierFields) -> Supplier:
        """Insert a new record and return it with its id.

        Raises:
            PersistenceError: If the insert fails
        """

    @abstractmethod
    def get(self, *, supplier_id: int) -> Supplier | None:
        """Fetch one record.

        Returns:
            The record or None if not found

        Raises:
            PersistenceError: If the query fails
        """

    @abstractmethod
    def list_all(self) -> list[Supplier]:
        """Return every record ordered by id.

        Raises:
            PersistenceError: If the query fails
        """

    @abstractmethod
    def update(self, *, supplier_id: int, fields: SupplierFields) -> Supplier | None:
        """Overwrite a record's columns.

        Returns:
            The updated record or None if not found

        Raises:
            PersistenceError: If the update fails
        """

    @abstractmethod
    def delete(self, *, supplier_id: int) -> bool:
        """Delete one record.

        Returns:
            False if the record did not exist

        Raises:
            PersistenceError: If the delete fails
        """

