"""SQLAlchemy-backed implementation of SupplierRepository."""

from aws_lambda_powertools import Logger
from sqlalchemy import String, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from core.infrastructure.adapters.sql_adapter import SqlAdapter
from core.models.errors import PersistenceError
from core.models.supplier import Supplier, SupplierFields
from core.repositories.supplier_repository import SupplierRepository
from core.utils.constants import FIELD_MAX_LENGTH

logger = Logger(UTC=True)


class Base(DeclarativeBase):
    pass


class SupplierRow(Base):
    """Row of the ``supplier`` table."""

    __tablename__ = "supplier"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(FIELD_MAX_LENGTH), nullable=False)
    address: Mapped[str] = mapped_column(String(FIELD_MAX_LENGTH), nullable=False)
    city: Mapped[str] = mapped_column(String(FIELD_MAX_LENGTH), nullable=False)
    state: Mapped[str] = mapped_column(String(FIELD_MAX_LENGTH), nullable=False)
    email: Mapped[str | None] = mapped_column(String(FIELD_MAX_LENGTH), nullable=True)
    phone: Mapped[str] = mapped_column(String(32), nullable=False)
    photo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    def __repr__(self) -> str:
        return f"<SupplierRow id={self.id} name={self.name!r}>"


class SqlSupplierRepository(SupplierRepository):
    """Relational supplier storage with error handling.

    All SQLAlchemy errors are caught and translated into
    PersistenceError with stable semantics.
    """

    def __init__(self, adapter: SqlAdapter | None = None) -> None:
        self._db = adapter or SqlAdapter()

    def create(self, *, fields: SupplierFields) -> Supplier:
        try:
            with self._db.session() as session:
                row = SupplierRow(**fields.model_dump())
                session.add(row)
                session.flush()
                supplier = Supplier.model_validate(row)
        except SQLAlchemyError as exc:
            logger.exception("Error creating supplier")
            raise PersistenceError(
                message="Error occurred while creating the Student.",
            ) from exc

        logger.info("Created supplier", extra={"supplier_id": supplier.id})
        return supplier

    def get(self, *, supplier_id: int) -> Supplier | None:
        try:
            with self._db.session() as session:
                row = session.get(SupplierRow, supplier_id)
                return Supplier.model_validate(row) if row else None
        except SQLAlchemyError as exc:
            logger.exception("Error retrieving supplier", extra={"supplier_id": supplier_id})
            raise PersistenceError(
                message=f"Error retrieving student with id {supplier_id}",
                details={"supplier_id": supplier_id},
            ) from exc

    def list_all(self) -> list[Supplier]:
        try:
            with self._db.session() as session:
                rows = session.scalars(select(SupplierRow).order_by(SupplierRow.id)).all()
                return [Supplier.model_validate(row) for row in rows]
        except SQLAlchemyError as exc:
            logger.exception("Error listing suppliers")
            raise PersistenceError(
                message="There was a problem retrieving the list of students",
            ) from exc

    def update(self, *, supplier_id: int, fields: SupplierFields) -> Supplier | None:
        try:
            with self._db.session() as session:
                row = session.get(SupplierRow, supplier_id)
                if row is None:
                    return None

                for column, value in fields.model_dump().items():
                    setattr(row, column, value)
                session.flush()
                supplier = Supplier.model_validate(row)
        except SQLAlchemyError as exc:
            logger.exception("Error updating supplier", extra={"supplier_id": supplier_id})
            raise PersistenceError(
                message=f"Error updating Student with id {supplier_id}",
                details={"supplier_id": supplier_id},
            ) from exc

        logger.info("Updated supplier", extra={"supplier_id": supplier_id})
        return supplier

    def delete(self, *, supplier_id: int) -> bool:
        try:
            with self._db.session() as session:
                result = session.execute(
                    delete(SupplierRow).where(SupplierRow.id == supplier_id)
                )
                removed = bool(result.rowcount)
        except SQLAlchemyError as exc:
            logger.exception("Error deleting supplier", extra={"supplier_id": supplier_id})
            raise PersistenceError(
                message=f"Could not delete Student with id {supplier_id}",
                details={"supplier_id": supplier_id},
            ) from exc

        logger.info("Deleted supplier", extra={"supplier_id": supplier_id, "removed": removed})
        return removed

