import uuid
from datetime import UTC, datetime
from typing import Any, Generic, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import Select, delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Base

Model = TypeVar("Model", bound=Base)
CreateSchema = TypeVar("CreateSchema", bound=BaseModel)
UpdateSchema = TypeVar("UpdateSchema", bound=BaseModel)


class BaseRepository(Generic[Model, CreateSchema, UpdateSchema]):
    def __init__(
        self,
        session: AsyncSession,
        model: Type[Model],
    ):
        """
        Initialize the repository with a session and model.

        Args:
            session (AsyncSession): The database session.
            model (Type[Model]): The model class.
        """
        self.session = session
        self.model = model

    @property
    def soft_delete(self) -> bool:
        """Whether the model hides rows through ``deleted_at``."""
        return hasattr(self.model, "deleted_at")

    def _validate_column_exists(self, column_name: str) -> None:
        """
        Validate that a column exists on the model.

        Args:
            column_name (str): The name of the column to validate.

        Raises:
            ValueError: If the column doesn't exist on the model.
        """
        if not hasattr(self.model, column_name):
            raise ValueError(
                f"Column '{column_name}' does not exist on model {self.model.__name__}"
            )

    def _where_active(self, stmt: Any) -> Any:
        """Restrict a statement to rows that are not soft deleted."""
        if self.soft_delete:
            return stmt.where(getattr(self.model, "deleted_at").is_(None))

        return stmt

    def _select(self, include_deleted: bool = False) -> Select[tuple[Model]]:
        stmt = select(self.model)

        return stmt if include_deleted else self._where_active(stmt)

    async def create_one(
        self, schema: CreateSchema, exclude_none: bool = True, auto_commit: bool = True
    ) -> Model:
        """
        Create a new object in the database.

        Args:
            schema (CreateSchema): The data to create the object.
            exclude_none (bool): Whether to exclude None values from the creation.
            auto_commit (bool): Whether to commit the transaction. Pass False when
                the caller coordinates multi-step transactions.

        Returns:
            created_object (Model): The created object.
        """
        stmt = (
            insert(self.model)
            .values(**schema.model_dump(exclude_none=exclude_none))
            .returning(self.model)
        )
        result = await self.session.execute(stmt)
        created = result.scalar_one()
        if auto_commit:
            await self.session.commit()

        return created

    async def get_by_id(
        self,
        obj_id: str | int | uuid.UUID,
        id_column_name: str = "id",
        include_deleted: bool = False,
    ) -> Model | None:
        """
        Retrieve an object by its ID.

        Args:
            obj_id (str | int | uuid.UUID): The ID of the object to retrieve.
            id_column_name (str): The name of the ID column in the model.
            include_deleted (bool): Whether soft deleted rows are visible.

        Returns:
            Model | None: The retrieved object or None if not found.

        Raises:
            ValueError: If the id_column_name doesn't exist on the model.
        """
        self._validate_column_exists(id_column_name)
        stmt = self._select(include_deleted).where(getattr(self.model, id_column_name) == obj_id)
        result = await self.session.execute(stmt)

        return result.scalar_one_or_none()

    async def count(self, include_deleted: bool = False) -> int:
        """
        Count the rows of the model.

        Args:
            include_deleted (bool): Whether soft deleted rows are counted.

        Returns:
            int: Number of rows.
        """
        stmt = select(func.count()).select_from(self.model)
        if not include_deleted:
            stmt = self._where_active(stmt)
        result = await self.session.execute(stmt)

        return result.scalar_one()

    async def update_by_id(
        self,
        obj_id: str | int | uuid.UUID,
        schema: UpdateSchema,
        id_column_name: str = "id",
        exclude_none: bool = True,
        auto_commit: bool = True,
    ) -> Model | None:
        """
        Update an object by its ID.

        Args:
            obj_id (str | int | uuid.UUID): The ID of the object to update.
            schema (UpdateSchema): The data to update the object.
            id_column_name (str): The name of the ID column in the model.
            exclude_none (bool): Whether to exclude None values from the update.
            auto_commit (bool): Whether to commit the transaction.

        Returns:
            updated_object (Model | None): The updated object or None if not found.

        Raises:
            ValueError: If the id_column_name doesn't exist on the model.
        """
        self._validate_column_exists(id_column_name)
        existing = await self.get_by_id(obj_id, id_column_name)

        if not existing:
            return None

        values = schema.model_dump(exclude_none=exclude_none)
        if not values:
            return existing

        stmt = self._where_active(
            update(self.model)
            .where(getattr(self.model, id_column_name) == obj_id)
            .values(**values)
            .returning(self.model)
        ).execution_options(synchronize_session=False)
        result = await self.session.execute(stmt)
        updated = result.scalar_one_or_none()
        if auto_commit:
            await self.session.commit()

        if updated is not None:
            await self.session.refresh(updated)

        return updated

    async def delete_by_id(
        self,
        obj_id: str | int | uuid.UUID,
        id_column_name: str = "id",
        auto_commit: bool = True,
    ) -> bool:
        """
        Delete an object by its ID. Soft deletes when the model supports it.

        Args:
            obj_id (str | int | uuid.UUID): The ID of the object to delete.
            id_column_name (str): The name of the ID column in the model.
            auto_commit (bool): Whether to commit the transaction.

        Returns:
            is_deleted (bool): True if the object was deleted, False otherwise.

        Raises:
            ValueError: If the id_column_name doesn't exist on the model.
        """
        self._validate_column_exists(id_column_name)
        column = getattr(self.model, id_column_name)

        if self.soft_delete:
            stmt = self._where_active(
                update(self.model).where(column == obj_id).values(deleted_at=datetime.now(UTC))
            )
        else:
            stmt = delete(self.model).where(column == obj_id)

        # Instances already loaded in this session must see the new deleted_at
        stmt = stmt.execution_options(synchronize_session="fetch")

        result = await self.session.execute(stmt)
        if auto_commit:
            await self.session.commit()

        return result.rowcount > 0
