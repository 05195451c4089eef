# sheets_orm/orm.py
"""Model registry bound to one sheet store."""

import logging
from typing import Dict, Optional, Type

from sheets_orm.core.base_service import Model
from sheets_orm.core.exceptions import ModelDefinitionError, ModelNotFoundError
from sheets_orm.schema.schemas import SchemaInput
from sheets_orm.store.protocol import SheetStore
from sheets_orm.store.sql import SqlSheetStore
from sheets_orm.utils.ids import IdGenerator

logger = logging.getLogger(__name__)


class SheetsORM:
    """Defines, looks up and initializes models stored in one sheet store."""

    def __init__(self, store: SheetStore):
        if store is None:
            raise ModelDefinitionError("A sheet store is required")
        self.store = store
        self.models: Dict[str, Model] = {}

    @classmethod
    def from_url(cls, database_url: Optional[str] = None) -> "SheetsORM":
        """ORM over a SQL sheet store; defaults to ``SHEETS_ORM_DATABASE_URL``."""
        return cls(SqlSheetStore(database_url=database_url))

    def define_model(
        self,
        model_name: str,
        schema: SchemaInput = None,
        sheet_name: Optional[str] = None,
        primary_key: str = "id",
        timestamps: bool = True,
        id_generator: Optional[IdGenerator] = None,
        model_class: Type[Model] = Model,
    ) -> Model:
        """
        Register a model.

        Args:
            model_name: Registry name; also the sheet name unless ``sheet_name`` is given
            schema: Field specs, as FieldSpec objects or plain dicts
            sheet_name: Name of the backing sheet
            primary_key: Field used by find_by_id/update/delete
            timestamps: Maintain createdAt/updatedAt columns
            id_generator: Source of ids for records created without one
            model_class: Model subclass to instantiate (for custom hooks)

        Raises:
            ModelDefinitionError: if ``model_name`` is already registered
        """
        if model_name in self.models:
            raise ModelDefinitionError(f"Model '{model_name}' already defined")

        model = model_class(
            self.store,
            sheet_name=sheet_name or model_name,
            primary_key=primary_key or "id",
            schema=schema,
            timestamps=timestamps is not False,
            id_generator=id_generator,
        )
        self.models[model_name] = model
        logger.info("Defined model '%s' on sheet '%s'", model_name, model.sheet_name)
        return model

    def model(self, name: str) -> Model:
        if name not in self.models:
            raise ModelNotFoundError(f"Model '{name}' not found")
        return self.models[name]

    def init_models(self) -> "SheetsORM":
        """Make sure every defined model has its sheet."""
        for model in self.models.values():
            model.init()
        return self
