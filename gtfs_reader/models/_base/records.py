from typing import ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, model_validator

from ...errors import AnyOfError
from ...logger import GtfsLogger

AnyOf = list[Union[str, list[str]]]


class RecordModel(BaseModel):
    """A pydantic model for GTFS records which adds validation for require_any_of.

    Records are immutable once decoded and ignore any attribute they do not declare.

    Attributes:
        model_config (ConfigDict): Configuration dictionary for the model.
        require_any_of (ClassVar[AnyOf]): Class variable specifying fields that require at least
            one of them to be present.
        id_field (ClassVar[Optional[str]]): Name of the field identifying a record within its
            file, None if the file has no identifier column.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        protected_namespaces=(),
    )
    require_any_of: ClassVar[AnyOf] = []
    id_field: ClassVar[Optional[str]] = None

    @staticmethod
    def _check_field_exists(
        all_of_fields: Union[str, list[str]], fields_present: list[str]
    ) -> bool:
        if isinstance(all_of_fields, list):
            return all(f in fields_present for f in all_of_fields)
        return all_of_fields in fields_present

    @model_validator(mode="after")
    def check_any_of(self):
        """Validates that at least one of the fields in `require_any_of` is set.

        Runs once every field decoded, so a missing or invalid field is reported first. Fields
        holding None are not set.

        Raises:
            AnyOfError: If none of the `require_any_of` fields are set.
        """
        cls = type(self)
        if not cls.require_any_of:
            return self

        _fields_present = [f for f in cls.model_fields if getattr(self, f) is not None]
        if any(cls._check_field_exists(f, _fields_present) for f in cls.require_any_of):
            return self
        GtfsLogger.debug(f"{cls.__name__} should have at least one of {cls.require_any_of}.")
        msg = f"{cls.__name__} requires at least one of: {cls.require_any_of}."
        raise AnyOfError(cls.any_of_fields(), msg)

    @classmethod
    def any_of_fields(cls) -> list[str]:
        """Flat list of the fields named in `require_any_of`."""
        _fields = []
        for f in cls.require_any_of:
            _fields.extend(f if isinstance(f, list) else [f])
        return _fields

    @property
    def record_id(self) -> Optional[str]:
        """Value of the identifier field, None if the file has no identifier column."""
        if self.id_field is None:
            return None
        return getattr(self, self.id_field)

    @property
    def asdict(self) -> dict:
        """Model as a dictionary."""
        return self.model_dump(exclude_none=True, by_alias=True)
