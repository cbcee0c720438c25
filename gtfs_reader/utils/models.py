"""Helper functions for data models."""

import copy
from pathlib import Path
from typing import Annotated, Union, get_args, get_origin

import pandas as pd
from pandas import DataFrame
from pandera import DataFrameModel
from pandera.errors import SchemaError, SchemaErrors
from pydantic import BaseModel, validate_call
from pydantic.fields import FieldInfo

from ..errors import TableValidationError
from ..logger import GtfsLogger
from ..params import SMALL_RECS


@validate_call(config={"arbitrary_types_allowed": True})
def validate_df_to_model(
    df: DataFrame, model: type, output_file: Path = Path("validation_failure_cases.csv")
) -> DataFrame:
    """Wrapper to validate a DataFrame against a Pandera DataFrameModel with better logging.

    Also copies the attrs from the input DataFrame to the validated DataFrame.

    Args:
        df: DataFrame to validate.
        model: Pandera DataFrameModel to validate against.
        output_file: Optional file to write validation errors to. Defaults to
            validation_failure_cases.csv.
    """
    attrs = copy.deepcopy(df.attrs)
    err_msg = f"Validation to {model.__name__} failed."
    try:
        model_df = model.validate(df, lazy=True)
        model_df.attrs = attrs
        return model_df
    except (TypeError, ValueError) as e:
        GtfsLogger.error(f"Validation to {model.__name__} failed.\n{e}")
        raise TableValidationError(err_msg) from e
    except SchemaErrors as e:
        # Log the summary of errors
        GtfsLogger.error(
            f"Validation to {model.__name__} failed with {len(e.failure_cases)} \
            errors: \n{e.failure_cases}"
        )

        # If there are many errors, save them to a file
        if len(e.failure_cases) > SMALL_RECS:
            error_file = output_file
            e.failure_cases.to_csv(error_file)
            GtfsLogger.info(f"Detailed error cases written to {error_file}")
        else:
            # Otherwise log the errors directly
            GtfsLogger.error("Detailed failure cases:\n%s", e.failure_cases)
        raise TableValidationError(err_msg) from e
    except SchemaError as e:
        GtfsLogger.error(f"Validation to {model.__name__} failed with error: {e}")
        GtfsLogger.error(f"Failure Cases:\n{e.failure_cases}")
        raise TableValidationError(err_msg) from e


def order_fields_from_data_model(df: pd.DataFrame, model: DataFrameModel) -> pd.DataFrame:
    """Order the fields in a DataFrame to match the order in a Pandera DataFrameModel.

    Will add any fields that are not in the model to the end of the DataFrame.
    Will not add any fields that are in the model but not in the DataFrame.

    Args:
        df: DataFrame to order.
        model: Pandera DataFrameModel to order the DataFrame to.
    """
    model_fields = list(model.to_schema().columns.keys())
    df_model_fields = [f for f in model_fields if f in df.columns]
    df_additional_fields = [f for f in df.columns if f not in model_fields]
    return df[df_model_fields + df_additional_fields]


def field_column_name(name: str, field: FieldInfo) -> str:
    """Column name a pydantic field is read from: its validation alias or alias, else its name."""
    if isinstance(field.validation_alias, str):
        return field.validation_alias
    if field.alias:
        return field.alias
    return name


def model_columns(model: type[BaseModel]) -> dict[str, FieldInfo]:
    """Column names of a pydantic model in declaration order, mapped to their field."""
    return {field_column_name(n, f): f for n, f in model.model_fields.items()}


def required_columns(model: type[BaseModel]) -> list[str]:
    """Column names of the fields of a pydantic model which have no default."""
    return [c for c, f in model_columns(model).items() if f.is_required()]


def annotation_metadata(field: FieldInfo) -> list:
    """All `Annotated` metadata of a field, including metadata nested in Optional/Union."""
    metadata = list(field.metadata)

    def _collect(annotation):
        if get_origin(annotation) is Annotated:
            metadata.extend(annotation.__metadata__)
            _collect(get_args(annotation)[0])
        elif get_origin(annotation) is Union:
            for arg in get_args(annotation):
                _collect(arg)

    _collect(field.annotation)
    return metadata


def base_annotation(field: FieldInfo) -> Union[type, None]:
    """Innermost type of a field, dropping Optional and `Annotated` wrappers."""
    annotation = field.annotation
    while True:
        if get_origin(annotation) is Annotated:
            annotation = get_args(annotation)[0]
        elif get_origin(annotation) is Union:
            args = [a for a in get_args(annotation) if a is not type(None)]
            if len(args) != 1:
                return annotation
            annotation = args[0]
        else:
            return annotation
