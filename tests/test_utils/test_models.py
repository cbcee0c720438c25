"""Tests for /utils/models.

Run just these tests using `pytest tests/test_utils/test_models.py`
"""

from typing import Optional

import pandas as pd
import pytest
from pydantic import BaseModel, Field

from gtfs_reader.errors import TableValidationError
from gtfs_reader.models.gtfs.tables import StopsTable
from gtfs_reader.models.gtfs.types import DecoderKind, GtfsDate, Latitude
from gtfs_reader.utils.models import (
    annotation_metadata,
    base_annotation,
    model_columns,
    order_fields_from_data_model,
    required_columns,
    validate_df_to_model,
)


class SampleModel(BaseModel):
    field1: str
    field2: Optional[int] = None
    field3: str = Field(alias="third")
    day: Optional[GtfsDate] = None
    lat: Latitude


def test_model_columns():
    assert list(model_columns(SampleModel)) == ["field1", "field2", "third", "day", "lat"]
    assert required_columns(SampleModel) == ["field1", "third", "lat"]


def test_annotation_metadata():
    fields = SampleModel.model_fields
    assert DecoderKind("date") in annotation_metadata(fields["day"])
    assert DecoderKind("latitude") in annotation_metadata(fields["lat"])
    assert annotation_metadata(fields["field1"]) == []


def test_base_annotation():
    fields = SampleModel.model_fields
    assert base_annotation(fields["field2"]) is int
    assert base_annotation(fields["field1"]) is str


def test_order_fields_from_data_model():
    df = pd.DataFrame({"stop_name": ["A"], "stop_lon": [2.4], "stop_id": ["s1"]})
    ordered = order_fields_from_data_model(df, StopsTable)
    assert list(ordered.columns) == ["stop_id", "stop_lon", "stop_name"]


def test_validate_df_to_model():
    df = pd.DataFrame({"stop_id": ["s1", "s2"], "stop_lat": [48.8, None]})
    df.attrs["name"] = "stops"
    validated = validate_df_to_model(df, StopsTable)
    assert validated.attrs["name"] == "stops"

    with pytest.raises(TableValidationError):
        validate_df_to_model(pd.DataFrame({"stop_id": ["s1", "s1"]}), StopsTable)
