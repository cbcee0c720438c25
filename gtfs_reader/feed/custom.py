"""Extraction of any file of a source into records of a caller-declared model.

Custom extraction reads columns the schema registry does not know about, including columns that
are not part of the GTFS reference, e.g. a `brigade_id` column some agencies add to trips.txt:

```python
from pydantic import BaseModel

class TripBrigade(BaseModel):
    trip_id: str
    brigade_id: str

brigades = extract_custom(source, "trips.txt", TripBrigade)
[(b.trip_id, b.brigade_id) for b in brigades]
>> [('trip1', '010/51')]
```

Fields of the model are matched to columns by name (or alias), columns the model does not
declare are ignored and the annotated field types of `gtfs_reader.models.gtfs.types` can be used
to decode GTFS values such as dates and service times.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel

from ..errors import ExtractionMissingFieldError, FeedFileNotFoundError, RowError
from ..logger import GtfsLogger
from ..models._base.root import RootListMixin
from ..params import GTFS_FILE_SUFFIX
from ..source import TabularSource
from ..utils.models import required_columns
from ..utils.utils import normalize_filename
from .decode import decode_row

ModelT = TypeVar("ModelT", bound=BaseModel)


class CustomRecordSet(RootListMixin, Generic[ModelT]):
    """Records extracted from one file into a caller-declared model, in file order.

    Iterating, indexing and `len()` act on the records.

    Attributes:
        model: the model records were decoded into.
        filename: the file records were extracted from.
        row_errors (tuple[RowError]): rows that could not be decoded, in line order.
    """

    def __init__(
        self,
        model: type[ModelT],
        filename: str,
        records: list[ModelT],
        row_errors: list[RowError],
    ):
        """Create a CustomRecordSet."""
        self.model = model
        self.filename = filename
        self.root = tuple(records)
        self.row_errors = tuple(row_errors)

    @property
    def records(self) -> tuple[ModelT, ...]:
        """The extracted records."""
        return self.root

    def __repr__(self):
        return (
            f"CustomRecordSet[{self.model.__name__}]({self.filename}: "
            f"{len(self.root)} records, {len(self.row_errors)} row errors)"
        )


def extract_custom(
    source: TabularSource, filename: str, model: type[ModelT]
) -> CustomRecordSet[ModelT]:
    """Extract every row of `filename` into a `model` record.

    Args:
        source: where the file is read from.
        filename: file to extract, `trips.txt` or `trips`.
        model: pydantic model whose fields name the columns to extract.

    Returns:
        the extracted records together with the rows that could not be decoded.

    Raises:
        TypeError: if `model` is not a pydantic model class.
        FeedFileNotFoundError: if the source has no such file.
        HeaderMismatchError: if the header of the file cannot be read.
        ExtractionMissingFieldError: if the header lacks columns the model requires.
    """
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        msg = f"Custom records must be declared as a pydantic BaseModel, got {model!r}."
        raise TypeError(msg)

    filename = normalize_filename(filename, GTFS_FILE_SUFFIX)
    if not source.has(filename):
        GtfsLogger.error(f"Cannot extract {model.__name__}: {filename} not in {source}.")
        raise FeedFileNotFoundError(filename)

    header = source.header(filename)
    missing = [c for c in required_columns(model) if c not in header]
    if missing:
        GtfsLogger.error(f"{filename} is missing fields required by {model.__name__}: {missing}")
        raise ExtractionMissingFieldError(filename, missing)

    GtfsLogger.debug(f"Extracting {model.__name__} records from {filename}.")
    records: list[ModelT] = []
    row_errors: list[RowError] = []
    for raw_row in source.rows(filename):
        try:
            records.append(decode_row(model, raw_row, filename))
        except RowError as e:
            row_errors.append(e)

    if row_errors:
        GtfsLogger.warning(
            f"{len(row_errors)} row(s) of {filename} could not be decoded as {model.__name__}."
        )
    return CustomRecordSet(model, filename, records, row_errors)
