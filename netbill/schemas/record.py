from pydantic import BaseModel, ConfigDict, Field, field_validator
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any, List, Sequence

# Stored cells are text. Every record field is a string; numbers, dates and
# enums handed in by callers are rendered on the way in and parsed back by
# whoever needs them as numbers.

def render_cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, (int, float, Decimal)):
        return str(value)
    return value

class SheetRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field("", validation_alias="ID")

    @field_validator("*", mode="before")
    @classmethod
    def render_cells(cls, v: Any) -> Any:
        return render_cell(v)

    @classmethod
    def columns(cls) -> List[str]:
        """Header row, in schema order."""
        return [field.validation_alias or name for name, field in cls.model_fields.items()]

    @classmethod
    def field_name(cls, key: str) -> str:
        """Resolve an attribute name or a column name to the attribute name."""
        for name, field in cls.model_fields.items():
            if key == name or key == field.validation_alias:
                return name
        raise ValueError(f"{cls.__name__} has no field '{key}'")

    @classmethod
    def from_row(cls, header: Sequence[Any], row: Sequence[Any]):
        # short rows: missing trailing cells decode to ""
        values = {}
        for index, column in enumerate(header):
            values[str(column).strip()] = row[index] if index < len(row) else ""
        return cls.model_validate(values)

    def to_row(self) -> List[str]:
        return [getattr(self, name) for name in type(self).model_fields]
