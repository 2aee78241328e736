"""
Input validation schemas using Pydantic for better data integrity.
"""
from datetime import datetime
from typing import Any, Type

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from foodorder.domain.Errors import ValidationError
from foodorder.utilities.constants import DATE_FORMAT


class FoodItemInput(BaseModel):
    """Schema for catalog item input validation."""
    name: str
    cost: float = Field(..., gt=0, allow_inf_nan=False)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        """Names are stored trimmed and must not be blank."""
        if not v.strip():
            raise ValueError('Please enter a food name')
        return v.strip()

    @field_validator('cost', mode='before')
    @classmethod
    def strip_cost(cls, v):
        """Accept numeric strings as typed in a form field."""
        if isinstance(v, bool):
            raise ValueError('Please enter a valid positive number')
        if isinstance(v, str):
            v = v.strip()
            if not v:
                raise ValueError('Please enter a cost')
        return v


class BudgetInput(BaseModel):
    """Schema for the target budget of an order plan. Zero means 'unset'."""
    budget: float = Field(..., ge=0, allow_inf_nan=False)

    @field_validator('budget', mode='before')
    @classmethod
    def strip_budget(cls, v):
        if isinstance(v, bool):
            raise ValueError('Please enter a valid target budget')
        if isinstance(v, str):
            v = v.strip()
        return v


class PlanDateInput(BaseModel):
    """Schema for a plan date in canonical YYYY-MM-DD form."""
    date: str = Field(..., pattern=r'^\d{4}-\d{2}-\d{2}$')

    @field_validator('date')
    @classmethod
    def validate_calendar_date(cls, v):
        """Reject strings that look right but name no real day (e.g. 2025-02-30)."""
        try:
            datetime.strptime(v, DATE_FORMAT)
        except ValueError:
            raise ValueError(f'Not a calendar date: {v}')
        return v


def validate(schema: Type[BaseModel], **data: Any) -> BaseModel:
    """Run a schema and translate its failure into a field-level ValidationError."""
    try:
        return schema(**data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        loc = first.get('loc') or ('input',)
        field = str(loc[0])
        message = first.get('msg', 'invalid value')
        # pydantic prefixes messages raised from validators
        if message.startswith('Value error, '):
            message = message[len('Value error, '):]
        raise ValidationError(field, message) from None


def parse_cost(value: Any) -> float:
    return validate(FoodItemInput, name='-', cost=value).cost


def parse_budget(value: Any) -> float:
    return validate(BudgetInput, budget=value).budget


def parse_plan_date(value: Any) -> str:
    return validate(PlanDateInput, date=value).date
