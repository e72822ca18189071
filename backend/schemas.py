from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from validation import (
    check_amount_rules,
    require_email,
    require_exact_length,
    require_min_length,
    require_not_empty,
)

# Fields default to None and validate_default=True so an empty body reports
# one message per missing field instead of pydantic's generic "Field required".


# ── Auth requests ─────────────────────────────────────────────────
class CreateAccountRequest(BaseModel):
    name: Any = Field(default=None, validate_default=True)
    password: Any = Field(default=None, validate_default=True)
    email: Any = Field(default=None, validate_default=True)

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return require_not_empty(v, "El nombre no puede ir vacío")

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        return require_min_length(v, 8, "La contraseña debe tener mínimo 8 caracteres")

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return require_email(v)


class TokenRequest(BaseModel):
    token: Any = Field(default=None, validate_default=True)

    @field_validator("token")
    @classmethod
    def check_token(cls, v):
        return require_exact_length(v, 6, "Token no válido")


class LoginRequest(BaseModel):
    email: Any = Field(default=None, validate_default=True)
    password: Any = Field(default=None, validate_default=True)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return require_email(v)

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        return require_not_empty(v, "La contraseña no debe ir vacía")


class EmailRequest(BaseModel):
    email: Any = Field(default=None, validate_default=True)

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return require_email(v)


class NewPasswordRequest(BaseModel):
    password: Any = Field(default=None, validate_default=True)

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        return require_min_length(v, 8, "La contraseña debe tener mínimo 8 caracteres")


class UpdatePasswordRequest(BaseModel):
    current_password: Any = Field(default=None, validate_default=True)
    password: Any = Field(default=None, validate_default=True)

    @field_validator("current_password")
    @classmethod
    def check_current_password(cls, v):
        return require_not_empty(v, "La contraseña actual no puede ir vacía")

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        return require_min_length(v, 8, "La nueva contraseña debe tener mínimo 8 caracteres")


class CheckPasswordRequest(BaseModel):
    password: Any = Field(default=None, validate_default=True)

    @field_validator("password")
    @classmethod
    def check_password(cls, v):
        return require_not_empty(v, "La contraseña actual no puede ir vacía")


class UpdateUserRequest(BaseModel):
    name: Any = Field(default=None, validate_default=True)
    email: Any = Field(default=None, validate_default=True)

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return require_not_empty(v, "El nombre no puede ir vacío")

    @field_validator("email")
    @classmethod
    def check_email(cls, v):
        return require_email(v)


# ── Budget / expense requests ─────────────────────────────────────
class BudgetRequest(BaseModel):
    name: Any = Field(default=None, validate_default=True)
    amount: Any = Field(default=None, validate_default=True)

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return require_not_empty(v, "El nombre del presupuesto no puede ir vacío")

    @model_validator(mode="wrap")
    @classmethod
    def check_amount(cls, data, handler):
        return check_amount_rules(
            cls,
            data,
            handler,
            "La cantidad del presupuesto no puede ir vacía",
            "El presupuesto debe ser mayor a 0",
        )


class ExpenseRequest(BaseModel):
    name: Any = Field(default=None, validate_default=True)
    amount: Any = Field(default=None, validate_default=True)

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        return require_not_empty(v, "El nombre del gasto no puede ir vacío")

    @model_validator(mode="wrap")
    @classmethod
    def check_amount(cls, data, handler):
        return check_amount_rules(
            cls,
            data,
            handler,
            "La cantidad del gasto no puede ir vacía",
            "El gasto debe ser mayor a 0",
        )


# ── Responses ─────────────────────────────────────────────────────
# Response keys are camelCase (userId, createdAt) for existing clients.
RESPONSE_CONFIG = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class UserOut(BaseModel):
    model_config = RESPONSE_CONFIG

    id: int
    name: str
    email: str


class ExpenseOut(BaseModel):
    model_config = RESPONSE_CONFIG

    id: int
    name: str
    amount: float
    budget_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BudgetOut(BaseModel):
    model_config = RESPONSE_CONFIG

    id: int
    name: str
    amount: float
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BudgetDetailOut(BudgetOut):
    expenses: List[ExpenseOut] = []
