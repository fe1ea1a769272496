from __future__ import annotations

from typing import TypeGuard

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import TokenErrorCode, build_parse_error
from .reference import TokenReference, id_to_reference


class Token(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: str = Field(min_length=1)
    description: str | None = None

    @property
    def reference(self) -> TokenReference:
        return id_to_reference(self.id)

    @classmethod
    def from_data(cls, data: object) -> Token:
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            errors = exc.errors(include_url=False)
            raise build_parse_error(
                TokenErrorCode.E_TOKEN_DATA_INVALID,
                f"invalid {cls.__name__} data: {errors[0]['msg'] if errors else exc}",
                {
                    "error_count": len(errors),
                    "locations": [".".join(str(part) for part in err["loc"]) for err in errors],
                    "token_class": cls.__name__,
                },
            ) from exc

    def to_data(self) -> dict[str, object]:
        return self.model_dump(mode="json", exclude_none=True)


def is_token(candidate: object) -> TypeGuard[Token]:
    return isinstance(candidate, Token)


def token_from_data(data: object) -> Token:
    return Token.from_data(data)
