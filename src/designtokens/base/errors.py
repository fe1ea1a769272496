from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import StrEnum
from types import MappingProxyType


class TokenErrorCode(StrEnum):
    E_TOKEN_SET_INPUT_INVALID = "E_TOKEN_SET_INPUT_INVALID"
    E_TOKEN_SET_POLICY_INVALID = "E_TOKEN_SET_POLICY_INVALID"
    E_TOKEN_SET_JSON_INVALID = "E_TOKEN_SET_JSON_INVALID"
    E_TOKEN_TYPE_INVALID = "E_TOKEN_TYPE_INVALID"
    E_TOKEN_DATA_INVALID = "E_TOKEN_DATA_INVALID"
    E_TOKEN_REFERENCE_INVALID = "E_TOKEN_REFERENCE_INVALID"


@dataclass(frozen=True, slots=True)
class TokenErrorDetail:
    code: str
    message: str
    witness: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.code:
            raise ValueError("token error code must be non-empty")
        if not self.message:
            raise ValueError("token error message must be non-empty")
        canonical_witness = {key: self.witness[key] for key in sorted(self.witness)}
        object.__setattr__(self, "witness", MappingProxyType(canonical_witness))


class TokenParseError(ValueError):
    def __init__(self, detail: TokenErrorDetail) -> None:
        super().__init__(f"{detail.code}: {detail.message}")
        self.detail = detail


class InvalidTokenTypeError(TypeError):
    def __init__(self, detail: TokenErrorDetail) -> None:
        super().__init__(f"{detail.code}: {detail.message}")
        self.detail = detail


def build_parse_error(
    code: TokenErrorCode,
    message: str,
    witness: Mapping[str, object] | None = None,
) -> TokenParseError:
    return TokenParseError(
        TokenErrorDetail(code=code.value, message=message, witness=witness or {})
    )


def build_token_type_error(candidate: object) -> InvalidTokenTypeError:
    return InvalidTokenTypeError(
        TokenErrorDetail(
            code=TokenErrorCode.E_TOKEN_TYPE_INVALID.value,
            message=f"value of type '{type(candidate).__name__}' is not an accepted token",
            witness={"candidate_type": type(candidate).__name__},
        )
    )
