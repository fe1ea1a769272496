from __future__ import annotations

from dataclasses import dataclass

from .errors import TokenErrorCode, build_parse_error


@dataclass(frozen=True, slots=True, order=True)
class TokenReference:
    token_id: str

    def __post_init__(self) -> None:
        if not isinstance(self.token_id, str) or not self.token_id:
            raise build_parse_error(
                TokenErrorCode.E_TOKEN_REFERENCE_INVALID,
                "token reference requires a non-empty string id",
                {"token_id": repr(self.token_id)},
            )

    def __str__(self) -> str:
        return self.token_id


def id_to_reference(token_id: str) -> TokenReference:
    return TokenReference(token_id)


def reference_to_id(reference: TokenReference) -> str:
    return reference.token_id
