from .errors import InvalidTokenTypeError, TokenErrorCode, TokenErrorDetail, TokenParseError
from .reference import TokenReference, id_to_reference, reference_to_id
from .serialize import token_set_from_json, token_set_json, token_set_payload
from .token import Token, is_token, token_from_data
from .token_set import DuplicatePolicy, Identified, TokenSet

__all__ = [
    "DuplicatePolicy",
    "Identified",
    "InvalidTokenTypeError",
    "Token",
    "TokenErrorCode",
    "TokenErrorDetail",
    "TokenParseError",
    "TokenReference",
    "TokenSet",
    "id_to_reference",
    "is_token",
    "reference_to_id",
    "token_from_data",
    "token_set_from_json",
    "token_set_json",
    "token_set_payload",
]
