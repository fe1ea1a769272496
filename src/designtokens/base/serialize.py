from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Protocol

from .errors import TokenErrorCode, build_parse_error
from .token_set import DuplicatePolicy, Identified, TokenParser, TokenPredicate, TokenSet


class SerializableToken(Identified, Protocol):
    def to_data(self) -> Mapping[str, object]: ...


def token_set_payload[T: SerializableToken](token_set: TokenSet[T]) -> list[Mapping[str, object]]:
    return [token.to_data() for token in token_set.to_serializable()]


def token_set_json[T: SerializableToken](token_set: TokenSet[T]) -> str:
    # list order is the set's insertion order; only keys within a token are sorted
    return json.dumps(
        token_set_payload(token_set),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=True,
        allow_nan=False,
    )


def token_set_from_json[T: Identified](
    text: str | bytes,
    is_token: TokenPredicate[T],
    token_from_data: TokenParser[T],
    *,
    duplicate_policy: DuplicatePolicy | str = DuplicatePolicy.KEEP_FIRST,
) -> TokenSet[T]:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as exc:
        raise build_parse_error(
            TokenErrorCode.E_TOKEN_SET_JSON_INVALID,
            f"token set JSON could not be decoded: {exc.msg}",
            {"line": exc.lineno, "column": exc.colno},
        ) from exc
    except UnicodeDecodeError as exc:
        raise build_parse_error(
            TokenErrorCode.E_TOKEN_SET_JSON_INVALID,
            f"token set JSON bytes could not be decoded: {exc.reason}",
            {"encoding": exc.encoding, "position": exc.start},
        ) from exc
    if not isinstance(payload, list):
        raise build_parse_error(
            TokenErrorCode.E_TOKEN_SET_INPUT_INVALID,
            "token set data must be an ordered sequence of records",
            {"data_type": type(payload).__name__},
        )
    return TokenSet(is_token, token_from_data, payload, duplicate_policy=duplicate_policy)
