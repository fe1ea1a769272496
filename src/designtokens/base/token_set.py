from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from enum import StrEnum
from typing import Protocol, Self, TypeGuard

from .errors import TokenErrorCode, build_parse_error, build_token_type_error
from .reference import TokenReference, id_to_reference

logger = logging.getLogger(__name__)


class DuplicatePolicy(StrEnum):
    KEEP_FIRST = "keep_first"
    REPLACE = "replace"


class Identified(Protocol):
    @property
    def id(self) -> str: ...


type TokenPredicate[T] = Callable[[object], TypeGuard[T]]
type TokenParser[T] = Callable[[object], T]


def _is_ordered_sequence(data: object) -> TypeGuard[Sequence[object]]:
    return isinstance(data, Sequence) and not isinstance(data, str | bytes | bytearray)


def _coerce_duplicate_policy(value: DuplicatePolicy | str) -> DuplicatePolicy:
    try:
        return DuplicatePolicy(value)
    except ValueError:
        raise build_parse_error(
            TokenErrorCode.E_TOKEN_SET_POLICY_INVALID,
            f"unknown duplicate policy {value!r}",
            {
                "choices": [member.value for member in DuplicatePolicy],
                "duplicate_policy": repr(value),
            },
        ) from None


def _reference_or_none(candidate: object) -> TokenReference | None:
    token_id = getattr(candidate, "id", None)
    if isinstance(token_id, str) and token_id:
        return id_to_reference(token_id)
    return None


class TokenSet[T: Identified]:
    """Insertion-ordered set of tokens keyed by their reference.

    Only values accepted by ``is_token`` can be added. ``token_from_data`` turns
    one raw record into a token and is used to pre-populate the set from
    ``data``, which must be an ordered sequence of records.

    When a token whose reference is already stored is added again, the
    ``duplicate_policy`` decides the outcome: ``KEEP_FIRST`` retains the stored
    token, ``REPLACE`` swaps in the new one at the same position. Neither
    changes the size or the iteration order.

    Not thread-safe; callers sharing a set across threads must lock around
    mutating calls.
    """

    __slots__ = ("_duplicate_policy", "_is_token", "_token_from_data", "_tokens")

    def __init__(
        self,
        is_token: TokenPredicate[T],
        token_from_data: TokenParser[T],
        data: object = None,
        *,
        duplicate_policy: DuplicatePolicy | str = DuplicatePolicy.KEEP_FIRST,
    ) -> None:
        self._is_token = is_token
        self._token_from_data = token_from_data
        self._duplicate_policy = _coerce_duplicate_policy(duplicate_policy)
        self._tokens: dict[TokenReference, T] = {}
        if data is not None:
            self._populate(data)

    def _populate(self, data: object) -> None:
        if not _is_ordered_sequence(data):
            raise build_parse_error(
                TokenErrorCode.E_TOKEN_SET_INPUT_INVALID,
                "token set data must be an ordered sequence of records",
                {"data_type": type(data).__name__},
            )
        records = tuple(data)
        for record in records:
            self.add(self._token_from_data(record))
        logger.debug(
            "populated token set with %d token(s) from %d record(s)",
            len(self._tokens),
            len(records),
        )

    @property
    def duplicate_policy(self) -> DuplicatePolicy:
        return self._duplicate_policy

    @property
    def size(self) -> int:
        return len(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)

    def add(self, token: T) -> Self:
        if not self._is_token(token):
            raise build_token_type_error(token)
        reference = id_to_reference(token.id)
        if reference not in self._tokens:
            self._tokens[reference] = token
        elif self._duplicate_policy is DuplicatePolicy.REPLACE:
            # dict assignment to an existing key keeps its position
            self._tokens[reference] = token
        return self

    def has(self, token: object) -> bool:
        reference = _reference_or_none(token)
        return reference is not None and reference in self._tokens

    def __contains__(self, token: object) -> bool:
        return self.has(token)

    def remove(self, token: object) -> bool:
        reference = _reference_or_none(token)
        if reference is None or reference not in self._tokens:
            return False
        del self._tokens[reference]
        return True

    def clear(self) -> None:
        removed = len(self._tokens)
        self._tokens.clear()
        logger.debug("cleared token set (%d token(s) removed)", removed)

    def find_by_reference(self, reference: TokenReference) -> T | None:
        return self._tokens.get(reference)

    def values(self) -> Iterator[T]:
        return iter(tuple(self._tokens.values()))

    def __iter__(self) -> Iterator[T]:
        return self.values()

    def to_serializable(self) -> list[T]:
        return list(self._tokens.values())

    def __repr__(self) -> str:
        token_ids = [reference.token_id for reference in self._tokens]
        return f"{type(self).__name__}({token_ids!r})"
