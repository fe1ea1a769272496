from __future__ import annotations

from dataclasses import dataclass
from functools import cache
from pathlib import Path
from typing import cast

import yaml  # type: ignore[import-untyped]

from designtokens.base.token_set import (
    DuplicatePolicy,
    Identified,
    TokenParser,
    TokenPredicate,
    TokenSet,
)

_CONFIG_READ_FAILED = "E_CONFIG_READ_FAILED"
_CONFIG_PARSE_FAILED = "E_CONFIG_PARSE_FAILED"
_CONFIG_INVALID = "E_CONFIG_INVALID"


class TokenSetConfigError(ValueError):
    def __init__(self, code: str, message: str) -> None:
        super().__init__(f"{code}: {message}")
        self.code = code
        self.message = message


@dataclass(frozen=True, slots=True)
class TokenSetConfig:
    duplicate_policy: DuplicatePolicy = DuplicatePolicy.KEEP_FIRST
    artifact_path: str | None = None

    def new_token_set[T: Identified](
        self,
        is_token: TokenPredicate[T],
        token_from_data: TokenParser[T],
        data: object = None,
    ) -> TokenSet[T]:
        return TokenSet(is_token, token_from_data, data, duplicate_policy=self.duplicate_policy)


def load_token_set_config(path: str | Path) -> TokenSetConfig:
    return _load_token_set_config_cached(str(Path(path).resolve()))


@cache
def _load_token_set_config_cached(path: str) -> TokenSetConfig:
    target = Path(path)
    raw = _read_yaml_file(target)
    token_set_block = _require_mapping(raw, "token_set")
    policy_text = _require_string(token_set_block, "duplicate_policy")
    try:
        policy = DuplicatePolicy(policy_text)
    except ValueError:
        choices = ", ".join(member.value for member in DuplicatePolicy)
        raise TokenSetConfigError(
            _CONFIG_INVALID,
            f"unknown duplicate_policy '{policy_text}'; expected one of: {choices}",
        ) from None
    return TokenSetConfig(duplicate_policy=policy, artifact_path=str(target))


def _read_yaml_file(path: Path) -> dict[str, object]:
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TokenSetConfigError(
            _CONFIG_READ_FAILED,
            f"unable to read token set config '{path}': {exc}",
        ) from exc
    try:
        payload = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise TokenSetConfigError(
            _CONFIG_PARSE_FAILED,
            f"invalid token set config yaml in '{path}': {exc}",
        ) from exc
    if not isinstance(payload, dict):
        raise TokenSetConfigError(
            _CONFIG_INVALID,
            f"token set config '{path}' must contain a mapping",
        )
    return cast(dict[str, object], payload)


def _require_mapping(data: dict[str, object], key: str) -> dict[str, object]:
    value = data.get(key)
    if isinstance(value, dict):
        return cast(dict[str, object], value)
    raise TokenSetConfigError(_CONFIG_INVALID, f"missing or invalid mapping for key '{key}'")


def _require_string(data: dict[str, object], key: str) -> str:
    value = data.get(key)
    if isinstance(value, str) and value:
        return value
    raise TokenSetConfigError(_CONFIG_INVALID, f"missing or invalid string for key '{key}'")
