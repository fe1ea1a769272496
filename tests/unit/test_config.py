from __future__ import annotations

from pathlib import Path

import pytest

from designtokens.base import DuplicatePolicy, Token, is_token, token_from_data
from designtokens.config import TokenSetConfig, TokenSetConfigError, load_token_set_config

pytestmark = pytest.mark.unit


def _write_config(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "token_set.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def test_default_config_keeps_first_token() -> None:
    config = TokenSetConfig()

    assert config.duplicate_policy is DuplicatePolicy.KEEP_FIRST
    assert config.artifact_path is None


def test_config_loads_duplicate_policy(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "token_set:\n  duplicate_policy: replace\n")

    config = load_token_set_config(path)

    assert config.duplicate_policy is DuplicatePolicy.REPLACE
    assert config.artifact_path == str(path.resolve())


def test_config_load_is_cached_per_path(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "token_set:\n  duplicate_policy: keep_first\n")

    assert load_token_set_config(path) is load_token_set_config(str(path))


def test_config_builds_token_sets_with_its_policy(tmp_path: Path) -> None:
    path = _write_config(tmp_path, "token_set:\n  duplicate_policy: replace\n")
    config = load_token_set_config(path)

    token_set = config.new_token_set(
        is_token,
        token_from_data,
        [{"id": "a", "description": "old"}, {"id": "a", "description": "new"}],
    )

    assert token_set.duplicate_policy is DuplicatePolicy.REPLACE
    assert list(token_set) == [Token(id="a", description="new")]


def test_missing_config_file_is_reported(tmp_path: Path) -> None:
    with pytest.raises(TokenSetConfigError) as exc_info:
        load_token_set_config(tmp_path / "absent.yaml")

    assert exc_info.value.code == "E_CONFIG_READ_FAILED"


@pytest.mark.parametrize(
    ("text", "code"),
    [
        ("token_set: [\n", "E_CONFIG_PARSE_FAILED"),
        ("- keep_first\n", "E_CONFIG_INVALID"),
        ("other: {}\n", "E_CONFIG_INVALID"),
        ("token_set:\n  duplicate_policy: 3\n", "E_CONFIG_INVALID"),
        ("token_set:\n  duplicate_policy: merge\n", "E_CONFIG_INVALID"),
    ],
)
def test_malformed_config_is_rejected(tmp_path: Path, text: str, code: str) -> None:
    path = _write_config(tmp_path, text)

    with pytest.raises(TokenSetConfigError) as exc_info:
        load_token_set_config(path)

    assert exc_info.value.code == code
    assert str(exc_info.value).startswith(f"{code}: ")
