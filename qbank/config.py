from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any
import json
import os

import yaml

from qbank.errors import ConfigError
from qbank.logging_utils import coerce_level
from qbank.search.query import MATCH_MODES, RANKINGS

CORPUS_PATH_ENV = "QBANK_CORPUS_PATH"


@dataclass(frozen=True)
class CorpusConfig:
    path: str = "docs"
    file_extensions: list[str] = field(default_factory=lambda: [".md"])
    recursive: bool = True


@dataclass(frozen=True)
class TokenizerConfig:
    remove_stopwords: bool = True
    min_token_length: int = 1
    extra_stopwords: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SearchConfig:
    mode: str = "and"
    ranking: str = "matches"
    limit: int | None = 10


@dataclass(frozen=True)
class IndexConfig:
    path: str | None = None


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "WARNING"
    file: str | None = None


@dataclass(frozen=True)
class AppConfig:
    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    tokenizer: TokenizerConfig = field(default_factory=TokenizerConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    index: IndexConfig = field(default_factory=IndexConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


_SECTIONS = {
    "corpus": CorpusConfig,
    "tokenizer": TokenizerConfig,
    "search": SearchConfig,
    "index": IndexConfig,
    "logging": LoggingConfig,
}


def _coalesce(base: dict[str, Any], updates: dict[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in updates.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _coalesce(merged[key], value)
        else:
            merged[key] = value
    return merged


def _build_section(name: str, data: Any):
    cls = _SECTIONS[name]
    if not isinstance(data, dict):
        raise ConfigError(f"Section '{name}' must be a mapping")
    allowed = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ConfigError(f"Unknown keys in '{name}': {', '.join(unknown)}")
    return cls(**data)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _require_bool(name: str, value: Any) -> None:
    if not isinstance(value, bool):
        raise ConfigError(f"{name} must be true or false, got {value!r}")


def _require_str_list(name: str, value: Any) -> None:
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{name} must be a list of strings, got {value!r}")


def _require_optional_str(name: str, value: Any) -> None:
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"{name} must be a string or null, got {value!r}")


def _validate(config: AppConfig) -> AppConfig:
    if not isinstance(config.corpus.path, str):
        raise ConfigError(f"corpus.path must be a string, got {config.corpus.path!r}")
    _require_str_list("corpus.file_extensions", config.corpus.file_extensions)
    if not config.corpus.file_extensions:
        raise ConfigError("corpus.file_extensions must not be empty")
    _require_bool("corpus.recursive", config.corpus.recursive)

    _require_bool("tokenizer.remove_stopwords", config.tokenizer.remove_stopwords)
    if not _is_int(config.tokenizer.min_token_length) or config.tokenizer.min_token_length < 1:
        raise ConfigError("tokenizer.min_token_length must be a positive integer")
    _require_str_list("tokenizer.extra_stopwords", config.tokenizer.extra_stopwords)

    if config.search.mode not in MATCH_MODES:
        raise ConfigError(f"search.mode must be one of {MATCH_MODES}, got {config.search.mode!r}")
    if config.search.ranking not in RANKINGS:
        raise ConfigError(
            f"search.ranking must be one of {RANKINGS}, got {config.search.ranking!r}"
        )
    if config.search.limit is not None and (
        not _is_int(config.search.limit) or config.search.limit < 1
    ):
        raise ConfigError("search.limit must be a positive integer or null")

    _require_optional_str("index.path", config.index.path)

    level = config.logging.level
    if isinstance(level, bool) or not isinstance(level, (int, str)):
        raise ConfigError(f"logging.level must be a level name, got {level!r}")
    try:
        coerce_level(level)
    except ValueError as e:
        raise ConfigError(f"logging.level: {e}") from e
    _require_optional_str("logging.file", config.logging.file)
    return config


def _from_dict(data: dict[str, Any]) -> AppConfig:
    unknown = sorted(set(data) - set(_SECTIONS))
    if unknown:
        raise ConfigError(f"Unknown config sections: {', '.join(unknown)}")
    return _validate(AppConfig(**{name: _build_section(name, data[name]) for name in _SECTIONS}))


def apply_env_overrides(config: AppConfig) -> AppConfig:
    env_path = os.getenv(CORPUS_PATH_ENV)
    if not env_path:
        return config
    corpus = CorpusConfig(
        path=env_path,
        file_extensions=config.corpus.file_extensions,
        recursive=config.corpus.recursive,
    )
    return AppConfig(
        corpus=corpus,
        tokenizer=config.tokenizer,
        search=config.search,
        index=config.index,
        logging=config.logging,
    )


def load_config(path: str | Path | None) -> AppConfig:
    """Load configuration from a YAML or JSON file merged over defaults.

    Args:
        path: Config file, or None for defaults

    Returns:
        AppConfig with the QBANK_CORPUS_PATH override applied

    Raises:
        FileNotFoundError: path does not exist
        ConfigError: unknown keys or invalid values
    """
    if path is None:
        return apply_env_overrides(AppConfig())

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config not found: {path}")

    raw = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in {".json"}:
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw) or {}
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot parse {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config root in {path} must be a mapping")

    merged = _coalesce(asdict(AppConfig()), data)
    try:
        config = _from_dict(merged)
    except TypeError as e:
        raise ConfigError(str(e)) from e
    return apply_env_overrides(config)
