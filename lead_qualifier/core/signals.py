import yaml
from pathlib import Path
from typing import Optional, Union
from pydantic import ValidationError
from .config import get_config_path
from .models import SignalConfig

DEFAULT_SIGNALS_FILE = "signals.yaml"


def _read_yaml(path: Path) -> dict:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise RuntimeError(f"Failed to load signal configuration: {e}") from e
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in {path.name}: {e}") from e

    if not isinstance(data, dict) or "version" not in data:
        raise ValueError(f"Invalid signal file {path}: missing 'version' field")
    return data


_LIST_TABLES = ("high_signals", "low_signals", "intent_signals", "hard_negatives")


def parse_signal_config(data: dict, source: str = "<memory>") -> SignalConfig:
    """Build a SignalConfig from the YAML document shape."""
    decision = data.get("decision")
    if decision is None:
        decision = {}
    if not isinstance(decision, dict):
        raise ValueError(f"Invalid signal file {source}: 'decision' must be a mapping")
    for table in _LIST_TABLES:
        value = data.get(table)
        # A bare string would otherwise be split into single-letter phrases.
        if value is not None and not isinstance(value, list):
            raise ValueError(f"Invalid signal file {source}: '{table}' must be a list")

    try:
        config = SignalConfig(
            version=str(data["version"]),
            high_signals=tuple(data.get("high_signals") or ()),
            low_signals=tuple(data.get("low_signals") or ()),
            intent_signals=frozenset(data.get("intent_signals") or ()),
            hard_negatives=frozenset(data.get("hard_negatives") or ()),
            net_score_threshold=decision.get("net_score_threshold", 3),
        )
    except ValidationError as e:
        raise ValueError(f"Invalid signal file {source}: {e}") from e

    # Gating phrases must also carry score weight.
    unknown = sorted(config.intent_signals - config.high_keys)
    if unknown:
        raise ValueError(
            f"Invalid signal file {source}: intent_signals not declared in high_signals: {unknown}"
        )
    for phrase in config.intent_signals | config.hard_negatives:
        if not phrase or phrase != phrase.lower():
            raise ValueError(f"Invalid signal file {source}: phrase must be non-empty lower-case: {phrase!r}")
    return config


def _resolve(path: Optional[Union[str, Path]]) -> Path:
    if path is None:
        try:
            return get_config_path(DEFAULT_SIGNALS_FILE)
        except FileNotFoundError as e:
            raise RuntimeError(f"Failed to load signal configuration: {e}") from e
    return Path(path).resolve()


_configs: dict[Path, SignalConfig] = {}


def load_signal_config(path: Optional[Union[str, Path]] = None) -> SignalConfig:
    """Load (and cache) the signal tables. Defaults to config/signals.yaml."""
    resolved = _resolve(path)
    if resolved not in _configs:
        _configs[resolved] = parse_signal_config(_read_yaml(resolved), str(resolved))
    return _configs[resolved]


def clear_signal_cache() -> None:
    _configs.clear()
