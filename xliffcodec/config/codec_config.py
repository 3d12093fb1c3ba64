import json
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, FrozenSet, Iterable, Mapping, Optional

from xliffcodec.errors import ConfigError
from xliffcodec.logger import get_logger

logger = get_logger(__name__)


class ContextStrategy(str, Enum):
    EXTRADATA = "extradata"  # context in trans-unit/@extradata
    RESNAME = "resname"      # context in trans-unit/@resname
    ID = "id"                # context appended to the id as "<key>:<context>"


class UntranslatedStrategy(str, Enum):
    EMPTYTARGET = "emptytarget"  # <target> kept with empty text and the untranslated state
    NOTARGET = "notarget"        # <target> omitted
    NOTRANSUNIT = "notransunit"  # whole <trans-unit> omitted


@dataclass(frozen=True)
class XliffConfig:
    """
    Immutable codec configuration.
    Build it once with resolve_config() and share it between serializer and deserializer.
    """
    use_hint_for_resname: bool = True
    context_strategy: ContextStrategy = ContextStrategy.EXTRADATA
    valid_states: FrozenSet[str] = field(default_factory=frozenset)  # empty = any state is valid
    file_datatype: str = "x-unknown"
    state_translated: str = "translated"
    state_untranslated: str = "new"
    untranslated_strategy: UntranslatedStrategy = UntranslatedStrategy.EMPTYTARGET

    @property
    def hint_is_resname(self) -> bool:
        """The first comment line maps to resname only when resname does not carry context."""
        return self.use_hint_for_resname and self.context_strategy == ContextStrategy.EXTRADATA

    def is_valid_state(self, state: str) -> bool:
        return not self.valid_states or state in self.valid_states


OPTION_NAMES = (
    "use_hint_for_resname",
    "context_strategy",
    "valid_states",
    "file_datatype",
    "state_translated",
    "state_untranslated",
    "untranslated_strategy",
)

_TRUE_VALUES = {"1", "yes", "true", "on"}
_FALSE_VALUES = {"0", "no", "false", "off"}


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value != 0
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    raise ConfigError(f"'{name}', which is set to {value}, is not a boolean value")


def _parse_choice(name: str, value: Any, enum_cls):
    try:
        return enum_cls(value)
    except ValueError:
        options = " or ".join(f"'{member.value}'" for member in enum_cls)
        raise ConfigError(
            f"'{name}', which is set to {value}, is not one of the valid options: {options}"
        ) from None


def _parse_states(value: Any) -> FrozenSet[str]:
    if isinstance(value, str):
        return frozenset(value.split())
    if isinstance(value, Iterable):
        return frozenset(str(state) for state in value if str(state))
    raise ConfigError(f"'valid_states' must be a space separated string or a list, got {value!r}")


def resolve_config(options: Optional[Mapping[str, Any]] = None) -> XliffConfig:
    """
    Validates a partial option map and fills in the defaults.

    Raises:
        ConfigError: unknown option name, or a strategy/boolean value outside its domain.
    """
    options = dict(options or {})

    unknown = sorted(set(options) - set(OPTION_NAMES))
    if unknown:
        raise ConfigError(f"Unknown option(s): {', '.join(unknown)}")

    # None counts as "not set", as with an absent key
    values = {name: value for name, value in options.items() if value is not None}

    kwargs = {}
    if "use_hint_for_resname" in values:
        kwargs["use_hint_for_resname"] = _parse_bool("use_hint_for_resname", values["use_hint_for_resname"])
    if "context_strategy" in values:
        kwargs["context_strategy"] = _parse_choice("context_strategy", values["context_strategy"], ContextStrategy)
    if "untranslated_strategy" in values:
        kwargs["untranslated_strategy"] = _parse_choice(
            "untranslated_strategy", values["untranslated_strategy"], UntranslatedStrategy
        )
    if "valid_states" in values:
        kwargs["valid_states"] = _parse_states(values["valid_states"])
    for name in ("file_datatype", "state_translated", "state_untranslated"):
        if name in values:
            kwargs[name] = str(values[name])

    config = XliffConfig(**kwargs)
    logger.debug(f"Resolved codec config: {config}")
    return config


def load_config(path: str) -> XliffConfig:
    """Reads a JSON object of options from disk and resolves it."""
    if not os.path.exists(path):
        raise ConfigError(f"Config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to load config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return resolve_config(data)
