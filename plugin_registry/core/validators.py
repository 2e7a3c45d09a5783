#plugin_registry/core/validators.py
import re
from typing import Any, Callable

from plugin_registry.core.constants import PLUGIN_FIELD_LENGTHS, PluginType
from plugin_registry.core.exceptions import PluginValidationError

NAME_RE = re.compile(r"^[a-z0-9-]+$")
# MAJOR.MINOR.PATCH[-prerelease][+build]
SEMVER_RE = re.compile(
    r"^(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)"
    r"(?:-((?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+([0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?$"
)

# === БАЗОВЫЕ ПРОВЕРКИ ===

def exists(value: Any) -> bool:
    return value is not None and value != ""

def is_length_valid(value: Any, field: str) -> bool:
    min_len, max_len = PLUGIN_FIELD_LENGTHS[field]
    return isinstance(value, str) and min_len <= len(value) <= max_len

# === ВАЛИДАТОРЫ ПОЛЕЙ ПЛАГИНА ===

def is_plugin_name_valid(value: Any) -> bool:
    return exists(value) and is_length_valid(value, "name") and bool(NAME_RE.match(value))

def is_plugin_type_valid(value: Any) -> bool:
    if not exists(value) or isinstance(value, bool):
        return False
    try:
        v = int(value) if isinstance(value, int) else int(str(value).strip())
    except ValueError:
        return False
    return v in PluginType._value2member_map_

def is_plugin_version_valid(value: Any) -> bool:
    return exists(value) and is_length_valid(value, "version") and bool(SEMVER_RE.match(value))

def is_plugin_description_valid(value: Any) -> bool:
    # None допустим: описание необязательно
    return value is None or (exists(value) and is_length_valid(value, "description"))


def throw_if_not_valid(value: Any, validator: Callable[[Any], bool], field: str = "unknown") -> Any:
    """
    Запускает предикат и бросает PluginValidationError с именем поля, если значение не прошло.
    Возвращает исходное значение, чтобы можно было использовать в @validates.
    """
    if not validator(value):
        raise PluginValidationError(f"{field} is not valid.", field=field)
    return value
