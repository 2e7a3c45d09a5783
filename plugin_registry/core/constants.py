#plugin_registry/core/constants.py
from enum import IntEnum
from typing import Dict, Tuple


class PluginType(IntEnum):
    PLUGIN = 1
    THEME = 2


# (min, max) длины строковых полей плагина
PLUGIN_FIELD_LENGTHS: Dict[str, Tuple[int, int]] = {
    "name": (1, 50),
    "version": (1, 40),
    "description": (1, 20000),
}

# Поля, по которым разрешена сортировка списка плагинов
SORTABLE_PLUGIN_COLUMNS = ("name", "createdAt", "updatedAt")
