#plugin_registry/crud/utils.py
from typing import List, Sequence

from plugin_registry.core.constants import SORTABLE_PLUGIN_COLUMNS
from plugin_registry.core.exceptions import ValidationError
from plugin_registry.models.plugin import Plugin

# Имя поля в API -> атрибут модели
PLUGIN_SORT_ATTRIBUTES = {
    "id": "id",
    "name": "name",
    "type": "type",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}

def get_sort(value: str, sortable: Sequence[str] = SORTABLE_PLUGIN_COLUMNS) -> List:
    """
    Превращает строку сортировки ('name', '-createdAt') в список ORDER BY.
    Ведущий '-' означает убывание, id по возрастанию добавляется последним для стабильности.
    """
    if not value:
        raise ValidationError("Sort value is required.")

    descending = value.startswith("-")
    field = value[1:] if descending else value
    if field not in sortable or field not in PLUGIN_SORT_ATTRIBUTES:
        raise ValidationError(f"Cannot sort plugins by '{field}'.")

    column = getattr(Plugin, PLUGIN_SORT_ATTRIBUTES[field])
    order = [column.desc() if descending else column.asc()]
    if field != "id":
        order.append(Plugin.id.asc())
    return order
