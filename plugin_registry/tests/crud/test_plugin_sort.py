import pytest
from plugin_registry.core.exceptions import ValidationError
from plugin_registry.crud.utils import get_sort

def _compiled(order):
    return [str(clause) for clause in order]

def test_get_sort_ascending_adds_id_tiebreaker():
    assert _compiled(get_sort("name")) == ["plugin.name ASC", "plugin.id ASC"]

def test_get_sort_descending():
    assert _compiled(get_sort("-createdAt")) == ["plugin.created_at DESC", "plugin.id ASC"]

@pytest.mark.parametrize("value", ["", "-", "storage", "type", "created_at"])
def test_get_sort_rejects_unknown_fields(value):
    with pytest.raises(ValidationError):
        get_sort(value)

def test_get_sort_custom_sortable():
    assert _compiled(get_sort("-type", sortable=("type",))) == ["plugin.type DESC", "plugin.id ASC"]
