#plugin_registry/crud/plugin.py
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from plugin_registry.models.plugin import Plugin
from plugin_registry.core.constants import PluginType
from plugin_registry.core.exceptions import (
    PluginNotFoundError, PluginValidationError, ValidationError
)
from plugin_registry.core.settings import settings
from plugin_registry.crud.utils import get_sort
from typing import List, Dict, Optional, Any, Iterable
import logging

logger = logging.getLogger("PluginRegistry.Plugins")

# Поля, которые переустановка плагина перезаписывает
INSTALL_FIELDS = ("type", "version", "peertube_engine", "description")

def _merge_document(plugin: Plugin, attribute: str, values: Dict[str, Any]) -> None:
    # JSON-колонка не отслеживает мутации, поэтому присваиваем новый dict
    document = dict(getattr(plugin, attribute) or {})
    document.update(values)
    setattr(plugin, attribute, document)

def _read_document_value(db: Session, column, plugin_name: str, key: str) -> Any:
    row = db.query(column).filter(Plugin.name == plugin_name).first()
    if row is None:
        return None
    document = row[0]
    if not document:
        return None
    return document.get(key)

def _is_name_conflict(error: IntegrityError) -> bool:
    # SQLite: "UNIQUE constraint failed: plugin.name", PostgreSQL: ... "ix_plugin_name"
    message = str(error.orig)
    return "ix_plugin_name" in message or "UNIQUE constraint failed: plugin.name" in message

# --- Создание / установка ---

def create_plugin(db: Session, data: Dict) -> Plugin:
    """
    Создаёт запись о плагине. Имя должно быть уникальным.
    """
    name = data.get("name")
    if name and load(db, name):
        raise PluginValidationError(f"Plugin with name '{name}' already exists.", field="name")
    if not data.get("peertube_engine"):
        raise PluginValidationError("peertube_engine is required.", field="peertube_engine")

    plugin = Plugin(
        name=name,
        type=data.get("type"),
        version=data.get("version"),
        enabled=bool(data.get("enabled", True)),
        uninstalled=bool(data.get("uninstalled", False)),
        peertube_engine=data.get("peertube_engine"),
        description=data.get("description"),
        settings=data.get("settings"),
        storage=data.get("storage"),
    )
    try:
        db.add(plugin)
        db.commit()
        db.refresh(plugin)
        logger.info(f"Plugin '{plugin.name}' created with ID {plugin.id}.")
        return plugin
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Plugin '{name}' violates a database constraint: {e.orig}")
        if _is_name_conflict(e):
            raise PluginValidationError(f"Plugin with name '{name}' already exists.", field="name")
        raise PluginValidationError(f"Database error: Could not create plugin '{name}'. It might violate a database constraint.")
    except Exception as e:
        db.rollback()
        logger.error(f"Error creating plugin {name}: {e}")
        raise

def install_plugin(db: Session, data: Dict) -> Plugin:
    """
    Установка плагина: создаёт запись или переустанавливает существующую
    (в том числе ранее удалённую). settings и storage при переустановке сохраняются.
    """
    existing = load(db, data.get("name"))
    if existing is None:
        return create_plugin(db, {**data, "enabled": True, "uninstalled": False})

    try:
        for field in INSTALL_FIELDS:
            if field in data:
                setattr(existing, field, data[field])
    except PluginValidationError:
        db.rollback()
        raise
    existing.enabled = True
    existing.uninstalled = False
    try:
        db.commit()
        db.refresh(existing)
        logger.info(f"Plugin '{existing.name}' reinstalled at version {existing.version}.")
        return existing
    except Exception as e:
        db.rollback()
        logger.error(f"Error reinstalling plugin {existing.name}: {e}")
        raise

# --- Чтение ---

def list_enabled_plugins_and_themes(db: Session) -> List[Plugin]:
    """Все включённые и не удалённые плагины и темы (порядок не гарантируется)."""
    return db.query(Plugin).filter(Plugin.enabled == True, Plugin.uninstalled == False).all()

def load(db: Session, plugin_name: str) -> Optional[Plugin]:
    """Плагин с точно таким именем или None."""
    return db.query(Plugin).filter(Plugin.name == plugin_name).first()

def get_setting(db: Session, plugin_name: str, setting_name: str) -> Any:
    """
    Значение настройки плагина. None, если нет плагина, нет документа настроек
    или нет такого ключа.
    """
    return _read_document_value(db, Plugin.settings, plugin_name, setting_name)

def get_settings(db: Session, plugin_name: str, setting_names: Iterable[str]) -> Dict[str, Any]:
    """Словарь из тех запрошенных настроек, которые заданы."""
    row = db.query(Plugin.settings).filter(Plugin.name == plugin_name).first()
    document = (row[0] if row else None) or {}
    return {key: document[key] for key in setting_names if key in document}

def get_storage_data(db: Session, plugin_name: str, key: str) -> Any:
    """Значение из storage плагина (та же семантика, что у get_setting)."""
    return _read_document_value(db, Plugin.storage, plugin_name, key)

def list_for_api(
    db: Session,
    start: int = 0,
    count: Optional[int] = None,
    sort: Optional[str] = None,
    type: Optional[PluginType] = None,
    uninstalled: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Страница плагинов для API: {"total": всего подходящих, "data": [...]}.
    Фильтры type и uninstalled применяются только для истинных значений.
    """
    if count is None:
        count = settings.PLUGINS_DEFAULT_COUNT
    if start < 0 or count < 0:
        raise ValidationError("start and count must be non-negative.")
    count = min(count, settings.PLUGINS_MAX_COUNT)
    order = get_sort(sort or settings.PLUGINS_DEFAULT_SORT)

    query = db.query(Plugin)
    if type:
        query = query.filter(Plugin.type == int(type))
    if uninstalled:
        query = query.filter(Plugin.uninstalled == uninstalled)

    total = query.count()
    rows = query.order_by(*order).offset(start).limit(count).all()
    return {"total": total, "data": rows}

def format_for_api(plugin: Plugin) -> Dict[str, Any]:
    return plugin.to_formatted_json()

# --- Изменение ---

def set_setting(db: Session, plugin_name: str, setting_name: str, setting_value: Any) -> None:
    """
    Записывает одну настройку в документ settings. Результат не возвращается;
    отсутствующий плагин просто ничего не обновляет.
    """
    _store_document_value(db, "settings", plugin_name, setting_name, setting_value)

def store_storage_data(db: Session, plugin_name: str, key: str, value: Any) -> None:
    """Записывает одно значение в storage плагина."""
    _store_document_value(db, "storage", plugin_name, key, value)

def _store_document_value(db: Session, attribute: str, plugin_name: str, key: str, value: Any) -> None:
    plugin = load(db, plugin_name)
    if plugin is None:
        logger.warning(f"Cannot store {attribute} key '{key}': plugin '{plugin_name}' not found.")
        return None

    _merge_document(plugin, attribute, {key: value})
    try:
        db.commit()
        logger.info(f"Plugin '{plugin_name}' {attribute} key '{key}' updated.")
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating {attribute} of plugin {plugin_name}: {e}")
        raise
    return None

def uninstall_plugin(db: Session, plugin_name: str) -> Plugin:
    """
    Помечает плагин удалённым и выключает его. Запись остаётся в таблице.
    """
    plugin = load(db, plugin_name)
    if plugin is None:
        raise PluginNotFoundError(f"Plugin '{plugin_name}' not found.")

    plugin.enabled = False
    plugin.uninstalled = True
    try:
        db.commit()
        db.refresh(plugin)
        logger.info(f"Plugin '{plugin.name}' uninstalled.")
        return plugin
    except Exception as e:
        db.rollback()
        logger.error(f"Error uninstalling plugin {plugin_name}: {e}")
        raise

def set_enabled(db: Session, plugin_name: str, enabled: bool) -> Plugin:
    """Включает или выключает плагин, не трогая флаг uninstalled."""
    plugin = load(db, plugin_name)
    if plugin is None:
        raise PluginNotFoundError(f"Plugin '{plugin_name}' not found.")

    if plugin.enabled != enabled:
        plugin.enabled = enabled
        try:
            db.commit()
            db.refresh(plugin)
        except Exception as e:
            db.rollback()
            logger.error(f"Error toggling plugin {plugin_name}: {e}")
            raise
        logger.info(f"Plugin '{plugin.name}' {'enabled' if enabled else 'disabled'}.")
    return plugin
