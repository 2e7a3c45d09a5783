#plugin_registry/models/plugin.py
from datetime import datetime
from typing import Any, Dict
from sqlalchemy import (
    Column, Integer, SmallInteger, String, Text, Boolean, JSON, DateTime, func, Index
)
from sqlalchemy.orm import deferred, validates
from plugin_registry.core.validators import (
    is_plugin_description_valid,
    is_plugin_name_valid,
    is_plugin_type_valid,
    is_plugin_version_valid,
    throw_if_not_valid,
)
from plugin_registry.models.base import Base

class Plugin(Base):
    """
    Plugin — установленный плагин или тема хост-приложения.
    enabled/uninstalled — независимые флаги, storage не загружается по умолчанию.
    """
    __tablename__ = "plugin"

    id: int = Column(Integer, primary_key=True)
    name: str = Column(String(50), nullable=False, doc="Уникальное имя плагина")
    type: int = Column(SmallInteger, nullable=False, doc="PluginType: плагин или тема")
    version: str = Column(String(40), nullable=False, doc="Версия (semver)")
    enabled: bool = Column(Boolean, nullable=False, doc="Включен ли плагин")
    uninstalled: bool = Column(Boolean, nullable=False, doc="Удалён ли плагин")
    peertube_engine: str = Column(String(64), nullable=False, doc="Совместимая версия движка")
    description: str = Column(Text, nullable=True, doc="Описание")
    settings: dict = Column(JSON(none_as_null=True), nullable=True, doc="Настройки, заданные автором плагина")
    storage = deferred(Column(JSON(none_as_null=True), nullable=True, doc="Данные, которые хранит сам плагин"))
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_plugin_name", "name", unique=True),
    )

    @validates("name")
    def validate_name(self, key, value):
        return throw_if_not_valid(value, is_plugin_name_valid, "name")

    @validates("type")
    def validate_type(self, key, value):
        throw_if_not_valid(value, is_plugin_type_valid, "type")
        return int(value) if isinstance(value, int) else int(str(value).strip())

    @validates("version")
    def validate_version(self, key, value):
        return throw_if_not_valid(value, is_plugin_version_valid, "version")

    @validates("description")
    def validate_description(self, key, value):
        return throw_if_not_valid(value, is_plugin_description_valid, "description")

    def to_formatted_json(self) -> Dict[str, Any]:
        """Публичное представление плагина для API. storage сюда не попадает."""
        return {
            "name": self.name,
            "type": self.type,
            "version": self.version,
            "enabled": self.enabled,
            "uninstalled": self.uninstalled,
            "peertubeEngine": self.peertube_engine,
            "description": self.description,
            "settings": self.settings,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def __repr__(self):
        return (
            f"<Plugin(id={self.id}, name='{self.name}', type={self.type}, version={self.version}, "
            f"enabled={self.enabled}, uninstalled={self.uninstalled})>"
        )
