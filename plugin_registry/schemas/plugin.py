#plugin_registry/schemas/plugin.py
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Dict, Any, List
from datetime import datetime
from plugin_registry.core.constants import PluginType
from plugin_registry.core.validators import (
    is_plugin_description_valid,
    is_plugin_name_valid,
    is_plugin_version_valid,
)

class PluginInstall(BaseModel):
    """
    PluginInstall — данные, с которыми плагин регистрируется при установке.
    enabled/uninstalled выставляет CRUD-слой.
    """
    name: str = Field(..., examples=["hello-world"], description="Уникальное имя плагина")
    type: PluginType = Field(..., examples=[PluginType.PLUGIN], description="Плагин или тема")
    version: str = Field(..., examples=["1.0.0"], description="Версия (semver)")
    peertube_engine: str = Field(..., examples=[">=1.3.0"], description="Совместимая версия движка")
    description: Optional[str] = Field(None, examples=["Says hello"], description="Описание")
    settings: Optional[Dict[str, Any]] = Field(None, description="Начальные настройки")

    @field_validator("name")
    @classmethod
    def check_name(cls, v):
        if not is_plugin_name_valid(v):
            raise ValueError("name must be 1-50 chars of lowercase letters, digits and '-'")
        return v

    @field_validator("version")
    @classmethod
    def check_version(cls, v):
        if not is_plugin_version_valid(v):
            raise ValueError("version must be a semantic version (X.Y.Z)")
        return v

    @field_validator("description")
    @classmethod
    def check_description(cls, v):
        if not is_plugin_description_valid(v):
            raise ValueError("description must be 1-20000 chars")
        return v

class PluginRead(BaseModel):
    """
    PluginRead — публичная схема плагина для API. storage не выдаётся.
    """
    name: str
    type: PluginType
    version: str
    enabled: bool
    uninstalled: bool
    peertube_engine: str = Field(..., alias="peertubeEngine")
    description: Optional[str] = None
    settings: Optional[Dict[str, Any]] = None
    created_at: datetime = Field(..., alias="createdAt")
    updated_at: datetime = Field(..., alias="updatedAt")

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

class PluginList(BaseModel):
    """
    PluginList — страница плагинов (total — общее число подходящих записей).
    """
    total: int = Field(..., description="Сколько плагинов подходит под фильтры")
    data: List[PluginRead] = Field(default_factory=list)
