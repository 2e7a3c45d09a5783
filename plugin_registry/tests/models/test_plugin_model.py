import pytest
from sqlalchemy import inspect
from sqlalchemy.orm import Session
from plugin_registry.core.constants import PluginType
from plugin_registry.core.exceptions import PluginValidationError
from plugin_registry.models.plugin import Plugin
from plugin_registry.schemas.plugin import PluginInstall, PluginList, PluginRead

def test_plugin_validates_on_assignment():
    plugin = Plugin(name="valid-name")
    with pytest.raises(PluginValidationError) as exc_info:
        plugin.version = "not-semver"
    assert exc_info.value.field == "version"

def test_plugin_name_has_unique_index():
    indexes = {index.name: index for index in Plugin.__table__.indexes}
    assert indexes["ix_plugin_name"].unique is True
    assert [c.name for c in indexes["ix_plugin_name"].columns] == ["name"]

def test_storage_is_not_loaded_by_default(db: Session, plugin_data_factory):
    db.add(Plugin(**plugin_data_factory(name="deferred-storage")))
    db.commit()
    db.expire_all()

    plugin = db.query(Plugin).filter(Plugin.name == "deferred-storage").one()
    assert "storage" in inspect(plugin).unloaded
    assert "settings" not in inspect(plugin).unloaded
    assert plugin.storage == {"counter": 1}

def test_to_formatted_json_matches_read_schema(db: Session, plugin_data_factory):
    plugin = Plugin(**plugin_data_factory(name="dto-plugin", type=PluginType.THEME))
    db.add(plugin)
    db.commit()
    db.refresh(plugin)

    read = PluginRead.model_validate(plugin.to_formatted_json())
    dumped = read.model_dump(mode="json", by_alias=True)
    assert dumped["name"] == "dto-plugin"
    assert dumped["type"] == 2
    assert dumped["peertubeEngine"] == ">=1.3.0"
    assert "storage" not in dumped

    page = PluginList(total=1, data=[read])
    assert page.model_dump(by_alias=True)["data"][0]["peertubeEngine"] == ">=1.3.0"

def test_install_schema_rejects_invalid_fields():
    with pytest.raises(ValueError):
        PluginInstall(name="Bad Name", type=1, version="1.0.0", peertube_engine=">=1.0.0")
    with pytest.raises(ValueError):
        PluginInstall(name="good-name", type=5, version="1.0.0", peertube_engine=">=1.0.0")

    payload = PluginInstall(name="good-name", type=1, version="1.0.0", peertube_engine=">=1.0.0")
    assert payload.model_dump()["type"] == PluginType.PLUGIN
