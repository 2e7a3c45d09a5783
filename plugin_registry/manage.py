# plugin_registry/manage.py

import json
import logging
from typing import Optional

import typer

from plugin_registry.core.constants import PluginType
from plugin_registry.core.exceptions import PluginNotFoundError, ValidationError
from plugin_registry.core.settings import settings
from plugin_registry.crud import plugin as crud_plugin
from plugin_registry.database import SessionLocal, engine, init_db
from plugin_registry.schemas.plugin import PluginInstall, PluginList

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger("PluginRegistry.Manage")

app = typer.Typer(help="Управление реестром установленных плагинов.", no_args_is_help=True)


@app.command("init-db")
def init_db_command() -> None:
    """Создать таблицы реестра."""
    logger.info("Creating plugin registry tables...")
    init_db(engine)
    typer.echo("Plugin registry tables created.")


@app.command("list")
def list_command(
    start: int = typer.Option(0, help="Смещение первой записи"),
    count: Optional[int] = typer.Option(None, help="Размер страницы"),
    sort: Optional[str] = typer.Option(None, help="Поле сортировки, '-' для убывания"),
    plugin_type: Optional[int] = typer.Option(None, "--type", help="1 — плагин, 2 — тема"),
    uninstalled: bool = typer.Option(False, "--uninstalled", help="Только удалённые"),
) -> None:
    """Вывести страницу плагинов в JSON."""
    db = SessionLocal()
    try:
        result = crud_plugin.list_for_api(
            db,
            start=start,
            count=count,
            sort=sort,
            type=PluginType(plugin_type) if plugin_type else None,
            uninstalled=uninstalled,
        )
        page = PluginList(
            total=result["total"],
            data=[crud_plugin.format_for_api(p) for p in result["data"]],
        )
    except (ValidationError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)
    finally:
        db.close()
    typer.echo(json.dumps(page.model_dump(mode="json", by_alias=True), indent=2))


@app.command("install")
def install_command(
    name: str = typer.Argument(..., help="Имя плагина"),
    version: str = typer.Option(..., help="Версия (semver)"),
    engine_version: str = typer.Option(..., "--engine", help="Совместимая версия движка"),
    plugin_type: int = typer.Option(PluginType.PLUGIN.value, "--type", help="1 — плагин, 2 — тема"),
    description: Optional[str] = typer.Option(None, help="Описание"),
) -> None:
    """Зарегистрировать установленный плагин (или переустановить существующий)."""
    db = SessionLocal()
    try:
        payload = PluginInstall(
            name=name,
            type=plugin_type,
            version=version,
            peertube_engine=engine_version,
            description=description,
        )
        plugin = crud_plugin.install_plugin(db, payload.model_dump(exclude_none=True))
        message = f"Plugin '{plugin.name}' installed at version {plugin.version}."
    except (ValidationError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)
    finally:
        db.close()
    typer.echo(message)


@app.command("uninstall")
def uninstall_command(name: str = typer.Argument(..., help="Имя плагина")) -> None:
    """Пометить плагин удалённым."""
    db = SessionLocal()
    try:
        crud_plugin.uninstall_plugin(db, name)
    except PluginNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    finally:
        db.close()
    typer.echo(f"Plugin '{name}' uninstalled.")


if __name__ == "__main__":
    app()
