#plugin_registry/models/base.py
"""
Базовый класс для всех ORM-моделей реестра.

Использовать как Base при описании моделей:
    from plugin_registry.models.base import Base
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
