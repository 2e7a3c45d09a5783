# plugin_registry/core/exceptions.py
from typing import Optional


class BaseAppException(Exception):
    """Базовый класс для всех исключений реестра."""
    def __init__(self, message: str = "App exception"):
        super().__init__(message)

# ==== Валидация ====

class ValidationError(BaseAppException):
    """Общая ошибка валидации."""
    def __init__(self, message: str = "Validation error"):
        super().__init__(message)

class PluginValidationError(ValidationError):
    """Ошибка валидации плагина. `field` — имя поля, не прошедшего проверку."""
    def __init__(self, message: str = "Plugin validation error", field: Optional[str] = None):
        super().__init__(message)
        self.field = field

# ==== NotFound ====

class NotFoundError(BaseAppException):
    """Ошибка отсутствия ресурса."""
    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)

class PluginNotFoundError(NotFoundError):
    """Ошибка: плагин не найден."""
    def __init__(self, message: str = "Plugin not found"):
        super().__init__(message)
