from .plugin import Plugin

# додай тут всі свої моделі!
