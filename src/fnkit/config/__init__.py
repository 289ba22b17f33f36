from .settings import FnkitSettings, get_settings, reset_settings

__all__ = ["FnkitSettings", "get_settings", "reset_settings"]
