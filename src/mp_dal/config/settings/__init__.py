"""Config settings – 12-factor env-based configuration."""
from mp_dal.config.settings.base import DataAccessSettings, Settings
from mp_dal.config.settings.factory import SettingsFactory
from mp_dal.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader

__all__ = [
    "DataAccessSettings",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "Settings",
    "SettingsFactory",
    "SettingsLoader",
]
