"""Preference injector feature."""

from .injector_config import InjectorConfig
from .preference_injector import PreferenceInjector

__all__ = [
    "InjectorConfig",
    "PreferenceInjector",
]
