"""
Preferences service - theme and display currency per user.
Loaded on sign-in, saved on every change; falls back to configured defaults.
"""

import logging
from dataclasses import dataclass

from config import get_settings
from repositories import UserPreferencesRepository
from services.common import CURRENCY_SYMBOLS, currency_symbol

logger = logging.getLogger(__name__)

THEMES = ("light", "dark")


@dataclass(frozen=True)
class Preferences:
    """Display preferences of one user."""
    theme: str
    currency_code: str

    @property
    def currency_symbol(self) -> str:
        return currency_symbol(self.currency_code)


def _pick(saved, configured, allowed, fallback):
    """Saved value if valid, else the configured default if valid, else the fallback."""
    if saved in allowed:
        return saved
    if configured in allowed:
        return configured
    logger.warning(f"Ignoring unsupported default {configured!r}, using {fallback!r}")
    return fallback


class PreferencesService:
    """Load and persist display preferences."""

    @staticmethod
    def load(user_id: int) -> Preferences:
        settings = get_settings()
        prefs = UserPreferencesRepository.get(user_id)
        theme = _pick(prefs.theme if prefs else None, settings.default_theme.lower(), THEMES, "light")
        currency_code = _pick(
            prefs.currency_code if prefs else None,
            settings.default_currency.upper(),
            CURRENCY_SYMBOLS,
            "USD"
        )
        return Preferences(theme=theme, currency_code=currency_code)

    @staticmethod
    def set_theme(user_id: int, theme: str) -> Preferences:
        if theme not in THEMES:
            raise ValueError(f"Unknown theme: {theme}")
        UserPreferencesRepository.save_theme(user_id, theme)
        return PreferencesService.load(user_id)

    @staticmethod
    def toggle_theme(user_id: int) -> Preferences:
        """Switch between light and dark."""
        current = PreferencesService.load(user_id)
        return PreferencesService.set_theme(user_id, "dark" if current.theme == "light" else "light")

    @staticmethod
    def set_currency_code(user_id: int, currency_code: str) -> Preferences:
        code = (currency_code or "").upper()
        if code not in CURRENCY_SYMBOLS:
            raise ValueError(f"Unsupported currency: {currency_code}")
        UserPreferencesRepository.save_currency_code(user_id, code)
        logger.info(f"Currency for user {user_id} set to {code}")
        return PreferencesService.load(user_id)
