import pytest

from repositories import UserRepository
from services.preferences import PreferencesService


@pytest.fixture
def user_id(db) -> int:
    return UserRepository.add(email="owner@example.com", password_hash="x").id


def test_defaults_come_from_settings(user_id, monkeypatch):
    from config import reload_settings

    monkeypatch.setenv("DEFAULT_CURRENCY", "EUR")
    reload_settings()

    prefs = PreferencesService.load(user_id)

    assert prefs.theme == "light"
    assert prefs.currency_code == "EUR"
    assert prefs.currency_symbol == "€"


def test_currency_is_persisted(user_id):
    PreferencesService.set_currency_code(user_id, "inr")

    prefs = PreferencesService.load(user_id)

    assert prefs.currency_code == "INR"
    assert prefs.currency_symbol == "₹"


def test_unknown_currency_is_rejected(user_id):
    with pytest.raises(ValueError):
        PreferencesService.set_currency_code(user_id, "XYZ")


def test_toggle_theme_persists(user_id):
    assert PreferencesService.toggle_theme(user_id).theme == "dark"
    assert PreferencesService.load(user_id).theme == "dark"
    assert PreferencesService.toggle_theme(user_id).theme == "light"


def test_theme_and_currency_share_one_row(user_id):
    from repositories import UserPreferencesRepository

    PreferencesService.set_theme(user_id, "dark")
    PreferencesService.set_currency_code(user_id, "GBP")

    row = UserPreferencesRepository.get(user_id)
    assert (row.theme, row.currency_code) == ("dark", "GBP")


@pytest.mark.parametrize("configured, expected", [("usd", "USD"), ("gbp", "GBP"), ("XYZ", "USD")])
def test_configured_currency_default_is_normalized(user_id, monkeypatch, configured, expected):
    from config import reload_settings

    monkeypatch.setenv("DEFAULT_CURRENCY", configured)
    reload_settings()

    assert PreferencesService.load(user_id).currency_code == expected


def test_unsupported_theme_default_falls_back_to_light(user_id, monkeypatch):
    from config import reload_settings

    monkeypatch.setenv("DEFAULT_THEME", "solarized")
    reload_settings()

    assert PreferencesService.load(user_id).theme == "light"
