"""Application tests for the store and payment settings singletons."""

from ordering.settings.payment import (
    PAYMENT_SETTINGS_ID,
    PaymentSettings,
    SavePaymentSettings,
    get_payment_settings,
    mask_secret,
    public_payment_methods,
    serialize_payment_settings,
)
from ordering.settings.store import SaveStoreSettings, StoreSettings, get_store_settings
from protean.utils.globals import current_domain


class TestStoreSettings:
    def test_defaults_when_never_saved(self):
        settings = get_store_settings()
        assert settings.store_name == "LSDrinks"
        assert settings.delivery_fee == 5.0

    def test_save_merges_fields(self):
        current_domain.process(SaveStoreSettings(store_name="LS Drinks Centro"), asynchronous=False)
        current_domain.process(SaveStoreSettings(delivery_fee=7.5), asynchronous=False)

        settings = current_domain.repository_for(StoreSettings).get("store")
        assert settings.store_name == "LS Drinks Centro"
        assert settings.delivery_fee == 7.5

    def test_free_delivery(self):
        current_domain.process(SaveStoreSettings(delivery_fee=0.0), asynchronous=False)
        assert get_store_settings().delivery_fee == 0.0

    def test_fallback_is_the_singleton_with_defaults(self):
        settings = StoreSettings.fallback()
        assert settings.id == "store"
        assert settings.delivery_fee == 5.0


class TestPaymentSettings:
    def test_everything_off_by_default(self):
        settings = get_payment_settings()
        assert settings.available_methods() == []
        assert settings.secret_key is None

    def test_fallback_is_the_singleton_with_defaults(self):
        settings = PaymentSettings.fallback()
        assert settings.id == PAYMENT_SETTINGS_ID
        assert settings.is_live is False
        assert settings.is_payment_on_delivery_enabled is False

    def test_save_is_a_singleton(self):
        current_domain.process(SavePaymentSettings(is_live=True), asynchronous=False)
        current_domain.process(SavePaymentSettings(is_payment_on_delivery_enabled=True), asynchronous=False)

        stored = current_domain.repository_for(PaymentSettings)._dao.query.all().items
        assert len(stored) == 1
        assert stored[0].id == PAYMENT_SETTINGS_ID
        assert stored[0].available_methods() == ["Cartão de Crédito", "Na Entrega"]

    def test_secret_key_is_masked(self):
        current_domain.process(
            SavePaymentSettings(is_live=True, stripe_secret_key="sk_live_1234567890abcd"),
            asynchronous=False,
        )
        view = serialize_payment_settings(get_payment_settings())
        assert view["stripe_secret_key"] == "****abcd"
        assert "1234567890" not in str(view)

    def test_environment_key_wins(self, monkeypatch):
        current_domain.process(SavePaymentSettings(stripe_secret_key="sk_from_document"), asynchronous=False)
        assert get_payment_settings().secret_key == "sk_from_document"

        monkeypatch.setenv("STRIPE_SECRET_KEY", "sk_from_env")
        assert get_payment_settings().secret_key == "sk_from_env"
        assert serialize_payment_settings(get_payment_settings())["secret_key_from_env"] is True

    def test_public_methods_hide_keys_of_disabled_methods(self):
        current_domain.process(
            SavePaymentSettings(stripe_public_key="pk_test", pix_key="pix@lsdrinks.com.br", is_live=False),
            asynchronous=False,
        )
        public = public_payment_methods(get_payment_settings())
        assert public == {"methods": [], "stripe_public_key": None, "pix_key": None}


def test_mask_secret():
    assert mask_secret(None) is None
    assert mask_secret("short") == "****"
    assert mask_secret("sk_test_abcdefgh1234") == "****1234"
