"""Application settings read from the environment.

Protean's own configuration (providers, event processing) lives in
``domain.toml``; this covers the web layer: session signing, the admin
account, the payment gateway choice and CORS.
"""

import os
from dataclasses import dataclass, field

DEFAULT_SESSION_MAX_AGE = 60 * 60 * 24 * 7


def _split(value):
    return [part.strip() for part in value.split(",") if part.strip()]


@dataclass(frozen=True)
class AppConfig:
    secret_key: str = "dev-secret-change-me"
    admin_email: str = "admin@lsdrinks.local"
    admin_password: str = "admin"
    session_max_age: int = DEFAULT_SESSION_MAX_AGE
    payment_gateway: str = "fake"
    stripe_secret_key: str | None = None
    port: int = 8000
    session_cookie_secure: bool = False
    seed_demo_data: bool = False
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    @classmethod
    def from_env(cls, environ=None):
        env = os.environ if environ is None else environ
        return cls(
            secret_key=env.get("SECRET_KEY", cls.secret_key),
            admin_email=env.get("ADMIN_EMAIL", cls.admin_email),
            admin_password=env.get("ADMIN_PASSWORD", cls.admin_password),
            session_max_age=int(env.get("SESSION_MAX_AGE", DEFAULT_SESSION_MAX_AGE)),
            payment_gateway=env.get("PAYMENT_GATEWAY", cls.payment_gateway).lower(),
            stripe_secret_key=env.get("STRIPE_SECRET_KEY") or None,
            session_cookie_secure=env.get("SESSION_COOKIE_SECURE", "").lower() in ("1", "true", "yes"),
            seed_demo_data=env.get("SEED_DEMO_DATA", "").lower() in ("1", "true", "yes"),
            port=int(env.get("PORT", cls.port)),
            cors_origins=_split(env.get("CORS_ORIGINS", "*")),
        )

    def masked(self):
        """Printable view with secrets hidden."""

        def hide(value):
            return "****" if value else None

        return {
            "secret_key": hide(self.secret_key),
            "admin_email": self.admin_email,
            "admin_password": hide(self.admin_password),
            "session_max_age": self.session_max_age,
            "session_cookie_secure": self.session_cookie_secure,
            "seed_demo_data": self.seed_demo_data,
            "payment_gateway": self.payment_gateway,
            "stripe_secret_key": hide(self.stripe_secret_key),
            "port": self.port,
            "cors_origins": self.cors_origins,
        }
