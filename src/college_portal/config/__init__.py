import os


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "college_portal.config.production"

    if env in {"test", "testing"}:
        return "college_portal.config.testing"

    return "college_portal.config.development"
