from django.conf import settings

DEFAULTS = {
    "LOW_STOCK_THRESHOLD": 20,
    "WARM_ON_STOCK_CHANGE": False,
    "WARM_ON_STARTUP": False,
}


def get_availability_setting(name):
    """Read a key from ``settings.PACKAGE_AVAILABILITY``, falling back to DEFAULTS."""
    configured = getattr(settings, "PACKAGE_AVAILABILITY", {}) or {}
    if name in configured:
        return configured[name]
    try:
        return DEFAULTS[name]
    except KeyError:
        raise AttributeError(f"Unknown package availability setting '{name}'")
