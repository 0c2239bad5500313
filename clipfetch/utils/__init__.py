from .locale import get_locale, safe_url_for_log
from .url import validate_url

__all__ = ["get_locale", "safe_url_for_log", "validate_url"]
