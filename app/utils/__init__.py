"""
유틸리티 함수들 패키지
"""

from .language import (
    get_supported_locales,
    is_supported_locale,
    negotiate_locale,
    normalize_language_code,
)

__all__ = [
    'normalize_language_code',
    'negotiate_locale',
    'is_supported_locale',
    'get_supported_locales',
]
