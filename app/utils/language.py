"""
언어 처리 유틸리티 함수들
"""

import logging
from typing import List, Optional, Tuple

from app.constants import LANGUAGE_MAPPING, LocaleConfig

logger = logging.getLogger(__name__)


def normalize_language_code(language: Optional[str]) -> Optional[str]:
    """
    언어 태그를 지원 로케일 코드로 정규화

    Args:
        language: 입력 언어 태그 (예: 'es-MX', 'en_US', 'spanish')

    Returns:
        지원 로케일 코드 ('en', 'es'), 지원하지 않으면 None
    """
    if not language:
        return None

    # 소문자로 변환하고 공백 제거
    language_clean = language.lower().strip().replace('_', '-')

    normalized = LANGUAGE_MAPPING.get(language_clean, language_clean)
    if normalized in LocaleConfig.LOCALES:
        return normalized

    # 하이픈이 있는 경우 첫 부분만 사용 (예: es-CL -> es)
    if '-' in normalized:
        first_part = normalized.split('-')[0]
        if first_part in LocaleConfig.LOCALES:
            return first_part

    return None


def parse_accept_language(header: Optional[str]) -> List[Tuple[str, float]]:
    """Accept-Language 헤더를 (태그, q) 리스트로 변환 (q 내림차순)"""
    if not header:
        return []

    entries: List[Tuple[str, float]] = []
    for part in header.split(','):
        pieces = part.strip().split(';')
        tag = pieces[0].strip()
        if not tag or tag == '*':
            continue
        q = 1.0
        for param in pieces[1:]:
            name, _, value = param.strip().partition('=')
            if name.strip() == 'q':
                try:
                    q = float(value)
                except ValueError:
                    q = 0.0
        if q > 0:
            entries.append((tag, q))

    # 같은 q 값이면 헤더 순서를 유지 (sorted 는 stable)
    return sorted(entries, key=lambda e: e[1], reverse=True)


def negotiate_locale(accept_language: Optional[str]) -> str:
    """
    Accept-Language 헤더에서 지원 로케일을 고른다.

    Returns:
        매칭되는 첫 로케일, 없으면 기본 로케일
    """
    for tag, _ in parse_accept_language(accept_language):
        locale = normalize_language_code(tag)
        if locale:
            return locale

    if accept_language:
        logger.info(f"지원하지 않는 Accept-Language: {accept_language}, 기본값 '{LocaleConfig.DEFAULT_LOCALE}' 사용")
    return LocaleConfig.DEFAULT_LOCALE


def is_supported_locale(locale: str) -> bool:
    """로케일 경로 세그먼트가 지원 목록에 정확히 있는지 확인"""
    return isinstance(locale, str) and locale in LocaleConfig.LOCALES


def get_supported_locales() -> list[str]:
    """
    지원되는 로케일 목록 반환
    """
    return list(LocaleConfig.LOCALES)
