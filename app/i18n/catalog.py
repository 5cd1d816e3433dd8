import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from app.i18n.exception import LocaleErrorCode, LocaleException
from app.utils.language import is_supported_locale

logger = logging.getLogger(__name__)


class Translator:
    """로케일 하나의 메시지 번들 조회기"""

    def __init__(self, locale: str, messages: Dict[str, Dict[str, str]]):
        self.locale = locale
        self.messages = messages

    def t(self, namespace: str, key: str, **params: Any) -> str:
        value = (self.messages.get(namespace) or {}).get(key)
        if not isinstance(value, str):
            logger.warning(f"번역 키가 없습니다. locale={self.locale}, key={namespace}.{key}")
            return f"{namespace}.{key}"
        if params:
            try:
                return value.format(**params)
            except (KeyError, IndexError):
                return value
        return value

    def namespace(self, namespace: str):
        """템플릿에서 쓰는 단축 함수 (t('key'))"""
        def translate(key: str, **params: Any) -> str:
            return self.t(namespace, key, **params)
        return translate


class MessageCatalog:
    def __init__(self, messages_dir: Optional[Path] = None):
        self.logger = logging.getLogger(__name__)
        self.messages_dir = messages_dir or Path(__file__).parent / "messages"

    def load(self, locale: str) -> Dict[str, Dict[str, str]]:
        """요청 시점에 로케일 번들을 읽는다"""
        if not is_supported_locale(locale):
            raise LocaleException(LocaleErrorCode.LOCALE_NOT_FOUND, locale)

        path = self.messages_dir / f"{locale}.json"
        try:
            messages = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"메시지 번들을 읽지 못했습니다. locale={locale}, error={e}")
            raise LocaleException(LocaleErrorCode.MESSAGES_INVALID, locale)

        if not isinstance(messages, dict) or not messages:
            self.logger.error(f"메시지 번들이 비어있거나 객체가 아닙니다. locale={locale}")
            raise LocaleException(LocaleErrorCode.MESSAGES_INVALID, locale)

        return messages

    def translator(self, locale: str) -> Translator:
        return Translator(locale, self.load(locale))
