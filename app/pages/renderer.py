"""로케일 페이지 렌더러 (Jinja2)"""

import logging
from pathlib import Path
from typing import Any, Optional

import jinja2

from app.i18n.catalog import MessageCatalog, Translator
from app.utils.language import get_supported_locales

logger = logging.getLogger(__name__)


class PageRenderer:
    def __init__(self, catalog: MessageCatalog, templates_dir: Optional[Path] = None):
        self.catalog = catalog
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = PageRenderer.create_template_environment(self.templates_dir)

    @staticmethod
    def create_template_environment(templates_dir: Path) -> jinja2.Environment:
        """Jinja2 템플릿 환경을 생성합니다."""
        def load_template(template_name: str) -> str:
            return (templates_dir / template_name).read_text(encoding="utf-8")

        return jinja2.Environment(
            loader=jinja2.FunctionLoader(load_template),
            autoescape=True,
        )

    def translator(self, locale: str) -> Translator:
        # 로케일 검증 + 번들 로딩 (실패 시 LocaleException → 404)
        return self.catalog.translator(locale)

    def render(self, template_name: str, translator: Translator, path: str, **context: Any) -> str:
        template = self.env.get_template(template_name)
        return template.render(
            locale=translator.locale,
            locales=get_supported_locales(),
            # 언어 전환 시 현재 경로 유지 (/en/about → /es/about)
            path=path,
            nav=translator.namespace("Navigation"),
            tr=translator.t,
            **context,
        )
