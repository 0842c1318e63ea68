"""Synthetic data seeder for load testing.

Generates translations with keys of the form
``context.action.component.<uuid>`` across ten locales, with content
phrased per locale and component. Each record gets up to three tags drawn
from the tags that already exist. Runs once at startup when
DATA_SEEDER_ENABLED is set.
"""

import math
import random
import time
import uuid
from typing import List, Optional

from infrastructure.logging import get_module_logger
from modules.translations.core.cache import TranslationCache
from modules.translations.core.store import TranslationStore

logger = get_module_logger()

LOCALES = ("en", "fr", "es", "de", "it", "pt", "ru", "zh", "ja", "ko")

CONTEXTS = (
    "app", "auth", "nav", "error", "validation", "form", "button", "label",
    "message", "notification", "dialog", "menu", "table", "chart", "report",
    "dashboard", "profile", "settings", "admin", "user", "product", "order",
    "payment", "shipping", "invoice", "customer", "support", "help", "faq",
)  # fmt: skip

ACTIONS = (
    "create", "read", "update", "delete", "save", "cancel", "submit", "reset",
    "search", "filter", "sort", "export", "import", "download", "upload",
    "edit", "view", "list", "detail", "summary", "total", "count", "status",
)  # fmt: skip

COMPONENTS = (
    "title", "subtitle", "header", "footer", "sidebar", "content", "body",
    "text", "description", "placeholder", "tooltip", "hint", "warning",
    "success", "info", "loading", "empty", "nodata", "required", "optional",
)  # fmt: skip

TITLES = {
    "en": "Title",
    "fr": "Titre",
    "es": "Título",
    "de": "Titel",
    "it": "Titolo",
    "pt": "Título",
    "ru": "Заголовок",
    "zh": "标题",
    "ja": "タイトル",
    "ko": "제목",
}

FALLBACKS = {
    "en": "Content for",
    "fr": "Contenu pour",
    "es": "Contenido para",
    "de": "Inhalt für",
    "it": "Contenuto per",
    "pt": "Conteúdo para",
    "ru": "Содержимое для",
    "zh": "内容",
    "ja": "コンテンツ",
    "ko": "콘텐츠",
}

# component -> locale -> phrase
PHRASES = {
    "placeholder": {
        "en": "Enter value here...",
        "fr": "Entrez la valeur ici...",
        "es": "Ingrese valor aquí...",
        "de": "Wert hier eingeben...",
        "it": "Inserisci valore qui...",
        "pt": "Digite o valor aqui...",
        "ru": "Введите значение здесь...",
        "zh": "在此输入值...",
        "ja": "ここに値を入力...",
        "ko": "여기에 값을 입력하세요...",
    },
    "success": {
        "en": "Operation completed successfully",
        "fr": "Opération terminée avec succès",
        "es": "Operación completada exitosamente",
        "de": "Vorgang erfolgreich abgeschlossen",
        "it": "Operazione completata con successo",
        "pt": "Operação concluída com sucesso",
        "ru": "Операция успешно завершена",
        "zh": "操作成功完成",
        "ja": "操作が正常に完了しました",
        "ko": "작업이 성공적으로 완료되었습니다",
    },
    "loading": {
        "en": "Loading...",
        "fr": "Chargement...",
        "es": "Cargando...",
        "de": "Wird geladen...",
        "it": "Caricamento...",
        "pt": "Carregando...",
        "ru": "Загрузка...",
        "zh": "加载中...",
        "ja": "読み込み中...",
        "ko": "로딩 중...",
    },
}


class DataSeeder:
    """Bulk generator of synthetic translations.

    Args:
        store: TranslationStore receiving the records
        cache: Cache evicted once after seeding
        total: Number of translations to generate
        batch_size: Translations per batch
        rng: Random source, injectable for deterministic tests
    """

    def __init__(
        self,
        store: TranslationStore,
        cache: TranslationCache,
        total: int,
        batch_size: int,
        rng: Optional[random.Random] = None,
    ):
        self.store = store
        self.cache = cache
        self.total = total
        self.batch_size = max(batch_size, 1)
        self.rng = rng or random.Random()

    def run(self) -> int:
        """Insert ``total`` translations in batches and return the count."""
        started = time.monotonic()
        tag_names = sorted(tag.name for tag in self.store.backend.scan_tags())
        batches = math.ceil(self.total / self.batch_size)

        logger.info(
            "data_seeding_started",
            total=self.total,
            batches=batches,
            batch_size=self.batch_size,
            existing_tags=len(tag_names),
        )

        inserted = 0
        for batch in range(batches):
            count = min(self.batch_size, self.total - inserted)
            for _ in range(count):
                key = self.generate_key()
                locale = self.rng.choice(LOCALES)
                self.store.create(
                    key,
                    locale,
                    self.generate_content(key, locale),
                    self.pick_tags(tag_names),
                )
            inserted += count

            if (batch + 1) % 10 == 0:
                logger.info(
                    "data_seeding_progress",
                    batch=batch + 1,
                    batches=batches,
                    inserted=inserted,
                )

        self.cache.evict_all()
        logger.info(
            "data_seeding_completed",
            inserted=inserted,
            duration_ms=int((time.monotonic() - started) * 1000),
        )
        return inserted

    def generate_key(self) -> str:
        return ".".join(
            (
                self.rng.choice(CONTEXTS),
                self.rng.choice(ACTIONS),
                self.rng.choice(COMPONENTS),
                str(uuid.UUID(int=self.rng.getrandbits(128), version=4)),
            )
        )

    def generate_content(self, key: str, locale: str) -> str:
        component = key.split(".")[-2]
        if locale not in TITLES:
            return f"Translation for {key} in {locale}"
        if component == "title":
            return f"{TITLES[locale]} {self.rng.randrange(1000)}"
        if component in PHRASES:
            return PHRASES[component][locale]
        return f"{FALLBACKS[locale]} {component}"

    def pick_tags(self, tag_names: List[str]) -> List[str]:
        if not tag_names:
            return []
        return [self.rng.choice(tag_names) for _ in range(self.rng.randrange(4))]
