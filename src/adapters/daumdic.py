"""Cliente del diccionario Daum (scraping HTML).

Implementación:
- GET `<base>/search.do?q=<query>&dic=all`.
- Cada tarjeta `div.cleanword_type` es una palabra: título, pronunciación
  opcional, lista de acepciones y etiqueta de idioma (`data-lang`).
- Si no hay coincidencia exacta, Daum propone correcciones
  (`.speller_search a`), que se devuelven como `alternatives`.
"""

from __future__ import annotations

import httpx
from bs4 import BeautifulSoup

from adapters.http_client import LookupServiceError, build_async_client, node_text, parse_html
from core.config import AppSettings
from core.domain.models import DictionarySearch, DictionaryWord


class DictionaryNotFound(LookupServiceError):
    def __init__(self, query: str) -> None:
        self.query = query
        super().__init__(f"no dictionary entry for {query}")


def parse_search_page(soup: BeautifulSoup) -> DictionarySearch:
    words: list[DictionaryWord] = []
    for card in soup.select("div.cleanword_type"):
        word = node_text(card.select_one(".tit_cleansch .txt_cleansch"))
        if not word:
            continue
        meaning = [node_text(li) for li in card.select("ul.list_search li .txt_search")]
        pronounce = node_text(card.select_one(".txt_pronounce")) or None
        lang = card.get("data-lang")
        words.append(
            DictionaryWord(
                word=word,
                meaning=[m for m in meaning if m],
                pronounce=pronounce,
                lang=str(lang) if lang else None,
            )
        )

    alternatives = [node_text(a) for a in soup.select(".speller_search a")]
    return DictionarySearch(words=words, alternatives=[a for a in alternatives if a])


class DaumDicClient:
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def search(self, query: str) -> DictionarySearch:
        url = f"{self._settings.daumdic_base_url.rstrip('/')}/search.do"

        async with build_async_client(self._settings, transport=self._transport) as client:
            resp = await client.get(url, params={"q": query, "dic": "all"})
        resp.raise_for_status()

        result = parse_search_page(parse_html(resp.text))
        if not result.words and not result.alternatives:
            raise DictionaryNotFound(query)
        return result
