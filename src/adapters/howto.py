"""Cliente "how to" (StackOverflow vía buscador).

Implementación:
- Busca `site:stackoverflow.com <query>` y recoge enlaces a preguntas.
- Visita hasta `howto_max_candidates` preguntas y toma la respuesta mejor
  valorada de cada una.
- `instruction` es el primer bloque `<pre>` de la respuesta; si no tiene,
  el texto completo.

Notas:
- Google envuelve los enlaces como `/url?q=<destino>&...`; se desenvuelven.
- `iter_answers` es perezoso: no se descarga la siguiente pregunta hasta que
  el consumidor la pide.
"""

from __future__ import annotations

import logging
from typing import AsyncIterator
from urllib.parse import parse_qs, urlparse

import httpx
from bs4 import BeautifulSoup

from adapters.http_client import build_async_client, node_text, parse_html
from core.config import AppSettings
from core.domain.models import HowtoAnswer

logger = logging.getLogger(__name__)


def _unwrap_link(href: str) -> str:
    if href.startswith("/url?"):
        target = parse_qs(urlparse(href).query).get("q")
        if target:
            return target[0]
    return href


def extract_question_links(soup: BeautifulSoup) -> list[str]:
    links: list[str] = []
    for a in soup.find_all("a", href=True):
        href = _unwrap_link(str(a["href"]))
        parsed = urlparse(href)
        if not parsed.netloc.endswith("stackoverflow.com"):
            continue
        if not parsed.path.startswith("/questions/"):
            continue
        link = f"https://stackoverflow.com{parsed.path}"
        if link not in links:
            links.append(link)
    return links


def parse_top_answer(soup: BeautifulSoup, link: str) -> HowtoAnswer | None:
    answer = soup.select_one(".answer")
    if answer is None:
        return None
    body = answer.select_one(".js-post-body") or answer.select_one(".post-text")
    if body is None:
        return None

    full_text = body.get_text("\n", strip=True)
    code = body.find("pre")
    instruction = code.get_text().strip() if code is not None else full_text

    answer_id = answer.get("data-answerid")
    answer_link = f"{link}/{answer_id}#{answer_id}" if answer_id else link
    return HowtoAnswer(link=answer_link, instruction=instruction, full_text=full_text)


class HowtoClient:
    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._transport = transport

    async def iter_answers(self, query: str) -> AsyncIterator[HowtoAnswer]:
        async with build_async_client(self._settings, transport=self._transport) as client:
            resp = await client.get(
                self._settings.howto_search_url,
                params={"q": f"site:stackoverflow.com {query}"},
            )
            resp.raise_for_status()

            links = extract_question_links(parse_html(resp.text))
            logger.debug("howto %r: %d candidate questions", query, len(links))

            for link in links[: self._settings.howto_max_candidates]:
                page = await client.get(link, params={"answertab": "votes"})
                if page.status_code != 200:
                    logger.debug("skipping %s (HTTP %d)", link, page.status_code)
                    continue
                answer = parse_top_answer(parse_html(page.text), link)
                if answer is not None:
                    yield answer

    async def first_answer(self, query: str) -> HowtoAnswer | None:
        answers = self.iter_answers(query)
        try:
            async for answer in answers:
                return answer
            return None
        finally:
            await answers.aclose()
