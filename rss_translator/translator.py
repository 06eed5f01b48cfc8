"""
Translation clients.

BaseTranslator is the interface the feed processor depends on, so tests
can substitute a deterministic translator. GASTranslator talks to a Google
Apps Script web app over JSON POST.

Batch fallback rules (GASTranslator.translate_batch):
- Endpoint answers 200 with status true: successful items map to their
  translation, failed items map to their original text.
- Transport failure (connection error, timeout, malformed results): every
  submitted id maps to its original text.
- Endpoint answers non-200, or status false: the mapping is empty and the
  caller keeps its original text for every id.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any

import aiohttp
from pydantic import BaseModel, ValidationError

from .schemas import (
    BatchTranslateItem,
    BatchTranslateRequest,
    BatchTranslateResponse,
    TranslateRequest,
    TranslateResponse,
)

logger = logging.getLogger(__name__)


class BaseTranslator(ABC):
    """Abstract translation backend."""

    @abstractmethod
    async def translate_batch(
        self,
        items: list[BatchTranslateItem],
        source_lang: str,
        target_lang: str,
    ) -> dict[str, str]:
        """
        Translate keyed fragments in one round trip.

        Returns a mapping of item id to text. Ids missing from the mapping
        are untranslated.
        """
        pass

    @abstractmethod
    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> str | None:
        """Translate a single string, or return None when no translation is available."""
        pass


class GASTranslator(BaseTranslator):
    """Client for the Apps Script translation endpoint."""

    def __init__(
        self,
        gas_url: str,
        batch_timeout: float = 25.0,
        translate_timeout: float = 5.0,
    ):
        self.gas_url = gas_url
        self.batch_timeout = batch_timeout
        self.translate_timeout = translate_timeout
        self.headers = {"Content-Type": "application/json"}

    async def translate_batch(
        self,
        items: list[BatchTranslateItem],
        source_lang: str,
        target_lang: str,
    ) -> dict[str, str]:
        results: dict[str, str] = {}
        if not items:
            return results

        request = BatchTranslateRequest(before=source_lang, after=target_lang, texts=items)
        logger.info(f"Sending batch request with {len(items)} items to {self.gas_url}")

        try:
            status, data = await self._post(request, self.batch_timeout)
            if status != 200 or not isinstance(data, dict) or not data.get("status"):
                logger.error(f"Translation endpoint returned error (HTTP {status}): {data}")
                return results
            response = BatchTranslateResponse.model_validate(data)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValidationError) as e:
            logger.error(f"Batch translation error, keeping original text: {e}")
            return {item.id: item.text for item in items}

        for result in response.results:
            if result.success and result.translated is not None:
                results[result.id] = result.translated
            else:
                logger.warning(f"Translation failed for {result.id}: {result.error}")
                results[result.id] = result.original

        logger.info(
            f"Batch translation: {response.processed}/{response.total} items processed "
            f"in {response.execution_time}ms, {len(results)} results mapped"
        )
        return results

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> str | None:
        request = TranslateRequest(before=source_lang, after=target_lang, text=text)

        try:
            status, data = await self._post(request, self.translate_timeout)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Translation error: {e}")
            return None

        if status != 200 or not isinstance(data, dict):
            return None

        try:
            parsed = TranslateResponse.model_validate(data)
        except ValidationError as e:
            logger.warning(f"Unexpected translation response: {e}")
            return None

        if parsed.response and parsed.response.status:
            return parsed.response.result
        return None

    async def _post(self, request: BaseModel, timeout: float) -> tuple[int, Any]:
        """POST a request model as JSON. Returns (HTTP status, decoded body or None)."""
        async with aiohttp.ClientSession(headers=self.headers) as session:
            async with session.post(
                self.gas_url,
                json=request.model_dump(),
                timeout=aiohttp.ClientTimeout(total=timeout),
            ) as resp:
                try:
                    data = await resp.json(content_type=None)
                except ValueError:
                    data = None
                return resp.status, data
