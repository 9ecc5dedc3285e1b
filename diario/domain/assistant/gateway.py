"""
OpenAI-compatible chat completions gateway client

Non-2xx answers from the gateway are translated to HTTP errors for the caller:
429 and 402 pass through, anything else becomes 502.
"""

import logging
from typing import Optional

import httpx
from fastapi import HTTPException
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from ...config import AI_GATEWAY_API_KEY, AI_GATEWAY_URL, AI_MODEL, AI_REQUEST_TIMEOUT

logger = logging.getLogger(__name__)

RATE_LIMITED_MESSAGE = "Limite de requisições excedido. Tente novamente em alguns instantes."
NO_CREDITS_MESSAGE = "Créditos insuficientes. Adicione créditos na sua conta."


def gateway_error(status_code: int, body: str) -> HTTPException:
    if status_code == 429:
        return HTTPException(status_code=429, detail=RATE_LIMITED_MESSAGE)
    if status_code == 402:
        return HTTPException(status_code=402, detail=NO_CREDITS_MESSAGE)
    logger.error(f"❌ AI gateway error {status_code}: {body[:500]}")
    return HTTPException(status_code=502, detail="AI gateway error")


class AIGateway:
    def __init__(
        self,
        api_key: Optional[str] = AI_GATEWAY_API_KEY,
        url: str = AI_GATEWAY_URL,
        model: str = AI_MODEL,
        timeout: float = AI_REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.url = url
        self.model = model
        self.timeout = timeout
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        if not self.api_key:
            logger.error("❌ AI_GATEWAY_API_KEY is not configured")
            raise HTTPException(status_code=503, detail="AI assistant is not configured")
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    def _headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

    async def complete(self, messages: list[dict]) -> Optional[str]:
        """Single completion; returns the first choice's content"""
        async with self._client() as client:
            try:
                response = await client.post(
                    self.url,
                    headers=self._headers(),
                    json={"model": self.model, "messages": messages},
                )
            except httpx.HTTPError as e:
                logger.error(f"❌ AI gateway request failed: {e}")
                raise HTTPException(status_code=502, detail="AI gateway unavailable")

        if response.status_code != 200:
            raise gateway_error(response.status_code, response.text)

        try:
            data = response.json()
            return data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError):
            logger.warning("⚠️ AI gateway returned an unexpected completion payload")
            return None

    async def stream(self, messages: list[dict]) -> StreamingResponse:
        """Proxy a streamed completion; the SSE body is relayed unchanged"""
        client = self._client()
        request = client.build_request(
            "POST",
            self.url,
            headers=self._headers(),
            json={"model": self.model, "messages": messages, "stream": True},
        )
        try:
            response = await client.send(request, stream=True)
        except httpx.HTTPError as e:
            await client.aclose()
            logger.error(f"❌ AI gateway stream failed: {e}")
            raise HTTPException(status_code=502, detail="AI gateway unavailable")

        if response.status_code != 200:
            body = (await response.aread()).decode("utf-8", errors="replace")
            await response.aclose()
            await client.aclose()
            raise gateway_error(response.status_code, body)

        async def close():
            await response.aclose()
            await client.aclose()

        return StreamingResponse(
            response.aiter_raw(),
            media_type="text/event-stream",
            headers={"Cache-Control": "no-cache"},
            background=BackgroundTask(close),
        )


def get_ai_gateway() -> AIGateway:
    """Dependency injection for the AI gateway client"""
    return AIGateway()
