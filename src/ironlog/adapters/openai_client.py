"""OpenAI Responses API client for scoring and estimation."""

import logging
from dataclasses import dataclass, field

from openai import AsyncOpenAI, OpenAIError

from ironlog.services.estimation import EstimationClient
from ironlog.services.profiles import AIKeyValidator
from ironlog.services.scoring import ScoreClient

_logger = logging.getLogger(__name__)


@dataclass
class OpenAIClient(ScoreClient, EstimationClient):
    """LLM client backed by the OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls,
        api_key: str,
        *,
        model: str,
        reasoning_effort: str | None = None,
        store: bool = False,
        timeout_seconds: float = 30.0,
    ) -> "OpenAIClient":
        """Create an OpenAI client for a single credential."""
        return cls(
            client=AsyncOpenAI(api_key=api_key, timeout=timeout_seconds),
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
        )

    async def complete(self, prompt: str) -> str:
        """Return the plain text reply for a prompt."""
        response = await self.client.responses.create(
            **self._base_payload(input=prompt)
        )
        return response.output_text or ""

    async def extract(
        self,
        *,
        prompt: str,
        schema_name: str,
        schema: dict[str, object],
        image_data_url: str | None = None,
    ) -> str:
        """Call the Responses API with structured outputs and return the JSON text."""
        content: list[dict[str, object]] = [{"type": "input_text", "text": prompt}]
        if image_data_url:
            content.append({"type": "input_image", "image_url": image_data_url})
        request_payload = self._base_payload(
            input=[{"role": "user", "content": content}],
            text={
                "format": {
                    "type": "json_schema",
                    "name": schema_name,
                    "strict": True,
                    "schema": schema,
                }
            },
        )
        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        await self.client.close()

    def _base_payload(self, **fields: object) -> dict[str, object]:
        payload: dict[str, object] = {"model": self.model, "store": self.store}
        payload.update(fields)
        if self.reasoning_effort:
            payload["reasoning"] = {"effort": self.reasoning_effort}
        return payload


@dataclass
class OpenAIClientPool:
    """Reuses one OpenAI client per credential until closed."""

    model: str
    reasoning_effort: str | None = None
    store: bool = False
    timeout_seconds: float = 30.0
    clients: dict[str, OpenAIClient] = field(default_factory=dict)

    def __call__(self, api_key: str) -> OpenAIClient:
        """Return the client for a credential, creating it on first use."""
        client = self.clients.get(api_key)
        if client is None:
            client = OpenAIClient.create(
                api_key,
                model=self.model,
                reasoning_effort=self.reasoning_effort,
                store=self.store,
                timeout_seconds=self.timeout_seconds,
            )
            self.clients[api_key] = client
        return client

    async def close(self) -> None:
        """Close every pooled client."""
        clients = list(self.clients.values())
        self.clients.clear()
        for client in clients:
            await client.close()
        if clients:
            _logger.info("Closed %s OpenAI clients", len(clients))


@dataclass
class OpenAIKeyValidator(AIKeyValidator):
    """Checks a key by listing models with it."""

    timeout_seconds: float = 10.0

    async def validate(self, api_key: str) -> bool:
        """Return True when OpenAI accepts the key."""
        client = AsyncOpenAI(api_key=api_key, timeout=self.timeout_seconds)
        try:
            await client.models.list()
        except OpenAIError as exc:
            _logger.info("AI key validation failed: %s", type(exc).__name__)
            return False
        finally:
            await client.close()
        return True
