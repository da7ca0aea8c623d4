"""
Fleet assistant client for an OpenAI-compatible chat completion endpoint.

Credential setup (.env, gitignored)::

    AI_BUILDER_TOKEN=your_token_here

The environment variable name comes from ``ChatConfig.api_key_env``.

One question is one blocking POST to ``{base_url}/chat/completions``: no
retries, no streaming. The caller always gets a string back. On any transport,
HTTP, or payload error the reply is ``ERROR_REPLY``; a well-formed response
with no content yields ``NO_RESPONSE_REPLY``.

Usage::

    client = AssistantClient(config.chat)
    reply = client.ask("Which tables should I fix first?", context)
"""

from __future__ import annotations

import logging
import os
from typing import Any, Optional

import httpx

from fleet_optimizer.assistant.context import SYSTEM_PROMPT, FleetContext, build_context_text
from fleet_optimizer.config import ChatConfig
from fleet_optimizer.utils.logging import fleet_extra

logger = logging.getLogger(__name__)

NO_RESPONSE_REPLY = "I apologize, I could not generate a response."
ERROR_REPLY = "Sorry, there was an error processing your request. Please try again."


class AssistantClient:
    """Asks the configured chat model about a fleet.

    Attributes:
        config:  Chat endpoint settings.
        api_key: Bearer token; read from ``config.api_key_env`` when not given.
    """

    def __init__(
        self,
        config: ChatConfig,
        api_key: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        """Initialise the client.

        Args:
            config:      Chat endpoint settings.
            api_key:     Explicit token; ``None`` → ``os.environ[config.api_key_env]``.
            http_client: Pre-built ``httpx.Client`` (tests pass one with a
                         ``MockTransport``); ``None`` → a client per request.
        """
        self.config = config
        self.api_key = api_key if api_key is not None else os.environ.get(config.api_key_env)
        self._http_client = http_client

    def build_messages(
        self,
        message: str,
        context: Optional[FleetContext] = None,
    ) -> list[dict[str, str]]:
        """System prompt (plus fleet context) followed by the user's message."""
        return [
            {"role": "system", "content": SYSTEM_PROMPT + build_context_text(context)},
            {"role": "user", "content": message},
        ]

    def ask(self, message: str, context: Optional[FleetContext] = None) -> str:
        """Send one question and return the assistant's reply text.

        Never raises for transport or API failures; see module docstring.
        """
        log_extra = fleet_extra(context.profile) if context is not None else None

        if not self.api_key:
            logger.warning(
                "No chat API token found in $%s; skipping assistant request.",
                self.config.api_key_env,
                extra=log_extra,
            )
            return ERROR_REPLY

        payload = {
            "model": self.config.model,
            "messages": self.build_messages(message, context),
            "max_tokens": self.config.max_tokens,
            "temperature": self.config.temperature,
        }

        try:
            data = self._post(payload)
        except httpx.HTTPError:
            logger.exception(
                "Chat request to %s failed", self.config.base_url, extra=log_extra
            )
            return ERROR_REPLY
        except ValueError:
            logger.exception(
                "Chat response from %s was not valid JSON", self.config.base_url,
                extra=log_extra,
            )
            return ERROR_REPLY

        return _extract_reply(data)

    def _post(self, payload: dict[str, Any]) -> Any:
        url = f"{self.config.base_url}/chat/completions"
        headers = {"Authorization": f"Bearer {self.api_key}"}

        if self._http_client is not None:
            resp = self._http_client.post(
                url, json=payload, headers=headers, timeout=self.config.timeout_seconds
            )
        else:
            resp = httpx.post(
                url, json=payload, headers=headers, timeout=self.config.timeout_seconds
            )
        resp.raise_for_status()
        logger.info("Chat completion received from model=%s", self.config.model)
        return resp.json()


def _extract_reply(data: Any) -> str:
    """Pull ``choices[0].message.content`` out of a completion payload."""
    try:
        content = data["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        logger.warning("Chat response had no message content")
        return NO_RESPONSE_REPLY
    return content or NO_RESPONSE_REPLY
