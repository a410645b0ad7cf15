"""Chat transports for AI comment generation.

Two transports exist: ``http`` posts to an OpenAI-compatible
``/chat/completions`` endpoint and ``ollama`` shells out to the local
``ollama run`` command. Everything a transport needs comes from the ``llm``
block of ``.easydoc.yml``; unset keys fall back to the defaults below.
"""

from __future__ import annotations

import json
import subprocess
from dataclasses import dataclass, replace
from typing import Callable, Dict, List, Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from ..config import ConfigError, LLMConfig

RUNNER_HTTP = "http"
RUNNER_OLLAMA = "ollama"

DEFAULT_MODEL = "qwen2.5-coder:7b"
DEFAULT_BASE_URL = "http://localhost:11434/v1"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 0.9
DEFAULT_TIMEOUT = 300.0
OLLAMA_EXECUTABLE = "ollama"


@dataclass(frozen=True)
class LLMRequest:
    """One prompt plus the resolved settings it is sent with."""

    prompt: str
    system: Optional[str]
    settings: LLMConfig


Transport = Callable[[LLMRequest], str]


def resolve_settings(config: LLMConfig | None) -> LLMConfig:
    """Fill unset ``llm`` keys with defaults and normalise the runner name."""
    config = config or LLMConfig()
    runner = (config.runner or RUNNER_HTTP).strip().lower()
    if runner not in TRANSPORTS:
        raise ConfigError(f"Unknown llm.runner '{config.runner}' (expected 'http' or 'ollama')")
    base_url = None
    if runner == RUNNER_HTTP:
        base_url = (config.base_url or DEFAULT_BASE_URL).rstrip("/")
    return replace(
        config,
        runner=runner,
        model=config.model or DEFAULT_MODEL,
        base_url=base_url,
        temperature=DEFAULT_TEMPERATURE if config.temperature is None else config.temperature,
        top_p=DEFAULT_TOP_P if config.top_p is None else config.top_p,
        request_timeout=config.request_timeout or DEFAULT_TIMEOUT,
    )


class LLMRunner:
    """Sends prompts through the transport selected by ``llm.runner``."""

    def __init__(self, config: LLMConfig | None = None, *, transport: Transport | None = None) -> None:
        self.settings = resolve_settings(config)
        self._transport = transport or TRANSPORTS[self.settings.runner or RUNNER_HTTP]

    def run(self, prompt: str, *, system: str | None = None) -> str:
        return self._transport(LLMRequest(prompt=prompt, system=system, settings=self.settings))


# ----------------------------------------------------------------------
# Transports


def chat_completion(request: LLMRequest) -> str:
    """POST the prompt to ``<base_url>/chat/completions`` and return the answer text."""
    settings = request.settings
    if not settings.base_url:
        raise RuntimeError("llm.base_url is required for the http runner")

    body: Dict[str, object] = {
        "model": settings.model,
        "messages": _messages(request),
        "stream": False,
        "temperature": settings.temperature,
        "top_p": settings.top_p,
    }
    if settings.max_tokens is not None:
        body["max_tokens"] = settings.max_tokens
    headers = {"Content-Type": "application/json"}
    if settings.api_key:
        headers["Authorization"] = f"Bearer {settings.api_key}"

    http_request = Request(
        f"{settings.base_url}/chat/completions",
        data=json.dumps(body).encode("utf-8"),
        headers=headers,
        method="POST",
    )
    try:
        with urlopen(http_request, timeout=settings.request_timeout) as response:
            raw = response.read()
    except HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="ignore").strip()
        raise RuntimeError(f"{settings.base_url} answered {exc.code}: {detail or exc.reason}") from exc
    except URLError as exc:
        raise RuntimeError(f"Cannot reach {settings.base_url}: {exc.reason}") from exc

    try:
        payload = json.loads(raw.decode("utf-8"))
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"{settings.base_url} did not answer with JSON") from exc
    content = extract_content(payload).strip()
    if not content:
        raise RuntimeError(f"{settings.base_url} answered without content")
    return content


def ollama_cli(request: LLMRequest) -> str:
    """Run ``ollama run <model> <prompt>`` and return its stdout."""
    settings = request.settings
    prompt = f"{request.system}\n\n{request.prompt}" if request.system else request.prompt
    try:
        completed = subprocess.run(
            [OLLAMA_EXECUTABLE, "run", str(settings.model), prompt],
            check=True,
            capture_output=True,
            text=True,
            timeout=settings.request_timeout,
        )
    except FileNotFoundError as exc:
        raise RuntimeError("ollama is not installed; set llm.runner to 'http' instead") from exc
    except subprocess.CalledProcessError as exc:
        raise RuntimeError(f"ollama exited with {exc.returncode}: {exc.stderr.strip()}") from exc
    except subprocess.TimeoutExpired as exc:
        raise RuntimeError(f"ollama gave no answer within {exc.timeout}s") from exc
    return completed.stdout.strip()


TRANSPORTS: Dict[str, Transport] = {
    RUNNER_HTTP: chat_completion,
    RUNNER_OLLAMA: ollama_cli,
}


def _messages(request: LLMRequest) -> List[Dict[str, str]]:
    messages = [{"role": "user", "content": request.prompt}]
    if request.system:
        messages.insert(0, {"role": "system", "content": request.system})
    return messages


def extract_content(payload: object) -> str:
    """Answer text from an OpenAI ``choices`` payload or an Ollama ``message`` payload."""
    if not isinstance(payload, dict):
        return ""
    choices = payload.get("choices")
    if isinstance(choices, list) and choices:
        first = choices[0]
        if not isinstance(first, dict):
            return ""
        message = first.get("message")
        if isinstance(message, dict) and isinstance(message.get("content"), str):
            return message["content"]
        return first["text"] if isinstance(first.get("text"), str) else ""
    message = payload.get("message")
    if isinstance(message, dict) and isinstance(message.get("content"), str):
        return message["content"]
    return ""


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_MODEL",
    "LLMRequest",
    "LLMRunner",
    "RUNNER_HTTP",
    "RUNNER_OLLAMA",
    "TRANSPORTS",
    "chat_completion",
    "extract_content",
    "ollama_cli",
    "resolve_settings",
]
