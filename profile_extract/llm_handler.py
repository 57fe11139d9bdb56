"""
LLM Handler Module
==================

Thin Anthropic wrapper used by the self-heal provider:
- Structured output via a forced tool call with a pydantic schema
- Retry on transient errors and empty/invalid structured output
- Latency measurement
"""

import time
from typing import Dict, Any, Optional, Type

from anthropic import Anthropic
from pydantic import BaseModel, ValidationError

from .config import Config
from .exceptions import SelfHealError
from .logger import get_logger

log = get_logger('llm')

TRANSIENT_MARKERS = ('timeout', 'rate limit', 'too many requests', 'overloaded')


class ClaudeClient:
    """Anthropic Claude client returning tool_use input as a dict."""

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None):
        self.api_key = api_key or Config.ANTHROPIC_API_KEY
        if not self.api_key:
            raise SelfHealError("Claude API key not found (set ANTHROPIC_API_KEY)")
        self.client = Anthropic(api_key=self.api_key)
        self.model = model or Config.CLAUDE_MODEL
        self.last_usage: Optional[Dict[str, int]] = None

    def generate_structured(self, prompt: str, response_model: Type[BaseModel], max_tokens: int = 2048, temperature: float = 0.0) -> Dict[str, Any]:
        schema = response_model.model_json_schema()

        response = self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[{"role": "user", "content": prompt}],
            tool_choice={"type": "tool", "name": "structured_output"},
            tools=[{
                "name": "structured_output",
                "description": "Return structured data matching the schema",
                "input_schema": schema,
            }],
        )

        if getattr(response, 'usage', None):
            self.last_usage = {
                'input_tokens': response.usage.input_tokens,
                'output_tokens': response.usage.output_tokens,
            }

        for block in response.content or []:
            if getattr(block, 'type', None) == 'tool_use':
                return block.input or {}
        return {}


class LLMHandler:
    """
    Generic handler for LLM interactions.

    Takes a prompt and a pydantic model, returns the validated model.
    Raises SelfHealError when no usable answer arrives within max_retries.
    """

    def __init__(self, model: Optional[str] = None, client: Optional[ClaudeClient] = None):
        self.client = client or ClaudeClient(model=model)
        self.model = self.client.model

    def call(self, prompt: str, response_model: Type[BaseModel], max_tokens: int = 2048, max_retries: int = 2) -> Dict[str, Any]:
        """
        Run a structured call with retries.

        Returns:
            {"data": <model instance>, "latency_ms": float, "attempts": int}
        """
        start_time = time.time()
        errors_seen = set()
        last_error = None

        for attempt in range(max_retries + 1):
            try:
                raw = self.client.generate_structured(prompt, response_model, max_tokens=max_tokens)
                if not raw:
                    raise SelfHealError("LLM returned empty structured output")
                data = response_model(**raw)
                latency_ms = (time.time() - start_time) * 1000
                log.debug(f"LLM call ok in {latency_ms:.0f}ms ({attempt + 1} attempts)")
                return {"data": data, "latency_ms": latency_ms, "attempts": attempt + 1}

            except (SelfHealError, ValidationError) as e:
                last_error = e
                log.warning(f"Unusable LLM response (attempt {attempt + 1}): {e}")
                wait_seconds = 1

            except Exception as e:
                last_error = e
                error_str = str(e)
                signature = f"{type(e).__name__}: {error_str}"

                if any(marker in error_str.lower() for marker in TRANSIENT_MARKERS):
                    wait_seconds = min(2 ** attempt, 30)
                elif signature not in errors_seen:
                    errors_seen.add(signature)
                    wait_seconds = 1
                else:
                    log.error(f"Repeated LLM error, giving up: {error_str}")
                    break
                log.warning(f"LLM error (attempt {attempt + 1}): {error_str}")

            if attempt < max_retries:
                time.sleep(wait_seconds)

        raise SelfHealError(f"LLM call failed after retries: {last_error}")
