"""
Reply generation - prompts the LLM across a list of models and normalizes the result
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Sequence, Tuple, Union

from lib.llm.errors import LLMAuthError, LLMError, NoModelAvailableError
from lib.prompts import (
    CONNECTION_CHECK_CONFIG,
    CONNECTION_CHECK_PROMPT,
    CONNECTION_CHECK_SYSTEM_PROMPT,
    build_messages,
    get_generation_config,
)
from lib.reply_splitt import Normalizer, ResponseTriple

DEFAULT_MODELS = [
    "kwaipilot/kat-coder-pro:free",
    "minimax/minimax-m2:free",
    "nvidia/nemotron-nano-12b-v2-vl:free",
]

logger = logging.getLogger("generator")


class ChatClient(Protocol):
    def call(
        self,
        model: str,
        messages: List[Dict[str, str]],
        params: Optional[Dict[str, Union[int, float]]] = None,
        stream: bool = False,
    ) -> str: ...


@dataclass(frozen=True)
class GenerationResult:
    responses: ResponseTriple
    model: str
    strategy: str
    fallback_slots: Tuple[int, ...] = ()


class ReplyGenerator:
    def __init__(
        self,
        client: ChatClient,
        models: Optional[Sequence[str]] = None,
        normalizer: Optional[Normalizer] = None,
    ):
        self.client = client
        self.models = list(models) if models else list(DEFAULT_MODELS)
        self.normalizer = normalizer if normalizer is not None else Normalizer()

    def generate(self, message: str, intensity: int, stream: bool = False) -> GenerationResult:
        """
        Generate three replies to the audited party's message.

        Models are tried in order until one returns text. An authentication
        failure stops the loop immediately since no other model can succeed
        with the same key.

        Raises:
            LLMAuthError: the provider rejected the API key
            NoModelAvailableError: every model failed
        """
        messages = build_messages(message, intensity)
        params = get_generation_config(intensity).to_params()
        logger.debug("Generating replies: intensity=%d models=%s stream=%s", intensity, self.models, stream)

        for model in self.models:
            raw = self._try_model(model, messages, params, stream)
            if raw is None:
                continue

            logger.info("Generated replies with model %s", model)
            logger.debug("Model %s returned %d chars", model, len(raw))
            result = self.normalizer.run(raw)
            if result.fallback_slots:
                logger.info(
                    "Model %s output needed fallback for slots %s (strategy %s)",
                    model, list(result.fallback_slots), result.strategy
                )
            return GenerationResult(
                responses=result.responses,
                model=model,
                strategy=result.strategy,
                fallback_slots=result.fallback_slots,
            )

        raise NoModelAvailableError(f"All {len(self.models)} models failed to respond")

    def check_connection(self, model: Optional[str] = None) -> Tuple[str, str]:
        """Send a short probe prompt and return (model, reply)."""
        model = model or self.models[0]
        messages = [
            {"role": "system", "content": CONNECTION_CHECK_SYSTEM_PROMPT},
            {"role": "user", "content": CONNECTION_CHECK_PROMPT},
        ]
        reply = self.client.call(model, messages, dict(CONNECTION_CHECK_CONFIG), stream=False)
        return model, reply.strip()

    def _try_model(
        self,
        model: str,
        messages: List[Dict[str, str]],
        params: Dict[str, Union[int, float]],
        stream: bool,
    ) -> Optional[str]:
        """Return the raw completion of one model, or None to move on to the next."""
        attempts = [True, False] if stream else [False]
        for use_stream in attempts:
            try:
                return self.client.call(model, messages, params, stream=use_stream)
            except LLMAuthError:
                logger.error("Model %s rejected the API key", model)
                raise
            except LLMError as e:
                mode = "streaming" if use_stream else "non-streaming"
                logger.warning("Model %s %s call failed: %s", model, mode, e)
            except Exception as e:
                logger.error("Unexpected error calling model %s: %s", model, e, exc_info=True)
                return None
        return None
