import json
import logging
import re
from http.client import HTTPConnection, HTTPException, HTTPResponse, HTTPSConnection
from typing import Dict, Iterator, List, Optional, Union
from urllib.parse import urlparse

from lib.llm.errors import (
    LLMAuthError,
    LLMEmptyResponseError,
    LLMError,
    LLMRateLimitError,
    LLMServerError,
)

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_TITLE = "Audit Communication Tool"

_THINK_PATTERN = re.compile(r"<think>.*?</think>", flags=re.DOTALL)


class OpenRouterClient:
    def __init__(
        self,
        api_key: Optional[str],
        base_url: str = DEFAULT_BASE_URL,
        title: str = DEFAULT_TITLE,
        referer: Optional[str] = None,
        timeout: float = 60.0,
    ):
        u = urlparse(base_url)
        self.__host = u.netloc
        self.__is_https = u.scheme.lower() == "https"
        self.__path = u.path.rstrip("/")
        self.__api_key = api_key
        self.__title = title
        self.__referer = referer
        self.__timeout = timeout
        self._log = logging.getLogger("openrouter")

    @property
    def configured(self) -> bool:
        return bool(self.__api_key)

    def call(
        self,
        model: str,
        messages: List[Dict[str, str]],
        params: Optional[Dict[str, Union[int, float]]] = None,
        stream: bool = False,
    ) -> str:
        """Send a chat completion request and return the assistant text.

        With *stream* set, server-sent delta chunks are read until ``[DONE]``
        and concatenated. Raises an ``LLMError`` subclass on any failure,
        including an empty completion.
        """
        payload = {
            "model": model,
            "messages": messages,
            "stream": stream,
        }
        payload.update(params or {})

        conn = self.get_connection()
        try:
            conn.request(
                "POST",
                f"{self.__path}/chat/completions",
                json.dumps(payload, ensure_ascii=False).encode("utf-8"),
                self._headers(),
            )
            res = conn.getresponse()
            if res.status != 200:
                resp_body_text = res.read().decode("utf-8", errors="replace")
                self._raise_for_status(model, res.status, res.reason, resp_body_text)

            if stream:
                content = "".join(self._iter_stream(res))
            else:
                content = self._read_message(res)
        except (OSError, HTTPException) as e:
            raise LLMError(f"Request to model {model} failed: {e}") from e
        finally:
            conn.close()

        content = _THINK_PATTERN.sub("", content)
        if not content.strip():
            raise LLMEmptyResponseError(f"Model {model} returned no content")
        return content

    def get_connection(self) -> Union[HTTPConnection, HTTPSConnection]:
        if self.__is_https:
            return HTTPSConnection(self.__host, timeout=self.__timeout)
        else:
            return HTTPConnection(self.__host, timeout=self.__timeout)

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "X-Title": self.__title,
        }
        if self.__api_key:
            headers["Authorization"] = f"Bearer {self.__api_key}"
        if self.__referer:
            headers["HTTP-Referer"] = self.__referer
        return headers

    def _raise_for_status(self, model: str, status: int, reason: str, body: str) -> None:
        err_msg = f"{status} - {reason} - {body}"
        self._log.warning("Model %s call failed: %s", model, err_msg)
        if status == 401:
            raise LLMAuthError(f"Authentication failed: {err_msg}", status=status)
        if status == 429:
            raise LLMRateLimitError(f"Rate limited: {err_msg}", status=status)
        if status >= 500:
            raise LLMServerError(f"Provider error: {err_msg}", status=status)
        raise LLMError(f"Request failed: {err_msg}", status=status)

    def _read_message(self, res: HTTPResponse) -> str:
        resp_body = res.read()
        try:
            resp = json.loads(resp_body)
            return resp["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise LLMError(f"Malformed completion response: {e}") from e

    def _iter_stream(self, res: HTTPResponse) -> Iterator[str]:
        for raw_line in res:
            line = raw_line.decode("utf-8", errors="replace").strip()
            if not line.startswith("data: "):
                continue
            data = line[len("data: "):]
            if data == "[DONE]":
                break
            try:
                chunk = json.loads(data)
                delta = chunk["choices"][0].get("delta") or {}
            except (ValueError, KeyError, IndexError, TypeError, AttributeError) as e:
                self._log.warning("Skipping undecodable stream chunk: %s", e)
                continue
            content = delta.get("content") or ""
            if content:
                yield content
