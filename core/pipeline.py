"""Shared consumer/processor/producer scaffolding."""
from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, TypeVar

from .cli_errors import CLIError, ExitCode


ResultT = TypeVar("ResultT")
RequestT = TypeVar("RequestT")
T = TypeVar("T")
R = TypeVar("R")


@dataclass
class ResultEnvelope(Generic[ResultT]):
    status: str
    payload: Optional[ResultT] = None
    diagnostics: Optional[dict[str, Any]] = None

    def ok(self) -> bool:
        return self.status.lower() == "success"

    def unwrap(self) -> ResultT:
        """Return payload or raise ValueError. Use after ok() check."""
        if self.payload is None:
            msg = (self.diagnostics or {}).get("message", "No payload")
            raise ValueError(msg)
        return self.payload

    def exit_code(self) -> int:
        if self.ok():
            return int(ExitCode.SUCCESS)
        return int((self.diagnostics or {}).get("code", ExitCode.USAGE))


class RequestConsumer(Generic[RequestT]):
    """Generic consumer that wraps any request object.

    Example usage:
        request = WeekRequest(...)
        payload = RequestConsumer(request).consume()  # Returns the request
    """

    def __init__(self, request: RequestT) -> None:
        self._request = request

    def consume(self) -> RequestT:  # pragma: no cover - trivial
        return self._request


class BaseProducer:
    """Base class for pipeline producers with common error handling.

    Subclasses override _produce_success() to handle successful results;
    failed envelopes print their message here.
    """

    def produce(self, result: ResultEnvelope) -> None:
        """Template method: handle errors, delegate success to subclass."""
        if not result.ok():
            diagnostics = result.diagnostics or {}
            if diagnostics.get("message"):
                print(f"Error: {diagnostics['message']}", file=sys.stderr)
            if diagnostics.get("hint"):
                print(f"Hint: {diagnostics['hint']}", file=sys.stderr)
            return
        if result.payload is not None:
            self._produce_success(result.payload, result.diagnostics)

    def _produce_success(self, payload: Any, diagnostics: Optional[Dict[str, Any]]) -> None:
        """Override in subclass to handle successful result output."""
        raise NotImplementedError("Subclass must implement _produce_success")


class SafeProcessor(Generic[T, R]):
    """Base processor with automatic error handling wrapper.

    Subclasses override _process_safe(); exceptions become error envelopes.
    A CLIError keeps its exit code in the diagnostics.
    """

    def process(self, payload: T) -> ResultEnvelope[R]:
        """Wrap _process_safe with error handling."""
        try:
            result = self._process_safe(payload)
            return ResultEnvelope(status="success", payload=result)
        except CLIError as e:
            diagnostics: Dict[str, Any] = {"message": str(e), "code": int(e.code)}
            if e.hint:
                diagnostics["hint"] = e.hint
            return ResultEnvelope(status="error", diagnostics=diagnostics)
        except Exception as e:
            return ResultEnvelope(status="error", diagnostics={"message": str(e)})

    def _process_safe(self, payload: T) -> R:
        """Override to implement processing logic without error handling boilerplate."""
        raise NotImplementedError("Subclass must implement _process_safe")


def run_pipeline(request: Any, processor: Any, producer: Any) -> int:
    """Execute a pipeline and return CLI exit code.

    Args:
        request: The request object to process
        processor: Processor instance
        producer: Producer instance

    Returns:
        0 on success, or error code from diagnostics (default 2)
    """
    envelope = processor.process(RequestConsumer(request).consume())
    producer.produce(envelope)
    return envelope.exit_code()
