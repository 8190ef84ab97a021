"""
Structured logging for board operations.
Embedding, clustering, search and text-provider events share one message format.
"""

import logging
from typing import Any, Dict, List


class StructuredLogger:
    """Structured logger for idea board operations."""

    def __init__(self, name: str = "idea_board"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def set_debug(self, enabled: bool) -> None:
        """Switch between DEBUG and INFO output."""
        self.logger.setLevel(logging.DEBUG if enabled else logging.INFO)

    def debug_enabled(self) -> bool:
        return self.logger.isEnabledFor(logging.DEBUG)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.info(message)

    def log_card_operation(self, operation: str, card_id: str, details: Dict[str, Any] = None, status: str = "success"):
        """Log a card persistence operation."""
        log_details = {"card_id": card_id}
        if details:
            log_details.update(details)

        self.log_operation(f"card.{operation}", status, log_details)

    def log_embedding_operation(self, operation: str, card_id: str, details: Dict[str, Any] = None, status: str = "success"):
        """Log an embedding computation or write."""
        log_details = {"card_id": card_id}
        if details:
            log_details.update(details)

        self.log_operation(f"embedding.{operation}", status, log_details)

    def log_cluster_run(self, board_id: str, threshold: float, card_count: int, cluster_count: int, details: Dict[str, Any] = None):
        """Log a completed clustering run."""
        log_details = {
            "board_id": board_id,
            "threshold": threshold,
            "card_count": card_count,
            "cluster_count": cluster_count,
        }
        if details:
            log_details.update(details)

        self.log_operation("cluster.run", "success", log_details)

    def log_search(self, board_id: str, query: str, result_count: int, min_score: float):
        """Log a semantic search request."""
        log_details = {
            "board_id": board_id,
            "query": query[:50] + "..." if len(query) > 50 else query,
            "result_count": result_count,
            "min_score": min_score,
        }
        self.log_operation("search.semantic", "success", log_details)

    def log_provider_failure(self, provider: str, task: str, error: Exception):
        """Log a text-generation failure that was degraded to a fallback."""
        log_details = {
            "provider": provider,
            "task": task,
            "error": str(error)[:100],
        }
        self.logger.warning(f"Operation: provider.{task}, Status: fallback, Details: {log_details}")

    # Plain messages for call sites without a structured event
    def info(self, message: str) -> None:
        self.logger.info(message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    def debug(self, message: str) -> None:
        self.logger.debug(message)


logger = StructuredLogger()

REDACTED_FIELDS = ('api_key', 'token', 'password', 'secret')


def sanitize_payload(payload: Any, max_length: int = 100, sensitive_fields: List[str] = None) -> Any:
    """
    Prepare card text and request data for a log line.

    Long strings are cut to ``max_length`` characters, credential-like keys
    are masked, and dicts, lists and tuples are walked recursively.
    """
    masked = tuple(sensitive_fields) if sensitive_fields is not None else REDACTED_FIELDS

    if isinstance(payload, str):
        return payload if len(payload) <= max_length else f"{payload[:max_length]}..."
    if isinstance(payload, dict):
        return {
            key: "[REDACTED]" if key in masked else sanitize_payload(value, max_length, masked)
            for key, value in payload.items()
        }
    if isinstance(payload, (list, tuple)):
        return [sanitize_payload(item, max_length, masked) for item in payload]
    return payload
