"""Language-model provider access."""

from .factory import ModelClient, create_chat_model, is_model_unavailable

__all__ = ["ModelClient", "create_chat_model", "is_model_unavailable"]
