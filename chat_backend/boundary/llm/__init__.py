"""Model inference boundary."""

from .langchain_client import LangChainInferenceClient, extract_text, to_lc_messages

__all__ = ["LangChainInferenceClient", "extract_text", "to_lc_messages"]
