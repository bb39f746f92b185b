from .extraction import EXTRACTION_SYSTEM_PROMPT, get_extraction_user_prompt

__all__ = ["EXTRACTION_SYSTEM_PROMPT", "get_extraction_user_prompt"]
