"""GGUF model files, chat prompts and tensor shape helpers for local LLM inference."""

__version__ = "0.1.0"

__all__ = [
    "chat_template",
    "cli",
    "conv",
    "gguf",
    "metadata",
    "models",
    "prompt",
    "sampler",
    "shapes",
]