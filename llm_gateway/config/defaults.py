"""llm_gateway.config.defaults
===========================

Stable default values for the vendor adapters: endpoints, API versions and
the built-in model catalogues. No I/O happens here and nothing else inside
the package is imported, so every layer may depend on it.

Catalogue rows are ``(name, max_input_tokens, max_output_tokens,
capabilities)``; capabilities use the comma-separated config syntax.
"""

from __future__ import annotations

# ---- Transport ----
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10

# ---- OpenAI ----
OPENAI_DEFAULT_API_BASE = "https://api.openai.com/v1"
OPENAI_CHAT_PATH = "/chat/completions"
OPENAI_TOKENS_COUNT_FACTORS = (5, 2)
OPENAI_MODELS = [
    ("gpt-4-turbo-preview", 128000, None, "text"),
    ("gpt-4-vision-preview", 128000, None, "text,vision"),
    ("gpt-4-1106-preview", 128000, None, "text"),
    ("gpt-3.5-turbo", 16385, None, "text"),
    ("gpt-3.5-turbo-1106", 16385, None, "text"),
]

# ---- OpenAI-compatible platforms ----
OPENAI_COMPATIBLE_PLATFORMS = {
    "anyscale": "https://api.endpoints.anyscale.com/v1",
    "deepinfra": "https://api.deepinfra.com/v1/openai",
    "deepseek": "https://api.deepseek.com",
    "fireworks": "https://api.fireworks.ai/inference/v1",
    "groq": "https://api.groq.com/openai/v1",
    "mistral": "https://api.mistral.ai/v1",
    "moonshot": "https://api.moonshot.cn/v1",
    "openrouter": "https://openrouter.ai/api/v1",
    "octoai": "https://text.octoai.run/v1",
    "perplexity": "https://api.perplexity.ai",
    "together": "https://api.together.xyz/v1",
    "zhipuai": "https://open.bigmodel.cn/api/paas/v4",
}

# ---- Anthropic Claude ----
CLAUDE_DEFAULT_API_BASE = "https://api.anthropic.com/v1"
CLAUDE_MESSAGES_PATH = "/messages"
CLAUDE_API_VERSION = "2023-06-01"
CLAUDE_BETA_FEATURES = "tools-2024-05-16"
CLAUDE_DEFAULT_MAX_TOKENS = 4096
CLAUDE_TOKENS_COUNT_FACTORS = (5, 2)
CLAUDE_MODELS = [
    ("claude-3-opus-20240229", 200000, 4096, "text,vision"),
    ("claude-3-sonnet-20240229", 200000, 4096, "text,vision"),
    ("claude-3-haiku-20240307", 200000, 4096, "text,vision"),
]

# ---- Aliyun Qianwen (DashScope) ----
QIANWEN_API_URL = "https://dashscope.aliyuncs.com/api/v1/services/aigc/text-generation/generation"
QIANWEN_TOKENS_COUNT_FACTORS = (4, 14)
QIANWEN_MODELS = [
    ("qwen-max", 6000, None, "text"),
    ("qwen-max-longcontext", 28000, None, "text"),
    ("qwen-plus", 30000, None, "text"),
    ("qwen-turbo", 6000, None, "text"),
]

# ---- Ollama (local daemon) ----
OLLAMA_DEFAULT_API_BASE = "http://localhost:11434"
OLLAMA_DEFAULT_CHAT_ENDPOINT = "/api/chat"
OLLAMA_TOKENS_COUNT_FACTORS = (5, 2)


__all__ = [
    "DEFAULT_CONNECT_TIMEOUT_SECONDS",
    "OPENAI_DEFAULT_API_BASE",
    "OPENAI_CHAT_PATH",
    "OPENAI_TOKENS_COUNT_FACTORS",
    "OPENAI_MODELS",
    "OPENAI_COMPATIBLE_PLATFORMS",
    "CLAUDE_DEFAULT_API_BASE",
    "CLAUDE_MESSAGES_PATH",
    "CLAUDE_API_VERSION",
    "CLAUDE_BETA_FEATURES",
    "CLAUDE_DEFAULT_MAX_TOKENS",
    "CLAUDE_TOKENS_COUNT_FACTORS",
    "CLAUDE_MODELS",
    "QIANWEN_API_URL",
    "QIANWEN_TOKENS_COUNT_FACTORS",
    "QIANWEN_MODELS",
    "OLLAMA_DEFAULT_API_BASE",
    "OLLAMA_DEFAULT_CHAT_ENDPOINT",
    "OLLAMA_TOKENS_COUNT_FACTORS",
]
