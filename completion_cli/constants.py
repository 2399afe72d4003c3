"""Constants for the completion client.

Single source of truth for the endpoint, environment variable names and
CLI defaults.
"""

# Completions endpoint (OpenAI legacy engines API)
DEFAULT_ENGINE = "text-davinci-002"
DEFAULT_ENDPOINT = f"https://api.openai.com/v1/engines/{DEFAULT_ENGINE}/completions"

# Transport timeout in seconds, passed straight to httpx
DEFAULT_TIMEOUT = 120.0

# Environment variables
TOKEN_ENV_VAR = "OPENAI_TOKEN"

# CLI defaults
DEFAULT_TEMPERATURE = 0.3
DEFAULT_MAX_TOKENS = 50
DEFAULT_N = 1

# Display fallbacks for optional response fields
MODEL_FALLBACK = "OpenAI"
ID_FALLBACK = "Err, Id not found"
FINISH_REASON_FALLBACK = "unknown"

PROMPT_LABEL = "GPT > "
PROGRESS_MESSAGE = "Processing"
