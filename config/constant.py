

APP_TITLE = "Copilot Console"

PROVIDER_OPTIONS = ["OpenAI", "Azure OpenAI"]

ERROR_CODE_COPILOT_FAILED = "COPILOT_FAILED"

