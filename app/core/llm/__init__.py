"""LLM integration layer.

Small on purpose:
- No prompt/output logging.
- Configurable via environment variables.
- One chat-completion request per call; callers validate what comes back.
"""
