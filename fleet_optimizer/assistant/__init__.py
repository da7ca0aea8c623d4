"""
Fleet assistant: asks an OpenAI-compatible chat endpoint about the current
fleet.

Modules
-------
context : SYSTEM_PROMPT, FleetContext, build_context_text(): turns fleet
          stats and top recommendations into prompt text.
client  : AssistantClient: one blocking request per question; failures
          come back as a fallback reply, never as exceptions.
"""
