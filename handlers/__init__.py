"""
handlers/ - Presentation Layer
================================
Telegram-facing code: the webhook message callback, the built-in chat
commands it dispatches to, and the operator /adjust command.
Handlers delegate to services and only shape replies.
"""
