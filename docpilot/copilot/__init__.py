"""Copilot chat: transcript persistence, remote turns and reply formatting."""

from docpilot.copilot.assistant import CopilotAssistant
from docpilot.copilot.chat import CopilotChat
from docpilot.copilot.formatter import format_message, render_html
from docpilot.copilot.models import ChatMessage
from docpilot.copilot.session import ChatSession
from docpilot.copilot.store import JsonFileStore

__all__ = [
    "ChatMessage",
    "ChatSession",
    "CopilotAssistant",
    "CopilotChat",
    "JsonFileStore",
    "format_message",
    "render_html",
]
