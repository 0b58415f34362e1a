"""Voice input/output control."""
from .voice import VoiceController, VoiceHandle

__all__ = ["VoiceController", "VoiceHandle"]
