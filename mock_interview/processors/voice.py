import asyncio
from typing import Any, Awaitable, Callable, Optional

import structlog

from ..core.exceptions import SpeechError
from ..core.interfaces import VoicePlatform

logger = structlog.get_logger(__name__)


class VoiceHandle:
    """A speak or listen call that can be aborted.

    ``await handle.result()`` yields the recognized text for a listen, None
    for a speak, and None for either once cancelled. The platform is only
    told to stop if the call actually reached it.
    """

    def __init__(self, stop: Callable[[], None]):
        self._stop = stop
        self._task: Optional["asyncio.Task[Any]"] = None
        self._cancelled = False
        self.started = False

    def start(self, runner: Awaitable[Any]) -> "VoiceHandle":
        self._task = asyncio.create_task(runner)
        return self

    @property
    def done(self) -> bool:
        return self._task is None or self._task.done()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        """Tell the platform to stop and cancel the task without waiting for it."""
        if self.done:
            return
        self._cancelled = True
        if self.started:
            self._stop()
        self._task.cancel()

    async def result(self) -> Optional[str]:
        try:
            return await self._task
        except asyncio.CancelledError:
            if self._cancelled:
                return None
            raise


class VoiceController:
    """
    Gates the voice platform so that at most one speak and one listen run at a
    time. Starting a new call in a direction cancels the previous one first.
    """

    def __init__(self, platform: VoicePlatform, capture_timeout: Optional[float] = None):
        self.platform = platform
        self.capture_timeout = capture_timeout
        self.voice_enabled = True
        self._speak_handle: Optional[VoiceHandle] = None
        self._listen_handle: Optional[VoiceHandle] = None

    @property
    def is_speaking(self) -> bool:
        return self._speak_handle is not None and not self._speak_handle.done

    @property
    def is_listening(self) -> bool:
        return self._listen_handle is not None and not self._listen_handle.done

    def is_supported(self) -> bool:
        try:
            return bool(self.platform.is_supported())
        except Exception as e:
            logger.warning("voice_support_check_failed", error=str(e))
            return False

    def _require_support(self) -> None:
        if not self.is_supported():
            raise SpeechError("Voice input/output is not supported on this platform")

    async def _guard(self,
                     handle: VoiceHandle,
                     direction: str,
                     call: Callable[[], Awaitable[Any]],
                     timeout: Optional[float]) -> Any:
        handle.started = True
        try:
            if timeout is not None:
                return await asyncio.wait_for(call(), timeout)
            return await call()
        except asyncio.TimeoutError:
            if direction == "listen":
                self.platform.stop_listening()
            raise SpeechError(f"Voice {direction} timed out after {timeout}s") from None
        except SpeechError:
            raise
        except Exception as e:
            raise SpeechError(f"Voice {direction} failed: {e}") from e

    def speak(self, text: str) -> VoiceHandle:
        self._require_support()
        self.stop_speaking()
        handle = VoiceHandle(self.platform.stop_speaking)
        self._speak_handle = handle.start(
            self._guard(handle, "speak", lambda: self.platform.speak(text), None)
        )
        logger.debug("speak_started", chars=len(text))
        return handle

    def listen(self) -> VoiceHandle:
        self._require_support()
        self.stop_listening()
        handle = VoiceHandle(self.platform.stop_listening)
        self._listen_handle = handle.start(
            self._guard(handle, "listen", self.platform.listen, self.capture_timeout)
        )
        logger.debug("listen_started", timeout=self.capture_timeout)
        return handle

    def stop_speaking(self) -> None:
        if self.is_speaking:
            self._speak_handle.cancel()
        self._speak_handle = None

    def stop_listening(self) -> None:
        if self.is_listening:
            self._listen_handle.cancel()
        self._listen_handle = None

    def set_voice_enabled(self, enabled: bool) -> None:
        if not enabled:
            self.stop_speaking()
        self.voice_enabled = enabled

    async def speak_or_skip(self, text: str) -> bool:
        """Read ``text`` aloud when voice is available; False means show it as text only."""
        if not self.voice_enabled or not self.is_supported():
            return False
        try:
            await self.speak(text).result()
            return True
        except SpeechError as e:
            logger.warning("speech_degraded_to_text", direction="speak", error=str(e))
            self.stop_speaking()
            return False

    async def listen_or_none(self) -> Optional[str]:
        """Capture one spoken answer, or None so the caller falls back to typed input."""
        if not self.is_supported():
            return None
        try:
            return await self.listen().result()
        except SpeechError as e:
            logger.warning("speech_degraded_to_text", direction="listen", error=str(e))
            self.stop_listening()
            return None

    def shutdown(self) -> None:
        self.stop_speaking()
        self.stop_listening()
