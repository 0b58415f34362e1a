# tests/test_voice.py
import asyncio
import pytest
from mock_interview.core.exceptions import SpeechError
from mock_interview.core.interfaces import VoicePlatform
from mock_interview.processors import VoiceController, VoiceHandle

class FakeVoicePlatform(VoicePlatform):
    def __init__(self, supported=True, transcript="spoken answer", block=False, fail=False):
        self.supported = supported
        self.transcript = transcript
        self.block = block
        self.fail = fail
        self.spoken = []
        self.stop_listening_calls = 0
        self.stop_speaking_calls = 0

    def is_supported(self):
        return self.supported

    async def speak(self, text):
        if self.fail:
            raise RuntimeError("audio device busy")
        if self.block:
            await asyncio.Event().wait()
        self.spoken.append(text)

    async def listen(self):
        if self.fail:
            raise RuntimeError("microphone denied")
        if self.block:
            await asyncio.Event().wait()
        return self.transcript

    def stop_listening(self):
        self.stop_listening_calls += 1

    def stop_speaking(self):
        self.stop_speaking_calls += 1

@pytest.mark.asyncio
async def test_speak_and_listen():
    platform = FakeVoicePlatform()
    voice = VoiceController(platform)
    handle = voice.speak("Hello")
    assert isinstance(handle, VoiceHandle)
    assert await handle.result() is None
    assert platform.spoken == ["Hello"]
    assert await voice.listen().result() == "spoken answer"
    assert not voice.is_speaking
    assert not voice.is_listening

@pytest.mark.asyncio
async def test_unsupported_platform_raises():
    voice = VoiceController(FakeVoicePlatform(supported=False))
    with pytest.raises(SpeechError):
        voice.speak("Hello")
    with pytest.raises(SpeechError):
        voice.listen()

@pytest.mark.asyncio
async def test_cancel_listen_handle():
    platform = FakeVoicePlatform(block=True)
    voice = VoiceController(platform)
    handle = voice.listen()
    await asyncio.sleep(0)
    assert voice.is_listening
    handle.cancel()
    assert await handle.result() is None
    assert handle.cancelled
    assert platform.stop_listening_calls == 1
    assert not voice.is_listening

@pytest.mark.asyncio
async def test_new_speak_cancels_previous():
    platform = FakeVoicePlatform(block=True)
    voice = VoiceController(platform)
    first = voice.speak("first")
    await asyncio.sleep(0)
    second = voice.speak("second")
    assert first.cancelled
    assert platform.stop_speaking_calls == 1
    assert await first.result() is None
    assert voice.is_speaking
    voice.shutdown()
    assert await second.result() is None
    assert not voice.is_speaking

@pytest.mark.asyncio
async def test_platform_failure_wrapped_in_speech_error():
    voice = VoiceController(FakeVoicePlatform(fail=True))
    with pytest.raises(SpeechError):
        await voice.listen().result()

@pytest.mark.asyncio
async def test_capture_timeout():
    platform = FakeVoicePlatform(block=True)
    voice = VoiceController(platform, capture_timeout=0.01)
    with pytest.raises(SpeechError):
        await voice.listen().result()
    assert platform.stop_listening_calls == 1

@pytest.mark.asyncio
async def test_degrades_to_text_on_failure():
    voice = VoiceController(FakeVoicePlatform(fail=True))
    assert await voice.speak_or_skip("Question?") is False
    assert await voice.listen_or_none() is None
    assert not voice.is_speaking
    assert not voice.is_listening

@pytest.mark.asyncio
async def test_degrades_when_unsupported():
    voice = VoiceController(FakeVoicePlatform(supported=False))
    assert await voice.speak_or_skip("Question?") is False
    assert await voice.listen_or_none() is None

@pytest.mark.asyncio
async def test_disabling_voice_stops_speech():
    platform = FakeVoicePlatform(block=True)
    voice = VoiceController(platform)
    handle = voice.speak("Long question")
    await asyncio.sleep(0)
    voice.set_voice_enabled(False)
    assert await handle.result() is None
    assert platform.stop_speaking_calls == 1
    assert await voice.speak_or_skip("Next question") is False

class CountingVoicePlatform(FakeVoicePlatform):
    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.speak_calls = 0

    def speak(self, text):
        self.speak_calls += 1
        return super().speak(text)

@pytest.mark.asyncio
async def test_replaced_before_start_never_reaches_platform():
    platform = CountingVoicePlatform()
    voice = VoiceController(platform)
    first = voice.speak("first")
    second = voice.speak("second")
    assert first.cancelled
    assert not first.started
    assert await first.result() is None
    assert await second.result() is None
    assert platform.speak_calls == 1
    assert platform.spoken == ["second"]
    assert platform.stop_speaking_calls == 0

@pytest.mark.asyncio
async def test_cancel_before_start_skips_platform_stop():
    platform = FakeVoicePlatform(block=True)
    voice = VoiceController(platform)
    handle = voice.listen()
    handle.cancel()
    assert await handle.result() is None
    assert platform.stop_listening_calls == 0
