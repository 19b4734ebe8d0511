from __future__ import annotations

import threading
import time
from types import SimpleNamespace

import httpx
import openai
import pytest
from gtts import gTTSError

from healthtranslate.errors import (
    PayloadTooLargeError,
    TranscriptionError,
    UpstreamConfigError,
    UpstreamError,
    ValidationError,
)
from healthtranslate.services import speech as speech_module
from healthtranslate.services import whisper as whisper_module
from healthtranslate.services.speech import GttsSpeech, OpenAISpeech
from healthtranslate.services.whisper import WhisperTranscriber


class _Recorder:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.result


def _speech_client(recorder):
    return SimpleNamespace(audio=SimpleNamespace(speech=recorder))


def test_openai_speech_returns_mp3_bytes() -> None:
    recorder = _Recorder(result=SimpleNamespace(content=b"ID3audio"))
    tts = OpenAISpeech("sk-test", client=_speech_client(recorder))

    assert tts.synthesize("Hola") == b"ID3audio"
    assert recorder.calls == [
        {"model": "tts-1", "voice": "alloy", "input": "Hola", "response_format": "mp3"}
    ]


def test_openai_speech_too_long_never_calls_api() -> None:
    recorder = _Recorder(result=SimpleNamespace(content=b"x"))
    tts = OpenAISpeech("sk-test", client=_speech_client(recorder))

    with pytest.raises(PayloadTooLargeError):
        tts.synthesize("a" * 6001)
    assert recorder.calls == []


def test_openai_speech_upstream_failure() -> None:
    request = httpx.Request("POST", "https://api.openai.com/v1/audio/speech")
    recorder = _Recorder(error=openai.APIConnectionError(request=request))
    tts = OpenAISpeech("sk-test", client=_speech_client(recorder))

    with pytest.raises(UpstreamError):
        tts.synthesize("Hola")


def test_openai_speech_missing_key() -> None:
    with pytest.raises(UpstreamConfigError):
        OpenAISpeech(None).synthesize("Hola")


class _FakeGtts:
    created: list[dict] = []

    def __init__(self, text, lang):
        if lang == "xx":
            raise ValueError("Language not supported: xx")
        self.text = text
        self.lang = lang
        _FakeGtts.created.append({"text": text, "lang": lang})

    def write_to_fp(self, fp):
        fp.write(b"ID3gtts-" + self.lang.encode())


class _BrokenGtts(_FakeGtts):
    def write_to_fp(self, fp):
        raise gTTSError("429 (Too Many Requests) from TTS API")


def test_gtts_writes_mp3_for_language() -> None:
    assert GttsSpeech(tts_factory=_FakeGtts).synthesize("Bonjour", lang="fr") == b"ID3gtts-fr"


def test_gtts_unknown_language() -> None:
    with pytest.raises(ValidationError) as exc:
        GttsSpeech(tts_factory=_FakeGtts).synthesize("Hello", lang="xx")
    assert exc.value.message == "Unsupported TTS language: xx"


def test_gtts_network_failure() -> None:
    with pytest.raises(UpstreamError):
        GttsSpeech(tts_factory=_BrokenGtts).synthesize("Hello", lang="en")


def test_gtts_long_output_is_synthesized() -> None:
    # gTTS trocea el texto; la salida del modelo no tiene tope
    _FakeGtts.created.clear()
    text = "a" * 7000
    assert GttsSpeech(tts_factory=_FakeGtts).synthesize(text, lang="en") == b"ID3gtts-en"
    assert _FakeGtts.created == [{"text": text, "lang": "en"}]


def _whisper_client(recorder):
    return SimpleNamespace(audio=SimpleNamespace(transcriptions=recorder))


def test_whisper_transcribe_trims() -> None:
    recorder = _Recorder(result=SimpleNamespace(text="  I have a headache.  "))
    stt = WhisperTranscriber("sk-test", client=_whisper_client(recorder))

    assert stt.transcribe(b"webm", "audio.webm", "audio/webm") == "I have a headache."
    assert recorder.calls[0]["model"] == "whisper-1"
    assert recorder.calls[0]["file"] == ("audio.webm", b"webm", "audio/webm")


@pytest.mark.parametrize("result", [SimpleNamespace(text=""), SimpleNamespace(text="  "), SimpleNamespace()])
def test_whisper_no_usable_text(result) -> None:
    stt = WhisperTranscriber("sk-test", client=_whisper_client(_Recorder(result=result)))
    with pytest.raises(TranscriptionError) as exc:
        stt.transcribe(b"webm")
    assert exc.value.message == "Failed to transcribe audio."


@pytest.mark.parametrize(
    "module, build, call",
    [
        (speech_module, lambda: OpenAISpeech("sk-test"), lambda a: a.synthesize("Hola")),
        (whisper_module, lambda: WhisperTranscriber("sk-test"), lambda a: a.transcribe(b"webm")),
    ],
)
def test_concurrent_requests_share_one_client(monkeypatch, module, build, call) -> None:
    built: list[object] = []
    recorder = _Recorder(result=SimpleNamespace(content=b"ID3", text="Hello"))

    def factory(api_key, timeout=None):
        time.sleep(0.05)
        sdk = SimpleNamespace(audio=SimpleNamespace(speech=recorder, transcriptions=recorder))
        built.append(sdk)
        return sdk

    monkeypatch.setattr(module, "openai_client", factory)
    adapter = build()

    threads = [threading.Thread(target=call, args=(adapter,)) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(built) == 1
    assert len(recorder.calls) == 8
