from __future__ import annotations

import pytest

from healthtranslate import create_app
from healthtranslate.services import Services


class FakeLLM:
    def __init__(self, reply: str = "Hola", error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.prompts: list[str] = []

    def generate(self, prompt: str, model_id=None) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeSpeech:
    def __init__(self, audio: bytes = b"ID3fake-mp3"):
        self.audio = audio
        self.calls: list[tuple] = []

    def synthesize(self, text: str, **kwargs) -> bytes:
        self.calls.append((text, kwargs))
        return self.audio


class FakeTranscriber:
    def __init__(self, text: str = "Hello doctor", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls: list[tuple] = []

    def transcribe(self, audio: bytes, filename: str = "audio.webm", mimetype: str = "audio/webm") -> str:
        self.calls.append((audio, filename, mimetype))
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def services() -> Services:
    return Services(
        llm=FakeLLM(),
        speech=FakeSpeech(),
        gtts=FakeSpeech(audio=b"ID3gtts"),
        transcriber=FakeTranscriber(),
    )


@pytest.fixture
def app(services):
    return create_app({"TESTING": True, "OPENAI_API_KEY": None, "GOOGLE_API_KEY": None}, services=services)


@pytest.fixture
def client(app):
    return app.test_client()
