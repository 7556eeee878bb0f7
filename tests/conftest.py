import io

import pytest
from PIL import Image

from config.settings import Settings
from schemas.generation import GenerationLog


class FakeStorage:
    def __init__(self, url="https://storage.example/photo.jpg", error=None):
        self.url = url
        self.error = error
        self.calls = []

    def upload(self, data, content_type):
        self.calls.append((data, content_type))
        if self.error is not None:
            raise self.error
        return self.url


class FakeJob:
    def __init__(self, data, request_id="req-123", logs=()):
        self._data = data
        self.request_id = request_id
        self._logs = list(logs)
        self.logs_consumed = False

    def logs(self):
        for message in self._logs:
            yield GenerationLog(message=message)
        self.logs_consumed = True

    def result(self):
        return self._data


class FakeGenerator:
    def __init__(self, data=None, logs=(), error=None):
        self.data = data if data is not None else {"images": [{"url": "https://fal.media/result.png"}]}
        self.logs = logs
        self.error = error
        self.calls = []
        self.jobs = []

    def submit(self, prompt, image_urls):
        self.calls.append((prompt, image_urls))
        if self.error is not None:
            raise self.error
        job = FakeJob(self.data, logs=self.logs)
        self.jobs.append(job)
        return job


@pytest.fixture
def png_bytes():
    buffer = io.BytesIO()
    Image.new("RGB", (4, 4), color=(200, 30, 30)).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def settings(tmp_path):
    return Settings(fal_key="test-key", upload_dir=str(tmp_path / "uploads"))


@pytest.fixture
def fake_storage():
    return FakeStorage()


@pytest.fixture
def fake_generator():
    return FakeGenerator()
