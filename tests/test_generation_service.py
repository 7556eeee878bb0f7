import logging

import pytest

from conftest import FakeGenerator, FakeStorage
from core.storage import StorageUploadError
from schemas.generation import Coordinate, GenerationFailure, GenerationRequest, GenerationSuccess
from services.generation_service import (
    GenerationRelay,
    build_prompt,
    extract_image_url,
    resolve_media_type,
)


def _request(image_bytes, media_type="image/jpeg", lat=25.1972, lng=55.2744):
    return GenerationRequest(
        coordinate=Coordinate(lat=lat, lng=lng),
        image_bytes=image_bytes,
        media_type=media_type,
    )


def test_success_returns_image_url_and_request_id(fake_storage, fake_generator):
    relay = GenerationRelay(fake_storage, fake_generator)

    result = relay.generate(_request(b"jpeg-bytes"))

    assert isinstance(result, GenerationSuccess)
    assert result.image_url == "https://fal.media/result.png"
    assert result.request_id == "req-123"
    assert fake_storage.calls == [(b"jpeg-bytes", "image/jpeg")]
    prompt, image_urls = fake_generator.calls[0]
    assert image_urls == ["https://storage.example/photo.jpg"]
    assert "25°11′50″N, 55°16′28″E" in prompt


def test_images_list_with_url_x():
    relay = GenerationRelay(FakeStorage(), FakeGenerator(data={"images": [{"url": "X"}]}))

    result = relay.generate(_request(b"data"))

    assert isinstance(result, GenerationSuccess)
    assert result.image_url == "X"


def test_empty_payload_makes_no_external_calls(fake_storage, fake_generator):
    relay = GenerationRelay(fake_storage, fake_generator)

    result = relay.generate(_request(b""))

    assert isinstance(result, GenerationFailure)
    assert result.status_code == 400
    assert fake_storage.calls == []
    assert fake_generator.calls == []


def test_storage_failure_skips_generation(fake_generator):
    storage = FakeStorage(error=StorageUploadError("quota exceeded"))
    relay = GenerationRelay(storage, fake_generator)

    result = relay.generate(_request(b"data"))

    assert isinstance(result, GenerationFailure)
    assert result.status_code == 500
    assert "quota exceeded" in result.message
    assert fake_generator.calls == []


def test_empty_images_and_no_image_field_is_failure(fake_storage):
    relay = GenerationRelay(fake_storage, FakeGenerator(data={"images": []}))

    result = relay.generate(_request(b"data"))

    assert isinstance(result, GenerationFailure)
    assert result.message == "Failed to generate image. No image generated"


def test_generator_exception_is_failure(fake_storage):
    relay = GenerationRelay(fake_storage, FakeGenerator(error=RuntimeError("model offline")))

    result = relay.generate(_request(b"data"))

    assert isinstance(result, GenerationFailure)
    assert "model offline" in result.message


def test_progress_logs_only_reach_logger(fake_storage, caplog):
    generator = FakeGenerator(logs=["step 1", "step 2"])
    relay = GenerationRelay(fake_storage, generator)

    with caplog.at_level(logging.INFO, logger="goplaces.generation"):
        result = relay.generate(_request(b"data"))

    assert isinstance(result, GenerationSuccess)
    assert generator.jobs[0].logs_consumed
    messages = [r.getMessage() for r in caplog.records if r.name == "goplaces.generation"]
    assert messages == ["step 1", "step 2"]


def test_unknown_media_type_rejected(fake_storage, fake_generator):
    relay = GenerationRelay(fake_storage, fake_generator)

    result = relay.generate(_request(b"not an image", media_type="text/plain"))

    assert isinstance(result, GenerationFailure)
    assert result.status_code == 400
    assert fake_storage.calls == []


def test_media_type_sniffed_when_generic(png_bytes):
    assert resolve_media_type(png_bytes, "application/octet-stream") == "image/png"
    assert resolve_media_type(png_bytes, None) == "image/png"
    assert resolve_media_type(b"x", "IMAGE/WEBP") == "image/webp"


@pytest.mark.parametrize("data, expected", [
    ({"images": [{"url": "a"}], "image": {"url": "b"}}, "a"),
    ({"images": [], "image": {"url": "b"}}, "b"),
    ({"image": {"url": "b"}}, "b"),
    ({"images": [{}]}, None),
    ({}, None),
    (None, None),
])
def test_extract_image_url(data, expected):
    assert extract_image_url(data) == expected


def test_build_prompt_mentions_location_and_person_only():
    prompt = build_prompt(Coordinate(lat=-33.8688, lng=151.2093))

    assert "33°52′8″S, 151°12′33″E" in prompt
    assert "Use ONLY the person from the uploaded image" in prompt
