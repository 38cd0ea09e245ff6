"""Image encoding and download tests."""

import io
from pathlib import Path

import pytest

from pawrecognition.client.encoding import encode, fetch_and_encode, sniff_media_type
from pawrecognition.core.errors import ImageReadError, NetworkError
from tests.utils.fake_services import FakeService


def test_sniff_media_type_recognizes_formats(png_bytes: bytes, jpeg_bytes: bytes):
    assert sniff_media_type(png_bytes) == "image/png"
    assert sniff_media_type(jpeg_bytes) == "image/jpeg"
    assert sniff_media_type(b"definitely not an image") is None


@pytest.mark.asyncio
async def test_encode_bytes_sniffs_media_type(png_bytes: bytes):
    image = await encode(png_bytes)

    assert image.media_type == "image/png"
    assert image.decode() == png_bytes


@pytest.mark.asyncio
async def test_encode_declared_media_type_wins(png_bytes: bytes):
    image = await encode(png_bytes, "image/webp")

    assert image.media_type == "image/webp"


@pytest.mark.asyncio
async def test_encode_path_guesses_from_file_name(tmp_path: Path):
    path = tmp_path / "dog.gif"
    path.write_bytes(b"unrecognizable bytes")

    image = await encode(path)

    assert image.media_type == "image/gif"
    assert image.decode() == b"unrecognizable bytes"


@pytest.mark.asyncio
async def test_encode_unknown_content_falls_back_to_octet_stream():
    image = await encode(io.BytesIO(b"unrecognizable bytes"))

    assert image.media_type == "application/octet-stream"


@pytest.mark.asyncio
async def test_encode_binary_file_object(jpeg_bytes: bytes):
    image = await encode(io.BytesIO(jpeg_bytes))

    assert image.media_type == "image/jpeg"
    assert image.size == len(jpeg_bytes)


@pytest.mark.asyncio
async def test_encode_missing_file_raises_read_error(tmp_path: Path):
    with pytest.raises(ImageReadError) as exc_info:
        await encode(tmp_path / "missing.png")

    assert exc_info.value.message == "Failed to read image file"


@pytest.mark.asyncio
async def test_encode_text_mode_file_raises_read_error(tmp_path: Path):
    path = tmp_path / "dog.txt"
    path.write_text("woof")

    with path.open("r") as handle:
        with pytest.raises(ImageReadError):
            await encode(handle)


@pytest.mark.asyncio
async def test_fetch_and_encode_uses_declared_content_type(
    fake_unsplash: FakeService, png_bytes: bytes
):
    fake_unsplash.respond(
        "GET", "/dog", body=png_bytes, content_type="Image/PNG; charset=binary"
    )

    image = await fetch_and_encode(f"{fake_unsplash.url}/dog")

    assert image.media_type == "image/png"
    assert image.decode() == png_bytes


@pytest.mark.asyncio
async def test_fetch_and_encode_http_error(fake_unsplash: FakeService):
    fake_unsplash.respond("GET", "/dog", status=404, body=b"missing")

    with pytest.raises(NetworkError) as exc_info:
        await fetch_and_encode(f"{fake_unsplash.url}/dog")

    assert exc_info.value.message == "Failed to fetch image: HTTP 404"


@pytest.mark.asyncio
async def test_fetch_and_encode_unreachable(fake_unsplash: FakeService):
    url = f"{fake_unsplash.url}/dog"
    await fake_unsplash.server.close()

    with pytest.raises(NetworkError) as exc_info:
        await fetch_and_encode(url, timeout=1)

    assert exc_info.value.message == "Failed to fetch image"


@pytest.mark.asyncio
async def test_encode_is_deterministic(jpeg_bytes: bytes):
    first = await encode(jpeg_bytes)
    second = await encode(io.BytesIO(jpeg_bytes))

    assert first.data_uri == second.data_uri
