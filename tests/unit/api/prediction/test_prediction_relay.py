"""Prediction relay endpoint tests."""

import pytest
from fastapi import status
from httpx import AsyncClient

from pawrecognition.core.images import EncodedImage
from pawrecognition.utils.settings.inference import (
    InferenceSettings,
    get_inference_settings,
)
from tests.utils.constants import TEST_INFERENCE_KEY
from tests.utils.assertions import assert_error_response, assert_json_response
from tests.utils.fake_services import FakeService

PREDICTIONS = [
    {"label": "golden-retriever", "confidence": 0.91},
    {"label": "labrador-retriever", "confidence": 0.06},
]


@pytest.mark.asyncio
async def test_predict_relays_success_body(
    public_client: AsyncClient,
    fake_inference: FakeService,
    encoded_png: EncodedImage,
):
    fake_inference.respond("POST", "/predict", json={"predictions": PREDICTIONS})

    response = await public_client.post(
        "/api/predict", json={"image": encoded_png.data_uri}
    )

    data = assert_json_response(response)
    assert data == {"predictions": PREDICTIONS}


@pytest.mark.asyncio
async def test_predict_attaches_server_credential(
    public_client: AsyncClient,
    fake_inference: FakeService,
    encoded_png: EncodedImage,
):
    fake_inference.respond("POST", "/predict", json={"predictions": PREDICTIONS})

    await public_client.post(
        "/api/predict",
        json={"image": encoded_png.data_uri},
        headers={"X-API-Key": "caller-supplied-key"},
    )

    assert len(fake_inference.requests) == 1
    forwarded = fake_inference.requests[0]
    assert forwarded.headers["X-API-Key"] == TEST_INFERENCE_KEY
    assert forwarded.body == {"image": encoded_png.data_uri}


@pytest.mark.asyncio
async def test_predict_without_image_returns_400(
    public_client: AsyncClient, fake_inference: FakeService
):
    response = await public_client.post("/api/predict", json={})

    assert_error_response(response, status.HTTP_400_BAD_REQUEST, "No image provided")
    assert fake_inference.requests == []


@pytest.mark.asyncio
async def test_predict_with_empty_image_returns_400(
    public_client: AsyncClient, fake_inference: FakeService
):
    response = await public_client.post("/api/predict", json={"image": ""})

    assert_error_response(response, status.HTTP_400_BAD_REQUEST, "No image provided")
    assert fake_inference.requests == []


@pytest.mark.asyncio
async def test_predict_with_malformed_json_returns_400(public_client: AsyncClient):
    response = await public_client.post(
        "/api/predict",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert_error_response(
        response, status.HTTP_400_BAD_REQUEST, "Invalid request body"
    )


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "inference_overrides",
    [
        {"INFERENCE_API_KEY": None},
        {"INFERENCE_API_URL": None},
    ],
)
async def test_predict_without_configuration_returns_500(
    app,
    public_client: AsyncClient,
    fake_inference: FakeService,
    encoded_png: EncodedImage,
    inference_overrides: dict,
):
    settings = {
        "INFERENCE_API_URL": fake_inference.url,
        "INFERENCE_API_KEY": TEST_INFERENCE_KEY,
        **inference_overrides,
    }
    app.dependency_overrides[get_inference_settings] = lambda: InferenceSettings(
        _env_file=None, **settings
    )

    response = await public_client.post(
        "/api/predict", json={"image": encoded_png.data_uri}
    )

    assert_error_response(
        response, status.HTTP_500_INTERNAL_SERVER_ERROR, "Server configuration error"
    )
    assert fake_inference.requests == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "upstream_status, upstream_body, expected_message",
    [
        (429, {"error": "Rate limit exceeded"}, "Rate limit exceeded"),
        (401, {"error": "Invalid API key"}, "Invalid API key"),
        (500, {"error": "Model crashed"}, "Model crashed"),
        (503, {"detail": "unavailable"}, "API error: 503"),
    ],
)
async def test_predict_relays_upstream_failure_status(
    public_client: AsyncClient,
    fake_inference: FakeService,
    encoded_png: EncodedImage,
    upstream_status: int,
    upstream_body: dict,
    expected_message: str,
):
    fake_inference.respond(
        "POST", "/predict", status=upstream_status, json=upstream_body
    )

    response = await public_client.post(
        "/api/predict", json={"image": encoded_png.data_uri}
    )

    assert_error_response(response, upstream_status, expected_message)


@pytest.mark.asyncio
async def test_predict_upstream_failure_without_body(
    public_client: AsyncClient,
    fake_inference: FakeService,
    encoded_png: EncodedImage,
):
    fake_inference.respond("POST", "/predict", status=500, body=b"")

    response = await public_client.post(
        "/api/predict", json={"image": encoded_png.data_uri}
    )

    assert_error_response(response, 500, "API error: 500")


@pytest.mark.asyncio
async def test_predict_upstream_unreachable_returns_502(
    app,
    public_client: AsyncClient,
    fake_inference: FakeService,
    encoded_png: EncodedImage,
):
    unreachable_url = fake_inference.url
    await fake_inference.server.close()
    app.dependency_overrides[get_inference_settings] = lambda: InferenceSettings(
        _env_file=None,
        INFERENCE_API_URL=unreachable_url,
        INFERENCE_API_KEY=TEST_INFERENCE_KEY,
        INFERENCE_TIMEOUT=1,
    )

    response = await public_client.post(
        "/api/predict", json={"image": encoded_png.data_uri}
    )

    assert_error_response(
        response, status.HTTP_502_BAD_GATEWAY, "Prediction service unavailable"
    )


@pytest.mark.asyncio
async def test_predict_upstream_timeout_returns_502(
    app,
    public_client: AsyncClient,
    fake_inference: FakeService,
    encoded_png: EncodedImage,
):
    app.dependency_overrides[get_inference_settings] = lambda: InferenceSettings(
        _env_file=None,
        INFERENCE_API_URL=fake_inference.url,
        INFERENCE_API_KEY=TEST_INFERENCE_KEY,
        INFERENCE_TIMEOUT=1,
    )
    fake_inference.respond(
        "POST", "/predict", json={"predictions": PREDICTIONS}, delay=2
    )

    response = await public_client.post(
        "/api/predict", json={"image": encoded_png.data_uri}
    )

    assert_error_response(
        response, status.HTTP_502_BAD_GATEWAY, "Prediction service unavailable"
    )


@pytest.mark.asyncio
async def test_predict_non_json_success_returns_502(
    public_client: AsyncClient,
    fake_inference: FakeService,
    encoded_png: EncodedImage,
):
    fake_inference.respond(
        "POST", "/predict", body=b"<html>ok</html>", content_type="text/html"
    )

    response = await public_client.post(
        "/api/predict", json={"image": encoded_png.data_uri}
    )

    assert_error_response(
        response,
        status.HTTP_502_BAD_GATEWAY,
        "Invalid response from prediction service",
    )


@pytest.mark.asyncio
async def test_predict_request_too_large_returns_413(public_client: AsyncClient):
    response = await public_client.post(
        "/api/predict",
        content=b"x",
        headers={
            "Content-Type": "application/json",
            "Content-Length": str(11 * 1024 * 1024),
        },
    )

    assert_error_response(
        response,
        status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        "Request entity too large",
    )
