import pytest
import requests

from services.api_clients.pexels_client import (
    FALLBACK_IMAGES, MAX_REDIRECTS, SIZE_PARAMS, PexelsClient, ProxyError, is_allowed_host,
)


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, content=b"", headers=None):
        self.status_code = status_code
        self._json = json_data
        self.content = content
        self.headers = headers or {}

    def json(self):
        if self._json is None:
            raise ValueError("No JSON")
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class FakeSession:
    """Hands out queued responses and records every request."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


def test_no_api_key_uses_fallback_without_network():
    session = FakeSession()
    assert PexelsClient(api_key="", session=session).search_city_images("Leeds") == FALLBACK_IMAGES
    assert session.calls == []


def test_search_returns_sized_landscape_photos():
    photos = {"photos": [{"src": {"large": "https://images.pexels.com/photos/1/a.jpeg"}},
                         {"src": {"large": "https://images.pexels.com/photos/2/b.jpeg?x=1"}},
                         {"src": {}}]}
    session = FakeSession(FakeResponse(json_data=photos))
    images = PexelsClient(api_key="key", session=session).search_city_images("Manchester")
    assert images == [
        f"https://images.pexels.com/photos/1/a.jpeg?{SIZE_PARAMS}",
        f"https://images.pexels.com/photos/2/b.jpeg?x=1&{SIZE_PARAMS}",
    ]
    url, kwargs = session.calls[0]
    assert url.endswith("/search")
    assert kwargs["params"] == {"query": "manchester uk", "per_page": 3, "orientation": "landscape"}
    assert kwargs["headers"] == {"Authorization": "key"}


@pytest.mark.parametrize("response", [
    requests.ConnectionError("down"),
    FakeResponse(status_code=500),
    FakeResponse(json_data={"photos": []}),
    FakeResponse(json_data=None),
])
def test_search_failures_fall_back(response):
    client = PexelsClient(api_key="key", session=FakeSession(response))
    assert client.search_city_images("york") == FALLBACK_IMAGES


@pytest.mark.parametrize("hostname, allowed", [
    ("images.pexels.com", True),
    ("IMAGES.UNSPLASH.COM", True),
    ("cdn.images.pexels.com", True),
    ("pexels.com.evil.net", False),
    ("notpexels.com", False),
    ("", False),
    (None, False),
])
def test_is_allowed_host(hostname, allowed):
    assert is_allowed_host(hostname) is allowed


@pytest.mark.parametrize("url", ["", "ftp://images.pexels.com/a.jpg", "not a url"])
def test_fetch_rejects_invalid_urls(url):
    with pytest.raises(ProxyError) as exc:
        PexelsClient(api_key="", session=FakeSession()).fetch_image(url)
    assert exc.value.status == 400


def test_fetch_rejects_unlisted_domain():
    session = FakeSession()
    with pytest.raises(ProxyError) as exc:
        PexelsClient(api_key="", session=session).fetch_image("https://example.com/a.jpg")
    assert exc.value.status == 403
    assert session.calls == []


def test_fetch_follows_relative_redirects():
    session = FakeSession(
        FakeResponse(status_code=302, headers={"Location": "/photos/9/final.jpeg"}),
        FakeResponse(content=b"png-bytes", headers={"Content-Type": "image/png"}),
    )
    content, content_type = PexelsClient(api_key="", session=session).fetch_image(
        "https://images.pexels.com/start")
    assert (content, content_type) == (b"png-bytes", "image/png")
    assert session.calls[1][0] == "https://images.pexels.com/photos/9/final.jpeg"
    assert session.calls[0][1]["allow_redirects"] is False


@pytest.mark.parametrize("location", [
    "http://169.254.169.254/latest/meta-data",
    "https://localhost/admin",
    "file:///etc/passwd",
])
def test_fetch_refuses_redirect_off_the_allow_list(location):
    session = FakeSession(
        FakeResponse(status_code=302, headers={"Location": location}),
        FakeResponse(content=b"SECRET"),
    )
    with pytest.raises(ProxyError) as exc:
        PexelsClient(api_key="", session=session).fetch_image("https://images.unsplash.com/x")
    assert exc.value.status == 403
    assert len(session.calls) == 1


def test_fetch_defaults_content_type():
    session = FakeSession(FakeResponse(content=b"data"))
    assert PexelsClient(api_key="", session=session).fetch_image("https://images.pexels.com/a")[1] == "image/jpeg"


def test_fetch_gives_up_after_too_many_redirects():
    redirect = FakeResponse(status_code=301, headers={"Location": "https://images.pexels.com/loop"})
    session = FakeSession(*[redirect] * (MAX_REDIRECTS + 1))
    with pytest.raises(ProxyError, match="Too many redirects") as exc:
        PexelsClient(api_key="", session=session).fetch_image("https://images.pexels.com/loop")
    assert exc.value.status == 503
    assert len(session.calls) == MAX_REDIRECTS + 1


@pytest.mark.parametrize("response", [FakeResponse(status_code=404), requests.Timeout("slow")])
def test_fetch_upstream_failure_is_503(response):
    with pytest.raises(ProxyError) as exc:
        PexelsClient(api_key="", session=FakeSession(response)).fetch_image("https://images.pexels.com/a")
    assert exc.value.status == 503
