class FakeRedis:
    def __init__(self):
        self.counts: dict[str, int] = {}
        self.expiries: dict[str, int] = {}

    def incr(self, key):
        self.counts[key] = self.counts.get(key, 0) + 1
        return self.counts[key]

    def expire(self, key, seconds):
        self.expiries[key] = seconds


def _submit(client, headers, book_id, day):
    return client.post(
        "/borrow-requests",
        json={"book_id": book_id, "start_date": day, "end_date": day},
        headers=headers,
    )


def test_borrow_requests_are_rate_limited_per_user(
    client, reader_headers, reader, book, configure, monkeypatch
):
    fake = FakeRedis()
    monkeypatch.setattr("booklend.api.rate_limit.get_redis", lambda url: fake)
    configure(
        rate_limit_enabled=True,
        rate_limit_borrow_requests_per_window=2,
        rate_limit_window_seconds=3600,
    )

    assert _submit(client, reader_headers, book.id, "2024-09-01").status_code == 200
    assert _submit(client, reader_headers, book.id, "2024-09-02").status_code == 200

    resp = _submit(client, reader_headers, book.id, "2024-09-03")
    assert resp.status_code == 429
    assert 1 <= int(resp.headers["Retry-After"]) <= 3600

    (key,) = fake.counts
    assert key.startswith(f"rl:borrow_requests:{reader.id}:")
    assert fake.expiries[key] == 3600


def test_rate_limiter_fails_open_without_redis(
    client, reader_headers, book, configure, monkeypatch
):
    monkeypatch.setattr("booklend.api.rate_limit.get_redis", lambda url: None)
    configure(rate_limit_enabled=True, rate_limit_borrow_requests_per_window=1)

    for day in ("2024-09-01", "2024-09-02", "2024-09-03"):
        assert _submit(client, reader_headers, book.id, day).status_code == 200


def test_rate_limiter_disabled_by_setting(client, reader_headers, book, monkeypatch):
    def unexpected(url):
        raise AssertionError("redis should not be consulted")

    monkeypatch.setattr("booklend.api.rate_limit.get_redis", unexpected)
    assert _submit(client, reader_headers, book.id, "2024-09-01").status_code == 200


def test_rate_limiter_connects_to_configured_redis_url(
    client, reader_headers, book, configure, monkeypatch
):
    seen: list[str] = []

    def fake_get_redis(url):
        seen.append(url)
        return None

    monkeypatch.setattr("booklend.api.rate_limit.get_redis", fake_get_redis)
    configure(rate_limit_enabled=True, redis_url="redis://cache.internal:6380/3")

    assert _submit(client, reader_headers, book.id, "2024-09-01").status_code == 200
    assert seen == ["redis://cache.internal:6380/3"]
