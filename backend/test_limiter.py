from limiter import RateLimiter, limiter


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_requests_within_the_window_are_counted():
    clock = FakeClock()
    rl = RateLimiter(max_requests=3, window_seconds=60, clock=clock)

    assert [rl.hit("1.1.1.1") for _ in range(4)] == [True, True, True, False]


def test_window_resets_after_it_elapses():
    clock = FakeClock()
    rl = RateLimiter(max_requests=1, window_seconds=60, clock=clock)

    assert rl.hit("1.1.1.1")
    assert not rl.hit("1.1.1.1")

    clock.now += 60
    assert rl.hit("1.1.1.1")


def test_clients_are_counted_separately():
    rl = RateLimiter(max_requests=1, window_seconds=60, clock=FakeClock())

    assert rl.hit("1.1.1.1")
    assert rl.hit("2.2.2.2")
    assert not rl.hit("1.1.1.1")


def test_clear_expired_drops_old_windows():
    clock = FakeClock()
    rl = RateLimiter(max_requests=1, window_seconds=60, clock=clock)
    rl.hit("1.1.1.1")
    clock.now += 30
    rl.hit("2.2.2.2")
    clock.now += 30

    rl.clear_expired()

    assert not rl.hit("2.2.2.2")
    assert rl.hit("1.1.1.1")


def test_auth_routes_are_rate_limited(client, monkeypatch):
    monkeypatch.setattr(limiter, "max_requests", 2)

    for _ in range(2):
        assert client.post("/api/auth/validate-token", json={"token": "123456"}).status_code == 404

    response = client.post("/api/auth/validate-token", json={"token": "123456"})
    assert response.status_code == 429
    assert response.json() == {"error": "Has alcanzado el límite de peticiones"}


def test_budget_routes_are_not_rate_limited(client, auth_headers, monkeypatch):
    monkeypatch.setattr(limiter, "max_requests", 0)

    assert client.get("/api/budgets", headers=auth_headers).status_code == 200
