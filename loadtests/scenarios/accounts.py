"""Account load test scenarios.

Registration, login and token verification. Registration and login are
rate limited per client, so run the server with ``RATE_LIMIT_ENABLED=0``
when driving these journeys from a single load generator.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import PASSWORD, registration_data
from loadtests.helpers.state import ShopperState


class NewShopperJourney(SequentialTaskSet):
    """Register -> Verify token -> Log in again -> Verify the fresh token."""

    def on_start(self):
        self.state = ShopperState()

    @task
    def register(self):
        payload = registration_data()
        with self.client.post(
            "/users/register",
            json=payload,
            catch_response=True,
            name="POST /users/register",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.token = body["token"]
                self.state.user_id = body["user"]["id"]
                self.state.email = payload["email"]
            else:
                resp.failure(f"Register failed: {resp.status_code}")
                self.interrupt()

    @task
    def verify_token(self):
        self._verify()

    @task
    def login(self):
        with self.client.post(
            "/users/login",
            json={"email": self.state.email, "password": PASSWORD},
            catch_response=True,
            name="POST /users/login",
        ) as resp:
            if resp.status_code == 200:
                self.state.token = resp.json()["token"]
            else:
                resp.failure(f"Login failed: {resp.status_code}")
                self.interrupt()

    @task
    def verify_fresh_token(self):
        self._verify()
        self.interrupt()

    def _verify(self):
        with self.client.post(
            "/auth/verify",
            headers=self.state.headers,
            catch_response=True,
            name="POST /auth/verify",
        ) as resp:
            if resp.status_code == 200:
                if resp.json()["claims"].get("id") != self.state.user_id:
                    resp.failure("Token claims do not match the registered user")
            else:
                resp.failure(f"Verify token failed: {resp.status_code}")


class BadLoginJourney(SequentialTaskSet):
    """A wrong password must be rejected with 401."""

    @task
    def wrong_password(self):
        with self.client.post(
            "/users/login",
            json={"email": "nobody@example.com", "password": "not-the-password"},
            catch_response=True,
            name="POST /users/login (rejected)",
        ) as resp:
            if resp.status_code == 401:
                resp.success()
            else:
                resp.failure(f"Expected 401, got {resp.status_code}")
        self.interrupt()


class AccountsUser(HttpUser):
    tasks = {NewShopperJourney: 4, BadLoginJourney: 1}
    wait_time = between(1.0, 3.0)
