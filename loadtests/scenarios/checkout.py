"""Checkout load test scenarios.

Two stateful SequentialTaskSet journeys: a shopper placing and confirming an
order, and a shopper buying a gift-card voucher. Each user seeds its own
catalogue entries through the admin endpoints first.

Against the fake payment gateway intents are never settled, so confirmation
answers 400 with the support-contact message; both 200 and 400 count as a
healthy response.
"""

from locust import HttpUser, SequentialTaskSet, between, task

from loadtests.data_generators import customer_claims, giftcard_data, order_data, product_data
from loadtests.helpers.response import extract_error_detail
from loadtests.helpers.state import CheckoutState, PromoState
from storefront.api.auth import issue_token

CONFIRM_OK = (200, 400)


def _bearer(role: str = "customer") -> dict:
    claims = customer_claims()
    token = issue_token(
        claims["customer_id"],
        claims["email"],
        username=claims["username"],
        phone=claims["phone"],
        role=role,
    )
    return {"Authorization": f"Bearer {token}"}


class OrderCheckoutJourney(SequentialTaskSet):
    """Seed products -> Place order -> List orders -> Fetch order -> Confirm payment."""

    def on_start(self):
        self.state = CheckoutState()
        self.admin = _bearer(role="admin")
        self.shopper = _bearer()

    @task
    def seed_products(self):
        for _ in range(2):
            payload = product_data()
            with self.client.post(
                "/products",
                json=payload,
                headers=self.admin,
                catch_response=True,
                name="POST /products",
            ) as resp:
                if resp.status_code == 201:
                    self.state.product_slugs.append(payload["slug"])
                else:
                    resp.failure(f"Add product failed: {extract_error_detail(resp)}")
                    self.interrupt()

    @task
    def place_order(self):
        with self.client.post(
            "/orders",
            json=order_data(self.state.product_slugs, include_unknown=True),
            headers=self.shopper,
            catch_response=True,
            name="POST /orders",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.order_id = body["order_id"]
                self.state.transaction_id = body["client_secret"].split("_secret_")[0]
            else:
                resp.failure(f"Place order failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def list_orders(self):
        with self.client.get("/orders", headers=self.shopper, catch_response=True, name="GET /orders") as resp:
            if resp.status_code != 200:
                resp.failure(f"List orders failed: {extract_error_detail(resp)}")

    @task
    def fetch_order(self):
        with self.client.get(
            f"/orders/{self.state.order_id}",
            headers=self.shopper,
            catch_response=True,
            name="GET /orders/{id}",
        ) as resp:
            if resp.status_code != 200:
                resp.failure(f"Fetch order failed: {extract_error_detail(resp)}")

    @task
    def confirm_payment(self):
        with self.client.post(
            "/orders/confirm",
            json={"transaction_id": self.state.transaction_id},
            headers=self.shopper,
            catch_response=True,
            name="POST /orders/confirm",
        ) as resp:
            if resp.status_code in CONFIRM_OK:
                resp.success()
            else:
                resp.failure(f"Confirm order failed: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class PromoPurchaseJourney(SequentialTaskSet):
    """Seed gift card -> Issue promo -> Confirm payment -> List promos."""

    def on_start(self):
        self.state = PromoState()
        self.admin = _bearer(role="admin")
        self.shopper = _bearer()

    @task
    def seed_giftcard(self):
        payload = giftcard_data()
        with self.client.post(
            "/giftcards",
            json=payload,
            headers=self.admin,
            catch_response=True,
            name="POST /giftcards",
        ) as resp:
            if resp.status_code == 201:
                self.state.giftcard_slug = payload["slug"]
            else:
                resp.failure(f"Add giftcard failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def issue_promo(self):
        with self.client.post(
            "/promos",
            json={"giftcard": self.state.giftcard_slug},
            headers=self.shopper,
            catch_response=True,
            name="POST /promos",
        ) as resp:
            if resp.status_code == 201:
                body = resp.json()
                self.state.promo_id = body["promo_id"]
                self.state.transaction_id = body["client_secret"].split("_secret_")[0]
            else:
                resp.failure(f"Issue promo failed: {extract_error_detail(resp)}")
                self.interrupt()

    @task
    def confirm_payment(self):
        with self.client.post(
            "/promos/confirm",
            json={"transaction_id": self.state.transaction_id},
            headers=self.shopper,
            catch_response=True,
            name="POST /promos/confirm",
        ) as resp:
            if resp.status_code in CONFIRM_OK:
                resp.success()
            else:
                resp.failure(f"Confirm promo failed: {extract_error_detail(resp)}")

    @task
    def list_promos(self):
        with self.client.get("/promos", headers=self.shopper, catch_response=True, name="GET /promos") as resp:
            if resp.status_code != 200:
                resp.failure(f"List promos failed: {extract_error_detail(resp)}")

    @task
    def done(self):
        self.interrupt()


class ShopperUser(HttpUser):
    """Mostly order checkouts with occasional gift-card purchases."""

    wait_time = between(1, 3)
    tasks = {OrderCheckoutJourney: 4, PromoPurchaseJourney: 1}
