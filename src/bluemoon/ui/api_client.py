"""Typed HTTP client for the Blue Moon backend.

Only imports from ``bluemoon.api.schemas``, never Streamlit widgets.
Instantiate via ``get_client()`` which caches per Streamlit session.
"""
from __future__ import annotations

from typing import Any, TypeVar

import httpx
import streamlit as st
from pydantic import BaseModel, ValidationError

from bluemoon.config import settings
from bluemoon.domain.exceptions import APIError, SessionRequiredError, error_message  # noqa: F401 (re-exported for pages)
from bluemoon.logging import logger
from bluemoon.api.schemas.statistics import DashboardStats
from bluemoon.api.schemas.households import HouseholdRead, HouseholdFeeStatus
from bluemoon.api.schemas.residents import ResidentRead
from bluemoon.api.schemas.fees import FeeRead
from bluemoon.api.schemas.payments import PaymentRead, PaymentSearchQuery
from bluemoon.api.schemas.users import LoginRequest, SessionUser, UserRead
from bluemoon.ui.state import CLIENT_KEY

M = TypeVar("M", bound=BaseModel)


class BlueMoonClient:
    """One method per backend endpoint.  All return pure Pydantic DTOs."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        *,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._client = httpx.Client(
            base_url=base_url or settings.API_URL,
            timeout=timeout or settings.REQUEST_TIMEOUT,
            transport=transport,
        )
        self.token = token

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _raise_for_status(self, resp: httpx.Response) -> None:
        if resp.is_success:
            return
        detail = ""
        try:
            body = resp.json()
            if isinstance(body, dict):
                detail = body.get("message") or body.get("detail") or ""
        except ValueError:
            pass
        if detail:
            raise APIError(resp.status_code, str(detail))
        raise APIError(resp.status_code, resp.text or resp.reason_phrase, server_message=False)

    def _request(self, method: str, path: str, *, auth: bool = True, **kwargs: Any) -> Any:
        headers = kwargs.pop("headers", {})
        if auth:
            if not self.token:
                raise SessionRequiredError("Not logged in")
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            resp = self._client.request(method, path, headers=headers, **kwargs)
        except httpx.TransportError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise APIError(None, str(exc), server_message=False) from exc
        self._raise_for_status(resp)
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            logger.error("%s %s returned a non-JSON body", method, path)
            raise APIError(resp.status_code, "Invalid JSON response", server_message=False) from exc

    @staticmethod
    def _parse(model: type[M], data: Any) -> M:
        """Validate one backend document; a malformed payload surfaces as ``APIError``."""
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            logger.error("Unexpected %s payload: %s", model.__name__, exc)
            raise APIError(None, str(exc), server_message=False) from exc

    @classmethod
    def _parse_list(cls, model: type[M], data: Any) -> list[M]:
        if not isinstance(data, list):
            raise APIError(None, f"Expected a list of {model.__name__}", server_message=False)
        return [cls._parse(model, item) for item in data]

    @staticmethod
    def _unwrap(body: Any) -> Any:
        # /users endpoints answer with {success, data, message}
        if isinstance(body, dict) and "success" in body:
            if not body["success"]:
                raise APIError(400, body.get("message") or "", server_message=bool(body.get("message")))
            return body.get("data")
        return body

    # ------------------------------------------------------------------
    # Auth
    # ------------------------------------------------------------------

    def login(self, username: str, password: str) -> SessionUser:
        body = self._request(
            "POST", "/api/users/login", auth=False,
            json=LoginRequest(username=username, password=password).model_dump(),
        )
        session = self._parse(SessionUser, self._unwrap(body))
        self.token = session.token
        return session

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def get_dashboard_stats(self) -> DashboardStats:
        return self._parse(DashboardStats, self._request("GET", "/api/statistics/dashboard"))

    # ------------------------------------------------------------------
    # Households
    # ------------------------------------------------------------------

    def list_households(self) -> list[HouseholdRead]:
        body = self._request("GET", "/api/households")
        return self._parse_list(HouseholdRead, body)

    def get_household(self, household_id: str) -> HouseholdRead:
        return self._parse(HouseholdRead, self._request("GET", f"/api/households/{household_id}"))

    def create_household(self, payload: dict) -> HouseholdRead:
        return self._parse(HouseholdRead, self._request("POST", "/api/households", json=payload))

    def update_household(self, household_id: str, payload: dict) -> HouseholdRead:
        return self._parse(
            HouseholdRead, self._request("PUT", f"/api/households/{household_id}", json=payload),
        )

    def delete_household(self, household_id: str) -> None:
        self._request("DELETE", f"/api/households/{household_id}")

    def list_household_residents(self, household_id: str) -> list[ResidentRead]:
        body = self._request("GET", f"/api/households/{household_id}/residents")
        return self._parse_list(ResidentRead, body)

    def get_household_fee_status(self, household_id: str) -> HouseholdFeeStatus:
        return self._parse(
            HouseholdFeeStatus, self._request("GET", f"/api/payments/household/{household_id}/fee-status"),
        )

    # ------------------------------------------------------------------
    # Residents
    # ------------------------------------------------------------------

    def list_residents(self) -> list[ResidentRead]:
        return self._parse_list(ResidentRead, self._request("GET", "/api/residents"))

    def get_resident(self, resident_id: str) -> ResidentRead:
        return self._parse(ResidentRead, self._request("GET", f"/api/residents/{resident_id}"))

    def create_resident(self, payload: dict) -> ResidentRead:
        return self._parse(ResidentRead, self._request("POST", "/api/residents", json=payload))

    def update_resident(self, resident_id: str, payload: dict) -> ResidentRead:
        return self._parse(
            ResidentRead, self._request("PUT", f"/api/residents/{resident_id}", json=payload),
        )

    def delete_resident(self, resident_id: str) -> None:
        self._request("DELETE", f"/api/residents/{resident_id}")

    # ------------------------------------------------------------------
    # Fees
    # ------------------------------------------------------------------

    def list_fees(self) -> list[FeeRead]:
        return self._parse_list(FeeRead, self._request("GET", "/api/fees"))

    def get_fee(self, fee_id: str) -> FeeRead:
        return self._parse(FeeRead, self._request("GET", f"/api/fees/{fee_id}"))

    def create_fee(self, payload: dict) -> FeeRead:
        return self._parse(FeeRead, self._request("POST", "/api/fees", json=payload))

    def update_fee(self, fee_id: str, payload: dict) -> FeeRead:
        return self._parse(FeeRead, self._request("PUT", f"/api/fees/{fee_id}", json=payload))

    def delete_fee(self, fee_id: str) -> None:
        self._request("DELETE", f"/api/fees/{fee_id}")

    # ------------------------------------------------------------------
    # Payments
    # ------------------------------------------------------------------

    def list_payments(self) -> list[PaymentRead]:
        return self._parse_list(PaymentRead, self._request("GET", "/api/payments"))

    def get_payment(self, payment_id: str) -> PaymentRead:
        return self._parse(PaymentRead, self._request("GET", f"/api/payments/{payment_id}"))

    def create_payment(self, payload: dict) -> PaymentRead:
        return self._parse(PaymentRead, self._request("POST", "/api/payments", json=payload))

    def refund_payment(self, payment_id: str) -> None:
        self._request("PUT", f"/api/payments/{payment_id}/refund", json={})

    def search_payments(self, query: PaymentSearchQuery) -> list[PaymentRead]:
        body = self._request("GET", "/api/payments/search", params=query.to_params())
        return self._parse_list(PaymentRead, body)

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def list_users(self) -> list[UserRead]:
        body = self._unwrap(self._request("GET", "/api/users"))
        return self._parse_list(UserRead, body)

    def get_user(self, user_id: str) -> UserRead:
        return self._parse(UserRead, self._unwrap(self._request("GET", f"/api/users/{user_id}")))

    def create_user(self, payload: dict) -> None:
        self._unwrap(self._request("POST", "/api/users", json=payload))

    def update_user(self, user_id: str, payload: dict) -> None:
        self._unwrap(self._request("PUT", f"/api/users/{user_id}", json=payload))

    def delete_user(self, user_id: str) -> None:
        self._unwrap(self._request("DELETE", f"/api/users/{user_id}"))

    # ------------------------------------------------------------------
    # Health
    # ------------------------------------------------------------------

    def health(self) -> dict:
        return self._request("GET", "/health", auth=False) or {}

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "BlueMoonClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


# ------------------------------------------------------------------
# Streamlit helper: one client per session
# ------------------------------------------------------------------

def get_client() -> BlueMoonClient:
    """Return a cached ``BlueMoonClient`` for the current Streamlit session."""
    if CLIENT_KEY not in st.session_state:
        base_url = st.session_state.get("bluemoon_api_url", settings.API_URL)
        st.session_state[CLIENT_KEY] = BlueMoonClient(base_url=base_url)
    client: BlueMoonClient = st.session_state[CLIENT_KEY]
    client.token = st.session_state.get("token")
    return client
