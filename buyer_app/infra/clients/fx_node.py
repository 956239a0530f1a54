# buyer_app/infra/clients/fx_node.py
import logging
import threading
from typing import Any, Dict, List, Optional

import requests

from buyer_app.core.config import settings
from buyer_app.core.errors import FXServiceError, InvalidArgumentError
from buyer_app.domain.codec import money_from_json, money_to_json, parse_decimal
from buyer_app.domain.entities.money import ExchangeRate, MoneyAmount, PurchaseResult

logger = logging.getLogger(__name__)


class HttpFXService:
    """Implementación de FXService que delega en el nodo FX vía HTTP."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = (base_url or settings.FX_SERVICE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.FX_SERVICE_TIMEOUT
        # requests no garantiza que Session sea thread-safe: una por hilo del threadpool
        self._shared_session = session
        self._local = threading.local()
        self._sessions: List[requests.Session] = []
        self._lock = threading.Lock()

    @property
    def session(self) -> requests.Session:
        if self._shared_session is not None:
            return self._shared_session
        session = getattr(self._local, "session", None)
        if session is None:
            session = requests.Session()
            self._local.session = session
            with self._lock:
                self._sessions.append(session)
        return session

    # -----------------------------
    # Operaciones del servicio
    # -----------------------------
    def query_rate(self, from_currency: str, to_currency: str) -> Optional[ExchangeRate]:
        r = self._request(
            "GET", "/rates", params={"from": from_currency, "to": to_currency}, allow_404=True
        )
        if r is None:
            return None
        data = self._json(r)
        try:
            value = parse_decimal(data.get("rate"), field="rate")
        except (InvalidArgumentError, AttributeError) as e:
            raise FXServiceError(f"Invalid rate payload from FX node: {e}")
        return ExchangeRate(from_currency=from_currency, to_currency=to_currency, value=value)

    def balance(self) -> MoneyAmount:
        r = self._request("GET", "/balance")
        return self._money(self._json(r))

    def self_issue_cash(self, amount: MoneyAmount) -> None:
        self._request("POST", "/cash", json=money_to_json(amount))
        logger.info(f"Cash issued on FX node: {amount}")

    def buy_money_amount(self, amount: MoneyAmount, currency: str) -> PurchaseResult:
        r = self._request(
            "POST", "/purchases", json={"amount": money_to_json(amount), "currency": currency}
        )
        data = self._json(r)
        if not isinstance(data, dict):
            raise FXServiceError("Invalid purchase payload from FX node.")
        missing = data.get("missing")
        if missing is None:
            return PurchaseResult()
        return PurchaseResult(missing_amount=self._money(missing))

    def close(self) -> None:
        if self._shared_session is not None:
            self._shared_session.close()
        with self._lock:
            for session in self._sessions:
                session.close()
            self._sessions.clear()

    # -----------------------------
    # Helpers HTTP
    # -----------------------------
    def _request(self, method: str, path: str, allow_404: bool = False, **kwargs) -> Optional[requests.Response]:
        url = f"{self.base_url}{path}"
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error(f"Error contacting FX node at {url}: {e}")
            raise FXServiceError(f"FX node unreachable: {e}")

        if allow_404 and r.status_code == 404:
            return None
        if r.status_code == 400:
            raise InvalidArgumentError(self._error_message(r))
        try:
            r.raise_for_status()
        except requests.HTTPError as e:
            raise FXServiceError(f"FX node error on {method} {path}: {e}")
        return r

    @staticmethod
    def _json(r: requests.Response) -> Dict[str, Any]:
        try:
            return r.json()
        except ValueError:
            raise FXServiceError("FX node returned a non-JSON payload.")

    @staticmethod
    def _money(data: Any) -> MoneyAmount:
        try:
            return money_from_json(data)
        except InvalidArgumentError as e:
            raise FXServiceError(f"Invalid money amount from FX node: {e}")

    @staticmethod
    def _error_message(r: requests.Response) -> str:
        try:
            data = r.json()
        except ValueError:
            return r.text or "Invalid request."
        if isinstance(data, dict) and data.get("message"):
            return str(data["message"])
        return "Invalid request."
