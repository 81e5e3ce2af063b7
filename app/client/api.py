"""HTTP client for the Kanban board API."""

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_TIMEOUT = 30


class ApiError(Exception):
    """Normalised failure of an API call; ``status`` is 0 for transport errors."""

    def __init__(self, status: int, message: str):
        self.status = status
        self.message = message
        super().__init__(f"{status}: {message}")


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text or resp.reason_phrase
    if isinstance(body, dict):
        return body.get("error") or body.get("message") or body.get("detail") or resp.reason_phrase
    return resp.reason_phrase


class ApiClient:
    """Bearer-authenticated client.

    On a 401 the client refreshes its access token once and retries the
    request; a second 401, or a failed refresh, clears the session.
    Pass ``http`` to reuse an existing ``httpx.Client`` (for example a
    FastAPI ``TestClient``).
    """

    def __init__(self, base_url: str = DEFAULT_API_URL, http: Optional[httpx.Client] = None,
                 timeout: float = DEFAULT_TIMEOUT):
        self.http = http or httpx.Client(base_url=base_url, timeout=timeout)
        self.token: Optional[str] = None
        self.refresh_token: Optional[str] = None
        self.user: Optional[dict] = None

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def _send(self, method: str, path: str, **kwargs) -> httpx.Response:
        headers = dict(kwargs.pop("headers", None) or {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        try:
            return self.http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise ApiError(0, str(e))

    def _try_refresh(self) -> bool:
        if not self.refresh_token:
            return False
        try:
            resp = self.http.post("/auth/refresh", json={"refreshToken": self.refresh_token})
        except httpx.HTTPError as e:
            logger.warning("Token refresh failed: %s", e)
            raise ApiError(0, str(e))
        if resp.status_code != 200:
            logger.info("Token refresh rejected (%s)", resp.status_code)
            return False
        data = resp.json()["data"]
        self.token = data["token"]
        self.refresh_token = data.get("refreshToken", self.refresh_token)
        return True

    def logout(self):
        self.token = None
        self.refresh_token = None
        self.user = None

    def request(self, method: str, path: str, **kwargs) -> Any:
        """Send a request and return the unwrapped ``data`` (or the whole body)."""
        resp = self._send(method, path, **kwargs)
        if resp.status_code == 401 and self.token:
            if self._try_refresh():
                resp = self._send(method, path, **kwargs)
            if resp.status_code == 401:
                self.logout()

        if resp.status_code >= 400:
            raise ApiError(resp.status_code, _error_message(resp))

        body = resp.json() if resp.content else None
        if isinstance(body, dict) and "data" in body:
            return body["data"]
        return body

    def get(self, path: str, **kwargs) -> Any:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("POST", path, json=json, **kwargs)

    def put(self, path: str, json: Any = None, **kwargs) -> Any:
        return self.request("PUT", path, json=json, **kwargs)

    def delete(self, path: str, **kwargs) -> Any:
        return self.request("DELETE", path, **kwargs)

    # Auth
    def login(self, email: str, password: str) -> dict:
        data = self.post("/auth/login", {"email": email, "password": password})
        self.token = data["token"]
        self.refresh_token = data.get("refreshToken")
        self.user = data.get("user")
        return self.user

    def me(self) -> dict:
        return self.get("/auth/me")

    # Board
    def get_board(self, project_id: int) -> dict:
        return self.get(f"/tasks/by-project/{project_id}")

    def move_task(self, task_id: int, source_column_id: int, source_index: int,
                  dest_column_id: int, dest_index: int) -> dict:
        return self.post("/tasks/move", {
            "taskId": task_id,
            "sourceColumnId": source_column_id,
            "sourceIndex": source_index,
            "destColumnId": dest_column_id,
            "destIndex": dest_index,
        })

    def reorder_columns(self, project_id: int, column_ids) -> list:
        order = [{"id": column_id, "position": index} for index, column_id in enumerate(column_ids)]
        return self.post("/columns/reorder", {"projectId": project_id, "columnOrder": order})
