"""백엔드 동기화 (핫 리로드 파라미터 전송)"""
import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Protocol
import httpx

from runner_configs.core.types import LiveParameters
from runner_configs.core.config import BackendConfig
from runner_configs.core.result import Result, Success, Failure
from runner_configs.core.errors import BackendUnreachable, error_to_dict
from runner_configs.core.notify import Notifier

logger = logging.getLogger(__name__)

UPDATE_CONFIG_PATH = "/update-config"


class BackendSync(Protocol):
    """실행 중인 백엔드에 파라미터를 밀어넣는 협력자"""

    def push_live_parameters(self, params: LiveParameters, port: int) -> Any: ...


class HttpBackendSync:
    """
    HTTP 백엔드 동기화

    요청은 단일 워커 스레드에서 처리되어 호출자를 막지 않으며,
    재시도는 하지 않습니다. 실패는 알림으로만 전달됩니다.
    """

    def __init__(
        self,
        config: BackendConfig,
        notifier: Notifier,
        transport: httpx.BaseTransport | None = None,
    ):
        self._config = config
        self._notifier = notifier
        self._client = httpx.Client(timeout=config.timeout, transport=transport)
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="backend-sync")

    def url_for(self, port: int) -> str:
        return f"{self._config.scheme}://{self._config.host}:{port}{UPDATE_CONFIG_PATH}"

    def push_live_parameters(
        self,
        params: LiveParameters,
        port: int,
    ) -> Future[Result[None, BackendUnreachable]]:
        """비동기 전송 (fire-and-forget)"""
        future = self._executor.submit(self.push_now, params, port)
        future.add_done_callback(_log_crash)
        return future

    def push_now(self, params: LiveParameters, port: int) -> Result[None, BackendUnreachable]:
        """동기 전송"""
        url = self.url_for(port)
        try:
            response = self._client.post(url, json=params.model_dump())
            response.raise_for_status()
        except httpx.HTTPError as e:
            error = BackendUnreachable(url=url, reason=str(e) or type(e).__name__)
            logger.warning("Live parameter push to %s failed: %s", url, error.reason)
            self._notifier.error(error_to_dict(error)["message"])
            return Failure(error)

        logger.debug("Pushed live parameters to %s", url)
        return Success(None)

    def close(self) -> None:
        """대기 중인 전송을 마치고 자원 해제"""
        self._executor.shutdown(wait=True)
        self._client.close()

    def __enter__(self) -> 'HttpBackendSync':
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _log_crash(future: Future) -> None:
    """아무도 결과를 받지 않으므로 워커 스레드의 예외는 여기서 기록"""
    if future.cancelled():
        return
    error = future.exception()
    if error is not None:
        logger.error("Live parameter push crashed: %s", error, exc_info=error)
