"""Poll-with-deadline helper shared by the CDS read operations.

A request is repeated while the server answers 202 ("still processing").
Every other answer is terminal. The deadline runs as its own task and is
raced against the polling chain, so a stalled connection cannot hold the
caller past ``timeout_ms``.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Any, Awaitable, Callable

from txnative.exceptions import PollTimeoutError, RemoteError, ShapeError

RequestFactory = Callable[[], Awaitable[tuple[int, Any]]]
Validator = Callable[[Any], bool]

STATUS_OK = 200
STATUS_PROCESSING = 202
DETAIL_CHAR_LIMIT = 500


class PollState(str, Enum):
    INIT = "init"
    REQUESTING = "requesting"
    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


async def poll_with_deadline(
    request: RequestFactory,
    *,
    validate: Validator,
    timeout_ms: int = 0,
    interval_ms: int = 0,
    logger=None,
    operation_name: str = "operation",
    timeout_message: str | None = None,
) -> Any:
    """Poll ``request`` until it settles and return the validated body.

    ``timeout_ms`` of 0 disables the deadline and ``interval_ms`` of 0 polls
    again as soon as a 202 arrives.
    """

    message = timeout_message or f"{operation_name} timeout"
    loop = asyncio.get_running_loop()
    started = loop.time()
    chain = _poll_chain(
        request,
        validate=validate,
        started=started,
        timeout_ms=timeout_ms,
        interval_ms=interval_ms,
        logger=logger,
        operation_name=operation_name,
        timeout_message=message,
    )
    if timeout_ms <= 0:
        return await chain

    chain_task = asyncio.ensure_future(chain)
    timer_task = asyncio.ensure_future(asyncio.sleep(timeout_ms / 1000))
    try:
        done, _ = await asyncio.wait(
            {chain_task, timer_task}, return_when=asyncio.FIRST_COMPLETED
        )
    except asyncio.CancelledError:
        chain_task.cancel()
        timer_task.cancel()
        raise

    if chain_task in done:
        timer_task.cancel()
        return chain_task.result()

    # The late response, if any, is dropped with the cancelled chain.
    chain_task.cancel()
    if logger is not None:
        logger.warning(
            "cds_poll_timeout",
            operation=operation_name,
            state=PollState.FAILURE.value,
            timeout_ms=timeout_ms,
        )
    raise PollTimeoutError(message)


async def _poll_chain(
    request: RequestFactory,
    *,
    validate: Validator,
    started: float,
    timeout_ms: int,
    interval_ms: int,
    logger,
    operation_name: str,
    timeout_message: str,
) -> Any:
    loop = asyncio.get_running_loop()
    attempt = 0
    while True:
        attempt += 1
        status, body = await request()

        if status == STATUS_OK:
            if not validate(body):
                if logger is not None:
                    logger.warning(
                        "cds_poll_invalid_payload",
                        operation=operation_name,
                        state=PollState.FAILURE.value,
                        attempt=attempt,
                    )
                raise ShapeError(f"{operation_name}: unexpected response payload")
            if logger is not None:
                logger.debug(
                    "cds_poll_succeeded",
                    operation=operation_name,
                    state=PollState.SUCCESS.value,
                    attempt=attempt,
                )
            return body

        if status != STATUS_PROCESSING:
            detail = str(body)[:DETAIL_CHAR_LIMIT] if body else ""
            if logger is not None:
                logger.warning(
                    "cds_poll_failed",
                    operation=operation_name,
                    state=PollState.FAILURE.value,
                    attempt=attempt,
                    status_code=status,
                )
            raise RemoteError(
                f"{operation_name} failed ({status})",
                status_code=status,
                detail=detail,
            )

        elapsed_ms = (loop.time() - started) * 1000
        if timeout_ms > 0 and elapsed_ms > timeout_ms:
            raise PollTimeoutError(timeout_message)
        if logger is not None:
            logger.debug(
                "cds_poll_pending",
                operation=operation_name,
                state=PollState.PENDING.value,
                attempt=attempt,
                elapsed_ms=round(elapsed_ms),
                delay_ms=interval_ms,
            )
        if interval_ms > 0:
            await asyncio.sleep(interval_ms / 1000)


__all__ = ["PollState", "poll_with_deadline"]
