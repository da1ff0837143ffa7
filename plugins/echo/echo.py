"""Echo plugin: minimal server plugin to verify the host mounts routes and runs exit hooks."""

import logging

logger = logging.getLogger(__name__)

info = {
    "id": "echo",
    "name": "Echo",
    "description": "Returns whatever it is sent. Useful for checking that plugins load.",
}

_requests = 0


async def init(registrar) -> None:
    @registrar.get("/ping")
    async def ping() -> dict:
        return {"pong": True}

    @registrar.post("/echo")
    async def echo(payload: dict) -> dict:
        global _requests
        _requests += 1
        return payload


async def exit() -> None:
    logger.info("Echo plugin served %d request(s)", _requests)
