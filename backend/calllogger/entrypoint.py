import asyncio
import signal

import uvicorn

from calllogger.core.config import settings
from calllogger.main import app


async def serve() -> None:
    config = uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
    server = uvicorn.Server(config)

    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    for sig in (signal.SIGTERM, signal.SIGINT):
        loop.add_signal_handler(sig, stop_event.set)

    server_task = asyncio.create_task(server.serve())
    stop_task = asyncio.create_task(stop_event.wait())
    # Startup failures end server_task before any signal arrives.
    await asyncio.wait({server_task, stop_task}, return_when=asyncio.FIRST_COMPLETED)
    stop_task.cancel()
    server.should_exit = True
    await server_task


def main() -> None:
    asyncio.run(serve())


if __name__ == "__main__":
    main()
