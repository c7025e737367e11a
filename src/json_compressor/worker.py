"""Worker endpoint and the isolated worker context used in delegated mode."""

import logging
import threading
from enum import Enum
from typing import Any, Callable, Dict, Optional

from .engine import TransformEngine
from .types import ErrorType, ProcessingError, TransformRequest, TransformResult

logger = logging.getLogger(__name__)


class WorkerState(Enum):
    """Lifecycle of a worker endpoint."""
    IDLE = "idle"
    PROCESSING = "processing"
    RESPONDED = "responded"


class WorkerEndpoint:
    """
    Request handler that runs inside a worker context.

    Turns one request message into exactly one response message:
    ``{"success": True, "result": ...}`` or ``{"success": False, "error": ...}``.
    """

    def __init__(self, engine: Optional[TransformEngine] = None,
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.engine = engine or TransformEngine(logger=self.logger)
        self.state = WorkerState.IDLE

    def handle(self, message: Any) -> Dict[str, Any]:
        """
        Handle a request message.

        Args:
            message: ``{"action": "compress" | "decompress", "data": str}``

        Returns:
            Response message
        """
        self.state = WorkerState.PROCESSING
        try:
            request = TransformRequest.from_message(message)
        except ProcessingError as e:
            result = TransformResult.failure(e.error_type, str(e))
        else:
            result = self.engine.execute(request)

        self.state = WorkerState.RESPONDED
        return result.to_message()


def serve_request(connection) -> None:
    """
    Serve a single request over a connection, then close it.

    Args:
        connection: Worker end of a ``multiprocessing.Pipe``
    """
    endpoint = WorkerEndpoint()
    try:
        message = connection.recv()
        connection.send(endpoint.handle(message))
    except (EOFError, OSError) as e:
        # the dispatcher abandoned the request
        logger.debug(f"Worker channel closed before the response was delivered: {e}")
    finally:
        connection.close()


class WorkerContext:
    """
    One isolated worker serving one request.

    The ``thread`` backend runs :func:`serve_request` on a daemon thread, the
    ``process`` backend in a separate process. Both talk to the dispatcher
    over a duplex ``multiprocessing.Pipe``.
    """

    BACKENDS = ("thread", "process")

    def __init__(self, backend: str = "thread",
                 target: Callable[[Any], None] = serve_request,
                 join_timeout: float = 1.0,
                 logger: Optional[logging.Logger] = None):
        """
        Initialize the worker context.

        Args:
            backend: "thread" or "process"
            target: Function serving one request on the worker end of the pipe
            join_timeout: Seconds to wait for the worker to exit on teardown
            logger: Optional logger instance
        """
        self.backend = backend
        self.target = target
        self.join_timeout = join_timeout
        self.logger = logger or logging.getLogger(__name__)
        self._connection = None
        self._worker = None
        self._lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    def start(self) -> None:
        """
        Spawn the worker.

        Raises:
            ProcessingError: ENVIRONMENT_UNSUPPORTED if no worker can be started
        """
        if self.backend not in self.BACKENDS:
            raise ProcessingError(f"Unsupported worker backend: {self.backend}",
                                  ErrorType.ENVIRONMENT_UNSUPPORTED)

        child_connection = None
        try:
            import multiprocessing

            self._connection, child_connection = multiprocessing.Pipe()
            if self.backend == "thread":
                self._worker = threading.Thread(
                    target=self.target,
                    args=(child_connection,),
                    name="json-compressor-worker",
                    daemon=True
                )
            else:
                self._worker = multiprocessing.get_context().Process(
                    target=self.target,
                    args=(child_connection,),
                    name="json-compressor-worker",
                    daemon=True
                )
            self._worker.start()
        except Exception as e:
            self.logger.error(f"Could not start {self.backend} worker: {e}")
            if child_connection is not None:
                child_connection.close()
            if self._connection is not None:
                self._connection.close()
            self._connection = None
            self._worker = None
            raise ProcessingError(f"Workers are not supported in this environment: {e}",
                                  ErrorType.ENVIRONMENT_UNSUPPORTED)

        if self.backend == "process":
            # the child holds its own copy; closing ours lets recv() see EOF
            child_connection.close()

        self.logger.debug(f"Started {self.backend} worker {self._worker.name}")

    def exchange(self, message: Dict[str, Any]) -> Any:
        """
        Send one request message and block until the response arrives.

        Raises:
            EOFError: If the worker closed the channel without responding
            OSError: If the channel failed
        """
        if self._connection is None:
            raise OSError("Worker context is not running")
        self._connection.send(message)
        return self._connection.recv()

    def interrupt(self) -> None:
        """
        Ask the worker to stop without waiting for it.

        A process worker is sent SIGTERM, which also ends a pending
        :meth:`exchange` with EOFError. Threads cannot be stopped and run
        until their request is served.
        """
        with self._lock:
            worker = self._worker
            if worker is None:
                return
            if self.backend == "process" and worker.is_alive():
                worker.terminate()
            else:
                self.logger.debug(f"Leaving {self.backend} worker {worker.name} to finish on its own")

    def terminate(self) -> None:
        """Tear the worker down and release the channel. Blocks for up to ``join_timeout``."""
        with self._lock:
            worker, self._worker = self._worker, None
            connection, self._connection = self._connection, None

        if worker is not None:
            if self.backend == "process":
                if worker.is_alive():
                    worker.terminate()
                worker.join(self.join_timeout)
            else:
                worker.join(self.join_timeout)

            if worker.is_alive():
                # a pending recv() may still be reading from the channel
                self.logger.warning(f"Abandoning {self.backend} worker {worker.name} that is still running")
                return

            if self.backend == "process":
                worker.close()

        if connection is not None:
            connection.close()

    def __enter__(self) -> "WorkerContext":
        self.start()
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.terminate()
