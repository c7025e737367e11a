"""Tests for the execution dispatcher."""

import asyncio
import json
import threading
import time
from types import SimpleNamespace

import pytest

from json_compressor import worker as worker_module
from json_compressor.dispatcher import ExecutionDispatcher
from json_compressor.engine import TransformEngine
from json_compressor.types import Action, ErrorType, ExecutionMode, TransformRequest, TransformResult
from json_compressor.worker import serve_request


def close_without_response(connection):
    connection.close()


def send_malformed_response(connection):
    connection.recv()
    connection.send({"unexpected": True})
    connection.close()


def send_untyped_failure(connection):
    connection.recv()
    connection.send({"success": False, "error": "boom"})
    connection.close()


def serve_slowly(connection):
    time.sleep(0.5)
    serve_request(connection)


class FailingThread:
    def __init__(self, *args, **kwargs):
        raise RuntimeError("can't start new thread")


def _worker_threads_alive():
    return [t for t in threading.enumerate() if t.name == "json-compressor-worker" and t.is_alive()]


class TestExecutionDispatcher:
    """Tests for ExecutionDispatcher class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.dispatcher = ExecutionDispatcher()
        self.engine = TransformEngine()

    def _payloads(self, sample_json_texts):
        encoded = self.engine.compress(sample_json_texts[0])
        return [
            (Action.COMPRESS, text) for text in sample_json_texts
        ] + [
            (Action.COMPRESS, "{not json"),
            (Action.COMPRESS, ""),
            (Action.DECOMPRESS, encoded),
            (Action.DECOMPRESS, "not-a-valid-encoding!!"),
            (Action.DECOMPRESS, "{\"a\": 1}"),
            (Action.DECOMPRESS, ""),
        ]

    @pytest.mark.asyncio
    async def test_inline_compress(self, scenario_json_text):
        result = await self.dispatcher.run(Action.COMPRESS, scenario_json_text, ExecutionMode.INLINE)

        assert result == TransformResult.ok(self.engine.compress(scenario_json_text))

    @pytest.mark.asyncio
    async def test_delegated_compress(self, scenario_json_text):
        result = await self.dispatcher.run(Action.COMPRESS, scenario_json_text, ExecutionMode.DELEGATED)

        assert result == TransformResult.ok(self.engine.compress(scenario_json_text))

    @pytest.mark.asyncio
    async def test_modes_are_equivalent(self, sample_json_texts):
        for action, payload in self._payloads(sample_json_texts):
            inline = await self.dispatcher.run(action, payload, ExecutionMode.INLINE)
            delegated = await self.dispatcher.run(action, payload, ExecutionMode.DELEGATED)

            assert inline == delegated, (action, payload)

    @pytest.mark.asyncio
    async def test_modes_are_equivalent_with_process_backend(self, scenario_json_text):
        dispatcher = ExecutionDispatcher(worker_backend="process", worker_join_timeout=5.0)
        encoded = self.engine.compress(scenario_json_text)

        for action, payload in [(Action.COMPRESS, scenario_json_text),
                                (Action.DECOMPRESS, encoded),
                                (Action.DECOMPRESS, "not-a-valid-encoding!!")]:
            inline = await dispatcher.run(action, payload, ExecutionMode.INLINE)
            delegated = await dispatcher.run(action, payload, ExecutionMode.DELEGATED)

            assert inline == delegated

    @pytest.mark.asyncio
    async def test_failures_keep_their_type_across_the_boundary(self):
        result = await self.dispatcher.run(Action.COMPRESS, "{oops", ExecutionMode.DELEGATED)

        assert not result.success
        assert result.result is None
        assert result.error_type == ErrorType.INVALID_STRUCTURED_INPUT
        assert not result.error.startswith("invalid_structured_input")

    @pytest.mark.asyncio
    async def test_accepts_plain_values(self, scenario_json_text):
        by_value = await self.dispatcher.run("compress", scenario_json_text, "delegated")
        by_bool = await self.dispatcher.run("compress", scenario_json_text, True)
        inline = await self.dispatcher.run("compress", scenario_json_text, False)

        assert by_value == by_bool == inline

    @pytest.mark.asyncio
    async def test_invalid_action(self):
        result = await self.dispatcher.run("explode", "{}", ExecutionMode.INLINE)

        assert result.error_type == ErrorType.INVALID_REQUEST
        assert result.error == "Invalid action provided."

    @pytest.mark.asyncio
    async def test_invalid_mode(self):
        result = await self.dispatcher.run(Action.COMPRESS, "{}", "teleport")
        assert result.error_type == ErrorType.INVALID_REQUEST

    @pytest.mark.asyncio
    async def test_non_string_payload(self):
        result = await self.dispatcher.run(Action.COMPRESS, {"a": 1}, ExecutionMode.DELEGATED)
        assert result.error_type == ErrorType.INVALID_REQUEST

    @pytest.mark.asyncio
    async def test_inline_yields_before_working(self, scenario_json_text):
        events = []

        class RecordingEngine(TransformEngine):
            def execute(self, request):
                events.append("execute")
                return super().execute(request)

        dispatcher = ExecutionDispatcher(engine=RecordingEngine())

        async def observer():
            events.append("observer")

        task = asyncio.create_task(dispatcher.run(Action.COMPRESS, scenario_json_text, ExecutionMode.INLINE))
        watcher = asyncio.create_task(observer())
        result = await task
        await watcher

        assert result.success
        assert events == ["observer", "execute"]

    @pytest.mark.asyncio
    async def test_submit_returns_future(self, scenario_json_text):
        future = self.dispatcher.submit(Action.COMPRESS, scenario_json_text, ExecutionMode.DELEGATED)

        assert isinstance(future, asyncio.Future)
        result = await future
        assert result.success

    @pytest.mark.asyncio
    async def test_unknown_backend_is_environment_unsupported(self, scenario_json_text):
        dispatcher = ExecutionDispatcher(worker_backend="quantum")
        result = await dispatcher.run(Action.COMPRESS, scenario_json_text, ExecutionMode.DELEGATED)

        assert not result.success
        assert result.error_type == ErrorType.ENVIRONMENT_UNSUPPORTED

    @pytest.mark.asyncio
    async def test_spawn_failure_is_not_downgraded_to_inline(self, monkeypatch, scenario_json_text):
        calls = []

        class RecordingEngine(TransformEngine):
            def execute(self, request):
                calls.append(request)
                return super().execute(request)

        monkeypatch.setattr(worker_module, "threading", SimpleNamespace(Thread=FailingThread, Lock=threading.Lock))
        dispatcher = ExecutionDispatcher(engine=RecordingEngine())

        result = await dispatcher.run(Action.COMPRESS, scenario_json_text, ExecutionMode.DELEGATED)

        assert result.error_type == ErrorType.ENVIRONMENT_UNSUPPORTED
        assert "can't start new thread" in result.error
        assert calls == []

    @pytest.mark.asyncio
    async def test_worker_closing_without_response(self, scenario_json_text):
        dispatcher = ExecutionDispatcher(worker_target=close_without_response)
        result = await dispatcher.run(Action.COMPRESS, scenario_json_text, ExecutionMode.DELEGATED)

        assert result == TransformResult.failure(
            ErrorType.TRANSPORT_FAILURE, ExecutionDispatcher.TRANSPORT_ERROR_MESSAGE
        )

    @pytest.mark.asyncio
    async def test_malformed_worker_response(self, scenario_json_text):
        dispatcher = ExecutionDispatcher(worker_target=send_malformed_response)
        result = await dispatcher.run(Action.COMPRESS, scenario_json_text, ExecutionMode.DELEGATED)

        assert not result.success
        assert result.error_type == ErrorType.TRANSPORT_FAILURE

    @pytest.mark.asyncio
    async def test_untyped_worker_failure(self, scenario_json_text):
        dispatcher = ExecutionDispatcher(worker_target=send_untyped_failure)
        result = await dispatcher.run(Action.COMPRESS, scenario_json_text, ExecutionMode.DELEGATED)

        assert result == TransformResult(success=False, error="boom")

    @pytest.mark.asyncio
    async def test_worker_is_torn_down_after_each_request(self, scenario_json_text):
        for _ in range(3):
            result = await self.dispatcher.run(Action.COMPRESS, scenario_json_text, ExecutionMode.DELEGATED)
            assert result.success
            assert _worker_threads_alive() == []

    @pytest.mark.asyncio
    async def test_worker_is_torn_down_after_transport_error(self, scenario_json_text):
        dispatcher = ExecutionDispatcher(worker_target=send_malformed_response)
        await dispatcher.run(Action.COMPRESS, scenario_json_text, ExecutionMode.DELEGATED)

        assert _worker_threads_alive() == []

    @pytest.mark.asyncio
    async def test_concurrent_delegated_calls(self, sample_list_json):
        payloads = [json.dumps(sample_list_json[:i + 1]) for i in range(len(sample_list_json))] * 3

        results = await asyncio.gather(*[
            self.dispatcher.run(Action.COMPRESS, payload, ExecutionMode.DELEGATED)
            for payload in payloads
        ])

        assert [r.result for r in results] == [self.engine.compress(p) for p in payloads]

    @pytest.mark.asyncio
    async def test_caller_side_timeout(self, scenario_json_text):
        dispatcher = ExecutionDispatcher(worker_target=serve_slowly, worker_join_timeout=5.0)

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(
                dispatcher.run(Action.COMPRESS, scenario_json_text, ExecutionMode.DELEGATED),
                timeout=0.05
            )

    @pytest.mark.asyncio
    async def test_caller_side_timeout_returns_without_joining_worker(self, scenario_json_text):
        dispatcher = ExecutionDispatcher(worker_target=serve_slowly, worker_join_timeout=1.0)

        started = time.perf_counter()
        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(
                dispatcher.run(Action.COMPRESS, scenario_json_text, ExecutionMode.DELEGATED),
                timeout=0.05
            )
        elapsed = time.perf_counter() - started

        assert elapsed < 0.3

        # the abandoned worker still finishes and is torn down
        for _ in range(100):
            if not _worker_threads_alive():
                break
            await asyncio.sleep(0.05)
        assert _worker_threads_alive() == []

    @pytest.mark.asyncio
    async def test_loop_keeps_running_while_worker_is_busy(self, scenario_json_text):
        dispatcher = ExecutionDispatcher(worker_target=serve_slowly)
        ticks = 0

        async def ticker():
            nonlocal ticks
            while True:
                await asyncio.sleep(0.01)
                ticks += 1

        ticking = asyncio.ensure_future(ticker())
        result = await dispatcher.run(Action.COMPRESS, scenario_json_text, ExecutionMode.DELEGATED)
        ticking.cancel()

        assert result == self.engine.execute(TransformRequest(Action.COMPRESS, scenario_json_text))
        assert ticks > 10
