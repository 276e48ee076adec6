"""
Tests du journal d'execution.
"""

from concurrent.futures import ThreadPoolExecutor

from loguru import logger

from jellyclean.core.entities import LogEvent, LogLevel, OutcomeStatus
from jellyclean.services.run_log import RunLog, level_for


class TestRunLog:
    def test_sequence_strictly_increasing(self) -> None:
        log = RunLog()
        log.info(LogEvent.SCAN_STARTED, "a")
        log.success(LogEvent.ITEM_OUTCOME, "b", item_id="x")
        log.error(LogEvent.RUN_FAILED, "c")
        assert [e.seq for e in log.entries] == [1, 2, 3]
        assert log.entries[1].item_id == "x"
        assert log.entries[1].level is LogLevel.SUCCESS

    def test_since(self) -> None:
        log = RunLog()
        log.info(LogEvent.SCAN_STARTED, "a")
        mark = len(log)
        log.warning(LogEvent.RUN_CANCELLED, "b")
        assert [e.message for e in log.since(mark)] == ["b"]

    def test_concurrent_appends_keep_unique_sequence(self) -> None:
        log = RunLog()
        with ThreadPoolExecutor(max_workers=4) as pool:
            list(pool.map(lambda i: log.info(LogEvent.ITEM_OUTCOME, str(i)), range(100)))
        seqs = [e.seq for e in log.entries]
        assert seqs == list(range(1, 101))

    def test_entries_mirrored_to_loguru(self) -> None:
        messages = []
        handler_id = logger.add(messages.append, level="INFO", format="{level}|{message}")
        try:
            RunLog().warning(LogEvent.ITEM_OUTCOME, "ignore")
        finally:
            logger.remove(handler_id)
        assert messages and messages[0].startswith("WARNING|ignore")


class TestLevelFor:
    def test_levels(self) -> None:
        assert level_for(OutcomeStatus.SUCCEEDED) is LogLevel.SUCCESS
        assert level_for(OutcomeStatus.SKIPPED_NO_MATCH) is LogLevel.INFO
        assert level_for(OutcomeStatus.SKIPPED_NO_EXTERNAL_ID) is LogLevel.WARNING
        assert level_for(OutcomeStatus.FAILED) is LogLevel.ERROR
