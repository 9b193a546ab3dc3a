import logging

import pytest

from maze_lib.log_utils import PROJECT_TOPICS, RichLogFormatter, resolve_topics, setup_logging


@pytest.fixture(autouse=True)
def restore_loggers():
    yield
    root = logging.getLogger("maze")
    for h in root.handlers[:]:
        root.removeHandler(h)
        h.close()
    root.setLevel(logging.NOTSET)
    for topic in PROJECT_TOPICS["maze"]:
        logging.getLogger(f"maze.{topic}").setLevel(logging.NOTSET)


def test_resolve_topics_expands_prefixes_and_all():
    assert resolve_topics("sol, gen") == {"solve", "generate"}
    assert resolve_topics("all") == PROJECT_TOPICS["maze"]
    assert resolve_topics("nothing") == set()


def test_selected_topics_only_enable_their_own_debug():
    setup_logging(logging.DEBUG, debug_topics="solve")
    assert logging.getLogger("maze.solve").isEnabledFor(logging.DEBUG)
    assert not logging.getLogger("maze.grid").isEnabledFor(logging.DEBUG)
    assert logging.getLogger("maze.grid").isEnabledFor(logging.INFO)


def test_all_topics_enable_debug_everywhere():
    setup_logging(logging.DEBUG, debug_topics="all")
    assert logging.getLogger("maze").isEnabledFor(logging.DEBUG)
    assert logging.getLogger("maze.grid").isEnabledFor(logging.DEBUG)


def test_reconfiguring_drops_previous_topics():
    setup_logging(logging.DEBUG, debug_topics="grid")
    setup_logging(logging.WARNING)
    assert not logging.getLogger("maze.grid").isEnabledFor(logging.INFO)
    assert len(logging.getLogger("maze").handlers) == 1


def test_cli_debug_topic_keeps_other_topics_quiet(tmp_path, mocker):
    import maze_maker

    spy = mocker.spy(maze_maker, "setup_logging")
    assert maze_maker.main(
        ["-m", "prim", "--width", "3", "--height", "3", "-d", "solve", str(tmp_path / "m.svg")]
    ) == 0
    spy.assert_called_once()
    assert logging.getLogger("maze.solve").isEnabledFor(logging.DEBUG)
    assert not logging.getLogger("maze.render").isEnabledFor(logging.DEBUG)


def test_formatter_prefixes_level_and_topic():
    record = logging.LogRecord("maze.solve", logging.INFO, __file__, 1, "a\nb", None, None)
    lines = RichLogFormatter().format(record).split("\n")
    assert lines == ["INFO :solve   : a", "INFO :solve   : b"]


def test_formatter_leaves_raw_records_alone():
    record = logging.LogRecord("maze.main", logging.INFO, __file__, 1, "│ . │", None, None)
    record.raw = True
    assert RichLogFormatter().format(record) == "│ . │"
