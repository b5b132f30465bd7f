"""
Unit tests for configuration and logging utilities.
"""

import json
import logging
import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from llvm_er.utils.config import RunOptions, ToolConfig, load_config, save_config
from llvm_er.utils.logging import (
    ColoredFormatter,
    StructuredFormatter,
    get_logger,
    log_with_data,
    setup_logger,
)


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers installed by setup_logger."""
    yield
    logger = logging.getLogger("llvm_er")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


class TestToolConfig:
    """Tests for ToolConfig."""

    def test_defaults(self):
        config = ToolConfig()

        assert config.exports is None
        assert config.allow_missing is False
        assert config.log_level == "WARNING"
        assert config.log_file is None
        assert config.structured_logs is False

    def test_from_dict(self):
        config = ToolConfig.from_dict({
            "exports": "/abs/exports.txt",
            "allow_missing": True,
            "log_level": "debug",
            "unknown_key": 1,
        })

        assert config.exports == "/abs/exports.txt"
        assert config.allow_missing is True
        assert config.log_level == "debug"

    @pytest.mark.parametrize("key", ["allow_missing", "structured_logs"])
    @pytest.mark.parametrize("value", ["false", "no", 0, 1, None])
    def test_non_boolean_flag_rejected(self, key, value):
        with pytest.raises(ValueError, match=f"{key} must be true or false"):
            ToolConfig.from_dict({key: value})

    def test_quoted_false_in_file_rejected(self, tmp_path):
        path = tmp_path / "llvm-er.yaml"
        path.write_text('allow_missing: "false"\n', encoding="utf-8")

        with pytest.raises(ValueError):
            load_config(str(path))

    def test_relative_paths_resolved(self, tmp_path):
        config = ToolConfig.from_dict(
            {"exports": "lists/exports.txt", "log_file": "out.log"},
            base_dir=tmp_path,
        )

        assert config.exports == str(tmp_path / "lists" / "exports.txt")
        assert config.log_file == str(tmp_path / "out.log")

    def test_load_and_save(self, tmp_path):
        path = tmp_path / "llvm-er.yaml"
        path.write_text("exports: exports.txt\nallow_missing: true\n", encoding="utf-8")

        config = load_config(str(path))
        assert config.exports == str(tmp_path / "exports.txt")
        assert config.allow_missing is True

        saved = tmp_path / "saved" / "config.yaml"
        save_config(config, str(saved))
        assert load_config(str(saved)).to_dict() == config.to_dict()

    def test_empty_file(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")

        assert load_config(str(path)).to_dict() == ToolConfig().to_dict()

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")

        with pytest.raises(ValueError):
            load_config(str(path))


class TestRunOptions:
    """Tests for RunOptions validation."""

    def test_output_file(self):
        options = RunOptions.create("in.ll", "exports.txt", output_path="out.ll")

        assert options.destination == "out.ll"
        assert not options.to_stdout
        assert not options.in_place

    def test_in_place(self):
        options = RunOptions.create("in.ll", "exports.txt", in_place=True)

        assert options.destination == "in.ll"

    def test_stdout(self):
        options = RunOptions.create("in.ll", "exports.txt", output_path="-")

        assert options.to_stdout

    def test_frozen(self):
        options = RunOptions.create("in.ll", "exports.txt", output_path="out.ll")

        with pytest.raises(AttributeError):
            options.in_place = True

    @pytest.mark.parametrize("kwargs,message", [
        (dict(input_path="in.ll", exports_path=None, output_path="o"), "--exports is required."),
        (dict(input_path=None, exports_path="e", output_path="o"), "Input file is required."),
        (dict(input_path="in.ll", exports_path="e"), "-o or --inplace is required."),
        (dict(input_path="in.ll", exports_path="e", output_path="o", in_place=True),
         "--inplace and -o cannot be used together."),
        (dict(input_path="in.ll", exports_path="e", output_path="-", in_place=True),
         "--inplace cannot be used with -o -."),
    ])
    def test_invalid_combinations(self, kwargs, message):
        with pytest.raises(ValueError) as exc_info:
            RunOptions.create(**kwargs)

        assert str(exc_info.value) == message


class TestLogging:
    """Tests for logging setup."""

    def test_setup_logger(self):
        logger = setup_logger(level="DEBUG")

        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, ColoredFormatter)
        assert get_logger() is logger

    def test_get_logger_configures_fresh_logger(self):
        logger = get_logger()

        assert logger is logging.getLogger("llvm_er")
        assert len(logger.handlers) == 1
        assert logger.level == logging.WARNING

    def test_get_logger_keeps_existing_setup(self, tmp_path):
        logger = setup_logger(level="INFO", log_file=str(tmp_path / "run.log"))

        assert get_logger() is logger
        assert len(logger.handlers) == 2
        assert logger.level == logging.INFO

    def test_setup_replaces_handlers(self):
        setup_logger()
        logger = setup_logger()

        assert len(logger.handlers) == 1

    def test_structured_console(self):
        logger = setup_logger(structured=True)

        assert isinstance(logger.handlers[0].formatter, StructuredFormatter)

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            setup_logger(level="LOUD")

    def test_file_log_is_json(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        logger = setup_logger(level="INFO", log_file=str(log_file))

        log_with_data(logger, "INFO", "Rewrote module", {"rewritten_line_count": 2})
        for handler in logger.handlers:
            handler.flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert entry["message"] == "Rewrote module"
        assert entry["level"] == "INFO"
        assert entry["data"] == {"rewritten_line_count": 2}

    def test_log_with_data_respects_level(self, tmp_path):
        log_file = tmp_path / "run.log"
        logger = setup_logger(level="WARNING", log_file=str(log_file))

        log_with_data(logger, "INFO", "hidden", {"x": 1})
        for handler in logger.handlers:
            handler.flush()

        assert log_file.read_text(encoding="utf-8") == ""

    def test_colored_formatter_leaves_record_untouched(self):
        formatter = ColoredFormatter('%(levelname)s %(message)s')
        record = logging.LogRecord("llvm_er", logging.WARNING, "", 0, "msg", (), None)

        assert "WARNING" in formatter.format(record)
        assert record.levelname == "WARNING"
