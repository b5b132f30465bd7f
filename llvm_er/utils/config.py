"""
Configuration management for llvm-er.
Supports YAML configuration files; command-line flags take precedence.

Example llvm-er.yaml:

    exports: exports.txt
    allow_missing: false
    log_level: INFO
    log_file: logs/llvm-er.log
    structured_logs: false
"""

import yaml
from dataclasses import dataclass
from typing import Dict, Any, Optional
from pathlib import Path


@dataclass
class ToolConfig:
    """Settings that may be shared by every llvm-er run of a build."""

    # Export list path
    exports: Optional[str] = None

    # Report missing exports as warnings instead of failing
    allow_missing: bool = False

    # Logging
    log_level: str = "WARNING"
    log_file: Optional[str] = None
    structured_logs: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "exports": self.exports,
            "allow_missing": self.allow_missing,
            "log_level": self.log_level,
            "log_file": self.log_file,
            "structured_logs": self.structured_logs,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Optional[Path] = None) -> "ToolConfig":
        """
        Create config from dictionary.

        Relative `exports` and `log_file` paths are resolved against
        `base_dir` when it is given.
        """
        config = cls()

        config.exports = _resolve(data.get("exports", config.exports), base_dir)
        config.allow_missing = _flag(data, "allow_missing", config.allow_missing)
        config.log_level = str(data.get("log_level", config.log_level))
        config.log_file = _resolve(data.get("log_file", config.log_file), base_dir)
        config.structured_logs = _flag(data, "structured_logs", config.structured_logs)

        return config


def _flag(data: Dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ValueError(f"{key} must be true or false, got {value!r}")
    return value


def _resolve(value: Optional[str], base_dir: Optional[Path]) -> Optional[str]:
    if value is None:
        return None
    path = Path(str(value))
    if base_dir is not None and not path.is_absolute():
        path = base_dir / path
    return str(path)


@dataclass(frozen=True)
class RunOptions:
    """Validated options of a single llvm-er invocation."""
    input_path: str
    exports_path: str
    output_path: Optional[str] = None
    in_place: bool = False
    allow_missing: bool = False

    @property
    def to_stdout(self) -> bool:
        return self.output_path == "-"

    @property
    def destination(self) -> str:
        """Path the rewritten IR is written to ("-" for stdout)."""
        if self.in_place:
            return self.input_path
        return self.output_path

    @classmethod
    def create(
        cls,
        input_path: Optional[str],
        exports_path: Optional[str],
        output_path: Optional[str] = None,
        in_place: bool = False,
        allow_missing: bool = False,
    ) -> "RunOptions":
        """
        Validate an option combination.

        Raises:
            ValueError: With a user-facing message if the combination is invalid
        """
        if not exports_path or not str(exports_path).strip():
            raise ValueError("--exports is required.")

        if not input_path or not str(input_path).strip():
            raise ValueError("Input file is required.")

        if in_place and output_path == "-":
            raise ValueError("--inplace cannot be used with -o -.")

        if in_place and output_path:
            raise ValueError("--inplace and -o cannot be used together.")

        if not in_place and not output_path:
            raise ValueError("-o or --inplace is required.")

        return cls(
            input_path=str(input_path),
            exports_path=str(exports_path),
            output_path=output_path,
            in_place=in_place,
            allow_missing=allow_missing,
        )


def load_config(config_path: str) -> ToolConfig:
    """Load configuration from YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {config_path}")

    return ToolConfig.from_dict(data, base_dir=path.parent)


def save_config(config: ToolConfig, config_path: str) -> None:
    """Save configuration to YAML file."""
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, 'w', encoding='utf-8') as f:
        yaml.dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)
