"""
Configuration for Arquivo.

Paths, fixed line content and default error policies are read from a YAML
file so every operation can be pointed at other locations (and tested
against temporary ones).
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .results import ErrorPolicy


DEFAULT_CONFIG_PATH = "arquivo.yaml"

DEFAULT_APPEND_LINES = [
    "escrevendo de novooooooo",
    "hehehehehe",
    "hahahahaha",
    "deu certo",
]

DEFAULT_SEQUENTIAL_LINES = [
    "aprendiiiiiii",
    "estou criando",
    "estou escrevendo",
    "estou lendo arquivos",
]


@dataclass
class ArquivoConfig:
    """Settings shared by all file operations."""
    local_file: str = "arquivo2.txt"
    home_file: str = "arquivo.txt"
    append_lines: List[str] = field(default_factory=lambda: list(DEFAULT_APPEND_LINES))
    sequential_lines: List[str] = field(default_factory=lambda: list(DEFAULT_SEQUENTIAL_LINES))
    read_policy: ErrorPolicy = ErrorPolicy.FATAL
    write_policy: ErrorPolicy = ErrorPolicy.LOG
    audit_log: str = "data/audit_log.jsonl"
    encoding: str = "utf-8"
    config_path: Optional[Path] = None

    @classmethod
    def load(cls, config_path: str = DEFAULT_CONFIG_PATH) -> "ArquivoConfig":
        """
        Load configuration from a YAML file.

        A missing or unreadable file gives the defaults. Keys absent from
        the file keep their default values.

        Raises:
            ValueError: If the file names an unknown error policy
        """
        path = Path(config_path)
        raw = cls._read_yaml(path)
        config = cls.from_dict(raw)
        config.config_path = path
        return config

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError):
            return {}

        if not isinstance(data, dict):
            return {}
        return data.get("arquivo", data) or {}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ArquivoConfig":
        """Build a config from the mapping found under the `arquivo` key."""
        defaults = cls()
        paths = data.get("paths", {}) or {}
        content = data.get("content", {}) or {}
        errors = data.get("errors", {}) or {}

        return cls(
            local_file=str(paths.get("local_file", defaults.local_file)),
            home_file=str(paths.get("home_file", defaults.home_file)),
            append_lines=[str(line) for line in content.get("append_lines", defaults.append_lines)],
            sequential_lines=[str(line) for line in content.get("sequential_lines", defaults.sequential_lines)],
            read_policy=ErrorPolicy.from_value(errors.get("read", defaults.read_policy)),
            write_policy=ErrorPolicy.from_value(errors.get("write", defaults.write_policy)),
            audit_log=str(data.get("audit_log", defaults.audit_log)),
            encoding=str(data.get("encoding", defaults.encoding)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "paths": {
                "local_file": self.local_file,
                "home_file": self.home_file,
            },
            "content": {
                "append_lines": list(self.append_lines),
                "sequential_lines": list(self.sequential_lines),
            },
            "errors": {
                "read": self.read_policy.value,
                "write": self.write_policy.value,
            },
            "audit_log": self.audit_log,
            "encoding": self.encoding,
        }

    def save_config(self, config_path: Optional[str] = None) -> Path:
        """
        Save the current settings to a YAML file.

        Other top-level keys of an existing file are kept.

        Returns:
            The path written to
        """
        path = Path(config_path) if config_path else (self.config_path or Path(DEFAULT_CONFIG_PATH))
        config: Dict[str, Any] = {"arquivo": self.to_dict()}

        if path.exists():
            try:
                with open(path, "r", encoding="utf-8") as f:
                    existing = yaml.safe_load(f) or {}
            except (OSError, yaml.YAMLError):
                existing = {}
            if isinstance(existing, dict):
                existing["arquivo"] = config["arquivo"]
                config = existing

        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(config, f, default_flow_style=False, allow_unicode=True, sort_keys=False)

        self.config_path = path
        return path
