import json
import os
import re
from pathlib import Path
from typing import Any, Optional

import fsspec
import yaml
from dotenv import load_dotenv
from fsspec.implementations.local import LocalFileSystem

ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


class ConfigReader:
    """Reads source config from a file (JSON or YAML format) and returns a dict.

    File format is guessed from the extension. Supported extensions are
    (lower or upper case):

    - .json
    - .yaml, .yml

    ``${VAR_NAME}`` references are replaced with environment variables,
    optionally loaded from a ``.env`` file first. Unknown variables are kept
    as written.
    """

    def __init__(
        self,
        fs: Optional[fsspec.AbstractFileSystem] = None,
        env_file: Path | str | None = None,
    ) -> None:
        """Initializes a config reader."""
        self.fs = fs or LocalFileSystem()
        if env_file:
            load_dotenv(env_file)

    def read_json(self, file_path: str) -> Any:
        with self.fs.open(file_path, "r") as f:
            return json.loads(self._resolve_env_vars(f.read()))

    def read_yaml(self, file_path: str) -> Any:
        with self.fs.open(file_path, "r") as f:
            return yaml.safe_load(self._resolve_env_vars(f.read()))

    def _resolve_env_vars(self, content: str) -> str:
        def replace(match: re.Match) -> str:
            return os.getenv(match.group(1), match.group(0))

        return ENV_VAR_PATTERN.sub(replace, content)

    def _guess_format_and_read(self, file_path: str) -> dict[str, Any]:
        extension = Path(file_path).suffix.lower()
        if extension in [".json"]:
            return self.read_json(file_path)  # type: ignore[no-any-return]
        if extension in [".yaml", ".yml"]:
            return self.read_yaml(file_path)  # type: ignore[no-any-return]
        raise ValueError(f"Unsupported extension: {extension}")

    def read(self, file_path: str) -> dict[str, Any]:
        data = self._guess_format_and_read(file_path)
        if not isinstance(data, dict):
            raise ValueError(f"Config file {file_path} must contain a mapping")
        return data
