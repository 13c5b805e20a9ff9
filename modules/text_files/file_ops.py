"""
Text file operations module for Arquivo.

Provides one-shot read, append, write and create operations on plain text
files. Each call opens, uses and releases its own file handle, returns an
OperationResult and records one audit entry.
"""

import os
from pathlib import Path
from typing import Optional, Sequence, Union

from core.config import ArquivoConfig
from core.logger import AuditLogger, ActionType, ActionStatus
from core.results import ErrorPolicy, OperationResult


PathLike = Union[str, Path]


class TextFileOperator:
    """Stateless text file operations with configurable error policies."""

    def __init__(self, config: Optional[ArquivoConfig] = None, logger: Optional[AuditLogger] = None):
        """
        Initialize TextFileOperator.

        Args:
            config: Paths, default content and policies (defaults if omitted)
            logger: Audit logger instance (uses config.audit_log if omitted)
        """
        self.config = config or ArquivoConfig()
        self.logger = logger or AuditLogger(log_path=self.config.audit_log)

    def _local_path(self, path: Optional[PathLike]) -> Path:
        return Path(path) if path is not None else Path(self.config.local_file)

    def _finish(
        self,
        result: OperationResult,
        action_type: ActionType,
        policy: ErrorPolicy,
        exc: Optional[BaseException] = None
    ) -> OperationResult:
        """
        Audit the result, then raise it if the policy is fatal.

        An audit write failure never changes the outcome: it is recorded in
        result.metadata["audit_error"] and the policy applies to the file
        error only.
        """
        metadata = dict(result.metadata)
        if result.error is not None:
            metadata["error_kind"] = result.error.error_kind

        try:
            self.logger.log_action(
                action_type=action_type,
                operation=result.operation,
                target=result.path,
                status=ActionStatus(result.status),
                policy=policy.value,
                result=result.message,
                metadata=metadata
            )
        except OSError as e:
            result.metadata["audit_error"] = f"Audit log not written ({self.logger.log_path}): {e}"

        if result.error is not None and policy is ErrorPolicy.FATAL:
            raise result.error from exc
        return result

    def _write(self, path: Path, text: str, mode: str) -> None:
        # newline="" so os.linesep reaches the file untranslated
        with open(path, mode, encoding=self.config.encoding, newline="") as f:
            f.write(text)

    def read_lines(self, path: Optional[PathLike] = None, policy: Optional[ErrorPolicy] = None) -> OperationResult:
        """
        Read a whole text file as a list of lines in file order.

        Line separators are stripped. A trailing separator does not add an
        empty last line, so an empty file reads as [].

        Args:
            path: File to read (default: config.local_file)
            policy: Error policy (default: config.read_policy)

        Returns:
            OperationResult with the lines in `data`

        Raises:
            FileOperationError: If reading fails under the fatal policy
        """
        target = self._local_path(path)
        policy = ErrorPolicy.from_value(policy or self.config.read_policy)

        try:
            with open(target, "r", encoding=self.config.encoding) as f:
                text = f.read()
        except (OSError, UnicodeDecodeError) as e:
            result = OperationResult.failed("read_lines", str(target), e, data=[])
            return self._finish(result, ActionType.READ, policy, e)

        lines = text.split("\n")
        if lines[-1] == "":
            lines.pop()

        result = OperationResult.ok(
            "read_lines",
            str(target),
            f"Read {len(lines)} lines from {target}",
            data=lines,
            metadata={"line_count": len(lines)}
        )
        return self._finish(result, ActionType.READ, policy)

    def append_lines(
        self,
        lines: Optional[Sequence[str]] = None,
        path: Optional[PathLike] = None,
        policy: Optional[ErrorPolicy] = None
    ) -> OperationResult:
        """
        Append lines to the end of a file, creating it if absent.

        Each line is terminated by os.linesep.

        Args:
            lines: Lines to append (default: config.append_lines)
            path: Target file (default: config.local_file)
            policy: Error policy (default: config.write_policy)
        """
        target = self._local_path(path)
        policy = ErrorPolicy.from_value(policy or self.config.write_policy)
        lines = list(self.config.append_lines if lines is None else lines)

        try:
            self._write(target, "".join(line + os.linesep for line in lines), "a")
        except OSError as e:
            result = OperationResult.failed("append_lines", str(target), e, data=0)
            return self._finish(result, ActionType.WRITE, policy, e)

        result = OperationResult.ok(
            "append_lines",
            str(target),
            f"Appended {len(lines)} lines to {target}",
            data=len(lines),
            metadata={"line_count": len(lines)}
        )
        return self._finish(result, ActionType.WRITE, policy)

    def write_sequential(
        self,
        lines: Optional[Sequence[str]] = None,
        path: Optional[PathLike] = None,
        policy: Optional[ErrorPolicy] = None
    ) -> OperationResult:
        """
        Write lines one call at a time: truncate with the first, append the rest.

        A failure stops the sequence. Lines already written stay in the file
        and their count is reported in metadata["lines_written"].

        Args:
            lines: Lines to write (default: config.sequential_lines)
            path: Target file (default: config.local_file)
            policy: Error policy (default: config.write_policy)
        """
        target = self._local_path(path)
        policy = ErrorPolicy.from_value(policy or self.config.write_policy)
        lines = list(self.config.sequential_lines if lines is None else lines)

        written = 0
        try:
            for index, line in enumerate(lines):
                self._write(target, line + os.linesep, "w" if index == 0 else "a")
                written += 1
        except OSError as e:
            result = OperationResult.failed(
                "write_sequential",
                str(target),
                e,
                data=written,
                metadata={"lines_written": written, "line_count": len(lines)}
            )
            return self._finish(result, ActionType.WRITE, policy, e)

        result = OperationResult.ok(
            "write_sequential",
            str(target),
            f"Wrote {written} lines to {target}",
            data=written,
            metadata={"lines_written": written, "line_count": len(lines)}
        )
        return self._finish(result, ActionType.WRITE, policy)

    def create_in_home(
        self,
        name: Optional[str] = None,
        home: Optional[PathLike] = None,
        policy: Optional[ErrorPolicy] = None
    ) -> OperationResult:
        """
        Create an empty file under the user's home directory.

        The file is created exclusively: an existing file is a failure, as is
        a missing or unwritable home directory.

        Args:
            name: File name relative to home (default: config.home_file)
            home: Home directory (default: Path.home())
            policy: Error policy (default: config.write_policy)
        """
        policy = ErrorPolicy.from_value(policy or self.config.write_policy)
        base = Path(home) if home is not None else Path.home()
        target = base / (name or self.config.home_file)

        try:
            with open(target, "x", encoding=self.config.encoding):
                pass
        except OSError as e:
            result = OperationResult.failed("create_in_home", str(target), e, data=False)
            return self._finish(result, ActionType.CREATE, policy, e)

        result = OperationResult.ok("create_in_home", str(target), f"Created {target}", data=True)
        return self._finish(result, ActionType.CREATE, policy)

    def create_if_absent(self, path: Optional[PathLike] = None, policy: Optional[ErrorPolicy] = None) -> OperationResult:
        """
        Create an empty file unless one already exists.

        Returns:
            OperationResult whose `data` is True if the file was created and
            False if it already existed (status "skipped")
        """
        target = self._local_path(path).absolute()
        policy = ErrorPolicy.from_value(policy or self.config.write_policy)

        try:
            with open(target, "x", encoding=self.config.encoding):
                pass
        except FileExistsError:
            result = OperationResult.ok(
                "create_if_absent",
                str(target),
                f"File already exists: {target}",
                data=False,
                status=ActionStatus.SKIPPED
            )
            return self._finish(result, ActionType.CREATE, policy)
        except OSError as e:
            result = OperationResult.failed("create_if_absent", str(target), e, data=False)
            return self._finish(result, ActionType.CREATE, policy, e)

        result = OperationResult.ok("create_if_absent", str(target), f"Created {target}", data=True)
        return self._finish(result, ActionType.CREATE, policy)

