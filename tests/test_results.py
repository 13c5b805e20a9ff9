"""
Tests for operation results and error policies.
"""

import pytest
from pathlib import Path

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.results import ErrorPolicy, FileOperationError, OperationResult


class TestErrorPolicy:
    """Test ErrorPolicy parsing."""

    def test_from_value(self):
        assert ErrorPolicy.from_value("fatal") is ErrorPolicy.FATAL
        assert ErrorPolicy.from_value(" LOG ") is ErrorPolicy.LOG
        assert ErrorPolicy.from_value(ErrorPolicy.LOG) is ErrorPolicy.LOG

    def test_unknown_value(self):
        with pytest.raises(ValueError, match="retry"):
            ErrorPolicy.from_value("retry")


class TestOperationResult:
    """Test OperationResult."""

    def test_ok(self):
        result = OperationResult.ok("read_lines", "a.txt", "Read 1 lines", data=["x"])

        assert result.success
        assert result.status == "executed"
        assert result.error is None
        assert result.raise_for_error() is result

    def test_failed_wraps_exception(self):
        cause = FileNotFoundError(2, "No such file or directory")
        result = OperationResult.failed("append_lines", "missing/a.txt", cause)

        assert not result.success
        assert result.status == "failed"
        assert result.error.reason == "No such file or directory"
        assert result.error.error_kind == "FileNotFoundError"
        assert "append_lines failed for missing/a.txt" in result.message

    def test_raise_for_error(self):
        cause = PermissionError(13, "Permission denied")
        result = OperationResult.failed("create_in_home", "/root/arquivo.txt", cause)

        with pytest.raises(FileOperationError) as exc_info:
            result.raise_for_error()

        assert exc_info.value.__cause__ is cause

    def test_to_dict(self):
        cause = FileExistsError(17, "File exists")
        data = OperationResult.failed("create_in_home", "h/arquivo.txt", cause, data=False).to_dict()

        assert data["success"] is False
        assert data["error_kind"] == "FileExistsError"
        assert data["data"] is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
