from enum import Enum
from datetime import datetime
from typing import Optional, List, Dict, Any


class ResultStatus(Enum):
    QUEUED = "queued"
    PROCESSING = "processing"
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"
    ERROR = "error"


class FileResult:
    """Outcome of running the fixers over a single file."""

    def __init__(self, file: str, changed: bool, error: Optional[str] = None):
        self.file = file
        self.changed = changed
        self.error = error

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> Dict[str, Any]:
        result_dict = {
            'file': self.file,
            'changed': self.changed
        }
        if self.error is not None:
            result_dict['error'] = self.error
        return result_dict


class Result:
    def __init__(
        self,
        status: ResultStatus,
        message: str,
        timestamp: Optional[str] = None,
        file_results: Optional[List[FileResult]] = None
    ):
        if not isinstance(status, ResultStatus):
            raise TypeError(f"status must be ResultStatus enum, got {type(status)}")

        self.status = status
        self.message = message
        self.timestamp = timestamp or datetime.now().isoformat()
        self.file_results = file_results

    @property
    def changed_files(self) -> List[str]:
        return [fr.file for fr in self.file_results or [] if fr.changed]

    def to_dict(self) -> Dict[str, Any]:
        result_dict = {
            'status': self.status.value,
            'message': self.message,
            'timestamp': self.timestamp
        }

        if self.file_results is not None:
            result_dict['file_results'] = [fr.to_dict() for fr in self.file_results]
            result_dict['changed_files'] = self.changed_files

        return result_dict

    def __repr__(self) -> str:
        return f"Result(status={self.status.value}, message={self.message[:50]}...)"
