from .contracts import SandboxRecordRepo
from .models import SandboxRecord
from .runtime import build_sandbox_record_repo

__all__ = [
    "SandboxRecord",
    "SandboxRecordRepo",
    "build_sandbox_record_repo",
]
