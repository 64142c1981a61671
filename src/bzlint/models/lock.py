"""Lock record model for the single-instance run guard.

The record names the process currently linting, so that a newer run can
cancel it.
"""

from datetime import datetime

from pydantic import BaseModel, Field

# Largest value a pid_t can hold
MAX_PID = 2**31 - 1


class LockRecord(BaseModel):
    """Active lint run written to the lock file.

    Attributes:
        pid: Process ID of the running lint.
        file: Source file being linted, if known.
        started_at: When the run took over the lock.
    """

    pid: int = Field(gt=0, le=MAX_PID, description="Process ID holding the lock")
    file: str | None = Field(default=None, description="File being linted")
    started_at: datetime = Field(default_factory=datetime.now)
