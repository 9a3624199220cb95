"""
Data models for upload module.

Uses dataclasses for immutable, type-safe data structures.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Any, Optional, Tuple, Union
from pathlib import Path

from ...exceptions import ValidationError


class WriteMode(str, Enum):
    """
    How an upload interacts with an existing object at the same path.

    - ADD: never overwrite; Dropbox reports a conflict instead
    - OVERWRITE: always replace
    - UPDATE: replace only if the remote revision matches `update_rev`
    """
    ADD = 'add'
    OVERWRITE = 'overwrite'
    UPDATE = 'update'

    @classmethod
    def parse(cls, value: Union[str, 'WriteMode', None]) -> 'WriteMode':
        """
        Parse a write mode from user input.

        Accepts enum members, values or names in any case.
        None and empty strings default to ADD.
        """
        if isinstance(value, cls):
            return value
        if not value:
            return cls.ADD
        normalized = str(value).strip().lower()
        for mode in cls:
            if mode.value == normalized:
                return mode
        raise ValueError(
            f"Unknown write mode '{value}' (expected one of: "
            f"{', '.join(m.value for m in cls)})"
        )


class UploadStrategy(Enum):
    """Upload path chosen by the planner."""
    SINGLE_SHOT = 'single_shot'
    CHUNKED = 'chunked'


class SessionState(Enum):
    """States of one upload execution."""
    NOT_STARTED = 'not_started'
    SESSION_STARTED = 'session_started'
    APPENDING = 'appending'
    FINISHING = 'finishing'
    DONE = 'done'
    FAILED = 'failed'


@dataclass(frozen=True)
class CommitInfo:
    """
    Commit metadata sent with the final upload call.

    Attributes:
        path: Full destination path in Dropbox
        mode: Write mode
        rev: Revision to update (UPDATE mode only)
        autorename: Let Dropbox rename on conflict
        mute: Suppress user notifications

    Example:
        >>> CommitInfo('/Reports/a.txt', WriteMode.UPDATE, rev='abc').to_dict()
        {'path': '/Reports/a.txt', 'mode': {'.tag': 'update', 'update': 'abc'}, 'autorename': False, 'mute': False}
    """
    path: str
    mode: WriteMode = WriteMode.ADD
    rev: Optional[str] = None
    autorename: bool = False
    mute: bool = False

    def mode_to_dict(self) -> Union[str, Dict[str, str]]:
        """Render the write mode in Dropbox's tagged-union format."""
        if self.mode is WriteMode.UPDATE:
            return {'.tag': 'update', 'update': self.rev}
        return self.mode.value

    def to_dict(self) -> Dict[str, Any]:
        """Convert to Dropbox commit argument."""
        return {
            'path': self.path,
            'mode': self.mode_to_dict(),
            'autorename': self.autorename,
            'mute': self.mute,
        }


@dataclass(frozen=True)
class UploadSessionCursor:
    """
    Position inside an open upload session.

    Attributes:
        session_id: Session identifier returned by upload_session/start
        offset: Number of bytes the server has received so far
    """
    session_id: str
    offset: int

    def advance(self, num_bytes: int) -> 'UploadSessionCursor':
        """Return the cursor positioned after `num_bytes` more bytes."""
        return UploadSessionCursor(self.session_id, self.offset + num_bytes)

    def to_dict(self) -> Dict[str, Any]:
        return {'session_id': self.session_id, 'offset': self.offset}


@dataclass(frozen=True)
class ChunkInfo:
    """
    Information about a file chunk.

    Attributes:
        index: Chunk index (0-based, used for part file names)
        start: Start position in bytes
        end: End position in bytes
        size: Chunk size in bytes
    """
    index: int
    start: int
    end: int

    @property
    def size(self) -> int:
        """Returns chunk size."""
        return self.end - self.start


@dataclass(frozen=True)
class UploadRequest:
    """
    Validated input to one upload operation.

    Attributes:
        file_path: Path to the local file
        destination_folder: Dropbox folder ('' means the root)
        write_mode: Write mode
        update_rev: Revision to update, required for UPDATE
    """
    file_path: Path
    destination_folder: str = ''
    write_mode: WriteMode = WriteMode.ADD
    update_rev: Optional[str] = None

    def __post_init__(self):
        """Normalize path and mode."""
        if isinstance(self.file_path, str):
            object.__setattr__(self, 'file_path', Path(self.file_path))
        try:
            object.__setattr__(self, 'write_mode', WriteMode.parse(self.write_mode))
        except ValueError as e:
            raise ValidationError(str(e)) from e
        if self.destination_folder is None:
            object.__setattr__(self, 'destination_folder', '')

    @property
    def file_name(self) -> str:
        """Local base name, which must also be the remote name."""
        return self.file_path.name


@dataclass(frozen=True)
class UploadPlan:
    """
    Output of the planner.

    Attributes:
        strategy: SINGLE_SHOT or CHUNKED
        commit: Commit metadata shared by both strategies
        file_size: Size of the file in bytes
        chunk_size: Chunk threshold / window size in bytes
        chunks: Chunk windows (empty for SINGLE_SHOT)
    """
    strategy: UploadStrategy
    commit: CommitInfo
    file_size: int
    chunk_size: int
    chunks: Tuple[ChunkInfo, ...] = ()

    @property
    def is_chunked(self) -> bool:
        return self.strategy is UploadStrategy.CHUNKED


@dataclass(frozen=True)
class UploadResult:
    """
    Result of a successful upload.

    Attributes:
        name: Remote object name
        rev: Remote revision identifier
        path: Remote display path
        size: Size reported by Dropbox
        strategy: Strategy that was used
        chunk_count: Number of chunks sent (1 for single shot)
        response: Raw file metadata
    """
    name: str
    rev: str
    path: str
    size: int
    strategy: UploadStrategy
    chunk_count: int = 1
    response: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_metadata(
        cls,
        metadata: Dict[str, Any],
        strategy: UploadStrategy,
        chunk_count: int = 1
    ) -> 'UploadResult':
        """Build from Dropbox FileMetadata JSON."""
        return cls(
            name=metadata.get('name', ''),
            rev=metadata.get('rev', ''),
            path=metadata.get('path_display', metadata.get('path_lower', '')),
            size=metadata.get('size', 0),
            strategy=strategy,
            chunk_count=chunk_count,
            response=metadata
        )


@dataclass
class UploadProgress:
    """
    Upload progress information.

    Attributes:
        total_chunks: Total number of chunks
        uploaded_chunks: Number of uploaded chunks
        total_bytes: Total file size
        uploaded_bytes: Bytes uploaded so far
        state: Current state of the upload
    """
    total_chunks: int
    uploaded_chunks: int = 0
    total_bytes: int = 0
    uploaded_bytes: int = 0
    state: SessionState = SessionState.NOT_STARTED

    @property
    def percentage(self) -> float:
        """Returns upload progress as percentage."""
        if self.total_chunks == 0:
            return 0.0
        return (self.uploaded_chunks / self.total_chunks) * 100

    @property
    def is_complete(self) -> bool:
        """Returns True if upload is complete."""
        return self.state is SessionState.DONE
