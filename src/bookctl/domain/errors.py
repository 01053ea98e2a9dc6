"""Fatal build errors.

Every exception here aborts the whole build. Services translate them into a
failed :class:`~bookctl.services.result.ServiceResult` at the boundary.
Missing snippets are deliberately absent: they degrade to a placeholder line.
"""

from __future__ import annotations

from typing import Any


class BookBuildError(Exception):
    """Base class for errors that abort a build run."""

    code = "BUILD_FAILED"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.message = message
        self.detail = detail


class InvalidLocationError(BookBuildError):
    """A directive payload is not of the form ``branch:path``."""

    code = "INVALID_LOCATION"

    def __init__(self, location: str) -> None:
        super().__init__(
            f"Invalid source location {location!r}; expected 'branch:path'",
            location=location,
        )
        self.location = location


class SectionNotFoundError(BookBuildError):
    """A named section produced no lines in the given file.

    An empty section and a missing one are reported the same way.
    """

    code = "SECTION_NOT_FOUND"

    def __init__(self, file_id: str, section: str) -> None:
        super().__init__(f"Section {section} not found in {file_id}", file=file_id, section=section)
        self.file_id = file_id
        self.section = section


class ToolInvocationError(BookBuildError):
    """An external renderer or typesetter exited non-zero."""

    code = "TOOL_FAILED"

    def __init__(
        self,
        message: str,
        *,
        source: str,
        command: list[str],
        returncode: int,
        output: str = "",
    ) -> None:
        super().__init__(
            message,
            source=source,
            command=command,
            returncode=returncode,
            output=output,
        )
        self.source = source
        self.returncode = returncode
